"""
Protocol definitions

splpv1.py holds the SPLPv1 wire literals and its declarative state model.
"""
