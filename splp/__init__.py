"""
SPLPv1 session validator
"""
