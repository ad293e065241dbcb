"""Validation engine: grammar scanners, state machine, sessions"""
