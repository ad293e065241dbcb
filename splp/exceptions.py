"""
Exception hierarchy for the SPLPv1 validator.

Only one error kind reaches the protocol layer: ProtocolViolation. It is
raised by the grammar scanners and caught by the state machine, which
turns it into an INVALID verdict and a reset to INIT.
"""
from typing import Optional


class SPLPError(Exception):
    """
    Base exception for all validator errors.

    Carries a human readable message plus a details dict for structured
    logging.
    """
    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ProtocolViolation(SPLPError):
    """Message direction or text does not satisfy the current phase."""
    def __init__(self, reason: str, phase: Optional[str] = None):
        super().__init__(reason, {"phase": phase})
        self.reason = reason
        self.phase = phase
