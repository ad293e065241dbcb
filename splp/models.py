"""
Core data models
"""
from enum import Enum

from pydantic import BaseModel, field_validator

from splp.config import Settings


class Direction(str, Enum):
    """Which endpoint sent a message"""

    A_TO_B = "A->B"
    B_TO_A = "B->A"


class Phase(str, Enum):
    """Session position in the SPLPv1 state machine"""

    INIT = "INIT"
    CONNECTING = "CONNECTING"
    CONNECTED = "CONNECTED"
    WAITING_VERSION = "WAITING_VER"
    WAITING_DATA = "WAITING_DATA"
    WAITING_BASE64 = "WAITING_B64_DATA"
    DISCONNECTING = "DISCONNECTING"


class Verdict(str, Enum):
    """Result of validating one message"""

    VALID = "valid"
    INVALID = "invalid"


class PendingCommand(str, Enum):
    """Request that must be echoed around the reply token in WAITING_DATA"""

    GET_DATA = "GET_DATA"
    GET_FILE = "GET_FILE"
    GET_COMMAND = "GET_COMMAND"


class Message(BaseModel):
    """One SPLPv1 message as handed over by the transport"""

    model_config = {"frozen": True}

    direction: Direction
    text: str

    @field_validator("text")
    @classmethod
    def _reject_nul(cls, value: str) -> str:
        if "\x00" in value:
            raise ValueError("message text must not contain NUL characters")
        return value


class GrammarOptions(BaseModel):
    """Compatibility switches for the reply grammars"""

    model_config = {"frozen": True}

    allow_empty_version: bool = False
    legacy_data_alphabet: bool = False
    lenient_version_direction: bool = False

    @classmethod
    def from_settings(cls, source: Settings) -> "GrammarOptions":
        return cls(
            allow_empty_version=source.allow_empty_version,
            legacy_data_alphabet=source.legacy_data_alphabet,
            lenient_version_direction=source.lenient_version_direction,
        )
