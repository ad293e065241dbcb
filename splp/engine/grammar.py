"""
Reply grammars for SPLPv1.

Each scanner takes the full message text and either returns None or
raises ProtocolViolation naming the first rule that failed. Character
classes are ASCII-only; str.isdigit() and friends accept Unicode digits
and letters, so they are not used here.

Grammars:
- version: "VERSION" SP 1*DIGIT
- data:    CMD SP 1*(lowercase / DIGIT / ".") SP CMD
- base64:  "B64:" SP token, len(token) % 4 == 0, "=" only in the last two
           positions, and "=" in the second-to-last forces "=" in the last
"""
import string

from splp.exceptions import ProtocolViolation
from splp.plugins.splpv1 import B64, SEPARATOR, VERSION

_DIGITS = frozenset(string.digits)
_LOWERCASE = frozenset(string.ascii_lowercase)
_BASE64_ALPHABET = frozenset(string.ascii_letters + string.digits + "+/")
_DATA_ALPHABET = _LOWERCASE | _DIGITS | {"."}
# The original server accepted the range '0'..';', which lets ':' and ';' through
_LEGACY_DATA_ALPHABET = _DATA_ALPHABET | {":", ";"}

PAD = "="
BASE64_QUANTUM = 4


def is_digit(ch: str) -> bool:
    return ch in _DIGITS


def is_lowercase_ascii(ch: str) -> bool:
    return ch in _LOWERCASE


def is_base64_char(ch: str) -> bool:
    """True for the base64 alphabet proper; padding is handled separately."""
    return ch in _BASE64_ALPHABET


def is_data_char(ch: str, legacy: bool = False) -> bool:
    if legacy:
        return ch in _LEGACY_DATA_ALPHABET
    return is_lowercase_ascii(ch) or is_digit(ch) or ch == "."


def _expect_prefix(text: str, literal: str) -> str:
    """Strip `literal` plus one separator from the front of text, return the rest."""
    if not text.startswith(literal):
        raise ProtocolViolation(f"expected {literal!r} prefix")
    rest = text[len(literal):]
    if not rest.startswith(SEPARATOR):
        raise ProtocolViolation(f"expected a single space after {literal!r}")
    return rest[len(SEPARATOR):]


def check_version_reply(text: str, allow_empty: bool = False) -> None:
    """
    Validate a "VERSION <digits>" reply.

    Args:
        text: Full message text
        allow_empty: Accept "VERSION " with no digits after the space

    Raises:
        ProtocolViolation: If the text does not match the version grammar
    """
    digits = _expect_prefix(text, VERSION)

    if not digits and not allow_empty:
        raise ProtocolViolation("version number is empty")

    for position, ch in enumerate(digits):
        if not is_digit(ch):
            raise ProtocolViolation(
                f"non-digit {ch!r} in version number at offset {position}"
            )


def check_data_reply(text: str, command: str, legacy_alphabet: bool = False) -> None:
    """
    Validate a "<CMD> <token> <CMD>" reply to GET_DATA, GET_FILE or GET_COMMAND.

    Args:
        text: Full message text
        command: The request literal that must open and close the reply
        legacy_alphabet: Also accept ':' and ';' inside the token

    Raises:
        ProtocolViolation: If the text does not match the data grammar
    """
    body = _expect_prefix(text, command)

    token, separator, trailer = body.partition(SEPARATOR)

    for position, ch in enumerate(token):
        if not is_data_char(ch, legacy=legacy_alphabet):
            raise ProtocolViolation(
                f"character {ch!r} not allowed in data token at offset {position}"
            )
    if not token:
        raise ProtocolViolation("data token is empty")
    if not separator:
        raise ProtocolViolation(f"missing closing {command!r}")
    if trailer != command:
        raise ProtocolViolation(
            f"reply must close with {command!r}, got {trailer!r}"
        )


def check_b64_reply(text: str) -> None:
    """
    Validate a "B64: <token>" reply.

    The token is only checked for shape; it is never decoded.

    Raises:
        ProtocolViolation: If the text does not match the base64 grammar
    """
    token = _expect_prefix(text, B64)

    if len(token) < BASE64_QUANTUM or len(token) % BASE64_QUANTUM:
        raise ProtocolViolation(
            f"base64 token length {len(token)} is not a positive multiple of {BASE64_QUANTUM}"
        )

    body, tail = token[:-2], token[-2:]
    for position, ch in enumerate(body):
        if not is_base64_char(ch):
            raise ProtocolViolation(
                f"character {ch!r} not allowed in base64 token at offset {position}"
            )

    first, last = tail
    if is_base64_char(first):
        if not (is_base64_char(last) or last == PAD):
            raise ProtocolViolation(f"character {last!r} not allowed at end of base64 token")
    elif first == PAD:
        if last != PAD:
            raise ProtocolViolation("padding must run to the end of the base64 token")
    else:
        raise ProtocolViolation(f"character {first!r} not allowed in base64 token")
