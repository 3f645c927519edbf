"""
Program image decoding.

Program images travel as standard padded base64 text and are decoded to
raw bytes before being handed to the engine.
"""

import base64
import binascii
import logging
import re
import sys
from pathlib import Path
from typing import Union

from .errors import DecodeError, DecodeFailure

logger = logging.getLogger(__name__)


# Standard alphabet, padding included
_ALPHABET = re.compile(r"[A-Za-z0-9+/=]*")

# At most two '=' and only at the very end
_PADDING = re.compile(r"[^=]*={0,2}")

# Clock demo shipped with the original web host
SAMPLE_IMAGE = (
    "bgVlAGsGagCjDNqxegQ6QBIIewI7EhIGbCBtH6MQ3NEi9mAAYQCjEtARcAijDtARYEDwFfAHMAAS"
    "NMYPZx5oAWn/ow7WcaMQ3NFgBOChfP5gBuChfAJgP4wC3NGjDtZxhoSHlGA/hgJhH4cSRx8SrEYA"
    "aAFGP2j/RwBpAdZxPwESqkcfEqpgBYB1PwASqmAB8BiAYGH8gBKjDNBxYP6JAyL2dQEi9kVgEt4S"
    "Rmn/gGCAxT8BEsphAoAVPwES4IAVPwES7oAVPwES6GAg8BijDn7/gOCABGEA0BE+ABIwEt54/0j+"
    "aP8S7ngBSAJoAWAE8Bhp/xJwoxT1M/Jl8SljN2QA00VzBfIp00UA7uAAgAD8AKoAAAAAAA=="
)


def decode(encoded: str) -> bytes:
    """
    Decode a base64 program image.

    Args:
        encoded: Padded base64 text using the standard alphabet

    Returns:
        The raw program bytes

    Raises:
        DecodeError: With INVALID_CHARACTER if a character is outside the
            alphabet, or INVALID_LENGTH if the length or padding is wrong
    """
    if not _ALPHABET.fullmatch(encoded):
        bad = next(c for c in encoded if not _ALPHABET.fullmatch(c))
        raise DecodeError(
            DecodeFailure.INVALID_CHARACTER,
            f"Invalid character {bad!r} in program image"
        )

    if len(encoded) % 4 != 0 or not _PADDING.fullmatch(encoded):
        raise DecodeError(
            DecodeFailure.INVALID_LENGTH,
            f"Program image length {len(encoded)} is not valid padded base64"
        )

    try:
        data = base64.b64decode(encoded, validate=True)
    except binascii.Error as e:
        # e.g. "A===" passes the checks above but has too much padding
        raise DecodeError(DecodeFailure.INVALID_LENGTH, str(e)) from e

    # Unused bits before the padding must be zero ("AB==" is not "AA==")
    if encode(data) != encoded:
        raise DecodeError(
            DecodeFailure.INVALID_LENGTH,
            "Program image has non-zero bits in its final padded group"
        )
    return data


def encode(data: bytes) -> str:
    """Encode raw program bytes as padded base64 text."""
    return base64.b64encode(data).decode("ascii")


def read_image(source: Union[str, Path]) -> bytes:
    """
    Read a program image from a file.

    .ch8 files and files that are not ASCII text are raw program dumps
    and are returned as-is. Any other file, and "-" (stdin), must hold
    base64 text.

    Args:
        source: File path or "-"

    Returns:
        Raw program bytes

    Raises:
        DecodeError: If a text image is not valid base64
        OSError: If the file cannot be read
    """
    if str(source) == "-":
        return decode(sys.stdin.read().strip())

    path = Path(source)
    raw = path.read_bytes()

    if path.suffix.lower() == ".ch8":
        logger.debug(f"Reading {path} as a binary image")
        return raw

    try:
        text = raw.decode("ascii").strip()
    except UnicodeDecodeError:
        logger.debug(f"{path} is not text, using raw bytes")
        return raw

    return decode(text)
