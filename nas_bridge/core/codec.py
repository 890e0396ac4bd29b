"""Byte/text conversions used for transport encoding."""

import base64
import binascii

from nas_bridge.exceptions import CodecError


def b64encode(data: bytes) -> str:
    """Encode bytes as standard padded base64 text."""
    return base64.b64encode(data).decode("ascii")


def b64decode(text: str) -> bytes:
    """
    Decode standard padded base64 text.

    Raises:
        CodecError: If the text is not valid base64.
    """
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        msg = "Invalid base64 input"
        raise CodecError(msg) from e


def bytes_to_binary_string(data: bytes) -> str:
    """Map each byte to the code point of the same value."""
    return data.decode("latin-1")


def binary_string_to_bytes(text: str) -> bytes:
    """
    Inverse of bytes_to_binary_string.

    Code points above 0xFF keep only their low byte, so the function is
    defined for every string.
    """
    return bytes(ord(ch) & 0xFF for ch in text)


def encode_text(text: str) -> bytes:
    """Encode text for the wire (UTF-8)."""
    return text.encode("utf-8")


def decode_text(data: bytes) -> str:
    """Decode downloaded text files; undecodable bytes become U+FFFD."""
    return data.decode("utf-8", errors="replace")
