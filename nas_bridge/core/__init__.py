"""
Protocol-independent building blocks: codecs, content types, multipart bodies.
"""

from nas_bridge.core.codec import (
    b64decode,
    b64encode,
    binary_string_to_bytes,
    bytes_to_binary_string,
    decode_text,
    encode_text,
)
from nas_bridge.core.content_type import file_extension, resolve_content_type
from nas_bridge.core.multipart import MultipartBody, MultipartPart, build_multipart

__all__ = [
    "b64decode",
    "b64encode",
    "binary_string_to_bytes",
    "bytes_to_binary_string",
    "decode_text",
    "encode_text",
    "file_extension",
    "resolve_content_type",
    "MultipartBody",
    "MultipartPart",
    "build_multipart",
]
