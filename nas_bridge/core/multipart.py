"""
multipart/form-data request bodies.

The NAS upload endpoint needs byte-exact control over the part headers
(the file part's filename carries the payload length), so bodies are
assembled here instead of by the HTTP library.
"""

import secrets
from dataclasses import dataclass, field

from nas_bridge.core.codec import encode_text
from nas_bridge.exceptions import MultipartError

CRLF = b"\r\n"


def generate_boundary(prefix: str) -> str:
    """Fixed prefix followed by 16 random hex characters."""
    return f"{prefix}{secrets.token_hex(8)}"


@dataclass(frozen=True, kw_only=True)
class MultipartPart:
    """
    One named form field.

    Attributes:
        name: Form field name.
        body: Raw field content.
        filename: Optional filename attribute (marks a file field).
        content_type: Optional Content-Type header for the part.
    """

    name: str
    body: bytes
    filename: str | None = None
    content_type: str | None = None

    @classmethod
    def field(cls, name: str, value: str) -> "MultipartPart":
        return cls(name=name, body=encode_text(value))

    @classmethod
    def file(cls, name: str, filename: str, body: bytes, content_type: str) -> "MultipartPart":
        return cls(name=name, body=body, filename=filename, content_type=content_type)

    def header_bytes(self) -> bytes:
        disposition = f'Content-Disposition: form-data; name="{self.name}"'
        if self.filename is not None:
            disposition += f'; filename="{self.filename}"'
        lines = [disposition]
        if self.content_type is not None:
            lines.append(f"Content-Type: {self.content_type}")
        return encode_text("\r\n".join(lines)) + CRLF + CRLF


@dataclass(frozen=True)
class MultipartBody:
    """
    Ordered parts framed by a boundary token.

    The boundary is checked against every part's headers and body when the
    body is built; a collision raises MultipartError.
    """

    boundary: str
    parts: tuple[MultipartPart, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.boundary:
            msg = "Boundary must not be empty"
            raise MultipartError(msg)
        marker = encode_text(self.boundary)
        for part in self.parts:
            if marker in part.body or marker in part.header_bytes():
                msg = "Boundary occurs inside a part"
                raise MultipartError(msg, part=part.name)

    @property
    def content_type(self) -> str:
        return f"multipart/form-data; boundary={self.boundary}"

    def footer(self) -> bytes:
        return CRLF + encode_text(f"--{self.boundary}--") + CRLF

    def encode(self) -> bytes:
        """Serialize all parts followed by the closing delimiter."""
        delimiter = encode_text(f"--{self.boundary}") + CRLF
        chunks: list[bytes] = []
        for index, part in enumerate(self.parts):
            if index > 0:
                chunks.append(CRLF)
            chunks.append(delimiter)
            chunks.append(part.header_bytes())
            chunks.append(part.body)
        chunks.append(self.footer())
        return b"".join(chunks)


def build_multipart(
    parts: list[MultipartPart], *, prefix: str, max_attempts: int = 5
) -> MultipartBody:
    """
    Build a body with a fresh boundary, regenerating on collision.

    Raises:
        MultipartError: If no collision-free boundary was found.
    """
    for _ in range(max_attempts):
        try:
            return MultipartBody(generate_boundary(prefix), tuple(parts))
        except MultipartError:
            continue
    msg = "Could not find a boundary absent from the content"
    raise MultipartError(msg, attempts=max_attempts)
