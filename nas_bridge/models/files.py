"""
File-related domain models.
"""

from dataclasses import dataclass
from typing import Any, Self

from nas_bridge.core.content_type import file_extension, resolve_content_type


@dataclass(frozen=True, kw_only=True)
class RemoteFileRef:
    """
    A listing entry on the NAS.

    Attributes:
        name: Entry name including extension.
        path: Absolute NAS path used for downloads.
        is_directory: Whether the entry is a folder.
        size_bytes: Size reported by the listing.
        modified_epoch: Modification time reported by the listing.
    """

    name: str
    path: str
    is_directory: bool = False
    size_bytes: int = 0
    modified_epoch: int = 0

    @property
    def extension(self) -> str:
        return file_extension(self.name)

    @classmethod
    def from_message(cls, data: dict[str, Any]) -> Self:
        """Build from the listing dict the UI sends (``is_dir``, ``size``, ``modified``)."""
        return cls(
            name=str(data["name"]),
            path=str(data["path"]),
            is_directory=bool(data.get("is_dir", False)),
            size_bytes=int(data.get("size") or 0),
            modified_epoch=int(data.get("modified") or 0),
        )


@dataclass(frozen=True, kw_only=True)
class TransferPayload:
    """
    One file about to be uploaded.

    Attributes:
        data: Raw file content.
        filename: Name the file gets on the NAS.
        mime_type: Content-Type of the file part.
        target_path: NAS folder receiving the file.
    """

    data: bytes
    filename: str
    mime_type: str
    target_path: str

    @classmethod
    def for_file(cls, data: bytes, filename: str, target_path: str) -> Self:
        return cls(
            data=data,
            filename=filename,
            mime_type=resolve_content_type(filename),
            target_path=target_path,
        )

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def wire_filename(self) -> str:
        """Filename attribute expected by uploadV2: ``<name>:<byte length>``."""
        return f"{self.filename}:{self.size}"
