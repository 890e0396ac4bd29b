"""
File transfer service for the NAS.

Uploads go through the multipart uploadV2 endpoint, downloads through the
v3 file endpoint. Failures leave this service classified.
"""

from typing import Any

import structlog

from nas_bridge.api.endpoints.files import download_file, upload_file
from nas_bridge.api.http_client import AsyncHttpClient
from nas_bridge.config import NasBridgeConfig
from nas_bridge.core.multipart import MultipartBody, MultipartPart, build_multipart
from nas_bridge.exceptions import NasBridgeError
from nas_bridge.models.auth import Session
from nas_bridge.models.files import RemoteFileRef, TransferPayload
from nas_bridge.services.error_classifier import Operation, classify

logger = structlog.get_logger(__name__)


class TransferClient:
    """Moves file bytes between the caller and the NAS."""

    def __init__(self, http: AsyncHttpClient, config: NasBridgeConfig | None = None) -> None:
        """
        Args:
            http: HTTP client for API requests.
            config: Supplies the multipart boundary settings.
        """
        self._http = http
        self._config = config or NasBridgeConfig()

    def build_upload_body(self, payload: TransferPayload) -> MultipartBody:
        """Two parts, in order: ``path`` then ``file``."""
        return build_multipart(
            [
                MultipartPart.field("path", payload.target_path),
                MultipartPart.file(
                    "file",
                    payload.wire_filename,
                    payload.data,
                    payload.mime_type,
                ),
            ],
            prefix=self._config.boundary_prefix,
            max_attempts=self._config.max_boundary_attempts,
        )

    async def upload(
        self,
        data: bytes,
        filename: str,
        target_path: str,
        session: Session,
    ) -> dict[str, Any]:
        """
        Upload ``data`` as ``filename`` into the NAS folder ``target_path``.

        Args:
            data: File content.
            filename: Name on the NAS.
            target_path: Destination folder.
            session: Credentials for this call.

        Returns:
            The NAS response, or a synthetic success result for empty/non-JSON bodies.

        Raises:
            NasBridgeError: Classified failure.
        """
        base_url, token = session.server_base_url, session.access_token
        payload = TransferPayload.for_file(data, filename, target_path)
        logger.info(
            "Uploading file",
            filename=payload.filename,
            target_path=payload.target_path,
            size=payload.size,
        )

        try:
            body = self.build_upload_body(payload)
            result = await upload_file(self._http, base_url, token, body)
        except NasBridgeError as e:
            logger.error("Upload failed", filename=filename, error_type=type(e).__name__)
            raise classify(e, Operation.UPLOAD) from e

        logger.info("Upload complete", filename=filename)
        return result

    async def download(self, file_ref: RemoteFileRef, session: Session) -> bytes:
        """
        Download a file's bytes unchanged.

        Raises:
            NasBridgeError: Classified failure.
        """
        base_url, token = session.server_base_url, session.access_token
        logger.info("Downloading file", name=file_ref.name, path=file_ref.path)

        try:
            data = await download_file(self._http, base_url, token, file_ref.path)
        except NasBridgeError as e:
            logger.error("Download failed", path=file_ref.path, error_type=type(e).__name__)
            raise classify(e, Operation.DOWNLOAD) from e

        logger.info("Download complete", name=file_ref.name, size=len(data))
        return data
