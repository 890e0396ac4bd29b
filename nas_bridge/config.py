"""
NAS bridge configuration.
"""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class NasBridgeConfig:
    """
    Attributes:
        timeout: Request timeout in seconds.
        user_agent: User-Agent header value.
        verify_ssl: Whether to verify TLS certificates (NAS boxes often self-sign).
        storage_key: Key of the persisted login slot.
        export_format: Image format requested from the canvas on export.
        export_scale: Scale factor requested from the canvas on export.
        boundary_prefix: Literal prefix of every multipart boundary token.
        max_boundary_attempts: Fresh boundaries tried before giving up on a collision.
    """

    timeout: float = 30.0
    user_agent: str = "NasBridge-Python/0.1"
    verify_ssl: bool = True
    storage_key: str = "loginInfo"
    export_format: str = "PNG"
    export_scale: float = 2.0
    boundary_prefix: str = "----NasBridgeFormBoundary"
    max_boundary_attempts: int = 5

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            msg = "timeout must be positive"
            raise ValueError(msg)
        if not self.storage_key:
            msg = "storage_key must not be empty"
            raise ValueError(msg)
        if self.export_scale <= 0:
            msg = "export_scale must be positive"
            raise ValueError(msg)
        if not self.boundary_prefix:
            msg = "boundary_prefix must not be empty"
            raise ValueError(msg)
        if self.max_boundary_attempts <= 0:
            msg = "max_boundary_attempts must be positive"
            raise ValueError(msg)
