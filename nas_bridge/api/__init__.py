"""
NAS API client layer.

Provides async HTTP communication with the NAS file API.
"""

from nas_bridge.api.http_client import AsyncHttpClient, sanitize_for_log

__all__ = ["AsyncHttpClient", "sanitize_for_log"]
