"""
Business logic services for the NAS bridge.
"""

from nas_bridge.services.error_classifier import Operation, categorize, classify
from nas_bridge.services.export_service import ExportService
from nas_bridge.services.import_service import ImportDispatcher
from nas_bridge.services.login_service import LoginNegotiator, candidate_base_urls
from nas_bridge.services.session_store import SessionStore
from nas_bridge.services.transfer_service import TransferClient

__all__ = [
    "ExportService",
    "ImportDispatcher",
    "LoginNegotiator",
    "Operation",
    "SessionStore",
    "TransferClient",
    "candidate_base_urls",
    "categorize",
    "classify",
]
