"""
Router utility functions.

Contains helper functions extracted from router endpoints to keep them clean.
"""

from rag_engine.api.routers.router_utils.error_mapping import status_for, to_http_exception

__all__ = [
    "status_for",
    "to_http_exception",
]
