"""
Domain exception to HTTP error mapping.

Dependencies: fastapi, rag_engine.core.exceptions
System role: Error translation at the HTTP edge
"""

import logging

from fastapi import HTTPException

from rag_engine.core.exceptions import (
    DocumentNotFoundError,
    EmbeddingServiceError,
    EmbeddingValidationError,
    ExtractionError,
    IngestionTimeoutError,
    InvalidContentError,
    RagEngineException,
    ResourceExhaustedError,
    RetrievalUnavailableError,
    UploadRejectedError,
)

logger = logging.getLogger(__name__)

# Checked in order; subclasses before their bases
_STATUS_BY_TYPE: tuple[tuple[type[RagEngineException], int], ...] = (
    (DocumentNotFoundError, 404),
    (InvalidContentError, 400),
    (ExtractionError, 400),
    (IngestionTimeoutError, 400),
    (ResourceExhaustedError, 503),
    (EmbeddingServiceError, 502),
    (EmbeddingValidationError, 502),
    (RetrievalUnavailableError, 502),
)


def status_for(exc: RagEngineException) -> int:
    """HTTP status code for a domain exception (500 when unmapped)."""
    if isinstance(exc, UploadRejectedError):
        return 413 if exc.reason == "too_large" else 400
    for exc_type, status_code in _STATUS_BY_TYPE:
        if isinstance(exc, exc_type):
            return status_code
    return 500


def to_http_exception(exc: RagEngineException) -> HTTPException:
    """
    Translate a domain exception into an HTTPException.

    Client errors carry the exception message; server errors are logged
    with details and get a generic message for 500s.
    """
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(
            "Request failed",
            extra={"status_code": status_code, "error": exc.message, "details": exc.details},
        )
    if status_code == 500:
        return HTTPException(status_code=500, detail="Internal server error")
    return HTTPException(status_code=status_code, detail=exc.message)
