"""
Exception hierarchy for the retrieval-augmentation engine.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class RagEngineException(Exception):
    """Base exception for all engine errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class InvalidContentError(RagEngineException):
    """Raised when input text is empty or unusable after sanitization."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize invalid content error.

        Args:
            message: Error message
            field: Input field that was rejected (content, passage, query)
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class IngestionError(RagEngineException):
    """Base exception for document ingestion failures."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize ingestion error.

        Args:
            message: Error message
            document_id: ID of the document being ingested, when already persisted
            details: Additional context
        """
        details = details or {}
        if document_id:
            details["document_id"] = document_id
        super().__init__(message, details)


class EmbeddingServiceError(IngestionError):
    """Raised when the embedding service call fails (transport or provider error)."""

    pass


class EmbeddingValidationError(IngestionError):
    """Raised when an embedding vector has the wrong dimensionality."""

    def __init__(
        self,
        message: str,
        expected: int,
        actual: int | None,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize embedding validation error.

        Args:
            message: Error message
            expected: Required vector length
            actual: Received vector length (None if not a sequence)
            document_id: Owning document ID
            details: Additional context (chunk_index, batch_index)
        """
        details = details or {}
        details["expected_dimension"] = expected
        details["actual_dimension"] = actual
        super().__init__(message, document_id, details)


class ExtractionError(IngestionError):
    """Raised when text cannot be extracted from an uploaded document."""

    pass


class IngestionTimeoutError(IngestionError):
    """Raised when extraction or ingestion exceeds its wall-clock budget."""

    pass


class UploadRejectedError(IngestionError):
    """Raised when an upload violates size, type or minimum-content limits."""

    def __init__(
        self,
        message: str,
        reason: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize upload rejection.

        Args:
            message: User-facing message
            reason: Machine-readable reason (too_large, unsupported_type, too_short, no_text)
            details: Additional context
        """
        details = details or {}
        details["reason"] = reason
        self.reason = reason
        super().__init__(message, None, details)


class ResourceExhaustedError(RagEngineException):
    """Raised when memory pressure is critical and new large work must be refused."""

    def __init__(
        self,
        message: str,
        usage_ratio: float | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if usage_ratio is not None:
            details["usage_ratio"] = round(usage_ratio, 4)
        super().__init__(message, details)


class RetrievalUnavailableError(RagEngineException):
    """Raised when the passage store cannot be searched."""

    def __init__(
        self,
        message: str,
        owner_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize retrieval unavailable error.

        Args:
            message: Error message
            owner_id: Owner scope of the failed search
            details: Additional context
        """
        details = details or {}
        if owner_id:
            details["owner_id"] = owner_id
        super().__init__(message, details)


class DocumentNotFoundError(RagEngineException):
    """Raised when a document does not exist or is not owned by the caller."""

    def __init__(self, document_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["document_id"] = document_id
        super().__init__(f"Document not found: {document_id}", details)
