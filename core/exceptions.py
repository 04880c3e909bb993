"""
Custom exception hierarchy for the Intersect memory engine.
Provides structured error handling with proper context.
"""

from typing import Optional, Dict, Any


class IntersectException(Exception):
    """Base exception for all Intersect errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize exception with message and optional context.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            context: Additional context information
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/API responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "context": self.context,
        }


# ==================== Database Exceptions ====================


class DatabaseException(IntersectException):
    """Base exception for database-related errors."""

    pass


class StoreNotInitializedError(DatabaseException):
    """Raised when the store is used before initialize() or after close()."""

    def __init__(self, details: Optional[str] = None):
        super().__init__(
            message="Memory store is not initialized",
            error_code="STORE_NOT_INITIALIZED",
            context={"details": details} if details else {},
        )


class RecordNotFoundError(DatabaseException):
    """Raised when a database record is not found."""

    def __init__(self, model: str, identifier: Any):
        super().__init__(
            message=f"{model} not found",
            error_code="RECORD_NOT_FOUND",
            context={"model": model, "identifier": identifier},
        )


class DuplicateRecordError(DatabaseException):
    """Raised when attempting to create a duplicate record."""

    def __init__(self, model: str, field: str, value: Any):
        super().__init__(
            message=f"{model} with {field}={value} already exists",
            error_code="DUPLICATE_RECORD",
            context={"model": model, "field": field, "value": value},
        )


# ==================== Memory Exceptions ====================


class MemoryException(IntersectException):
    """Base exception for memory-related errors."""

    pass


class InvalidMemoryDataError(MemoryException):
    """Raised when memory data is invalid."""

    def __init__(self, field: str, reason: str):
        super().__init__(
            message=f"Invalid memory data: {field} - {reason}",
            error_code="INVALID_MEMORY_DATA",
            context={"field": field, "reason": reason},
        )


class MalformedMemoryDataError(MemoryException):
    """Raised when a persisted sequence field cannot be decoded."""

    def __init__(self, field: str, raw: Optional[str], reason: str):
        super().__init__(
            message=f"Malformed stored data in {field}: {reason}",
            error_code="MALFORMED_MEMORY_DATA",
            context={"field": field, "raw": raw, "reason": reason},
        )


# ==================== API/External Service Exceptions ====================


class ExternalServiceException(IntersectException):
    """Base exception for external service errors."""

    pass


class CompletionError(ExternalServiceException):
    """Base exception for completion provider failures."""

    def __init__(
        self,
        message: str = "Completion request failed",
        error_code: Optional[str] = None,
        model: Optional[str] = None,
        details: Optional[str] = None,
    ):
        super().__init__(
            message=message,
            error_code=error_code or "COMPLETION_ERROR",
            context={"model": model, "details": details},
        )


class InvalidCredentialError(CompletionError):
    """Raised when the provider rejects the API key."""

    def __init__(self, model: Optional[str] = None, details: Optional[str] = None):
        super().__init__(
            message="Completion provider rejected the credentials",
            error_code="INVALID_CREDENTIAL",
            model=model,
            details=details,
        )


class RateLimitedError(CompletionError):
    """Raised when the provider rate-limits the request."""

    def __init__(self, model: Optional[str] = None, details: Optional[str] = None):
        super().__init__(
            message="Completion provider rate limit exceeded",
            error_code="RATE_LIMITED",
            model=model,
            details=details,
        )


class MalformedCompletionError(CompletionError):
    """Raised when the provider response cannot be interpreted."""

    def __init__(self, model: Optional[str] = None, details: Optional[str] = None):
        super().__init__(
            message="Malformed completion response",
            error_code="MALFORMED_COMPLETION",
            model=model,
            details=details,
        )


class EmptyCompletionError(CompletionError):
    """Raised when the provider returns no text content."""

    def __init__(self, model: Optional[str] = None):
        super().__init__(
            message="No text content in completion response",
            error_code="EMPTY_COMPLETION",
            model=model,
        )


# ==================== Validation Exceptions ====================


class ValidationException(IntersectException):
    """Base exception for validation errors."""

    pass


class InvalidWeightsError(ValidationException):
    """Raised when a weight vector violates the active weight policy."""

    def __init__(self, weights: tuple, reason: str):
        super().__init__(
            message=f"Invalid weight vector {weights}: {reason}",
            error_code="INVALID_WEIGHTS",
            context={"weights": list(weights), "reason": reason},
        )
