"""
Core utilities and infrastructure for the Intersect memory engine.
"""

from core.exceptions import (
    IntersectException,
    DatabaseException,
    StoreNotInitializedError,
    RecordNotFoundError,
    DuplicateRecordError,
    MemoryException,
    InvalidMemoryDataError,
    MalformedMemoryDataError,
    ExternalServiceException,
    CompletionError,
    InvalidCredentialError,
    RateLimitedError,
    MalformedCompletionError,
    EmptyCompletionError,
    ValidationException,
    InvalidWeightsError,
)
from core.logging_config import configure_logging, get_logger

__all__ = [
    "IntersectException",
    "DatabaseException",
    "StoreNotInitializedError",
    "RecordNotFoundError",
    "DuplicateRecordError",
    "MemoryException",
    "InvalidMemoryDataError",
    "MalformedMemoryDataError",
    "ExternalServiceException",
    "CompletionError",
    "InvalidCredentialError",
    "RateLimitedError",
    "MalformedCompletionError",
    "EmptyCompletionError",
    "ValidationException",
    "InvalidWeightsError",
    "configure_logging",
    "get_logger",
]
