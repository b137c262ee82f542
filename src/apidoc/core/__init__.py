"""Ambient primitives shared by every apidoc layer: errors, logging, settings, ids."""

from apidoc.core.errors import (
    ApiDocError,
    BusyError,
    ConfigError,
    ErrorCategory,
    NotFoundError,
    PreconditionFailedError,
    StorageError,
    TreeIntegrityError,
    ValidationError,
)

__all__ = [
    "ApiDocError",
    "BusyError",
    "ConfigError",
    "ErrorCategory",
    "NotFoundError",
    "PreconditionFailedError",
    "StorageError",
    "TreeIntegrityError",
    "ValidationError",
]
