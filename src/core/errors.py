from __future__ import annotations


class CacheServiceError(Exception):
    """Base error for the cache service."""


class ConfigurationError(CacheServiceError):
    """Raised when a cache or wrapper is constructed with invalid settings."""


class ValidationError(CacheServiceError):
    """Raised when user input is invalid."""


class ExternalServiceError(CacheServiceError):
    """Raised when an upstream HTTP service fails."""
