"""
Domain Errors - Business Logic Exceptions

This module defines the exceptions raised by the data layer. Remote access
knows a single failure kind, FetchError, whatever went wrong on the wire.
"""
from typing import Optional


class DomainError(Exception):
    """Base exception for domain errors."""
    pass


class FetchError(DomainError):
    """
    Raised when a remote resource cannot be fetched or parsed.

    Covers transport failures, timeouts, non-success HTTP statuses,
    invalid JSON and payloads that do not match the expected schema.
    """

    def __init__(self, message: str, resource: Optional[str] = None):
        super().__init__(message)
        self.resource = resource
