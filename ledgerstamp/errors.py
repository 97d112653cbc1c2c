"""
Exception hierarchy for the timestamping client.

Bad caller input is a ValueError, transport and service failures are
RuntimeErrors, so callers written against the plain builtins keep working.
"""
from __future__ import annotations

from typing import Optional


class LedgerStampError(Exception):
    """Base class for all client errors."""


class InvalidCredential(LedgerStampError, ValueError):
    """API key is not UUID-shaped. Raised before any network activity."""


class NetworkError(LedgerStampError, RuntimeError):
    """Connection failure, timeout, or non-2xx response while talking to the service."""

    def __init__(self, message: str, *, url: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ServiceError(NetworkError):
    """Creation endpoint answered with a non-2xx status."""
