"""
Client for a blockchain timestamping service.
Submits SHA-256 digests (never content) and polls per-ledger anchoring status.
"""

from __future__ import annotations

from ._version import __version__
from .client import TimestampClient, resolve_timestamp
from .digest import is_sha256_hex, sha256_file, sha256_hex
from .errors import InvalidCredential, LedgerStampError, NetworkError, ServiceError
from .models import (
    Ledger,
    LedgerEntry,
    StatusResponse,
    SubmissionRequest,
    SubmitStatus,
    TimestampRecord,
    TimestampResult,
    TimestampState,
)

# Do not add exports without updating __all__.
__all__ = [
    "__version__",
    "TimestampClient",
    "resolve_timestamp",
    "sha256_hex",
    "sha256_file",
    "is_sha256_hex",
    "LedgerStampError",
    "InvalidCredential",
    "NetworkError",
    "ServiceError",
    "Ledger",
    "LedgerEntry",
    "StatusResponse",
    "SubmissionRequest",
    "SubmitStatus",
    "TimestampRecord",
    "TimestampResult",
    "TimestampState",
]
