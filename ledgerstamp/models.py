"""
Wire models for the timestamping service.

The status payload is a response envelope holding one record per hash, which
in turn holds one entry per ledger. Everything is a frozen dataclass: a query
yields a fresh snapshot that is never mutated afterwards.

Parsing is lenient about missing scalars (they default the way the service
omits them) but strict about structure: a payload whose shape is wrong raises
ValueError, which the client treats as "no usable status".
"""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Tuple

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class Ledger(enum.IntEnum):
    """Ledger codes used by the service in `currency_id`. More may be added upstream."""

    BITCOIN = 0
    ETHEREUM = 1


class SubmitStatus(enum.IntEnum):
    NO_TIMESTAMP = 0
    TIMESTAMP = 3


def _to_int(x: Any) -> Optional[int]:
    if x is None or isinstance(x, bool):
        return None
    try:
        return int(x)
    except (TypeError, ValueError, OverflowError):
        return None


def _to_str(x: Any) -> Optional[str]:
    if x is None:
        return None
    return str(x)


def millis_to_datetime(ms: int) -> datetime:
    """Epoch milliseconds to an aware UTC datetime, without float rounding."""
    return _EPOCH + timedelta(milliseconds=ms)


def _to_millis(x: Any) -> Optional[int]:
    """Epoch millis, or None if missing or outside the datetime range."""
    ms = _to_int(x)
    if ms is None:
        return None
    try:
        millis_to_datetime(ms)
    except OverflowError:
        return None
    return ms


@dataclass(frozen=True)
class SubmissionRequest:
    """Body of the create-timestamp call. Only the hash varies."""

    hash: str
    comment: Optional[str] = None
    url: Optional[str] = None
    notifications: Tuple[Dict[str, Any], ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        # key order matches the documented request body
        return {
            "comment": self.comment,
            "url": self.url,
            "hash": self.hash,
            "notifications": list(self.notifications),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SubmissionRequest":
        if not isinstance(data, dict) or not isinstance(data.get("hash"), str):
            raise ValueError("submission body must be an object with a string 'hash'")
        return cls(
            hash=data["hash"],
            comment=data.get("comment"),
            url=data.get("url"),
            notifications=tuple(data.get("notifications") or ()),
        )


@dataclass(frozen=True)
class LedgerEntry:
    """Status of one hash on one ledger."""

    ledger_id: int
    submit_status: int
    transaction: Optional[str] = None
    private_key: Optional[str] = field(default=None, repr=False)
    timestamp_ms: Optional[int] = None

    @property
    def is_confirmed(self) -> bool:
        return self.submit_status == SubmitStatus.TIMESTAMP

    @property
    def confirmed_at(self) -> Optional[datetime]:
        if not self.is_confirmed or self.timestamp_ms is None:
            return None
        return millis_to_datetime(self.timestamp_ms)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LedgerEntry":
        if not isinstance(data, dict):
            raise ValueError(f"timestamp entry must be an object, got {type(data).__name__}")
        return cls(
            ledger_id=_to_int(data.get("currency_id")) or 0,
            submit_status=_to_int(data.get("submit_status")) or 0,
            transaction=_to_str(data.get("transaction")),
            private_key=_to_str(data.get("private_key")),
            timestamp_ms=_to_millis(data.get("timestamp")),
        )


@dataclass(frozen=True)
class TimestampRecord:
    """Everything the service knows about one hash."""

    hash_string: Optional[str]
    created: bool = False
    date_created: Optional[int] = None
    comment: Optional[str] = None
    entries: Tuple[LedgerEntry, ...] = ()

    def entry_for(self, ledger: int) -> Optional[LedgerEntry]:
        """First entry for the ledger, in service order."""
        for entry in self.entries:
            if entry.ledger_id == ledger:
                return entry
        return None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TimestampRecord":
        if not isinstance(data, dict):
            raise ValueError(f"'data' must be an object, got {type(data).__name__}")
        raw_entries = data.get("timestamps")
        if raw_entries is None:
            raw_entries = []
        if not isinstance(raw_entries, list):
            raise ValueError("'timestamps' must be a list")
        return cls(
            hash_string=_to_str(data.get("hash_string")),
            created=data.get("created") is True,
            date_created=_to_int(data.get("date_created")),
            comment=_to_str(data.get("comment")),
            entries=tuple(LedgerEntry.from_dict(e) for e in raw_entries),
        )


@dataclass(frozen=True)
class StatusResponse:
    """Envelope returned by the status endpoint."""

    error_code: int = 0
    error_message: Optional[str] = None
    data: Optional[TimestampRecord] = None

    @property
    def is_error(self) -> bool:
        return self.error_message is not None

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "StatusResponse":
        if not isinstance(payload, dict):
            raise ValueError(f"status payload must be an object, got {type(payload).__name__}")
        raw_data = payload.get("data")
        return cls(
            error_code=_to_int(payload.get("error_code")) or 0,
            error_message=_to_str(payload.get("error_message")),
            data=TimestampRecord.from_dict(raw_data) if raw_data is not None else None,
        )

    @classmethod
    def from_json(cls, text: str) -> "StatusResponse":
        """Parse a response body. Raises ValueError on malformed JSON or shape."""
        try:
            payload = json.loads(text)
        except RecursionError as exc:
            raise ValueError("status body nested too deeply") from exc
        return cls.from_dict(payload)


class TimestampState(enum.Enum):
    """Where a (hash, ledger) pair stands according to one status snapshot."""

    UNKNOWN = "UNKNOWN"
    NOT_FOUND = "NOT_FOUND"
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"


@dataclass(frozen=True)
class TimestampResult:
    state: TimestampState
    ledger_id: int
    confirmed_at: Optional[datetime] = None
    entry: Optional[LedgerEntry] = None

    def __bool__(self) -> bool:
        return self.state == TimestampState.CONFIRMED
