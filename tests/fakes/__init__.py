"""Canned status payloads and HTTP response doubles for client tests (no live network)."""

from .responses import (
    BITCOIN_CONFIRMED_MS,
    FAKE_API_KEY,
    FAKE_HASH,
    entry,
    fake_response,
    status_payload,
)

__all__ = [
    "BITCOIN_CONFIRMED_MS",
    "FAKE_API_KEY",
    "FAKE_HASH",
    "entry",
    "fake_response",
    "status_payload",
]
