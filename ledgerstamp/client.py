"""
Blockchain timestamping client.

Only the SHA-256 of the content leaves the process:
  POST <create_endpoint>          body {"comment", "url", "hash", "notifications"}
  GET  <status_endpoint>/<hash>   per-ledger anchoring status

Every call is a single blocking request with its own connection; there is no
retry, caching or shared session. Polling cadence is the caller's business.
"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Dict, Optional

import requests

from . import config
from .digest import is_sha256_hex, sha256_hex
from .errors import InvalidCredential, NetworkError, ServiceError
from .models import (
    StatusResponse,
    SubmissionRequest,
    TimestampResult,
    TimestampState,
)

logger = logging.getLogger(__name__)


def _check_api_key(api_key: str) -> None:
    """Formal check only: the service issues UUIDs as API keys."""
    if not isinstance(api_key, str):
        raise InvalidCredential(f"API key must be a string, got {type(api_key).__name__}")
    try:
        parsed = uuid.UUID(api_key)
    except ValueError as exc:
        raise InvalidCredential("API key is not a valid UUID") from exc
    # uuid.UUID also accepts braces, urn: prefixes and ungrouped hex
    if str(parsed) != api_key.lower():
        raise InvalidCredential("API key must be in 8-4-4-4-12 form")


def resolve_timestamp(response: Optional[StatusResponse], ledger: int) -> TimestampResult:
    """
    Decide what a status snapshot says about one ledger.

    Checked in order: no parse, service error, no data, no entries, then the
    first entry for the ledger decides. Later entries for the same ledger are
    never consulted.
    """
    ledger = int(ledger)
    if response is None or response.is_error or response.data is None:
        return TimestampResult(TimestampState.UNKNOWN, ledger)
    if not response.data.entries:
        return TimestampResult(TimestampState.UNKNOWN, ledger)

    entry = response.data.entry_for(ledger)
    if entry is None:
        return TimestampResult(TimestampState.NOT_FOUND, ledger)
    if not entry.is_confirmed:
        return TimestampResult(TimestampState.PENDING, ledger, entry=entry)
    if entry.timestamp_ms is None:
        logger.warning(
            "Confirmed entry without timestamp for %s on ledger %d; treating as pending",
            response.data.hash_string, ledger,
        )
        return TimestampResult(TimestampState.PENDING, ledger, entry=entry)
    return TimestampResult(TimestampState.CONFIRMED, ledger, confirmed_at=entry.confirmed_at, entry=entry)


class TimestampClient:
    """
    Submit hashes for timestamping and poll their status.

    Usage:
        client = TimestampClient("6a9c3a5e-1f0b-4c8e-9d2a-0e6b7f1c2d3e")
        digest = client.submit(b"contract v3")
        ...
        when = client.query_timestamp(Ledger.BITCOIN, digest)

    Endpoints, timeout and user agent default to ledgerstamp.config.
    """

    def __init__(
        self,
        api_key: str,
        *,
        create_endpoint: Optional[str] = None,
        status_endpoint: Optional[str] = None,
        timeout_s: Optional[float] = None,
        user_agent: Optional[str] = None,
    ) -> None:
        _check_api_key(api_key)
        self._api_key = api_key
        self._create_endpoint = create_endpoint or config.create_endpoint()
        self._status_endpoint = status_endpoint or config.status_endpoint()
        self._timeout_s = timeout_s if timeout_s is not None else config.timeout_s()
        self._user_agent = user_agent or config.user_agent()

    def __repr__(self) -> str:
        return f"TimestampClient(create_endpoint={self._create_endpoint!r}, status_endpoint={self._status_endpoint!r})"

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json; charset=UTF-8",
            "Accept": "application/json",
            "Authorization": self._api_key,
            "User-Agent": self._user_agent,
        }

    def submit(self, data: bytes) -> str:
        """Timestamp content by its SHA-256. Returns the submitted hash."""
        return self.submit_hash(sha256_hex(data))

    def submit_hash(self, hash_hex: str) -> str:
        """Submit an already computed SHA-256 hex digest."""
        if not is_sha256_hex(hash_hex):
            raise ValueError(f"Not a lowercase SHA-256 hex digest: {hash_hex!r}")

        url = self._create_endpoint
        body = SubmissionRequest(hash=hash_hex).to_json()
        logger.debug("POST %s hash=%s", url, hash_hex)
        try:
            resp = requests.post(
                url,
                data=body.encode("utf-8"),
                headers=self._headers(),
                timeout=self._timeout_s,
            )
        except requests.RequestException as exc:
            raise NetworkError(f"Timestamp submission failed: {exc}", url=url) from exc

        if not 200 <= resp.status_code < 300:
            raise ServiceError(
                f"Timestamp service rejected submission (HTTP {resp.status_code})",
                url=url,
                status_code=resp.status_code,
            )
        logger.info("Submitted %s for timestamping", hash_hex)
        return hash_hex

    def _fetch_status_text(self, hash_hex: str) -> str:
        url = f"{self._status_endpoint}/{hash_hex}"
        headers = self._headers()
        headers["Content-Length"] = "0"
        logger.debug("GET %s", url)
        try:
            resp = requests.get(url, headers=headers, timeout=self._timeout_s)
            resp.raise_for_status()
        except requests.HTTPError as exc:
            raise NetworkError(
                f"Status request failed (HTTP {exc.response.status_code})",
                url=url,
                status_code=exc.response.status_code,
            ) from exc
        except requests.RequestException as exc:
            raise NetworkError(f"Status request failed: {exc}", url=url) from exc

        resp.encoding = "utf-8"
        return resp.text

    def get_status(self, hash_hex: str) -> Optional[StatusResponse]:
        """Fetch and parse the status of a hash. None if the body is not a usable status."""
        text = self._fetch_status_text(hash_hex)
        try:
            return StatusResponse.from_json(text)
        except ValueError as exc:
            logger.warning("Unparseable status body for %s: %s", hash_hex, exc)
            return None

    def timestamp_state(self, ledger: int, hash_hex: str) -> TimestampResult:
        """Explicit state of a hash on one ledger."""
        result = resolve_timestamp(self.get_status(hash_hex), ledger)
        logger.debug("%s on ledger %d: %s", hash_hex, result.ledger_id, result.state.value)
        return result

    def query_timestamp(self, ledger: int, hash_hex: str) -> Optional[datetime]:
        """
        When the hash was anchored on the ledger, or None if no confirmed
        timestamp is known (yet). Network failures raise NetworkError.
        """
        return self.timestamp_state(ledger, hash_hex).confirmed_at
