"""SHA-256 digests in the lowercase hex form the service expects."""
from __future__ import annotations

import hashlib
import re
from pathlib import Path
from typing import Union

_SHA256_HEX_RE = re.compile(r"^[0-9a-f]{64}$")


def sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def sha256_file(path: Union[str, Path], chunk_size: int = 65536) -> str:
    """Hash a file without loading it into memory."""
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(chunk_size), b""):
            h.update(chunk)
    return h.hexdigest()


def is_sha256_hex(value: str) -> bool:
    """True if value is exactly 64 lowercase hex characters."""
    return isinstance(value, str) and bool(_SHA256_HEX_RE.match(value))
