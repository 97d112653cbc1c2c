"""Keep tests independent of the developer's config.yaml and LEDGERSTAMP_* environment."""

from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch, tmp_path):
    for var in (
        "LEDGERSTAMP_CONFIG",
        "LEDGERSTAMP_API_KEY",
        "LEDGERSTAMP_CREATE_ENDPOINT",
        "LEDGERSTAMP_STATUS_ENDPOINT",
        "LEDGERSTAMP_TIMEOUT_S",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
