"""
Load config from config.yaml with optional env overrides.
Single source of truth for service endpoints, timeout, user agent and API key.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import yaml

from ._version import __version__

# Defaults if no YAML or env
_DEFAULTS = {
    "service": {
        "create_endpoint": "https://api.originstamp.com/v3/timestamp/create",
        "status_endpoint": "https://api.originstamp.com/v3/timestamp",
        "timeout_s": 5.0,
        "user_agent": f"ledgerstamp-python/{__version__}",
    },
    "api_key": None,
}


def _config_yaml_path() -> Path:
    """LEDGERSTAMP_CONFIG if set, else config.yaml in the working directory."""
    override = os.environ.get("LEDGERSTAMP_CONFIG")
    if override:
        return Path(override)
    return Path.cwd() / "config.yaml"


def _load_yaml() -> dict:
    config_path = _config_yaml_path()
    if not config_path.exists():
        return {}
    with open(config_path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid config file {config_path}: {exc}") from exc
    return data if isinstance(data, dict) else {}


def _deep_merge(base: dict, override: dict) -> dict:
    out = dict(base)
    for k, v in override.items():
        if k in out and isinstance(out[k], dict) and isinstance(v, dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def _env_overrides() -> dict:
    overrides: dict = {}
    key = os.environ.get("LEDGERSTAMP_API_KEY")
    if key:
        overrides["api_key"] = key
    create = os.environ.get("LEDGERSTAMP_CREATE_ENDPOINT")
    if create:
        overrides.setdefault("service", {})["create_endpoint"] = create
    status = os.environ.get("LEDGERSTAMP_STATUS_ENDPOINT")
    if status:
        overrides.setdefault("service", {})["status_endpoint"] = status
    timeout = os.environ.get("LEDGERSTAMP_TIMEOUT_S")
    if timeout:
        overrides.setdefault("service", {})["timeout_s"] = float(timeout)
    return overrides


def get_config() -> dict:
    """Return merged config: defaults <- config.yaml <- env."""
    merged = _deep_merge(_DEFAULTS, _load_yaml())
    merged = _deep_merge(merged, _env_overrides())
    return merged


# Convenience accessors
def api_key() -> Optional[str]:
    key = get_config().get("api_key")
    return str(key) if key else None


def create_endpoint() -> str:
    return str(get_config()["service"]["create_endpoint"])


def status_endpoint() -> str:
    return str(get_config()["service"]["status_endpoint"])


def timeout_s() -> float:
    return float(get_config()["service"]["timeout_s"])


def user_agent() -> str:
    return str(get_config()["service"]["user_agent"])
