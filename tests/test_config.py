"""
Tests for config precedence: defaults <- config.yaml <- env.
"""
from __future__ import annotations

import pytest

from ledgerstamp import config

YAML_TEXT = """\
service:
  status_endpoint: https://yaml.example/status
  timeout_s: 9
api_key: 11111111-2222-3333-4444-555555555555
"""


def test_defaults_without_yaml_or_env():
    assert config.create_endpoint() == "https://api.originstamp.com/v3/timestamp/create"
    assert config.status_endpoint() == "https://api.originstamp.com/v3/timestamp"
    assert config.timeout_s() == 5.0
    assert config.user_agent().startswith("ledgerstamp-python/")
    assert config.api_key() is None


def test_yaml_in_working_directory(tmp_path):
    (tmp_path / "config.yaml").write_text(YAML_TEXT, encoding="utf-8")
    assert config.status_endpoint() == "https://yaml.example/status"
    assert config.timeout_s() == 9.0
    assert config.api_key() == "11111111-2222-3333-4444-555555555555"
    # untouched keys keep defaults
    assert config.create_endpoint() == "https://api.originstamp.com/v3/timestamp/create"


def test_config_path_from_env(tmp_path, monkeypatch):
    other = tmp_path / "elsewhere.yaml"
    other.write_text("service:\n  user_agent: custom-agent\n", encoding="utf-8")
    monkeypatch.setenv("LEDGERSTAMP_CONFIG", str(other))
    assert config.user_agent() == "custom-agent"


def test_env_overrides_yaml(tmp_path, monkeypatch):
    (tmp_path / "config.yaml").write_text(YAML_TEXT, encoding="utf-8")
    monkeypatch.setenv("LEDGERSTAMP_STATUS_ENDPOINT", "https://env.example/status")
    monkeypatch.setenv("LEDGERSTAMP_CREATE_ENDPOINT", "https://env.example/create")
    monkeypatch.setenv("LEDGERSTAMP_TIMEOUT_S", "1.5")
    monkeypatch.setenv("LEDGERSTAMP_API_KEY", "aaaaaaaa-bbbb-cccc-dddd-eeeeeeeeeeee")
    assert config.status_endpoint() == "https://env.example/status"
    assert config.create_endpoint() == "https://env.example/create"
    assert config.timeout_s() == 1.5
    assert config.api_key() == "aaaaaaaa-bbbb-cccc-dddd-eeeeeeeeeeee"


def test_non_mapping_yaml_is_ignored(tmp_path):
    (tmp_path / "config.yaml").write_text("- just\n- a list\n", encoding="utf-8")
    assert config.timeout_s() == 5.0


def test_client_picks_up_config(tmp_path):
    from unittest.mock import patch

    from ledgerstamp.client import TimestampClient
    from tests.fakes import FAKE_API_KEY, FAKE_HASH, fake_response, status_payload

    (tmp_path / "config.yaml").write_text(YAML_TEXT, encoding="utf-8")
    with patch("ledgerstamp.client.requests.get", return_value=fake_response(status_payload())) as get:
        TimestampClient(FAKE_API_KEY).query_timestamp(0, FAKE_HASH)
    assert get.call_args.args[0] == f"https://yaml.example/status/{FAKE_HASH}"
    assert get.call_args.kwargs["timeout"] == 9.0


def test_malformed_yaml_is_value_error_naming_file(tmp_path):
    (tmp_path / "config.yaml").write_text("service: [unclosed\n", encoding="utf-8")
    with pytest.raises(ValueError, match="config.yaml"):
        config.get_config()
