"""
tests.test_settings

Settings loading from env and JSON file.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic_settings import SettingsConfigDict

from hostgate.settings import Settings


def test_env_json_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(
        "HOSTGATE_IP_POLICIES",
        json.dumps({"Partner1": {"allowed_addresses": ["203.0.113.10", "oops"]}}),
    )
    monkeypatch.setenv("HOSTGATE_TOKENS", json.dumps({"abc": {"user_id": "p1", "roles": ["Partner1"]}}))
    monkeypatch.setenv("HOSTGATE_ADDITIONAL_SAME_HOST_ADDRESSES", '["192.0.2.1"]')

    settings = Settings()

    # Literals are kept verbatim; registries do the per-entry parsing.
    assert settings.ip_policies["Partner1"].allowed_addresses == ["203.0.113.10", "oops"]
    assert settings.ip_policies["Partner1"].include_same_host is False
    assert settings.tokens["abc"].roles == ["Partner1"]
    assert settings.additional_same_host_addresses == ["192.0.2.1"]


def test_tokens_hidden_from_repr() -> None:
    settings = Settings(tokens={"super-secret": {"user_id": "u"}})
    assert "super-secret" not in repr(settings)


def test_json_file_source(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("HOSTGATE_CONFIG_FILE", raising=False)
    cfg = tmp_path / "hostgate.json"
    cfg.write_text(
        json.dumps(
            {
                "env": "prod",
                "ip_policies": {"SameHost": {"include_same_host": True}},
                "tokens": {"abc": {"user_id": "p1", "roles": ["Partner1"], "allowed_addresses": []}},
            }
        )
    )

    class FileSettings(Settings):
        model_config = SettingsConfigDict(json_file=cfg)

    settings = FileSettings()

    assert settings.env == "prod"
    assert settings.ip_policies["SameHost"].include_same_host is True
    assert settings.tokens["abc"].user_id == "p1"


def test_config_file_env_var_is_read_at_load_time(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    cfg = tmp_path / "elsewhere.json"
    cfg.write_text(json.dumps({"service_name": "gate-from-file", "auth_realm": "edge"}))
    # hostgate.settings is already imported at this point.
    monkeypatch.setenv("HOSTGATE_CONFIG_FILE", str(cfg))

    settings = Settings()

    assert settings.service_name == "gate-from-file"
    assert settings.auth_realm == "edge"
