"""Tests for configuration loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from restgate.config.loader import _deep_merge, load_config
from restgate.config.schema import (
    BackendConfig,
    GatewayConfig,
    LoggingConfig,
    ServerConfig,
    SqlConfig,
)
from restgate.core.errors import ConfigError

_ENV_VARS = (
    "SUPABASE_URL",
    "SUPABASE_SERVICE_ROLE_KEY",
    "PORT",
    "HOST_URL",
    "RESTGATE_CONFIG",
    "ALT_KEY",
)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """No ambient config files or deployment variables leak into these tests."""
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)


# ─── Schema Defaults ──────────────────────────────────────────


class TestSchemaDefaults:
    def test_gateway_config_all_defaults(self):
        cfg = GatewayConfig()
        assert cfg.backend.url == "https://munene.shop"
        assert cfg.backend.service_role_key is None
        assert cfg.backend.service_role_key_env == "SUPABASE_SERVICE_ROLE_KEY"
        assert cfg.backend.timeout == 30.0
        assert cfg.sql.default_limit == 100
        assert cfg.server.port == 3001
        assert cfg.logging.level == "INFO"

    def test_sql_attempt_defaults(self):
        cfg = SqlConfig()
        assert [(a.procedure, a.parameter) for a in cfg.attempts] == [
            ("exec_sql", "sql_query"),
            ("execute_sql", "sql_statement"),
        ]
        assert "exec-sql" in cfg.setup_instructions

    def test_server_base_url(self):
        assert ServerConfig().base_url == "http://localhost:3001"
        assert ServerConfig(port=8080).base_url == "http://localhost:8080"
        assert ServerConfig(public_url="https://gw.example/").base_url == "https://gw.example"

    def test_logging_defaults(self):
        cfg = LoggingConfig()
        assert cfg.file == ""
        assert cfg.structured is False


class TestSchemaValidation:
    def test_frozen(self):
        cfg = GatewayConfig()
        with pytest.raises(ValidationError):
            cfg.backend.url = "https://elsewhere"  # type: ignore[misc]

    def test_default_limit_must_be_positive(self):
        with pytest.raises(ValidationError):
            SqlConfig(default_limit=0)

    def test_port_must_be_int(self):
        with pytest.raises(ValidationError):
            ServerConfig(port="not-a-port")  # type: ignore[arg-type]


# ─── Merge ────────────────────────────────────────────────────


class TestDeepMerge:
    def test_nested_override(self):
        base = {"backend": {"url": "a", "timeout": 5}}
        merged = _deep_merge(base, {"backend": {"url": "b"}})
        assert merged == {"backend": {"url": "b", "timeout": 5}}
        assert base["backend"]["url"] == "a"


# ─── Loading ──────────────────────────────────────────────────


class TestLoadConfig:
    def test_missing_credential_is_fatal(self):
        with pytest.raises(ConfigError, match="SUPABASE_SERVICE_ROLE_KEY"):
            load_config()

    def test_credential_optional_when_not_required(self):
        cfg = load_config(require_credential=False)
        assert cfg.backend.service_role_key is None

    def test_credential_from_env(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "from-env")
        cfg = load_config()
        assert cfg.backend.service_role_key == "from-env"

    def test_custom_key_env(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("ALT_KEY", "alt")
        cfg = load_config(overrides={"backend": {"service_role_key_env": "ALT_KEY"}})
        assert cfg.backend.service_role_key == "alt"

    def test_explicit_key_wins_over_env(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "from-env")
        cfg = load_config(overrides={"backend": {"service_role_key": "explicit"}})
        assert cfg.backend.service_role_key == "explicit"

    def test_deployment_env_vars(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "k")
        monkeypatch.setenv("SUPABASE_URL", "https://db.internal")
        monkeypatch.setenv("PORT", "9000")
        monkeypatch.setenv("HOST_URL", "https://gateway.example")
        cfg = load_config()
        assert cfg.backend.url == "https://db.internal"
        assert cfg.server.port == 9000
        assert cfg.server.base_url == "https://gateway.example"

    def test_toml_file(self, tmp_path: Path):
        path = tmp_path / "custom.toml"
        path.write_text(
            '[backend]\nurl = "https://toml.example"\nservice_role_key = "toml-key"\n'
            "[sql]\ndefault_limit = 25\n"
        )
        cfg = load_config(path=path)
        assert cfg.backend.url == "https://toml.example"
        assert cfg.sql.default_limit == 25

    def test_project_file_discovered(self, tmp_path: Path):
        (tmp_path / "restgate.toml").write_text(
            '[backend]\nservice_role_key = "project-key"\n'
        )
        assert load_config().backend.service_role_key == "project-key"

    def test_env_overrides_file(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
        path = tmp_path / "custom.toml"
        path.write_text('[backend]\nurl = "https://toml.example"\nservice_role_key = "k"\n')
        monkeypatch.setenv("SUPABASE_URL", "https://env.example")
        assert load_config(path=path).backend.url == "https://env.example"

    def test_missing_explicit_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(path=tmp_path / "nope.toml")

    def test_restgate_config_env_missing_file(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("RESTGATE_CONFIG", "/definitely/not/here.toml")
        with pytest.raises(ConfigError, match="RESTGATE_CONFIG"):
            load_config()

    def test_invalid_toml(self, tmp_path: Path):
        path = tmp_path / "broken.toml"
        path.write_text("[backend\nurl=")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(path=path)

    def test_invalid_values(self):
        with pytest.raises(ConfigError, match="validation failed"):
            load_config(overrides={"sql": {"default_limit": -1}}, require_credential=False)

    def test_loaded_config_is_backend_config(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "k")
        assert isinstance(load_config().backend, BackendConfig)
