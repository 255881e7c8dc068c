"""Tests for layered YAML settings."""

from pathlib import Path

import pytest
import yaml

from market_eod.config import (
    ApiSettings,
    Settings,
    _deep_merge,
    _resolve_env,
    get_settings,
    load_settings,
)
from market_eod.data.exceptions import MissingRequiredFieldError
from market_eod.models.client import ClientSyncConfig
from market_eod.models.eod import EodQuery, EodRequest


class TestLoadSettings:
    def test_packaged_defaults(self) -> None:
        s = get_settings()
        assert s.api.eod_path == "/eod/"
        assert s.api.max_limit == 1000
        assert s.api.max_symbols == 100
        assert s.api.access_key == "${MARKETSTACK_ACCESS_KEY}"
        assert s.client.is_free_tier is False

    def test_cached_singleton(self) -> None:
        assert get_settings() is get_settings()

    def test_user_override_merges(self, user_config: Path) -> None:
        user_config.write_text(yaml.safe_dump({"client": {"is_free_tier": True}, "api": {"max_limit": 500}}))
        s = load_settings(_force_reload=True)
        assert s.client.is_free_tier is True
        assert s.api.max_limit == 500
        assert s.api.eod_path == "/eod/"

    def test_explicit_user_path(self, tmp_path: Path) -> None:
        path = tmp_path / "other.yaml"
        path.write_text("api:\n  eod_path: /v2/eod/\n")
        assert load_settings(user_config_path=path, _force_reload=True).api.eod_path == "/v2/eod/"

    def test_empty_user_file(self, user_config: Path) -> None:
        user_config.write_text("")
        assert load_settings(_force_reload=True).api.eod_path == "/eod/"


class TestAccessKey:
    def test_literal(self) -> None:
        assert ApiSettings(access_key="abc123").resolved_access_key() == "abc123"

    def test_braced_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MY_KEY", "from-env")
        assert ApiSettings(access_key="${MY_KEY}").resolved_access_key() == "from-env"

    def test_bare_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MY_KEY", "from-env")
        assert _resolve_env("$MY_KEY") == "from-env"

    def test_unset_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("MY_KEY", raising=False)
        with pytest.raises(MissingRequiredFieldError, match="access_key"):
            ApiSettings(access_key="${MY_KEY}").resolved_access_key()

    def test_no_key(self) -> None:
        with pytest.raises(MissingRequiredFieldError):
            ApiSettings().resolved_access_key()


class TestSettingsWiring:
    def test_client_sync_from_settings(self, user_config: Path) -> None:
        assert ClientSyncConfig.from_settings().is_free_tier is False
        user_config.write_text("client:\n  is_free_tier: true\n")
        load_settings(_force_reload=True)
        assert ClientSyncConfig.from_settings().is_free_tier is True

    def test_client_sync_from_explicit_settings(self) -> None:
        s = Settings(client={"is_free_tier": True})
        assert ClientSyncConfig.from_settings(s).is_free_tier is True

    def test_request_prefix_from_settings(self, user_config: Path) -> None:
        user_config.write_text("api:\n  eod_path: /v1/eod\n")
        load_settings(_force_reload=True)
        request = EodRequest(query=EodQuery(access_key="k", symbols=("AAPL",)))
        assert request.path == "/v1/eod/latest"


class TestDeepMerge:
    def test_nested(self) -> None:
        base = {"a": {"x": 1, "y": 2}, "b": 3}
        merged = _deep_merge(base, {"a": {"y": 20}})
        assert merged == {"a": {"x": 1, "y": 20}, "b": 3}
        assert base["a"]["y"] == 2
