"""Tests for assetver.config.settings — load, get, set, resolve_key and VCS host building."""

from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from assetver.assets.vcs_hosts import VcsHostKind
from assetver.config.settings import (
    SettingSource,
    build_vcs_hosts,
    get_setting_value,
    list_settings,
    load_settings,
    resolve_key,
    set_setting_value,
    split_domains,
)

_ENV_NAMES = ("ASSETVER_ASSET_TYPE", "ASSETVER_GITHUB_DOMAINS", "ASSETVER_GITLAB_DOMAINS", "ASSETVER_LOG_LEVEL")


class TestSettings:
    """Tests for the settings module public API."""

    @pytest.fixture(autouse=True)
    def _isolate_settings(self, tmp_path: Path, mocker: MockerFixture, monkeypatch: pytest.MonkeyPatch) -> None:
        """Redirect settings I/O to a temporary directory and clear the environment."""
        config_dir = tmp_path / ".assetver"
        config_dir.mkdir()

        mocker.patch("assetver.config.settings.CONFIG_DIR", config_dir)
        mocker.patch("assetver.config.settings.CONFIG_PATH", config_dir / "config")
        for env_name in _ENV_NAMES:
            monkeypatch.delenv(env_name, raising=False)

    # ── resolve_key ──────────────────────────────────────────────

    @pytest.mark.parametrize(
        ("cli_key", "expected"),
        [
            ("asset-type", "asset_type"),
            ("github-domains", "github_domains"),
            ("gitlab-domains", "gitlab_domains"),
            ("log-level", "log_level"),
        ],
    )
    def test_resolve_key_valid(self, cli_key: str, expected: str) -> None:
        assert resolve_key(cli_key) == expected

    def test_resolve_key_unknown_returns_none(self) -> None:
        assert resolve_key("nonexistent-key") is None

    # ── load / get / set ─────────────────────────────────────────

    def test_load_settings_returns_defaults_when_no_file(self) -> None:
        settings = load_settings()
        assert settings == {
            "asset_type": "npm",
            "github_domains": "github.com",
            "gitlab_domains": "gitlab.com",
            "log_level": "WARNING",
        }

    def test_load_settings_reads_file(self, tmp_path: Path) -> None:
        """Values in the config file override defaults; comments and malformed lines are ignored."""
        config_path = tmp_path / ".assetver" / "config"
        config_path.write_text("# comment\nASSETVER_ASSET_TYPE=bower\n\nnot a pair\n", encoding="utf-8")

        settings = load_settings()
        assert settings["asset_type"] == "bower"
        assert settings["log_level"] == "WARNING"

    def test_load_settings_env_overrides_file(self, tmp_path: Path, mocker: MockerFixture) -> None:
        config_path = tmp_path / ".assetver" / "config"
        config_path.write_text("ASSETVER_LOG_LEVEL=INFO\n", encoding="utf-8")
        mocker.patch.dict("os.environ", {"ASSETVER_LOG_LEVEL": "DEBUG"})

        assert load_settings()["log_level"] == "DEBUG"
        assert get_setting_value("log_level").source == SettingSource.ENV

    def test_set_then_get(self) -> None:
        set_setting_value("asset_type", "bower")

        entry = get_setting_value("asset_type")
        assert entry.value == "bower"
        assert entry.cli_key == "asset-type"
        assert entry.source == SettingSource.FILE

    def test_set_preserves_other_keys(self, tmp_path: Path) -> None:
        set_setting_value("asset_type", "bower")
        set_setting_value("github_domains", "github.com,ghe.example.com")

        content = (tmp_path / ".assetver" / "config").read_text(encoding="utf-8")
        assert "ASSETVER_ASSET_TYPE=bower\n" in content
        assert "ASSETVER_GITHUB_DOMAINS=github.com,ghe.example.com\n" in content

    def test_get_default(self) -> None:
        entry = get_setting_value("gitlab_domains")
        assert entry.value == "gitlab.com"
        assert entry.source == SettingSource.DEFAULT

    def test_list_settings(self) -> None:
        entries = list_settings()
        assert [entry.cli_key for entry in entries] == ["asset-type", "github-domains", "gitlab-domains", "log-level"]

    # ── VCS hosts ────────────────────────────────────────────────

    def test_build_vcs_hosts_from_settings(self) -> None:
        set_setting_value("github_domains", "github.com, GHE.example.com")

        registry = build_vcs_hosts()
        assert registry.github_domains == ("github.com", "ghe.example.com")
        assert registry.find_host("https://ghe.example.com/owner/repo") == VcsHostKind.GITHUB

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("github.com", ("github.com",)), (" a.com , B.com ,", ("a.com", "b.com")), ("", ())],
    )
    def test_split_domains(self, value: str, expected: tuple[str, ...]) -> None:
        assert split_domains(value) == expected
