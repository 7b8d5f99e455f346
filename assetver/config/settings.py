"""Settings for the assetver CLI.

Reads and writes ``~/.assetver/config`` using a dotenv-style format
(``KEY=VALUE``, ``#`` comments, blank lines allowed).

Resolution order: environment variables > config file > defaults.
"""

import logging
import os
from enum import StrEnum, unique
from pathlib import Path
from typing import NamedTuple

from assetver.assets.vcs_hosts import VcsHostRegistry

logger = logging.getLogger(__name__)

# ── Types ───────────────────────────────────────────────────────────


@unique
class SettingSource(StrEnum):
    ENV = "env"
    FILE = "file"
    DEFAULT = "default"


class SettingEntry(NamedTuple):
    key: str
    cli_key: str
    value: str
    source: SettingSource


# ── Paths ───────────────────────────────────────────────────────────

CONFIG_DIR = Path.home() / ".assetver"
CONFIG_PATH = CONFIG_DIR / "config"

# ── Setting keys ───────────────────────────────────────────────────

# Map from internal key to setting key (env var name and file key share the same names)
_SETTING_KEYS: dict[str, str] = {
    "asset_type": "ASSETVER_ASSET_TYPE",
    "github_domains": "ASSETVER_GITHUB_DOMAINS",
    "gitlab_domains": "ASSETVER_GITLAB_DOMAINS",
    "log_level": "ASSETVER_LOG_LEVEL",
}

_DEFAULTS: dict[str, str] = {
    "asset_type": "npm",
    "github_domains": "github.com",
    "gitlab_domains": "gitlab.com",
    "log_level": "WARNING",
}

# Map from CLI flag names (kebab-case) to internal keys
_KEY_ALIASES: dict[str, str] = {
    "asset-type": "asset_type",
    "github-domains": "github_domains",
    "gitlab-domains": "gitlab_domains",
    "log-level": "log_level",
}

VALID_KEYS: list[str] = list(_KEY_ALIASES.keys())


def resolve_key(cli_key: str) -> str | None:
    """Resolve a CLI flag name to an internal setting key."""
    return _KEY_ALIASES.get(cli_key)


# ── Dotenv parser / serializer ─────────────────────────────────────


def _parse_dotenv(content: str) -> dict[str, str]:
    result: dict[str, str] = {}
    for line in content.splitlines():
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("#"):
            continue
        key, separator, value = trimmed.partition("=")
        if not separator:
            continue
        result[key.strip()] = value.strip()
    return result


def _serialize_dotenv(entries: dict[str, str]) -> str:
    return "".join(f"{key}={value}\n" for key, value in entries.items())


# ── File I/O ───────────────────────────────────────────────────────


def _read_config_file() -> dict[str, str]:
    if not CONFIG_PATH.is_file():
        return {}
    try:
        return _parse_dotenv(CONFIG_PATH.read_text(encoding="utf-8"))
    except OSError as exc:
        logger.warning("Could not read %s: %s", CONFIG_PATH, exc)
        return {}


def _write_config_file(entries: dict[str, str]) -> None:
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    CONFIG_PATH.write_text(_serialize_dotenv(entries), encoding="utf-8")


# ── Public API ─────────────────────────────────────────────────────


def load_settings() -> dict[str, str]:
    """Load all settings with resolution: env > file > defaults.

    Returns:
        A dict with keys: asset_type, github_domains, gitlab_domains, log_level.
    """
    file_entries = _read_config_file()
    merged = dict(_DEFAULTS)

    for internal_key, file_key in _SETTING_KEYS.items():
        if file_key in file_entries:
            merged[internal_key] = file_entries[file_key]

    for internal_key, env_name in _SETTING_KEYS.items():
        env_val = os.environ.get(env_name)
        if env_val is not None:
            merged[internal_key] = env_val

    return merged


def _cli_key_for(internal_key: str) -> str:
    return next(cli_k for cli_k, int_k in _KEY_ALIASES.items() if int_k == internal_key)


def get_setting_value(key: str) -> SettingEntry:
    """Get a single setting value with its source.

    Args:
        key: Internal key (e.g. "asset_type", "github_domains").
    """
    cli_key = _cli_key_for(key)
    setting_key = _SETTING_KEYS[key]

    env_val = os.environ.get(setting_key)
    if env_val is not None:
        return SettingEntry(key=key, cli_key=cli_key, value=env_val, source=SettingSource.ENV)

    file_entries = _read_config_file()
    if setting_key in file_entries:
        return SettingEntry(key=key, cli_key=cli_key, value=file_entries[setting_key], source=SettingSource.FILE)

    return SettingEntry(key=key, cli_key=cli_key, value=_DEFAULTS[key], source=SettingSource.DEFAULT)


def set_setting_value(key: str, value: str) -> None:
    """Set a setting value in the config file."""
    file_entries = _read_config_file()
    file_entries[_SETTING_KEYS[key]] = value
    _write_config_file(file_entries)


def list_settings() -> list[SettingEntry]:
    """List all setting values with their sources."""
    return [get_setting_value(internal_key) for internal_key in _KEY_ALIASES.values()]


def split_domains(value: str) -> tuple[str, ...]:
    """``"github.com, ghe.example.com"`` -> ``("github.com", "ghe.example.com")``."""
    return tuple(domain.strip().lower() for domain in value.split(",") if domain.strip())


def build_vcs_hosts(settings: dict[str, str] | None = None) -> VcsHostRegistry:
    """Build the VCS host matchers from the configured GitHub and GitLab domains."""
    if settings is None:
        settings = load_settings()
    return VcsHostRegistry(
        github_domains=split_domains(settings["github_domains"]),
        gitlab_domains=split_domains(settings["gitlab_domains"]),
    )
