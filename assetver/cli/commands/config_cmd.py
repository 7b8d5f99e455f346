"""Config commands for managing assetver settings.

Provides set, get, and list operations for the settings stored
in ``~/.assetver/config``.
"""

import logging

from rich import box
from rich.markup import escape
from rich.table import Table

from assetver.assets.asset_type import AssetTypeName
from assetver.cli._console import get_console
from assetver.config.settings import (
    VALID_KEYS,
    SettingSource,
    get_setting_value,
    list_settings,
    resolve_key,
    set_setting_value,
    split_domains,
)

LOG_LEVELS: tuple[str, ...] = tuple(
    logging.getLevelName(level) for level in (logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL)
)


class InvalidSettingValue(ValueError):
    def __init__(self, message: str, accepted: str) -> None:
        self.accepted = accepted
        super().__init__(message)


def _source_label(source: SettingSource) -> str:
    match source:
        case SettingSource.ENV:
            return "env"
        case SettingSource.FILE:
            return "file"
        case SettingSource.DEFAULT:
            return "default"


def normalize_setting_value(internal_key: str, value: str) -> str:
    """Check a value for a setting and return the form to store.

    Log levels are upper-cased and domain lists are lower-cased and re-joined
    without blanks, so the stored file reads the same however the value was typed.

    Raises:
        InvalidSettingValue: If the value is not acceptable for the setting.
    """
    match internal_key:
        case "asset_type":
            if value not in set(AssetTypeName):
                msg = f"Unknown asset type: '{value}'"
                raise InvalidSettingValue(msg, accepted=", ".join(AssetTypeName))
            return value
        case "log_level":
            level = value.strip().upper()
            if level not in LOG_LEVELS:
                msg = f"Unknown log level: '{value}'"
                raise InvalidSettingValue(msg, accepted=", ".join(LOG_LEVELS))
            return level
        case "github_domains" | "gitlab_domains":
            domains = split_domains(value)
            if not domains:
                msg = f"Empty domain list: '{value}'"
                raise InvalidSettingValue(msg, accepted="comma-separated host names, e.g. github.com,ghe.example.com")
            return ",".join(domains)
        case _:
            return value


def do_config_set(key: str, value: str) -> None:
    """Set a setting value.

    Args:
        key: The CLI key name (e.g. "asset-type", "github-domains").
        value: The value to store.
    """
    console = get_console()

    internal_key = resolve_key(key)
    if internal_key is None:
        console.print(f"[red]Unknown config key: '{escape(key)}'[/red]")
        console.print(f"[dim]Valid keys: {', '.join(VALID_KEYS)}[/dim]")
        return

    try:
        stored_value = normalize_setting_value(internal_key, value)
    except InvalidSettingValue as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        console.print(f"[dim]Accepted: {escape(exc.accepted)}[/dim]")
        return

    set_setting_value(internal_key, stored_value)
    console.print(f"[green]Set '{escape(key)}' = '{escape(stored_value)}'[/green]")


def do_config_get(key: str) -> None:
    """Get a setting value and display it with its source.

    Args:
        key: The CLI key name (e.g. "asset-type", "log-level").
    """
    console = get_console()

    internal_key = resolve_key(key)
    if internal_key is None:
        console.print(f"[red]Unknown config key: '{escape(key)}'[/red]")
        console.print(f"[dim]Valid keys: {', '.join(VALID_KEYS)}[/dim]")
        return

    entry = get_setting_value(internal_key)
    display_value = entry.value or "(empty)"
    console.print(
        f"[bold]{escape(key)}[/bold] = {escape(display_value)}  [dim](source: {_source_label(entry.source)})[/dim]"
    )


def do_config_list() -> None:
    """List all setting values with their sources."""
    console = get_console()

    table = Table(title="assetver Configuration", box=box.ROUNDED, show_header=True)
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    table.add_column("Source", style="dim")

    for entry in list_settings():
        display_value = entry.value or "(empty)"
        table.add_row(escape(entry.cli_key), escape(display_value), _source_label(entry.source))

    console.print(table)
