"""assetver CLI.

Converts npm/bower versions, ranges and manifests into the Composer constraint
grammar, checks translations against the npm semantics, and manages settings.
"""

from pathlib import Path
from typing import Annotated

import typer

from assetver.cli._console import setup_logging
from assetver.cli.commands.check_cmd import do_check
from assetver.cli.commands.config_cmd import do_config_get, do_config_list, do_config_set
from assetver.cli.commands.convert_cmd import (
    do_convert_manifest,
    do_convert_name,
    do_convert_range,
    do_convert_version,
)
from assetver.config.settings import load_settings

app = typer.Typer(
    name="assetver",
    no_args_is_help=True,
    help="assetver CLI — translate npm/bower versions and manifests for Composer.",
)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log classification decisions (DEBUG level)"),
    ] = False,
) -> None:
    """Configure logging before any command runs."""
    setup_logging("DEBUG" if verbose else load_settings()["log_level"])


# ── Config subcommand group ──────────────────────────────────────────
config_app = typer.Typer(
    name="config",
    no_args_is_help=True,
    help="Manage assetver configuration.",
)
app.add_typer(config_app, name="config")


@config_app.command("set", help="Set a configuration value")
def config_set_cmd(
    key: Annotated[
        str,
        typer.Argument(help="Configuration key (e.g. 'asset-type', 'github-domains', 'log-level')"),
    ],
    value: Annotated[
        str,
        typer.Argument(help="Value to set"),
    ],
) -> None:
    do_config_set(key=key, value=value)


@config_app.command("get", help="Get a configuration value")
def config_get_cmd(
    key: Annotated[
        str,
        typer.Argument(help="Configuration key (e.g. 'asset-type', 'github-domains', 'log-level')"),
    ],
) -> None:
    """Get a setting value and its source."""
    do_config_get(key=key)


@config_app.command("list", help="List all configuration values")
def config_list_cmd() -> None:
    do_config_list()


# ── Top-level commands ───────────────────────────────────────────────


@app.command("convert-version", help="Convert a single npm/bower version")
def convert_version_cmd(
    version: Annotated[
        str,
        typer.Argument(help="Version to convert (e.g. '1.2.3-beta', 'v2.0.0rc1')"),
    ],
) -> None:
    do_convert_version(version=version)


@app.command("convert-range", help="Translate an npm/bower range expression")
def convert_range_cmd(
    range_expr: Annotated[
        str,
        typer.Argument(metavar="RANGE", help="Range to translate (e.g. '^1.2.3', '1.0 - 2.x || >=3')"),
    ],
) -> None:
    do_convert_range(range_expr=range_expr)


@app.command("convert-name", help="Map a registry package name to its vendor-namespaced name, or back")
def convert_name_cmd(
    name: Annotated[
        str,
        typer.Argument(help="Package name (e.g. '@scope/pkg', or 'npm-asset/scope--pkg' with --reverse)"),
    ],
    asset_type: Annotated[
        str | None,
        typer.Option("--asset-type", "-t", help="Asset type: 'npm' or 'bower' (defaults to the configured one)"),
    ] = None,
    reverse: Annotated[
        bool,
        typer.Option("--reverse", "-r", help="Map a vendor-namespaced name back to the registry name"),
    ] = False,
) -> None:
    do_convert_name(name=name, asset_type_name=asset_type, reverse=reverse)


@app.command("convert-manifest", help="Convert a package.json or bower.json into package metadata")
def convert_manifest_cmd(
    path: Annotated[
        Path,
        typer.Argument(help="Path to the manifest file, or to a directory holding package.json or bower.json"),
    ],
    asset_type: Annotated[
        str | None,
        typer.Option("--asset-type", "-t", help="Asset type: 'npm' or 'bower' (defaults to the configured one)"),
    ] = None,
) -> None:
    """Convert a manifest and print it as JSON."""
    do_convert_manifest(path=path, asset_type_name=asset_type)


@app.command("check", help="Compare an npm range with its translation over a set of versions")
def check_cmd(
    range_expr: Annotated[
        str,
        typer.Argument(metavar="RANGE", help="npm range to translate and evaluate"),
    ],
    versions: Annotated[
        list[str],
        typer.Argument(help="Versions to evaluate (e.g. 1.2.3 2.0.0)"),
    ],
) -> None:
    do_check(range_expr=range_expr, versions=versions)
