"""Conversion commands: single versions, range expressions and whole manifests."""

import json
from pathlib import Path
from typing import Any

import typer
from rich.markup import escape

from assetver.assets.asset_type import create_asset_type
from assetver.assets.package_converter import convert_manifest
from assetver.cli._console import get_console
from assetver.config.settings import build_vcs_hosts, load_settings
from assetver.converter.exceptions import AssetverError, ManifestError
from assetver.converter.range import convert_range
from assetver.converter.version import convert_version


def do_convert_version(version: str) -> None:
    """Print a single version converted into the target grammar."""
    console = get_console()
    console.print(escape(convert_version(version)))


def do_convert_range(range_expr: str) -> None:
    """Print a range expression translated into the target constraint grammar."""
    console = get_console()
    console.print(escape(convert_range(range_expr)))


def do_convert_name(name: str, asset_type_name: str | None = None, reverse: bool = False) -> None:
    """Print the package name a registry name maps to, or the registry name behind a package name.

    Args:
        name: ``@scope/pkg`` or, with ``reverse``, ``npm-asset/scope--pkg``.
        asset_type_name: "npm" or "bower". Defaults to the configured asset type.
        reverse: Map a package name back to its registry name.
    """
    console = get_console()

    try:
        asset_type = create_asset_type(asset_type_name or load_settings()["asset_type"])
    except AssetverError as exc:
        console.print(f"[red]{escape(exc.message)}[/red]")
        raise typer.Exit(code=1) from exc

    if reverse:
        console.print(escape(asset_type.source_name(name)))
    else:
        console.print(escape(asset_type.format_composer_name(asset_type.convert_name(name))))


def load_manifest(path: Path) -> dict[str, Any]:
    """Read and decode a JSON asset manifest.

    Raises:
        ManifestError: If the file cannot be read or does not hold a JSON object.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot read manifest {path}: {exc}"
        raise ManifestError(msg) from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        msg = f"Invalid JSON in {path}: {exc}"
        raise ManifestError(msg) from exc

    if not isinstance(data, dict):
        msg = f"Manifest {path} must contain a JSON object"
        raise ManifestError(msg)
    return data


def do_convert_manifest(path: Path, asset_type_name: str | None = None) -> None:
    """Convert an asset manifest and print the resulting package metadata as JSON.

    Args:
        path: Path to a package.json or bower.json file, or to the directory holding
            the manifest file of the asset type.
        asset_type_name: "npm" or "bower". Defaults to the configured asset type.
    """
    console = get_console()
    settings = load_settings()

    try:
        asset_type = create_asset_type(asset_type_name or settings["asset_type"])
        manifest = load_manifest(path / asset_type.filename if path.is_dir() else path)
    except AssetverError as exc:
        console.print(f"[red]{escape(exc.message)}[/red]")
        raise typer.Exit(code=1) from exc

    conversion = convert_manifest(asset_type, manifest, vcs_hosts=build_vcs_hosts(settings))
    console.print_json(json.dumps(conversion.to_config()))
