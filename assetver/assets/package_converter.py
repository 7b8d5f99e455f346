"""Conversion of asset manifests (``package.json``, ``bower.json``) into package metadata.

Dependency maps are rewritten entry by entry: each raw specifier is resolved
(URLs, aliases, SHAs, branches), its version translated into the target
constraint grammar, and its name moved into the vendor namespace.
"""

import logging
import re
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from assetver.assets.asset_type import AssetType, AssetTypeName
from assetver.assets.dependency import SideRepository, resolve_dependency
from assetver.assets.vcs_hosts import DEFAULT_VCS_HOSTS, VcsHostRegistry

logger = logging.getLogger(__name__)

DEPENDENCIES_KEY = "dependencies"
REQUIRE_KEY = "require"
EXTRA_KEY = "extra"

# Manifest keys copied as is.
_COPIED_KEYS: tuple[str, ...] = ("description", "keywords", "time")
# Bower keeps these as written; npm rewrites them.
_BOWER_RAW_KEYS: tuple[str, ...] = ("license", "bin")

# Download types a ``dist`` entry may carry; ``tarball`` is mapped to ``tar``.
DIST_DOWNLOADER_TYPES: frozenset[str] = frozenset(
    {"git", "svn", "fossil", "hg", "perforce", "zip", "rar", "tar", "gzip", "xz", "phar", "file", "path"}
)
_DIST_CHECKSUM_KEY = "shasum"
_DIST_TARBALL_KEY = "tarball"

# Manifest keys moved under ``extra``, as ``<asset>-asset-<kebab-key>``.
_EXTRA_KEYS: MappingProxyType[AssetTypeName, tuple[str, ...]] = MappingProxyType(
    {
        AssetTypeName.NPM: (
            "bugs",
            "files",
            "main",
            "man",
            "directories",
            "repository",
            "scripts",
            "config",
            "bundledDependencies",
            "optionalDependencies",
            "engines",
            "engineStrict",
            "os",
            "cpu",
            "preferGlobal",
            "private",
            "publishConfig",
        ),
        AssetTypeName.BOWER: ("main", "ignore", "private"),
    }
)

_CAMEL_BOUNDARY_PATTERN = re.compile(r"(?<!^)(?=[A-Z])")


class DependencyConversion(BaseModel):
    model_config = ConfigDict(frozen=True)

    require: dict[str, str] = Field(default_factory=dict)
    side_repositories: list[SideRepository] = Field(default_factory=list)


class ManifestConversion(BaseModel):
    """A converted manifest: the package metadata and the repositories its dependencies need."""

    model_config = ConfigDict(frozen=True)

    package: dict[str, Any]
    repositories: list[SideRepository] = Field(default_factory=list)

    def to_config(self) -> dict[str, Any]:
        config = dict(self.package)
        if self.repositories:
            config["repositories"] = [repository.to_config() for repository in self.repositories]
        return config


def convert_dependencies(
    asset_type: AssetType,
    dependencies: Mapping[str, Any],
    package_name: str | None = None,
    vcs_hosts: VcsHostRegistry = DEFAULT_VCS_HOSTS,
) -> DependencyConversion:
    """Convert a manifest dependency map into a require map.

    Args:
        asset_type: The asset type of the manifest.
        dependencies: Raw dependency map, e.g. ``{"lib1": "^1.2.0"}``.
        package_name: Full name of the declaring package, used to name file packages.
        vcs_hosts: Matchers deciding which URLs are VCS repositories.

    Returns:
        The require map, e.g. ``{"npm-asset/lib1": ">=1.2.0,<2.0.0"}``, and the
        side repositories collected from URL dependencies.
    """
    require: dict[str, str] = {}
    side_repositories: list[SideRepository] = []

    for name, raw_version in dependencies.items():
        if not isinstance(raw_version, str):
            logger.warning("Skipping dependency '%s': version %r is not a string", name, raw_version)
            continue

        resolved = resolve_dependency(asset_type, name, raw_version, package_name=package_name, vcs_hosts=vcs_hosts)
        side_repositories.extend(resolved.side_repositories)
        version = asset_type.convert_range(resolved.version)

        # A version that restates the dependency name is a self reference, not a constraint.
        if version.startswith(resolved.name):
            logger.debug("Dropping dependency '%s' with version '%s'", resolved.name, version)
            continue
        require[f"{asset_type.vendor_name}/{resolved.name}"] = version

    return DependencyConversion(require=require, side_repositories=side_repositories)


def convert_manifest(
    asset_type: AssetType,
    manifest: Mapping[str, Any],
    vcs_hosts: VcsHostRegistry = DEFAULT_VCS_HOSTS,
) -> ManifestConversion:
    """Convert a whole asset manifest into package metadata.

    Args:
        asset_type: The asset type the manifest is written for.
        manifest: The decoded manifest.
        vcs_hosts: Matchers deciding which URLs are VCS repositories.

    Returns:
        The converted package with its side repositories.
    """
    package: dict[str, Any] = {}

    if isinstance(manifest.get("name"), str):
        package["name"] = asset_type.format_composer_name(asset_type.convert_name(manifest["name"]))
    package["type"] = asset_type.composer_type
    if "version" in manifest:
        package["version"] = asset_type.convert_version(manifest["version"])

    for key in _COPIED_KEYS:
        if key in manifest:
            package[key] = manifest[key]

    match asset_type.name:
        case AssetTypeName.NPM:
            package.update(_convert_npm_fields(manifest))
        case AssetTypeName.BOWER:
            package.update({key: manifest[key] for key in _BOWER_RAW_KEYS if key in manifest})

    repositories: list[SideRepository] = []
    dependencies = manifest.get(DEPENDENCIES_KEY)
    if isinstance(dependencies, Mapping):
        conversion = convert_dependencies(asset_type, dependencies, package_name=package.get("name"), vcs_hosts=vcs_hosts)
        package[REQUIRE_KEY] = conversion.require
        repositories = conversion.side_repositories

    extra = {
        extra_key_name(asset_type, key): manifest[key] for key in _EXTRA_KEYS[asset_type.name] if key in manifest
    }
    if extra:
        package[EXTRA_KEY] = extra

    return ManifestConversion(package=package, repositories=repositories)


def _convert_npm_fields(manifest: Mapping[str, Any]) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    if "homepage" in manifest:
        fields["homepage"] = manifest["homepage"]
    if "license" in manifest:
        fields["license"] = convert_licenses(manifest["license"])
    authors = convert_authors(manifest.get("author"), manifest.get("contributors"))
    if authors:
        fields["authors"] = authors
    if "bin" in manifest:
        fields["bin"] = _as_list(manifest["bin"])
    if "dist" in manifest:
        fields["dist"] = convert_dist(manifest["dist"])
    return fields


def _as_list(value: Any) -> Any:
    # Single executables become a one-item list; name -> path maps stay maps.
    if value is None:
        return []
    if isinstance(value, (list, Mapping)):
        return value
    return [value]


def convert_dist(dist: Any) -> Any:
    """Convert an npm ``dist`` section into a download descriptor.

    ``{"tarball": "http://host/lib.tgz", "shasum": "abc"}`` becomes
    ``{"type": "tar", "url": "https://host/lib.tgz", "shasum": "abc"}``. Plain
    ``http`` URLs are upgraded to ``https``; entries of unknown types and
    non-string values are dropped. Anything other than a mapping is returned as is.
    """
    if not isinstance(dist, Mapping):
        return dist

    result: dict[str, str] = {}
    for dist_type, url in dist.items():
        if not isinstance(url, str):
            continue
        if url.startswith("http://"):
            url = "https://" + url.removeprefix("http://")

        if dist_type == _DIST_CHECKSUM_KEY:
            result[dist_type] = url
        elif dist_type == _DIST_TARBALL_KEY:
            result["type"] = "tar"
            result["url"] = url
        elif dist_type in DIST_DOWNLOADER_TYPES:
            result["type"] = dist_type
            result["url"] = url
    return result


def extra_key_name(asset_type: AssetType, key: str) -> str:
    """``bundledDependencies`` -> ``npm-asset-bundled-dependencies``."""
    return f"{asset_type.vendor_name}-{_CAMEL_BOUNDARY_PATTERN.sub('-', key).lower()}"


def convert_licenses(licenses: Any) -> Any:
    """Flatten a list of license objects (``{"type": "MIT"}``) into license names."""
    if not isinstance(licenses, list):
        return licenses

    result: list[Any] = []
    for license_entry in licenses:
        if isinstance(license_entry, Mapping):
            name = license_entry.get("type") or license_entry.get("name")
            if name:
                result.append(name)
        else:
            result.append(license_entry)
    return result


def convert_authors(author: Any, contributors: Any) -> list[Any]:
    """Merge ``author`` and ``contributors`` into one authors list."""
    authors: list[Any] = [author] if author is not None else []
    if isinstance(contributors, list):
        authors.extend(contributors)
    return authors
