# pyright: reportUnknownMemberType=false, reportUnknownVariableType=false, reportUnknownParameterType=false, reportUnknownArgumentType=false
"""Thin typed wrapper around semantic_version for evaluating ranges in the npm dialect.

Used to check a translation against the source dialect: a version accepted by
the npm range should be accepted by the translated constraint and vice versa.

Note: semantic_version has no type stubs, so Pyright unknown-type checks are
disabled at file level for this wrapper module.
"""

from semantic_version import NpmSpec, Version  # type: ignore[import-untyped]

from assetver.converter.exceptions import AssetverError


class SemVerError(AssetverError):
    """Raised for semver parse failures."""


def parse_version(version_str: str) -> Version:
    """Parse a version string into a semantic_version.Version.

    Strips a leading 'v' prefix if present (common in git tags like v1.2.3).

    Raises:
        SemVerError: If the version string is not valid semver.
    """
    cleaned = version_str.removeprefix("v")
    try:
        return Version(cleaned)
    except ValueError as exc:
        msg = f"Invalid semver version: {version_str!r}"
        raise SemVerError(msg) from exc


def parse_npm_range(range_str: str) -> NpmSpec:
    """Parse an npm range expression (``^1.2.3``, ``1.x || >=2.5.0``, ``1.2.3 - 2.3.4``).

    Raises:
        SemVerError: If the range is not valid in the npm dialect.
    """
    try:
        return NpmSpec(range_str)
    except ValueError as exc:
        msg = f"Invalid npm range: {range_str!r}"
        raise SemVerError(msg) from exc


def npm_range_matches(range_str: str, version_str: str) -> bool:
    """Check whether a version satisfies an npm range."""
    result: bool = parse_npm_range(range_str).match(parse_version(version_str))
    return result
