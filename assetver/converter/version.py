"""Single-version normalization: the atom-level primitive used by every other converter."""

import re

from assetver._utils.string_utils import leading_int, replace_chars
from assetver.converter.metadata import convert_version_metadata

LATEST_VERSION = "latest"
ANY_VERSION = "*"
# Marks "take the newest, prereleases included" for callers that special-case it.
LATEST_CONSTRAINT = f"default || {ANY_VERSION}"

# Stand-in for a wildcard component used as an upper bound.
WILDCARD_SENTINEL = "9999999"

_PREFIX_PATTERN = re.compile(r"^[a-z]")
_DATE_VERSION_PATTERN = re.compile(r"^\d{7,}\.")


def convert_version(version: str | None) -> str:
    """Convert one npm/bower version into the target grammar.

    A leading single lowercase letter (``v1.2.3``) is carried through untouched,
    except for ``dev-`` branch names.

    Args:
        version: The source version, e.g. ``1.2.3rc1``, ``v2.0.0-beta``, ``20170124.1``.

    Returns:
        The converted version, e.g. ``1.2.3-RC1``, ``v2.0.0-beta1``, ``20170124.001000``.
    """
    if not version:
        return ANY_VERSION
    if version == LATEST_VERSION:
        return LATEST_CONSTRAINT

    version = version.replace("–", "-")
    prefix = ""
    if _PREFIX_PATTERN.match(version) and not version.startswith("dev-"):
        prefix = version[0]
    version = version[len(prefix) :]
    version = convert_version_metadata(version)
    version = convert_date_version(version)

    return prefix + version


def convert_date_version(version: str) -> str:
    """Zero-pad the components following a date stamp: ``20160101.5.2`` -> ``20160101.005002``."""
    if _DATE_VERSION_PATTERN.match(version) is None:
        return version
    date_stamp, _, rest = version.partition(".")
    return date_stamp + _convert_date_minor_version(rest)


def _convert_date_minor_version(minor: str) -> str:
    parts = minor.split(".")
    minor_number = leading_int(parts[0])
    revision = leading_int(parts[1]) if len(parts) > 1 else 0
    return f".{minor_number:03d}{revision:03d}"


def replace_alias(version: str, comparator: str) -> str:
    """Replace wildcard components by a concrete bound.

    Args:
        version: A version that may contain ``x`` or ``*``.
        comparator: ``">"`` for a lower bound (wildcards become ``0``), anything
            else for an upper bound (wildcards become ``9999999``).
    """
    value = "0" if comparator == ">" else WILDCARD_SENTINEL
    return replace_chars(version, ("x", "*"), value)
