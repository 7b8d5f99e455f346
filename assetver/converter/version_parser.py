"""Normalization of versions and branch names in the target grammar.

``normalize`` turns a tag into its four-component form (``1.2`` ->
``1.2.0.0``, ``1.0.0-rc1`` -> ``1.0.0.0-RC1``) and raises
:class:`VersionParseError` for anything that is not a version. ``normalize_branch``
turns numeric branches into ``9999999`` upper-bound versions (``1.x`` ->
``1.9999999.9999999.9999999-dev``) and everything else into ``dev-<name>``.
"""

import re

from assetver.converter.exceptions import VersionParseError
from assetver.converter.stability import expand_stability

DEV_PREFIX = "dev-"
DEFAULT_BRANCHES: frozenset[str] = frozenset({"master", "trunk", "default"})

_MODIFIER = r"[._-]?(?:(stable|beta|b|RC|alpha|a|patch|pl|p)((?:[.-]?\d+)*)?)?([.-]?dev)?"
_STABILITIES = r"stable|RC|beta|alpha|dev"

_ALIAS_PATTERN = re.compile(r"^([^,\s]+) +as +([^,\s]+)$")
_STABILITY_FLAG_PATTERN = re.compile(rf"@(?:{_STABILITIES})$", re.IGNORECASE)
_BUILD_METADATA_PATTERN = re.compile(r"^([^,\s+]+)\+[^\s]+$")
_CLASSICAL_PATTERN = re.compile(rf"^v?(\d{{1,5}})(\.\d+)?(\.\d+)?(\.\d+)?{_MODIFIER}$", re.IGNORECASE)
_DATE_PATTERN = re.compile(rf"^v?(\d{{4}}(?:[.:-]?\d{{2}}){{1,6}}(?:[.:-]?\d{{1,3}}){{0,2}}){_MODIFIER}$", re.IGNORECASE)
_DEV_SUFFIX_PATTERN = re.compile(r"(.*?)[.-]?dev$", re.IGNORECASE)
_NUMERIC_BRANCH_PATTERN = re.compile(r"^v?(\d+)(\.(?:\d+|[xX*]))?(\.(?:\d+|[xX*]))?(\.(?:\d+|[xX*]))?$", re.IGNORECASE)


def normalize(version: str) -> str:
    """Normalize a version string to the target grammar's canonical form.

    Args:
        version: e.g. ``1.2``, ``v1.0.0-beta2``, ``2017.01.24``, ``dev-master``, ``master``.

    Returns:
        The normalized version, e.g. ``1.2.0.0``, ``1.0.0.0-beta2``, ``2017.01.24``,
        ``dev-master``, ``dev-master``.

    Raises:
        VersionParseError: If the string is not a version.
    """
    original = version
    version = version.strip()

    alias_match = _ALIAS_PATTERN.match(version)
    if alias_match is not None:
        version = alias_match.group(1)

    flag_match = _STABILITY_FLAG_PATTERN.search(version)
    if flag_match is not None:
        version = version[: flag_match.start()]

    if version in DEFAULT_BRANCHES:
        version = DEV_PREFIX + version

    if version.lower().startswith(DEV_PREFIX):
        return DEV_PREFIX + version[len(DEV_PREFIX) :]

    build_match = _BUILD_METADATA_PATTERN.match(version)
    if build_match is not None:
        version = build_match.group(1)

    classical_match = _CLASSICAL_PATTERN.match(version)
    if classical_match is not None:
        groups = classical_match.groups()
        normalized = groups[0] + "".join(group or ".0" for group in groups[1:4])
        return _add_modifiers(normalized, groups[4:])

    date_match = _DATE_PATTERN.match(version)
    if date_match is not None:
        groups = date_match.groups()
        normalized = re.sub(r"\D", ".", groups[0])
        return _add_modifiers(normalized, groups[1:])

    dev_match = _DEV_SUFFIX_PATTERN.match(version)
    if dev_match is not None:
        # A branch ending with -dev is only a version when the branch is numeric.
        normalized = normalize_branch(dev_match.group(1))
        if DEV_PREFIX not in normalized:
            return normalized

    msg = f"Invalid version string '{original}'"
    raise VersionParseError(msg)


def _add_modifiers(version: str, modifier_groups: tuple[str | None, ...]) -> str:
    stability, stability_number, dev_suffix = modifier_groups
    if stability:
        if stability == "stable":
            return version
        version += "-" + expand_stability(stability) + (stability_number or "").lstrip(".-")
    if dev_suffix:
        version += "-dev"
    return version


def normalize_branch(name: str) -> str:
    """Normalize a branch name.

    Args:
        name: e.g. ``1.x``, ``v2.0.*``, ``feature/foo``.

    Returns:
        ``1.9999999.9999999.9999999-dev`` for numeric branches, else ``dev-<name>``.
    """
    name = name.strip()
    match = _NUMERIC_BRANCH_PATTERN.match(name)
    if match is None:
        return DEV_PREFIX + name

    version = ""
    for group in match.groups():
        version += group.replace("*", "x").replace("X", "x") if group is not None else ".x"
    return version.replace("x", "9999999") + "-dev"
