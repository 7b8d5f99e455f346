"""Caret (``^``) range expansion into an explicit ``>=lower,<upper`` pair."""

from assetver._utils.string_utils import WILDCARD_CHARS, leading_int, replace_chars
from assetver.converter.version import WILDCARD_SENTINEL, convert_version, replace_alias

# Components after the 4th never decide which one gets bumped.
MAX_COMPONENT_INDEX = 3


def expand_caret_range(atom: str) -> str:
    """Expand the version under a caret into lower and upper bounds.

    The upper bound bumps the left-most non-zero component, so ``^1.2.3``
    gives ``>=1.2.3,<2.0.0``, ``^0.2.3`` gives ``>=0.2.3,<0.3.0`` and
    ``^0.0.3`` gives ``>=0.0.3,<0.0.4``. A wildcard right after a zero
    component bumps that component (``^0.0.x`` -> ``<0.1.0``).

    Args:
        atom: The version following the caret, without the caret itself.

    Returns:
        The ``>=lower,<upper`` constraint.
    """
    lower_bound = standardize_version(replace_alias(convert_version(atom), ">"))
    components = split_upper_bound(atom)

    carry = False
    for index, component in enumerate(components):
        if carry:
            components[index] = "0"
            continue
        if index == 0 and leading_int(component) > 0:
            components[index] = str(leading_int(component) + 1)
            carry = True
            continue
        if _bumps_component(index, components):
            components[index] = str(leading_int(component) + 1)
            carry = True

    upper_bound = convert_version(standardize_version(components))
    return f">={lower_bound},<{upper_bound}"


def _bumps_component(index: int, components: list[str]) -> bool:
    next_index = min(index + 1, MAX_COMPONENT_INDEX, len(components) - 1)
    if next_index == index:
        return True
    return leading_int(components[index]) > 0 or leading_int(components[next_index]) > int(WILDCARD_SENTINEL) - 1


def split_upper_bound(version: str) -> list[str]:
    """Drop the prerelease part and turn wildcards into the sentinel, then split on dots."""
    version = version.split("-", maxsplit=1)[0]
    version = replace_chars(version, WILDCARD_CHARS, WILDCARD_SENTINEL)
    return version.split(".")


def standardize_version(version: str | list[str]) -> str:
    """Pad a version to at least three components: ``1`` -> ``1.0.0``."""
    components = version.split(".") if isinstance(version, str) else list(version)
    while len(components) < 3:
        components.append("0")
    return ".".join(components)
