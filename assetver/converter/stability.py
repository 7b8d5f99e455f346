"""Stability keywords shared by the metadata normalizer and the target-grammar parser.

The order ``dev < alpha < beta < RC < stable`` is fixed. ``patch`` is not a
stability of its own: it marks a post-release build and sorts after ``stable``.
"""

from enum import StrEnum, unique
from types import MappingProxyType


@unique
class Stability(StrEnum):
    DEV = "dev"
    ALPHA = "alpha"
    BETA = "beta"
    RC = "RC"
    STABLE = "stable"

    @property
    def rank(self) -> int:
        return _STABILITY_RANKS[self]


_STABILITY_RANKS: MappingProxyType[Stability, int] = MappingProxyType(
    {
        Stability.DEV: 0,
        Stability.ALPHA: 1,
        Stability.BETA: 2,
        Stability.RC: 3,
        Stability.STABLE: 4,
    }
)

# Short and alternative spellings accepted in source manifests, mapped onto the canonical names.
STABILITY_ALIASES: MappingProxyType[str, Stability] = MappingProxyType(
    {
        "dev": Stability.DEV,
        "snapshot": Stability.DEV,
        "a": Stability.ALPHA,
        "alpha": Stability.ALPHA,
        "b": Stability.BETA,
        "beta": Stability.BETA,
        "pre": Stability.BETA,
        "rc": Stability.RC,
        "stable": Stability.STABLE,
    }
)

PATCH_KEYWORD = "patch"


def normalize_stability(keyword: str) -> str:
    """Lower-case a stability keyword, upper-casing ``rc`` to ``RC``.

    The keyword keeps its length, so callers can use it to consume the
    matching prefix of the original text.
    """
    keyword = keyword.lower()
    if keyword == "rc":
        return Stability.RC.value
    return keyword


def expand_stability(keyword: str) -> str:
    """Expand a short modifier of the target grammar (``a``, ``b``, ``p``, ``pl``, ``rc``)."""
    keyword = keyword.lower()
    match keyword:
        case "a":
            return Stability.ALPHA.value
        case "b":
            return Stability.BETA.value
        case "p" | "pl":
            return PATCH_KEYWORD
        case "rc":
            return Stability.RC.value
        case _:
            return keyword


def stability_rank(keyword: str) -> int:
    """Rank a normalized stability keyword. ``patch`` sorts after stable, unknown keywords rank as stable."""
    if keyword.lower() == PATCH_KEYWORD:
        return Stability.STABLE.rank + 1
    stability = STABILITY_ALIASES.get(keyword.lower())
    if stability is None:
        return Stability.STABLE.rank
    return stability.rank
