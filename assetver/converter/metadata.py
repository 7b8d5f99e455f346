"""Prerelease and build metadata rewriting for a single version atom.

Turns the npm/bower suffixes (``1.2.3beta``, ``1.2.3-rc.2``, ``1.2.3+build2012``,
``1.2.3-SNAPSHOT``) into the ``-<stability><number>`` form of the target grammar
(``1.2.3-beta1``, ``1.2.3-RC.2``, ``1.2.3-patch2012``, ``1.2.3-dev``).
"""

import re

from assetver.converter.stability import PATCH_KEYWORD, Stability, normalize_stability

# Marker suffixes appended by some registries to mirrored package versions.
CLEAN_PATTERNS: tuple[str, ...] = ("-npm-packages", "-bower-packages")

_NUMBER = r"(?:[0-9]+|x|\*)"
_HEAD = rf"({_NUMBER}|{_NUMBER}\.{_NUMBER}|{_NUMBER}\.{_NUMBER}\.{_NUMBER})"


def create_pattern(suffix_pattern: str) -> re.Pattern[str]:
    """Compile a pattern anchored on a numeric version head of 1 to 3 components.

    Group 1 always captures the head (e.g. ``1.2.3``, ``1.x``, ``*``).
    """
    return re.compile(rf"^{_HEAD}{suffix_pattern}")


METADATA_PATTERN = create_pattern(r"(?:[a-zA-Z]+|[-+][a-zA-Z]+|[-+][0-9]+)")

_KEYWORD_PATTERN = re.compile(r"^[a-z]+")
_PATCH_NUMBER_PATTERN = re.compile(r"[0-9]+\.[0-9]+|[0-9]+|\.[0-9]+$")

_KEPT_STABILITIES: frozenset[str] = frozenset({Stability.ALPHA, Stability.BETA, Stability.RC})


def convert_version_metadata(version: str) -> str:
    """Rewrite the stability suffix of a version, leaving unrecognized input as is.

    Args:
        version: A single version atom, e.g. ``1.2.3-alpha`` or ``1.2.3+0``.

    Returns:
        The rewritten atom, e.g. ``1.2.3-alpha1`` or ``1.2.3-patch0``.
    """
    for pattern in CLEAN_PATTERNS:
        version = version.replace(pattern, "")

    match = METADATA_PATTERN.match(version)
    if match is not None:
        head = match.group(1)
        tail = version.lower()[len(head) :]
        if tail[:1] in {"-", "+"}:
            tail = tail[1:]

        keyword_match = _KEYWORD_PATTERN.match(tail)
        keyword = normalize_stability(keyword_match.group(0)) if keyword_match else ""
        tail = tail[len(keyword) :]

        stability, keeps_number = classify_stability(keyword)
        version = f"{head}-{stability}"

        if keeps_number:
            number_match = _PATCH_NUMBER_PATTERN.search(tail)
            version += number_match.group(0) if number_match else "1"

    return collapse_wildcards(version)


def classify_stability(keyword: str) -> tuple[str, bool]:
    """Map a normalized keyword onto its canonical name.

    Returns:
        The canonical keyword and whether a trailing number belongs after it.
        Dev versions are never numbered.
    """
    if keyword in {"dev", "snapshot"}:
        return Stability.DEV.value, False
    if keyword == "a":
        return Stability.ALPHA.value, True
    if keyword in {"b", "pre"}:
        return Stability.BETA.value, True
    if keyword not in _KEPT_STABILITIES:
        return PATCH_KEYWORD, True
    return keyword, True


def collapse_wildcards(version: str) -> str:
    """Collapse repeated ``.x`` components: ``1.x.x.x`` -> ``1.x``."""
    while ".x.x" in version:
        version = version.replace(".x.x", ".x")
    return version
