import re

WILDCARD_CHARS: tuple[str, ...] = ("*", "x", "X")

_LEADING_INT_PATTERN = re.compile(r"^\s*([+-]?\d+)")
_NUMERIC_PATTERN = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\s*$")


def leading_int(value: str | int) -> int:
    """Read the integer at the start of a version component, 0 when there is none ("x", "", "3-beta" -> 0, 0, 3)."""
    if isinstance(value, int):
        return value
    match = _LEADING_INT_PATTERN.match(value)
    if match is None:
        return 0
    return int(match.group(1))


def is_numeric(value: str) -> bool:
    """Check whether a token is a plain decimal or scientific number."""
    return _NUMERIC_PATTERN.match(value) is not None


def replace_chars(value: str, chars: tuple[str, ...], replacement: str) -> str:
    for char in chars:
        value = value.replace(char, replacement)
    return value


def has_wildcard(value: str) -> bool:
    return any(char in value for char in WILDCARD_CHARS)
