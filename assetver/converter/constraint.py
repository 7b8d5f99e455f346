"""Parsing and matching of translated constraints in the target grammar.

A translated constraint is handed to a resolver that must reject anything it
cannot parse; :func:`parse_constraint` plays that part here and raises
:class:`ConstraintParseError` instead of guessing.

Grammar: ``|`` or ``||`` separates alternatives, ``,`` or whitespace joins
bounds; a bound is ``*``, a ``dev-`` branch, a wildcard version (``1.2.x``),
a tilde (``~1.2``) or caret (``^1.2``) version, or an optional operator
(``<``, ``<=``, ``>``, ``>=``, ``=``, ``==``, ``!=``) and a version.
"""

import re
from enum import StrEnum, unique

from pydantic import BaseModel, ConfigDict

from assetver.converter.exceptions import ConstraintParseError, VersionParseError
from assetver.converter.stability import Stability, stability_rank
from assetver.converter.version_parser import DEV_PREFIX, normalize

_OR_PATTERN = re.compile(r"\s*\|\|?\s*")
_AND_PATTERN = re.compile(r"\s*,\s*|\s+")
_OPERATOR_PATTERN = re.compile(r"^(<>|!=|>=?|<=?|==?)?\s*(\S+)$")
_PARTIAL_VERSION_PATTERN = re.compile(r"^v?(\d+)(?:\.(\d+))?(?:\.(\d+))?(?:\.(\d+))?(-.+)?$")
_WILDCARD_VERSION_PATTERN = re.compile(r"^v?(\d+)(?:\.(\d+))?(?:\.(\d+))?(?:\.[xX*])+$")
_SUFFIX_PATTERN = re.compile(r"^([a-zA-Z]+)\.?([\d.]*)$")

RELEASE_LENGTH = 4


@unique
class Operator(StrEnum):
    EQ = "=="
    NE = "!="
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="


class ParsedVersion(BaseModel):
    """A normalized version split into comparable parts, or a named branch."""

    model_config = ConfigDict(frozen=True)

    release: tuple[int, ...] = ()
    stability_rank: int = Stability.STABLE.rank
    stability_number: tuple[int, ...] = ()
    branch: str | None = None

    @classmethod
    def from_normalized(cls, normalized: str) -> "ParsedVersion":
        if normalized.startswith(DEV_PREFIX):
            return cls(branch=normalized[len(DEV_PREFIX) :])

        head, *suffixes = normalized.split("-")
        release = tuple(int(part) for part in head.split(".") if part)
        release += (0,) * (RELEASE_LENGTH - len(release))

        rank = Stability.STABLE.rank
        number: tuple[int, ...] = ()
        for suffix in suffixes:
            suffix_match = _SUFFIX_PATTERN.match(suffix)
            if suffix_match is None:
                continue
            rank = stability_rank(suffix_match.group(1))
            number = tuple(int(part) for part in suffix_match.group(2).split(".") if part)
        return cls(release=release, stability_rank=rank, stability_number=number)

    @classmethod
    def parse(cls, version: str) -> "ParsedVersion":
        """Normalize then split a version.

        Raises:
            VersionParseError: If the version is not valid in the target grammar.
        """
        return cls.from_normalized(normalize(version))

    @property
    def is_branch(self) -> bool:
        return self.branch is not None

    def sort_key(self) -> tuple[tuple[int, ...], int, tuple[int, ...]]:
        return (self.release, self.stability_rank, self.stability_number)

    def as_dev(self) -> "ParsedVersion":
        """The lowest version of the same release: ``1.2.0.0`` -> ``1.2.0.0-dev``."""
        return self.model_copy(update={"stability_rank": Stability.DEV.rank, "stability_number": ()})


class Bound(BaseModel):
    model_config = ConfigDict(frozen=True)

    operator: Operator
    version: ParsedVersion

    def matches(self, candidate: ParsedVersion) -> bool:
        if candidate.is_branch or self.version.is_branch:
            same = candidate.branch == self.version.branch
            match self.operator:
                case Operator.EQ:
                    return same
                case Operator.NE:
                    return not same
                case _:
                    return False

        left, right = candidate.sort_key(), self.version.sort_key()
        match self.operator:
            case Operator.EQ:
                return left == right
            case Operator.NE:
                return left != right
            case Operator.LT:
                return left < right
            case Operator.LE:
                return left <= right
            case Operator.GT:
                return left > right
            case Operator.GE:
                return left >= right


class ConstraintSet(BaseModel):
    """Alternatives of bound conjunctions. An empty conjunction matches everything."""

    model_config = ConfigDict(frozen=True)

    source: str
    alternatives: tuple[tuple[Bound, ...], ...]

    def matches(self, version: str) -> bool:
        """Check a version against the constraint.

        Raises:
            ConstraintParseError: If the version itself cannot be parsed.
        """
        try:
            candidate = ParsedVersion.parse(version)
        except VersionParseError as exc:
            msg = f"Cannot match '{version}' against '{self.source}': {exc.message}"
            raise ConstraintParseError(msg) from exc
        return any(all(bound.matches(candidate) for bound in bounds) for bounds in self.alternatives)


def parse_constraint(constraint: str) -> ConstraintSet:
    """Parse a translated constraint.

    Args:
        constraint: e.g. ``>=1.2.3,<2.0.0``, ``~1.2|>=2.5``, ``dev-master || *``.

    Returns:
        The parsed constraint set.

    Raises:
        ConstraintParseError: If any part of the constraint is not understood.
    """
    stripped = constraint.strip()
    if not stripped:
        msg = "Constraint cannot be empty"
        raise ConstraintParseError(msg)

    alternatives: list[tuple[Bound, ...]] = []
    for alternative in _OR_PATTERN.split(stripped):
        parts = [part for part in _AND_PATTERN.split(alternative.strip()) if part]
        if not parts:
            msg = f"Empty alternative in constraint '{constraint}'"
            raise ConstraintParseError(msg)
        bounds: list[Bound] = []
        for part in parts:
            try:
                bounds.extend(parse_single_constraint(part))
            except VersionParseError as exc:
                msg = f"Invalid constraint '{part}' in '{constraint}': {exc.message}"
                raise ConstraintParseError(msg) from exc
        alternatives.append(tuple(bounds))

    return ConstraintSet(source=constraint, alternatives=tuple(alternatives))


def parse_single_constraint(constraint: str) -> list[Bound]:
    """Parse one bound expression into the bounds it implies.

    Raises:
        ConstraintParseError: If the expression has an unknown shape.
        VersionParseError: If its version part is not a version.
    """
    if constraint in {"*", "x", "X"}:
        return []
    if constraint.startswith(DEV_PREFIX):
        return [Bound(operator=Operator.EQ, version=ParsedVersion.parse(constraint))]
    if constraint.startswith("~"):
        return _parse_tilde(constraint[1:], constraint)
    if constraint.startswith("^"):
        return _parse_caret(constraint[1:], constraint)

    wildcard_match = _WILDCARD_VERSION_PATTERN.match(constraint)
    if wildcard_match is not None:
        components = [int(part) for part in wildcard_match.groups() if part is not None]
        lower = _release_version(components)
        upper = _release_version(_bump(components, len(components) - 1))
        return [_lower_bound(lower), Bound(operator=Operator.LT, version=upper)]

    operator_match = _OPERATOR_PATTERN.match(constraint)
    if operator_match is None:
        msg = f"Unrecognized constraint '{constraint}'"
        raise ConstraintParseError(msg)

    raw_operator, raw_version = operator_match.groups()
    operator = _to_operator(raw_operator)
    version = ParsedVersion.parse(raw_version)
    has_stability = "-" in normalize(raw_version)
    if operator in {Operator.LT, Operator.GE} and not has_stability and not version.is_branch:
        version = version.as_dev()
    return [Bound(operator=operator, version=version)]


def _to_operator(raw_operator: str | None) -> Operator:
    match raw_operator:
        case None | "=" | "==":
            return Operator.EQ
        case "<>" | "!=":
            return Operator.NE
        case _:
            return Operator(raw_operator)


def _parse_tilde(version: str, constraint: str) -> list[Bound]:
    """``~1.2.3`` -> ``>=1.2.3,<1.3``; ``~1.2`` and ``~1`` -> ``<2.0``."""
    components, suffix = _split_partial(version, constraint)
    lower = ParsedVersion.parse(version)
    if not suffix:
        lower = lower.as_dev()
    high_position = max(1, len(components) - 1)
    upper = _release_version(_bump(components, high_position - 1))
    return [Bound(operator=Operator.GE, version=lower), Bound(operator=Operator.LT, version=upper)]


def _parse_caret(version: str, constraint: str) -> list[Bound]:
    """``^1.2.3`` -> ``<2.0``; ``^0.2.3`` -> ``<0.3``; ``^0.0.3`` -> ``<0.0.4``."""
    components, suffix = _split_partial(version, constraint)
    lower = ParsedVersion.parse(version)
    if not suffix:
        lower = lower.as_dev()
    position = next((index for index, value in enumerate(components) if value > 0), len(components) - 1)
    upper = _release_version(_bump(components, min(position, 2)))
    return [Bound(operator=Operator.GE, version=lower), Bound(operator=Operator.LT, version=upper)]


def _split_partial(version: str, constraint: str) -> tuple[list[int], str]:
    partial_match = _PARTIAL_VERSION_PATTERN.match(version)
    if partial_match is None:
        msg = f"Unrecognized constraint '{constraint}'"
        raise ConstraintParseError(msg)
    *numbers, suffix = partial_match.groups()
    return [int(number) for number in numbers if number is not None], suffix or ""


def _bump(components: list[int], position: int) -> list[int]:
    bumped = components[: position + 1]
    bumped += [0] * (position + 1 - len(bumped))
    bumped[position] += 1
    return bumped


def _release_version(components: list[int]) -> ParsedVersion:
    release = tuple(components) + (0,) * (RELEASE_LENGTH - len(components))
    return ParsedVersion(release=release).as_dev()


def _lower_bound(version: ParsedVersion) -> Bound:
    return Bound(operator=Operator.GE, version=version)
