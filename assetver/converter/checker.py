"""Side-by-side evaluation of a source range and its translation."""

import logging

from pydantic import BaseModel, ConfigDict

from assetver.converter.constraint import parse_constraint
from assetver.converter.range import convert_range
from assetver.converter.semver import npm_range_matches

logger = logging.getLogger(__name__)


class TranslationCheck(BaseModel):
    """How one version fares against the source range and the translated constraint."""

    model_config = ConfigDict(frozen=True)

    version: str
    source_matches: bool
    translated_matches: bool

    @property
    def agrees(self) -> bool:
        return self.source_matches == self.translated_matches


class TranslationReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    source_range: str
    translated_range: str
    checks: list[TranslationCheck]

    @property
    def is_consistent(self) -> bool:
        return all(check.agrees for check in self.checks)


def check_translation(source_range: str, versions: list[str]) -> TranslationReport:
    """Translate a range and evaluate both forms against each version.

    Args:
        source_range: The npm range, e.g. ``^1.2.3``.
        versions: Concrete semver versions to test, e.g. ``["1.2.3", "2.0.0"]``.

    Returns:
        A report with one check per version.

    Raises:
        SemVerError: If the source range or a version is not valid npm semver.
        ConstraintParseError: If the translated constraint cannot be parsed.
    """
    translated = convert_range(source_range)
    constraint = parse_constraint(translated)

    checks: list[TranslationCheck] = []
    for version in versions:
        check = TranslationCheck(
            version=version,
            source_matches=npm_range_matches(source_range, version),
            translated_matches=constraint.matches(version),
        )
        if not check.agrees:
            logger.debug("'%s' and '%s' disagree on %s", source_range, translated, version)
        checks.append(check)

    return TranslationReport(source_range=source_range, translated_range=translated, checks=checks)
