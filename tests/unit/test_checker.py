import pytest

from assetver.converter.checker import check_translation
from assetver.converter.semver import SemVerError, npm_range_matches, parse_npm_range, parse_version


class TestCheckTranslation:
    """Tests for comparing npm evaluation with the translated constraint."""

    @pytest.mark.parametrize(
        ("range_expr", "versions"),
        [
            ("^1.2.3", ["1.2.2", "1.2.3", "1.9.0", "2.0.0"]),
            ("^0.2.3", ["0.2.3", "0.2.9", "0.3.0"]),
            ("~1.2.3", ["1.2.3", "1.2.9", "1.3.0"]),
            ("1.2.3 - 2.3.4", ["1.2.2", "1.2.3", "2.3.4", "2.3.5"]),
            (">=1.0.0 <1.1.0 || >=1.2.0", ["1.0.5", "1.1.0", "1.2.0", "3.0.0"]),
            (">1.2.3", ["1.2.3", "1.2.4"]),
        ],
    )
    def test_consistent_translations(self, range_expr: str, versions: list[str]):
        report = check_translation(range_expr, versions)
        assert report.is_consistent
        assert [check.version for check in report.checks] == versions

    def test_report_carries_translated_range(self):
        report = check_translation("^1.2.3", ["1.5.0"])
        assert report.translated_range == ">=1.2.3,<2.0.0"
        assert report.checks[0].source_matches
        assert report.checks[0].translated_matches

    def test_tilde_with_two_components_widens(self):
        """``~1.2`` keeps its tilde, which the target grammar reads as ``<2.0``."""
        report = check_translation("~1.2", ["1.2.5", "1.5.0"])
        assert not report.is_consistent
        assert report.checks[0].agrees
        assert not report.checks[1].agrees
        assert report.checks[1].translated_matches

    def test_invalid_version_raises(self):
        with pytest.raises(SemVerError, match="Invalid semver version"):
            check_translation("^1.2.3", ["not-a-version"])


class TestSemver:
    @pytest.mark.parametrize(("version_str", "expected_str"), [("1.2.3", "1.2.3"), ("v1.2.3", "1.2.3")])
    def test_parse_version(self, version_str: str, expected_str: str):
        assert str(parse_version(version_str)) == expected_str

    def test_parse_npm_range_invalid(self):
        with pytest.raises(SemVerError, match="Invalid npm range"):
            parse_npm_range(">>>1.0.0")

    @pytest.mark.parametrize(
        ("range_str", "version_str", "expected"),
        [("^1.0.0", "1.5.0", True), ("^1.0.0", "2.0.0", False), ("1.x || >=2.5.0", "2.6.0", True)],
    )
    def test_npm_range_matches(self, range_str: str, version_str: str, expected: bool):
        assert npm_range_matches(range_str, version_str) is expected
