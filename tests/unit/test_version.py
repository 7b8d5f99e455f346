import pytest

from assetver.converter.version import (
    ANY_VERSION,
    LATEST_CONSTRAINT,
    convert_date_version,
    convert_version,
    replace_alias,
)

VERSION_FIXTURES = [
    ("1.2.3", "1.2.3"),
    ("1.2.3alpha", "1.2.3-alpha1"),
    ("1.2.3-alpha", "1.2.3-alpha1"),
    ("1.2.3a", "1.2.3-alpha1"),
    ("1.2.3a1", "1.2.3-alpha1"),
    ("1.2.3-a", "1.2.3-alpha1"),
    ("1.2.3-a1", "1.2.3-alpha1"),
    ("1.2.3b", "1.2.3-beta1"),
    ("1.2.3b1", "1.2.3-beta1"),
    ("1.2.3-b", "1.2.3-beta1"),
    ("1.2.3-b1", "1.2.3-beta1"),
    ("1.2.3beta", "1.2.3-beta1"),
    ("1.2.3-beta", "1.2.3-beta1"),
    ("1.2.3beta1", "1.2.3-beta1"),
    ("1.2.3-beta1", "1.2.3-beta1"),
    ("1.2.3rc1", "1.2.3-RC1"),
    ("1.2.3-rc1", "1.2.3-RC1"),
    ("1.2.3rc2", "1.2.3-RC2"),
    ("1.2.3-rc2", "1.2.3-RC2"),
    ("1.2.3rc.2", "1.2.3-RC.2"),
    ("1.2.3-rc.2", "1.2.3-RC.2"),
    ("1.2.3+0", "1.2.3-patch0"),
    ("1.2.3-0", "1.2.3-patch0"),
    ("1.2.3pre", "1.2.3-beta1"),
    ("1.2.3-pre", "1.2.3-beta1"),
    ("1.2.3dev", "1.2.3-dev"),
    ("1.2.3-dev", "1.2.3-dev"),
    ("1.2.3+build2012", "1.2.3-patch2012"),
    ("1.2.3-build2012", "1.2.3-patch2012"),
    ("1.2.3+build.2012", "1.2.3-patch.2012"),
    ("1.2.3-build.2012", "1.2.3-patch.2012"),
    ("1.3.0–rc30.79", "1.3.0-RC30.79"),
    ("1.2.3-SNAPSHOT", "1.2.3-dev"),
    ("1.2.3-npm-packages", "1.2.3"),
    ("1.2.3-bower-packages", "1.2.3"),
    ("20170124.0.0", "20170124.000000"),
    ("20170124.1.0", "20170124.001000"),
    ("20170124.1.1", "20170124.001001"),
    ("20170124.100.200", "20170124.100200"),
    ("20170124.0", "20170124.000000"),
    ("20170124.1", "20170124.001000"),
    ("20170124", "20170124"),
]


class TestConvertVersion:
    """Tests for single-version conversion."""

    @pytest.mark.parametrize(("version", "expected"), VERSION_FIXTURES)
    def test_convert_version(self, version: str, expected: str):
        assert convert_version(version) == expected

    @pytest.mark.parametrize(("version", "expected"), VERSION_FIXTURES)
    def test_convert_version_keeps_v_prefix(self, version: str, expected: str):
        assert convert_version(f"v{version}") == f"v{expected}"

    @pytest.mark.parametrize("empty", ["", None])
    def test_empty_version_is_any(self, empty: str | None):
        assert convert_version(empty) == ANY_VERSION

    def test_latest(self):
        assert convert_version("latest") == LATEST_CONSTRAINT
        assert LATEST_CONSTRAINT == "default || *"

    def test_dev_branch_is_untouched(self):
        assert convert_version("dev-master") == "dev-master"

    def test_unknown_input_passes_through(self):
        assert convert_version("foo bar") == "foo bar"

    @pytest.mark.parametrize(
        "canonical",
        sorted({expected for _, expected in VERSION_FIXTURES if not expected.startswith("20170124.")}),
    )
    def test_converting_a_canonical_version_is_idempotent(self, canonical: str):
        assert convert_version(convert_version(canonical)) == convert_version(canonical)

    @pytest.mark.parametrize(
        ("canonical", "reconverted"),
        [
            ("20170124.000000", "20170124.000000"),
            ("20170124.001000", "20170124.1000000"),
        ],
    )
    def test_padded_date_versions_are_padded_again(self, canonical: str, reconverted: str):
        """The padded minor group is read back as a single integer, so a non-zero one grows on each pass."""
        assert convert_version(canonical) == reconverted


class TestConvertDateVersion:
    @pytest.mark.parametrize(
        ("version", "expected"),
        [
            ("20160101.5.2", "20160101.005002"),
            ("1234567.8", "1234567.008000"),
            ("123456.1.2", "123456.1.2"),
            ("1.2.3", "1.2.3"),
        ],
    )
    def test_convert_date_version(self, version: str, expected: str):
        assert convert_date_version(version) == expected


class TestReplaceAlias:
    @pytest.mark.parametrize(
        ("version", "comparator", "expected"),
        [
            ("0.10.x", ">", "0.10.0"),
            ("0.10.*", ">", "0.10.0"),
            ("0.10.x", "<", "0.10.9999999"),
            ("1.*", "<", "1.9999999"),
            ("1.2.3", "<", "1.2.3"),
        ],
    )
    def test_replace_alias(self, version: str, comparator: str, expected: str):
        assert replace_alias(version, comparator) == expected
