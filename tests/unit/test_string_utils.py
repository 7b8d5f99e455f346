import pytest

from assetver._utils.string_utils import has_wildcard, is_numeric, leading_int, replace_chars


class TestStringUtils:
    @pytest.mark.parametrize(("value", "expected"), [("3", 3), ("3-beta", 3), ("x", 0), ("", 0), ("12abc", 12), (7, 7)])
    def test_leading_int(self, value: str | int, expected: int):
        assert leading_int(value) == expected

    @pytest.mark.parametrize(("value", "expected"), [("1", True), ("1.5", True), ("1e3", True), ("1.2.3", False), ("x", False), ("", False)])
    def test_is_numeric(self, value: str, expected: bool):
        assert is_numeric(value) is expected

    def test_replace_chars(self):
        assert replace_chars("1.x.*", ("x", "*"), "0") == "1.0.0"

    @pytest.mark.parametrize(("value", "expected"), [("1.x", True), ("1.*", True), ("1.X", True), ("1.2", False)])
    def test_has_wildcard(self, value: str, expected: bool):
        assert has_wildcard(value) is expected
