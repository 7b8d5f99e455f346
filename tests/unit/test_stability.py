import pytest

from assetver.converter.stability import (
    PATCH_KEYWORD,
    STABILITY_ALIASES,
    Stability,
    expand_stability,
    normalize_stability,
    stability_rank,
)


class TestStability:
    def test_fixed_order(self):
        ranks = [stability.rank for stability in (Stability.DEV, Stability.ALPHA, Stability.BETA, Stability.RC, Stability.STABLE)]
        assert ranks == sorted(ranks)
        assert len(set(ranks)) == len(ranks)

    @pytest.mark.parametrize(("keyword", "expected"), [("RC", "RC"), ("rc", "RC"), ("Beta", "beta"), ("SNAPSHOT", "snapshot")])
    def test_normalize_stability(self, keyword: str, expected: str):
        assert normalize_stability(keyword) == expected

    @pytest.mark.parametrize(
        ("keyword", "expected"),
        [("a", "alpha"), ("b", "beta"), ("p", PATCH_KEYWORD), ("pl", PATCH_KEYWORD), ("rc", "RC"), ("beta", "beta")],
    )
    def test_expand_stability(self, keyword: str, expected: str):
        assert expand_stability(keyword) == expected

    def test_patch_sorts_after_stable(self):
        assert stability_rank(PATCH_KEYWORD) > stability_rank("stable")

    def test_unknown_keyword_ranks_as_stable(self):
        assert stability_rank("whatever") == Stability.STABLE.rank

    def test_aliases_are_read_only(self):
        assert STABILITY_ALIASES["pre"] == Stability.BETA
        with pytest.raises(TypeError):
            STABILITY_ALIASES["new"] = Stability.DEV  # type: ignore[index]
