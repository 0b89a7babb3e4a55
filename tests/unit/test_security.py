"""입력 검증 / 로그 정리 테스트"""
import pytest

from src.core.logging import sanitize_for_log
from src.core.security import SecurityValidator


class TestValidateText:
    def test_valid(self):
        assert SecurityValidator.validate_text("Barack Obama") is True

    def test_unicode_titles_allowed(self):
        assert SecurityValidator.validate_text("서울특별시") is True

    @pytest.mark.parametrize("value", ["", "   ", None])
    def test_required(self, value):
        with pytest.raises(ValueError):
            SecurityValidator.validate_text(value)

    def test_too_long(self):
        with pytest.raises(ValueError):
            SecurityValidator.validate_text("x" * 501)

    @pytest.mark.parametrize("value", ["a\nb", "a\rb", "a\0b"])
    def test_control_characters(self, value):
        with pytest.raises(ValueError):
            SecurityValidator.validate_text(value, "title")


class TestValidateNumbers:
    @pytest.mark.parametrize("limit", [0, 1, 500])
    def test_limit_ok(self, limit):
        assert SecurityValidator.validate_limit(limit) is True

    @pytest.mark.parametrize("limit", [-1, 501])
    def test_limit_out_of_range(self, limit):
        with pytest.raises(ValueError):
            SecurityValidator.validate_limit(limit)

    @pytest.mark.parametrize("hops", [-1, 4])
    def test_hops_out_of_range(self, hops):
        with pytest.raises(ValueError):
            SecurityValidator.validate_hops(hops)


def test_sanitize_for_log_strips_newlines():
    assert "\n" not in sanitize_for_log("a\nb")


class TestValidateTitle:
    def test_valid(self):
        assert SecurityValidator.validate_title("Barack Obama") is True

    def test_separator_rejected_in_titles(self):
        with pytest.raises(ValueError):
            SecurityValidator.validate_title("A|B")

    def test_separator_allowed_in_search_terms(self):
        assert SecurityValidator.validate_text("cats | dogs", "query") is True

    def test_text_rules_still_apply(self):
        with pytest.raises(ValueError):
            SecurityValidator.validate_title("a\nb")
