"""
Tests for the pagination controller
"""
from unittest.mock import Mock, patch

import pytest

from vidtube.services import pagination


class TestNormalize:
    """Raw page/limit parameters to a valid pair"""

    def test_defaults_when_missing(self):
        assert pagination.normalize() == (1, 10)
        assert pagination.normalize(None, None) == (1, 10)

    def test_defaults_when_non_numeric(self):
        assert pagination.normalize("abc", "xyz") == (1, 10)
        assert pagination.normalize("", "") == (1, 10)

    def test_zero_falls_back_to_defaults(self):
        assert pagination.normalize("0", "0") == (1, 10)
        assert pagination.normalize(0, 0) == (1, 10)

    def test_leading_integer_prefix(self):
        assert pagination.normalize("3abc", "20items") == (3, 20)

    def test_negative_values_clamp_to_one(self):
        assert pagination.normalize("-5", "-2") == (1, 1)

    def test_limit_clamps_to_maximum(self):
        assert pagination.normalize("1", "1000") == (1, 100)

    def test_page_size_comes_from_settings(self):
        settings = Mock(default_page_size=5, max_page_size=20)

        with patch("vidtube.services.pagination.get_settings", return_value=settings):
            assert pagination.normalize() == (1, 5)
            assert pagination.normalize("2", "50") == (2, 20)

    @pytest.mark.parametrize("page,limit", [(1, 1), (2, 10), (7, 100), (50, 33)])
    def test_idempotent_on_normalized_pairs(self, page, limit):
        once = pagination.normalize(page, limit)
        assert once == (page, limit)
        assert pagination.normalize(*once) == once


class TestPaginationMath:

    def test_offset(self):
        assert pagination.offset(1, 10) == 0
        assert pagination.offset(3, 25) == 50

    def test_offset_is_capped_for_huge_pages(self):
        assert pagination.offset(10 ** 20, 10) == pagination.MAX_OFFSET
        assert pagination.offset(10 ** 20, 10) < 2 ** 63

    def test_total_pages(self):
        assert pagination.total_pages(0, 10) == 0
        assert pagination.total_pages(10, 10) == 1
        assert pagination.total_pages(11, 10) == 2

    def test_build_pagination(self):
        info = pagination.build_pagination(15, 2, 10)

        assert info == {
            "total_items": 15,
            "total_pages": 2,
            "current_page": 2,
            "page_size": 10,
            "has_next_page": False,
            "has_previous_page": True
        }

    def test_build_pagination_empty(self):
        info = pagination.build_pagination(0, 1, 10)

        assert info["total_pages"] == 0
        assert info["has_next_page"] is False
        assert info["has_previous_page"] is False
