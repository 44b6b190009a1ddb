"""Tests for the mats list notation used by templates."""

import pytest

from shelter.services.mats import MAX_MAT_NUMBER, format_mats, parse_mats


class TestParseMats:
    def test_single_range(self):
        assert parse_mats("1-12") == list(range(1, 13))

    def test_mixed_items_are_sorted(self):
        assert parse_mats("20-22, 5, 1-3") == [1, 2, 3, 5, 20, 21, 22]

    def test_single_mat(self):
        assert parse_mats("7") == [7]

    def test_whitespace_around_dash(self):
        assert parse_mats("1 - 3") == [1, 2, 3]

    @pytest.mark.parametrize("text", ["", "   ", None])
    def test_empty_rejected(self, text):
        with pytest.raises(ValueError, match="must not be empty"):
            parse_mats(text)

    @pytest.mark.parametrize("text", ["a", "1-", "1,,2", "-3", "1-2-3"])
    def test_malformed_rejected(self, text):
        with pytest.raises(ValueError, match="Invalid mats list item"):
            parse_mats(text)

    def test_zero_rejected(self):
        with pytest.raises(ValueError, match="positive"):
            parse_mats("0-4")

    def test_descending_rejected(self):
        with pytest.raises(ValueError, match="descending"):
            parse_mats("5-1")

    def test_overlap_rejected(self):
        with pytest.raises(ValueError, match="Mat 3 is listed more than once"):
            parse_mats("1-4,3-6")

    def test_highest_mat_accepted(self):
        assert parse_mats(f"{MAX_MAT_NUMBER}") == [MAX_MAT_NUMBER]

    @pytest.mark.parametrize("text", ["1-999999999", "1000", "5,998-1000"])
    def test_mat_above_limit_rejected(self, text):
        with pytest.raises(ValueError, match="must not exceed"):
            parse_mats(text)


class TestFormatMats:
    def test_collapses_runs(self):
        assert format_mats([1, 2, 3, 5, 7, 8]) == "1-3,5,7-8"

    def test_unsorted_with_duplicates(self):
        assert format_mats([4, 2, 2, 3]) == "2-4"

    def test_empty(self):
        assert format_mats([]) == ""

    def test_inverse_of_parse(self):
        assert format_mats(parse_mats("1-10,12,20-24")) == "1-10,12,20-24"
