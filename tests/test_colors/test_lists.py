"""Tests for list pattern matching and capture ordering."""

import pytest

from circlepaint.colors.lists import (
    Capture,
    compare_captures,
    resolve_list,
    resolve_term,
    natural_key,
    sample_list,
)
from circlepaint.errors import NoMatchError
from circlepaint.models.color import ListPattern, PatternTerm

CHROMOSOMES = ["chr1", "chr10", "chr2", "chrx", "chrom"]


def test_numeric_captures_sort_numerically():
    term = PatternTerm(pattern=r"chr(\d+)")
    assert sample_list(term, CHROMOSOMES) == ["chr1", "chr2", "chr10"]


def test_rev_reverses_sorted_matches():
    term = PatternTerm(pattern=r"chr(\d+)", reversed=True)
    assert sample_list(term, ["chr1", "chr2", "chr10"]) == ["chr10", "chr2", "chr1"]


def test_match_is_anchored():
    term = PatternTerm(pattern="chr")
    assert sample_list(term, CHROMOSOMES) == []


def test_string_captures_sort_lexically():
    term = PatternTerm(pattern=r"chr([a-z]+)")
    assert sample_list(term, CHROMOSOMES) == ["chrom", "chrx"]


def test_no_captures_keeps_input_order():
    term = PatternTerm(pattern=r"chr\d+")
    assert sample_list(term, ["chr10", "chr2", "chr1"]) == ["chr10", "chr2", "chr1"]


def test_natural_key_orders_digit_runs():
    assert sorted(CHROMOSOMES, key=natural_key) == ["chr1", "chr2", "chr10", "chrom", "chrx"]
    assert sorted(["a-10", "a-9", "b-1"], key=natural_key) == ["a-9", "a-10", "b-1"]


def test_leading_zeros_ignored():
    assert Capture.parse("007").number == 7.0
    assert Capture.parse("000").number == 0.0
    assert Capture.parse("x").number is None


def test_missing_capture_stops_comparison():
    a = (Capture.parse("1"), None)
    b = (Capture.parse("1"), Capture.parse("5"))
    assert compare_captures(a, b) == 0


def test_second_capture_breaks_ties():
    term = PatternTerm(pattern=r"(\w+)-(\d+)")
    names = ["b-2", "a-10", "a-9", "b-1"]
    assert sample_list(term, names) == ["a-9", "a-10", "b-1", "b-2"]


def test_resolve_term_no_match_raises():
    with pytest.raises(NoMatchError, match="matches no defined color"):
        resolve_term(PatternTerm(pattern="nothing"), CHROMOSOMES, color_name="empty")


def test_resolve_list_concatenates_without_duplicates():
    definition = ListPattern(
        terms=[PatternTerm(pattern=r"chr(\d+)"), PatternTerm(pattern="chr.*")]
    )
    assert resolve_list(definition, sorted(CHROMOSOMES), color_name="mix") == [
        "chr1",
        "chr2",
        "chr10",
        "chrom",
        "chrx",
    ]
