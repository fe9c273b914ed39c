# Copyright (c) Syntropy Systems
"""Tests for the majority-class baseline."""

import pytest

from svoreval.baseline import (
    evaluate_baseline,
    format_histogram,
    label_histogram,
    majority_class,
)
from svoreval.dataset import Record
from svoreval.errors import ComputationError, ParseError


def records(*labels: str) -> list[Record]:
    return [Record(f"{label} 1:0.{i}") for i, label in enumerate(labels)]


class TestHistogram:
    """Tests for label histograms."""

    def test_counts(self) -> None:
        """Test label counting."""
        hist = label_histogram(records("1", "3", "3", "2"))
        assert hist == {"1": 1, "2": 1, "3": 2}

    def test_format_sorted_numerically(self) -> None:
        """Test that display order is by numeric label."""
        hist = label_histogram(records("10", "2", "2", "9"))
        assert format_histogram(hist) == "2: 2, 9: 1, 10: 1"

    def test_format_empty(self) -> None:
        """Test formatting an empty histogram."""
        assert format_histogram(label_histogram([])) == "(none)"


class TestMajorityClass:
    """Tests for majority class selection."""

    def test_most_frequent(self) -> None:
        """Test that the most frequent label wins."""
        assert majority_class(label_histogram(records("1", "2", "2", "3"))) == "2"

    def test_tie_goes_to_smallest_label(self) -> None:
        """Test the deterministic tie-break."""
        hist = label_histogram(records("5", "3", "5", "3", "4"))
        assert majority_class(hist) == "3"


class TestEvaluateBaseline:
    """Tests for baseline scoring."""

    def test_accuracy_and_mae(self) -> None:
        """Test accuracy and MAE against a known test set."""
        train = records("2", "2", "1")
        test = records("2", "1", "4", "2")

        result = evaluate_baseline(train, test)

        assert result.majority_class == "2"
        assert result.accuracy == 0.5
        assert result.mae == 0.75
        assert result.total == 4

    def test_bounds(self) -> None:
        """Test that accuracy is in [0, 1] and MAE is non-negative."""
        result = evaluate_baseline(records("1"), records("3", "5", "1"))
        assert 0.0 <= result.accuracy <= 1.0
        assert result.mae >= 0.0

    def test_empty_test_set(self) -> None:
        """Test that an empty test set raises ComputationError."""
        with pytest.raises(ComputationError, match="empty"):
            _ = evaluate_baseline(records("1", "2"), [])

    def test_non_numeric_label(self) -> None:
        """Test that a non-integer test label raises ParseError."""
        with pytest.raises(ParseError):
            _ = evaluate_baseline(records("1"), records("good"))
