# Copyright (c) Syntropy Systems
"""Tests for summary statistics and the label distribution reporter."""

from pathlib import Path

import pytest

from svoreval.distribution import label_distribution
from svoreval.errors import ComputationError, InputError, ParseError
from svoreval.models import AggregateStatistics, Summary
from svoreval.stats import mean, sample_stddev, summarize


class TestStats:
    """Tests for mean and sample standard deviation."""

    def test_mean_and_stddev(self) -> None:
        """Test Bessel-corrected standard deviation."""
        summary = summarize([1.0, 2.0, 3.0])
        assert summary.mean == 2.0
        assert summary.stddev == 1.0

    def test_empty_mean(self) -> None:
        """Test that the mean of nothing is an error."""
        with pytest.raises(ComputationError):
            _ = mean([])

    def test_single_value_stddev(self) -> None:
        """Test that one value has no sample standard deviation."""
        with pytest.raises(ComputationError):
            _ = sample_stddev([4.0])


class TestSummaryFormatting:
    """Tests for Summary rendering."""

    def test_latex(self) -> None:
        """Test LaTeX rendering rounds to four places."""
        summary = Summary(mean=0.123456, stddev=0.0456789)
        assert summary.latex() == "0.1235 $\\pm$ 0.0457"

    def test_human(self) -> None:
        """Test the plain rendering."""
        assert Summary(mean=2.0, stddev=1.0).human() == "2.0 ± 1.0"

    def test_latex_lines(self) -> None:
        """Test the baseline line ends with a LaTeX row break."""
        stats = AggregateStatistics(
            baseline=Summary(mean=1.0, stddev=0.5),
            svor=Summary(mean=0.5, stddev=0.25),
            train=Summary(mean=0.1, stddev=0.05),
        )
        assert stats.latex_lines() == [
            "1.0 $\\pm$ 0.5\\\\",
            "0.5 $\\pm$ 0.25",
        ]


class TestLabelDistribution:
    """Tests for the label distribution reporter."""

    def test_known_labels(self, write_dataset) -> None:
        """Test mean and stddev of a small label set."""
        path = write_dataset([f"{label} 1:0" for label in [1, 1, 2, 3, 3, 3]])
        summary = label_distribution(path)
        assert round(summary.mean, 4) == 2.1667
        assert round(summary.stddev, 4) == 0.9832
        assert summary.latex() == "2.1667 $\\pm$ 0.9832"

    def test_missing_file(self, temp_dir: Path) -> None:
        """Test that a missing file raises InputError."""
        with pytest.raises(InputError):
            _ = label_distribution(temp_dir / "missing.txt")

    def test_non_integer_label(self, write_dataset) -> None:
        """Test that a non-integer label raises ParseError."""
        path = write_dataset(["1 a", "B b", "3 c"])
        with pytest.raises(ParseError):
            _ = label_distribution(path)
