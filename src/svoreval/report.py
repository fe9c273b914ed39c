# Copyright (c) Syntropy Systems
"""Parse the summary report printed by svm-predict."""
from __future__ import annotations

from dataclasses import dataclass

from svoreval.errors import ParseError

ACCURACY_START = "Accuracy = "
ACCURACY_END = "% )"
MAE_START = "error = "
MAE_END = " (regression)"


@dataclass(frozen=True)
class ModelReport:
    """Metrics scraped from a prediction report."""

    accuracy: float
    mae: float


def _between(report: str, start: str, end: str) -> str:
    """Text after the first `start` marker, up to the next `end` marker."""
    _, found, rest = report.partition(start)
    if not found:
        msg = f"Report is missing the marker {start!r}"
        raise ParseError(msg)

    value, found, _ = rest.partition(end)
    if not found:
        msg = f"Report is missing the marker {end!r} after {start!r}"
        raise ParseError(msg)

    return value.strip()


def _to_float(text: str, what: str) -> float:
    try:
        return float(text)
    except ValueError as e:
        msg = f"Could not read {what} from report: {text!r}"
        raise ParseError(msg) from e


def parse_accuracy(report: str) -> float:
    """Accuracy as a 0-1 fraction (the report prints a percentage)."""
    return _to_float(_between(report, ACCURACY_START, ACCURACY_END), "accuracy") / 100


def parse_mae(report: str) -> float:
    """Mean absolute error from the regression line of the report."""
    return _to_float(_between(report, MAE_START, MAE_END), "mean absolute error")


def parse_report(report: str) -> ModelReport:
    """Extract accuracy and mean absolute error from a report.

    Raises ParseError if either marker pair is missing.
    """
    return ModelReport(accuracy=parse_accuracy(report), mae=parse_mae(report))
