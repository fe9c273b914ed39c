# Copyright (c) Syntropy Systems
"""Majority-class baseline evaluation."""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import TYPE_CHECKING

from svoreval.dataset import parse_label
from svoreval.errors import ComputationError, InputError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from svoreval.dataset import Record

LabelHistogram = Counter[str]


def label_histogram(records: Iterable[Record]) -> LabelHistogram:
    """Count how often each label occurs."""
    return Counter(record.label for record in records)


def sorted_histogram(histogram: LabelHistogram) -> list[tuple[str, int]]:
    """Histogram entries ordered by ascending numeric label."""
    return sorted(histogram.items(), key=lambda item: parse_label(item[0]))


def format_histogram(histogram: LabelHistogram) -> str:
    """Render a histogram as 'label: count' pairs in label order."""
    if not histogram:
        return "(none)"
    return ", ".join(f"{label}: {count}" for label, count in sorted_histogram(histogram))


def majority_class(histogram: LabelHistogram) -> str:
    """Most frequent label.

    Ties go to the smallest numeric label so the choice is reproducible.
    """
    if not histogram:
        msg = "Cannot pick a majority class from an empty training set"
        raise InputError(msg)

    ranked = sorted(
        histogram.items(),
        key=lambda item: (-item[1], parse_label(item[0])),
    )
    return ranked[0][0]


@dataclass(frozen=True)
class BaselineResult:
    """Score of always predicting the majority training label."""

    majority_class: str
    accuracy: float
    mae: float
    total: int


def evaluate_baseline(train: Sequence[Record], test: Sequence[Record]) -> BaselineResult:
    """Score the majority training label against the test records.

    Raises ComputationError when the test set is empty.
    """
    majority = majority_class(label_histogram(train))
    majority_value = parse_label(majority)

    correct = 0
    error = 0
    for record in test:
        if record.label == majority:
            correct += 1
        error += abs(majority_value - record.label_value)

    total = len(test)
    if total == 0:
        msg = (
            "Test set is empty; baseline accuracy and MAE are undefined. "
            "Use a smaller train fraction."
        )
        raise ComputationError(msg)

    return BaselineResult(
        majority_class=majority,
        accuracy=correct / total,
        mae=error / total,
        total=total,
    )
