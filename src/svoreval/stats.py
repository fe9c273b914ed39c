# Copyright (c) Syntropy Systems
"""Descriptive statistics over trial results."""
from __future__ import annotations

import statistics
from typing import TYPE_CHECKING

from svoreval.errors import ComputationError
from svoreval.models import Summary

if TYPE_CHECKING:
    from collections.abc import Sequence


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean; raises ComputationError for no values."""
    if not values:
        msg = "Mean of an empty sequence is undefined"
        raise ComputationError(msg)
    return statistics.fmean(values)


def sample_stddev(values: Sequence[float]) -> float:
    """Standard deviation with Bessel's correction (n - 1 denominator)."""
    if len(values) < 2:
        msg = f"Sample standard deviation needs at least 2 values, got {len(values)}"
        raise ComputationError(msg)
    return statistics.stdev(values)


def summarize(values: Sequence[float]) -> Summary:
    """Mean and sample standard deviation of values."""
    return Summary(mean=mean(values), stddev=sample_stddev(values))
