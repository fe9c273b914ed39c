# Copyright (c) Syntropy Systems
"""Label distribution of a dataset file."""
from __future__ import annotations

from typing import TYPE_CHECKING

from svoreval.dataset import load_dataset
from svoreval.stats import summarize

if TYPE_CHECKING:
    from pathlib import Path

    from svoreval.models import Summary


def label_values(path: Path) -> list[int]:
    """Integer label of every record in a dataset file."""
    return [record.label_value for record in load_dataset(path)]


def label_distribution(path: Path) -> Summary:
    """Mean and sample standard deviation of the labels in a file.

    Raises InputError if the file is missing or empty, ParseError if a
    label is not an integer.
    """
    return summarize(label_values(path))
