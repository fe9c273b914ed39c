# Copyright (c) Syntropy Systems
"""Dataset loading, shuffling and train/test splitting."""
from __future__ import annotations

import logging
import math
import tempfile
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from svoreval.errors import InputError, ParseError

if TYPE_CHECKING:
    import random
    from collections.abc import Iterable, Sequence

logger = logging.getLogger(__name__)

# Round-trip arbitrary bytes through str without loss
ENCODING = "utf-8"
ENCODING_ERRORS = "surrogateescape"


@dataclass(frozen=True)
class Record:
    """One dataset line: a label token followed by an opaque payload."""

    line: str

    @property
    def label(self) -> str:
        """First whitespace-delimited token of the line."""
        return self.line.split(maxsplit=1)[0]

    @property
    def label_value(self) -> int:
        """The label as an ordinal integer."""
        return parse_label(self.label)


def parse_label(label: str) -> int:
    """Convert a label token to an integer, raising ParseError otherwise."""
    try:
        return int(label)
    except ValueError as e:
        msg = f"Label is not an integer: {label!r}"
        raise ParseError(msg) from e


def read_records(path: Path) -> list[Record]:
    """Read every non-blank line of a dataset file as a Record.

    Lines keep their exact content (minus the newline) so they can be
    written back unchanged.
    """
    if not path.is_file():
        msg = f"Dataset file not found: {path}"
        raise InputError(msg)

    with path.open(encoding=ENCODING, errors=ENCODING_ERRORS, newline="") as f:
        text = f.read()

    return [Record(line) for line in text.split("\n") if line.strip()]


def load_dataset(path: Path) -> list[Record]:
    """Load a dataset, raising InputError if it is missing or empty."""
    records = read_records(path)
    if not records:
        msg = f"Dataset file is empty: {path}"
        raise InputError(msg)
    logger.debug("Loaded %d records from %s", len(records), path)
    return records


def write_records(path: Path, records: Iterable[Record]) -> None:
    """Write records one per line, overwriting any existing file."""
    with path.open("w", encoding=ENCODING, errors=ENCODING_ERRORS, newline="") as f:
        for record in records:
            _ = f.write(record.line)
            _ = f.write("\n")


def train_size(n: int, fraction: float) -> int:
    """Number of training records for a dataset of n records.

    Halves round away from zero; at least one record always goes to
    training.
    """
    return max(1, math.floor(n * fraction + 0.5))


@dataclass
class Split:
    """A partition of a shuffled dataset into train and test records."""

    train: list[Record]
    test: list[Record]


def split_dataset(
    records: Sequence[Record],
    fraction: float,
    rng: random.Random,
) -> Split:
    """Shuffle a copy of records and cut it at the train boundary."""
    shuffled = list(records)
    rng.shuffle(shuffled)

    k = train_size(len(shuffled), fraction)
    return Split(train=shuffled[:k], test=shuffled[k:])


@dataclass(frozen=True)
class TrialPaths:
    """Files used by a single trial."""

    train: Path
    test: Path
    model: Path


class PathPolicy(Protocol):
    """Decides where a trial writes its train, test and model files."""

    def trial_paths(self, trial: int) -> AbstractContextManager[TrialPaths]:
        ...


class FixedPathPolicy:
    """Derive <dataset>.train, <dataset>.test and <dataset>.model.

    The same paths are reused and overwritten by every trial.
    """

    dataset_path: Path

    def __init__(self, dataset_path: Path) -> None:
        self.dataset_path = dataset_path

    def paths(self) -> TrialPaths:
        """Return the fixed artifact paths."""
        base = str(self.dataset_path)
        return TrialPaths(
            train=Path(f"{base}.train"),
            test=Path(f"{base}.test"),
            model=Path(f"{base}.model"),
        )

    @contextmanager
    def trial_paths(self, trial: int) -> Iterator[TrialPaths]:
        """Yield the fixed paths; nothing is cleaned up afterwards."""
        _ = trial
        yield self.paths()


class TempDirPathPolicy:
    """Write each trial's artifacts to a fresh temporary directory.

    The directory and its contents are removed when the trial ends.
    """

    dataset_path: Path

    def __init__(self, dataset_path: Path) -> None:
        self.dataset_path = dataset_path

    @contextmanager
    def trial_paths(self, trial: int) -> Iterator[TrialPaths]:
        """Yield paths inside a temporary directory for this trial."""
        name = self.dataset_path.name
        with tempfile.TemporaryDirectory(prefix=f"svoreval-trial{trial}-") as tmpdir:
            root = Path(tmpdir)
            yield TrialPaths(
                train=root / f"{name}.train",
                test=root / f"{name}.test",
                model=root / f"{name}.model",
            )
