# Copyright (c) Syntropy Systems
"""Repeated train/test trials of an ordinal SVM against a majority baseline."""
from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from rich.console import Console

from svoreval.baseline import evaluate_baseline, format_histogram, label_histogram
from svoreval.dataset import (
    FixedPathPolicy,
    TempDirPathPolicy,
    load_dataset,
    split_dataset,
    write_records,
)
from svoreval.models import AggregateStatistics, TrialResult
from svoreval.report import parse_mae, parse_report
from svoreval.runner import SvmToolAdapter
from svoreval.stats import summarize

if TYPE_CHECKING:
    from pathlib import Path

    from svoreval.config import EvalConfig
    from svoreval.dataset import PathPolicy
    from svoreval.runner import ExternalModelAdapter

logger = logging.getLogger(__name__)


def echo(console: Console, text: str = "") -> None:
    """Write text to the console's file exactly as given, plus a newline.

    Bypasses Rich rendering so emoji codes, tabs and carriage returns in
    tool output come through unchanged.
    """
    _ = console.file.write(text.rstrip("\n") + "\n")
    console.file.flush()


def compare_accuracy(svor: float, baseline: float) -> str:
    """Sentence saying which predictor has the higher accuracy."""
    if svor > baseline:
        return f"SVOR is better than baseline by {svor - baseline} ACC"
    return f"Baseline is better than SVOR by {baseline - svor} ACC"


def compare_mae(svor: float, baseline: float) -> str:
    """Sentence saying which predictor has the lower mean absolute error."""
    if svor < baseline:
        return f"SVOR is better than baseline by {baseline - svor} MAE"
    return f"Baseline is better than SVOR by {svor - baseline} MAE"


class TrialAggregator:
    """Runs the trials of one experiment and accumulates their results.

    Every trial reloads and reshuffles the dataset from disk, so each one
    gets an independent partition. Trials run one after another; any
    error ends the run.
    """

    dataset_path: Path
    fraction: float
    adapter: ExternalModelAdapter
    path_policy: PathPolicy
    trials: int
    rng: random.Random
    console: Console
    results: list[TrialResult]

    def __init__(
        self,
        dataset_path: Path,
        fraction: float,
        adapter: ExternalModelAdapter,
        path_policy: PathPolicy | None = None,
        trials: int = 10,
        rng: random.Random | None = None,
        console: Console | None = None,
    ) -> None:
        self.dataset_path = dataset_path
        self.fraction = fraction
        self.adapter = adapter
        self.path_policy = path_policy or FixedPathPolicy(dataset_path)
        self.trials = trials
        self.rng = rng or random.Random()
        self.console = console or Console()
        self.results = []

    @property
    def baseline_maes(self) -> list[float]:
        return [r.baseline_mae for r in self.results]

    @property
    def svor_maes(self) -> list[float]:
        return [r.svor_mae for r in self.results]

    @property
    def train_maes(self) -> list[float]:
        return [r.train_mae for r in self.results]

    def run_trial(self, trial: int) -> TrialResult:
        """Run a single trial and record its result."""
        out = self.console
        records = load_dataset(self.dataset_path)
        split = split_dataset(records, self.fraction, self.rng)

        with self.path_policy.trial_paths(trial) as paths:
            logger.debug(
                "Trial %d: train=%s test=%s model=%s",
                trial,
                paths.train,
                paths.test,
                paths.model,
            )
            write_records(paths.train, split.train)
            write_records(paths.test, split.test)

            echo(out, f"Training set size: {len(split.train)}")
            echo(out, format_histogram(label_histogram(split.train)))
            echo(out, f"Testing set size: {len(split.test)}")
            echo(out, format_histogram(label_histogram(split.test)))
            echo(out)

            baseline = evaluate_baseline(split.train, split.test)

            echo(
                out,
                f"Majority class (in training = {baseline.majority_class}) "
                "baseline performance:",
            )
            echo(out, f"Accuracy (0-1): {baseline.accuracy}")
            echo(out, f"Mean absolute error: {baseline.mae}")
            echo(out)

            echo(out, "SVOR results:")
            echo(out, self.adapter.train(paths.train, paths.model))
            test_report = self.adapter.predict(paths.test, paths.model)
            echo(out, test_report)
            echo(out)
            svor = parse_report(test_report)

            train_report = self.adapter.predict(paths.train, paths.model)
            train_mae = parse_mae(train_report)

        echo(out, compare_accuracy(svor.accuracy, baseline.accuracy))
        echo(out, compare_mae(svor.mae, baseline.mae))

        result = TrialResult(
            trial=trial,
            train_size=len(split.train),
            test_size=len(split.test),
            majority_class=baseline.majority_class,
            baseline_accuracy=baseline.accuracy,
            baseline_mae=baseline.mae,
            svor_accuracy=svor.accuracy,
            svor_mae=svor.mae,
            train_mae=train_mae,
        )
        self.results.append(result)
        return result

    def run(self) -> AggregateStatistics:
        """Run all trials, print the summary and return the statistics."""
        for trial in range(1, self.trials + 1):
            self.console.rule(f"Trial {trial}/{self.trials}")
            _ = self.run_trial(trial)

        stats = self.statistics()
        self.print_summary(stats)
        return stats

    def statistics(self) -> AggregateStatistics:
        """Mean and sample standard deviation of the accumulated MAEs."""
        return AggregateStatistics(
            baseline=summarize(self.baseline_maes),
            svor=summarize(self.svor_maes),
            train=summarize(self.train_maes),
            baseline_values=self.baseline_maes,
            svor_values=self.svor_maes,
            train_values=self.train_maes,
        )

    def print_summary(self, stats: AggregateStatistics) -> None:
        """Print the mean ± stddev lines and the LaTeX cells."""
        out = self.console
        echo(out)
        echo(out, f"Baseline average MAE: {stats.baseline.human()}")
        echo(out, f"SVOR average MAE: {stats.svor.human()}")
        echo(out, f"SVOR average MAE on training set: {stats.train.human()}")
        echo(out)
        for line in stats.latex_lines():
            echo(out, line)


def build_path_policy(dataset_path: Path, config: EvalConfig) -> PathPolicy:
    """Pick the artifact path policy selected by the config."""
    if config.per_trial_dir:
        return TempDirPathPolicy(dataset_path)
    return FixedPathPolicy(dataset_path)


def build_adapter(config: EvalConfig) -> SvmToolAdapter:
    """Create the svm-train / svm-predict adapter from config."""
    return SvmToolAdapter(
        train_command=config.train_command,
        predict_command=config.predict_command,
        train_flags=list(config.train_flags),
        tool_dir=config.tool_dir,
    )


def run_experiment(
    dataset_path: Path,
    fraction: float,
    config: EvalConfig,
    adapter: ExternalModelAdapter | None = None,
    console: Console | None = None,
) -> AggregateStatistics:
    """Run the configured number of trials on a dataset."""
    aggregator = TrialAggregator(
        dataset_path=dataset_path,
        fraction=fraction,
        adapter=adapter or build_adapter(config),
        path_policy=build_path_policy(dataset_path, config),
        trials=config.trials,
        rng=random.Random(config.seed),
        console=console,
    )
    return aggregator.run()
