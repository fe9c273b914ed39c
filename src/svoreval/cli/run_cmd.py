# Copyright (c) Syntropy Systems
"""svoreval run command."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from svoreval.config import load_config, parse_train_fraction
from svoreval.errors import ExternalToolError, SvorEvalError
from svoreval.experiment import echo, run_experiment

console = Console()

USAGE = "Usage: svoreval run file percent-train"


def run(
    dataset: Optional[Path] = typer.Argument(
        None,
        help="Dataset file, one '<label> <features...>' record per line",
        show_default=False,
    ),
    train_fraction: Optional[str] = typer.Argument(
        None,
        help="Fraction of records used for training, in (0, 1]",
        show_default=False,
    ),
) -> None:
    """Evaluate an ordinal SVM against a majority-class baseline.

    Shuffles and splits the dataset for each trial, writes
    DATASET.train / DATASET.test, trains with svm-train, scores with
    svm-predict and prints the mean and standard deviation of the MAE.

    Example:
        svoreval run grades.txt 0.8

    """
    if dataset is None or train_fraction is None:
        console.print(USAGE, markup=False, highlight=False)
        raise typer.Exit(1)

    try:
        fraction = parse_train_fraction(train_fraction)
        config = load_config()
        _ = run_experiment(dataset, fraction, config, console=console)
    except ExternalToolError as e:
        if e.output:
            echo(console, e.output)
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e
    except SvorEvalError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e
