# Copyright (c) Syntropy Systems
"""svoreval labels command."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from svoreval.distribution import label_distribution
from svoreval.errors import SvorEvalError

console = Console()

USAGE = "Usage: svoreval labels file"


def labels(
    dataset: Optional[Path] = typer.Argument(
        None,
        help="Dataset file whose first column holds integer labels",
        show_default=False,
    ),
) -> None:
    """Print the mean and standard deviation of a dataset's labels.

    Output is a LaTeX cell such as '2.1667 $\\pm$ 0.9832'.
    """
    if dataset is None:
        console.print(USAGE, markup=False, highlight=False)
        raise typer.Exit(1)

    try:
        summary = label_distribution(dataset)
    except SvorEvalError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e

    console.print(summary.latex(), markup=False, highlight=False)
