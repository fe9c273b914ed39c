# Copyright (c) Syntropy Systems
"""Main CLI entry point for svoreval."""

import typer

from svoreval.cli.doctor import doctor
from svoreval.cli.init_cmd import init
from svoreval.cli.labels import labels
from svoreval.cli.run_cmd import run

app = typer.Typer(
    name="svoreval",
    help=(
        "Repeated train/test evaluation of an ordinal SVM against a "
        "majority-class baseline."
    ),
    no_args_is_help=True,
    add_completion=False,
)

# Register commands
_ = app.command()(run)
_ = app.command()(labels)
_ = app.command()(init)
_ = app.command()(doctor)


if __name__ == "__main__":
    app()
