# Copyright (c) Syntropy Systems
"""svoreval init command."""

from pathlib import Path

import typer
import yaml
from rich.console import Console

from svoreval.config import CONFIG_DIR_NAME, CONFIG_FILE_NAME, EvalConfig

console = Console()


def init(
    path: Path = typer.Argument(
        Path(),
        help="Directory to initialize (default: current directory)",
    ),
) -> None:
    """Write a default .svoreval/config.yaml.

    Edit it to set the number of trials, the tool directory or a seed.
    """
    target = path.resolve()
    config_dir = target / CONFIG_DIR_NAME
    config_path = config_dir / CONFIG_FILE_NAME

    if config_path.exists():
        console.print(f"[yellow]Already initialized:[/yellow] {config_dir}")
        return

    config_dir.mkdir(parents=True, exist_ok=True)

    with config_path.open("w") as f:
        yaml.dump(EvalConfig().to_dict(), f, default_flow_style=False)

    console.print(f"[green]Initialized svoreval config:[/green] {config_path}")
