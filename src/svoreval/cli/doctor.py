# Copyright (c) Syntropy Systems
"""svoreval doctor command."""

import os
import shutil

from rich.console import Console

from svoreval.config import find_config_file, load_config
from svoreval.errors import ConfigError

console = Console()


def doctor() -> None:
    """Check svoreval setup and diagnose issues.

    Verifies:
    - which config file is in effect
    - svm-train and svm-predict resolve to executables
    """
    issues: list[str] = []

    config_path = find_config_file()
    if config_path is None:
        console.print("[dim]•[/dim] No config file found, using defaults")
    else:
        console.print(f"[green]✓[/green] Config file: {config_path}")

    try:
        config = load_config()
    except ConfigError as e:
        console.print(f"[red]✗[/red] {e}")
        issues.append("Invalid config")
        config = None

    if config is not None:
        console.print(f"[dim]•[/dim] Trials per run: {config.trials}")
        search = config.tool_dir or os.environ.get("PATH", "")
        for command in (config.train_command, config.predict_command):
            found = shutil.which(command, path=search)
            if found:
                console.print(f"[green]✓[/green] {command}: {found}")
            else:
                where = config.tool_dir or "PATH"
                console.print(f"[red]✗[/red] {command} not found in {where}")
                issues.append(f"{command} missing")

    # Summary
    console.print()
    if issues:
        console.print(f"[red]Found {len(issues)} issue(s)[/red]")
        for issue in issues:
            console.print(f"  - {issue}")
    else:
        console.print("[green]All checks passed[/green]")
