# Copyright (c) Syntropy Systems
"""Pytest fixtures for svoreval tests."""

import os
import stat
import tempfile
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
import yaml

# Store original cwd at module load time
_original_cwd = Path.cwd()

FAKE_TRAIN = """#!/bin/sh
echo "optimization finished, #iter = 12"
echo "args: $*"
for last; do :; done
echo "fake model" > "$last"
"""

FAKE_PREDICT = """#!/bin/sh
echo "Accuracy = 50% ) (classification)"
echo "Mean absolute error = 0.5 (regression)"
"""


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def project(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """Change into an empty project directory with an isolated home."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))

    work = temp_dir / "work"
    work.mkdir()
    os.chdir(work)

    yield work

    # Always return to original cwd
    os.chdir(_original_cwd)


@pytest.fixture
def write_dataset(temp_dir: Path) -> Callable[..., Path]:
    """Return a helper that writes dataset lines to a file."""

    def _write(lines: list[str], name: str = "data.txt") -> Path:
        path = temp_dir / name
        _ = path.write_text("".join(f"{line}\n" for line in lines))
        return path

    return _write


def _write_script(path: Path, body: str) -> Path:
    _ = path.write_text(body)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def tool_dir(temp_dir: Path) -> Path:
    """Directory holding fake svm-train and svm-predict scripts."""
    tools = temp_dir / "tools"
    tools.mkdir()
    _ = _write_script(tools / "svm-train", FAKE_TRAIN)
    _ = _write_script(tools / "svm-predict", FAKE_PREDICT)
    return tools


@pytest.fixture
def write_config(project: Path) -> Callable[..., Path]:
    """Return a helper that writes .svoreval/config.yaml in the project."""

    def _write(**values: object) -> Path:
        config_dir = project / ".svoreval"
        config_dir.mkdir(exist_ok=True)
        path = config_dir / "config.yaml"
        with path.open("w") as f:
            yaml.dump(values, f, default_flow_style=False)
        return path

    return _write


FAILING_TRAIN = """#!/bin/sh
echo "Wrong input format at line 3" >&2
exit 1
"""


@pytest.fixture
def failing_tool_dir(temp_dir: Path) -> Path:
    """Directory whose svm-train reports an error on stderr and exits 1."""
    tools = temp_dir / "failing-tools"
    tools.mkdir()
    _ = _write_script(tools / "svm-train", FAILING_TRAIN)
    _ = _write_script(tools / "svm-predict", FAKE_PREDICT)
    return tools
