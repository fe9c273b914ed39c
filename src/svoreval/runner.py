# Copyright (c) Syntropy Systems
"""External tool invocation with orphan prevention."""
from __future__ import annotations

import contextlib
import ctypes
import logging
import os
import shutil
import signal
import subprocess
import sys
import time
from pathlib import Path
from typing import Protocol

from svoreval.errors import ExternalToolError

logger = logging.getLogger(__name__)


def setup_pdeathsig() -> None:
    """Set PDEATHSIG so child dies when parent dies.

    This prevents orphan tool processes when svoreval is killed.
    Only works on Linux.
    """
    if sys.platform != "linux":
        return
    try:
        libc = ctypes.CDLL("libc.so.6", use_errno=True)
        pr_set_pdeathsig = 1
        libc.prctl(pr_set_pdeathsig, signal.SIGKILL)
    except (AttributeError, OSError):
        # Can't set PDEATHSIG, continue without it
        return


class ToolRunner:
    """Runs one tool command and captures its combined output.

    Features:
    - Uses start_new_session=True for reliable process group
    - Sets PDEATHSIG on Linux to prevent orphans
    - Captures stdout and stderr together
    - Terminates the whole process group on interrupt
    """

    command_argv: list[str]
    _process: subprocess.Popen[str] | None
    _exit_code: int | None

    def __init__(self, command_argv: list[str]) -> None:
        """Initialize a tool runner.

        Args:
            command_argv: Command as list of argv tokens (no shell)

        """
        self.command_argv = command_argv
        self._process = None
        self._exit_code = None

    def start(self) -> None:
        """Start the tool process."""
        try:
            self._process = subprocess.Popen(  # noqa: S603
                self.command_argv,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                start_new_session=True,  # Creates new process group
                preexec_fn=setup_pdeathsig if sys.platform == "linux" else None,  # noqa: PLW1509
            )
        except OSError as e:
            msg = f"Could not start {self.command_argv[0]}: {e}"
            raise ExternalToolError(msg, self.command_argv) from e

    def communicate(self) -> str:
        """Block until the process exits and return its output.

        On KeyboardInterrupt the process group is killed before re-raising.
        """
        if self._process is None:
            return ""

        try:
            output, _ = self._process.communicate()
        except KeyboardInterrupt:
            _ = self.kill()
            raise

        self._exit_code = self._process.returncode
        return output or ""

    def kill(self, grace_period: float = 2.0) -> int:
        """Kill the tool process.

        First sends SIGTERM to the process group, waits for grace_period,
        then sends SIGKILL if still alive.

        Returns:
            Exit code (negative signal number if killed)

        """
        if self._process is None:
            return self._exit_code or 0

        if self._process.poll() is not None:
            self._exit_code = self._process.returncode or 0
            return self._exit_code

        try:
            pgid = os.getpgid(self._process.pid)
        except (OSError, ProcessLookupError):
            return self._exit_code or -signal.SIGKILL

        with contextlib.suppress(OSError, ProcessLookupError):
            os.killpg(pgid, signal.SIGTERM)

        deadline = time.time() + grace_period
        while time.time() < deadline:
            if self._process.poll() is not None:
                self._exit_code = self._process.returncode or 0
                return self._exit_code
            time.sleep(0.1)

        # Still alive - SIGKILL
        with contextlib.suppress(OSError, ProcessLookupError):
            os.killpg(pgid, signal.SIGKILL)

        with contextlib.suppress(subprocess.TimeoutExpired):
            _ = self._process.wait(timeout=5.0)

        self._exit_code = self._process.returncode or -signal.SIGKILL
        return self._exit_code

    @property
    def exit_code(self) -> int | None:
        """Get the exit code if finished."""
        return self._exit_code


def resolve_tool(command: str, tool_dir: str | None = None) -> str:
    """Resolve a tool name to an executable path.

    With tool_dir set, only that directory is searched; otherwise PATH.
    Raises ExternalToolError if no executable is found.
    """
    found = shutil.which(command, path=tool_dir) if tool_dir else shutil.which(command)
    if found is None:
        where = tool_dir if tool_dir else "PATH"
        msg = f"External tool not found: {command} (searched {where})"
        raise ExternalToolError(msg, [command])
    return found


def run_tool(argv: list[str]) -> str:
    """Run a tool to completion and return its combined output.

    Raises ExternalToolError if the tool cannot start or exits non-zero.
    """
    logger.debug("Running %s", " ".join(argv))
    runner = ToolRunner(argv)
    runner.start()
    output = runner.communicate()

    if runner.exit_code != 0:
        msg = f"{Path(argv[0]).name} exited with status {runner.exit_code}"
        raise ExternalToolError(msg, argv, exit_code=runner.exit_code, output=output)

    return output


class ExternalModelAdapter(Protocol):
    """Train/predict interface to an ordinal model implementation."""

    def train(self, train_path: Path, model_path: Path) -> str:
        """Train a model and return the raw training log."""
        ...

    def predict(self, data_path: Path, model_path: Path) -> str:
        """Score a data file and return the summary report text."""
        ...


class SvmToolAdapter:
    """Drives the svm-train / svm-predict command-line tools."""

    train_command: str
    predict_command: str
    train_flags: list[str]
    tool_dir: str | None
    output_sink: str

    def __init__(
        self,
        train_command: str = "svm-train",
        predict_command: str = "svm-predict",
        train_flags: list[str] | None = None,
        tool_dir: str | None = None,
        output_sink: str = os.devnull,
    ) -> None:
        self.train_command = train_command
        self.predict_command = predict_command
        self.train_flags = ["-s", "5", "-t", "0"] if train_flags is None else train_flags
        self.tool_dir = tool_dir
        self.output_sink = output_sink

    def train(self, train_path: Path, model_path: Path) -> str:
        """Run svm-train on train_path, writing model_path."""
        exe = resolve_tool(self.train_command, self.tool_dir)
        return run_tool([exe, *self.train_flags, str(train_path), str(model_path)])

    def predict(self, data_path: Path, model_path: Path) -> str:
        """Run svm-predict, discarding per-record predictions."""
        exe = resolve_tool(self.predict_command, self.tool_dir)
        return run_tool([exe, str(data_path), str(model_path), self.output_sink])
