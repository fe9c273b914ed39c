# Copyright (c) Syntropy Systems
"""Error types raised by svoreval."""
from __future__ import annotations


class SvorEvalError(RuntimeError):
    """Base class for all svoreval failures."""


class ConfigError(SvorEvalError):
    """Bad or missing command-line arguments or configuration values."""


class InputError(SvorEvalError):
    """Dataset file is missing or holds no records."""


class ParseError(SvorEvalError):
    """A label is not an integer, or a tool report lacks its markers."""


class ComputationError(SvorEvalError):
    """A statistic cannot be computed (e.g. an empty test partition)."""


class ExternalToolError(SvorEvalError):
    """The external tool could not be started or exited non-zero."""

    command: list[str]
    exit_code: int | None
    output: str

    def __init__(
        self,
        message: str,
        command: list[str],
        exit_code: int | None = None,
        output: str = "",
    ) -> None:
        super().__init__(message)
        self.command = command
        self.exit_code = exit_code
        self.output = output
