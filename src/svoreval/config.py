# Copyright (c) Syntropy Systems
"""Configuration management for svoreval."""
from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import cast

import yaml

from svoreval.errors import ConfigError

CONFIG_DIR_NAME = ".svoreval"
CONFIG_FILE_NAME = "config.yaml"


def _default_train_flags() -> list[str]:
    # -s 5: ordinal regression, -t 0: linear kernel
    return ["-s", "5", "-t", "0"]


@dataclass
class EvalConfig:
    """Configuration for an evaluation run."""

    # Number of independent train/test trials
    trials: int = 10

    # Executable names, resolved against tool_dir or PATH
    train_command: str = "svm-train"
    predict_command: str = "svm-predict"

    # Hyper-parameter flags passed to the train tool
    train_flags: list[str] = field(default_factory=_default_train_flags)

    # Directory holding the tools (None: search PATH)
    tool_dir: str | None = None

    # Seed for the shuffle RNG (None: nondeterministic)
    seed: int | None = None

    # Write trial artifacts to a fresh temporary directory per trial
    per_trial_dir: bool = False

    def to_dict(self) -> dict[str, object]:
        """Return the config as a plain dict suitable for YAML."""
        return asdict(self)


def find_config_dir(start_path: Path | None = None) -> Path | None:
    """Find the nearest .svoreval directory by walking up from start_path.

    Returns None if no .svoreval directory is found.
    """
    if start_path is None:
        start_path = Path.cwd()

    current = start_path.resolve()

    while current != current.parent:
        config_dir = current / CONFIG_DIR_NAME
        if config_dir.is_dir():
            return config_dir
        current = current.parent

    # Check root
    config_dir = current / CONFIG_DIR_NAME
    if config_dir.is_dir():
        return config_dir

    return None


def get_global_config_dir() -> Path:
    """Get the global svoreval config directory (~/.svoreval)."""
    return Path.home() / CONFIG_DIR_NAME


def find_config_file(config_dir: Path | None = None) -> Path | None:
    """Locate the config file that load_config would read, if any."""
    if config_dir is not None:
        candidate = config_dir / CONFIG_FILE_NAME
        return candidate if candidate.exists() else None

    found_dir = find_config_dir()
    if found_dir is not None:
        candidate = found_dir / CONFIG_FILE_NAME
        if candidate.exists():
            return candidate

    global_config = get_global_config_dir() / CONFIG_FILE_NAME
    if global_config.exists():
        return global_config

    return None


def load_config(config_dir: Path | None = None) -> EvalConfig:
    """Load configuration from .svoreval/config.yaml or defaults.

    Looks for config in:
    1. Provided config_dir
    2. Nearest .svoreval directory walking up
    3. ~/.svoreval/config.yaml
    4. Defaults

    Keys with values of the wrong type are ignored.
    """
    config = EvalConfig()

    config_path = find_config_file(config_dir)
    if config_path is None:
        return config

    with config_path.open() as f:
        try:
            loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            msg = f"Invalid YAML in {config_path}: {e}"
            raise ConfigError(msg) from e

    data = cast("dict[str, object]", loaded if isinstance(loaded, dict) else {})

    trials = data.get("trials")
    if isinstance(trials, int) and not isinstance(trials, bool):
        if trials < 2:
            msg = f"trials must be at least 2, got {trials}"
            raise ConfigError(msg)
        config.trials = trials
    train_command = data.get("train_command")
    if isinstance(train_command, str):
        config.train_command = train_command
    predict_command = data.get("predict_command")
    if isinstance(predict_command, str):
        config.predict_command = predict_command
    train_flags = data.get("train_flags")
    if isinstance(train_flags, list):
        config.train_flags = [str(flag) for flag in cast("list[object]", train_flags)]
    tool_dir = data.get("tool_dir")
    if isinstance(tool_dir, str):
        config.tool_dir = tool_dir
    seed = data.get("seed")
    if isinstance(seed, int) and not isinstance(seed, bool):
        config.seed = seed
    per_trial_dir = data.get("per_trial_dir")
    if isinstance(per_trial_dir, bool):
        config.per_trial_dir = per_trial_dir

    return config


def parse_train_fraction(text: str) -> float:
    """Parse the train-fraction argument.

    Raises ConfigError unless the value is a finite number in (0, 1].
    """
    try:
        fraction = float(text)
    except ValueError as e:
        msg = f"Train fraction is not a number: {text!r}"
        raise ConfigError(msg) from e

    if not math.isfinite(fraction):
        msg = f"Train fraction must be finite, got {text!r}"
        raise ConfigError(msg)
    if not 0.0 < fraction <= 1.0:
        msg = f"Train fraction must be in (0, 1], got {fraction}"
        raise ConfigError(msg)

    return fraction
