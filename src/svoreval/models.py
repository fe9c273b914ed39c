# Copyright (c) Syntropy Systems
"""Pydantic models for trial results and aggregate statistics."""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field


class SvorBaseModel(BaseModel):
    """Base model with shared config for svoreval schemas."""

    model_config: ClassVar[ConfigDict] = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        frozen=True,
    )


class TrialResult(SvorBaseModel):
    """Outcome of one train/test trial."""

    trial: int
    train_size: int
    test_size: int
    majority_class: str
    baseline_accuracy: float = Field(ge=0.0, le=1.0)
    baseline_mae: float = Field(ge=0.0)
    svor_accuracy: float
    svor_mae: float
    train_mae: float


class Summary(SvorBaseModel):
    """Mean and sample standard deviation of a metric."""

    mean: float
    stddev: float

    def human(self) -> str:
        """Render as 'mean ± stddev'."""
        return f"{self.mean} ± {self.stddev}"

    def latex(self, digits: int = 4) -> str:
        """Render as 'mean $\\pm$ stddev' rounded to digits places."""
        return f"{round(self.mean, digits)} $\\pm$ {round(self.stddev, digits)}"


class AggregateStatistics(SvorBaseModel):
    """Statistics over all trials of a run."""

    baseline: Summary
    svor: Summary
    train: Summary
    baseline_values: list[float] = Field(default_factory=list)
    svor_values: list[float] = Field(default_factory=list)
    train_values: list[float] = Field(default_factory=list)

    def latex_lines(self) -> list[str]:
        """Baseline and SVOR MAE as LaTeX table cells."""
        return [
            f"{self.baseline.latex()}\\\\",
            self.svor.latex(),
        ]
