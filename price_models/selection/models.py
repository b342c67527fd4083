"""Data models for selection module."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np

from ..backends.models import ModelConfig
from ..evaluation.models import FoldScore, PredictionMetrics
from ..resampling.models import Split


@dataclass(frozen=True)
class SelectorConfig:
    """Configuration for the model selector."""

    max_concurrent: int = 1
    """Maximum number of (config, fold) cells evaluated at the same time."""


@dataclass(frozen=True)
class ConfigSummary:
    """Cross-validated performance of one configuration."""

    config: ModelConfig
    mean_rmse: float
    std_err: float
    n_folds: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "config": self.config.to_dict(),
            "label": self.config.label,
            "mean_rmse": round(self.mean_rmse, 6),
            "std_err": round(self.std_err, 6),
            "n_folds": self.n_folds,
        }


@dataclass(frozen=True)
class SelectionResult:
    """
    Outcome of cross-validated model selection.

    `summaries` and `mean_scores` are in configuration declaration order;
    `fold_scores` is ordered by configuration, then fold index.
    """

    best_config: ModelConfig
    summaries: tuple[ConfigSummary, ...]
    fold_scores: tuple[FoldScore, ...]
    n_folds: int
    seed: int

    @property
    def mean_scores(self) -> dict[ModelConfig, float]:
        """Mean RMSE per configuration."""
        return {s.config: s.mean_rmse for s in self.summaries}

    @property
    def best_score(self) -> float:
        """Mean RMSE of the selected configuration."""
        return self.mean_scores[self.best_config]

    def get_summary(self, config: ModelConfig) -> ConfigSummary | None:
        """Get the summary for a configuration, or None if not evaluated."""
        for summary in self.summaries:
            if summary.config == config:
                return summary
        return None

    def ranking(self) -> list[ConfigSummary]:
        """Summaries sorted by mean RMSE ascending (ties keep declaration order)."""
        return sorted(self.summaries, key=lambda s: s.mean_rmse)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "best_config": self.best_config.to_dict(),
            "best_label": self.best_config.label,
            "best_mean_rmse": round(self.best_score, 6),
            "n_folds": self.n_folds,
            "seed": self.seed,
            "summaries": [s.to_dict() for s in self.summaries],
        }


@dataclass
class FinalEvaluation:
    """
    Selected configuration refit on the whole training subset and scored
    on the holdout subset.

    `predictions` and `actuals` are aligned with the holdout records and
    are what a plotting sink consumes.
    """

    config: ModelConfig
    model: Any
    rmse: float
    predictions: np.ndarray
    actuals: np.ndarray
    metrics: PredictionMetrics

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization (excludes arrays)."""
        return {
            "config": self.config.to_dict(),
            "label": self.config.label,
            "rmse": round(self.rmse, 6),
            "metrics": self.metrics.to_dict(),
        }


@dataclass
class WorkflowResult:
    """Everything produced by split -> select -> finalize."""

    split: Split
    selection: SelectionResult
    final: FinalEvaluation
    total_time_ms: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "split": self.split.to_dict(),
            "selection": self.selection.to_dict(),
            "final": self.final.to_dict(),
            "total_time_ms": round(self.total_time_ms, 2),
        }
