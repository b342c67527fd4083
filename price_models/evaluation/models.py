"""Data models for evaluation module."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..backends.models import ModelConfig


@dataclass(frozen=True)
class PredictionMetrics:
    """All computed metrics for a set of predictions."""

    # Error metrics (lower is better), in target units
    rmse: float
    mae: float

    # Explanatory metrics
    r2: float  # Coefficient of determination (-inf, 1]

    # Metadata
    n_samples: int

    # Accuracy metrics (higher is better): {threshold: fraction within}
    accuracy: dict[float, float] = field(default_factory=dict)

    def get_accuracy(self, threshold: float) -> float | None:
        """Get accuracy at a specific threshold, or None if not computed."""
        return self.accuracy.get(threshold)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "rmse": round(self.rmse, 6),
            "mae": round(self.mae, 6),
            "r2": round(self.r2, 6),
            "n_samples": self.n_samples,
            "accuracy": {
                f"{threshold:.0%}": round(value, 4)
                for threshold, value in sorted(self.accuracy.items())
            },
        }


@dataclass(frozen=True)
class FoldScore:
    """RMSE of one configuration on one validation fold."""

    config: ModelConfig
    fold_index: int
    rmse: float
    n_validate: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "config": self.config.label,
            "fold": self.fold_index,
            "rmse": round(self.rmse, 6),
            "n_validate": self.n_validate,
        }
