"""Data models for resampling module."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..data.models import Dataset


@dataclass(frozen=True)
class Split:
    """Disjoint train/holdout partition of a dataset."""

    train: Dataset
    holdout: Dataset
    proportion: float
    seed: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization (sizes only)."""
        return {
            "proportion": self.proportion,
            "seed": self.seed,
            "n_train": len(self.train),
            "n_holdout": len(self.holdout),
        }


@dataclass(frozen=True)
class FoldAssignment:
    """
    One (train, validate) pair of a v-fold partition.

    `validate` is fold `index`; `train` is the union of all other folds.
    """

    index: int
    train: Dataset
    validate: Dataset

    def __repr__(self) -> str:
        return (
            f"FoldAssignment(index={self.index}, "
            f"train={len(self.train)}, validate={len(self.validate)})"
        )
