"""
Resampling module for train/holdout splits and v-fold cross-validation.

Every function takes an explicit seed and builds its own generator from it;
no global random state is read or modified.

Usage:
    from price_models.resampling import split, make_folds

    s = split(dataset, proportion=0.75, seed=1126)
    folds = make_folds(s.train, v=5, seed=1126)
"""

from .errors import (
    EmptyDatasetError,
    InvalidFoldCountError,
    InvalidProportionError,
    ResamplingError,
)
from .folds import fold_sizes, make_folds
from .models import FoldAssignment, Split
from .splitter import split, train_size

__all__ = [
    # Operations
    "split",
    "make_folds",
    "train_size",
    "fold_sizes",
    # Models
    "Split",
    "FoldAssignment",
    # Errors
    "ResamplingError",
    "InvalidProportionError",
    "EmptyDatasetError",
    "InvalidFoldCountError",
]
