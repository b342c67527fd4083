"""
V-fold partitioning for cross-validation.

Allocation policy: a seeded permutation of record positions is cut into v
contiguous chunks; the first (n mod v) chunks get one extra record. Fold
sizes therefore differ by at most one.
"""

from __future__ import annotations

import logging

import numpy as np

from ..data.models import Dataset
from .errors import EmptyDatasetError, InvalidFoldCountError
from .models import FoldAssignment

logger = logging.getLogger(__name__)


def fold_sizes(n: int, v: int) -> list[int]:
    """Size of each of v folds over n records."""
    base, remainder = divmod(n, v)
    return [base + 1 if i < remainder else base for i in range(v)]


def make_folds(dataset: Dataset, v: int, seed: int) -> tuple[FoldAssignment, ...]:
    """
    Build v (train, validate) assignments over a dataset.

    Args:
        dataset: Records to partition (normally the train side of a Split)
        v: Number of folds, 2 <= v <= len(dataset)
        seed: Seed for the permutation

    Returns:
        Tuple of v FoldAssignments, ordered by fold index

    Raises:
        EmptyDatasetError: If dataset has no records
        InvalidFoldCountError: If v is out of range
    """
    n = len(dataset)
    if n == 0:
        raise EmptyDatasetError("Cannot build folds over an empty dataset")
    if v < 2 or v > n:
        raise InvalidFoldCountError(
            f"Fold count must be between 2 and {n} (dataset size), got {v}"
        )

    rng = np.random.default_rng(seed)
    permutation = rng.permutation(n)

    chunks: list[np.ndarray] = []
    start = 0
    for size in fold_sizes(n, v):
        chunks.append(permutation[start : start + size])
        start += size

    assignments = []
    for i, chunk in enumerate(chunks):
        validate_positions = np.sort(chunk)
        train_positions = np.sort(
            np.concatenate([c for j, c in enumerate(chunks) if j != i])
        )
        assignments.append(
            FoldAssignment(
                index=i,
                train=dataset.subset(train_positions),
                validate=dataset.subset(validate_positions),
            )
        )

    logger.debug(
        f"Built {v} folds over {n} records "
        f"(sizes {min(len(c) for c in chunks)}-{max(len(c) for c in chunks)})"
    )
    return tuple(assignments)
