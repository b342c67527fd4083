"""
Seeded train/holdout splitting.

Rounding policy: the train subset gets floor(proportion * n + 0.5) records
(round half up), clamped to [1, n - 1] so both sides are non-empty whenever
the dataset has at least two records. A single-record dataset goes to train.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from ..data.models import Dataset
from .errors import EmptyDatasetError, InvalidProportionError
from .models import Split

logger = logging.getLogger(__name__)


def train_size(n: int, proportion: float) -> int:
    """Number of records assigned to train for a dataset of size n."""
    size = math.floor(proportion * n + 0.5)
    if n >= 2:
        return min(max(size, 1), n - 1)
    return n


def split(dataset: Dataset, proportion: float, seed: int) -> Split:
    """
    Partition a dataset into train and holdout subsets.

    A fresh generator is built from `seed`, so identical arguments always
    produce the identical partition. Both subsets keep the dataset's
    original record order.

    Args:
        dataset: Records to partition
        proportion: Target share of records for train, in (0, 1)
        seed: Seed for the permutation

    Returns:
        Split with disjoint train and holdout covering the dataset

    Raises:
        InvalidProportionError: If proportion is not in (0, 1)
        EmptyDatasetError: If dataset has no records

    Example:
        >>> s = split(dataset, 0.75, seed=1126)
        >>> len(s.train), len(s.holdout)
        (750, 250)
    """
    if not 0.0 < proportion < 1.0:
        raise InvalidProportionError(
            f"Proportion must be in (0, 1), got {proportion}"
        )

    n = len(dataset)
    if n == 0:
        raise EmptyDatasetError("Cannot split an empty dataset")

    rng = np.random.default_rng(seed)
    permutation = rng.permutation(n)
    n_train = train_size(n, proportion)

    train_positions = np.sort(permutation[:n_train])
    holdout_positions = np.sort(permutation[n_train:])

    result = Split(
        train=dataset.subset(train_positions),
        holdout=dataset.subset(holdout_positions),
        proportion=proportion,
        seed=seed,
    )

    logger.info(
        f"Split {n} records: {len(result.train)} train, "
        f"{len(result.holdout)} holdout (proportion={proportion}, seed={seed})"
    )
    return result
