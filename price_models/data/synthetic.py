"""Synthetic datasets with a known generating process."""

from __future__ import annotations

import numpy as np

from .models import DEFAULT_TARGET, Dataset


def make_linear_dataset(
    n: int = 1000,
    *,
    slope: float = 3.0,
    noise_sd: float = 1.0,
    n_noise_features: int = 5,
    seed: int = 1126,
    target: str = DEFAULT_TARGET,
) -> Dataset:
    """
    Generate records where the target is linear in one feature.

    target = slope * x + N(0, noise_sd), with x ~ U(0, 10).
    Additional features z1..zK are independent U(0, 10) noise, so tree
    models that sample few features per split mostly split on noise.

    Example:
        >>> ds = make_linear_dataset(1000, seed=1126)
        >>> len(ds), ds.feature_names[:2]
        (1000, ['x', 'z1'])
    """
    if n < 1:
        raise ValueError(f"n must be positive, got {n}")
    if noise_sd < 0:
        raise ValueError(f"noise_sd must be non-negative, got {noise_sd}")

    rng = np.random.default_rng(seed)
    x = rng.uniform(0.0, 10.0, size=n)
    noise_features = rng.uniform(0.0, 10.0, size=(n, n_noise_features))
    y = slope * x + rng.normal(0.0, noise_sd, size=n)

    records = []
    for i in range(n):
        record: dict[str, float] = {"x": float(x[i])}
        for j in range(n_noise_features):
            record[f"z{j + 1}"] = float(noise_features[i, j])
        record[target] = float(y[i])
        records.append(record)

    return Dataset.from_records(records, target=target)
