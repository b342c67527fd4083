"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np
import pytest

from price_models.backends import ModelConfig
from price_models.data import Dataset, make_linear_dataset


@dataclass
class ConstantModel:
    """Predicts a fixed offset from each record's true target."""

    config: ModelConfig
    train_ids: frozenset[int]
    offset: float


@dataclass
class ScriptedBackend:
    """
    fit/predict collaborators with scripted per-config errors.

    Every prediction equals the record's actual target plus the config's
    offset, so the RMSE of any fold is exactly abs(offset).
    Records must carry an integer "id" field.
    """

    offsets: dict[ModelConfig, float] = field(default_factory=dict)
    fail_fit_on: ModelConfig | None = None
    fail_predict_on: ModelConfig | None = None
    fit_calls: list[tuple[ModelConfig, frozenset[int]]] = field(default_factory=list)
    predict_calls: list[tuple[ModelConfig, tuple[int, ...]]] = field(
        default_factory=list
    )

    def fit(self, train: Dataset, config: ModelConfig) -> ConstantModel:
        train_ids = frozenset(r["id"] for r in train.records)
        self.fit_calls.append((config, train_ids))
        if config == self.fail_fit_on:
            raise RuntimeError("solver did not converge")
        return ConstantModel(config, train_ids, self.offsets.get(config, 0.0))

    def predict(self, model: ConstantModel, records: Sequence[dict[str, Any]]):
        self.predict_calls.append((model.config, tuple(r["id"] for r in records)))
        if model.config == self.fail_predict_on:
            raise KeyError("unseen category")
        return np.array([r["price"] + model.offset for r in records])


def make_id_dataset(n: int) -> Dataset:
    """Records with an id, one feature, and price = 2x + 1."""
    return Dataset.from_records(
        [{"id": i, "x": float(i), "price": 2.0 * i + 1.0} for i in range(n)]
    )


@pytest.fixture
def small_dataset() -> Dataset:
    """Twenty records with ids 0..19."""
    return make_id_dataset(20)


@pytest.fixture
def id_dataset() -> Dataset:
    """Hundred records with ids 0..99."""
    return make_id_dataset(100)


@pytest.fixture
def linear_dataset() -> Dataset:
    """Synthetic linear data: price = 3x + N(0, 1), five noise features."""
    return make_linear_dataset(200, seed=7)


@pytest.fixture
def scripted_backend() -> ScriptedBackend:
    """Backend whose fold RMSE is controlled by per-config offsets."""
    return ScriptedBackend()
