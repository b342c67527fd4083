"""
Random forest backend.

Hyperparameters:
- mtry: number of features sampled as split candidates at each node
  (1 <= mtry <= number of features)
- trees: number of trees (default 500)
- min_n: minimum records in a node for it to be split further (default 5)
- seed: random_state for bootstrap and feature sampling (default 0)
"""

from __future__ import annotations

from sklearn.ensemble import RandomForestRegressor

from .base import model_family
from .errors import InvalidHyperparameterError
from .estimator import EstimatorBackend, int_param
from .models import ModelConfig

DEFAULT_TREES = 500
DEFAULT_MIN_N = 5


@model_family("forest")
class ForestBackend(EstimatorBackend):
    """Random forest regression with per-split feature sampling."""

    supported_params = frozenset({"mtry", "trees", "min_n", "seed"})

    def build_estimator(
        self, config: ModelConfig, n_features: int
    ) -> RandomForestRegressor:
        mtry = int_param(config, "mtry", default=n_features)
        if mtry > n_features:
            raise InvalidHyperparameterError(
                f"forest.mtry must be <= number of features ({n_features}), got {mtry}"
            )

        return RandomForestRegressor(
            n_estimators=int_param(config, "trees", default=DEFAULT_TREES),
            max_features=mtry,
            min_samples_split=int_param(config, "min_n", default=DEFAULT_MIN_N, minimum=2),
            random_state=int_param(config, "seed", default=0, minimum=0),
        )
