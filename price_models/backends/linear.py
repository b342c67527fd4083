"""Ordinary least squares backend."""

from __future__ import annotations

from sklearn.linear_model import LinearRegression

from .base import model_family
from .estimator import EstimatorBackend
from .models import ModelConfig


@model_family("linear")
class LinearBackend(EstimatorBackend):
    """Linear regression with intercept. Takes no hyperparameters."""

    supported_params = frozenset()

    def build_estimator(self, config: ModelConfig, n_features: int) -> LinearRegression:
        return LinearRegression()
