"""Shared fit/predict plumbing for scikit-learn estimators."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import numpy as np

from ..data.feature_encoder import FeatureEncoder, FeatureSpec
from ..data.models import Dataset, Record
from .errors import InvalidHyperparameterError
from .models import FittedModel, ModelConfig

logger = logging.getLogger(__name__)


class EstimatorBackend:
    """
    Base backend: encode records, fit a scikit-learn regressor, wrap it.

    Subclasses declare the hyperparameters they accept and build the
    estimator from a validated config.
    """

    supported_params: frozenset[str] = frozenset()

    def __init__(self, feature_spec: FeatureSpec | None = None):
        self.feature_spec = feature_spec

    def fit(self, train: Dataset, config: ModelConfig) -> FittedModel:
        """Encode `train`, fit the estimator for `config`, return the fitted model."""
        unknown = sorted(set(config.param_dict) - self.supported_params)
        if unknown:
            raise InvalidHyperparameterError(
                f"Unsupported hyperparameters for '{config.family}': {unknown}. "
                f"Supported: {sorted(self.supported_params)}"
            )

        encoder = FeatureEncoder(self.feature_spec).fit(train)
        features = encoder.encode(train.records)
        estimator = self.build_estimator(config, n_features=features.shape[1])
        estimator.fit(features, train.targets)

        logger.debug(
            f"Fitted {config.label} on {features.shape[0]} records, "
            f"{features.shape[1]} features"
        )
        return FittedModel(
            config=config,
            encoder=encoder,
            estimator=estimator,
            n_train=len(train),
        )

    def predict(self, model: FittedModel, records: Sequence[Record]) -> np.ndarray:
        """Predict one value per record."""
        return model.predict(records)

    def build_estimator(self, config: ModelConfig, n_features: int) -> Any:
        """Create an unfitted estimator for a validated config."""
        raise NotImplementedError


def int_param(config: ModelConfig, name: str, default: int, minimum: int = 1) -> int:
    """Read an integer hyperparameter, enforcing a lower bound."""
    value = config.get(name, default)
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidHyperparameterError(
            f"{config.family}.{name} must be an integer, got {value!r}"
        )
    if value < minimum:
        raise InvalidHyperparameterError(
            f"{config.family}.{name} must be >= {minimum}, got {value}"
        )
    return int(value)
