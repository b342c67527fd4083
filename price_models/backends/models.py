"""Data models for model backends."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from ..data.feature_encoder import FeatureEncoder
from .errors import InvalidHyperparameterError


@dataclass(frozen=True)
class ModelConfig:
    """
    A model family plus its hyperparameter values.

    Immutable and hashable; two configs are equal when family and params
    match. `params` may be given as a mapping and is stored as a tuple of
    (name, value) pairs sorted by name.

    Example:
        >>> ModelConfig("forest", {"mtry": 3}) == ModelConfig("forest", {"mtry": 3})
        True
        >>> ModelConfig("forest", {"mtry": 3}).label
        'forest(mtry=3)'
    """

    family: str
    params: tuple[tuple[str, Any], ...] = field(default=())

    def __post_init__(self) -> None:
        params = self.params
        if isinstance(params, Mapping):
            params = params.items()
        params = tuple(sorted(params))
        try:
            hash(params)
        except TypeError as e:
            raise InvalidHyperparameterError(
                f"Hyperparameter values for '{self.family}' must be hashable "
                f"(use tuples, not lists): {dict(params)}"
            ) from e
        object.__setattr__(self, "params", params)

    @classmethod
    def create(cls, family: str, **params: Any) -> ModelConfig:
        """Build a config from keyword hyperparameters."""
        return cls(family, params)

    @property
    def param_dict(self) -> dict[str, Any]:
        """Hyperparameters as a plain dict."""
        return dict(self.params)

    def get(self, name: str, default: Any = None) -> Any:
        """Get one hyperparameter value."""
        return self.param_dict.get(name, default)

    @property
    def label(self) -> str:
        """Short human-readable name, e.g. 'forest(mtry=3)'."""
        args = ", ".join(f"{k}={v}" for k, v in self.params)
        return f"{self.family}({args})"

    def __str__(self) -> str:
        return self.label

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"family": self.family, "params": self.param_dict}


@dataclass
class FittedModel:
    """
    A fitted estimator bundled with the encoder that produced its inputs.

    Produced by a backend's fit(); only predict() is part of its contract.
    """

    config: ModelConfig
    encoder: FeatureEncoder
    estimator: Any
    n_train: int = 0

    def predict(self, records) -> np.ndarray:
        """Predict target values for records."""
        features = self.encoder.encode(records)
        return np.asarray(self.estimator.predict(features), dtype=np.float64)

    def __repr__(self) -> str:
        return f"<FittedModel {self.config.label} n_train={self.n_train}>"


@dataclass
class BoundModel:
    """
    A fitted model paired with the backend instance that produced it.

    Returned by fit_model so that predict_model can hand the fitted model
    back to the same family's backend.predict.
    """

    config: ModelConfig
    backend: Any
    fitted: Any

    def predict(self, records) -> np.ndarray:
        """Predict target values for records via the owning backend."""
        return np.asarray(self.backend.predict(self.fitted, records), dtype=np.float64)

    def __repr__(self) -> str:
        return f"<BoundModel {self.config.label} backend={type(self.backend).__name__}>"
