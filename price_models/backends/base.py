"""Model backend capability and family registry.

Each backend class is registered via the @model_family decorator. The name
must match the `family` of the ModelConfig objects it should handle.

Backends are the only place that knows about a modeling library; the
resampling and selection code only ever calls fit_fn / predict_fn.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Protocol, runtime_checkable

import numpy as np

from ..data.feature_encoder import FeatureSpec
from ..data.models import Dataset, Record
from .errors import UnknownModelFamilyError
from .models import BoundModel, ModelConfig

# fit(train_records, config) -> fitted model
FitFn = Callable[[Dataset, ModelConfig], Any]
# predict(fitted_model, records) -> predicted scalars
PredictFn = Callable[[Any, Sequence[Record]], Any]


@runtime_checkable
class ModelBackend(Protocol):
    """Fit/predict capability for one model family."""

    def fit(self, train: Dataset, config: ModelConfig) -> Any:
        """Fit a model on the training records."""
        ...

    def predict(self, model: Any, records: Sequence[Record]) -> np.ndarray:
        """Predict one scalar per record."""
        ...


# Registry of backend factories keyed by family name
_BACKEND_REGISTRY: dict[str, Callable[..., ModelBackend]] = {}


def model_family(name: str):
    """
    Decorator to register a backend class for a model family.

    Usage:
        @model_family("linear")
        class LinearBackend:
            def __init__(self, feature_spec=None): ...
            def fit(self, train, config): ...
            def predict(self, model, records): ...
    """

    def decorator(cls):
        _BACKEND_REGISTRY[name] = cls
        return cls

    return decorator


def get_registered_families() -> list[str]:
    """Return list of all registered model family names."""
    return list(_BACKEND_REGISTRY.keys())


def get_backend(family: str, feature_spec: FeatureSpec | None = None) -> ModelBackend:
    """
    Instantiate the backend registered for a family.

    Raises:
        UnknownModelFamilyError: If no backend is registered under `family`
    """
    factory = _BACKEND_REGISTRY.get(family)
    if factory is None:
        raise UnknownModelFamilyError(
            f"No backend registered for model family '{family}'. "
            f"Available: {get_registered_families()}"
        )
    return factory(feature_spec=feature_spec)


# --- Default collaborators ---


def _fit_with(backend: ModelBackend, train: Dataset, config: ModelConfig) -> BoundModel:
    return BoundModel(config=config, backend=backend, fitted=backend.fit(train, config))


def fit_model(train: Dataset, config: ModelConfig) -> BoundModel:
    """Fit `config` on `train` using the registered backend for its family."""
    return _fit_with(get_backend(config.family), train, config)


def predict_model(model: BoundModel, records: Sequence[Record]) -> np.ndarray:
    """Predict with a model produced by fit_model, via the backend that fitted it."""
    return model.predict(records)


def backend_functions(
    feature_spec: FeatureSpec | None = None,
) -> tuple[FitFn, PredictFn]:
    """
    Build (fit_fn, predict_fn) that dispatch through the registry.

    Args:
        feature_spec: Features every backend should encode. None infers
            them from each training subset.
    """
    if feature_spec is None:
        return fit_model, predict_model

    def fit_fn(train: Dataset, config: ModelConfig) -> BoundModel:
        return _fit_with(get_backend(config.family, feature_spec), train, config)

    return fit_fn, predict_model
