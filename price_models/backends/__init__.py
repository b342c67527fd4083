"""
Model backends implementing the fit/predict capability.

Registered families:
- "linear": ordinary least squares (scikit-learn LinearRegression)
- "forest": random forest (scikit-learn RandomForestRegressor), tuned via mtry

Usage:
    from price_models.backends import ModelConfig, fit_model, predict_model

    model = fit_model(train, ModelConfig.create("forest", mtry=3))
    predictions = predict_model(model, holdout.records)
"""

# Importing the family modules registers them
from . import forest, linear  # noqa: F401
from .base import (
    FitFn,
    ModelBackend,
    PredictFn,
    backend_functions,
    fit_model,
    get_backend,
    get_registered_families,
    model_family,
    predict_model,
)
from .errors import BackendError, InvalidHyperparameterError, UnknownModelFamilyError
from .estimator import EstimatorBackend
from .forest import ForestBackend
from .linear import LinearBackend
from .models import BoundModel, FittedModel, ModelConfig

__all__ = [
    # Default collaborators
    "fit_model",
    "predict_model",
    "backend_functions",
    # Registry
    "model_family",
    "get_backend",
    "get_registered_families",
    # Backends
    "ModelBackend",
    "EstimatorBackend",
    "LinearBackend",
    "ForestBackend",
    "FitFn",
    "PredictFn",
    # Models
    "ModelConfig",
    "FittedModel",
    "BoundModel",
    # Errors
    "BackendError",
    "UnknownModelFamilyError",
    "InvalidHyperparameterError",
]
