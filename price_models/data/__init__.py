"""Data module for price datasets and feature encoding."""

from .errors import (
    DataError,
    DataLoadError,
    FeatureConfigError,
    MissingFieldError,
    MissingTargetError,
    SchemaMismatchError,
    UnknownCategoryError,
)
from .feature_encoder import FeatureEncoder, FeatureSpec
from .loader import load_csv
from .models import DEFAULT_TARGET, Dataset, Record
from .synthetic import make_linear_dataset

__all__ = [
    # Errors
    "DataError",
    "DataLoadError",
    "FeatureConfigError",
    "MissingFieldError",
    "MissingTargetError",
    "SchemaMismatchError",
    "UnknownCategoryError",
    # Feature encoding
    "FeatureEncoder",
    "FeatureSpec",
    # Models
    "DEFAULT_TARGET",
    "Dataset",
    "Record",
    # Sources
    "load_csv",
    "make_linear_dataset",
]
