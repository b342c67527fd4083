"""Feature encoder for converting records to model input matrices."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import numpy as np
import yaml

from .errors import (
    FeatureConfigError,
    MissingFieldError,
    UnknownCategoryError,
)
from .models import Dataset

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeatureSpec:
    """
    Declares which record fields are model features and how to encode them.

    Categorical fields map to their ordered levels. A level tuple of None
    means the levels are learned from the training records (sorted).
    """

    numeric_fields: tuple[str, ...] = ()
    categorical_fields: Mapping[str, tuple[str, ...] | None] = field(
        default_factory=dict
    )
    feature_order: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.feature_order:
            object.__setattr__(
                self,
                "feature_order",
                tuple(self.numeric_fields) + tuple(self.categorical_fields),
            )

        declared = set(self.numeric_fields) | set(self.categorical_fields)
        undeclared = [f for f in self.feature_order if f not in declared]
        if undeclared:
            raise FeatureConfigError(
                f"Fields in feature_order are neither numeric nor categorical: "
                f"{undeclared}"
            )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> FeatureSpec:
        """Build a spec from a parsed config mapping (e.g. a YAML `features:` block)."""
        categorical: dict[str, tuple[str, ...] | None] = {}
        raw_categorical = data.get("categorical_fields") or {}
        if isinstance(raw_categorical, list):
            raw_categorical = {name: None for name in raw_categorical}
        for name, levels in raw_categorical.items():
            categorical[name] = (
                tuple(str(level) for level in levels) if levels else None
            )

        return cls(
            numeric_fields=tuple(data.get("numeric_fields") or ()),
            categorical_fields=categorical,
            feature_order=tuple(data.get("feature_order") or ()),
        )

    @classmethod
    def from_yaml(cls, path: Path) -> FeatureSpec:
        """Load a spec from a YAML file."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except FileNotFoundError as e:
            raise FeatureConfigError(f"Feature config not found: {path}") from e
        except yaml.YAMLError as e:
            raise FeatureConfigError(f"Invalid YAML in feature config: {e}") from e

        if not isinstance(data, dict):
            raise FeatureConfigError(f"Feature config must be a mapping: {path}")

        # Allow either a bare spec or a `features:` section of an experiment file
        return cls.from_mapping(data.get("features", data))

    @classmethod
    def infer(cls, dataset: Dataset) -> FeatureSpec:
        """
        Infer a spec from the first record of a dataset.

        Numeric values (int/float, not bool) become numeric fields;
        everything else is treated as categorical with learned levels.
        """
        if len(dataset) == 0:
            raise FeatureConfigError("Cannot infer features from an empty dataset")

        numeric: list[str] = []
        categorical: dict[str, tuple[str, ...] | None] = {}
        first = dataset.records[0]
        for name in dataset.feature_names:
            value = first[name]
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                numeric.append(name)
            else:
                categorical[name] = None

        return cls(
            numeric_fields=tuple(numeric),
            categorical_fields=categorical,
            feature_order=tuple(dataset.feature_names),
        )


class FeatureEncoder:
    """
    Encodes record dicts into float64 matrices for model fitting.

    Outputs one column per field in feature_order: numeric values as-is,
    categorical values as the integer position of their level.
    Learned levels come from the records passed to fit().
    """

    def __init__(self, spec: FeatureSpec | None = None):
        """
        Initialize encoder.

        Args:
            spec: Feature specification. If None, inferred from the dataset
                passed to fit().
        """
        self._spec = spec
        self._mappings: dict[str, dict[str, int]] = {}
        self._fitted = False

    def fit(self, dataset: Dataset) -> FeatureEncoder:
        """Resolve the feature spec and categorical levels from training records."""
        if self._spec is None:
            self._spec = FeatureSpec.infer(dataset)

        if dataset.target in self._spec.feature_order:
            raise FeatureConfigError(
                f"Target field '{dataset.target}' cannot be used as a feature"
            )

        self._mappings = {}
        for name, levels in self._spec.categorical_fields.items():
            if name not in self._spec.feature_order:
                continue
            if levels is None:
                levels = tuple(sorted({str(v) for v in self._column(dataset, name)}))
            self._mappings[name] = {level: i for i, level in enumerate(levels)}

        self._fitted = True
        logger.debug(
            f"FeatureEncoder fitted with {self.get_feature_count()} features "
            f"on {len(dataset)} records"
        )
        return self

    @staticmethod
    def _column(dataset: Dataset, name: str) -> Iterable[Any]:
        for record in dataset.records:
            if name not in record:
                raise MissingFieldError(f"Missing required categorical field: '{name}'")
            yield record[name]

    def encode(self, records: Iterable[dict[str, Any]]) -> np.ndarray:
        """
        Encode a batch of records to a numpy array.

        Args:
            records: Record dicts (or a Dataset)

        Returns:
            np.ndarray of shape (n_records, n_features), dtype float64

        Raises:
            MissingFieldError: If a required field is missing
            UnknownCategoryError: If a categorical value is not a known level
        """
        if not self._fitted or self._spec is None:
            raise FeatureConfigError("FeatureEncoder.encode() called before fit()")

        batch = [self._encode_single(record) for record in records]
        if not batch:
            return np.empty((0, self.get_feature_count()), dtype=np.float64)
        return np.array(batch, dtype=np.float64)

    def _encode_single(self, record: dict[str, Any]) -> list[float]:
        """Encode a single record according to feature_order."""
        assert self._spec is not None
        features = []
        for name in self._spec.feature_order:
            if name not in record:
                raise MissingFieldError(f"Missing required field: '{name}'")
            if name in self._mappings:
                features.append(float(self._encode_categorical(name, record[name])))
            else:
                features.append(float(record[name]))
        return features

    def _encode_categorical(self, name: str, value: Any) -> int:
        mapping = self._mappings[name]
        key = str(value)
        if key not in mapping:
            raise UnknownCategoryError(
                f"Unknown value '{value}' for field '{name}'. "
                f"Valid values: {list(mapping.keys())}"
            )
        return mapping[key]

    def get_feature_names(self) -> list[str]:
        """Return ordered list of feature names."""
        if self._spec is None:
            return []
        return list(self._spec.feature_order)

    def get_feature_count(self) -> int:
        """Return total number of columns in encoded output."""
        return len(self.get_feature_names())

    def get_categorical_mapping(self, name: str) -> dict[str, int]:
        """Return level mapping for a categorical field."""
        if name not in self._mappings:
            raise FeatureConfigError(f"No mapping for field: {name}")
        return self._mappings[name].copy()
