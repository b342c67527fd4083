"""Data models for tabular price datasets."""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from .errors import MissingTargetError, SchemaMismatchError

# Field validation happens in FeatureEncoder
Record = dict[str, Any]

DEFAULT_TARGET = "price"


@dataclass(frozen=True)
class Dataset:
    """
    Ordered, read-only collection of records with a numeric target field.

    Every record must have the same set of fields and a non-missing target.
    `row_ids` holds each record's position in the originally loaded dataset
    and is carried through every subset, so two subsets can be compared for
    overlap by identity even when records are equal by value.
    """

    records: tuple[Record, ...]
    target: str = DEFAULT_TARGET
    row_ids: tuple[int, ...] = field(default=())

    def __post_init__(self) -> None:
        records = tuple(self.records)
        object.__setattr__(self, "records", records)

        if not self.row_ids:
            object.__setattr__(self, "row_ids", tuple(range(len(records))))
        elif len(self.row_ids) != len(records):
            raise ValueError(
                f"row_ids length mismatch: {len(self.row_ids)} ids "
                f"for {len(records)} records"
            )

        self._validate()

    def _validate(self) -> None:
        if not self.records:
            return

        expected = set(self.records[0].keys())
        if self.target not in expected:
            raise MissingTargetError(
                f"Target field '{self.target}' missing from record 0"
            )

        for i, record in enumerate(self.records):
            fields = set(record.keys())
            if fields != expected:
                missing = sorted(expected - fields)
                extra = sorted(fields - expected)
                raise SchemaMismatchError(
                    f"Record {i} fields differ from record 0: "
                    f"missing={missing}, extra={extra}"
                )
            value = record[self.target]
            if value is None:
                raise MissingTargetError(f"Record {i} has no '{self.target}' value")
            try:
                number = float(value)
            except (TypeError, ValueError) as e:
                raise MissingTargetError(
                    f"Record {i} has non-numeric '{self.target}': {value!r}"
                ) from e
            if not math.isfinite(number):
                raise MissingTargetError(
                    f"Record {i} has non-finite '{self.target}': {value!r}"
                )

    @classmethod
    def from_records(
        cls, records: Sequence[Record], target: str = DEFAULT_TARGET
    ) -> Dataset:
        """Build a dataset from a sequence of record dicts."""
        return cls(records=tuple(records), target=target)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)

    def __repr__(self) -> str:
        return f"Dataset({len(self.records)} records, target={self.target!r})"

    def subset(self, positions: Sequence[int] | np.ndarray) -> Dataset:
        """
        Select records by position in this dataset.

        Positions are taken in the order given; row ids follow their records.
        """
        positions = [int(p) for p in positions]
        return Dataset(
            records=tuple(self.records[p] for p in positions),
            target=self.target,
            row_ids=tuple(self.row_ids[p] for p in positions),
        )

    @property
    def targets(self) -> np.ndarray:
        """Extract target values as a float64 array."""
        return np.array([float(r[self.target]) for r in self.records], dtype=np.float64)

    @property
    def feature_names(self) -> list[str]:
        """Field names other than the target, in first-record order."""
        if not self.records:
            return []
        return [name for name in self.records[0] if name != self.target]
