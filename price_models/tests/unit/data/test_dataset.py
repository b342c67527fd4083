"""Tests for Dataset."""

import numpy as np
import pytest

from price_models.data import Dataset, MissingTargetError, SchemaMismatchError


class TestConstruction:
    """Tests for Dataset validation at construction."""

    def test_from_records(self):
        """Records are stored in order with default row ids."""
        ds = Dataset.from_records([{"x": 1.0, "price": 10.0}, {"x": 2.0, "price": 20.0}])

        assert len(ds) == 2
        assert ds.records[1]["x"] == 2.0
        assert ds.row_ids == (0, 1)
        assert ds.target == "price"

    def test_empty_dataset_allowed(self):
        """An empty dataset is valid; splitting it is what fails."""
        ds = Dataset.from_records([])

        assert len(ds) == 0
        assert ds.feature_names == []
        assert ds.targets.shape == (0,)

    def test_missing_target_field_raises_error(self):
        """Records without the target field are rejected."""
        with pytest.raises(MissingTargetError, match="price"):
            Dataset.from_records([{"x": 1.0}])

    def test_none_target_raises_error(self):
        """A None target value is rejected."""
        with pytest.raises(MissingTargetError, match="Record 1"):
            Dataset.from_records([{"x": 1.0, "price": 1.0}, {"x": 2.0, "price": None}])

    def test_non_numeric_target_raises_error(self):
        """A target that can't be converted to float is rejected."""
        with pytest.raises(MissingTargetError, match="non-numeric"):
            Dataset.from_records([{"x": 1.0, "price": "expensive"}])

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), "-inf"])
    def test_non_finite_target_raises_error(self, value):
        """NaN and infinite targets are rejected like missing ones."""
        records = [{"x": float(i), "price": 1.0} for i in range(5)]
        records[3]["price"] = value

        with pytest.raises(MissingTargetError, match="Record 3 has non-finite"):
            Dataset.from_records(records)

    def test_schema_mismatch_raises_error(self):
        """Records with different field sets are rejected."""
        records = [
            {"x": 1.0, "price": 1.0},
            {"x": 2.0, "y": 3.0, "price": 2.0},
        ]
        with pytest.raises(SchemaMismatchError, match="extra=\\['y'\\]"):
            Dataset.from_records(records)

    def test_custom_target(self):
        """Target field name is configurable."""
        ds = Dataset.from_records([{"carat": 0.5, "value": 900}], target="value")

        assert ds.feature_names == ["carat"]
        np.testing.assert_array_equal(ds.targets, [900.0])

    def test_row_ids_length_mismatch_raises_error(self):
        """Explicit row ids must match the record count."""
        with pytest.raises(ValueError, match="row_ids length mismatch"):
            Dataset(records=({"price": 1.0},), row_ids=(0, 1))


class TestSubset:
    """Tests for Dataset.subset."""

    def test_subset_keeps_original_row_ids(self, small_dataset):
        """Row ids follow records through nested subsets."""
        first = small_dataset.subset([5, 10, 15])
        second = first.subset([2, 0])

        assert first.row_ids == (5, 10, 15)
        assert second.row_ids == (15, 5)
        assert [r["id"] for r in second.records] == [15, 5]

    def test_subset_does_not_modify_parent(self, small_dataset):
        """Subsetting leaves the parent unchanged."""
        before = list(small_dataset.records)
        small_dataset.subset([0, 1])

        assert list(small_dataset.records) == before
        assert len(small_dataset) == 20

    def test_targets_and_feature_names(self, small_dataset):
        """targets is a float array; feature_names excludes the target."""
        assert small_dataset.feature_names == ["id", "x"]
        assert small_dataset.targets.dtype == np.float64
        assert small_dataset.targets[3] == 7.0

    def test_iteration(self, small_dataset):
        """Iterating yields records in order."""
        ids = [r["id"] for r in small_dataset]
        assert ids == list(range(20))
