"""Tests for CSV loading and synthetic data generation."""

import numpy as np
import pytest

from price_models.data import (
    DataLoadError,
    MissingTargetError,
    load_csv,
    make_linear_dataset,
)


class TestLoadCsv:
    """Tests for load_csv."""

    def test_loads_numeric_and_string_columns(self, tmp_path):
        """Numeric columns become numbers, others stay strings."""
        path = tmp_path / "diamonds.csv"
        path.write_text("carat,cut,price\n0.23,Ideal,326\n0.21,Premium,326\n")

        ds = load_csv(path)

        assert len(ds) == 2
        assert ds.records[0] == {"carat": 0.23, "cut": "Ideal", "price": 326.0}
        np.testing.assert_array_equal(ds.targets, [326.0, 326.0])

    def test_categorical_columns_kept_as_strings(self, tmp_path):
        """Columns listed as categorical aren't converted."""
        path = tmp_path / "homes.csv"
        path.write_text("zip,beds,price\n02139,3,500000\n")

        ds = load_csv(path, categorical=["zip"])

        assert ds.records[0]["zip"] == "02139"
        assert ds.records[0]["beds"] == 3.0

    def test_empty_target_cell_raises_error(self, tmp_path):
        """A blank target cell is read as NaN and rejected."""
        path = tmp_path / "homes.csv"
        path.write_text("sqft,price\n1200,500000\n900,\n")

        with pytest.raises(MissingTargetError, match="Record 1"):
            load_csv(path)

    def test_empty_file_raises_error(self, tmp_path):
        """A file without even a header raises DataLoadError."""
        path = tmp_path / "blank.csv"
        path.write_text("")

        with pytest.raises(DataLoadError, match="no header"):
            load_csv(path)

    def test_missing_file_raises_error(self, tmp_path):
        """Missing file raises DataLoadError."""
        with pytest.raises(DataLoadError, match="not found"):
            load_csv(tmp_path / "missing.csv")

    def test_missing_target_column_raises_error(self, tmp_path):
        """Header without the target column raises DataLoadError."""
        path = tmp_path / "no_target.csv"
        path.write_text("carat,cut\n0.23,Ideal\n")

        with pytest.raises(DataLoadError, match="Target column 'price'"):
            load_csv(path)

    def test_header_only_raises_error(self, tmp_path):
        """A file with no rows raises DataLoadError."""
        path = tmp_path / "empty.csv"
        path.write_text("carat,price\n")

        with pytest.raises(DataLoadError, match="no rows"):
            load_csv(path)


class TestMakeLinearDataset:
    """Tests for make_linear_dataset."""

    def test_shape_and_fields(self):
        """One signal feature, K noise features, and the target."""
        ds = make_linear_dataset(50, n_noise_features=3, seed=1)

        assert len(ds) == 50
        assert ds.feature_names == ["x", "z1", "z2", "z3"]

    def test_same_seed_same_data(self):
        """Generation is reproducible from the seed."""
        assert make_linear_dataset(30, seed=5).records == make_linear_dataset(30, seed=5).records

    def test_noise_free_target_is_exact(self):
        """With zero noise the target is exactly slope * x."""
        ds = make_linear_dataset(20, slope=3.0, noise_sd=0.0, seed=2)

        x = np.array([r["x"] for r in ds.records])
        np.testing.assert_allclose(ds.targets, 3.0 * x)

    def test_invalid_arguments(self):
        """Non-positive n or negative noise is rejected."""
        with pytest.raises(ValueError):
            make_linear_dataset(0)
        with pytest.raises(ValueError):
            make_linear_dataset(10, noise_sd=-1.0)
