"""Tests for model configs, the family registry and scikit-learn backends."""

import numpy as np
import pytest

from price_models.backends import (
    BoundModel,
    FittedModel,
    InvalidHyperparameterError,
    ModelBackend,
    ModelConfig,
    UnknownModelFamilyError,
    backend_functions,
    fit_model,
    get_backend,
    get_registered_families,
    model_family,
    predict_model,
)
from price_models.backends import base
from price_models.data import Dataset, FeatureSpec, UnknownCategoryError
from price_models.selection import run_workflow


class TestModelConfig:
    """Tests for ModelConfig."""

    def test_equal_and_hashable(self):
        """Param order doesn't affect equality or hashing."""
        a = ModelConfig.create("forest", mtry=3, trees=100)
        b = ModelConfig("forest", {"trees": 100, "mtry": 3})

        assert a == b
        assert len({a, b}) == 1

    def test_label(self):
        assert ModelConfig("linear").label == "linear()"
        assert str(ModelConfig.create("forest", mtry=3)) == "forest(mtry=3)"

    def test_unhashable_param_raises_error(self):
        """List values are rejected when the config is built."""
        with pytest.raises(InvalidHyperparameterError, match="hashable"):
            ModelConfig.create("forest", mtry=[1, 2])

    def test_get_and_to_dict(self):
        config = ModelConfig.create("forest", mtry=2)

        assert config.get("mtry") == 2
        assert config.get("trees", 500) == 500
        assert config.to_dict() == {"family": "forest", "params": {"mtry": 2}}


class TestRegistry:
    """Tests for the model family registry."""

    def test_builtin_families_registered(self):
        assert {"linear", "forest"} <= set(get_registered_families())

    def test_get_backend_satisfies_protocol(self):
        assert isinstance(get_backend("linear"), ModelBackend)

    def test_unknown_family_raises_error(self):
        with pytest.raises(UnknownModelFamilyError, match="boosting"):
            get_backend("boosting")

    @pytest.fixture
    def mean_family(self, monkeypatch):
        """Register a 'mean' family whose fitted model is a bare float."""
        monkeypatch.setattr(base, "_BACKEND_REGISTRY", dict(base._BACKEND_REGISTRY))

        @model_family("mean")
        class MeanBackend:
            def __init__(self, feature_spec=None):
                pass

            def fit(self, train, config):
                return float(train.targets.mean())

            def predict(self, model, records):
                return np.full(len(records), model)

        return MeanBackend

    def test_register_custom_family(self, mean_family, small_dataset):
        """fit_model and predict_model both go through the family's backend."""
        model = fit_model(small_dataset, ModelConfig("mean"))
        predictions = predict_model(model, small_dataset.records[:2])

        assert "mean" in get_registered_families()
        assert isinstance(model.backend, mean_family)
        assert model.fitted == pytest.approx(20.0)
        assert predictions.tolist() == [20.0, 20.0]

    def test_custom_family_in_workflow(self, mean_family, small_dataset):
        """A custom family runs end to end with the default collaborators."""
        result = run_workflow(small_dataset, [ModelConfig("mean")], v=3, seed=1)

        assert result.selection.best_config == ModelConfig("mean")
        assert result.final.predictions.shape == (len(result.split.holdout),)


class TestLinearBackend:
    """Tests for the linear family."""

    def test_recovers_slope(self):
        """Noise-free y = 3x + 1 is fitted exactly."""
        train = Dataset.from_records(
            [{"x": float(i), "price": 3.0 * i + 1.0} for i in range(10)]
        )

        model = fit_model(train, ModelConfig("linear"))
        predictions = predict_model(model, [{"x": 20.0}])

        assert isinstance(model, BoundModel)
        assert isinstance(model.fitted, FittedModel)
        assert predictions == pytest.approx([61.0])

    def test_rejects_hyperparameters(self, small_dataset):
        with pytest.raises(InvalidHyperparameterError, match="Unsupported"):
            fit_model(small_dataset, ModelConfig.create("linear", mtry=1))


class TestForestBackend:
    """Tests for the forest family."""

    def test_fit_and_predict(self, linear_dataset):
        """Predictions have one value per record and are deterministic."""
        config = ModelConfig.create("forest", mtry=2, trees=20, seed=3)

        first = predict_model(fit_model(linear_dataset, config), linear_dataset.records[:10])
        second = predict_model(fit_model(linear_dataset, config), linear_dataset.records[:10])

        assert first.shape == (10,)
        np.testing.assert_array_equal(first, second)

    def test_mtry_above_feature_count_raises_error(self, linear_dataset):
        """linear_dataset has six features."""
        with pytest.raises(InvalidHyperparameterError, match="mtry"):
            fit_model(linear_dataset, ModelConfig.create("forest", mtry=7, trees=5))

    @pytest.mark.parametrize("value", [0, 1.5, True])
    def test_invalid_mtry_raises_error(self, linear_dataset, value):
        with pytest.raises(InvalidHyperparameterError):
            fit_model(linear_dataset, ModelConfig.create("forest", mtry=value, trees=5))

    def test_unsupported_param_raises_error(self, linear_dataset):
        with pytest.raises(InvalidHyperparameterError, match="depth"):
            fit_model(linear_dataset, ModelConfig.create("forest", depth=3))


class TestBackendFunctions:
    """Tests for backend_functions."""

    def test_default_pair(self):
        assert backend_functions() == (fit_model, predict_model)

    def test_feature_spec_applied(self):
        """Declared levels allow encoding a level absent from train."""
        train = Dataset.from_records(
            [
                {"cut": "Good", "carat": 0.3, "price": 400.0},
                {"cut": "Ideal", "carat": 0.5, "price": 900.0},
                {"cut": "Good", "carat": 0.4, "price": 500.0},
            ]
        )
        spec = FeatureSpec(
            numeric_fields=("carat",),
            categorical_fields={"cut": ("Fair", "Good", "Ideal")},
        )
        fit_fn, predict_fn = backend_functions(spec)

        model = fit_fn(train, ModelConfig("linear"))
        predictions = predict_fn(model, [{"cut": "Fair", "carat": 0.2}])

        assert predictions.shape == (1,)

    def test_inferred_levels_reject_unseen_category(self):
        """Without a spec, levels come from the training subset."""
        train = Dataset.from_records(
            [
                {"cut": "Good", "price": 400.0},
                {"cut": "Ideal", "price": 900.0},
            ]
        )
        model = fit_model(train, ModelConfig("linear"))

        with pytest.raises(UnknownCategoryError):
            predict_model(model, [{"cut": "Fair"}])
