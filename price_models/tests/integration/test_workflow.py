"""End-to-end model selection on synthetic linear data with real backends."""

import numpy as np
import pytest

from price_models.backends import ModelConfig
from price_models.data import make_linear_dataset
from price_models.selection import SelectorConfig, default_configs, run_workflow

SEED = 1126
NOISE_SD = 1.0

pytestmark = pytest.mark.slow


@pytest.fixture(scope="module")
def dataset():
    """price = 3x + N(0, 1) with five pure-noise features."""
    return make_linear_dataset(1000, slope=3.0, noise_sd=NOISE_SD, seed=SEED)


@pytest.fixture(scope="module")
def result(dataset):
    configs = default_configs(seed=SEED, trees=100)
    return run_workflow(dataset, configs, proportion=0.75, v=5, seed=SEED)


class TestLinearData:
    """The linear model should win on data generated by a linear model."""

    def test_split_and_fold_sizes(self, result):
        assert len(result.split.train) == 750
        assert len(result.split.holdout) == 250
        assert all(s.n_validate == 150 for s in result.selection.fold_scores)
        assert len(result.selection.fold_scores) == 7 * 5

    def test_linear_selected(self, result):
        assert result.selection.best_config == ModelConfig("linear")

    def test_linear_beats_most_constrained_forest(self, result):
        scores = result.selection.mean_scores
        forest_1 = ModelConfig.create("forest", mtry=1, seed=SEED, trees=100)

        assert scores[ModelConfig("linear")] < 0.8 * scores[forest_1]

    def test_holdout_rmse_near_noise(self, result):
        """An unbiased fit leaves roughly the irreducible noise."""
        assert 0.5 * NOISE_SD < result.final.rmse < 2.0 * NOISE_SD
        assert result.final.metrics.r2 > 0.95

    def test_predictions_aligned_with_holdout(self, result):
        np.testing.assert_array_equal(result.final.actuals, result.split.holdout.targets)
        assert result.final.predictions.shape == (250,)

    def test_reproducible(self, dataset, result):
        """Same seed gives the same split, winner and holdout RMSE."""
        again = run_workflow(
            dataset,
            [ModelConfig("linear")],
            proportion=0.75,
            v=5,
            seed=SEED,
        )

        assert again.split.holdout.row_ids == result.split.holdout.row_ids
        assert again.final.rmse == pytest.approx(result.final.rmse)

    def test_concurrent_selection_matches(self, dataset, result):
        configs = [ModelConfig("linear")] + [
            ModelConfig.create("forest", mtry=m, seed=SEED, trees=100) for m in (1, 6)
        ]

        concurrent = run_workflow(
            dataset,
            configs,
            seed=SEED,
            selector_config=SelectorConfig(max_concurrent=4),
        )

        for config in configs:
            assert concurrent.selection.mean_scores[config] == pytest.approx(
                result.selection.mean_scores[config]
            )
