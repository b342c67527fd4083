"""Tests for v-fold partitioning."""

from collections import Counter

import pytest

from price_models.resampling import (
    EmptyDatasetError,
    InvalidFoldCountError,
    fold_sizes,
    make_folds,
)


def ids(dataset):
    return {r["id"] for r in dataset.records}


class TestFoldSizes:
    """Tests for the fold allocation policy."""

    def test_even(self):
        assert fold_sizes(750, 5) == [150] * 5

    def test_remainder_goes_to_first_folds(self):
        """The first n mod v folds get one extra record."""
        assert fold_sizes(23, 5) == [5, 5, 5, 4, 4]


class TestMakeFolds:
    """Tests for make_folds."""

    def test_every_record_validated_exactly_once(self, id_dataset):
        """Validate sets partition the dataset."""
        folds = make_folds(id_dataset, 5, seed=1126)

        counts = Counter(i for f in folds for i in ids(f.validate))
        assert set(counts) == set(range(100))
        assert set(counts.values()) == {1}

    def test_train_is_complement_of_validate(self, id_dataset):
        """Each fold's train set is everything outside its validate set."""
        for fold in make_folds(id_dataset, 4, seed=5):
            assert ids(fold.train).isdisjoint(ids(fold.validate))
            assert ids(fold.train) | ids(fold.validate) == set(range(100))

    def test_indices_and_sizes(self, small_dataset):
        """Folds are indexed 0..v-1 and sizes differ by at most one."""
        folds = make_folds(small_dataset.subset(range(17)), 5, seed=0)

        assert [f.index for f in folds] == [0, 1, 2, 3, 4]
        assert [len(f.validate) for f in folds] == [4, 4, 3, 3, 3]

    def test_same_seed_same_folds(self, id_dataset):
        """Identical arguments give identical folds."""
        a = make_folds(id_dataset, 5, seed=7)
        b = make_folds(id_dataset, 5, seed=7)

        assert [ids(f.validate) for f in a] == [ids(f.validate) for f in b]

    def test_leave_one_out(self, small_dataset):
        """v equal to n gives single-record validate sets."""
        folds = make_folds(small_dataset, 20, seed=0)

        assert all(len(f.validate) == 1 for f in folds)

    @pytest.mark.parametrize("v", [0, 1, 21])
    def test_invalid_fold_count_raises_error(self, small_dataset, v):
        """v must be between 2 and the dataset size."""
        with pytest.raises(InvalidFoldCountError):
            make_folds(small_dataset, v, seed=0)

    def test_empty_dataset_raises_error(self, small_dataset):
        """An empty dataset fails before the fold count is checked."""
        with pytest.raises(EmptyDatasetError):
            make_folds(small_dataset.subset([]), 5, seed=0)

    def test_repr(self, small_dataset):
        fold = make_folds(small_dataset, 4, seed=0)[0]
        assert repr(fold) == "FoldAssignment(index=0, train=15, validate=5)"
