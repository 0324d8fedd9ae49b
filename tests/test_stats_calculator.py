"""Tests for descriptive statistics."""

import pytest

from stat_profiler.exceptions import InputError
from stat_profiler.profiling.column_classifier import ColumnClassifier, NumericColumn
from stat_profiler.profiling.stats_calculator import StatsCalculator, group_values


def _column(values, missing=0):
    return NumericColumn(
        name='x',
        values=tuple(float(v) for v in values),
        row_indices=tuple(range(len(values))),
        missing_values=missing
    )


class TestComputeDescriptive:

    def test_known_values(self):
        stats = StatsCalculator.compute_descriptive(_column([2, 4, 6, 8, 10]))

        assert stats.count == 5
        assert stats.mean == pytest.approx(6.0)
        assert stats.median == pytest.approx(6.0)
        assert stats.variance == pytest.approx(10.0)
        assert stats.std == pytest.approx(3.16227766, rel=1e-6)
        assert stats.quartiles == pytest.approx((4.0, 6.0, 8.0))
        assert stats.min == 2.0
        assert stats.max == 10.0

    def test_ordering(self):
        stats = StatsCalculator.compute_descriptive(_column([3.1, -2, 7.5, 0.2, 11, 4.4, 4.4]))
        q1, q2, q3 = stats.quartiles
        assert stats.min <= q1 <= q2 <= q3 <= stats.max
        assert stats.median == q2
        assert stats.std >= 0

    def test_single_value_has_no_variance(self):
        stats = StatsCalculator.compute_descriptive(_column([5]))
        assert stats.variance is None
        assert stats.std is None
        assert stats.mode == 5.0

    def test_empty_column(self):
        with pytest.raises(InputError):
            StatsCalculator.compute_descriptive(_column([]))

    def test_missing_count_carried(self):
        stats = StatsCalculator.compute_descriptive(_column([1, 2], missing=3))
        assert stats.to_dict()['missingValues'] == 3
        assert stats.to_dict()['imputationMethod'] == 'none'


class TestMode:

    def test_most_frequent(self):
        assert StatsCalculator.compute_mode([1, 3, 3, 2]) == 3

    def test_ties_go_to_smallest(self):
        assert StatsCalculator.compute_mode([5, 5, 2, 2, 9]) == 2
        assert StatsCalculator.compute_mode([4, 1, 3]) == 1


class TestGroups:

    def test_group_values_aligns_rows(self, housing_dataset):
        groups = group_values(housing_dataset, 'Rooms', 'Region')
        # row 6 has no Rooms, row 7 has no Region
        assert groups == {'North': [1.0, 2.0], 'South': [3.0, 4.0], 'East': [5.0, 6.0]}

    def test_group_summary(self, grouped_dataset):
        summaries = StatsCalculator.group_summary(grouped_dataset, 'score', 'group')
        assert [s.label for s in summaries] == ['A', 'B', 'C']
        assert summaries[1].mean == pytest.approx(5.0)
        assert summaries[2].quartiles == pytest.approx((7.5, 8.0, 8.5))
        assert summaries[0].to_dict()['count'] == 3

    def test_group_column_must_be_categorical(self):
        dataset = ColumnClassifier.build_dataset(
            ['a', 'b'], [{'a': 1, 'b': 2}, {'a': 3, 'b': 4}]
        )
        with pytest.raises(InputError):
            group_values(dataset, 'a', 'b')
