"""Tests for t-tests, z-test and one-way ANOVA."""

import pytest

from stat_profiler.exceptions import InputError, NumericDegeneracyError
from stat_profiler.inference.hypothesis_tests import (
    ALPHA,
    one_sample_t_test,
    one_way_anova,
    run_test,
    two_sample_t_test,
    z_test,
)


class TestTTests:

    def test_one_sample_known_statistic(self):
        result = one_sample_t_test([1, 2, 3, 4, 5])

        assert result.statistic == pytest.approx(4.242640687, rel=1e-6)
        assert result.degrees_of_freedom == 4
        assert result.p_value < ALPHA
        assert result.reject_null

    def test_one_sample_against_population_mean(self):
        result = one_sample_t_test([1, 2, 3, 4, 5], popmean=3)
        assert result.statistic == pytest.approx(0.0)
        assert result.p_value == pytest.approx(1.0)
        assert not result.reject_null

    def test_two_sample_pooled(self):
        result = two_sample_t_test([1, 2, 3], [4, 5, 6])

        assert result.statistic == pytest.approx(-3.674234614, rel=1e-6)
        assert result.degrees_of_freedom == 4
        assert 0 <= result.p_value <= 1

    def test_two_sample_zero_pooled_variance(self):
        with pytest.raises(NumericDegeneracyError):
            two_sample_t_test([2, 2], [3, 3])

    def test_too_few_values(self):
        with pytest.raises(InputError):
            one_sample_t_test([1])

    def test_constant_sample(self):
        with pytest.raises(NumericDegeneracyError):
            one_sample_t_test([4, 4, 4])


def test_z_test_uses_normal_tail():
    result = z_test([1, 2, 3, 4, 5])
    assert result.statistic == pytest.approx(4.242640687, rel=1e-6)
    assert result.degrees_of_freedom is None
    assert result.p_value < one_sample_t_test([1, 2, 3, 4, 5]).p_value
    assert 'degreesOfFreedom' not in result.to_dict()


class TestAnova:

    def test_separated_groups(self):
        values = [1, 2, 3, 4, 5, 6, 7, 8, 9]
        groups = ['A'] * 3 + ['B'] * 3 + ['C'] * 3
        result = one_way_anova(values, groups)

        assert result.ssb == pytest.approx(24.0)
        assert result.ssw == pytest.approx(6.0)
        assert result.df_between == 2
        assert result.df_within == 6
        assert result.statistic == pytest.approx(12.0)
        assert result.p_value < ALPHA

    def test_sum_of_squares_partition(self):
        values = [2.5, 3.1, 4.0, 1.2, 6.6, 5.3, 4.4, 3.9]
        groups = ['x', 'y', 'x', 'z', 'y', 'z', 'x', 'y']
        result = one_way_anova(values, groups)

        mean = sum(values) / len(values)
        sst = sum((v - mean) ** 2 for v in values)
        assert result.ssb + result.ssw == pytest.approx(sst)

    def test_identical_groups(self):
        result = one_way_anova([1, 2, 3, 1, 2, 3], ['A'] * 3 + ['B'] * 3)
        assert result.statistic == pytest.approx(0.0)
        assert result.p_value > ALPHA
        assert 'Fail to reject' in result.conclusion

    def test_single_group(self):
        with pytest.raises(InputError):
            one_way_anova([1, 2, 3], ['A', 'A', 'A'])

    def test_zero_within_variance(self):
        with pytest.raises(NumericDegeneracyError):
            one_way_anova([1, 1, 2, 2], ['A', 'A', 'B', 'B'])

    def test_to_dict(self):
        result = one_way_anova([1, 2, 3, 4, 5, 6], ['A'] * 3 + ['B'] * 3)
        data = result.to_dict()
        assert data['fStatistic'] == data['statistic']
        assert data['groupMeans'] == [
            {'group': 'A', 'mean': 2.0, 'n': 3},
            {'group': 'B', 'mean': 5.0, 'n': 3},
        ]


class TestRunTest:

    def test_anova_from_dataset(self, grouped_dataset):
        result = run_test(grouped_dataset, 'anova', 'score', group_column='group')
        assert result.test_type == 'One-way ANOVA'
        assert [g.label for g in result.groups] == ['A', 'B', 'C']

    def test_anova_requires_group_column(self, grouped_dataset):
        with pytest.raises(InputError):
            run_test(grouped_dataset, 'anova', 'score')

    def test_two_sample_from_dataset(self, housing_dataset):
        result = run_test(housing_dataset, 'ttest', 'Price', second_column='Rooms')
        assert result.test_type == 'Two-sample t-test'
        assert result.degrees_of_freedom == 8 + 7 - 2

    def test_unknown_kind(self, housing_dataset):
        with pytest.raises(InputError):
            run_test(housing_dataset, 'chisq', 'Price')

    def test_categorical_column_rejected(self, housing_dataset):
        with pytest.raises(InputError):
            run_test(housing_dataset, 'ttest', 'Region')


def test_one_sample_even_numbers():
    result = one_sample_t_test([2, 4, 6, 8, 10])
    assert result.statistic == pytest.approx(4.2426, abs=1e-4)
    assert result.degrees_of_freedom == 4
