"""Tests for z-score standardization."""

import numpy as np
import pytest

from stat_profiler.exceptions import NumericDegeneracyError
from stat_profiler.profiling.column_classifier import NumericColumn
from stat_profiler.profiling.standardizer import Standardizer
from stat_profiler.profiling.stats_calculator import StatsCalculator


def _column(name, values):
    return NumericColumn(
        name=name,
        values=tuple(float(v) for v in values),
        row_indices=tuple(range(len(values))),
        missing_values=0
    )


def test_standardized_mean_zero_std_one():
    column = _column('x', [2, 4, 6, 8, 10, 13.5])
    result = Standardizer.standardize(column, StatsCalculator.compute_descriptive(column))

    z = result.as_array()
    assert z.mean() == pytest.approx(0.0, abs=1e-12)
    assert np.std(z, ddof=1) == pytest.approx(1.0)
    assert result.row_indices == column.row_indices


def test_constant_column_rejected():
    column = _column('flat', [3, 3, 3])
    with pytest.raises(NumericDegeneracyError) as excinfo:
        Standardizer.standardize(column, StatsCalculator.compute_descriptive(column))
    assert excinfo.value.column == 'flat'
    assert excinfo.value.operation == 'standardize'


def test_standardize_all_reports_failures():
    columns = {'x': _column('x', [1, 2, 3]), 'flat': _column('flat', [7, 7, 7])}
    stats = {name: StatsCalculator.compute_descriptive(c) for name, c in columns.items()}

    standardized, errors = Standardizer.standardize_all(columns, stats)

    assert list(standardized) == ['x']
    assert 'flat' in errors


def test_aligned_lookup():
    column = NumericColumn(name='x', values=(1.0, 2.0, 3.0), row_indices=(0, 2, 5), missing_values=3)
    result = Standardizer.standardize(column, StatsCalculator.compute_descriptive(column))
    assert list(result.aligned([5, 0])) == pytest.approx([1.0, -1.0])
