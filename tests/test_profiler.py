"""Tests for the dataset profiler and JSON report output."""

import json

import pytest

from stat_profiler.exceptions import InputError
from stat_profiler.profiling.profile_report_generator import ProfileReportGenerator, sanitize_for_json
from stat_profiler.profiling.profiler import DatasetProfiler


@pytest.fixture
def profile(housing_dataset):
    return DatasetProfiler().profile(housing_dataset)


def test_profile_sections(profile):
    data = profile.to_dict()

    assert set(data) == {
        'metadata', 'descriptive', 'correlations', 'distributions', 'numericalColumns',
        'categoricalColumns', 'standardized', 'columns', 'extremes', 'errors'
    }
    assert data['numericalColumns'] == ['Rooms', 'Price', 'Distance']
    assert data['categoricalColumns'] == ['Region']
    assert data['metadata']['row_count'] == 8
    assert data['errors'] == {}


def test_correlation_matrices_cover_numeric_columns(profile):
    assert set(profile.pearson) == {'Rooms', 'Price', 'Distance'}
    assert profile.pearson['Price']['Distance'] < 0
    assert profile.spearman['Rooms']['Price'] == pytest.approx(1.0)


def test_extremes(profile):
    assert profile.extreme_columns() == {'highestMean': 'Price', 'lowestMean': 'Rooms'}


def test_column_failures_are_isolated():
    rows = [{'flat': 5, 'short': v if v < 3 else None, 'ok': v * 1.5 + (v % 3)} for v in range(10)]
    rows[0]['short'] = None
    profile = DatasetProfiler().profile_rows(['flat', 'short', 'ok'], rows)

    assert 'standardize' in profile.errors['flat']
    assert 'distribution' in profile.errors['flat']
    assert 'flat' not in profile.pearson
    assert 'ok' in profile.distributions
    assert 'ok' not in profile.errors
    assert profile.numerical_columns == ['flat', 'ok']


def test_short_columns_keep_descriptive_but_skip_fit():
    rows = [{'a': a, 'b': b} for a, b in [(1, 2), (2, 3), (4, 9)]]
    profile = DatasetProfiler().profile_rows(['a', 'b'], rows)

    assert profile.descriptive['a'].count == 3
    assert profile.distributions == {}
    assert set(profile.errors) == {'a', 'b'}
    assert set(profile.errors['a']) == {'distribution'}
    assert profile.pearson['a']['b'] is not None


def test_overlay_uses_configured_resolution(profile):
    curve = DatasetProfiler({'overlay': {'points': 25}}).overlay(profile, 'Price', 'normal')
    assert len(curve.x) == 25


def test_overlay_rejects_categorical(profile):
    with pytest.raises(InputError):
        DatasetProfiler().overlay(profile, 'Region', 'normal')


def test_report_written_as_json(profile, tmp_path):
    generator = ProfileReportGenerator(output_dir=str(tmp_path / 'out'))
    files = generator.generate_report(profile, 'my housing data')

    path = files['json']
    assert 'profile_my_housing_data_' in path
    with open(path) as f:
        data = json.load(f)
    assert data['descriptive']['Price']['count'] == 8


def test_sanitize_for_json():
    assert sanitize_for_json({'a': [1.0, float('inf')], 'b': (float('nan'),)}) == {
        'a': [1.0, None], 'b': [None]
    }
