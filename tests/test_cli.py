"""Tests for the command-line interface."""

import json

import pytest
from click.testing import CliRunner

from stat_profiler.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


def test_profile_writes_report(runner, housing_csv, tmp_path):
    out_dir = tmp_path / 'profiles'
    result = runner.invoke(cli, ['profile', str(housing_csv), '-o', str(out_dir)])

    assert result.exit_code == 0, result.output
    assert 'Numerical columns: Rooms, Price' in result.output
    assert len(list(out_dir.glob('profile_housing_*.json'))) == 1


def test_ttest(runner, housing_csv):
    result = runner.invoke(cli, ['test', str(housing_csv), '--kind', 'ttest', '--column', 'Rooms'])

    assert result.exit_code == 0, result.output
    assert 'One-sample t-test' in result.output
    assert 'Reject the null hypothesis' in result.output


def test_anova(runner, housing_csv):
    result = runner.invoke(
        cli, ['test', str(housing_csv), '--kind', 'anova', '--column', 'Price', '--group', 'Region']
    )
    assert result.exit_code == 0, result.output
    assert 'One-way ANOVA' in result.output


def test_regress_saves_json(runner, housing_csv, tmp_path):
    output = tmp_path / 'fit.json'
    result = runner.invoke(
        cli, ['regress', str(housing_csv), '-t', 'Price', '-p', 'Rooms', '--output', str(output)]
    )

    assert result.exit_code == 0, result.output
    data = json.loads(output.read_text())
    assert data['target'] == 'Price'
    assert data['rSquared'] > 0.99


def test_overlay_prints_curve(runner, housing_csv):
    result = runner.invoke(cli, ['overlay', str(housing_csv), '--column', 'Rooms', '--family', 'uniform'])

    assert result.exit_code == 0, result.output
    curve = json.loads(result.output[result.output.index('{'):])
    assert curve['x'] == [1.0, 1.0, 6.0, 6.0]


def test_bad_column_exits_nonzero(runner, housing_csv):
    result = runner.invoke(cli, ['test', str(housing_csv), '--column', 'Region'])

    assert result.exit_code == 1
    assert 'Error' in result.output
