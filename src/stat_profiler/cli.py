"""Command-line interface for the statistical profiler."""

import json
import sys
from pathlib import Path
from typing import Optional

import click

from .exceptions import StatProfilerError
from .inference.hypothesis_tests import run_test
from .inference.regression import run_regression
from .ingestion.csv_loader import load_dataset
from .profiling.profile_report_generator import ProfileReportGenerator, sanitize_for_json
from .profiling.profiler import DatasetProfiler
from .utils.config_loader import ConfigLoader
from .utils.logger import setup_logging


def _prepare(config: Optional[str], env: Optional[str], verbose: bool) -> ConfigLoader:
    setup_logging(verbose=verbose)
    return ConfigLoader(config_path=config, env_path=env)


def _fail(error: Exception, verbose: bool) -> None:
    click.echo(f"\n❌ Error: {error}", err=True)
    if verbose:
        import traceback
        traceback.print_exc()
    sys.exit(1)


def _format(value) -> str:
    if value is None:
        return 'n/a'
    if isinstance(value, float):
        return f"{value:.4f}"
    return str(value)


common_options = [
    click.option('--config', '-c', help='Path to config YAML file'),
    click.option('--env', '-e', help='Path to .env file'),
    click.option('--delimiter', '-d', help='CSV delimiter (overrides config)'),
    click.option('--verbose', '-v', is_flag=True, help='Verbose output'),
]


def with_common_options(func):
    for option in reversed(common_options):
        func = option(func)
    return func


@click.group()
@click.version_option(version='1.0.0')
def cli():
    """Statistical profiling of tabular datasets."""
    pass


@cli.command('profile')
@click.argument('csv_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--output-dir', '-o', help='Output directory for the JSON report')
@with_common_options
def profile(
    csv_file: str,
    output_dir: Optional[str],
    config: Optional[str],
    env: Optional[str],
    delimiter: Optional[str],
    verbose: bool
):
    """
    Profile a CSV file and write a JSON report.

    Examples:
        stat-profiler profile data/housing.csv -o ./profiles
    """
    try:
        config_loader = _prepare(config, env, verbose)
        app_config = config_loader.get_all()

        click.echo(f"\n📊 Profiling {csv_file}")
        click.echo(f"{'='*60}\n")

        dataset = load_dataset(csv_file, delimiter or config_loader.get('ingestion.delimiter', ','))
        result = DatasetProfiler(app_config).profile(dataset)

        click.echo(f"Rows: {dataset.row_count:,}")
        click.echo(f"Numerical columns: {', '.join(result.numerical_columns) or '-'}")
        click.echo(f"Categorical columns: {', '.join(result.categorical_columns) or '-'}\n")

        for name, stats in result.descriptive.items():
            fit = result.distributions.get(name)
            best = fit.best_fit.family.label if fit else 'n/a'
            click.echo(
                f"  {name}: mean={_format(stats.mean)} median={_format(stats.median)} "
                f"std={_format(stats.std)} missing={stats.missing_values} best_fit={best}"
            )

        for name, problems in result.errors.items():
            for stage, message in problems.items():
                click.echo(f"  ⚠️  {name} [{stage}]: {message}")

        report_gen = ProfileReportGenerator(
            output_dir or config_loader.get('reporting.output_dir', './profiles'),
            indent=config_loader.get('reporting.indent', 2)
        )
        report_files = report_gen.generate_report(result, Path(csv_file).stem)

        click.echo(f"\n✅ Reports generated:")
        for fmt, path in report_files.items():
            click.echo(f"  {fmt.upper()}: {path}")

    except (StatProfilerError, FileNotFoundError) as e:
        _fail(e, verbose)


@cli.command('test')
@click.argument('csv_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--kind', '-k', type=click.Choice(['ttest', 'ztest', 'anova']), default='ttest',
              help='Test to run')
@click.option('--column', '-col', required=True, help='Numeric column to test')
@click.option('--column2', '-col2', help='Second numeric column (two-sample t-test)')
@click.option('--group', '-g', help='Categorical grouping column (ANOVA)')
@click.option('--popmean', type=float, default=0.0, help='Hypothesized mean for one-sample tests')
@with_common_options
def test(
    csv_file: str,
    kind: str,
    column: str,
    column2: Optional[str],
    group: Optional[str],
    popmean: float,
    config: Optional[str],
    env: Optional[str],
    delimiter: Optional[str],
    verbose: bool
):
    """
    Run a t-test, z-test or one-way ANOVA.

    Examples:
        stat-profiler test data/iris.csv --kind anova --column sepal_length --group species
    """
    try:
        config_loader = _prepare(config, env, verbose)
        dataset = load_dataset(csv_file, delimiter or config_loader.get('ingestion.delimiter', ','))

        result = run_test(dataset, kind, column, column2, group, popmean)

        click.echo(f"\n🧪 {result.test_type}")
        click.echo(f"{'='*60}")
        click.echo(f"  Statistic: {_format(result.statistic)}")
        click.echo(f"  p-value: {_format(result.p_value)}")
        if result.degrees_of_freedom is not None:
            click.echo(f"  Degrees of freedom: {result.degrees_of_freedom}")
        for summary in result.groups:
            click.echo(f"  {summary.label}: mean={_format(summary.mean)} n={summary.count}")
        click.echo(f"\n{result.conclusion}")

        if verbose:
            click.echo(json.dumps(sanitize_for_json(result.to_dict()), indent=2))

    except (StatProfilerError, FileNotFoundError) as e:
        _fail(e, verbose)


@cli.command('regress')
@click.argument('csv_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--target', '-t', required=True, help='Numeric target column')
@click.option('--predictor', '-p', multiple=True, required=True, help='Numeric predictor column(s)')
@click.option('--model', '-m', type=click.Choice(['linear', 'polynomial']), default='linear',
              help='Model type')
@click.option('--degree', type=int, help='Polynomial degree (2-5)')
@click.option('--output', type=click.Path(dir_okay=False), help='Write the full result as JSON')
@with_common_options
def regress(
    csv_file: str,
    target: str,
    predictor: tuple,
    model: str,
    degree: Optional[int],
    output: Optional[str],
    config: Optional[str],
    env: Optional[str],
    delimiter: Optional[str],
    verbose: bool
):
    """
    Fit a linear or polynomial OLS regression.

    Examples:
        stat-profiler regress data/housing.csv -t Price -p Rooms -p Distance
        stat-profiler regress data/housing.csv -t Price -p Rooms --model polynomial --degree 3
    """
    try:
        config_loader = _prepare(config, env, verbose)
        dataset = load_dataset(csv_file, delimiter or config_loader.get('ingestion.delimiter', ','))

        if model == 'polynomial' and degree is None:
            degree = config_loader.get('regression.default_polynomial_degree', 2)

        result = run_regression(dataset, target, list(predictor), model, degree)

        click.echo(f"\n📈 {result.model_type.capitalize()} regression of {result.target}")
        click.echo(f"{'='*60}")
        click.echo(f"  Intercept: {_format(result.intercept)}")
        for name, coef in zip(result.feature_names, result.coefficients):
            click.echo(f"  {name}: {_format(coef)}")
        click.echo(f"  R²: {_format(result.r_squared)}")
        click.echo(f"  Adjusted R²: {_format(result.adjusted_r_squared)}")
        click.echo(f"  Residual mean: {_format(result.residual_stats.mean)}")
        click.echo(f"  Residual std: {_format(result.residual_stats.std)}")
        click.echo(f"  Residuals look normal: {result.residual_stats.is_normal}")

        click.echo("\n  Feature importance:")
        for item in result.feature_importance:
            click.echo(f"    {item.feature}: {_format(item.standardized_coefficient)}")

        if output:
            with open(output, 'w') as f:
                json.dump(sanitize_for_json(result.to_dict()), f, indent=2)
            click.echo(f"\n✅ Result saved to: {output}")

    except (StatProfilerError, FileNotFoundError) as e:
        _fail(e, verbose)


@cli.command('overlay')
@click.argument('csv_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--column', '-col', required=True, help='Numeric column')
@click.option('--family', '-f', required=True,
              type=click.Choice(['normal', 'exponential', 'uniform', 'poisson', 'binomial']),
              help='Theoretical distribution')
@with_common_options
def overlay(
    csv_file: str,
    column: str,
    family: str,
    config: Optional[str],
    env: Optional[str],
    delimiter: Optional[str],
    verbose: bool
):
    """
    Print a theoretical distribution curve for a column as JSON.

    Examples:
        stat-profiler overlay data/counts.csv --column visits --family poisson
    """
    try:
        config_loader = _prepare(config, env, verbose)
        app_config = config_loader.get_all()
        dataset = load_dataset(csv_file, delimiter or config_loader.get('ingestion.delimiter', ','))

        profiler = DatasetProfiler(app_config)
        curve = profiler.overlay(profiler.profile(dataset), column, family)
        click.echo(json.dumps(sanitize_for_json(curve.to_dict()), indent=2))

    except (StatProfilerError, FileNotFoundError) as e:
        _fail(e, verbose)


if __name__ == '__main__':
    cli()
