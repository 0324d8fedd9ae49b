"""
Basic usage example for Statistical Profiler.

This script demonstrates how to:
1. Load configuration
2. Profile a CSV file
3. Run a hypothesis test and a regression
4. Generate a report
"""

import sys

from stat_profiler import ConfigLoader, DatasetProfiler, ProfileReportGenerator, load_dataset, run_regression, run_test


def main(csv_path: str):
    # Load configuration
    config = ConfigLoader()

    # Classify columns
    dataset = load_dataset(csv_path, config.get('ingestion.delimiter', ','))
    print(f"Numerical columns: {dataset.numerical_column_names}")
    print(f"Categorical columns: {dataset.categorical_column_names}")

    # Profile
    profile = DatasetProfiler(config.get_all()).profile(dataset)
    for name, fit in profile.distributions.items():
        print(f"  {name}: best fit {fit.best_fit.family.label} (chi2={fit.best_fit.chi_square:.3f})")

    numeric = dataset.numerical_column_names
    if numeric:
        result = run_test(dataset, 'ttest', numeric[0])
        print(f"\n{result.test_type} on {numeric[0]}: p={result.p_value:.4f}")
        print(result.conclusion)

    if len(numeric) >= 2:
        regression = run_regression(dataset, numeric[0], numeric[1:], standardized=profile.standardized)
        print(f"\nR² of {numeric[0]} on {numeric[1:]}: {regression.r_squared:.4f}")

    # Generate report
    report_gen = ProfileReportGenerator(output_dir=config.get('reporting.output_dir', './profiles'))
    report_files = report_gen.generate_report(profile, 'example')

    print(f"\n✅ Profile complete!")
    for fmt, path in report_files.items():
        print(f"  - {fmt.upper()}: {path}")


if __name__ == '__main__':
    main(sys.argv[1] if len(sys.argv) > 1 else 'data.csv')
