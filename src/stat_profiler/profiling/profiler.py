"""Main dataset profiling engine."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Sequence

from ..exceptions import InputError, StatProfilerError
from .column_classifier import ColumnClassifier, Dataset
from .correlation import CorrelationMatrix, correlation_matrices
from .distribution_fitter import DistributionFamily, DistributionFit, DistributionFitter, OverlayCurve
from .standardizer import Standardizer, StandardizedColumn
from .stats_calculator import DescriptiveStats, StatsCalculator
from ..utils.logger import get_logger

logger = get_logger('profiler')


@dataclass(frozen=True)
class Profile:
    """Statistical profile of a dataset, derived once and never mutated."""
    dataset: Dataset
    descriptive: Dict[str, DescriptiveStats]
    standardized: Dict[str, StandardizedColumn]
    pearson: CorrelationMatrix
    spearman: CorrelationMatrix
    distributions: Dict[str, DistributionFit]
    errors: Dict[str, Dict[str, str]] = field(default_factory=dict)
    profiled_at: Optional[str] = None

    @property
    def numerical_columns(self):
        return self.dataset.numerical_column_names

    @property
    def categorical_columns(self):
        return self.dataset.categorical_column_names

    def extreme_columns(self) -> Dict[str, Optional[str]]:
        """Columns with the highest and lowest mean."""
        if not self.descriptive:
            return {'highestMean': None, 'lowestMean': None}
        ordered = sorted(self.descriptive.items(), key=lambda item: item[1].mean)
        return {'highestMean': ordered[-1][0], 'lowestMean': ordered[0][0]}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the dictionary shape consumed by reports and UIs."""
        return {
            'metadata': {
                'profiled_at': self.profiled_at,
                'row_count': self.dataset.row_count,
                'column_count': len(self.dataset.header)
            },
            'descriptive': {name: s.to_dict() for name, s in self.descriptive.items()},
            'correlations': {
                'pearson': self.pearson,
                'spearman': self.spearman
            },
            'distributions': {name: d.to_dict() for name, d in self.distributions.items()},
            'numericalColumns': self.numerical_columns,
            'categoricalColumns': self.categorical_columns,
            'standardized': {name: list(s.values) for name, s in self.standardized.items()},
            'columns': {
                name: list(column.values)
                for name, column in self.dataset.numeric_columns.items()
            },
            'extremes': self.extreme_columns(),
            'errors': self.errors
        }


class DatasetProfiler:
    """Profile datasets and generate comprehensive statistical summaries."""

    def __init__(self, config: Optional[Mapping[str, Any]] = None):
        """
        Initialize dataset profiler.

        Args:
            config: Configuration dictionary from ConfigLoader
        """
        self.config = config or {}

    def profile_rows(
        self,
        header: Sequence[str],
        rows: Sequence[Mapping[str, Any]]
    ) -> Profile:
        """Classify raw rows and profile the resulting dataset."""
        return self.profile(ColumnClassifier.build_dataset(header, rows))

    def profile(self, dataset: Dataset) -> Profile:
        """
        Generate the full profile for a classified dataset.

        Failures confined to one column are recorded under Profile.errors and
        do not stop the other columns from being profiled.

        Args:
            dataset: Classified dataset

        Returns:
            Profile object
        """
        profile_start = datetime.now()
        logger.info(
            f"Starting profile generation: {dataset.row_count:,} rows, "
            f"{len(dataset.numeric_columns)} numerical columns"
        )

        errors: Dict[str, Dict[str, str]] = {}

        # Step 1: Descriptive statistics
        descriptive: Dict[str, DescriptiveStats] = {}
        for name, column in dataset.numeric_columns.items():
            try:
                descriptive[name] = StatsCalculator.compute_descriptive(column)
            except StatProfilerError as e:
                logger.error(f"Error computing statistics for column {name}: {e.message}")
                errors.setdefault(name, {})['descriptive'] = e.message

        # Step 2: Standardization
        standardized, standardize_errors = Standardizer.standardize_all(
            dataset.numeric_columns, descriptive
        )
        for name, message in standardize_errors.items():
            errors.setdefault(name, {})['standardize'] = message

        # Step 3: Correlations
        pearson, spearman = correlation_matrices(standardized)

        # Step 4: Distribution fitting
        distributions: Dict[str, DistributionFit] = {}
        for name, column in dataset.numeric_columns.items():
            if name not in descriptive:
                continue
            try:
                distributions[name] = DistributionFitter.fit_distribution(column, descriptive[name])
            except StatProfilerError as e:
                logger.error(f"Error fitting distribution for column {name}: {e.message}")
                errors.setdefault(name, {})['distribution'] = e.message

        duration = (datetime.now() - profile_start).total_seconds()
        logger.info(f"Profile generation completed in {duration:.2f}s with {len(errors)} column errors")

        return Profile(
            dataset=dataset,
            descriptive=descriptive,
            standardized=standardized,
            pearson=pearson,
            spearman=spearman,
            distributions=distributions,
            errors=errors,
            profiled_at=profile_start.isoformat()
        )

    def overlay(self, profile: Profile, column: str, family: str) -> OverlayCurve:
        """
        Theoretical curve for a profiled column, sized by overlay.points.

        Args:
            profile: Profile holding the column's descriptive statistics
            column: Numeric column name
            family: Distribution name (normal, exponential, uniform, poisson, binomial)

        Returns:
            OverlayCurve object
        """
        profile.dataset.numeric(column)
        if column not in profile.descriptive:
            raise InputError(f"Column '{column}' has no descriptive statistics", {'column': column})

        points = int(self.config.get('overlay', {}).get('points', 100))
        return DistributionFitter.overlay_curve(
            DistributionFamily.from_name(family),
            profile.descriptive[column],
            points=points,
            column=column
        )
