"""
Distribution Fitting Module

Scores candidate theoretical distributions against a numeric column with
Pearson's chi-square goodness-of-fit statistic and picks the lowest score.
Also builds analytic density/mass curves for visual overlays.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Tuple

import numpy as np
from scipy import stats

from ..exceptions import InputError, NumericDegeneracyError
from .column_classifier import NumericColumn
from .stats_calculator import DescriptiveStats
from ..utils.logger import get_logger

logger = get_logger('distribution_fitter')

NORMALITY_TOLERANCE = 0.5
MIN_SHAPE_SAMPLE_SIZE = 4


class DistributionFamily(Enum):
    """Supported theoretical distributions and their reference material."""

    NORMAL = (
        'normal',
        "The Normal Distribution is a continuous probability distribution that is symmetric "
        "about the mean, often called the \"bell curve\". Mean, median and mode coincide; "
        "about 68% of values fall within one standard deviation, 95% within two and 99.7% "
        "within three.",
        'https://www.youtube.com/embed/rzFX5NWojp0',
        False
    )
    EXPONENTIAL = (
        'exponential',
        "The Exponential Distribution models the time between events in a Poisson point "
        "process. It is continuous, memoryless, defined for positive values only and has a "
        "decreasing density. Common in survival analysis and reliability testing.",
        'https://www.youtube.com/embed/mHMh9KE4HDs',
        False
    )
    UNIFORM = (
        'uniform',
        "The Uniform Distribution gives equal probability to every value in an interval. "
        "Its density is constant, so the curve is a rectangle. Used in random number "
        "generation.",
        'https://www.youtube.com/embed/izrHUxqXvB4',
        False
    )
    POISSON = (
        'poisson',
        "The Poisson Distribution models the number of events in a fixed interval of time "
        "or space when events occur independently at a constant rate. It is discrete and "
        "its mean equals its variance. Used for rare event modeling.",
        'https://www.youtube.com/embed/jmqZG6roVqU',
        True
    )
    BINOMIAL = (
        'binomial',
        "The Binomial Distribution models the number of successes in a fixed number of "
        "independent trials with a constant probability of success. It is discrete and "
        "used for yes/no experiments.",
        'https://www.youtube.com/embed/8idr1WZ1A7Q',
        True
    )

    def __init__(self, label: str, description: str, video_url: str, discrete: bool):
        self.label = label
        self.description = description
        self.video_url = video_url
        self.discrete = discrete

    @classmethod
    def from_name(cls, name: str) -> 'DistributionFamily':
        """Look up a family by its lowercase label."""
        for family in cls:
            if family.label == str(name).strip().lower():
                return family
        raise InputError(
            f"Unknown distribution '{name}'. Expected one of: {[f.label for f in cls]}",
            {'distribution': name}
        )

    def fit_parameters(self, column_stats: DescriptiveStats, column: str = None) -> Dict[str, float]:
        """
        Derive this family's parameters from a column's descriptive statistics.

        Raises:
            NumericDegeneracyError: If the parameters would be undefined
        """
        if self is DistributionFamily.NORMAL:
            if not column_stats.std:
                raise NumericDegeneracyError(
                    "Normal fit requires a positive standard deviation", column, 'fit_normal'
                )
            return {'mean': column_stats.mean, 'std': column_stats.std}

        if self is DistributionFamily.EXPONENTIAL:
            if column_stats.mean <= 0:
                raise NumericDegeneracyError(
                    "Exponential fit requires a positive mean", column, 'fit_exponential'
                )
            return {'rate': 1.0 / column_stats.mean}

        if self is DistributionFamily.UNIFORM:
            if column_stats.max <= column_stats.min:
                raise NumericDegeneracyError(
                    "Uniform fit requires max > min", column, 'fit_uniform'
                )
            return {'min': column_stats.min, 'max': column_stats.max}

        if self is DistributionFamily.POISSON:
            if column_stats.min < 0:
                raise NumericDegeneracyError(
                    "Poisson fit requires non-negative values", column, 'fit_poisson'
                )
            return {'lambda': column_stats.mean}

        # BINOMIAL: trials from the rounded maximum (half up), p from the mean
        trials = int(math.floor(column_stats.max + 0.5))
        if trials < 1:
            raise NumericDegeneracyError(
                "Binomial fit requires a maximum of at least 1", column, 'fit_binomial'
            )
        p = column_stats.mean / trials
        if not 0 <= p <= 1:
            raise NumericDegeneracyError(
                f"Binomial fit produced p={p:.4f} outside [0, 1]", column, 'fit_binomial'
            )
        return {'n': trials, 'p': p}

    def density(self, x, parameters: Dict[str, float]) -> np.ndarray:
        """Evaluate the PDF (continuous) or PMF (discrete) at x."""
        x = np.asarray(x, dtype=float)

        if self is DistributionFamily.NORMAL:
            return stats.norm.pdf(x, loc=parameters['mean'], scale=parameters['std'])
        if self is DistributionFamily.EXPONENTIAL:
            return stats.expon.pdf(x, scale=1.0 / parameters['rate'])
        if self is DistributionFamily.UNIFORM:
            return stats.uniform.pdf(
                x, loc=parameters['min'], scale=parameters['max'] - parameters['min']
            )
        if self is DistributionFamily.POISSON:
            return stats.poisson.pmf(x, parameters['lambda'])
        return stats.binom.pmf(x, parameters['n'], parameters['p'])


CANDIDATE_FAMILIES = (
    DistributionFamily.NORMAL,
    DistributionFamily.EXPONENTIAL,
    DistributionFamily.UNIFORM,
)


@dataclass(frozen=True)
class FitResult:
    """Winning candidate of a goodness-of-fit search."""
    family: DistributionFamily
    parameters: Dict[str, float]
    chi_square: float
    candidates: Dict[str, float] = field(default_factory=dict)

    @property
    def description(self) -> str:
        return self.family.description

    @property
    def video_url(self) -> str:
        return self.family.video_url

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'type': self.family.label,
            'parameters': dict(self.parameters),
            'chiSquare': self.chi_square,
            'description': self.description,
            'videoUrl': self.video_url,
            'candidates': dict(self.candidates)
        }


@dataclass(frozen=True)
class DistributionFit:
    """Shape statistics and best-fitting distribution for one column."""
    column: str
    skewness: float
    kurtosis: float
    is_normal: bool
    best_fit: FitResult

    def to_dict(self) -> Dict[str, Any]:
        return {
            'isNormal': self.is_normal,
            'skewness': self.skewness,
            'kurtosis': self.kurtosis,
            'bestFit': self.best_fit.to_dict()
        }


@dataclass(frozen=True)
class OverlayCurve:
    """Analytic curve for drawing over a column's histogram."""
    family: DistributionFamily
    parameters: Dict[str, float]
    x: Tuple[float, ...]
    y: Tuple[float, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.family.label,
            'parameters': dict(self.parameters),
            'x': list(self.x),
            'y': list(self.y)
        }


class DistributionFitter:
    """Chi-square driven distribution selection and overlay curve generation."""

    @staticmethod
    def chi_square_statistic(
        values,
        pdf: Callable[[np.ndarray], np.ndarray],
        column: str = None
    ) -> float:
        """
        Pearson's chi-square goodness-of-fit statistic.

        The range [min, max] is cut into ceil(sqrt(n)) equal-width bins. A value
        on a boundary between two bins is counted in the lower one; the minimum
        belongs to the first bin and the maximum to the last. Expected counts
        are pdf(bin midpoint) * width * n, and bins with an expected count of
        zero contribute nothing.

        Args:
            values: Sample values
            pdf: Vectorized density of the candidate distribution
            column: Column name used in error messages

        Returns:
            Non-negative chi-square statistic (lower is a better fit)
        """
        data = np.asarray(values, dtype=float)
        n = len(data)
        if n == 0:
            raise InputError("Cannot score an empty column", {'column': column})

        bins = math.ceil(math.sqrt(n))
        low = float(data.min())
        high = float(data.max())
        width = (high - low) / bins
        if width == 0:
            raise NumericDegeneracyError(
                "All values are identical; bin width is zero", column, 'chi_square'
            )

        # Boundary values go to the lower bin; min and max stay in the first and last
        indices = np.clip(np.ceil((data - low) / width).astype(int) - 1, 0, bins - 1)
        observed = np.bincount(indices, minlength=bins)

        midpoints = low + (np.arange(bins) + 0.5) * width
        expected = np.asarray(pdf(midpoints), dtype=float) * width * n

        usable = np.isfinite(expected) & (expected > 0)
        return float(np.sum((observed[usable] - expected[usable]) ** 2 / expected[usable]))

    @classmethod
    def find_best_fit(cls, column: NumericColumn, column_stats: DescriptiveStats) -> FitResult:
        """
        Score normal, exponential and uniform candidates and keep the lowest.

        A candidate whose parameters are undefined (e.g. exponential with a
        non-positive mean) scores infinity. Ties keep the earlier candidate.
        """
        best = None
        scores: Dict[str, float] = {}

        for family in CANDIDATE_FAMILIES:
            try:
                parameters = family.fit_parameters(column_stats, column.name)
            except NumericDegeneracyError as e:
                logger.debug(f"{family.label} candidate not applicable to {column.name}: {e.message}")
                parameters = {}
                score = math.inf
            else:
                score = cls.chi_square_statistic(
                    column.values,
                    lambda x, f=family, p=parameters: f.density(x, p),
                    column.name
                )

            scores[family.label] = score
            if best is None or score < best[2]:
                best = (family, parameters, score)

        family, parameters, score = best
        return FitResult(family=family, parameters=parameters, chi_square=score, candidates=scores)

    @classmethod
    def fit_distribution(cls, column: NumericColumn, column_stats: DescriptiveStats) -> DistributionFit:
        """
        Compute skewness, kurtosis, normality flag and best fit for a column.

        Args:
            column: Numeric column
            column_stats: Its descriptive statistics

        Returns:
            DistributionFit object
        """
        if len(column) < MIN_SHAPE_SAMPLE_SIZE:
            raise NumericDegeneracyError(
                f"Skewness and kurtosis need at least {MIN_SHAPE_SAMPLE_SIZE} values, "
                f"got {len(column)}",
                column.name,
                'fit_distribution'
            )
        if column_stats.max == column_stats.min:
            raise NumericDegeneracyError(
                "Column is constant; distribution shape is undefined", column.name, 'fit_distribution'
            )

        data = np.asarray(column.values, dtype=float)
        skewness = float(stats.skew(data, bias=False))
        kurtosis = float(stats.kurtosis(data, fisher=False, bias=False))

        best_fit = cls.find_best_fit(column, column_stats)
        logger.debug(
            f"Column {column.name}: best fit {best_fit.family.label} "
            f"(chi2={best_fit.chi_square:.4f})"
        )

        return DistributionFit(
            column=column.name,
            skewness=skewness,
            kurtosis=kurtosis,
            is_normal=abs(skewness) < NORMALITY_TOLERANCE and abs(kurtosis - 3) < NORMALITY_TOLERANCE,
            best_fit=best_fit
        )

    @staticmethod
    def overlay_curve(
        family: DistributionFamily,
        column_stats: DescriptiveStats,
        points: int = 100,
        column: str = None
    ) -> OverlayCurve:
        """
        Build a theoretical curve parameterized from a column's statistics.

        This path is for visualization only and does not take part in
        best-fit selection.

        Args:
            family: Distribution to draw
            column_stats: Descriptive statistics of the column
            points: Resolution of continuous curves
            column: Column name used in error messages

        Returns:
            OverlayCurve with matching x and y sequences
        """
        if points < 2:
            raise InputError("Overlay curves need at least 2 points", {'points': points})

        parameters = family.fit_parameters(column_stats, column)

        if family is DistributionFamily.NORMAL:
            mean, std = parameters['mean'], parameters['std']
            x = np.linspace(mean - 4 * std, mean + 4 * std, points)
            y = family.density(x, parameters)
        elif family is DistributionFamily.UNIFORM:
            low, high = parameters['min'], parameters['max']
            height = 1.0 / (high - low)
            x = np.array([low, low, high, high])
            y = np.array([0.0, height, height, 0.0])
        elif family is DistributionFamily.EXPONENTIAL:
            x = np.linspace(0.0, column_stats.max, points)
            y = family.density(x, parameters)
        elif family is DistributionFamily.POISSON:
            x = np.arange(0, math.ceil(column_stats.max) + 1, dtype=float)
            y = family.density(x, parameters)
        else:
            x = np.arange(0, parameters['n'] + 1, dtype=float)
            y = family.density(x, parameters)

        return OverlayCurve(
            family=family,
            parameters=parameters,
            x=tuple(float(v) for v in x),
            y=tuple(float(v) for v in y)
        )
