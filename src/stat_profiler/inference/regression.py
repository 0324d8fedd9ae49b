"""
Regression Engine Module

Fits ordinary least squares models of a raw numeric target on standardized
predictors, optionally expanding a single predictor into polynomial terms,
and reports fit diagnostics.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np
from scipy import stats

from ..exceptions import InputError, NumericDegeneracyError
from ..profiling.column_classifier import Dataset
from ..profiling.standardizer import StandardizedColumn, Standardizer
from ..profiling.stats_calculator import StatsCalculator
from ..utils.logger import get_logger
from . import least_squares

logger = get_logger('regression')

PREDICTION_Z = 1.96
MIN_POLYNOMIAL_DEGREE = 2
MAX_POLYNOMIAL_DEGREE = 5
RESIDUAL_SKEW_TOLERANCE = 0.5


class ModelType(Enum):
    LINEAR = 'linear'
    POLYNOMIAL = 'polynomial'

    @classmethod
    def from_name(cls, name: str) -> 'ModelType':
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            raise InputError(
                f"Unknown model type '{name}'. Expected one of: {[m.value for m in cls]}",
                {'model_type': name}
            )


@dataclass(frozen=True)
class FeatureImportance:
    feature: str
    coefficient: float
    standardized_coefficient: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'feature': self.feature,
            'coefficient': self.coefficient,
            'standardizedCoef': self.standardized_coefficient
        }


@dataclass(frozen=True)
class ResidualStats:
    mean: float
    std: float
    is_normal: bool

    def to_dict(self) -> Dict[str, Any]:
        return {'mean': self.mean, 'std': self.std, 'normalityTest': self.is_normal}


@dataclass(frozen=True)
class RegressionResult:
    """Fitted model and its diagnostics."""
    model_type: str
    polynomial_degree: Optional[int]
    target: str
    feature_names: Tuple[str, ...]
    coefficients: Tuple[float, ...]
    intercept: float
    r_squared: float
    adjusted_r_squared: float
    predictions: Tuple[float, ...]
    actual_values: Tuple[float, ...]
    residuals: Tuple[float, ...]
    residual_stats: ResidualStats
    prediction_intervals: Tuple[Tuple[float, float], ...]
    feature_importance: Tuple[FeatureImportance, ...]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'modelType': self.model_type,
            'polynomialDegree': self.polynomial_degree,
            'target': self.target,
            'features': list(self.feature_names),
            'coefficients': list(self.coefficients),
            'intercept': self.intercept,
            'rSquared': self.r_squared,
            'adjustedRSquared': self.adjusted_r_squared,
            'predictions': list(self.predictions),
            'actualValues': list(self.actual_values),
            'residuals': list(self.residuals),
            'residualStats': self.residual_stats.to_dict(),
            'predictionIntervals': [
                {'lower': lower, 'upper': upper} for lower, upper in self.prediction_intervals
            ],
            'featureImportance': [f.to_dict() for f in self.feature_importance]
        }


def _standardized_column(
    dataset: Dataset,
    name: str,
    standardized: Optional[Mapping[str, StandardizedColumn]]
) -> StandardizedColumn:
    if standardized and name in standardized:
        return standardized[name]
    column = dataset.numeric(name)
    return Standardizer.standardize(column, StatsCalculator.compute_descriptive(column))


def _validate_request(
    dataset: Dataset,
    target: Optional[str],
    predictors: Sequence[str],
    model: ModelType,
    polynomial_degree: Optional[int]
) -> Optional[int]:
    if not target or not predictors:
        raise InputError("Please select target and feature variables")

    dataset.numeric(target)
    for name in predictors:
        dataset.numeric(name)

    if target in predictors:
        raise InputError(f"Target '{target}' cannot also be a predictor", {'column': target})
    if len(set(predictors)) != len(predictors):
        raise InputError("Predictors must be distinct", {'predictors': list(predictors)})

    if model is ModelType.LINEAR:
        return None

    if len(predictors) != 1:
        raise InputError(
            "Polynomial regression supports exactly one predictor",
            {'predictors': list(predictors)}
        )
    degree = MIN_POLYNOMIAL_DEGREE if polynomial_degree is None else polynomial_degree
    if not isinstance(degree, int) or not MIN_POLYNOMIAL_DEGREE <= degree <= MAX_POLYNOMIAL_DEGREE:
        raise InputError(
            f"Polynomial degree must be an integer between {MIN_POLYNOMIAL_DEGREE} "
            f"and {MAX_POLYNOMIAL_DEGREE}, got {degree!r}",
            {'degree': degree}
        )
    return degree


def run_regression(
    dataset: Dataset,
    target: str,
    predictors: Sequence[str],
    model_type: str = 'linear',
    polynomial_degree: Optional[int] = None,
    standardized: Optional[Mapping[str, StandardizedColumn]] = None
) -> RegressionResult:
    """
    Fit an OLS model of a raw target on standardized predictors.

    Only rows where the target and every predictor are present are used.

    Args:
        dataset: Classified dataset
        target: Numeric target column (used unstandardized)
        predictors: One or more numeric predictor columns
        model_type: 'linear' or 'polynomial'
        polynomial_degree: Degree in [2, 5], polynomial model only (default 2)
        standardized: Precomputed standardized columns, e.g. from a Profile

    Returns:
        RegressionResult object
    """
    predictors = list(predictors or [])
    model = ModelType.from_name(model_type)
    degree = _validate_request(dataset, target, predictors, model, polynomial_degree)

    target_column = dataset.numeric(target)
    predictor_columns = [_standardized_column(dataset, name, standardized) for name in predictors]

    shared = set(target_column.row_indices)
    for column in predictor_columns:
        shared &= set(column.row_indices)
    rows = sorted(shared)

    target_lookup = dict(zip(target_column.row_indices, target_column.values))
    y = np.asarray([target_lookup[idx] for idx in rows], dtype=float)

    if model is ModelType.POLYNOMIAL:
        x = predictor_columns[0].aligned(rows)
        features: List[np.ndarray] = [x ** power for power in range(1, degree + 1)]
        feature_names = [predictors[0]] + [f"{predictors[0]}^{power}" for power in range(2, degree + 1)]
    else:
        features = [column.aligned(rows) for column in predictor_columns]
        feature_names = list(predictors)

    n = len(y)
    p = len(features)
    if n - p - 1 <= 0:
        raise NumericDegeneracyError(
            f"Need more than {p + 1} complete rows for {p} predictors, got {n}",
            column=target,
            operation='adjusted_r_squared'
        )

    logger.info(f"Fitting {model.value} regression of {target} on {feature_names} ({n} rows)")

    design = np.column_stack(features)
    intercept, coefficients = least_squares.fit(design, y)
    predictions = intercept + design @ coefficients

    r_squared = least_squares.r_squared(y, predictions)
    adjusted_r_squared = 1 - (1 - r_squared) * (n - 1) / (n - p - 1)

    target_std = float(np.std(y, ddof=1))
    importance = [
        FeatureImportance(
            feature=name,
            coefficient=float(coef),
            standardized_coefficient=float(coef * np.std(feature, ddof=1) / target_std)
        )
        for name, coef, feature in zip(feature_names, coefficients, features)
    ]
    importance.sort(key=lambda item: abs(item.standardized_coefficient), reverse=True)

    residuals = y - predictions
    residual_skew = float(stats.skew(residuals, bias=False)) if n >= 3 else float('nan')
    residual_stats = ResidualStats(
        mean=float(residuals.mean()),
        std=float(np.std(residuals)),
        is_normal=bool(abs(residual_skew) < RESIDUAL_SKEW_TOLERANCE)
    )

    # Fixed 1.96 multiplier with se = sqrt(MSE * (1 + 1/n)), MSE over n
    mse = float(np.mean(residuals ** 2))
    margin = PREDICTION_Z * np.sqrt(mse * (1 + 1 / n))
    intervals = tuple((float(pred - margin), float(pred + margin)) for pred in predictions)

    return RegressionResult(
        model_type=model.value,
        polynomial_degree=degree,
        target=target,
        feature_names=tuple(feature_names),
        coefficients=tuple(float(c) for c in coefficients),
        intercept=intercept,
        r_squared=r_squared,
        adjusted_r_squared=float(adjusted_r_squared),
        predictions=tuple(float(v) for v in predictions),
        actual_values=tuple(float(v) for v in y),
        residuals=tuple(float(v) for v in residuals),
        residual_stats=residual_stats,
        prediction_intervals=intervals,
        feature_importance=tuple(importance)
    )
