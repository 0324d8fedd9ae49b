"""
Descriptive Statistics Calculator Module

Calculates per-column descriptive statistics for numeric columns and per-group
summaries of a numeric column split by a categorical one.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np

from ..exceptions import InputError
from .column_classifier import Dataset, NumericColumn
from ..utils.logger import get_logger

logger = get_logger('stats_calculator')


@dataclass(frozen=True)
class DescriptiveStats:
    """Statistics for numerical columns."""
    count: int
    mean: float
    median: float
    mode: float
    std: Optional[float]
    variance: Optional[float]
    min: float
    max: float
    quartiles: Tuple[float, float, float]
    missing_values: int
    imputation_method: str = 'none'

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'count': self.count,
            'mean': self.mean,
            'median': self.median,
            'mode': self.mode,
            'std': self.std,
            'variance': self.variance,
            'min': self.min,
            'max': self.max,
            'quartiles': list(self.quartiles),
            'missingValues': self.missing_values,
            'imputationMethod': self.imputation_method
        }


@dataclass(frozen=True)
class GroupStats:
    """Box-plot style summary of one group."""
    label: str
    count: int
    mean: float
    min: float
    quartiles: Tuple[float, float, float]
    max: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'group': self.label,
            'count': self.count,
            'mean': self.mean,
            'min': self.min,
            'quartiles': list(self.quartiles),
            'max': self.max
        }


class StatsCalculator:
    """Calculates descriptive statistics from in-memory column values."""

    @staticmethod
    def compute_mode(values: Sequence[float]) -> float:
        """
        Compute the most frequent value.

        Ties between equally frequent values go to the smallest one.

        Args:
            values: Non-empty list of numbers

        Returns:
            Modal value
        """
        counter = Counter(values)
        top_frequency = max(counter.values())
        return min(value for value, count in counter.items() if count == top_frequency)

    @staticmethod
    def compute_quantiles(values: Sequence[float], probabilities: Sequence[float]) -> Tuple[float, ...]:
        """Quantiles by linear interpolation between order statistics."""
        result = np.quantile(np.asarray(values, dtype=float), probabilities, method='linear')
        return tuple(float(q) for q in result)

    @staticmethod
    def sample_variance(values: Sequence[float]) -> Optional[float]:
        """Sample variance (n-1 denominator); None when n < 2."""
        if len(values) < 2:
            return None
        return float(np.var(np.asarray(values, dtype=float), ddof=1))

    @classmethod
    def compute_descriptive(cls, column: NumericColumn) -> DescriptiveStats:
        """
        Compute descriptive statistics for a numeric column.

        Args:
            column: Parsed numeric column

        Returns:
            DescriptiveStats object
        """
        if len(column) == 0:
            raise InputError(f"Column '{column.name}' has no numeric values", {'column': column.name})

        data = np.asarray(column.values, dtype=float)

        variance = cls.sample_variance(column.values)
        if variance is None:
            logger.warning(f"Column {column.name} has a single value; variance is undefined")
            std = None
        else:
            std = float(np.sqrt(variance))

        q1, q2, q3 = cls.compute_quantiles(column.values, [0.25, 0.5, 0.75])

        # Interpolation can drift by an ulp outside [min, max]
        min_val = float(data.min())
        max_val = float(data.max())
        quartiles = tuple(min(max(q, min_val), max_val) for q in (q1, q2, q3))

        return DescriptiveStats(
            count=len(column),
            mean=float(data.mean()),
            median=quartiles[1],
            mode=cls.compute_mode(column.values),
            std=std,
            variance=variance,
            min=min_val,
            max=max_val,
            quartiles=quartiles,
            missing_values=column.missing_values,
            imputation_method=column.imputation_method
        )

    @classmethod
    def group_summary(
        cls,
        dataset: Dataset,
        value_column: str,
        group_column: str
    ) -> List[GroupStats]:
        """
        Summarize a numeric column per category of a grouping column.

        Rows where either the value or the group label is missing are skipped.
        Groups are returned in first-seen order.

        Args:
            dataset: Classified dataset
            value_column: Numeric column to summarize
            group_column: Categorical column defining the groups

        Returns:
            List of GroupStats, one per group
        """
        groups = group_values(dataset, value_column, group_column)

        summaries = []
        for label, values in groups.items():
            q1, q2, q3 = cls.compute_quantiles(values, [0.25, 0.5, 0.75])
            summaries.append(GroupStats(
                label=label,
                count=len(values),
                mean=float(np.mean(values)),
                min=float(min(values)),
                quartiles=(q1, q2, q3),
                max=float(max(values))
            ))

        return summaries


def group_values(dataset: Dataset, value_column: str, group_column: str) -> Dict[str, List[float]]:
    """
    Split a numeric column's values by the labels of a categorical column.

    Args:
        dataset: Classified dataset
        value_column: Numeric column supplying the values
        group_column: Categorical column supplying the labels

    Returns:
        Mapping of label to values, in first-seen label order
    """
    column = dataset.numeric(value_column)
    if not group_column:
        raise InputError("A grouping column must be selected", {'column': value_column})
    grouping = dataset.categorical(group_column)

    groups: Dict[str, List[float]] = {}
    for row_index, value in zip(column.row_indices, column.values):
        label = grouping.labels[row_index]
        if label is None:
            continue
        groups.setdefault(label, []).append(value)

    return groups
