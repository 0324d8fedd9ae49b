"""Z-score standardization of numeric columns."""

from dataclasses import dataclass
from typing import Dict, Mapping, Tuple

import numpy as np

from ..exceptions import NumericDegeneracyError
from .column_classifier import NumericColumn
from .stats_calculator import DescriptiveStats
from ..utils.logger import get_logger

logger = get_logger('standardizer')


@dataclass(frozen=True)
class StandardizedColumn:
    """Z-scores aligned to the source column's row indices."""
    name: str
    values: Tuple[float, ...]
    row_indices: Tuple[int, ...]

    def as_array(self) -> np.ndarray:
        return np.asarray(self.values, dtype=float)

    def aligned(self, row_indices) -> np.ndarray:
        """Values at the given row indices, in that order."""
        lookup = dict(zip(self.row_indices, self.values))
        return np.asarray([lookup[idx] for idx in row_indices], dtype=float)


class Standardizer:
    """Computes (x - mean) / std for numeric columns."""

    @staticmethod
    def standardize(column: NumericColumn, stats: DescriptiveStats) -> StandardizedColumn:
        """
        Standardize one column.

        Args:
            column: Numeric column
            stats: Its descriptive statistics

        Returns:
            StandardizedColumn

        Raises:
            NumericDegeneracyError: If std is zero or undefined
        """
        if stats.std is None or stats.std == 0:
            raise NumericDegeneracyError(
                f"Cannot standardize '{column.name}': standard deviation is "
                f"{'undefined' if stats.std is None else 'zero'}",
                column=column.name,
                operation='standardize'
            )

        z = (np.asarray(column.values, dtype=float) - stats.mean) / stats.std
        return StandardizedColumn(
            name=column.name,
            values=tuple(float(v) for v in z),
            row_indices=column.row_indices
        )

    @classmethod
    def standardize_all(
        cls,
        columns: Mapping[str, NumericColumn],
        stats: Mapping[str, DescriptiveStats]
    ) -> Tuple[Dict[str, StandardizedColumn], Dict[str, str]]:
        """
        Standardize every column that has descriptive statistics.

        Degenerate columns are skipped and reported instead of failing the batch.

        Returns:
            Tuple of (standardized columns, column -> error message)
        """
        standardized: Dict[str, StandardizedColumn] = {}
        errors: Dict[str, str] = {}

        for name, column in columns.items():
            if name not in stats:
                continue
            try:
                standardized[name] = cls.standardize(column, stats[name])
            except NumericDegeneracyError as e:
                logger.warning(f"Excluding column {name} from standardized analyses: {e.message}")
                errors[name] = e.message

        return standardized, errors
