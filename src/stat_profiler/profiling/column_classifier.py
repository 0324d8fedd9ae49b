"""
Column Type Classifier Module

Resolves raw cells into typed values and splits the columns of a dataset into
NUMERICAL and CATEGORICAL. A column is NUMERICAL when strictly more than half
of its rows parse as finite numbers.
"""

import math
import numbers
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from ..exceptions import InputError
from ..utils.logger import get_logger

logger = get_logger('column_classifier')

NUMERIC_RATIO_THRESHOLD = 0.5


class ColumnType(Enum):
    """Column data type classifications."""
    NUMERICAL = "NUMERICAL"
    CATEGORICAL = "CATEGORICAL"


@dataclass(frozen=True)
class Number:
    """A finite numeric cell."""
    value: float


@dataclass(frozen=True)
class Text:
    """A non-numeric, non-empty cell."""
    value: str


@dataclass(frozen=True)
class Missing:
    """An empty or null cell."""


MISSING = Missing()

Cell = Union[Number, Text, Missing]


@dataclass(frozen=True)
class NumericColumn:
    """Parsed numeric values with the row position each one came from."""
    name: str
    values: Tuple[float, ...]
    row_indices: Tuple[int, ...]
    missing_values: int
    imputation_method: str = 'none'

    def __len__(self) -> int:
        return len(self.values)


@dataclass(frozen=True)
class CategoricalColumn:
    """One label per row; None marks a missing cell."""
    name: str
    labels: Tuple[Optional[str], ...]

    @property
    def missing_values(self) -> int:
        return sum(1 for label in self.labels if label is None)

    def distinct_labels(self) -> List[str]:
        """Distinct non-missing labels in first-seen order."""
        return list(dict.fromkeys(label for label in self.labels if label is not None))


@dataclass(frozen=True)
class Dataset:
    """Classified, immutable view of an ingested table."""
    header: Tuple[str, ...]
    row_count: int
    numeric_columns: Dict[str, NumericColumn] = field(default_factory=dict)
    categorical_columns: Dict[str, CategoricalColumn] = field(default_factory=dict)

    @property
    def numerical_column_names(self) -> List[str]:
        return list(self.numeric_columns)

    @property
    def categorical_column_names(self) -> List[str]:
        return list(self.categorical_columns)

    def column_type(self, name: str) -> ColumnType:
        if name in self.numeric_columns:
            return ColumnType.NUMERICAL
        if name in self.categorical_columns:
            return ColumnType.CATEGORICAL
        raise InputError(f"Unknown column: '{name}'", {'column': name})

    def numeric(self, name: Optional[str]) -> NumericColumn:
        """Return a numeric column or raise InputError."""
        if not name:
            raise InputError("A numeric column must be selected")
        if self.column_type(name) is not ColumnType.NUMERICAL:
            raise InputError(
                f"Column '{name}' is categorical; a numeric column is required",
                {'column': name}
            )
        return self.numeric_columns[name]

    def categorical(self, name: Optional[str]) -> CategoricalColumn:
        """Return a categorical column or raise InputError."""
        if not name:
            raise InputError("A categorical column must be selected")
        if self.column_type(name) is not ColumnType.CATEGORICAL:
            raise InputError(
                f"Column '{name}' is numeric; a categorical column is required",
                {'column': name}
            )
        return self.categorical_columns[name]


class ColumnClassifier:
    """Classifies columns based on how many of their cells parse as numbers."""

    @staticmethod
    def parse_cell(value: Any) -> Cell:
        """
        Resolve a raw scalar into a typed cell.

        Args:
            value: Raw value from the parser (string, number or None)

        Returns:
            Number, Text or MISSING
        """
        if value is None:
            return MISSING

        # bool is a numbers.Real subclass but never a measurement
        if isinstance(value, bool):
            return Text(str(value))

        if isinstance(value, numbers.Real):
            number = float(value)
            if math.isnan(number):
                return MISSING
            if math.isinf(number):
                return Text(str(value))
            return Number(number)

        text = str(value).strip()
        if not text:
            return MISSING

        try:
            number = float(text)
        except (ValueError, TypeError):
            return Text(text)

        if not math.isfinite(number):
            return Text(text)

        return Number(number)

    @staticmethod
    def classify_column(column_name: str, cells: Sequence[Cell]) -> ColumnType:
        """
        Classify a column from its parsed cells.

        Args:
            column_name: Name of the column
            cells: Parsed cells, one per row

        Returns:
            ColumnType.NUMERICAL iff parseable count > half the row count
        """
        numeric_count = sum(1 for cell in cells if isinstance(cell, Number))

        if numeric_count > len(cells) * NUMERIC_RATIO_THRESHOLD:
            column_type = ColumnType.NUMERICAL
        else:
            column_type = ColumnType.CATEGORICAL

        logger.debug(
            f"Column {column_name}: {numeric_count}/{len(cells)} numeric -> {column_type.value}"
        )
        return column_type

    @classmethod
    def build_dataset(
        cls,
        header: Sequence[str],
        rows: Sequence[Mapping[str, Any]]
    ) -> Dataset:
        """
        Classify every column of a parsed table.

        Args:
            header: Column names in header order
            rows: Records mapping column name to raw scalar

        Returns:
            Dataset with numeric and categorical columns
        """
        header = list(header)
        duplicates = sorted({name for name in header if header.count(name) > 1})
        if duplicates:
            raise InputError(f"Duplicate column names in header: {duplicates}", {'columns': duplicates})

        numeric_columns: Dict[str, NumericColumn] = {}
        categorical_columns: Dict[str, CategoricalColumn] = {}

        for column_name in header:
            raw_values = [row.get(column_name) for row in rows]
            cells = [cls.parse_cell(value) for value in raw_values]
            column_type = cls.classify_column(column_name, cells)

            if column_type is ColumnType.NUMERICAL:
                indexed = [(idx, cell.value) for idx, cell in enumerate(cells) if isinstance(cell, Number)]
                numeric_columns[column_name] = NumericColumn(
                    name=column_name,
                    values=tuple(value for _, value in indexed),
                    row_indices=tuple(idx for idx, _ in indexed),
                    missing_values=len(rows) - len(indexed)
                )
            else:
                categorical_columns[column_name] = CategoricalColumn(
                    name=column_name,
                    labels=tuple(cls._label(raw, cell) for raw, cell in zip(raw_values, cells))
                )

        logger.info(
            f"Classified {len(header)} columns: "
            f"{len(numeric_columns)} numerical, {len(categorical_columns)} categorical"
        )

        return Dataset(
            header=tuple(header),
            row_count=len(rows),
            numeric_columns=numeric_columns,
            categorical_columns=categorical_columns
        )

    @staticmethod
    def _label(raw: Any, cell: Cell) -> Optional[str]:
        if isinstance(cell, Missing):
            return None
        # Text input keeps its spelling, so '01' and '1' stay distinct groups
        if isinstance(raw, str):
            return raw.strip()
        if isinstance(cell, Number):
            value = cell.value
            return str(int(value)) if value.is_integer() else str(value)
        return cell.value
