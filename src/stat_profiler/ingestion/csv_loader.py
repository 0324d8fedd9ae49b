"""CSV ingestion: turns a delimited text source into header names and raw rows."""

from typing import Any, Dict, List, Mapping, Optional, Tuple

import pandas as pd

from ..exceptions import InputError
from ..profiling.column_classifier import ColumnClassifier, Dataset
from ..profiling.profiler import DatasetProfiler, Profile
from ..utils.logger import get_logger

logger = get_logger('csv_loader')


def load_csv(source, delimiter: str = ',') -> Tuple[List[str], List[Dict[str, Any]]]:
    """
    Read a CSV file whose first row holds the column names.

    Cells are kept as raw strings; empty cells become None. Typing happens
    later in the column classifier.

    Args:
        source: Path or file-like object
        delimiter: Field delimiter

    Returns:
        Tuple of (header, rows)
    """
    try:
        df = pd.read_csv(
            source,
            sep=delimiter,
            dtype=str,
            keep_default_na=False,
            na_values=[''],
            skip_blank_lines=True
        )
    except pd.errors.EmptyDataError:
        raise InputError("CSV source is empty")
    except pd.errors.ParserError as e:
        raise InputError(f"Could not parse CSV: {e}")

    header = [str(name) for name in df.columns]
    df = df.astype(object).where(df.notna(), None)
    rows = df.to_dict(orient='records')

    logger.info(f"Loaded {len(rows):,} rows and {len(header)} columns")
    return header, rows


def load_dataset(source, delimiter: str = ',') -> Dataset:
    """Read a CSV file and classify its columns."""
    header, rows = load_csv(source, delimiter)
    return ColumnClassifier.build_dataset(header, rows)


def profile_csv(source, config: Optional[Mapping[str, Any]] = None) -> Profile:
    """
    Read, classify and profile a CSV file in one call.

    Args:
        source: Path or file-like object
        config: Configuration dictionary from ConfigLoader

    Returns:
        Profile object
    """
    config = config or {}
    delimiter = config.get('ingestion', {}).get('delimiter', ',')
    return DatasetProfiler(config).profile(load_dataset(source, delimiter))
