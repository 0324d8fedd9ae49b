"""Pearson and Spearman correlation matrices over standardized columns."""

from typing import Dict, Mapping, Optional, Sequence, Tuple

import numpy as np

from .standardizer import StandardizedColumn
from ..utils.logger import get_logger

logger = get_logger('correlation')

CorrelationMatrix = Dict[str, Dict[str, Optional[float]]]


def pearson(x: Sequence[float], y: Sequence[float]) -> Optional[float]:
    """
    Product-moment correlation of two equal-length samples.

    Returns:
        r in [-1, 1], or None when either sample has zero variance or n < 2
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    if len(x) != len(y):
        raise ValueError(f"Samples differ in length: {len(x)} != {len(y)}")
    if len(x) < 2:
        return None

    dx = x - x.mean()
    dy = y - y.mean()
    denominator = np.sqrt(np.dot(dx, dx) * np.dot(dy, dy))
    if denominator == 0:
        return None

    r = float(np.dot(dx, dy) / denominator)
    return max(-1.0, min(1.0, r))


def rank(values: Sequence[float]) -> np.ndarray:
    """
    1-indexed ranks in original order.

    Ties keep their order of appearance (stable ascending sort), so equal
    values receive consecutive distinct ranks.
    """
    values = np.asarray(values, dtype=float)
    order = np.argsort(values, kind='stable')
    ranks = np.empty(len(values), dtype=float)
    ranks[order] = np.arange(1, len(values) + 1)
    return ranks


def spearman(x: Sequence[float], y: Sequence[float]) -> Optional[float]:
    """Pearson correlation of the rank arrays."""
    return pearson(rank(x), rank(y))


def _shared_rows(a: StandardizedColumn, b: StandardizedColumn) -> Tuple[np.ndarray, np.ndarray]:
    if a.row_indices == b.row_indices:
        return a.as_array(), b.as_array()
    shared = sorted(set(a.row_indices) & set(b.row_indices))
    return a.aligned(shared), b.aligned(shared)


def correlation_matrices(
    standardized: Mapping[str, StandardizedColumn]
) -> Tuple[CorrelationMatrix, CorrelationMatrix]:
    """
    Build full Pearson and Spearman matrices.

    Pairs are computed over the rows both columns share. The diagonal is 1.0
    and each off-diagonal value is mirrored, so both matrices are symmetric.

    Args:
        standardized: Standardized columns keyed by name

    Returns:
        Tuple of (pearson, spearman) nested mappings
    """
    names = list(standardized)
    pearson_matrix: CorrelationMatrix = {name: {} for name in names}
    spearman_matrix: CorrelationMatrix = {name: {} for name in names}

    for i, col1 in enumerate(names):
        pearson_matrix[col1][col1] = 1.0
        spearman_matrix[col1][col1] = 1.0

        for col2 in names[i + 1:]:
            x, y = _shared_rows(standardized[col1], standardized[col2])
            p = pearson(x, y)
            s = spearman(x, y)
            if p is None:
                logger.debug(f"Correlation undefined for pair ({col1}, {col2})")

            pearson_matrix[col1][col2] = pearson_matrix[col2][col1] = p
            spearman_matrix[col1][col2] = spearman_matrix[col2][col1] = s

    # Re-key inner mappings in column order for stable output
    pearson_matrix = {c1: {c2: pearson_matrix[c1][c2] for c2 in names} for c1 in names}
    spearman_matrix = {c1: {c2: spearman_matrix[c1][c2] for c2 in names} for c1 in names}

    logger.debug(f"Computed correlation matrices over {len(names)} columns")
    return pearson_matrix, spearman_matrix
