"""
Ordinary least squares primitive.

Solves the normal equations (X'X) b = X'y with Gaussian elimination and
partial pivoting. The same solver backs simple two-variable line fits and
multiple linear regression.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from ..exceptions import InputError, NumericDegeneracyError

SINGULARITY_TOLERANCE = 1e-12


@dataclass(frozen=True)
class LineFit:
    """Simple y = slope * x + intercept fit."""
    slope: float
    intercept: float
    r_squared: float

    def predict(self, x: float) -> float:
        return self.slope * x + self.intercept

    def to_dict(self):
        return {'slope': self.slope, 'intercept': self.intercept, 'rSquared': self.r_squared}


def solve_linear_system(matrix: np.ndarray, rhs: np.ndarray) -> np.ndarray:
    """
    Solve a square linear system by Gaussian elimination with partial pivoting.

    Raises:
        NumericDegeneracyError: If the system is singular
    """
    a = np.array(matrix, dtype=float)
    b = np.array(rhs, dtype=float)
    size = len(b)
    scale = max(1.0, float(np.abs(a).max())) if size else 1.0

    for col in range(size):
        pivot_row = col + int(np.argmax(np.abs(a[col:, col])))
        if abs(a[pivot_row, col]) <= SINGULARITY_TOLERANCE * scale:
            raise NumericDegeneracyError(
                "Design matrix is singular; predictors are collinear or constant",
                operation='least_squares'
            )
        if pivot_row != col:
            a[[col, pivot_row]] = a[[pivot_row, col]]
            b[[col, pivot_row]] = b[[pivot_row, col]]

        for row in range(col + 1, size):
            factor = a[row, col] / a[col, col]
            if factor != 0:
                a[row, col:] -= factor * a[col, col:]
                b[row] -= factor * b[col]

    solution = np.zeros(size)
    for row in range(size - 1, -1, -1):
        solution[row] = (b[row] - np.dot(a[row, row + 1:], solution[row + 1:])) / a[row, row]

    return solution


def fit(design_rows: Sequence[Sequence[float]], y: Sequence[float]) -> Tuple[float, np.ndarray]:
    """
    Fit y = intercept + X @ coefficients by ordinary least squares.

    Args:
        design_rows: n rows of p feature values
        y: n target values

    Returns:
        Tuple of (intercept, coefficients)
    """
    features = np.asarray(design_rows, dtype=float)
    target = np.asarray(y, dtype=float)

    if features.ndim != 2:
        raise InputError("Design matrix must be two-dimensional")
    if len(features) != len(target):
        raise InputError(
            f"Design matrix has {len(features)} rows but target has {len(target)} values"
        )
    if len(target) == 0:
        raise InputError("Cannot fit a regression on zero rows")

    design = np.column_stack([np.ones(len(target)), features])
    gram = design.T @ design
    moment = design.T @ target

    solution = solve_linear_system(gram, moment)
    return float(solution[0]), solution[1:]


def r_squared(actual: Sequence[float], predicted: Sequence[float]) -> float:
    """Coefficient of determination, 1 - SS_res / SS_tot."""
    actual = np.asarray(actual, dtype=float)
    predicted = np.asarray(predicted, dtype=float)
    ss_total = float(np.sum((actual - actual.mean()) ** 2))
    if ss_total == 0:
        raise NumericDegeneracyError(
            "Target is constant; R-squared is undefined", operation='r_squared'
        )
    ss_residual = float(np.sum((actual - predicted) ** 2))
    return 1.0 - ss_residual / ss_total


def fit_line(x: Sequence[float], y: Sequence[float]) -> LineFit:
    """Least squares line through (x, y) pairs with its R-squared."""
    x = np.asarray(x, dtype=float)
    intercept, coefficients = fit(x.reshape(-1, 1), y)
    slope = float(coefficients[0])
    return LineFit(
        slope=slope,
        intercept=intercept,
        r_squared=r_squared(y, intercept + slope * x)
    )
