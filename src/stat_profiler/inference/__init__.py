"""Hypothesis testing and regression modules."""

from .hypothesis_tests import (
    ALPHA,
    GroupSummary,
    HypothesisResult,
    TestKind,
    one_sample_t_test,
    one_way_anova,
    run_test,
    two_sample_t_test,
    z_test
)
from .least_squares import LineFit, fit_line
from .regression import FeatureImportance, ModelType, RegressionResult, run_regression

__all__ = [
    'ALPHA',
    'GroupSummary',
    'HypothesisResult',
    'TestKind',
    'one_sample_t_test',
    'one_way_anova',
    'run_test',
    'two_sample_t_test',
    'z_test',
    'LineFit',
    'fit_line',
    'FeatureImportance',
    'ModelType',
    'RegressionResult',
    'run_regression'
]
