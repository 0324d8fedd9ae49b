"""
Statistical Profiler - Tabular Dataset Profiling Tool

Classifies columns, computes descriptive statistics, correlations and
best-fit distributions, and runs hypothesis tests and regressions on demand.
"""

__version__ = '1.0.0'
__author__ = 'Your Team'

from .exceptions import StatProfilerError, InputError, NumericDegeneracyError
from .profiling import ColumnClassifier, DatasetProfiler, Profile, ProfileReportGenerator
from .inference import run_test, run_regression
from .ingestion import load_csv, load_dataset, profile_csv
from .utils import ConfigLoader, setup_logging

__all__ = [
    'StatProfilerError',
    'InputError',
    'NumericDegeneracyError',
    'ColumnClassifier',
    'DatasetProfiler',
    'Profile',
    'ProfileReportGenerator',
    'run_test',
    'run_regression',
    'load_csv',
    'load_dataset',
    'profile_csv',
    'ConfigLoader',
    'setup_logging',
]
