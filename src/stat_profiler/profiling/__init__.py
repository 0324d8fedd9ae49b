"""Data profiling modules for column statistics, correlations and distributions."""

from .column_classifier import (
    ColumnClassifier,
    ColumnType,
    Dataset,
    NumericColumn,
    CategoricalColumn
)
from .stats_calculator import StatsCalculator, DescriptiveStats, GroupStats
from .standardizer import Standardizer, StandardizedColumn
from .distribution_fitter import DistributionFamily, DistributionFitter, DistributionFit, OverlayCurve
from .profiler import DatasetProfiler, Profile
from .profile_report_generator import ProfileReportGenerator

__all__ = [
    'ColumnClassifier',
    'ColumnType',
    'Dataset',
    'NumericColumn',
    'CategoricalColumn',
    'StatsCalculator',
    'DescriptiveStats',
    'GroupStats',
    'Standardizer',
    'StandardizedColumn',
    'DistributionFamily',
    'DistributionFitter',
    'DistributionFit',
    'OverlayCurve',
    'DatasetProfiler',
    'Profile',
    'ProfileReportGenerator'
]
