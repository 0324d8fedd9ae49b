"""Utility modules for statistical profiler."""

from .config_loader import ConfigLoader, find_config_file
from .logger import setup_logging, get_logger

__all__ = ['ConfigLoader', 'find_config_file', 'setup_logging', 'get_logger']
