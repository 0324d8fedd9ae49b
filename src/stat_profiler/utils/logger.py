"""Logging setup for the statistical profiler."""

import logging
import logging.config
import yaml
from pathlib import Path
from typing import Optional

from .config_loader import find_config_file

ROOT_LOGGER_NAME = 'stat_profiler'


def setup_logging(
    config_path: Optional[str] = None,
    default_level: int = logging.INFO,
    verbose: bool = False
) -> logging.Logger:
    """
    Setup logging configuration.

    Args:
        config_path: Path to logging YAML config (default: logging.yaml found
            through find_config_file)
        default_level: Level used when no YAML config is found
        verbose: Lower the package logger to DEBUG after configuration

    Returns:
        The package logger
    """
    if config_path is None:
        config_path = find_config_file('logging.yaml')

    if config_path and Path(config_path).exists():
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
            logging.config.dictConfig(config)
    else:
        logging.basicConfig(
            level=default_level,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if verbose:
        logger.setLevel(logging.DEBUG)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the package namespace, e.g. stat_profiler.profiler."""
    return logging.getLogger(f'{ROOT_LOGGER_NAME}.{name}')
