"""Generate profile reports in JSON format."""

import json
import math
import os
import re
from datetime import datetime
from typing import Any, Dict

from .profiler import Profile
from ..utils.logger import get_logger

logger = get_logger('profile_report_generator')


def sanitize_for_json(value: Any) -> Any:
    """Replace NaN and infinities with None so the output is strict JSON."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {key: sanitize_for_json(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [sanitize_for_json(item) for item in value]
    return value


class ProfileReportGenerator:
    """Write statistical profiles to disk."""

    def __init__(self, output_dir: str = './profiles', indent: int = 2):
        """
        Initialize profile report generator.

        Args:
            output_dir: Directory to save profile reports
            indent: JSON indentation
        """
        self.output_dir = output_dir
        self.indent = indent
        os.makedirs(output_dir, exist_ok=True)
        logger.info(f"Profile report generator initialized. Output dir: {output_dir}")

    def generate_report(self, profile: Profile, dataset_name: str = 'dataset') -> Dict[str, str]:
        """
        Generate a JSON profile report.

        Args:
            profile: Profile from DatasetProfiler
            dataset_name: Name used in the output filename

        Returns:
            Dictionary mapping format to file path
        """
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        safe_name = re.sub(r'[^A-Za-z0-9_-]+', '_', dataset_name).strip('_') or 'dataset'
        filename = f"profile_{safe_name}_{timestamp}.json"
        filepath = os.path.join(self.output_dir, filename)

        with open(filepath, 'w') as f:
            json.dump(sanitize_for_json(profile.to_dict()), f, indent=self.indent, default=str)

        logger.info(f"JSON profile generated: {filepath}")
        return {'json': filepath}
