"""
Base Parser

Abstract base class for the workout text parsers.
"""

import re
import logging
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Tuple

logger = logging.getLogger(__name__)


class BaseParser(ABC):
    """Abstract base class for text parsers"""

    # Completion markers: only '+' counts, interspersed whitespace is ignored
    MARKERS = r'([+\s]*)'

    # "- Bench press", "-- Bench press +"
    HEADER_PATTERN = re.compile(r'^-+\s+(.*)$')
    # "3x10", "4 x 5 x 40kg +++"
    SET_PATTERN = re.compile(
        r'^(\d+)\s*x\s*(\d+)'  # Sets x Reps
        r'(?:\s*x\s*(\d+(?:\.\d+)?)\s*(kg|lb))?'  # Optional weight
        r'\s*' + MARKERS + r'$'
    )
    # "10km +", "5.5mi", "400m"
    DISTANCE_PATTERN = re.compile(r'^(\d+(?:\.\d+)?)\s*(km|mi|m)\s*' + MARKERS + r'$')
    # "1h30m", "45min +", "2h"; also matches blank and marker-only lines
    DURATION_PATTERN = re.compile(r'^(?:(\d+)h)?\s*(?:(\d+)(?:m|min))?\s*' + MARKERS + r'$')
    # Sub-patterns used to turn a compact duration into seconds
    HOURS_PATTERN = re.compile(r'(\d+)h')
    MINUTES_PATTERN = re.compile(r'(\d+)m')
    WEIGHT_PATTERN = re.compile(r'^(\d+(?:\.\d+)?)\s*(kg|lb)$')
    DISTANCE_VALUE_PATTERN = re.compile(r'(\d+(?:\.\d+)?)(km|mi|m)')

    def __init__(self):
        self.warnings: List[str] = []

    @abstractmethod
    def parse(self, text: str) -> Any:
        """
        Parse workout text.

        Args:
            text: Raw editor or import text

        Returns:
            Parser-specific result
        """
        pass

    @staticmethod
    def count_markers(markers: Optional[str]) -> int:
        """Count '+' characters in a trailing marker group"""
        return (markers or "").count("+")

    @classmethod
    def parse_weight(cls, weight_str: Optional[str]) -> Tuple[Optional[float], Optional[str]]:
        """
        Split a weight string into value and unit.

        Returns:
            Tuple of (value, unit), (None, None) if not a weight
        """
        if not weight_str:
            return None, None
        match = cls.WEIGHT_PATTERN.match(weight_str.strip())
        if not match:
            return None, None
        return float(match.group(1)), match.group(2)

    @classmethod
    def parse_time_to_seconds(cls, time_str: str) -> int:
        """Sum independently matched hours and minutes of a compact duration"""
        total = 0
        hours = cls.HOURS_PATTERN.search(time_str or "")
        if hours:
            total += int(hours.group(1)) * 3600
        minutes = cls.MINUTES_PATTERN.search(time_str or "")
        if minutes:
            total += int(minutes.group(1)) * 60
        return total

    def add_warning(self, warning: str):
        """Add a warning message"""
        self.warnings.append(warning)
        logger.warning(f"Parser warning: {warning}")
