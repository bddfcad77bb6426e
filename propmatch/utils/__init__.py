"""
Utility modules.
"""

from .logger import get_logger, setup_logger, MatchLogger
from .helpers import coerce_number, to_property_string
from .datetime_utils import (
    ABSOLUTE_DATE_FORMATS,
    parse_absolute_datetime,
    parse_relative_datetime,
    ensure_aware,
)
from .regex_utils import try_compile_regex, clear_regex_cache

__all__ = [
    # Logger
    "get_logger",
    "setup_logger",
    "MatchLogger",
    # Type conversion helpers
    "coerce_number",
    "to_property_string",
    # Date parsing
    "ABSOLUTE_DATE_FORMATS",
    "parse_absolute_datetime",
    "parse_relative_datetime",
    "ensure_aware",
    # Regex
    "try_compile_regex",
    "clear_regex_cache",
]
