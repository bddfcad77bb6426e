"""
Regex validation with a bounded compile cache.

Entries are keyed by the pattern string, so a changed pattern always
compiles fresh.
"""

import re
from functools import lru_cache
from typing import Callable, Optional

from ..config import get_config

_cached_compile: Optional[Callable[[str], tuple[re.Pattern | None, str | None]]] = None


def _compile(pattern: str) -> tuple[re.Pattern | None, str | None]:
    if not pattern:
        return None, "Regex pattern is empty"
    try:
        return re.compile(pattern), None
    except re.error as exc:
        return None, f"Invalid regex pattern '{pattern}': {exc}"


def try_compile_regex(pattern: str) -> tuple[re.Pattern | None, str | None]:
    """
    Validate a pattern and compile it.

    Args:
        pattern: Regular expression source

    Returns:
        Tuple of (compiled_pattern, error_message)
        - If valid: (Pattern, None)
        - If invalid or empty: (None, error_string)
    """
    global _cached_compile
    if _cached_compile is None:
        _cached_compile = lru_cache(maxsize=get_config().match.regex_cache_size)(_compile)
    return _cached_compile(pattern)


def clear_regex_cache() -> None:
    """Drop all compiled patterns (cache size is re-read from config on next use)."""
    global _cached_compile
    _cached_compile = None
