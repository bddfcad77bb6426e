"""
Configuration management for the property matcher.
Loads settings from environment variables with sensible defaults.
"""

import os
from dataclasses import dataclass
from typing import List, Optional
from pathlib import Path
from dotenv import load_dotenv


_TRUE_VALUES = ("1", "true", "yes", "on")


def _env_bool(name: str, default: bool) -> bool:
    """Read a boolean flag from the environment."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in _TRUE_VALUES


@dataclass
class LogConfig:
    """Logging configuration."""
    level: str = "INFO"
    log_dir: str = "logs"
    log_to_file: bool = False


@dataclass
class MatchConfig:
    """
    Matching engine configuration.

    Attributes:
        regex_cache_size: Max compiled patterns kept in the regex cache
        relative_dates: Accept relative literals ("-7d", "2w") for date operators
        max_relative_amount: Relative offsets with an amount at or above this are rejected
    """
    regex_cache_size: int = 256
    relative_dates: bool = True
    max_relative_amount: int = 10_000


class Config:
    """
    Central configuration manager.

    Loads configuration from environment variables and provides
    typed access to all settings.
    """

    _instance: Optional['Config'] = None

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, env_file: str = ".env"):
        if self._initialized:
            return

        # Later files override earlier ones
        for env_name in [".env", env_file]:
            env_path = Path(env_name)
            if env_path.exists():
                load_dotenv(env_path, override=True)

        # Unparsable values fall back to defaults and are reported by validate()
        self._env_errors: List[str] = []

        self.log = self._load_log_config()
        self.match = self._load_match_config()

        self._initialized = True

    def _env_int(self, name: str, default: int) -> int:
        """Read an integer setting, recording an error for non-integer values."""
        raw = os.getenv(name)
        if raw is None or raw.strip() == "":
            return default
        try:
            return int(raw.strip())
        except ValueError:
            self._env_errors.append(f"{name} must be an integer, got '{raw}'")
            return default

    def _load_log_config(self) -> LogConfig:
        """Load logging configuration from environment."""
        return LogConfig(
            level=os.getenv("PROPMATCH_LOG_LEVEL", "INFO"),
            log_dir=os.getenv("PROPMATCH_LOG_DIR", "logs"),
            log_to_file=_env_bool("PROPMATCH_LOG_TO_FILE", False),
        )

    def _load_match_config(self) -> MatchConfig:
        """Load matching engine configuration from environment."""
        return MatchConfig(
            regex_cache_size=self._env_int("PROPMATCH_REGEX_CACHE_SIZE", 256),
            relative_dates=_env_bool("PROPMATCH_RELATIVE_DATES", True),
            max_relative_amount=self._env_int("PROPMATCH_MAX_RELATIVE_AMOUNT", 10_000),
        )

    def validate(self) -> tuple[bool, List[str]]:
        """
        Validate configuration values.

        Returns:
            Tuple of (is_valid, list of error messages)
        """
        errors = list(self._env_errors)

        if self.log.level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            errors.append(f"PROPMATCH_LOG_LEVEL must be a logging level name, got '{self.log.level}'")

        if self.match.regex_cache_size <= 0:
            errors.append(
                f"PROPMATCH_REGEX_CACHE_SIZE must be positive, got {self.match.regex_cache_size}"
            )

        if self.match.max_relative_amount <= 0:
            errors.append(
                f"PROPMATCH_MAX_RELATIVE_AMOUNT must be positive, got {self.match.max_relative_amount}"
            )

        return len(errors) == 0, errors

    def summary(self) -> dict:
        """Get configuration summary for display."""
        return {
            "log_level": self.log.level,
            "log_dir": self.log.log_dir,
            "log_to_file": self.log.log_to_file,
            "regex_cache_size": self.match.regex_cache_size,
            "relative_dates": self.match.relative_dates,
            "max_relative_amount": self.match.max_relative_amount,
        }


def get_config(env_file: str = ".env") -> Config:
    """Get or create the global config instance."""
    return Config(env_file)


def reset_config() -> None:
    """Drop the global config so the next get_config() re-reads the environment."""
    Config._instance = None
