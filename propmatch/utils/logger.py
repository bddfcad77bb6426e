"""
Logging system for the property matcher.
Provides structured, human-readable logs with console and optional file output.
"""

import copy
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

# ANSI color codes for terminal output
class Colors:
    RESET = "\033[0m"
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"
    BOLD = "\033[1m"


class ColoredFormatter(logging.Formatter):
    """Custom formatter with colors for console output."""

    LEVEL_COLORS = {
        logging.DEBUG: Colors.CYAN,
        logging.INFO: Colors.GREEN,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.BOLD + Colors.RED,
    }

    def format(self, record):
        # Other handlers share the record, so color a copy
        record = copy.copy(record)
        color = self.LEVEL_COLORS.get(record.levelno, Colors.WHITE)
        record.levelname = f"{color}{record.levelname}{Colors.RESET}"
        record.msg = f"{color}{record.msg}{Colors.RESET}"
        return super().format(record)


class MatchLogger:
    """
    Central logging system for the property matcher.

    Features:
    - Console output with colors
    - Optional dated log file
    - Structured one-line records for match decisions and bad flag data
    """

    _instance: Optional['MatchLogger'] = None
    _initialized: bool = False

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, log_dir: str = "logs", log_level: str = "INFO", log_to_file: bool = False):
        if MatchLogger._initialized:
            return

        self.log_dir = Path(log_dir)
        self.log_to_file = log_to_file
        if log_to_file:
            self.log_dir.mkdir(parents=True, exist_ok=True)

        self.main_logger = self._create_logger("propmatch", log_level)

        MatchLogger._initialized = True

    def _create_logger(self, name: str, level: str) -> logging.Logger:
        """Create a configured logger instance."""
        logger = logging.getLogger(name)
        logger.setLevel(getattr(logging, level.upper()))
        logger.handlers.clear()

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(ColoredFormatter(
            "%(asctime)s | %(levelname)s | %(message)s",
            datefmt="%H:%M:%S"
        ))
        logger.addHandler(console_handler)

        if self.log_to_file:
            log_file = self.log_dir / f"propmatch_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setFormatter(logging.Formatter(
                "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S"
            ))
            logger.addHandler(file_handler)

        return logger

    def info(self, msg: str, *args, **kwargs):
        """Log info message."""
        self.main_logger.info(msg, *args, **kwargs)

    def debug(self, msg: str, *args, **kwargs):
        """Log debug message."""
        self.main_logger.debug(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        """Log warning message."""
        self.main_logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        """Log error message."""
        self.main_logger.error(msg, *args, **kwargs)

    def outcome(self, status: str, key: str, operator: str, reason: str, **kwargs):
        """
        Log a single match decision at DEBUG.

        Inconclusive results are expected and routed here too; they are
        never errors.

        Args:
            status: MATCHED, NOT_MATCHED or INCONCLUSIVE
            key: Property key of the condition
            operator: Wire name of the operator
            reason: ReasonCode name
            **kwargs: Additional fields
        """
        parts = [
            f"[MATCH:{status}]",
            f"key={key}",
            f"op={operator}",
            f"reason={reason}",
        ]
        for field_name, value in kwargs.items():
            parts.append(f"{field_name}={value}")

        self.main_logger.debug(" | ".join(parts))

    def anomaly(self, kind: str, detail: str, **kwargs):
        """
        Log malformed flag data (bad operator, bad regex) at WARNING.

        Args:
            kind: Short tag, e.g. INVALID_OPERATOR
            detail: Human-readable explanation
            **kwargs: Additional context
        """
        parts = [f"[FLAG-DATA:{kind}]", detail]
        for field_name, value in kwargs.items():
            parts.append(f"{field_name}={value}")

        self.main_logger.warning(" | ".join(parts))


# Global logger instance
_logger: Optional[MatchLogger] = None


def get_logger(log_dir: str = None, log_level: str = None, log_to_file: bool = None) -> MatchLogger:
    """
    Get or create the global logger instance.

    Unset arguments fall back to the environment configuration.
    """
    global _logger
    if _logger is None:
        from ..config import get_config

        log_cfg = get_config().log
        _logger = MatchLogger(
            log_dir if log_dir is not None else log_cfg.log_dir,
            log_level if log_level is not None else log_cfg.level,
            log_to_file if log_to_file is not None else log_cfg.log_to_file,
        )
    return _logger


def setup_logger(log_dir: str = "logs", log_level: str = "INFO", log_to_file: bool = False) -> MatchLogger:
    """Initialize the logger with custom settings."""
    global _logger
    MatchLogger._initialized = False
    MatchLogger._instance = None
    _logger = MatchLogger(log_dir, log_level, log_to_file)
    return _logger
