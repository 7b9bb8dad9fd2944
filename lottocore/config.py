"""
Configuration for lottocore.

This file contains the default parameters of the generation engine and the
constraint evaluator. Centralizing them here makes it easy to tune the
defaults without touching the core logic. Hosts may override them through
an INI file read by load_settings().
"""
import configparser
import os
from dataclasses import dataclass
from typing import Optional

from loguru import logger

# --- Generation ---
DEFAULT_MAX_ATTEMPTS: int = 5000
MAX_REJECTED_EXAMPLES: int = 3

# --- Constraint defaults ---
# Parity balance: share of even numbers allowed in an entry
DEFAULT_MIN_PARITY_RATIO: float = 0.2
DEFAULT_MAX_PARITY_RATIO: float = 0.8

# Prime count band; None as upper bound means "up to the entry size"
DEFAULT_MIN_PRIMES: int = 1
DEFAULT_MAX_PRIMES: Optional[int] = None

# Recurrence from previous draw: entry size minus this margin
DEFAULT_RECURRENCE_MARGIN: int = 2

# --- Statistics ---
# Betting slips lay numbers out in rows of ten
ROW_WIDTH: int = 10

# --- Seed files ---
SUPPORTED_SCHEMA_VERSION: str = "1.0"

# --- Host ---
CONFIG_FILE_PATH: str = os.path.join("config", "config.ini")
DEFAULT_LOG_LEVEL: str = "INFO"


@dataclass(frozen=True)
class Settings:
    """Host-level settings read from config.ini."""
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    min_parity_ratio: float = DEFAULT_MIN_PARITY_RATIO
    max_parity_ratio: float = DEFAULT_MAX_PARITY_RATIO
    min_primes: int = DEFAULT_MIN_PRIMES
    max_primes: Optional[int] = DEFAULT_MAX_PRIMES
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: Optional[str] = None

    def constraint_defaults(self):
        """Builds the ConstraintConfig used as evaluator-wide defaults."""
        from lottocore.models import ConstraintConfig

        return ConstraintConfig(
            min_parity_ratio=self.min_parity_ratio,
            max_parity_ratio=self.max_parity_ratio,
            min_primes=self.min_primes,
            max_primes=self.max_primes,
        )


def load_settings(path: str = CONFIG_FILE_PATH) -> Settings:
    """
    Loads settings from an INI file, falling back to the module defaults
    for every missing section or key.

    Args:
        path: Path to the INI file. A missing file yields the defaults.

    Returns:
        Settings: The resolved settings.
    """
    config = configparser.ConfigParser()
    read_files = config.read(path)
    if not read_files:
        logger.info(f"No configuration file at {path}, using defaults")
        return Settings()

    max_primes_raw = config.get("constraints", "max_primes", fallback="").strip()
    log_file = config.get("logging", "file", fallback="").strip()

    settings = Settings(
        max_attempts=config.getint(
            "generation", "max_attempts", fallback=DEFAULT_MAX_ATTEMPTS
        ),
        min_parity_ratio=config.getfloat(
            "constraints", "min_parity_ratio", fallback=DEFAULT_MIN_PARITY_RATIO
        ),
        max_parity_ratio=config.getfloat(
            "constraints", "max_parity_ratio", fallback=DEFAULT_MAX_PARITY_RATIO
        ),
        min_primes=config.getint(
            "constraints", "min_primes", fallback=DEFAULT_MIN_PRIMES
        ),
        max_primes=int(max_primes_raw) if max_primes_raw else DEFAULT_MAX_PRIMES,
        log_level=config.get("logging", "level", fallback=DEFAULT_LOG_LEVEL).upper(),
        log_file=log_file or None,
    )
    logger.info(f"Configuration loaded from {path}")
    return settings
