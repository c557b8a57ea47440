"""
Configuration for the student schedule tools.

Values come from defaults, a dictionary, or SCHEDULE_* environment
variables (optionally read from a .env file).
"""
import logging
import os
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from dotenv import find_dotenv, load_dotenv

from .exceptions import InvalidInputError
from .models.entities import MINUTES_PER_DAY
from .models.schedule import DEFAULT_GRANULARITY

logger = logging.getLogger(__name__)

ENV_PREFIX = "SCHEDULE_"
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass
class ScheduleConfig:
    # Time grid
    granularity: int = DEFAULT_GRANULARITY
    day_start: int = 7 * 60     # 07:00
    day_end: int = 22 * 60      # 22:00

    # Catalog
    input_dir: str = "input"
    sections_file: str = "Sections.csv"

    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScheduleConfig":
        merged = asdict(cls())
        for k, v in data.items():
            if k in merged:
                merged[k] = v
        return cls(**merged)

    def __post_init__(self):
        if self.granularity <= 0:
            raise InvalidInputError(f"granularity must be positive, got {self.granularity}")
        if not 0 <= self.day_start < self.day_end <= MINUTES_PER_DAY:
            raise InvalidInputError(
                f"Grid bounds must satisfy 0 <= day_start < day_end <= {MINUTES_PER_DAY}"
            )
        if self.day_start % self.granularity or self.day_end % self.granularity:
            raise InvalidInputError("Grid bounds must be multiples of the granularity")
        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise InvalidInputError(f"Invalid log level: {self.log_level}")


def _read_environment() -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    defaults = asdict(ScheduleConfig())
    for key, default in defaults.items():
        raw = os.environ.get(ENV_PREFIX + key.upper())
        if raw is None:
            continue
        if isinstance(default, int):
            try:
                values[key] = int(raw)
            except ValueError:
                raise InvalidInputError(f"{ENV_PREFIX}{key.upper()} must be an integer, got {raw!r}")
        else:
            values[key] = raw
    return values


def load_config(env_file: Optional[str] = None, overrides: Optional[Dict[str, Any]] = None) -> ScheduleConfig:
    """
    Build the configuration from the environment.

    Args:
        env_file: Optional path to a .env file; by default a .env in the
                  working directory is used if present
        overrides: Values that take precedence over the environment

    Returns:
        ScheduleConfig instance
    """
    if env_file:
        if not os.path.exists(env_file):
            raise FileNotFoundError(f"Environment file not found: {env_file}")
        load_dotenv(env_file, override=False)
    else:
        load_dotenv(find_dotenv(usecwd=True), override=False)

    data = _read_environment()
    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})

    config = ScheduleConfig.from_dict(data)
    logger.debug(f"Loaded configuration: {config}")
    return config
