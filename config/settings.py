"""
MONTYHALL: Configuration

Defaults for simulation runs come from the environment (or a local .env):

    MONTYHALL_ROUNDS     number of games per batch      (default 100)
    MONTYHALL_SEED       batch seed; unset = random      (default unset)
    MONTYHALL_WORKERS    threads per batch               (default 1)
    MONTYHALL_LOG_LEVEL  CLI log level                   (default INFO)
"""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from sim_engine.montyhall.batch import DEFAULT_ROUNDS

load_dotenv()

BASE_DIR = Path(__file__).parent.parent

DEFAULT_WORKERS = 1
LOG_FORMAT = "[%(asctime)s] %(levelname)s %(message)s"
LOG_DATEFMT = "%H:%M:%S"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logging.getLogger("montyhall.config").warning(
            "Ignoring non-integer %s=%r, using %d", name, raw, default)
        return default


class SimulationSettings(BaseModel):
    """Validated parameters for one batch run."""
    rounds: int = Field(DEFAULT_ROUNDS, ge=0)
    seed: Optional[str] = None
    workers: int = Field(DEFAULT_WORKERS, ge=1)
    log_level: str = "INFO"

    @field_validator("seed", mode="before")
    @classmethod
    def _blank_seed_is_none(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        v = v.strip().upper()
        if not isinstance(logging.getLevelName(v), int):
            raise ValueError(f"Unknown log level: {v}")
        return v

    @classmethod
    def from_env(cls, **overrides) -> "SimulationSettings":
        """Environment defaults, with any non-None override taking precedence."""
        values = {
            "rounds": _env_int("MONTYHALL_ROUNDS", DEFAULT_ROUNDS),
            "seed": os.getenv("MONTYHALL_SEED"),
            "workers": _env_int("MONTYHALL_WORKERS", DEFAULT_WORKERS),
            "log_level": os.getenv("MONTYHALL_LOG_LEVEL", "INFO"),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
