import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .logging_config import DEFAULT_LOG_LEVEL
from .runtime.heap import DEFAULT_HEAP_CAPACITY

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

TRUE_VALUES = ("1", "true", "yes", "on")


def _env_flag(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() in TRUE_VALUES


@dataclass
class InterpreterConfig:
    """Run options supplied by the command line or the environment."""
    verbose: bool = False
    dry_run: bool = False
    heap_capacity: int = DEFAULT_HEAP_CAPACITY
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self):
        if self.heap_capacity < 0:
            raise ValueError(f"heap_capacity must be non-negative, got {self.heap_capacity}")
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level {self.log_level!r}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'InterpreterConfig':
        """Build a config from WS_* environment variables."""
        env = os.environ if environ is None else environ
        return cls(
            verbose=_env_flag(env.get("WS_VERBOSE")),
            dry_run=_env_flag(env.get("WS_DRY_RUN")),
            heap_capacity=int(env.get("WS_HEAP_CAPACITY", DEFAULT_HEAP_CAPACITY)),
            log_level=env.get("WS_LOG_LEVEL", DEFAULT_LOG_LEVEL),
        )
