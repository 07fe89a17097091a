# taskquery/config.py
from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "TASKQUERY_"


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"{ENV_PREFIX}{name} must be positive, got {value}")
    return value


@dataclass
class QueryConfig:
    # parsing
    locale: str = "en"
    max_candidates: int = 16
    max_query_length: int = 500  # longer queries are taken as plain content

    # observability / logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "QueryConfig":
        """Build a config from TASKQUERY_* variables; unset ones keep their defaults."""
        env = os.environ if env is None else env
        defaults = cls()
        return cls(
            locale=env.get(ENV_PREFIX + "LOCALE") or defaults.locale,
            max_candidates=_env_int(env, "MAX_CANDIDATES", defaults.max_candidates),
            max_query_length=_env_int(env, "MAX_QUERY_LENGTH", defaults.max_query_length),
            log_level=(env.get(ENV_PREFIX + "LOG_LEVEL") or defaults.log_level).upper(),
            log_file=env.get(ENV_PREFIX + "LOG_FILE") or None,
        )
