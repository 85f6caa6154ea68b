"""
Application settings.

Defaults match a standard ten-minute game. Every field can be overridden through a `CHESS_<FIELD>` environment variable,
e.g. `CHESS_STARTING_TIME_SECONDS=300`.
"""

import os
from functools import lru_cache
from typing import Mapping, Optional, Self

from pydantic import BaseModel, Field

ENV_PREFIX = "CHESS_"


class Settings(BaseModel):
    starting_time_seconds: int = Field(default=600, ge=0)
    tick_interval_seconds: float = Field(default=1.0, gt=0)
    # Tests (and anything that drives the clock by hand) switch the background ticker off
    run_clock: bool = True
    # Off: a move may leave the own king in check, exactly like the suggestions
    enforce_king_safety: bool = False
    suggestion_seed: Optional[int] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Self:
        """Collect the CHESS_* variables and let pydantic parse/validate them"""
        environ = os.environ if environ is None else environ
        overrides = {
            name: environ[f"{ENV_PREFIX}{name.upper()}"]
            for name in cls.model_fields
            if f"{ENV_PREFIX}{name.upper()}" in environ
        }
        return cls.model_validate(overrides)


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
