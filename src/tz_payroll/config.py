"""Configuration management for the payroll calculator.

The calculator itself never reads the environment. Settings are loaded here
once and handed to it as an explicit StatutoryRates snapshot.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from functools import lru_cache

from dotenv import load_dotenv

from tz_payroll.calculators.types import StatutoryRates

# Environment variable -> StatutoryRates field
RATE_ENV_VARS: dict[str, str] = {
    "NSSF_RATE_EMPLOYEE": "nssf_rate_employee",
    "NSSF_RATE_EMPLOYER": "nssf_rate_employer",
    "SDL_RATE": "sdl_rate",
    "WCF_RATE": "wcf_rate",
    "HESLB_RATE": "heslb_rate",
}


class ConfigurationError(Exception):
    """Raised when a setting cannot be parsed."""

    def __init__(self, name: str, value: str):
        self.name = name
        self.value = value
        super().__init__(f"Invalid value for {name}: {value!r}")


def _parse_rate(name: str, raw: str) -> Decimal:
    try:
        rate = Decimal(raw.strip())
    except InvalidOperation as e:
        raise ConfigurationError(name, raw) from e
    if not rate.is_finite():
        raise ConfigurationError(name, raw)
    return rate


def _parse_log_level(raw: str) -> str:
    level = raw.strip().upper() or "WARNING"
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigurationError("LOG_LEVEL", raw)
    return level


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment."""

    rate_overrides: tuple[tuple[str, Decimal], ...]
    log_level: str

    @classmethod
    def from_env(cls) -> Settings:
        """Load settings from environment variables.

        Unset rate variables keep their statutory default.
        """
        load_dotenv()

        overrides: list[tuple[str, Decimal]] = []
        for env_name, field_name in RATE_ENV_VARS.items():
            raw = os.getenv(env_name)
            if raw is None or not raw.strip():
                continue
            overrides.append((field_name, _parse_rate(env_name, raw)))

        return cls(
            rate_overrides=tuple(overrides),
            log_level=_parse_log_level(os.getenv("LOG_LEVEL", "WARNING")),
        )

    def statutory_rates(self) -> StatutoryRates:
        """Return the rates snapshot to use for a payroll run."""
        return StatutoryRates.default().with_overrides(**dict(self.rate_overrides))


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings.from_env()
