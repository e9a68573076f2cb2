"""Runtime settings read from the environment (and an optional ``.env``)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path

from dotenv import load_dotenv

# Project root when installed in editable mode.
_PROJECT_ROOT = Path(__file__).resolve().parents[3]


def _get_int(name: str, fallback: int, low: int, high: int) -> int:
    raw_value = os.getenv(name)
    if not raw_value:
        return fallback
    try:
        value = int(raw_value)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw_value!r}") from None
    if not low <= value <= high:
        raise RuntimeError(f"{name} must be between {low} and {high}, got {value}")
    return value


def _get_ratio(name: str, fallback: str) -> Decimal:
    raw_value = os.getenv(name) or fallback
    try:
        value = Decimal(raw_value)
    except InvalidOperation:
        raise RuntimeError(f"{name} must be a decimal number, got {raw_value!r}") from None
    if not value.is_finite() or not Decimal("0") < value <= Decimal("1"):
        raise RuntimeError(f"{name} must be in (0, 1], got {value}")
    return value


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _get_log_level(name: str, fallback: str) -> str:
    value = (os.getenv(name) or fallback).upper()
    if value not in LOG_LEVELS:
        raise RuntimeError(
            f"{name} must be one of {', '.join(LOG_LEVELS)}, got {value!r}"
        )
    return value


@dataclass(frozen=True)
class Settings:
    db_path: Path
    max_debt_months: int = 2
    due_day: int = 10
    minimum_payment_ratio: Decimal = Decimal("0.5")
    log_level: str = "INFO"


def load_settings(env_file: Path | None = None) -> Settings:
    """Build Settings from ``CLUB_*`` variables, loading *env_file* first.

    Variables already present in the environment win over the file.
    """
    load_dotenv(env_file or _PROJECT_ROOT / ".env")
    return Settings(
        db_path=Path(os.getenv("CLUB_DB_PATH") or _PROJECT_ROOT / "data" / "club.db"),
        max_debt_months=_get_int("CLUB_MAX_DEBT_MONTHS", 2, 0, 120),
        # Day 28 is the last day every month has.
        due_day=_get_int("CLUB_DUE_DAY", 10, 1, 28),
        minimum_payment_ratio=_get_ratio("CLUB_MINIMUM_PAYMENT_RATIO", "0.5"),
        log_level=_get_log_level("CLUB_LOG_LEVEL", "INFO"),
    )
