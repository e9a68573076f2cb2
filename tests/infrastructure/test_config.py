"""Tests for settings loading."""

from decimal import Decimal
from pathlib import Path

import pytest

from clubledger.infrastructure.config import load_settings

VARIABLES = (
    "CLUB_DB_PATH",
    "CLUB_MAX_DEBT_MONTHS",
    "CLUB_DUE_DAY",
    "CLUB_MINIMUM_PAYMENT_RATIO",
    "CLUB_LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    # Set then delete so monkeypatch also removes whatever a .env file loads.
    for name in VARIABLES:
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)
    return tmp_path / "absent.env"


class TestLoadSettings:

    def test_defaults(self, clean_env):
        settings = load_settings(clean_env)

        assert settings.db_path.name == "club.db"
        assert settings.max_debt_months == 2
        assert settings.due_day == 10
        assert settings.minimum_payment_ratio == Decimal("0.5")
        assert settings.log_level == "INFO"

    def test_environment_overrides(self, clean_env, monkeypatch):
        monkeypatch.setenv("CLUB_DB_PATH", "/tmp/other.db")
        monkeypatch.setenv("CLUB_MAX_DEBT_MONTHS", "0")
        monkeypatch.setenv("CLUB_DUE_DAY", "28")
        monkeypatch.setenv("CLUB_MINIMUM_PAYMENT_RATIO", "0.75")
        monkeypatch.setenv("CLUB_LOG_LEVEL", "debug")

        settings = load_settings(clean_env)

        assert settings.db_path == Path("/tmp/other.db")
        assert settings.max_debt_months == 0
        assert settings.due_day == 28
        assert settings.minimum_payment_ratio == Decimal("0.75")
        assert settings.log_level == "DEBUG"

    def test_reads_env_file(self, clean_env, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("CLUB_DUE_DAY=15\nCLUB_MAX_DEBT_MONTHS=4\n")

        settings = load_settings(env_file)

        assert settings.due_day == 15
        assert settings.max_debt_months == 4

    def test_environment_wins_over_env_file(self, clean_env, monkeypatch, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("CLUB_DUE_DAY=15\n")
        monkeypatch.setenv("CLUB_DUE_DAY", "5")

        assert load_settings(env_file).due_day == 5

    @pytest.mark.parametrize(
        ("name", "value", "message"),
        [
            ("CLUB_DUE_DAY", "31", "between 1 and 28"),
            ("CLUB_DUE_DAY", "ten", "must be an integer"),
            ("CLUB_MAX_DEBT_MONTHS", "-1", "between 0 and 120"),
            ("CLUB_MINIMUM_PAYMENT_RATIO", "1.5", r"must be in \(0, 1\]"),
            ("CLUB_MINIMUM_PAYMENT_RATIO", "0", r"must be in \(0, 1\]"),
            ("CLUB_MINIMUM_PAYMENT_RATIO", "NaN", r"must be in \(0, 1\]"),
            ("CLUB_MINIMUM_PAYMENT_RATIO", "half", "must be a decimal number"),
            ("CLUB_LOG_LEVEL", "LOUD", "must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL"),
        ],
    )
    def test_invalid_values(self, clean_env, monkeypatch, name, value, message):
        monkeypatch.setenv(name, value)
        with pytest.raises(RuntimeError, match=message):
            load_settings(clean_env)

    def test_log_level_is_case_insensitive(self, clean_env, monkeypatch):
        monkeypatch.setenv("CLUB_LOG_LEVEL", "debug")
        assert load_settings(clean_env).log_level == "DEBUG"
