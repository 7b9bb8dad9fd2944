"""
Tests for INI settings loading.
"""
from lottocore.config import (
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MIN_PARITY_RATIO,
    Settings,
    load_settings,
)
from lottocore.models import ConstraintConfig


class TestLoadSettings:

    def test_missing_file_uses_defaults(self, tmp_path):
        settings = load_settings(str(tmp_path / "absent.ini"))
        assert settings == Settings()
        assert settings.max_attempts == DEFAULT_MAX_ATTEMPTS
        assert settings.log_file is None

    def test_reads_values(self, tmp_path):
        path = tmp_path / "config.ini"
        path.write_text(
            "[generation]\n"
            "max_attempts = 250\n"
            "[constraints]\n"
            "min_parity_ratio = 0.3\n"
            "max_parity_ratio = 0.7\n"
            "min_primes = 2\n"
            "max_primes = 4\n"
            "[logging]\n"
            "level = debug\n"
            "file = logs/run.log\n",
            encoding="utf-8",
        )
        settings = load_settings(str(path))
        assert settings.max_attempts == 250
        assert (settings.min_parity_ratio, settings.max_parity_ratio) == (0.3, 0.7)
        assert (settings.min_primes, settings.max_primes) == (2, 4)
        assert settings.log_level == "DEBUG"
        assert settings.log_file == "logs/run.log"

    def test_partial_file_falls_back(self, tmp_path):
        path = tmp_path / "config.ini"
        path.write_text("[constraints]\nmax_primes =\n", encoding="utf-8")
        settings = load_settings(str(path))
        assert settings.max_primes is None
        assert settings.min_parity_ratio == DEFAULT_MIN_PARITY_RATIO
        assert settings.max_attempts == DEFAULT_MAX_ATTEMPTS


class TestConstraintDefaults:

    def test_builds_constraint_config(self):
        settings = Settings(min_parity_ratio=0.4, max_parity_ratio=0.6, min_primes=0, max_primes=3)
        assert settings.constraint_defaults() == ConstraintConfig(
            min_parity_ratio=0.4, max_parity_ratio=0.6, min_primes=0, max_primes=3
        )
