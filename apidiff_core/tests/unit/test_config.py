"""Unit tests for apidiff_core.config."""

from __future__ import annotations

import logging

import pytest

from apidiff_core.config import DEFAULT_LOG_FORMAT, Settings, load_settings

# ---------------------------------------------------------------------------
# Settings - default values
# ---------------------------------------------------------------------------


class TestSettingsDefaults:
    def test_default_detect_changes(self):
        assert Settings().detect_changes is True

    def test_default_fail_on_diff(self):
        assert Settings().fail_on_diff is False

    def test_default_debug(self):
        settings = Settings()
        assert settings.debug is False
        assert settings.log_level == logging.WARNING

    def test_default_log_format(self):
        assert Settings().log_format == DEFAULT_LOG_FORMAT


# ---------------------------------------------------------------------------
# Environment variable overrides
# ---------------------------------------------------------------------------


class TestSettingsEnvOverrides:
    def test_env_var_disables_change_detection(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("APIDIFF_DETECT_CHANGES", "false")
        assert Settings().detect_changes is False

    def test_env_var_enables_debug(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("APIDIFF_DEBUG", "true")
        settings = Settings()
        assert settings.debug is True
        assert settings.log_level == logging.DEBUG

    def test_env_prefix_case_insensitive(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("apidiff_fail_on_diff", "1")
        assert Settings().fail_on_diff is True


# ---------------------------------------------------------------------------
# load_settings
# ---------------------------------------------------------------------------


class TestLoadSettings:
    def test_overrides(self):
        settings = load_settings(detect_changes=False, fail_on_diff=True)
        assert settings.detect_changes is False
        assert settings.fail_on_diff is True

    def test_returns_settings(self):
        assert isinstance(load_settings(), Settings)
