"""Unit tests for InstallerSettings."""

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from locinstaller.config import InstallerSettings, get_settings


@pytest.mark.unit
class TestInstallerSettings:

    def test_defaults(self):
        settings = InstallerSettings.from_env({})

        assert settings.port == 12316
        assert settings.max_line_length == 2047
        assert settings.use_sudo is True
        assert settings.core_installer == "/usr/share/loc-installer/scripts/core-installer.sh"
        assert settings.sysinfo_script == "/usr/share/loc-installer/scripts/get-system-info.sh"

    def test_environment_overrides(self):
        settings = InstallerSettings.from_env({
            "LOCINSTALLER_PORT": "8080",
            "LOCINSTALLER_USE_SUDO": "false",
            "LOCINSTALLER_DRAIN_INTERVAL": "0.5",
            "LOCINSTALLER_SCRIPTS_DIR": "/opt/scripts",
            "LOCINSTALLER_LOG_LEVEL": "debug",
            "UNRELATED": "ignored",
        })

        assert settings.port == 8080
        assert settings.use_sudo is False
        assert settings.drain_interval == 0.5
        assert settings.scripts_dir == Path("/opt/scripts")
        assert settings.log_level == "DEBUG"
        assert settings.logging_level == logging.DEBUG

    @pytest.mark.parametrize(
        "key,value",
        [
            ("LOCINSTALLER_PORT", "0"),
            ("LOCINSTALLER_PORT", "http"),
            ("LOCINSTALLER_LOG_LEVEL", "LOUD"),
            ("LOCINSTALLER_DRAIN_INTERVAL", "0"),
        ],
    )
    def test_invalid_values_rejected(self, key, value):
        with pytest.raises(ValidationError):
            InstallerSettings.from_env({key: value})

    def test_get_settings_reads_environment_once(self, monkeypatch):
        monkeypatch.setenv("LOCINSTALLER_PORT", "9000")

        first = get_settings()
        monkeypatch.setenv("LOCINSTALLER_PORT", "9001")

        assert get_settings() is first
        assert first.port == 9000
