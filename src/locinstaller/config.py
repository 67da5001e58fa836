"""Service settings with environment overrides."""

import logging
from functools import lru_cache
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "LOCINSTALLER_"


class InstallerSettings(BaseModel):
    """Runtime settings for the installer service.

    Every field can be overridden with an environment variable named
    LOCINSTALLER_<FIELD> (e.g. LOCINSTALLER_PORT=8080).
    """

    scripts_dir: Path = Field(
        default=Path("/usr/share/loc-installer/scripts"),
        description="Directory holding the core installer and system-info scripts",
    )
    log_file: str = Field(default="./logs/locinstaller.log", description="Rotating log file path")
    log_level: str = Field(default="INFO", description="DEBUG/INFO/WARNING/ERROR")
    log_max_bytes: int = Field(
        default=10 * 1024 * 1024, gt=0, description="Log file size before rotation"
    )
    log_backup_count: int = Field(default=3, ge=0, description="Rotated log files kept")
    host: str = Field(default="127.0.0.1", description="API bind address")
    port: int = Field(default=12316, gt=0, lt=65536, description="API port")
    drain_interval: float = Field(
        default=0.1, gt=0, description="Seconds between update queue drains"
    )
    max_line_length: int = Field(
        default=2047, gt=0, description="Installer output lines are truncated beyond this"
    )
    use_sudo: bool = Field(default=True, description="Run the core installer through sudo")

    @field_validator("log_level")
    @classmethod
    def known_level(cls, v: str) -> str:
        """Accept standard logging level names."""
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return v

    @property
    def core_installer(self) -> str:
        return str(self.scripts_dir / "core-installer.sh")

    @property
    def sysinfo_script(self) -> str:
        return str(self.scripts_dir / "get-system-info.sh")

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level)

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> "InstallerSettings":
        """Build settings from LOCINSTALLER_* environment variables.

        Args:
            environ: Mapping to read instead of os.environ

        Returns:
            Validated settings; unset fields keep their defaults
        """
        environ = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            key = f"{ENV_PREFIX}{name.upper()}"
            if key in environ:
                values[name] = environ[key]
        return cls(**values)


@lru_cache(maxsize=1)
def get_settings() -> InstallerSettings:
    """Process-wide settings, read from the environment once."""
    return InstallerSettings.from_env()
