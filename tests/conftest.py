"""Global pytest fixtures and configuration."""

import sys
import textwrap
from pathlib import Path
from typing import List

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from locinstaller.config import get_settings  # noqa: E402
from locinstaller.services.session_controller import SessionController  # noqa: E402


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset the controller singleton and cached settings around each test."""
    SessionController._instance = None
    get_settings.cache_clear()
    yield
    controller = SessionController._instance
    if controller is not None:
        controller.wait(timeout=10)
    SessionController._instance = None
    get_settings.cache_clear()


@pytest.fixture
def fake_installer():
    """Build an argv running a tiny Python "installer".

    The returned factory takes the raw output text (written as-is, so
    '\\r' and '\\n' are preserved) and the exit code.
    """

    def _make(output: str, exit_code: int = 0) -> List[str]:
        script = textwrap.dedent(
            f"""
            import sys
            sys.stdout.buffer.write({output.encode("utf-8")!r})
            sys.stdout.flush()
            sys.exit({exit_code})
            """
        )
        return [sys.executable, "-c", script]

    return _make


@pytest.fixture
def sample_config_data():
    """Valid automatic-partitioning InstallConfig payload."""
    return {
        "language": "es_ES",
        "timezone": "Europe/Madrid",
        "keyboard": "es",
        "keyboard_variant": "",
        "disk_device": "/dev/sda",
        "uefi_mode": True,
        "auto_partition": True,
        "username": "alice",
        "realname": "Alice Example",
        "hostname": "loc-pc",
        "password": "s3cret",
    }
