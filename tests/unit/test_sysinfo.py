"""Unit tests for SystemInfoService."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from locinstaller.services.sysinfo import DEFAULT_VARIANT, SystemInfoService

SCRIPT = "/usr/share/loc-installer/scripts/get-system-info.sh"


def _completed(stdout: bytes, returncode: int = 0, stderr: bytes = b""):
    result = MagicMock()
    result.stdout = stdout
    result.stderr = stderr
    result.returncode = returncode
    return result


@pytest.mark.unit
class TestSystemInfoService:

    @pytest.fixture
    def service(self):
        return SystemInfoService(SCRIPT)

    def test_get_list_skips_empty_lines(self, service):
        with patch(
            "locinstaller.services.sysinfo.subprocess.run",
            return_value=_completed(b"Europe/Madrid\n\nAmerica/Lima\n"),
        ) as mock_run:
            result = service.get_list("timezones")

        assert result == ["Europe/Madrid", "America/Lima"]
        assert mock_run.call_args.args[0] == [SCRIPT, "timezones"]

    def test_unknown_kind(self, service):
        with pytest.raises(ValueError, match="Unknown system info list"):
            service.get_list("printers")

    def test_missing_script_returns_empty(self, service):
        with patch(
            "locinstaller.services.sysinfo.subprocess.run",
            side_effect=FileNotFoundError(SCRIPT),
        ):
            assert service.get_list("disks") == []

    def test_timeout_returns_empty(self, service):
        with patch(
            "locinstaller.services.sysinfo.subprocess.run",
            side_effect=subprocess.TimeoutExpired(SCRIPT, 30),
        ):
            assert service.get_list("languages") == []

    def test_nonzero_exit_keeps_output(self, service):
        with patch(
            "locinstaller.services.sysinfo.subprocess.run",
            return_value=_completed(b"us\nes\n", returncode=1, stderr=b"partial"),
        ):
            assert service.get_list("keyboards") == ["us", "es"]

    def test_get_current(self, service):
        output = b'CURRENT_TIMEZONE="Europe/Madrid"\nCURRENT_KEYBOARD=es\nOTHER=x\n'
        with patch(
            "locinstaller.services.sysinfo.subprocess.run",
            return_value=_completed(output),
        ):
            current = service.get_current()

        assert current == {"timezone": "Europe/Madrid", "keyboard": "es", "language": "en_US"}

    def test_get_current_fallbacks(self, service):
        with patch(
            "locinstaller.services.sysinfo.subprocess.run",
            side_effect=OSError("exec format error"),
        ):
            current = service.get_current()

        assert current == {"timezone": "UTC", "keyboard": "us", "language": "en_US"}


@pytest.mark.unit
class TestPartitionsAndVariants:

    @pytest.fixture
    def service(self):
        return SystemInfoService(SCRIPT)

    def test_partitions_parsed(self, service):
        output = (
            "/dev/sda1|512M|vfat|\n"
            "/dev/├─sda2|6.2G|ext4|\n"
            "/dev/└─sda3|3.8G||\n"
            "\n"
            "(no partition table)\n"
        ).encode("utf-8")
        with patch(
            "locinstaller.services.sysinfo.subprocess.run",
            return_value=_completed(output),
        ) as mock_run:
            partitions = service.get_partitions()

        assert mock_run.call_args.args[0] == [SCRIPT, "partitions"]
        assert [p.device for p in partitions] == [
            "/dev/sda1",
            "/dev/sda2",
            "/dev/sda3",
            "(no partition table)",
        ]
        assert partitions[1].size == "6.2G"
        assert partitions[1].fstype == "ext4"
        assert partitions[1].label == "/dev/sda2 - 6.2G ext4"
        assert partitions[2].label == "/dev/sda3 - 3.8G"
        assert partitions[3].label == "(no partition table)"

    def test_partitions_missing_script(self, service):
        with patch(
            "locinstaller.services.sysinfo.subprocess.run",
            side_effect=FileNotFoundError(SCRIPT),
        ):
            assert service.get_partitions() == []

    def test_variants_default_first(self, service):
        with patch(
            "locinstaller.services.sysinfo.subprocess.run",
            return_value=_completed(b"nodeadkeys - Eliminate dead keys\ndvorak - Dvorak\n"),
        ) as mock_run:
            variants = service.get_variants("es")

        assert mock_run.call_args.args[0] == [SCRIPT, "variants", "es"]
        assert variants == [
            DEFAULT_VARIANT,
            "nodeadkeys - Eliminate dead keys",
            "dvorak - Dvorak",
        ]

    def test_variants_default_not_duplicated(self, service):
        with patch(
            "locinstaller.services.sysinfo.subprocess.run",
            return_value=_completed(f"{DEFAULT_VARIANT}\nintl - International\n".encode()),
        ):
            assert service.get_variants("us") == [DEFAULT_VARIANT, "intl - International"]

    def test_variants_only_default_when_script_fails(self, service):
        with patch(
            "locinstaller.services.sysinfo.subprocess.run",
            side_effect=OSError("exec format error"),
        ):
            assert service.get_variants("latam") == [DEFAULT_VARIANT]

    @pytest.mark.parametrize("layout", ["", "--help"])
    def test_variants_invalid_layout(self, service, layout):
        with pytest.raises(ValueError, match="Invalid keyboard layout"):
            service.get_variants(layout)
