"""System information lists for the wizard pages."""

import subprocess
from typing import Dict, List
import logging

from locinstaller.models.partition import Partition

LIST_KINDS = ("timezones", "keyboards", "languages", "disks")

# Always listed first and selected by default.
DEFAULT_VARIANT = "default - Default (no variant)"

# Keys printed by "<script> env" and their fallbacks.
CURRENT_DEFAULTS: Dict[str, str] = {
    "CURRENT_TIMEZONE": "UTC",
    "CURRENT_KEYBOARD": "us",
    "CURRENT_LANGUAGE": "en_US",
}


class SystemInfoService:
    """Runs the system-info helper script and returns its output as lists."""

    TIMEOUT = 30

    def __init__(self, script: str):
        """Initialize system info service.

        Args:
            script: Path to get-system-info.sh
        """
        self.logger = logging.getLogger("locinstaller.sysinfo")
        self.script = script

    def _run(self, subcommand: str, *args: str) -> List[str]:
        try:
            result = subprocess.run(
                [self.script, subcommand, *args],
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                timeout=self.TIMEOUT,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            self.logger.warning(f"System info '{subcommand}' failed: {e}")
            return []

        if result.returncode != 0:
            self.logger.warning(
                f"System info '{subcommand}' exited with {result.returncode}: "
                f"{result.stderr.decode(errors='replace').strip()}"
            )

        lines = result.stdout.decode("utf-8", errors="replace").splitlines()
        return [line for line in lines if line]

    def get_list(self, kind: str) -> List[str]:
        """Get one of the wizard's choice lists.

        Args:
            kind: One of timezones, keyboards, languages, disks

        Returns:
            Non-empty output lines, in script order

        Raises:
            ValueError: If kind is unknown
        """
        if kind not in LIST_KINDS:
            raise ValueError(f"Unknown system info list: {kind}")
        entries = self._run(kind)
        self.logger.debug(f"Loaded {len(entries)} {kind}")
        return entries

    def get_partitions(self) -> List[Partition]:
        """Partitions available for manual partitioning, in script order."""
        partitions = []
        for line in self._run("partitions"):
            partition = Partition.parse(line)
            if partition is not None:
                partitions.append(partition)
        self.logger.debug(f"Loaded {len(partitions)} partitions")
        return partitions

    def get_variants(self, layout: str) -> List[str]:
        """Keyboard variants for a layout, with the default entry first.

        Args:
            layout: Keyboard layout code (e.g. "es")

        Raises:
            ValueError: If layout is empty or looks like an option
        """
        if not layout or layout.startswith("-"):
            raise ValueError(f"Invalid keyboard layout: {layout!r}")
        variants = [v for v in self._run("variants", layout) if v != DEFAULT_VARIANT]
        if not variants:
            self.logger.info(f"No variants found for layout {layout}, only default available")
        return [DEFAULT_VARIANT, *variants]

    def get_current(self) -> Dict[str, str]:
        """Current timezone, keyboard and language of the live system.

        Returns:
            Dict with timezone, keyboard and language keys; missing values
            fall back to UTC, us and en_US
        """
        values = dict(CURRENT_DEFAULTS)
        for line in self._run("env"):
            key, sep, value = line.partition("=")
            key = key.strip()
            value = value.strip().strip('"')
            if sep and key in values and value:
                values[key] = value
        return {
            "timezone": values["CURRENT_TIMEZONE"],
            "keyboard": values["CURRENT_KEYBOARD"],
            "language": values["CURRENT_LANGUAGE"],
        }
