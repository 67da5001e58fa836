"""Partition entries listed for manual partitioning."""

from typing import Optional

from pydantic import BaseModel, Field, computed_field

# lsblk tree-drawing prefixes the system-info script leaves in device names.
TREE_MARKERS = ("├─", "└─")


class Partition(BaseModel):
    """One line of "get-system-info.sh partitions" output."""

    device: str = Field(..., description="Device path, e.g. /dev/sda1")
    size: str = Field(default="", description="Human-readable size, e.g. 6.2G")
    fstype: str = Field(default="", description="Filesystem type (may be empty)")

    @computed_field
    @property
    def label(self) -> str:
        """Text shown in the partition selectors."""
        if not self.size and not self.fstype:
            return self.device
        return f"{self.device} - {self.size} {self.fstype}".rstrip()

    @classmethod
    def parse(cls, line: str) -> Optional["Partition"]:
        """Parse "device|size|fstype|" (tree markers in device are dropped).

        Lines without two '|' separators are kept whole as the device.

        Returns:
            Partition, or None for an empty line
        """
        line = line.strip()
        if not line:
            return None

        fields = line.split("|")
        if len(fields) < 3:
            return cls(device=line)

        device = fields[0].strip()
        for marker in TREE_MARKERS:
            device = device.replace(marker, "")
        return cls(device=device, size=fields[1].strip(), fstype=fields[2].strip())
