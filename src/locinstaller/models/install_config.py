"""Installation configuration collected by the wizard."""

from typing import List

from pydantic import BaseModel, Field, field_validator, model_validator


def _flag(value: bool) -> str:
    return "true" if value else "false"


class InstallConfig(BaseModel):
    """Validated answers from the regional, partitioning and user pages.

    Builds the argv handed to the core installer. The argv is executed
    without a shell, so values need no quoting.
    """

    # Regional
    language: str = Field(default="en_US", min_length=1, description="Locale code")
    timezone: str = Field(default="UTC", min_length=1, description="Region/City timezone")
    keyboard: str = Field(default="us", min_length=1, description="Keyboard layout code")
    keyboard_variant: str = Field(default="", description="Keyboard variant (may be empty)")

    # Partitioning
    disk_device: str = Field(default="", description="Target disk for auto partitioning")
    uefi_mode: bool = Field(default=False, description="Install for UEFI boot")
    auto_partition: bool = Field(default=True, description="Let the installer partition the disk")
    separate_home: bool = Field(default=False)
    separate_boot: bool = Field(default=False)
    add_swap: bool = Field(default=False)
    create_swapfile: bool = Field(default=False, description="Swap file instead of swap partition")
    swap_size_mb: int = Field(default=2048, gt=0, description="Swap size in MiB")

    root_partition: str = Field(default="")
    home_partition: str = Field(default="")
    boot_partition: str = Field(default="")
    swap_partition: str = Field(default="")
    efi_partition: str = Field(default="")

    # User
    username: str = Field(
        ...,
        pattern=r"^[A-Za-z_-][A-Za-z0-9_-]{1,31}$",
        description="2-32 chars of letters, digits, '_' or '-', not starting with a digit",
    )
    realname: str = Field(default="", max_length=63)
    hostname: str = Field(..., min_length=1, max_length=63, description="RFC 1123 label")
    password: str = Field(..., min_length=1, repr=False)
    root_password: str = Field(default="", repr=False)
    same_root_password: bool = Field(default=True, description="Root reuses the user password")
    autologin: bool = Field(default=False)

    @field_validator("hostname")
    @classmethod
    def valid_hostname(cls, v: str) -> str:
        """Letters, digits and '-', not starting or ending with '-'."""
        if not all(c.isascii() and (c.isalnum() or c == "-") for c in v):
            raise ValueError("Hostname may only contain letters, digits and '-'")
        if v.startswith("-") or v.endswith("-"):
            raise ValueError("Hostname must not start or end with '-'")
        return v

    @model_validator(mode="after")
    def check_consistency(self) -> "InstallConfig":
        if self.same_root_password:
            self.root_password = self.password
        elif not self.root_password:
            raise ValueError("root_password is required when same_root_password is false")

        if self.auto_partition and not self.disk_device:
            raise ValueError("disk_device is required for automatic partitioning")
        if not self.auto_partition and not self.root_partition:
            raise ValueError("root_partition is required for manual partitioning")
        return self

    def _swap_args(self) -> List[str]:
        if not self.add_swap:
            return ["--add-swap=false"]
        if self.create_swapfile:
            return [
                "--add-swap=true",
                "--create-swapfile=true",
                f"--swapfile-size={self.swap_size_mb}",
            ]
        return [
            "--add-swap=true",
            "--create-swapfile=false",
            f"--swap-size={self.swap_size_mb}",
        ]

    def _partition_args(self) -> List[str]:
        args = [f"--root-part={self.root_partition}"]
        if self.separate_home and self.home_partition:
            args.append(f"--home-part={self.home_partition}")
        if self.separate_boot and self.boot_partition:
            args.append(f"--boot-part={self.boot_partition}")
        if self.add_swap and self.swap_partition:
            args.append(f"--swap-part={self.swap_partition}")
        if self.uefi_mode and self.efi_partition:
            args.append(f"--efi-part={self.efi_partition}")
        return args

    def to_command(self, installer: str, use_sudo: bool = True) -> List[str]:
        """Build the core installer argv.

        Args:
            installer: Path to the core installer script
            use_sudo: Prefix the command with sudo

        Returns:
            Argument vector for subprocess execution
        """
        argv = ["sudo"] if use_sudo else []
        argv += [installer, "install"]

        if self.auto_partition:
            argv += [
                f"--disk={self.disk_device}",
                "--auto-partition=true",
                f"--uefi-mode={_flag(self.uefi_mode)}",
                f"--sep-home={_flag(self.separate_home)}",
            ]
            argv += self._swap_args()
        else:
            argv += ["--auto-partition=false", f"--uefi-mode={_flag(self.uefi_mode)}"]
            argv += self._partition_args()

        argv += [
            f"--username={self.username}",
            f"--realname={self.realname}",
            f"--hostname={self.hostname}",
            f"--password={self.password}",
        ]
        if self.root_password:
            argv.append(f"--root-password={self.root_password}")
        argv += [
            f"--autologin={_flag(self.autologin)}",
            f"--timezone={self.timezone}",
            f"--keyboard={self.keyboard}",
            f"--keyboard-variant={self.keyboard_variant}",
            f"--language={self.language}",
        ]
        return argv

    def display_command(self, installer: str, use_sudo: bool = True) -> str:
        """Shortened command line with passwords hidden, for the log."""
        prefix = "sudo " if use_sudo else ""
        if self.auto_partition:
            target = f"--disk={self.disk_device}"
        else:
            target = f"--root-part={self.root_partition}"
        return (
            f"Command: {prefix}{installer} install {target} "
            f"--username={self.username} --hostname={self.hostname} "
            f"(passwords hidden) ..."
        )
