from __future__ import annotations

import logging
from typing import Mapping, Protocol, Sequence

from . import fstab, hostname, locale_conf, swap, user, zoneinfo
from .command import CmdResult, CommandRunner, SubprocessRunner
from .env import PATHS
from .files import target_path

logger = logging.getLogger(__name__)


class SystemOps(Protocol):
    """OS mutations the configuration pipeline relies on."""

    def set_hostname(self, name: str) -> None:
        ...

    def set_locale(self, locale: str) -> None:
        ...

    def add_new_user(self, name: str, secret: str) -> None:
        ...

    def set_hwclock_localtime(self, localtime: bool) -> None:
        ...

    def create_swapfile(self, size_bytes: int, root: str) -> None:
        ...

    def write_swap_fstab_entry(self) -> None:
        ...

    def set_fullname(self, fullname: str, user: str) -> None:
        ...

    def set_zoneinfo(self, timezone: str) -> None:
        ...

    def run_external_program(
        self, name: str, args: Sequence[str], env: Mapping[str, str]
    ) -> CmdResult:
        ...


class LinuxSystem:
    """Production SystemOps backed by standard Linux tools.

    File edits are made relative to ``root`` so the same code can target a
    mounted image; commands always run against the live host.
    """

    def __init__(
        self,
        runner: CommandRunner | None = None,
        *,
        root: str = PATHS.target_root,
        zoneinfo_dir: str = PATHS.zoneinfo_dir,
        dry_run: bool = False,
    ) -> None:
        self.runner = runner if runner is not None else SubprocessRunner(dry_run=dry_run)
        self.root = root
        self.zoneinfo_dir = zoneinfo_dir
        self.dry_run = dry_run

    def set_hostname(self, name: str) -> None:
        hostname.set_hostname(self.runner, name, root=self.root, dry_run=self.dry_run)

    def set_locale(self, locale: str) -> None:
        locale_conf.set_locale(locale, root=self.root, dry_run=self.dry_run)

    def add_new_user(self, name: str, secret: str) -> None:
        user.add_new_user(self.runner, name, secret)

    def set_hwclock_localtime(self, localtime: bool) -> None:
        locale_conf.set_hwclock_localtime(self.runner, localtime)

    def create_swapfile(self, size_bytes: int, root: str) -> None:
        swap.create_swapfile(self.runner, size_bytes, str(target_path(self.root, root)))

    def write_swap_fstab_entry(self) -> None:
        fstab.append_entry(
            self.root,
            fstab.swap_entry("/" + PATHS.swapfile_name),
            dry_run=self.dry_run,
        )

    def set_fullname(self, fullname: str, user_name: str) -> None:
        user.set_fullname(self.runner, fullname, user_name)

    def set_zoneinfo(self, timezone: str) -> None:
        zoneinfo.set_zoneinfo(
            timezone,
            root=self.root,
            zoneinfo_dir=self.zoneinfo_dir,
            dry_run=self.dry_run,
        )

    def run_external_program(
        self, name: str, args: Sequence[str], env: Mapping[str, str]
    ) -> CmdResult:
        return self.runner.run([name, *args], env=env)
