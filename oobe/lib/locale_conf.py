from __future__ import annotations

import logging

from .command import CommandRunner
from .files import write_file

logger = logging.getLogger(__name__)


def set_locale(locale: str, *, root: str = "/", dry_run: bool = False) -> None:
    write_file(root, "/etc/locale.conf", f"LANG={locale}\n", dry_run=dry_run)
    logger.info("System locale set to %s", locale)


def set_locale_live(runner: CommandRunner, locale: str) -> None:
    """Switch the running system's locale without touching anything else."""

    runner.run(["localectl", "set-locale", locale])


def set_hwclock_localtime(runner: CommandRunner, localtime: bool) -> None:
    mode = "--localtime" if localtime else "--utc"
    runner.run(["hwclock", "--systohc", mode])
    logger.info("Hardware clock keeps %s", "local time" if localtime else "UTC")
