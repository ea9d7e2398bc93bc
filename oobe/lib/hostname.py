from __future__ import annotations

import logging

from .command import CommandRunner
from .files import write_file

logger = logging.getLogger(__name__)


def set_hostname(runner: CommandRunner, hostname: str, *, root: str = "/", dry_run: bool = False) -> None:
    """Persist the hostname and, on a live root, apply it to the running system."""

    write_file(root, "/etc/hostname", hostname + "\n", dry_run=dry_run)
    if root == "/":
        runner.run(["hostnamectl", "set-hostname", hostname])
    logger.info("Hostname set to %s", hostname)
