from __future__ import annotations

import logging

from .command import CommandRunner

logger = logging.getLogger(__name__)

DEFAULT_SHELL = "/bin/bash"
DEFAULT_GROUPS = ("wheel",)


def add_new_user(runner: CommandRunner, name: str, secret: str) -> None:
    """Create the account, then set its password through stdin."""

    runner.run(
        [
            "useradd",
            "-m",
            "-s",
            DEFAULT_SHELL,
            "-G",
            ",".join(DEFAULT_GROUPS),
            name,
        ]
    )
    # chpasswd reads "user:password" so the secret never reaches argv or the log.
    runner.run(["chpasswd"], input_text=f"{name}:{secret}\n")
    logger.info("Created user %s", name)


def set_fullname(runner: CommandRunner, fullname: str, user: str) -> None:
    runner.run(["usermod", "-c", fullname, user])
    logger.info("Set full name for %s", user)
