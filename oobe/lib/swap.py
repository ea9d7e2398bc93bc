from __future__ import annotations

import logging

from ..errors import SystemOperationError
from .command import CommandRunner
from .env import PATHS
from .files import target_path

logger = logging.getLogger(__name__)


def create_swapfile(
    runner: CommandRunner,
    size_bytes: int,
    root: str = "/",
    *,
    name: str = PATHS.swapfile_name,
) -> str:
    """Allocate, format and enable a swap file at <root>/<name>.

    Returns the path of the swap file.
    """

    size = int(size_bytes)
    if size <= 0:
        raise SystemOperationError(f"Invalid swap file size: {size_bytes}")

    path = str(target_path(root, name))
    logger.info("Creating swap file %s (%d bytes)", path, size)

    runner.run(["fallocate", "-l", str(size), path])
    runner.run(["chmod", "600", path])
    runner.run(["mkswap", path])
    runner.run(["swapon", path])
    return path
