from __future__ import annotations

import logging

from ..config import OobeConfig
from ..lib.env import PATHS
from ..pipeline import ApplyContext

logger = logging.getLogger(__name__)


class CreateSwapfileStep:
    step_id = "50_create_swapfile"

    def should_run(self, config: OobeConfig) -> bool:
        return config.swap_size != 0

    def run(self, ctx: ApplyContext) -> None:
        size = ctx.config.swap_size
        logger.info("Swap file requested: %d bytes", size)
        ctx.system.create_swapfile(size, PATHS.target_root)
        # Register it so it is enabled again on the next boot.
        ctx.system.write_swap_fstab_entry()
