from __future__ import annotations

import logging

from ..config import OobeConfig
from ..lib.env import MACHINE_ID_SETUP
from ..pipeline import ApplyContext

logger = logging.getLogger(__name__)


class RegenerateMachineIdStep:
    step_id = "80_regenerate_machine_id"

    def should_run(self, config: OobeConfig) -> bool:
        return True

    def run(self, ctx: ApplyContext) -> None:
        # The image ships with a placeholder id; every install needs its own.
        ctx.system.run_external_program(MACHINE_ID_SETUP, [], {})
        logger.info("Machine id regenerated")
