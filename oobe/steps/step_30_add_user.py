from __future__ import annotations

import logging

from ..config import OobeConfig
from ..pipeline import ApplyContext

logger = logging.getLogger(__name__)


class AddUserStep:
    step_id = "30_add_user"

    def should_run(self, config: OobeConfig) -> bool:
        return True

    def run(self, ctx: ApplyContext) -> None:
        # Password goes straight to the collaborator; it is never logged.
        logger.info("Creating user %s", ctx.config.user)
        ctx.system.add_new_user(ctx.config.user, ctx.config.pwd)
