from __future__ import annotations

from ..config import OobeConfig
from ..pipeline import ApplyContext


class SetFullnameStep:
    step_id = "60_set_fullname"

    def should_run(self, config: OobeConfig) -> bool:
        return config.fullname is not None

    def run(self, ctx: ApplyContext) -> None:
        ctx.system.set_fullname(ctx.config.fullname, ctx.config.user)
