from __future__ import annotations

from ..config import OobeConfig
from ..pipeline import ApplyContext


class SetTimezoneStep:
    step_id = "70_set_timezone"

    def should_run(self, config: OobeConfig) -> bool:
        return True

    def run(self, ctx: ApplyContext) -> None:
        ctx.system.set_zoneinfo(ctx.config.timezone)
