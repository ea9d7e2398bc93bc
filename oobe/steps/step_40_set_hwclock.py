from __future__ import annotations

from ..config import OobeConfig
from ..pipeline import ApplyContext


class SetHwclockStep:
    step_id = "40_set_hwclock"

    def should_run(self, config: OobeConfig) -> bool:
        return True

    def run(self, ctx: ApplyContext) -> None:
        ctx.system.set_hwclock_localtime(ctx.config.rtc_as_localtime)
