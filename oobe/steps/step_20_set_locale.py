from __future__ import annotations

from ..config import OobeConfig
from ..pipeline import ApplyContext


class SetLocaleStep:
    step_id = "20_set_locale"

    def should_run(self, config: OobeConfig) -> bool:
        return True

    def run(self, ctx: ApplyContext) -> None:
        ctx.system.set_locale(ctx.config.locale)
