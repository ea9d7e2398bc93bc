from __future__ import annotations

from ..config import OobeConfig
from ..pipeline import ApplyContext


class SetHostnameStep:
    step_id = "10_set_hostname"

    def should_run(self, config: OobeConfig) -> bool:
        return True

    def run(self, ctx: ApplyContext) -> None:
        ctx.system.set_hostname(ctx.config.hostname)
