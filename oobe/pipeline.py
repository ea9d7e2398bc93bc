from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Protocol, Sequence

from .config import OobeConfig
from .lib.system import SystemOps

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApplyContext:
    config: OobeConfig
    system: SystemOps


class Step(Protocol):
    """A single system mutation. Steps are not idempotent."""

    step_id: str

    def should_run(self, config: OobeConfig) -> bool:
        ...

    def run(self, ctx: ApplyContext) -> None:
        ...


@dataclass(frozen=True)
class PipelineResult:
    ran_steps: List[str]
    skipped_steps: List[str]


def run_pipeline(*, ctx: ApplyContext, steps: Sequence[Step]) -> PipelineResult:
    """Run steps in order, stopping at the first failure.

    The failing step's exception propagates unchanged. Completed steps are
    not undone; a failed run has to be restarted from scratch.
    """

    ran: List[str] = []
    skipped: List[str] = []

    for step in steps:
        if not step.should_run(ctx.config):
            logger.info("Skipping step %s (not requested)", step.step_id)
            skipped.append(step.step_id)
            continue

        logger.info("Running step %s", step.step_id)
        try:
            step.run(ctx)
        except Exception as e:
            logger.error("Step %s failed after %s: %s", step.step_id, ran or "no steps", e)
            raise
        ran.append(step.step_id)

    return PipelineResult(ran_steps=ran, skipped_steps=skipped)
