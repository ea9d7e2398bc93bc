from __future__ import annotations

import logging
import os
import shlex
import subprocess
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Protocol, Sequence

from ..errors import CommandError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    stdout: str
    stderr: str


def _fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


class CommandRunner(Protocol):
    """Capability to run an external program."""

    def run(
        self,
        argv: Sequence[str],
        *,
        env: Mapping[str, str] | None = None,
        input_text: str | None = None,
        check: bool = True,
    ) -> CmdResult:
        ...


class SubprocessRunner:
    """Run commands on the host with consistent logging.

    - Always logs the command (never the stdin payload).
    - Captures stdout/stderr.
    - dry_run logs but does not execute.
    """

    def __init__(self, *, dry_run: bool = False) -> None:
        self.dry_run = dry_run

    def run(
        self,
        argv: Sequence[str],
        *,
        env: Mapping[str, str] | None = None,
        input_text: str | None = None,
        check: bool = True,
    ) -> CmdResult:
        argv_list = list(argv)
        logger.info("CMD %s", _fmt_argv(argv_list))

        if self.dry_run:
            return CmdResult(argv=argv_list, returncode=0, stdout="", stderr="")

        try:
            p = subprocess.run(
                argv_list,
                input=input_text,
                text=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                env=dict(os.environ, **(env or {})),
            )
        except FileNotFoundError as e:
            raise CommandError(argv_list, 127, str(e)) from e

        if p.stdout:
            logger.debug("STDOUT %s", p.stdout.strip())
        if p.stderr:
            logger.debug("STDERR %s", p.stderr.strip())

        if check and p.returncode != 0:
            raise CommandError(argv_list, p.returncode, p.stderr)

        return CmdResult(argv=argv_list, returncode=p.returncode, stdout=p.stdout, stderr=p.stderr)


@dataclass
class RecordedCall:
    argv: List[str]
    env: Dict[str, str]
    input_text: Optional[str]


@dataclass
class RecordingRunner:
    """In-memory runner: records every call instead of executing it.

    ``failures`` maps a program name to the return code it should report.
    """

    calls: List[RecordedCall] = field(default_factory=list)
    failures: Dict[str, int] = field(default_factory=dict)

    def run(
        self,
        argv: Sequence[str],
        *,
        env: Mapping[str, str] | None = None,
        input_text: str | None = None,
        check: bool = True,
    ) -> CmdResult:
        argv_list = list(argv)
        self.calls.append(RecordedCall(argv=argv_list, env=dict(env or {}), input_text=input_text))

        program = argv_list[0] if argv_list else ""
        returncode = self.failures.get(program, 0)
        stderr = f"{program}: simulated failure" if returncode else ""
        if check and returncode != 0:
            raise CommandError(argv_list, returncode, stderr)
        return CmdResult(
            argv=argv_list,
            returncode=returncode,
            stdout="",
            stderr=stderr,
        )

    @property
    def programs(self) -> List[str]:
        return [c.argv[0] for c in self.calls if c.argv]
