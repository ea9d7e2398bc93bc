"""Command surface offered to a graphical front end.

A GUI shell (webview, GTK, ...) calls these methods from its event handlers.
It collects the configuration, submits it once with :meth:`WizardSession.set_config`,
and asks :meth:`WizardSession.request_close` before honouring a window-close
request so an in-flight application is never interrupted.
"""

from __future__ import annotations

import enum
import logging
import os
import threading
from typing import List, Mapping, Optional

from .catalogs import is_blocked_username
from .config import parse_config
from .errors import OobeError, SessionStateError
from .lib.command import CommandRunner, SubprocessRunner
from .lib.env import DEFAULT_LANG, PATHS, UNSET_LANG
from .lib.locale_conf import set_locale_live
from .lib.system import LinuxSystem, SystemOps
from .lib.zoneinfo import ZoneInfo, list_zoneinfo
from .main import apply_config
from .swapsize import get_recommended_swap_size, get_total_memory

logger = logging.getLogger(__name__)


class CommandFailed(OobeError):
    """Error returned to the front end; carries the underlying message verbatim."""


class SessionState(enum.Enum):
    NOT_APPLIED = "not_applied"
    APPLYING = "applying"
    APPLIED = "applied"
    FAILED = "failed"


class WizardSession:
    def __init__(
        self,
        *,
        system: Optional[SystemOps] = None,
        runner: Optional[CommandRunner] = None,
        environ: Optional[Mapping[str, str]] = None,
        zoneinfo_dir: str = PATHS.zoneinfo_dir,
    ) -> None:
        self.runner = runner if runner is not None else SubprocessRunner()
        self.system = system if system is not None else LinuxSystem(self.runner)
        self.environ = environ if environ is not None else os.environ
        self.zoneinfo_dir = zoneinfo_dir
        self.state = SessionState.NOT_APPLIED
        self.can_close = threading.Event()
        self._lock = threading.Lock()

    def list_timezones(self) -> List[ZoneInfo]:
        try:
            return list_zoneinfo(self.zoneinfo_dir)
        except OobeError as e:
            raise CommandFailed(str(e)) from e

    def set_config(self, config: str) -> None:
        """Parse and apply a serialized configuration. Only one run per session."""

        with self._lock:
            if self.state is not SessionState.NOT_APPLIED:
                raise SessionStateError(f"Configuration already submitted ({self.state.value})")
            self.state = SessionState.APPLYING

        try:
            apply_config(parse_config(config), self.system)
        except Exception as e:
            self.state = SessionState.FAILED
            self.can_close.set()
            raise CommandFailed(str(e)) from e

        self.state = SessionState.APPLIED
        self.can_close.set()

    def is_block_username(self, username: str) -> bool:
        return is_blocked_username(username)

    def read_locale(self) -> str:
        return self.environ.get("LANG") or DEFAULT_LANG

    def is_lang_already_set(self) -> bool:
        """True if LANG was chosen at the boot menu, so language selection can be skipped."""

        lang = self.environ.get("LANG")
        return lang is not None and lang != UNSET_LANG

    def get_memory(self) -> int:
        return get_total_memory()

    def get_recommend_swap_size(self) -> float:
        return get_recommended_swap_size()

    def set_locale(self, locale: str) -> None:
        """Switch the live session's locale for preview; failures are only logged."""

        try:
            set_locale_live(self.runner, locale)
        except OobeError as e:
            logger.warning("Unable to set live locale %s: %s", locale, e)

    def request_close(self) -> bool:
        """Whether a window-close request may be honoured right now."""

        return self.can_close.is_set()

    def exit(self) -> None:
        """Terminate once the submitted configuration has been applied or has failed."""

        if self.state not in (SessionState.APPLIED, SessionState.FAILED):
            raise SessionStateError(f"Refusing to exit before the configuration finished ({self.state.value})")
        self.can_close.set()
        logger.info("Exiting (state=%s)", self.state.value)
        raise SystemExit(0)

    def abort(self) -> None:
        """Leave the wizard without submitting anything."""

        if self.state is not SessionState.NOT_APPLIED:
            raise SessionStateError(f"Configuration already submitted ({self.state.value}); use exit")
        self.can_close.set()
        logger.info("Setup aborted before submission")
        raise SystemExit(0)
