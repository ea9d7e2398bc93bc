"""GUI bridge.

A graphical shell (webview, GTK, Qt) should:
- Create one WizardSession at startup
- Dispatch its frontend's named commands through `invoke(...)`
- Ask `session.request_close()` before honouring a window-close request
- Show the error page with the message of any CommandFailed

This module documents the integration boundary and gives the shell a
name-based dispatch table.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, is_dataclass
from typing import Any, Callable, Dict

from oobe.catalogs import username_blocklist
from oobe.commands import WizardSession
from oobe.logging_utils import configure_logging

logger = logging.getLogger(__name__)

COMMANDS = (
    "set_config",
    "list_timezone",
    "set_locale",
    "read_locale",
    "is_lang_already_set",
    "is_block_username",
    "get_memory",
    "get_recommend_swap_size",
    "exit",
    "abort",
)


def command_table(session: WizardSession) -> Dict[str, Callable[..., Any]]:
    return {
        "set_config": session.set_config,
        "list_timezone": session.list_timezones,
        "set_locale": session.set_locale,
        "read_locale": session.read_locale,
        "is_lang_already_set": session.is_lang_already_set,
        "is_block_username": session.is_block_username,
        "get_memory": session.get_memory,
        "get_recommend_swap_size": session.get_recommend_swap_size,
        "exit": session.exit,
        "abort": session.abort,
    }


def _plain(value: Any) -> Any:
    if isinstance(value, list):
        return [_plain(v) for v in value]
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    return value


def invoke(session: WizardSession, name: str, *args: Any) -> Any:
    """Run a named command and return a JSON-friendly result."""

    table = command_table(session)
    if name not in table:
        raise KeyError(f"Unknown command: {name}")
    logger.debug("invoke %s", name)
    return _plain(table[name](*args))


def start_session(*, log_path: str | None = None) -> WizardSession:
    if log_path:
        configure_logging(log_path=log_path)
    else:
        configure_logging()
    # Build the blocklist before the first keystroke check arrives.
    username_blocklist()
    return WizardSession()
