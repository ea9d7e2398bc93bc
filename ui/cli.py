"""Terminal setup wizard.

Asks for everything the configuration pipeline needs, one prompt at a time,
and applies the result through the same core the graphical front end uses.
"""

from __future__ import annotations

import logging
import math
import os
from typing import Callable, List, Optional, Sequence

from prompt_toolkit import prompt as pt_prompt
from prompt_toolkit.completion import FuzzyWordCompleter, WordCompleter
from prompt_toolkit.document import Document
from prompt_toolkit.validation import ValidationError, Validator
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from oobe.catalogs import LocaleEntry, find_locale_by_text, language_of, load_locales
from oobe.config import OobeConfig
from oobe.lib.env import DEFAULT_LANG
from oobe.lib.system import LinuxSystem, SystemOps
from oobe.lib.zoneinfo import list_zoneinfo
from oobe.logging_utils import configure_logging
from oobe.main import apply_config
from oobe.swapsize import bytes_to_gib, get_recommended_swap_size, gib_to_bytes
from oobe.validators import (
    VALID,
    Reason,
    Validation,
    get_default_username,
    require,
    validate_fullname,
    validate_hostname,
    validate_username,
)

logger = logging.getLogger(__name__)

WELCOME_TEXT = (
    "This wizard finishes setting up your new system.\n"
    "You will be asked for a user account, a hostname, your timezone and "
    "the size of the swap file. Nothing is changed until you confirm."
)


class FieldValidator(Validator):
    """Run validators in order; the first failure is shown under the prompt."""

    def __init__(self, *checks: Callable[[str], Validation]) -> None:
        self.checks = checks

    def validate(self, document: Document) -> None:
        for check in self.checks:
            result = check(document.text)
            if not result.ok:
                raise ValidationError(message=result.message, cursor_position=len(document.text))


def _choice(choices: Sequence[str]) -> Callable[[str], Validation]:
    allowed = set(choices)

    def check(value: str) -> Validation:
        return VALID if value in allowed else Validation(Reason.NOT_A_CHOICE)

    return check


class _SwapSizeValidator(Validator):
    def validate(self, document: Document) -> None:
        try:
            value = float(document.text)
        except ValueError:
            raise ValidationError(message="Enter a number of GiB, e.g. 4 or 0.5.")
        if not math.isfinite(value) or value < 0:
            raise ValidationError(message="Swap size must be zero or a positive number.")


class _YesNoValidator(Validator):
    def validate(self, document: Document) -> None:
        if document.text.strip().lower() not in {"", "y", "yes", "n", "no"}:
            raise ValidationError(message="Answer y or n.")


class TerminalWizard:
    def __init__(
        self,
        *,
        prompt: Callable[..., str] = pt_prompt,
        console: Optional[Console] = None,
        locales: Optional[List[LocaleEntry]] = None,
        timezones: Optional[List[str]] = None,
        recommended_swap: Optional[float] = None,
    ) -> None:
        self.prompt = prompt
        self.console = console or Console(highlight=False)
        self.locales = locales if locales is not None else load_locales()
        self.timezones = timezones if timezones is not None else [z.data for z in list_zoneinfo()]
        self.recommended_swap = recommended_swap

    def banner(self) -> None:
        self.console.print(
            Panel(WELCOME_TEXT, title="Setup Wizard", style="bold bright_white on blue", width=80)
        )

    def ask_locale(self) -> LocaleEntry:
        labels = [e.text for e in self.locales]
        current = os.environ.get("LANG", DEFAULT_LANG)
        default = next((e.text for e in self.locales if e.locale == current), labels[0])
        label = self.prompt(
            "Language: ",
            default=default,
            completer=WordCompleter(labels, sentence=True),
            validator=FieldValidator(_choice(labels)),
        )
        return find_locale_by_text(self.locales, label)

    def use_language(self, locale: LocaleEntry) -> None:
        # Message catalogs of the live session follow the chosen language.
        os.environ["LANGUAGE"] = language_of(locale.locale)

    def ask_fullname(self) -> str:
        return self.prompt("Full name (optional): ", validator=FieldValidator(validate_fullname)).strip()

    def ask_username(self, fullname: str) -> str:
        return self.prompt(
            "Username: ",
            default=get_default_username(fullname),
            validator=FieldValidator(require, validate_username),
        )

    def ask_password(self) -> str:
        while True:
            pwd = self.prompt("Password: ", is_password=True, validator=FieldValidator(require))
            confirm = self.prompt("Confirm password: ", is_password=True)
            if pwd == confirm:
                return pwd
            self.console.print("[red]Passwords do not match, try again.[/red]")

    def ask_timezone(self) -> str:
        return self.prompt(
            "Timezone: ",
            completer=FuzzyWordCompleter(self.timezones),
            validator=FieldValidator(_choice(self.timezones)),
        )

    def ask_hostname(self) -> str:
        return self.prompt("Hostname: ", validator=FieldValidator(require, validate_hostname))

    def ask_yes_no(self, message: str, default: bool = False) -> bool:
        answer = self.prompt(
            f"{message} [{'Y/n' if default else 'y/N'}]: ",
            validator=_YesNoValidator(),
        ).strip().lower()
        if not answer:
            return default
        return answer in {"y", "yes"}

    def ask_swap_size(self) -> int:
        recommended = self.recommended_swap
        if recommended is None:
            recommended = get_recommended_swap_size()
        default = f"{bytes_to_gib(recommended):.2f}"
        gib = float(self.prompt("Swap file size in GiB (0 for none): ", default=default, validator=_SwapSizeValidator()))
        return int(gib_to_bytes(gib))

    def summary(self, config: OobeConfig) -> None:
        table = Table(title="Summary", show_header=False)
        table.add_column("Setting", style="bold")
        table.add_column("Value")
        table.add_row("Locale", config.locale)
        table.add_row("Full name", config.fullname or "-")
        table.add_row("Username", config.user)
        table.add_row("Hostname", config.hostname)
        table.add_row("Timezone", config.timezone)
        table.add_row("Hardware clock", "local time" if config.rtc_as_localtime else "UTC")
        table.add_row(
            "Swap file",
            f"{bytes_to_gib(config.swap_size):.2f} GiB" if config.swap_size else "none",
        )
        self.console.print(table)

    def collect(self) -> OobeConfig:
        self.console.print("[bold bright_white]Setup Wizard - please select your language:[/bold bright_white]")
        locale = self.ask_locale()
        self.use_language(locale)
        self.banner()

        fullname = self.ask_fullname()
        username = self.ask_username(fullname)
        password = self.ask_password()
        timezone = self.ask_timezone()
        hostname = self.ask_hostname()
        rtc_as_localtime = self.ask_yes_no("Keep the hardware clock in local time?", default=False)
        swap_size = self.ask_swap_size()

        return OobeConfig(
            locale=locale.locale,
            user=username,
            pwd=password,
            fullname=fullname or None,
            hostname=hostname,
            rtc_as_localtime=rtc_as_localtime,
            timezone=timezone,
            swap_size=swap_size,
        )

    def run(self, system: SystemOps) -> bool:
        config = self.collect()
        self.summary(config)
        if not self.ask_yes_no("Apply these settings?", default=True):
            self.console.print("Nothing was changed.")
            return False

        with self.console.status("Applying settings..."):
            try:
                apply_config(config, system)
            except Exception as e:
                logger.exception("Setup failed")
                self.console.print(Panel(str(e), title="Setup failed", style="red"))
                return False

        self.console.print("[green]Setup complete.[/green]")
        return True


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    wizard = TerminalWizard()
    try:
        ok = wizard.run(LinuxSystem())
    except (KeyboardInterrupt, EOFError):
        wizard.console.print("Setup aborted.")
        return 130
    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
