from __future__ import annotations

import io
import os

import pytest
from prompt_toolkit.document import Document
from prompt_toolkit.validation import ValidationError
from rich.console import Console

from oobe.catalogs import LocaleEntry
from oobe.validators import require, validate_hostname
from ui.cli import FieldValidator, TerminalWizard

LOCALES = [
    LocaleEntry(id="en-us", text="English (United States)", locale="en_US.UTF-8"),
    LocaleEntry(id="de-de", text="Deutsch", locale="de_DE.UTF-8"),
]
TIMEZONES = ["Asia/Shanghai", "Europe/Berlin"]


class ScriptedPrompt:
    """Stands in for prompt_toolkit.prompt: answers from a script, runs validators."""

    def __init__(self, answers):
        self.answers = list(answers)
        self.messages = []
        self.rejected = []

    def __call__(self, message, default="", validator=None, **kwargs):
        self.messages.append(message)
        while True:
            answer = self.answers.pop(0)
            text = default if answer is None else answer
            if validator is not None:
                try:
                    validator.validate(Document(text))
                except ValidationError as e:
                    self.rejected.append((text, e.message))
                    continue
            return text


def make_wizard(answers):
    prompt = ScriptedPrompt(answers)
    wizard = TerminalWizard(
        prompt=prompt,
        console=Console(file=io.StringIO(), width=100),
        locales=LOCALES,
        timezones=TIMEZONES,
        recommended_swap=6 * 1024**3,
    )
    return wizard, prompt


def test_field_validator_reports_first_failure():
    v = FieldValidator(require, validate_hostname)
    with pytest.raises(ValidationError) as excinfo:
        v.validate(Document(""))
    assert "required" in excinfo.value.message
    with pytest.raises(ValidationError):
        v.validate(Document("-bad"))
    v.validate(Document("good"))


def test_collect(monkeypatch):
    monkeypatch.setenv("LANG", "de_DE.UTF-8")
    monkeypatch.setenv("LANGUAGE", "en_US")
    wizard, prompt = make_wizard(
        [
            None,  # language: default follows LANG
            "Jane:Doe",  # rejected
            "Jane Doe",
            None,  # username: derived default
            "pw",
            "pw",
            "Mars/Base",  # rejected
            "Europe/Berlin",
            "bad_host",  # rejected
            "jane-laptop",
            "y",
            None,  # swap: recommended default
        ]
    )
    cfg = wizard.collect()

    assert cfg.locale == "de_DE.UTF-8"
    assert os.environ["LANGUAGE"] == "de_DE"
    assert cfg.fullname == "Jane Doe"
    assert cfg.user == "janedoe"
    assert cfg.pwd == "pw"
    assert cfg.timezone == "Europe/Berlin"
    assert cfg.hostname == "jane-laptop"
    assert cfg.rtc_as_localtime is True
    assert cfg.swap_size == 6 * 1024**3
    assert [r[0] for r in prompt.rejected] == ["Jane:Doe", "Mars/Base", "bad_host"]


def test_password_mismatch_asks_again():
    wizard, prompt = make_wizard(["a", "b", "c", "c"])
    assert wizard.ask_password() == "c"
    assert prompt.messages.count("Password: ") == 2


def test_reserved_username_rejected():
    wizard, prompt = make_wizard(["root", "9lives", "jane"])
    assert wizard.ask_username("") == "jane"
    assert len(prompt.rejected) == 2


def test_empty_fullname_and_zero_swap():
    wizard, _ = make_wizard(
        [None, "", "jane", "pw", "pw", "Asia/Shanghai", "box", None, "0"]
    )
    cfg = wizard.collect()
    assert cfg.fullname is None
    assert cfg.rtc_as_localtime is False
    assert cfg.swap_size == 0


def test_swap_size_in_gib():
    wizard, prompt = make_wizard(["-1", "lots", "1.5"])
    assert wizard.ask_swap_size() == int(1.5 * 1024**3)
    assert len(prompt.rejected) == 2


def test_run_applies_after_confirmation(system_factory):
    answers = [None, "Jane Doe", None, "pw", "pw", "Europe/Berlin", "box", "n", "0", None]
    wizard, _ = make_wizard(answers)
    system = system_factory()
    assert wizard.run(system) is True
    assert system.names[0] == "set_hostname"
    assert "set_fullname" in system.names


def test_run_declined(system_factory):
    answers = [None, "", "jane", "pw", "pw", "Europe/Berlin", "box", "n", "0", "n"]
    wizard, _ = make_wizard(answers)
    system = system_factory()
    assert wizard.run(system) is False
    assert system.calls == []


def test_run_reports_failure(system_factory):
    answers = [None, "", "jane", "pw", "pw", "Europe/Berlin", "box", "n", "0", "y"]
    wizard, _ = make_wizard(answers)
    system = system_factory(fail_on="add_new_user", error=RuntimeError("useradd: nope"))
    assert wizard.run(system) is False
    assert "useradd: nope" in wizard.console.file.getvalue()
    assert system.names == ["set_hostname", "set_locale", "add_new_user"]
