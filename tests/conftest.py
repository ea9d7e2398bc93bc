from __future__ import annotations

from dataclasses import replace
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import pytest

from oobe.config import OobeConfig
from oobe.lib.command import CmdResult


class RecordingSystem:
    """SystemOps double: records each collaborator call, optionally failing one."""

    def __init__(self, fail_on: Optional[str] = None, error: Optional[Exception] = None) -> None:
        self.calls: List[Tuple] = []
        self.fail_on = fail_on
        self.error = error or RuntimeError(f"{fail_on} failed")

    def _record(self, name: str, *args) -> None:
        self.calls.append((name, *args))
        if name == self.fail_on:
            raise self.error

    @property
    def names(self) -> List[str]:
        return [c[0] for c in self.calls]

    def set_hostname(self, name: str) -> None:
        self._record("set_hostname", name)

    def set_locale(self, locale: str) -> None:
        self._record("set_locale", locale)

    def add_new_user(self, name: str, secret: str) -> None:
        self._record("add_new_user", name, secret)

    def set_hwclock_localtime(self, localtime: bool) -> None:
        self._record("set_hwclock_localtime", localtime)

    def create_swapfile(self, size_bytes: int, root: str) -> None:
        self._record("create_swapfile", size_bytes, root)

    def write_swap_fstab_entry(self) -> None:
        self._record("write_swap_fstab_entry")

    def set_fullname(self, fullname: str, user: str) -> None:
        self._record("set_fullname", fullname, user)

    def set_zoneinfo(self, timezone: str) -> None:
        self._record("set_zoneinfo", timezone)

    def run_external_program(
        self, name: str, args: Sequence[str], env: Mapping[str, str]
    ) -> CmdResult:
        self._record("run_external_program", name, list(args), dict(env))
        return CmdResult(argv=[name, *args], returncode=0, stdout="", stderr="")


BASE_CONFIG = OobeConfig(
    locale="en_US.UTF-8",
    user="jane",
    pwd="s3cret",
    fullname="Jane Doe",
    hostname="jane-laptop",
    rtc_as_localtime=False,
    timezone="Europe/Berlin",
    swap_size=2 * 1024**3,
)


@pytest.fixture
def config() -> OobeConfig:
    return BASE_CONFIG


@pytest.fixture
def make_config():
    def _make(**changes) -> OobeConfig:
        return replace(BASE_CONFIG, **changes)

    return _make


@pytest.fixture
def wire_config() -> Dict:
    return {
        "locale": {"locale": "en_US.UTF-8"},
        "user": "jane",
        "pwd": "s3cret",
        "fullname": "Jane Doe",
        "hostname": "jane-laptop",
        "rtc_as_localtime": False,
        "timezone": {"data": "Europe/Berlin"},
        "swapfile": {"size": 2147483648},
    }


@pytest.fixture
def zoneinfo_root(tmp_path):
    """A target root with a small zoneinfo database."""

    zdir = tmp_path / "usr/share/zoneinfo"
    for zone in ["Europe/Berlin", "Asia/Shanghai", "America/New_York", "UTC"]:
        p = zdir / zone
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(b"TZif2")
    (zdir / "zone1970.tab").write_text(
        "# comment line\n"
        "DE,DK,NO,SE,SJ\t+5230+01322\tEurope/Berlin\tmost of Germany\n"
        "CN\t+3114+12128\tAsia/Shanghai\tBeijing Time\n"
        "US\t+404251-0740023\tAmerica/New_York\tEastern (most areas)\n",
        encoding="utf-8",
    )
    return tmp_path


@pytest.fixture
def system_factory():
    return RecordingSystem
