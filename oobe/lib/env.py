from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Paths:
    target_root: str = "/"
    log_default: str = "/var/log/oobe.log"
    zoneinfo_dir: str = "/usr/share/zoneinfo"
    swapfile_name: str = "swapfile"


PATHS = Paths()

DEFAULT_LANG = "en_US.UTF-8"
# LANG is C.UTF-8 when no language was chosen from the boot menu.
UNSET_LANG = "C.UTF-8"
MACHINE_ID_SETUP = "systemd-machine-id-setup"
