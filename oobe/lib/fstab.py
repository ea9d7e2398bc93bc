from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from .files import target_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FstabEntry:
    spec: str
    mountpoint: str
    fstype: str
    options: str = "defaults"
    dump: int = 0
    passno: int = 0

    def render(self) -> str:
        return f"{self.spec}\t{self.mountpoint}\t{self.fstype}\t{self.options}\t{self.dump}\t{self.passno}"


def render_fstab(entries: Iterable[FstabEntry]) -> str:
    return "".join(e.render() + "\n" for e in entries)


def swap_entry(swapfile: str = "/swapfile") -> FstabEntry:
    return FstabEntry(spec=swapfile, mountpoint="none", fstype="swap", options="defaults,nofail")


def append_entry(root: str, entry: FstabEntry, *, dry_run: bool = False) -> bool:
    """Append an entry to <root>/etc/fstab unless its spec is already listed.

    Returns True if the file was (or would have been) changed.
    """

    p = target_path(root, "/etc/fstab")
    existing = p.read_text(encoding="utf-8") if p.exists() else ""

    for line in existing.splitlines():
        fields = line.split()
        if fields and not fields[0].startswith("#") and fields[0] == entry.spec:
            logger.info("fstab already has an entry for %s", entry.spec)
            return False

    if dry_run:
        logger.info("Would append to %s: %s", str(p), entry.render())
        return True

    if existing and not existing.endswith("\n"):
        existing += "\n"
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(existing + render_fstab([entry]), encoding="utf-8")
    logger.info("Appended fstab entry for %s", entry.spec)
    return True
