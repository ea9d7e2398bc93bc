from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List

from ..errors import CatalogError, SystemOperationError
from .env import PATHS
from .files import target_path

logger = logging.getLogger(__name__)

ZONE_TABLES = ("zone1970.tab", "zone.tab")


@dataclass(frozen=True)
class ZoneInfo:
    text: str
    data: str


def _parse_zone_table(contents: str) -> List[str]:
    zones: List[str] = []
    for line in contents.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        fields = line.split("\t")
        if len(fields) >= 3 and fields[2]:
            zones.append(fields[2].strip())
    return zones


def list_zoneinfo(zoneinfo_dir: str = PATHS.zoneinfo_dir) -> List[ZoneInfo]:
    """Return the timezone catalog, sorted by identifier."""

    base = Path(zoneinfo_dir)
    for table in ZONE_TABLES:
        p = base / table
        if p.exists():
            zones = sorted(set(_parse_zone_table(p.read_text(encoding="utf-8"))))
            # UTC is not listed in the zone tables but is a valid choice.
            if "UTC" not in zones and (base / "UTC").exists():
                zones.insert(0, "UTC")
            return [ZoneInfo(text=z.replace("_", " "), data=z) for z in zones]

    raise CatalogError(f"No zone table found under {zoneinfo_dir}")


def set_zoneinfo(
    timezone: str,
    *,
    root: str = "/",
    zoneinfo_dir: str = PATHS.zoneinfo_dir,
    dry_run: bool = False,
) -> None:
    """Point <root>/etc/localtime at the zoneinfo entry for ``timezone``."""

    tz_path = Path(timezone)
    zone_file = Path(zoneinfo_dir) / tz_path
    if tz_path.is_absolute() or ".." in tz_path.parts or not target_path(root, str(zone_file)).is_file():
        raise SystemOperationError(f"Unknown timezone: {timezone}")

    localtime = target_path(root, "/etc/localtime")
    if dry_run:
        logger.info("Would link %s -> %s", str(localtime), str(zone_file))
        return

    localtime.parent.mkdir(parents=True, exist_ok=True)
    if localtime.is_symlink() or localtime.exists():
        localtime.unlink()
    os.symlink(str(zone_file), str(localtime))
    logger.info("Timezone set to %s", timezone)
