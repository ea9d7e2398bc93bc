from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet, List, Optional, Sequence

import yaml

from .errors import CatalogError, CatalogLookupError

logger = logging.getLogger(__name__)


def _data_dir() -> Path:
    # oobe/catalogs.py -> oobe/data
    return Path(__file__).resolve().parent / "data"


def load_blocklist(path: Optional[Path] = None) -> FrozenSet[str]:
    """Read reserved account names, one per line (# starts a comment)."""

    p = path or (_data_dir() / "users")
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise CatalogError(f"Unable to read username blocklist {p}") from e

    names = set()
    for line in text.splitlines():
        line = line.split("#", 1)[0].strip()
        if line:
            names.add(line)
    return frozenset(names)


_blocklist: Optional[FrozenSet[str]] = None
_blocklist_lock = threading.Lock()


def username_blocklist() -> FrozenSet[str]:
    """Process-wide blocklist, built on first use and never mutated."""

    global _blocklist
    blocklist = _blocklist
    if blocklist is None:
        with _blocklist_lock:
            if _blocklist is None:
                _blocklist = load_blocklist()
                logger.debug("Loaded %d reserved usernames", len(_blocklist))
            blocklist = _blocklist
    return blocklist


def is_blocked_username(name: str) -> bool:
    return name in username_blocklist()


@dataclass(frozen=True)
class LocaleEntry:
    id: str
    text: str
    locale: str


def load_locales(path: Optional[Path] = None) -> List[LocaleEntry]:
    """Load the bundled list of selectable languages."""

    p = path or (_data_dir() / "locales.yaml")
    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or []
    except (OSError, yaml.YAMLError) as e:
        raise CatalogError(f"Unable to load locale catalog {p}") from e

    if not isinstance(raw, list):
        raise CatalogError(f"Locale catalog must contain a list: {p}")

    entries: List[LocaleEntry] = []
    for item in raw:
        if not isinstance(item, dict):
            raise CatalogError(f"Locale catalog entries must be mappings: {p}")
        try:
            entries.append(
                LocaleEntry(id=str(item["id"]), text=str(item["text"]), locale=str(item["locale"]))
            )
        except KeyError as e:
            raise CatalogError(f"Locale catalog entry missing {e}: {item!r}") from e
    return entries


def find_locale_by_text(entries: Sequence[LocaleEntry], text: str) -> LocaleEntry:
    matches = [e for e in entries if e.text == text]
    if len(matches) != 1:
        raise CatalogLookupError(f"Locale label {text!r} matched {len(matches)} entries")
    return matches[0]


def language_of(locale: str) -> str:
    """``zh_CN.UTF-8`` -> ``zh_CN``."""

    return locale.split(".", 1)[0]
