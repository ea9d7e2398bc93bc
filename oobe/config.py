from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .errors import ConfigParseError


@dataclass(frozen=True)
class OobeConfig:
    """Everything the wizard collected, ready to be applied.

    ``swap_size`` is in bytes; 0 means no swap file.
    """

    locale: str
    user: str
    pwd: str = field(repr=False)
    fullname: Optional[str]
    hostname: str
    rtc_as_localtime: bool
    timezone: str
    swap_size: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Serialized (wire) form, as submitted by front ends."""

        return {
            "locale": {"locale": self.locale},
            "user": self.user,
            "pwd": self.pwd,
            "fullname": self.fullname,
            "hostname": self.hostname,
            "rtc_as_localtime": self.rtc_as_localtime,
            "timezone": {"data": self.timezone},
            "swapfile": {"size": self.swap_size},
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


def _require(raw: Mapping[str, Any], key: str) -> Any:
    if key not in raw:
        raise ConfigParseError(f"missing field `{key}`")
    return raw[key]


def _str(value: Any, key: str) -> str:
    if not isinstance(value, str):
        raise ConfigParseError(f"invalid type for `{key}`: expected a string")
    return value


def _nested_str(raw: Mapping[str, Any], key: str, inner: str) -> str:
    obj = _require(raw, key)
    if not isinstance(obj, dict):
        raise ConfigParseError(f"invalid type for `{key}`: expected an object")
    return _str(_require(obj, inner), f"{key}.{inner}")


def _swap_size(raw: Mapping[str, Any]) -> int:
    obj = _require(raw, "swapfile")
    if not isinstance(obj, dict):
        raise ConfigParseError("invalid type for `swapfile`: expected an object")
    size = _require(obj, "size")
    # bool is an int subclass, but never a size.
    if isinstance(size, bool) or not isinstance(size, (int, float)):
        raise ConfigParseError("invalid type for `swapfile.size`: expected a number")
    if size != size or size < 0 or size == float("inf"):
        raise ConfigParseError("invalid value for `swapfile.size`: expected a non-negative byte count")
    return int(size)


def config_from_dict(raw: Any) -> OobeConfig:
    if not isinstance(raw, dict):
        raise ConfigParseError("configuration must be an object")

    fullname = raw.get("fullname")
    if fullname is not None:
        fullname = _str(fullname, "fullname")

    rtc = _require(raw, "rtc_as_localtime")
    if not isinstance(rtc, bool):
        raise ConfigParseError("invalid type for `rtc_as_localtime`: expected a boolean")

    return OobeConfig(
        locale=_nested_str(raw, "locale", "locale"),
        user=_str(_require(raw, "user"), "user"),
        pwd=_str(_require(raw, "pwd"), "pwd"),
        fullname=fullname,
        hostname=_str(_require(raw, "hostname"), "hostname"),
        rtc_as_localtime=rtc,
        timezone=_nested_str(raw, "timezone", "data"),
        swap_size=_swap_size(raw),
    )


def parse_config(text: str) -> OobeConfig:
    """Parse the JSON wire form submitted by a front end."""

    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigParseError(f"malformed configuration: {e}") from e
    return config_from_dict(raw)


def load_config(path: str) -> OobeConfig:
    """Read a configuration file (.json, .yaml or .yml)."""

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    ext = p.suffix.lower().lstrip(".")
    text = p.read_text(encoding="utf-8")
    if ext in {"yaml", "yml"}:
        try:
            raw = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigParseError(f"malformed configuration: {e}") from e
        return config_from_dict(raw)

    # Default to JSON for unknown extensions.
    return parse_config(text)
