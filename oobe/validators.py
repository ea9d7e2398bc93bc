"""Character-level checks for the values a user types into the wizard.

Validators never raise: every input, including the empty string and
non-ASCII text, is classified into a :class:`Validation`.
"""

from __future__ import annotations

import enum
import string
from dataclasses import dataclass
from typing import AbstractSet, Optional

from .catalogs import username_blocklist

HOSTNAME_MAX_LEN = 64
FIELD_SEPARATOR = ":"

_HOSTNAME_EDGE_CHARS = ("-", ".")
_HOSTNAME_CHARS = frozenset(string.ascii_letters + string.digits + "-.")
_USERNAME_CHARS = frozenset(string.ascii_lowercase + string.digits)
_ASCII_DIGITS = frozenset(string.digits)
_ASCII_ALNUM = frozenset(string.ascii_letters + string.digits)


class Reason(enum.Enum):
    REQUIRED = "required"
    TOO_LONG = "too_long"
    ILLEGAL_START = "illegal_start"
    ILLEGAL_END = "illegal_end"
    DOUBLE_DOT = "double_dot"
    ILLEGAL_CHAR = "illegal_char"
    RESERVED_NAME = "reserved_name"
    STARTS_WITH_DIGIT = "starts_with_digit"
    CONTAINS_COLON = "contains_colon"
    NOT_A_CHOICE = "not_a_choice"


_MESSAGES = {
    Reason.REQUIRED: "This field is required.",
    Reason.TOO_LONG: "Hostname must be at most 64 characters long.",
    Reason.ILLEGAL_START: "Hostname must not start with '{c}'.",
    Reason.ILLEGAL_END: "Hostname must not end with '{c}'.",
    Reason.DOUBLE_DOT: "Hostname must not contain two consecutive dots.",
    Reason.ILLEGAL_CHAR: "Character '{c}' is not allowed here.",
    Reason.RESERVED_NAME: "This name is reserved for a system account.",
    Reason.STARTS_WITH_DIGIT: "Username must not start with a digit.",
    Reason.CONTAINS_COLON: "Full name must not contain ':'.",
    Reason.NOT_A_CHOICE: "Pick one of the listed entries.",
}


@dataclass(frozen=True)
class Validation:
    reason: Optional[Reason] = None
    char: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.reason is None

    @property
    def message(self) -> str:
        if self.reason is None:
            return ""
        return _MESSAGES[self.reason].format(c=self.char or "")

    def __bool__(self) -> bool:
        return self.ok


VALID = Validation()


def require(value: str) -> Validation:
    if not value.strip():
        return Validation(Reason.REQUIRED)
    return VALID


# https://manpages.ubuntu.com/manpages/oracular/en/man5/hostname.5.html
def validate_hostname(value: str) -> Validation:
    if len(value) > HOSTNAME_MAX_LEN:
        return Validation(Reason.TOO_LONG)

    for c in _HOSTNAME_EDGE_CHARS:
        if value.startswith(c):
            return Validation(Reason.ILLEGAL_START, c)

    for c in _HOSTNAME_EDGE_CHARS:
        if value.endswith(c):
            return Validation(Reason.ILLEGAL_END, c)

    if ".." in value:
        return Validation(Reason.DOUBLE_DOT)

    for c in value:
        if c not in _HOSTNAME_CHARS:
            return Validation(Reason.ILLEGAL_CHAR, c)

    return VALID


def validate_username(value: str, blocklist: AbstractSet[str] | None = None) -> Validation:
    if blocklist is None:
        blocklist = username_blocklist()

    if value in blocklist:
        return Validation(Reason.RESERVED_NAME)

    if value[:1] in _ASCII_DIGITS:
        return Validation(Reason.STARTS_WITH_DIGIT)

    for c in value:
        if c not in _USERNAME_CHARS:
            return Validation(Reason.ILLEGAL_CHAR, c)

    return VALID


def validate_fullname(value: str) -> Validation:
    # The full name ends up in a colon-delimited passwd record.
    if FIELD_SEPARATOR in value:
        return Validation(Reason.CONTAINS_COLON)
    return VALID


def get_default_username(fullname: str) -> str:
    """Derive a username suggestion from a full name.

    Leading digits are dropped until the first character is kept; anything
    that is not an ASCII letter or digit is skipped; letters are lowercased.
    """

    out = []
    for c in fullname:
        if c in _ASCII_DIGITS and not out:
            continue
        if c not in _ASCII_ALNUM:
            continue
        out.append(c.lower())
    return "".join(out)
