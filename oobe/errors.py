from __future__ import annotations


class OobeError(Exception):
    """Base class for errors raised by the setup wizard core."""


class ConfigParseError(OobeError):
    """The serialized configuration could not be turned into an OobeConfig."""


class CommandError(OobeError):
    """An external program exited with a non-zero status."""

    def __init__(self, argv: list[str], returncode: int, stderr: str = "") -> None:
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr
        msg = f"Command failed ({returncode}): {argv[0] if argv else '?'}"
        if stderr.strip():
            msg += f"\n{stderr.strip()}"
        super().__init__(msg)


class SystemOperationError(OobeError):
    """An OS mutation could not be carried out."""


class CatalogError(OobeError):
    """A bundled or system catalog could not be loaded."""


class CatalogLookupError(CatalogError, LookupError):
    """A label selected from a catalog does not resolve to exactly one entry."""


class SessionStateError(OobeError):
    """A wizard session operation was requested in the wrong state."""
