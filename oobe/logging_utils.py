from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from .lib.env import PATHS

DEFAULT_LOG_PATH = PATHS.log_default


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = True,
) -> str:
    """Configure logging for a wizard run.

    Log policy:
    - Everything goes to /var/log/oobe.log; when that is not writable
      (running unprivileged, read-only /var) to oobe.log in the working directory.
    - The console only gets warnings, the terminal wizard owns the screen.
    - Secrets are never logged: commands are logged as argv only, never their
      stdin payload, and the user password is excluded from config reprs.

    Returns the actual file path being used.
    """

    logger = logging.getLogger()
    logger.setLevel(level)

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(logger, "_oobe_configured", False):
        return getattr(logger, "_oobe_log_path", log_path)

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    handlers: list[logging.Handler] = []
    file_handler: Optional[logging.Handler] = None
    try:
        Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        chosen_path = log_path
    except OSError:
        fallback = str(Path.cwd() / "oobe.log")
        file_handler = logging.FileHandler(fallback)
        chosen_path = fallback
    file_handler.setFormatter(fmt)
    handlers.append(file_handler)

    if also_console:
        console = logging.StreamHandler()
        console.setFormatter(fmt)
        # The terminal wizard owns the screen; only warnings go to the console.
        console.setLevel(logging.WARNING if level <= logging.INFO else level)
        handlers.append(console)

    for h in handlers:
        logger.addHandler(h)

    setattr(logger, "_oobe_configured", True)
    setattr(logger, "_oobe_log_path", chosen_path)

    logging.getLogger(__name__).info(
        "Logging initialized (requested=%s, actual=%s)", log_path, chosen_path
    )
    return chosen_path
