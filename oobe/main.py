from __future__ import annotations

import argparse
import logging
from typing import Optional

from .config import OobeConfig, load_config
from .lib.env import PATHS
from .lib.system import LinuxSystem, SystemOps
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import ApplyContext, PipelineResult, run_pipeline
from .steps import (
    AddUserStep,
    CreateSwapfileStep,
    RegenerateMachineIdStep,
    SetFullnameStep,
    SetHostnameStep,
    SetHwclockStep,
    SetLocaleStep,
    SetTimezoneStep,
)
from .swapsize import bytes_to_gib, get_recommended_swap_size
from .validators import validate_fullname, validate_hostname, validate_username

logger = logging.getLogger(__name__)


def build_steps():
    return [
        SetHostnameStep(),
        SetLocaleStep(),
        AddUserStep(),
        SetHwclockStep(),
        CreateSwapfileStep(),
        SetFullnameStep(),
        SetTimezoneStep(),
        RegenerateMachineIdStep(),
    ]


def apply_config(config: OobeConfig, system: SystemOps) -> PipelineResult:
    """Apply a collected configuration to the system, in a fixed order."""

    logger.info(
        "Applying configuration: user=%s hostname=%s locale=%s timezone=%s rtc_local=%s swap=%d",
        config.user,
        config.hostname,
        config.locale,
        config.timezone,
        config.rtc_as_localtime,
        config.swap_size,
    )
    result = run_pipeline(ctx=ApplyContext(config=config, system=system), steps=build_steps())
    logger.info("Configuration applied (ran=%s, skipped=%s)", result.ran_steps, result.skipped_steps)
    return result


def run(
    *,
    config_path: str,
    root: str = PATHS.target_root,
    log_path: str = DEFAULT_LOG_PATH,
    dry_run: bool = False,
) -> PipelineResult:
    configure_logging(log_path=log_path)
    try:
        config = load_config(config_path)
        return apply_config(config, LinuxSystem(root=root, dry_run=dry_run))
    except Exception:
        logger.exception("Setup failed")
        raise


_CHECKS = {
    "check-hostname": validate_hostname,
    "check-username": validate_username,
    "check-fullname": validate_fullname,
}


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="oobe")
    sub = p.add_subparsers(dest="command", required=True)

    ap = sub.add_parser("apply", help="Apply a configuration file (json|yaml)")
    ap.add_argument("config", help="Path to the configuration file")
    ap.add_argument("--root", default=PATHS.target_root, help="Root of the system to configure")
    ap.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to the wizard log")
    ap.add_argument("--dry-run", action="store_true", help="Log commands without running them")

    sub.add_parser("recommend-swap", help="Print the recommended swap file size in GiB")

    for name in _CHECKS:
        cp = sub.add_parser(name, help=f"Validate a value ({name.split('-', 1)[1]})")
        cp.add_argument("value")

    args = p.parse_args(argv)

    if args.command == "apply":
        run(config_path=args.config, root=args.root, log_path=args.log, dry_run=bool(args.dry_run))
        return 0

    if args.command == "recommend-swap":
        print(f"{bytes_to_gib(get_recommended_swap_size()):.2f}")
        return 0

    result = _CHECKS[args.command](args.value)
    if not result.ok:
        print(result.message)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
