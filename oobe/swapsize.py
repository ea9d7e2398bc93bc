from __future__ import annotations

import logging
import math

import psutil

logger = logging.getLogger(__name__)

GIB = float(1024**3)
MAX_SWAP_GIB = 32.0
DISK_SHRINK_FACTOR = 1.25


def gib_to_bytes(gib: float) -> float:
    return gib * GIB


def bytes_to_gib(size: float) -> float:
    return size / 1024.0 / 1024.0 / 1024.0


def _round_half_away(x: float) -> float:
    # Only ever called with non-negative values.
    whole = math.floor(x)
    return whole + 1.0 if x - whole >= 0.5 else float(whole)


def recommend_swap_size(total_memory: int) -> float:
    """Recommended swap size in bytes for a machine with ``total_memory`` bytes of RAM.

    Up to 1 GiB of RAM gets twice its size; larger machines get RAM plus the
    rounded square root of RAM (both in GiB). Never more than 32 GiB.
    """

    mem = bytes_to_gib(float(total_memory))

    if mem <= 1.0:
        res = mem * 2.0
    else:
        res = mem + _round_half_away(math.sqrt(mem))

    if res >= MAX_SWAP_GIB:
        res = MAX_SWAP_GIB
    return res * GIB


def refine_for_disk(recommended: float, available: float) -> float:
    """Shrink a recommendation that would not fit on disk.

    Applied once; the result is not guaranteed to fit.
    """

    if recommended >= available:
        return (recommended - available) / DISK_SHRINK_FACTOR
    return recommended


def get_total_memory() -> int:
    return int(psutil.virtual_memory().total)


def get_available_disk(path: str = "/") -> int:
    return int(psutil.disk_usage(path).free)


def get_recommended_swap_size(root: str = "/") -> float:
    total = get_total_memory()
    available = get_available_disk(root)
    recommended = refine_for_disk(recommend_swap_size(total), available)
    logger.info(
        "Swap recommendation %.2f GiB (memory=%.2f GiB, free=%.2f GiB)",
        bytes_to_gib(recommended),
        bytes_to_gib(total),
        bytes_to_gib(available),
    )
    return recommended
