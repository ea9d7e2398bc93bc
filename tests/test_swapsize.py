from __future__ import annotations

from types import SimpleNamespace

import pytest

from oobe import swapsize
from oobe.swapsize import (
    GIB,
    bytes_to_gib,
    gib_to_bytes,
    recommend_swap_size,
    refine_for_disk,
)

MIB = 1024**2


def test_gib_factor_is_exact():
    assert GIB == 1073741824.0


def test_small_memory_is_doubled():
    assert recommend_swap_size(512 * MIB) == 1 * GIB
    assert recommend_swap_size(1024 * MIB) == 2 * GIB


def test_larger_memory_adds_rounded_sqrt():
    assert recommend_swap_size(4 * 1024**3) == 6 * GIB
    assert recommend_swap_size(8 * 1024**3) == (8 + 3) * GIB
    assert recommend_swap_size(16 * 1024**3) == 20 * GIB


def test_half_rounds_away_from_zero():
    # sqrt(6.25) == 2.5 -> 3
    assert recommend_swap_size(int(6.25 * 1024**3)) == 9.25 * GIB


def test_capped_at_32_gib():
    assert recommend_swap_size(64 * 1024**3) == 32 * GIB
    assert recommend_swap_size(27 * 1024**3) == 32 * GIB


def test_refine_for_disk():
    assert refine_for_disk(6 * GIB, 100 * GIB) == 6 * GIB
    assert refine_for_disk(6 * GIB, 2 * GIB) == (4 * GIB) / 1.25
    assert refine_for_disk(6 * GIB, 6 * GIB) == 0.0


def test_refine_is_single_shot():
    # Still larger than what is available; no second correction.
    refined = refine_for_disk(32 * GIB, 1 * GIB)
    assert refined == (31 * GIB) / 1.25
    assert refined > 1 * GIB


def test_unit_helpers():
    assert gib_to_bytes(1.5) == 1.5 * GIB
    assert bytes_to_gib(3 * GIB) == pytest.approx(3.0)


def test_get_recommended_swap_size_uses_probes(monkeypatch):
    monkeypatch.setattr(swapsize.psutil, "virtual_memory", lambda: SimpleNamespace(total=4 * 1024**3))
    monkeypatch.setattr(swapsize.psutil, "disk_usage", lambda path: SimpleNamespace(free=100 * 1024**3))
    assert swapsize.get_recommended_swap_size() == 6 * GIB

    monkeypatch.setattr(swapsize.psutil, "disk_usage", lambda path: SimpleNamespace(free=2 * 1024**3))
    assert swapsize.get_recommended_swap_size() == (4 * GIB) / 1.25
