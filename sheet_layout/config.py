# sheet_layout/config.py
# Centralized defaults and configuration helpers.
# Keeps "magic numbers" (probe cap, tolerance, scoring bonuses) in one place.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class Defaults:
    # Default sheet size (mm)
    default_sheet_w: int = 700
    default_sheet_h: int = 500

    # Capacity probe: trial totals searched in [1, max_probe_total]
    default_max_probe_total: int = 1000

    # A trial is feasible if it places at least this share of its ratio targets
    default_tolerance: float = 0.9

    # Placement scoring
    default_edge_bonus: int = 10
    default_neighbor_bonus: int = 5


DEFAULTS = Defaults()


@dataclass(frozen=True)
class OptimizerParams:
    max_probe_total: int = field(default=DEFAULTS.default_max_probe_total)
    tolerance: float = field(default=DEFAULTS.default_tolerance)
    edge_bonus: int = field(default=DEFAULTS.default_edge_bonus)
    neighbor_bonus: int = field(default=DEFAULTS.default_neighbor_bonus)

    # If True, cap the probe at floor(sheet area / smallest product area)
    area_bound: bool = False

    def __post_init__(self):
        if self.max_probe_total < 1:
            raise ValueError(f"max_probe_total must be >= 1, got {self.max_probe_total}")
        if not 0.0 < self.tolerance <= 1.0:
            raise ValueError(f"tolerance must be in (0, 1], got {self.tolerance}")


def parse_sheet_text(sheet_text: str) -> Tuple[float, float]:
    """
    Parse '700x500' -> (700, 500)
    """
    s = sheet_text.lower().replace(" ", "")
    if "x" not in s:
        raise ValueError("sheet_text must be like '700x500'")
    a, b = s.split("x", 1)
    w, h = float(a), float(b)
    if w <= 0 or h <= 0:
        raise ValueError(f"Sheet dimensions must be greater than zero: {sheet_text!r}")
    return _num(w), _num(h)


def _num(v: float) -> float:
    """Return whole numbers as int so ids and labels stay clean."""
    return int(v) if float(v).is_integer() else v
