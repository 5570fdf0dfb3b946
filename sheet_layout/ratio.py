# sheet_layout/ratio.py
# Per-product target counts for a trial sheet total, proportional to requested quantities.

from __future__ import annotations

import math
from typing import List, Sequence


def round_half_up(v: float) -> int:
    """Round to nearest int, .5 goes up (Python's round() is banker's rounding)."""
    return int(math.floor(v + 0.5))


def plan_targets(quantities: Sequence[int], trial_total: int) -> List[int]:
    """
    Target count per product (same order as `quantities`) for `trial_total` items:
      round(trial_total * quantity / total_quantity)

    The targets need not sum to `trial_total`; callers judge feasibility
    against sum(targets).
    """
    total_quantity = sum(quantities)
    if total_quantity <= 0:
        return [0 for _ in quantities]
    return [round_half_up(trial_total * q / total_quantity) for q in quantities]
