# sheet_layout/capacity.py
# Capacity probe: binary search over trial totals for the densest feasible ratio-preserving sheet.
#
# NOTE: binary search assumes feasibility is monotone in the trial total. The greedy two-pass
# packer does not guarantee that; we keep the search anyway (reproducible, O(log N) trials).

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .config import OptimizerParams
from .logger import get_logger
from .packer import TRIAL_SHEET_ID, pack_trial_sheet
from .types import Product, Sheet


@dataclass(frozen=True)
class CapacityResult:
    sheet: Sheet
    counts: Tuple[int, ...]
    total_fit: int
    trials: int


def probe_upper_bound(
    products: Sequence[Product],
    sheet_w: float,
    sheet_h: float,
    params: OptimizerParams,
) -> int:
    """Highest trial total the probe will try."""
    hi = params.max_probe_total
    if params.area_bound and products:
        smallest = min(p.area for p in products)
        if smallest > 0:
            hi = min(hi, max(1, int(math.floor(sheet_w * sheet_h / smallest))))
    return hi


def find_capacity(
    products: Sequence[Product],
    sheet_w: float,
    sheet_h: float,
    params: Optional[OptimizerParams] = None,
) -> CapacityResult:
    """
    Largest trial total the packer can realize. If no trial succeeds, total_fit is 0 and
    the returned sheet has no items.
    """
    params = params or OptimizerParams()
    log = get_logger()

    low = 1
    high = probe_upper_bound(products, sheet_w, sheet_h, params)
    log.debug(f"Capacity probe over [1, {high}] on {sheet_w}x{sheet_h}")

    best_sheet = Sheet(id=TRIAL_SHEET_ID, width=sheet_w, height=sheet_h)
    best_counts: Tuple[int, ...] = tuple(0 for _ in products)
    best_fit = 0
    trials = 0

    while low <= high:
        mid = (low + high) // 2
        trial = pack_trial_sheet(products, mid, sheet_w, sheet_h, params)
        trials += 1
        log.debug(
            f"trial total={mid}: targets={trial.actual_total} fit={trial.total_fit} "
            f"-> {'ok' if trial.success else 'fail'}"
        )

        if trial.success:
            best_sheet = trial.sheet
            best_counts = trial.counts
            best_fit = trial.total_fit
            low = mid + 1
        else:
            high = mid - 1

    log.info(f"Capacity: {best_fit} items per sheet ({trials} trials)")
    return CapacityResult(sheet=best_sheet, counts=best_counts, total_fit=best_fit, trials=trials)
