# sheet_layout/packer.py
# Build one trial ("template") sheet for a given trial total:
# - pass 1: ratio-targeted, largest products first, stop a product at its first failure
# - pass 2: greedy fill, smallest products first, one attempt per product per sweep,
#           repeated while a sweep places anything
# A trial is feasible if it places at least `tolerance` of the ratio targets.
#
# Products are addressed by their dense index (position in the input list) everywhere.

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .config import OptimizerParams
from .placement import place_product
from .ratio import plan_targets
from .types import Product, Sheet

TRIAL_SHEET_ID = "template"


@dataclass(frozen=True)
class TrialResult:
    success: bool
    sheet: Sheet
    counts: Tuple[int, ...]   # placed per product, by dense index
    total_fit: int
    actual_total: int         # sum of ratio targets for this trial


def order_by_area(products: Sequence[Product], *, descending: bool) -> List[int]:
    """Dense indices sorted by product area (stable for equal areas)."""
    idx = list(range(len(products)))
    if descending:
        return sorted(idx, key=lambda i: -products[i].area)
    return sorted(idx, key=lambda i: products[i].area)


def pack_trial_sheet(
    products: Sequence[Product],
    trial_total: int,
    sheet_w: float,
    sheet_h: float,
    params: Optional[OptimizerParams] = None,
) -> TrialResult:
    params = params or OptimizerParams()

    targets = plan_targets([p.quantity for p in products], trial_total)
    actual_total = sum(targets)

    sheet = Sheet(id=TRIAL_SHEET_ID, width=sheet_w, height=sheet_h)
    placed: List[int] = [0] * len(products)

    # Once a product fails it can never fit later on this sheet (space only shrinks)
    exhausted: List[bool] = [False] * len(products)

    # Pass 1: ratio targets, larger products first
    for i in order_by_area(products, descending=True):
        for _ in range(targets[i]):
            if not place_product(products[i], i, sheet, placed, params):
                exhausted[i] = True
                break

    # Pass 2: fill leftover space, smaller products first
    fill_order = order_by_area(products, descending=False)
    placed_any = True
    while placed_any:
        placed_any = False
        for i in fill_order:
            if exhausted[i]:
                continue
            if place_product(products[i], i, sheet, placed, params):
                placed_any = True
            else:
                exhausted[i] = True

    total_fit = sum(placed)
    success = total_fit >= actual_total * params.tolerance

    return TrialResult(
        success=success,
        sheet=sheet,
        counts=tuple(placed),
        total_fit=total_fit,
        actual_total=actual_total,
    )
