# sheet_layout/assembler.py
# Turn the winning template sheet into the final result:
# replicate it as many times as total demand needs, give every placement a unique id,
# and compute utilization.

from __future__ import annotations

import math
from dataclasses import replace
from typing import Sequence

from .capacity import CapacityResult
from .logger import get_logger
from .metrics import utilisation_rate
from .types import LayoutResult, Product, Sheet


def sheets_needed(products: Sequence[Product], total_fit: int) -> int:
    total_requested = sum(p.quantity for p in products)
    return int(math.ceil(total_requested / total_fit))


def replicate_sheet(template: Sheet, replica_index: int) -> Sheet:
    """Copy of `template` as final sheet number replica_index + 1, with globally unique placement ids."""
    return Sheet(
        id=f"sheet-{replica_index + 1}",
        width=template.width,
        height=template.height,
        items=[
            replace(it, placement_id=f"{it.product_id}-{replica_index}-{it.sequence}")
            for it in template.items
        ],
    )


def assemble_layout(
    products: Sequence[Product],
    capacity: CapacityResult,
    sheet_w: float,
    sheet_h: float,
) -> LayoutResult:
    log = get_logger()

    if capacity.total_fit == 0:
        log.warn("No product fits on the sheet; returning a single unusable sheet.")
        return LayoutResult(
            sheets=(Sheet(id="sheet-1", width=sheet_w, height=sheet_h),),
            unused_products=tuple(products),
            total_sheets=1,
            utilisation_rate=0.0,
        )

    n = sheets_needed(products, capacity.total_fit)
    template = capacity.sheet
    sheets = tuple(replicate_sheet(template, i) for i in range(n))
    rate = utilisation_rate(template.item_area() * n, sheet_w * sheet_h * n)

    log.info(f"Sheets needed: {n}  utilization: {rate:.2f}%")
    return LayoutResult(
        sheets=sheets,
        unused_products=(),
        total_sheets=n,
        utilisation_rate=rate,
    )
