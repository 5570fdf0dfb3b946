# sheet_layout/optimizer.py
# Top-level entry point: products + sheet size -> LayoutResult.
#
# Pipeline:
#   find_capacity (binary search, drives pack_trial_sheet -> plan_targets / place_product)
#   -> assemble_layout (replicate template, unique ids, utilization)
#
# Example:
#   from sheet_layout import Product, optimize_layout
#   res = optimize_layout([Product("a", 100, 50, 10, "Label A")], 700, 500)
#   print(res.total_sheets, res.utilisation_rate)

from __future__ import annotations

from typing import Optional, Sequence

from .assembler import assemble_layout
from .capacity import find_capacity
from .config import OptimizerParams
from .logger import get_logger
from .types import LayoutResult, Product


def optimize_layout(
    products: Sequence[Product],
    sheet_w: float,
    sheet_h: float,
    params: Optional[OptimizerParams] = None,
) -> LayoutResult:
    """
    Arrange `products` on sheet_w x sheet_h sheets, keeping the per-sheet mix close to the
    requested quantity ratios, and replicate the layout until every quantity is covered.

    Never raises for degenerate input:
      - no products            -> empty result
      - nothing fits the sheet -> one unusable sheet, all products unused
    """
    params = params or OptimizerParams()
    products = list(products)

    if not products:
        return LayoutResult(sheets=(), unused_products=(), total_sheets=0, utilisation_rate=0.0)

    get_logger().info(f"Optimizing {len(products)} products on {sheet_w}x{sheet_h}")
    capacity = find_capacity(products, sheet_w, sheet_h, params)
    return assemble_layout(products, capacity, sheet_w, sheet_h)
