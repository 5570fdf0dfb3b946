# sheet_layout/utils.py
# Small utilities used across the project:
# - timing context manager
# - JSON export for layout results (sheets + placements + summary)
#
# Keeps dependencies minimal (stdlib only).

from __future__ import annotations

import json
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Sequence

from .metrics import production_summary
from .types import LayoutResult, Product


@contextmanager
def timer(label: str = "timer") -> Iterator[Dict[str, float]]:
    """
    Usage:
      with timer("optimize") as t:
          ...
      print(t["seconds"])
    """
    t0 = time.perf_counter()
    payload: Dict[str, float] = {}
    try:
        yield payload
    finally:
        payload["seconds"] = time.perf_counter() - t0


def result_to_dict(result: LayoutResult, products: Optional[Sequence[Product]] = None) -> Dict[str, Any]:
    """
    Convert LayoutResult to a JSON-friendly dict.
    If products are given, a per-product production summary is included.
    """
    out: Dict[str, Any] = {
        "sheets": [
            {
                "id": sh.id,
                "width": sh.width,
                "height": sh.height,
                "items": [
                    {
                        "placement_id": it.placement_id,
                        "product_id": it.product_id,
                        "name": it.name,
                        "x": it.x,
                        "y": it.y,
                        "width": it.width,
                        "height": it.height,
                        "color": it.color,
                    }
                    for it in sh.items
                ],
            }
            for sh in result.sheets
        ],
        "unused_products": [p.id for p in result.unused_products],
        "totals": {
            "total_sheets": result.total_sheets,
            "utilisation_rate": result.utilisation_rate,
            "items_per_sheet": len(result.template.items) if result.template else 0,
        },
    }

    if products is not None:
        out["summary"] = [
            {
                "product_id": line.product_id,
                "name": line.name,
                "requested": line.requested,
                "per_sheet": line.per_sheet,
                "produced": line.produced,
                "surplus": line.surplus,
            }
            for line in production_summary(products, result)
        ]

    return out


def save_result_json(
    result: LayoutResult,
    path: str | Path,
    products: Optional[Sequence[Product]] = None,
    *,
    indent: int = 2,
) -> None:
    """Save a layout result into JSON for debugging/integration."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(result_to_dict(result, products), f, ensure_ascii=False, indent=indent)
