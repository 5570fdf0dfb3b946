# sheet_layout/io_json.py
# Load a layout job from JSON into sheet dimensions + Product list.
#
# Expected JSON shape:
# {
#   "sheet": {"width": 700, "height": 500},
#   "products": [{"id": "a", "name": "Label A", "width": 100, "height": 50, "quantity": 10, "color": "#ffcc00"}, ...]
# }
# "sheet" is optional (defaults apply); "id" and "color" are optional per product.

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

from .config import DEFAULTS
from .types import Product
from .validate import validate_products


@dataclass(frozen=True)
class JobLoadResult:
    sheet_width: float
    sheet_height: float
    products: List[Product]


def _num(v: Any) -> float:
    f = float(v)
    return int(f) if f.is_integer() else f


def product_from_dict(d: Dict[str, Any], n: int) -> Product:
    """Build a Product from one JSON object; `n` is its 1-based position (used for default ids)."""
    name = str(d.get("name") or "").strip()
    if not name:
        raise ValueError(f"Product #{n} missing name: {d}")
    try:
        width = _num(d["width"])
        height = _num(d["height"])
    except KeyError as e:
        raise ValueError(f"Product {name!r} missing {e.args[0]!r}") from e
    return Product(
        id=str(d.get("id") or f"p{n}"),
        width=width,
        height=height,
        quantity=int(d.get("quantity", d.get("qty", 1))),
        name=name,
        color=d.get("color") or None,
    )


def load_job_json(path: str | Path) -> JobLoadResult:
    """
    Load a job definition from JSON.
    - "sheet.width" / "sheet.height" -> sheet size (defaults if absent)
    - "products[]" -> Product list (validated)
    """
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)

    sheet = data.get("sheet") or {}
    sheet_w = _num(sheet.get("width", DEFAULTS.default_sheet_w))
    sheet_h = _num(sheet.get("height", DEFAULTS.default_sheet_h))
    if sheet_w <= 0 or sheet_h <= 0:
        raise ValueError(f"Sheet dimensions must be greater than zero: {sheet_w}x{sheet_h}")

    items = data.get("products")
    if items is None:
        raise ValueError("JSON missing 'products'.")

    products = [product_from_dict(d, n) for n, d in enumerate(items, start=1)]
    validate_products(products)
    return JobLoadResult(sheet_width=sheet_w, sheet_height=sheet_h, products=products)
