# sheet_layout/io_csv.py
# CSV import/export helpers:
# - read a product list
# - export placements per sheet
# - export per-product production summary
#
# CSV products format (header required):
#   name,width,height,quantity[,id][,color]

from __future__ import annotations

import csv
from pathlib import Path
from typing import List, Sequence

from .metrics import production_summary
from .types import LayoutResult, Product
from .validate import validate_products


def _num(s: str) -> float:
    v = float(s)
    return int(v) if v.is_integer() else v


def read_products_csv(path: str | Path) -> List[Product]:
    path = Path(path)
    products: List[Product] = []
    with path.open("r", newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        required = {"name", "width", "height", "quantity"}
        if not required.issubset(set(reader.fieldnames or [])):
            raise ValueError(f"CSV must contain at least columns: {sorted(required)}")
        for n, row in enumerate(reader, start=1):
            if not any((v or "").strip() for v in row.values() if isinstance(v, str)):
                continue
            name = (row.get("name") or "").strip()
            if not name:
                raise ValueError(f"Row {n}: name must not be empty")
            pid = (row.get("id") or "").strip() or f"p{n}"
            color = (row.get("color") or "").strip() or None
            products.append(
                Product(
                    id=pid,
                    width=_num(row["width"]),
                    height=_num(row["height"]),
                    quantity=int(float(row["quantity"])),
                    name=name,
                    color=color,
                )
            )
    validate_products(products)
    return products


def export_placements_csv(result: LayoutResult, path: str | Path) -> None:
    """
    Write every placement of every sheet into a CSV file.
    Coordinates are sheet-local, origin at the top-left corner.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fieldnames = [
        "sheet_id",
        "placement_id",
        "product_id",
        "name",
        "x",
        "y",
        "width",
        "height",
    ]

    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fieldnames)
        w.writeheader()
        for sheet in result.sheets:
            for it in sheet.items:
                w.writerow(
                    {
                        "sheet_id": sheet.id,
                        "placement_id": it.placement_id,
                        "product_id": it.product_id,
                        "name": it.name,
                        "x": it.x,
                        "y": it.y,
                        "width": it.width,
                        "height": it.height,
                    }
                )


def export_summary_csv(products: Sequence[Product], result: LayoutResult, path: str | Path) -> None:
    """
    One row per product: requested vs. produced (useful for quick order checks).
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fieldnames = ["product_id", "name", "requested", "per_sheet", "produced", "surplus"]

    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fieldnames)
        w.writeheader()
        for line in production_summary(products, result):
            w.writerow(
                {
                    "product_id": line.product_id,
                    "name": line.name,
                    "requested": line.requested,
                    "per_sheet": line.per_sheet,
                    "produced": line.produced,
                    "surplus": line.surplus,
                }
            )


def export_all(products: Sequence[Product], result: LayoutResult, out_dir: str | Path, prefix: str = "layout") -> None:
    """
    Export placements and the production summary into out_dir.
    """
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    export_placements_csv(result, out_dir / f"{prefix}_placements.csv")
    export_summary_csv(products, result, out_dir / f"{prefix}_summary.csv")
