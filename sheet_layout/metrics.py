# sheet_layout/metrics.py
# Metrics for sheet layouts:
# - utilization rate (covered area / sheet area, in percent)
# - waste area per sheet
# - production summary: requested vs. produced per product (items per sheet x sheets)
#
# These metrics are engine-agnostic: they work for any Sheet / LayoutResult.

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from .types import LayoutResult, Product, Sheet


@dataclass(frozen=True)
class SheetMetrics:
    item_count: int
    item_area: float
    sheet_area: float

    @property
    def waste_area(self) -> float:
        return self.sheet_area - self.item_area

    @property
    def utilisation_rate(self) -> float:
        return utilisation_rate(self.item_area, self.sheet_area)


@dataclass(frozen=True)
class ProductionLine:
    product_id: str
    name: str
    requested: int
    per_sheet: int
    produced: int

    @property
    def surplus(self) -> int:
        return max(0, self.produced - self.requested)

    @property
    def shortfall(self) -> int:
        return max(0, self.requested - self.produced)


def utilisation_rate(item_area: float, sheet_area: float) -> float:
    """Percentage of sheet area covered by items, clamped to [0, 100]."""
    if sheet_area <= 0:
        return 0.0
    rate = item_area * 100.0 / sheet_area
    return min(100.0, max(0.0, rate))


def compute_sheet_metrics(sheet: Sheet) -> SheetMetrics:
    return SheetMetrics(
        item_count=len(sheet.items),
        item_area=sheet.item_area(),
        sheet_area=sheet.area,
    )


def production_summary(products: Sequence[Product], result: LayoutResult) -> List[ProductionLine]:
    """
    One line per input product, in input order. All sheets share the template
    arrangement, so produced = items on one sheet x total sheets.
    """
    per_sheet = result.items_per_sheet()
    lines: List[ProductionLine] = []
    for p in products:
        n = per_sheet.get(p.id, 0)
        lines.append(
            ProductionLine(
                product_id=p.id,
                name=p.name,
                requested=p.quantity,
                per_sheet=n,
                produced=n * result.total_sheets,
            )
        )
    return lines
