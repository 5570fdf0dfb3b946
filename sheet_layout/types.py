# sheet_layout/types.py
# Core data structures for ratio-preserving sheet layouts.
# Keep this file dependency-light so it can be imported everywhere.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple


# ----------------------------
# Inputs
# ----------------------------

@dataclass(frozen=True)
class Product:
    """A requested rectangle, printed `quantity` times across all sheets."""
    id: str
    width: float
    height: float
    quantity: int
    name: str
    color: Optional[str] = None

    @property
    def area(self) -> float:
        return self.width * self.height


# ----------------------------
# Outputs / layout objects
# ----------------------------

@dataclass(frozen=True)
class PlacedItem:
    """One placed instance of a product, top-left corner at (x, y)."""
    placement_id: str
    product_id: str
    sequence: int
    x: float
    y: float
    width: float
    height: float
    name: str
    color: Optional[str] = None

    def right(self) -> float:
        return self.x + self.width

    def bottom(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height


@dataclass
class Sheet:
    """A sheet and its placed items, in placement order."""
    id: str
    width: float
    height: float
    items: List[PlacedItem] = field(default_factory=list)

    @property
    def area(self) -> float:
        return self.width * self.height

    def item_area(self) -> float:
        return sum(it.area for it in self.items)


@dataclass(frozen=True)
class LayoutResult:
    """
    Final layout. `sheets` is either empty, a single unusable sheet with no
    items, or N sheets sharing the template arrangement.
    """
    sheets: Tuple[Sheet, ...] = ()
    unused_products: Tuple[Product, ...] = ()
    total_sheets: int = 0
    utilisation_rate: float = 0.0

    @property
    def template(self) -> Optional[Sheet]:
        return self.sheets[0] if self.sheets else None

    def items_per_sheet(self) -> Dict[str, int]:
        """Count of items per source product id on one sheet."""
        counts: Dict[str, int] = {}
        if self.template is None:
            return counts
        for it in self.template.items:
            counts[it.product_id] = counts.get(it.product_id, 0) + 1
        return counts


# ----------------------------
# Geometry helpers
# ----------------------------

Rect = Tuple[float, float, float, float]  # x, y, w, h


def rects_overlap(a: Rect, b: Rect) -> bool:
    """Positive-area intersection; shared edges or corners do not count."""
    ax, ay, aw, ah = a
    bx, by, bw, bh = b
    return ax < bx + bw and bx < ax + aw and ay < by + bh and by < ay + ah


def rects_adjacent(a: Rect, b: Rect) -> bool:
    """
    True if the rectangles share a boundary segment of positive length.
    Touching at a single corner point is not adjacency.
    """
    ax, ay, aw, ah = a
    bx, by, bw, bh = b
    if ax + aw == bx or bx + bw == ax:
        return ay < by + bh and by < ay + ah
    if ay + ah == by or by + bh == ay:
        return ax < bx + bw and bx < ax + aw
    return False


def item_rect(item: PlacedItem) -> Rect:
    return (item.x, item.y, item.width, item.height)


def check_no_overlap(sheets: Iterable[Sheet]) -> None:
    """
    Simple validator: raise if any overlap detected (per sheet).
    This is useful for unit tests and sanity checks.
    """
    for sheet in sheets:
        items: List[PlacedItem] = list(sheet.items)
        for i in range(len(items)):
            a = items[i]
            for j in range(i + 1, len(items)):
                b = items[j]
                if rects_overlap(item_rect(a), item_rect(b)):
                    raise ValueError(
                        f"Overlap on {sheet.id}: {a.placement_id} ({a.x},{a.y},{a.right()},{a.bottom()}) "
                        f"with {b.placement_id} ({b.x},{b.y},{b.right()},{b.bottom()})"
                    )
