# sheet_layout/placement.py
# Placement search: find the best top-left position for one product on a partially filled sheet.
#
# Candidate positions are integer grid points (x, y) with the product fully inside the sheet.
# A position is valid if it does not overlap any placed item. Valid positions are scored:
#   +edge_bonus     for each sheet edge the product touches (left, right, top, bottom)
#   +neighbor_bonus for each placed item it shares a boundary segment with
# The highest score wins; ties go to the first position in scan order (y ascending, then x).
#
# Scanning every grid point is O(W * H * items) per placement. Instead we only scan the
# "critical" coordinates where some predicate can change (sheet edges, item edges offset by
# the product size) plus the first integer after each of them; along x only the items in the
# current row are considered. All predicates are constant between consecutive critical
# coordinates, so the first maximum over the reduced grid is exactly the first maximum over
# the full grid. scan_full_grid() keeps the naive version for cross-checking.

from __future__ import annotations

import math
from typing import Iterable, List, Optional, Sequence, Tuple

from .config import OptimizerParams
from .types import PlacedItem, Product, Rect, Sheet, item_rect, rects_adjacent, rects_overlap

Position = Tuple[float, float]


def _score_if_free(
    x: float,
    y: float,
    w: float,
    h: float,
    sheet_w: float,
    sheet_h: float,
    rects: Iterable[Rect],
    edge_bonus: int,
    neighbor_bonus: int,
) -> Optional[int]:
    """Score of placing (w, h) at (x, y), or None if out of bounds / overlapping."""
    if x < 0 or y < 0 or x + w > sheet_w or y + h > sheet_h:
        return None

    cand = (x, y, w, h)
    score = 0
    for r in rects:
        if rects_overlap(cand, r):
            return None
        if rects_adjacent(cand, r):
            score += neighbor_bonus

    if x == 0:
        score += edge_bonus
    if x + w == sheet_w:
        score += edge_bonus
    if y == 0:
        score += edge_bonus
    if y + h == sheet_h:
        score += edge_bonus
    return score


def can_place_at(sheet: Sheet, x: float, y: float, width: float, height: float) -> bool:
    """True if a width x height rectangle at (x, y) stays inside the sheet and overlaps nothing."""
    rects = [item_rect(it) for it in sheet.items]
    return _score_if_free(x, y, width, height, sheet.width, sheet.height, rects, 0, 0) is not None


def placement_score(
    sheet: Sheet,
    x: float,
    y: float,
    width: float,
    height: float,
    *,
    edge_bonus: int = 10,
    neighbor_bonus: int = 5,
) -> Optional[int]:
    """Heuristic score of a position (higher is better), or None if the position is not free."""
    rects = [item_rect(it) for it in sheet.items]
    return _score_if_free(x, y, width, height, sheet.width, sheet.height, rects, edge_bonus, neighbor_bonus)


def _axis_candidates(upper: float, size: float, spans: Iterable[Tuple[float, float]]) -> List[int]:
    """
    Integer coordinates in [0, upper] worth testing along one axis.
    `spans` are (start, length) of placed items on that axis.
    """
    critical = [0.0, upper]
    for start, length in spans:
        critical.append(start - size)     # our far edge meets the item's near edge
        critical.append(start + length)   # our near edge meets the item's far edge

    out = set()
    for c in critical:
        base = math.floor(c)
        for v in (base, base + 1):
            if 0 <= v <= upper:
                out.add(int(v))
    return sorted(out)


def find_best_position(
    sheet: Sheet,
    width: float,
    height: float,
    *,
    edge_bonus: int = 10,
    neighbor_bonus: int = 5,
) -> Optional[Position]:
    """
    Best (x, y) for a width x height rectangle on `sheet`, or None if nothing fits.
    Same result as scan_full_grid(), much fewer candidates.
    """
    sheet_w, sheet_h = sheet.width, sheet.height
    if width > sheet_w or height > sheet_h:
        return None

    items: Sequence[PlacedItem] = sheet.items
    ys = _axis_candidates(sheet_h - height, height, [(it.y, it.height) for it in items])

    best: Optional[Position] = None
    best_score = -1
    for y in ys:
        # Only items whose vertical span touches the row can overlap or be adjacent,
        # so only their edges matter along x for this row
        row = [item_rect(it) for it in items if it.y <= y + height and it.y + it.height >= y]
        xs = _axis_candidates(sheet_w - width, width, [(r[0], r[2]) for r in row])
        for x in xs:
            score = _score_if_free(x, y, width, height, sheet_w, sheet_h, row, edge_bonus, neighbor_bonus)
            if score is not None and score > best_score:
                best_score = score
                best = (x, y)
    return best


def scan_full_grid(
    sheet: Sheet,
    width: float,
    height: float,
    *,
    edge_bonus: int = 10,
    neighbor_bonus: int = 5,
) -> Optional[Position]:
    """Naive search over every integer grid point. Slow; used to cross-check find_best_position()."""
    if width > sheet.width or height > sheet.height:
        return None

    rects = [item_rect(it) for it in sheet.items]
    best: Optional[Position] = None
    best_score = -1
    for y in range(int(math.floor(sheet.height - height)) + 1):
        for x in range(int(math.floor(sheet.width - width)) + 1):
            score = _score_if_free(x, y, width, height, sheet.width, sheet.height, rects, edge_bonus, neighbor_bonus)
            if score is not None and score > best_score:
                best_score = score
                best = (x, y)
    return best


def place_product(
    product: Product,
    index: int,
    sheet: Sheet,
    placed_counts: List[int],
    params: Optional[OptimizerParams] = None,
) -> bool:
    """
    Place one instance of `product` (dense index `index`) at its best position.
    On success appends a PlacedItem and bumps placed_counts[index]; otherwise leaves
    the sheet and counters untouched and returns False.
    """
    params = params or OptimizerParams()
    pos = find_best_position(
        sheet,
        product.width,
        product.height,
        edge_bonus=params.edge_bonus,
        neighbor_bonus=params.neighbor_bonus,
    )
    if pos is None:
        return False

    seq = placed_counts[index] + 1
    x, y = pos
    sheet.items.append(
        PlacedItem(
            placement_id=f"{product.id}-{seq}",
            product_id=product.id,
            sequence=seq,
            x=x,
            y=y,
            width=product.width,
            height=product.height,
            name=product.name,
            color=product.color,
        )
    )
    placed_counts[index] = seq
    return True
