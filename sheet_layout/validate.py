# sheet_layout/validate.py
# Validation utilities:
# - check products are well-formed before optimizing (the engine itself does not check)
# - check placements fit within their sheet
# - check no-overlap per sheet
# - check the sheet count covers demand
#
# Useful both during development and to sanity-check engine output.

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from .types import LayoutResult, Product, Sheet, check_no_overlap


@dataclass(frozen=True)
class ValidationIssue:
    level: str   # "ERROR" or "WARN"
    message: str
    sheet_id: Optional[str] = None
    placement_id: Optional[str] = None


def validate_products(products: Iterable[Product]) -> None:
    """Raise ValueError on the first malformed product."""
    seen = set()
    for p in products:
        if not (p.name or "").strip():
            raise ValueError(f"Product {p.id!r}: name must not be empty")
        if p.width <= 0 or p.height <= 0:
            raise ValueError(f"Product {p.name!r}: dimensions must be greater than zero ({p.width}x{p.height})")
        if p.quantity <= 0:
            raise ValueError(f"Product {p.name!r}: quantity must be greater than zero")
        if p.id in seen:
            raise ValueError(f"Duplicate product id: {p.id!r}")
        seen.add(p.id)


def _fits(sheet: Sheet, x: float, y: float, w: float, h: float) -> bool:
    return 0 <= x and 0 <= y and x + w <= sheet.width and y + h <= sheet.height


def validate_sheet(sheet: Sheet) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    for it in sheet.items:
        if it.width <= 0 or it.height <= 0:
            issues.append(
                ValidationIssue(
                    level="ERROR",
                    message=f"Non-positive size for placement: {it.width}x{it.height}",
                    sheet_id=sheet.id,
                    placement_id=it.placement_id,
                )
            )
        if not _fits(sheet, it.x, it.y, it.width, it.height):
            issues.append(
                ValidationIssue(
                    level="ERROR",
                    message=(
                        f"Placement out of sheet bounds: "
                        f"x={it.x}, y={it.y}, w={it.width}, h={it.height}, sheet={sheet.width}x{sheet.height}"
                    ),
                    sheet_id=sheet.id,
                    placement_id=it.placement_id,
                )
            )
    try:
        check_no_overlap([sheet])
    except ValueError as e:
        issues.append(ValidationIssue(level="ERROR", message=str(e), sheet_id=sheet.id))
    return issues


def validate_result(result: LayoutResult, products: Optional[Sequence[Product]] = None) -> List[ValidationIssue]:
    """
    Validate a whole LayoutResult.
    Returns a list of issues (empty if OK).
    """
    issues: List[ValidationIssue] = []

    for sheet in result.sheets:
        issues.extend(validate_sheet(sheet))

    ids = [it.placement_id for sh in result.sheets for it in sh.items]
    if len(ids) != len(set(ids)):
        issues.append(ValidationIssue(level="ERROR", message="Placement ids are not unique across sheets."))

    if result.total_sheets != len(result.sheets):
        issues.append(
            ValidationIssue(
                level="ERROR",
                message=f"total_sheets={result.total_sheets} but {len(result.sheets)} sheets returned",
            )
        )

    if not 0.0 <= result.utilisation_rate <= 100.0:
        issues.append(ValidationIssue(level="ERROR", message=f"Utilization out of range: {result.utilisation_rate}"))

    if products and result.sheets and not result.unused_products:
        fit = len(result.sheets[0].items)
        if fit > 0:
            expected = int(math.ceil(sum(p.quantity for p in products) / fit))
            if result.total_sheets != expected:
                issues.append(
                    ValidationIssue(
                        level="ERROR",
                        message=f"Expected {expected} sheets for {fit} items per sheet, got {result.total_sheets}",
                    )
                )

    if not result.sheets:
        issues.append(ValidationIssue(level="WARN", message="Result has 0 sheets."))

    return issues


def raise_on_errors(issues: List[ValidationIssue]) -> None:
    errs = [i for i in issues if i.level.upper() == "ERROR"]
    if errs:
        msg = "\n".join(
            f"[{e.level}] sheet={e.sheet_id} item={e.placement_id} :: {e.message}" for e in errs
        )
        raise ValueError("Validation failed:\n" + msg)
