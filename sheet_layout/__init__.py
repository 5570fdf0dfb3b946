# sheet_layout/__init__.py
"""
Sheet layout optimizer (ratio-preserving, template-replicating).

Pipeline:
- capacity probe: binary search over trial totals for the densest sheet that
  keeps the requested quantity ratios (within a 90% tolerance)
- placement search: grid scan with edge / neighbor scoring, first maximum wins
  in (y, x) order
- assembly: replicate the winning template sheet until all quantities are
  covered, unique placement ids, utilization

Around it: CSV/JSON loaders, CSV/JSON export, result validation, production
summary and matplotlib plotting.
"""

from .types import (
    Product,
    PlacedItem,
    Sheet,
    LayoutResult,
    check_no_overlap,
)

from .config import (
    DEFAULTS,
    Defaults,
    OptimizerParams,
    parse_sheet_text,
)

from .ratio import plan_targets

from .placement import (
    find_best_position,
    place_product,
    placement_score,
    can_place_at,
)

from .packer import TrialResult, pack_trial_sheet
from .capacity import CapacityResult, find_capacity
from .assembler import assemble_layout

from .metrics import (
    ProductionLine,
    SheetMetrics,
    compute_sheet_metrics,
    production_summary,
    utilisation_rate,
)

from .optimizer import optimize_layout

__all__ = [
    # types
    "Product",
    "PlacedItem",
    "Sheet",
    "LayoutResult",
    "check_no_overlap",
    # config
    "DEFAULTS",
    "Defaults",
    "OptimizerParams",
    "parse_sheet_text",
    # engine
    "plan_targets",
    "find_best_position",
    "place_product",
    "placement_score",
    "can_place_at",
    "TrialResult",
    "pack_trial_sheet",
    "CapacityResult",
    "find_capacity",
    "assemble_layout",
    "optimize_layout",
    # metrics
    "ProductionLine",
    "SheetMetrics",
    "compute_sheet_metrics",
    "production_summary",
    "utilisation_rate",
]
