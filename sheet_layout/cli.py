# sheet_layout/cli.py
# Command line runner:
# - reads products from CSV or a JSON job file
# - optimizes the layout
# - prints totals + per-product requested / produced quantities
# - optional CSV/JSON export folder and PNG of the template sheet
#
# Run:
#   python -m sheet_layout --products products.csv --sheet 700x500 --out out/ --png layout.png
#
# CSV products format (header required):
#   name,width,height,quantity[,id][,color]

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional, Sequence

from .config import DEFAULTS, OptimizerParams, parse_sheet_text
from .io_csv import export_all, read_products_csv
from .io_json import load_job_json
from .logger import set_enabled, set_verbose
from .metrics import production_summary
from .optimizer import optimize_layout
from .types import LayoutResult, Product
from .utils import save_result_json, timer
from .validate import raise_on_errors, validate_result


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Ratio-preserving sheet layout optimizer")
    p.add_argument("--products", type=str, required=True, help="Products CSV or job JSON")
    p.add_argument(
        "--sheet",
        type=str,
        default="",
        help=f"Sheet WxH, e.g. {DEFAULTS.default_sheet_w}x{DEFAULTS.default_sheet_h} (overrides the JSON job)",
    )
    p.add_argument("--max_probe", type=int, default=DEFAULTS.default_max_probe_total, help="Upper bound of the capacity probe")
    p.add_argument("--tolerance", type=float, default=DEFAULTS.default_tolerance, help="Share of ratio targets a trial must place")
    p.add_argument("--area_bound", action="store_true", help="Cap the probe at sheet area / smallest product area")
    p.add_argument("--out", type=str, default="", help="Output directory for CSV + JSON exports (optional)")
    p.add_argument("--prefix", type=str, default="layout", help="Export filename prefix")
    p.add_argument("--png", type=str, default="", help="Save the template sheet as PNG (optional)")
    p.add_argument("--all_sheets", action="store_true", help="Draw every sheet in the PNG, not just the template")
    p.add_argument("--quiet", action="store_true", help="No progress output")
    p.add_argument("--verbose", action="store_true", help="Log every capacity probe trial")
    return p


def format_summary(products: Sequence[Product], result: LayoutResult) -> List[str]:
    lines = [
        f"Total sheets: {result.total_sheets}",
        f"Utilization rate: {result.utilisation_rate:.2f}%",
    ]
    if result.unused_products:
        lines.append("Unused products: " + ", ".join(p.name for p in result.unused_products))

    lines.append("Total quantities:")
    for line in production_summary(products, result):
        extra = f" (+{line.surplus} extra)" if line.surplus else ""
        lines.append(f"- {line.name}: requested {line.requested}, will produce {line.produced}{extra}")

    lines.append("Products per sheet:")
    for line in production_summary(products, result):
        if line.per_sheet:
            lines.append(f"- {line.name}: {line.per_sheet} items")
    return lines


def main(argv: Optional[List[str]] = None) -> None:
    args = build_argparser().parse_args(argv)

    set_enabled(not args.quiet)
    set_verbose(bool(args.verbose))

    src = Path(args.products)
    if not src.exists():
        raise SystemExit(f"Products file not found: {src}")

    if src.suffix.lower() == ".json":
        job = load_job_json(src)
        products = job.products
        sheet_w, sheet_h = job.sheet_width, job.sheet_height
    else:
        products = read_products_csv(src)
        sheet_w, sheet_h = DEFAULTS.default_sheet_w, DEFAULTS.default_sheet_h

    if args.sheet.strip():
        sheet_w, sheet_h = parse_sheet_text(args.sheet)

    if not products:
        raise SystemExit("Please add at least one product to optimize layout.")

    params = OptimizerParams(
        max_probe_total=int(args.max_probe),
        tolerance=float(args.tolerance),
        area_bound=bool(args.area_bound),
    )

    with timer("optimize") as t:
        result = optimize_layout(products, sheet_w, sheet_h, params=params)

    raise_on_errors(validate_result(result, products))

    print(f"Sheet: {sheet_w}x{sheet_h}  products: {len(products)}  time: {t['seconds']:.2f} s")
    for line in format_summary(products, result):
        print(line)

    if args.out.strip():
        outp = Path(args.out.strip())
        export_all(products, result, out_dir=outp, prefix=args.prefix)
        save_result_json(result, outp / f"{args.prefix}.json", products)
        print(f"Exported CSV + JSON to: {outp}")

    if args.png.strip():
        # Imported lazily so the CLI works without a display / matplotlib backend setup
        from .plotting import PlotStyle, save_result_png

        save_result_png(result, args.png.strip(), style=PlotStyle(all_sheets=bool(args.all_sheets)))
        print(f"Layout saved to: {args.png.strip()}")


if __name__ == "__main__":
    main()
