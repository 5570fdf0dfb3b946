# sheet_layout/plotting.py
# Minimal matplotlib visualization of a layout result.
# All sheets share one arrangement, so by default only the template (first) sheet is drawn.

from __future__ import annotations

import colorsys
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

import matplotlib.pyplot as plt
from matplotlib.colors import to_rgb
from matplotlib.patches import Rectangle

from .types import LayoutResult, PlacedItem, Sheet

RGB = Tuple[float, float, float]

_HSL_RE = re.compile(r"hsl\(\s*([\d.]+)\s*,\s*([\d.]+)%\s*,\s*([\d.]+)%\s*\)", re.IGNORECASE)


@dataclass(frozen=True)
class PlotStyle:
    show_labels: bool = True
    show_dims: bool = False
    show_grid: bool = False
    all_sheets: bool = False  # False: template sheet only
    font_size: int = 7
    padding: int = 20         # empty margin around each sheet in drawing units
    max_cols: int = 2         # layout of multiple sheets in a single figure
    min_label_frac: float = 0.06  # skip labels on items narrower/shorter than this share of the sheet


def _hash_color(key: str) -> RGB:
    """Deterministic pastel-ish color from a string."""
    h = 2166136261
    for ch in key.encode("utf-8"):
        h ^= ch
        h *= 16777619
        h &= 0xFFFFFFFF
    # map to [0.3..0.9] range for readability
    r = 0.3 + ((h >> 0) & 0xFF) / 255 * 0.6
    g = 0.3 + ((h >> 8) & 0xFF) / 255 * 0.6
    b = 0.3 + ((h >> 16) & 0xFF) / 255 * 0.6
    return (r, g, b)


def item_color(item: PlacedItem) -> RGB:
    """
    Product color if it is set and understood (matplotlib color or CSS 'hsl(h, s%, l%)'),
    otherwise a stable color derived from the product name.
    """
    if item.color:
        m = _HSL_RE.fullmatch(item.color.strip())
        if m:
            hue, sat, lig = (float(g) for g in m.groups())
            return colorsys.hls_to_rgb((hue % 360) / 360.0, lig / 100.0, sat / 100.0)
        try:
            return to_rgb(item.color)
        except ValueError:
            pass  # unknown color string: fall through to the name hash
    return _hash_color(item.name)


def _sheet_title(sheet: Sheet, result: LayoutResult) -> str:
    bits = [f"{sheet.id}", f"{sheet.width}×{sheet.height}", f"{len(sheet.items)} items"]
    if sheet.items:
        bits.append(f"util {result.utilisation_rate:.2f}%")
    else:
        bits.append("unusable")
    return " | ".join(bits)


def plot_result(
    result: LayoutResult,
    style: Optional[PlotStyle] = None,
    figsize: Optional[Tuple[float, float]] = None,
) -> plt.Figure:
    """
    Draw the layout in one matplotlib figure.
    Sheet coordinates have their origin at the top-left corner, y growing downwards.
    """
    style = style or PlotStyle()

    sheets = list(result.sheets) if style.all_sheets else list(result.sheets[:1])
    n = len(sheets)
    if n == 0:
        raise ValueError("Layout has no sheets to plot")

    cols = min(style.max_cols, n)
    rows = (n + cols - 1) // cols

    if figsize is None:
        # heuristic sizing: ~6x4 per sheet
        figsize = (6 * cols, 4.5 * rows)

    fig, axes = plt.subplots(rows, cols, figsize=figsize, squeeze=False)
    ax_list: List[plt.Axes] = list(axes.ravel())

    for ax in ax_list[n:]:
        ax.axis("off")

    for idx, sheet in enumerate(sheets):
        ax = ax_list[idx]
        W, H = sheet.width, sheet.height

        ax.add_patch(Rectangle((0, 0), W, H, facecolor="#f8f8f8", edgecolor="#999999", linewidth=1.2))

        for it in sheet.items:
            rect = Rectangle(
                (it.x, it.y), it.width, it.height,
                facecolor=item_color(it), edgecolor="#333333", linewidth=0.8,
            )
            ax.add_patch(rect)

            big_enough = it.width >= W * style.min_label_frac and it.height >= H * style.min_label_frac
            if big_enough and (style.show_labels or style.show_dims):
                lines: List[str] = []
                if style.show_labels:
                    lines.append(it.name)
                if style.show_dims:
                    lines.append(f"{it.width}×{it.height}")
                ax.text(
                    it.x + it.width / 2,
                    it.y + it.height / 2,
                    "\n".join(lines),
                    ha="center",
                    va="center",
                    fontsize=style.font_size,
                    color="#333333",
                    clip_on=True,
                )

        ax.set_title(_sheet_title(sheet, result), fontsize=10)
        ax.set_aspect("equal", adjustable="box")

        pad = style.padding
        ax.set_xlim(-pad, W + pad)
        ax.set_ylim(H + pad, -pad)  # top-left origin

        if style.show_grid:
            ax.grid(True, linewidth=0.3)
        else:
            ax.grid(False)
        ax.tick_params(labelbottom=False, labelleft=False, bottom=False, left=False)

    fig.tight_layout()
    return fig


def show_result(result: LayoutResult, style: Optional[PlotStyle] = None) -> None:
    """Convenience wrapper: plot and show."""
    plot_result(result, style=style)
    plt.show()


def save_result_png(
    result: LayoutResult,
    path: str,
    style: Optional[PlotStyle] = None,
    dpi: int = 200,
) -> None:
    """Save the figure to PNG."""
    fig = plot_result(result, style=style)
    fig.savefig(path, dpi=dpi, bbox_inches="tight")
    plt.close(fig)
