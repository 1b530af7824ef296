"""Matplotlib charts for wellbeing-check results.

Figures are drawn off-screen and returned as PIL images, so the caller
decides whether to save or display them.
"""

from __future__ import annotations

import io
from typing import Optional

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from PIL import Image

from neomama.assessments import EPDS_ITEMS, EPDS_LOW_MAX, EPDS_MAX_PER_ITEM, EPDS_MODERATE_MAX
from neomama.models import AssessmentResult, AssessmentType

_BG = "#fff7f9"
_FG = "#3d2b33"
_ACCENT = "#c2547a"
_GRID = "#e6d3da"

# (upper bound, RGBA) per score band
_BANDS = (
    (EPDS_LOW_MAX, (0.55, 0.80, 0.60, 0.18)),
    (EPDS_MODERATE_MAX, (0.98, 0.72, 0.40, 0.18)),
    (None, (0.92, 0.40, 0.40, 0.18)),
)


def _fig_to_pil(fig: Figure, dpi: int = 100) -> Image.Image:
    """Render *fig* to PNG in memory, close it, and open the result with PIL."""
    buf = io.BytesIO()
    fig.savefig(buf, format="png", dpi=dpi, bbox_inches="tight",
                facecolor=fig.get_facecolor(), edgecolor="none")
    plt.close(fig)
    buf.seek(0)
    return Image.open(buf)


def _canvas(size: tuple[int, int], dpi: int) -> tuple[Figure, Axes]:
    """A blank figure of *size* pixels with one themed axes."""
    fig = Figure(figsize=(size[0] / dpi, size[1] / dpi), dpi=dpi, facecolor=_BG)
    ax = fig.add_subplot(111)
    ax.set_facecolor(_BG)
    ax.tick_params(colors=_FG, labelsize=8)
    for side in ("top", "right"):
        ax.spines[side].set_visible(False)
    for side in ("bottom", "left"):
        ax.spines[side].set_color(_GRID)
    return fig, ax


def _epds_only(results: list[AssessmentResult]) -> list[AssessmentResult]:
    """EPDS results, oldest first."""
    return sorted(
        (r for r in results if r.assessment_type == AssessmentType.EPDS),
        key=lambda r: r.taken_at,
    )


def epds_timeseries(
    results: list[AssessmentResult],
    *,
    title: str = "Wellbeing Check Over Time",
    size: tuple[int, int] = (560, 260),
    dpi: int = 100,
) -> Optional[Image.Image]:
    """EPDS totals over time, drawn on top of the low / moderate / high bands.

    Needs at least two EPDS results; returns None otherwise.
    """
    epds = _epds_only(results)
    if len(epds) < 2:
        return None

    top = epds[0].max_score
    fig, ax = _canvas(size, dpi)

    lower = 0
    for upper, colour in _BANDS:
        upper = top if upper is None else upper
        ax.axhspan(lower, upper, color=colour, linewidth=0)
        lower = upper

    ax.plot(
        [r.taken_at for r in epds],
        [r.score for r in epds],
        color=_ACCENT, linewidth=2, marker="o", markersize=5,
        markeredgecolor="white", markeredgewidth=0.5,
    )
    ax.set_ylim(0, top)
    ax.set_ylabel("EPDS score", color=_FG, fontsize=9)
    ax.yaxis.grid(color=_GRID, linewidth=0.5)
    ax.set_title(title, color=_FG, fontsize=11, fontweight="bold")
    fig.autofmt_xdate(rotation=30, ha="right")

    return _fig_to_pil(fig, dpi=dpi)


def epds_item_bars(
    result: AssessmentResult,
    *,
    title: str = "Answers by Question",
    size: tuple[int, int] = (560, 300),
    dpi: int = 100,
) -> Image.Image:
    """Points given on each EPDS item as horizontal bars; unanswered items show as 0."""
    labels = [item.id.capitalize() for item in EPDS_ITEMS]
    points = np.array([result.item_scores.get(item.id, 0) for item in EPDS_ITEMS])
    rows = np.arange(len(labels))

    fig, ax = _canvas(size, dpi)
    ax.barh(rows, points, color=_ACCENT, height=0.6)
    ax.set_yticks(rows)
    ax.set_yticklabels(labels, color=_FG, fontsize=8)
    ax.invert_yaxis()
    ax.set_xlim(0, EPDS_MAX_PER_ITEM)
    ax.set_xticks(range(EPDS_MAX_PER_ITEM + 1))
    ax.xaxis.grid(color=_GRID, linewidth=0.5)
    ax.set_title(title, color=_FG, fontsize=11, fontweight="bold")

    return _fig_to_pil(fig, dpi=dpi)
