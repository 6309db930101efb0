"""
Chart rendering for the CallOS savings calculator.

Provides:
  - Base64-encoded chart images for web embedding (get_web_charts)
  - Individual chart renderers reusable on their own
"""

from __future__ import annotations

import base64
import io
from typing import List, Optional

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.ticker import FuncFormatter
import numpy as np

import config as cfg
from estimator import (
    SavingsInputs,
    SavingsResults,
    SweepResult,
    TeamSizeRow,
)

# ═══════════════════════════════════════════════════════════════════
# Style constants
# ═══════════════════════════════════════════════════════════════════

BG = "#0a101f"
CARD = "#131b2e"
TEXT = "#f1f5f9"
TEXT2 = "#cbd5e1"
INDIGO = "#818cf8"
EMERALD = "#34d399"
AMBER = "#fbbf24"
SLATE = "#94a3b8"
BORDER = "#1e293b"

WEB_W, WEB_H = 10, 6


# ═══════════════════════════════════════════════════════════════════
# Axis formatters
# ═══════════════════════════════════════════════════════════════════

def _pln_fmt(x, _):
    if abs(x) >= 1e6:
        return f"{x / 1e6:.1f} mln zł"
    if abs(x) >= 1e3:
        return f"{x / 1e3:.0f} tys. zł"
    return f"{x:.0f} zł"


def _hours_fmt(x, _):
    return f"{x:.0f} h"


PLN_FMT = FuncFormatter(_pln_fmt)
HOURS_FMT = FuncFormatter(_hours_fmt)


# ═══════════════════════════════════════════════════════════════════
# Style helpers
# ═══════════════════════════════════════════════════════════════════

def _style(fig, *axes):
    """Apply dark theme to figure and all axes."""
    fig.patch.set_facecolor(BG)
    for ax in axes:
        ax.set_facecolor(CARD)
        ax.tick_params(colors=TEXT, labelsize=8)
        ax.xaxis.label.set_color(TEXT)
        ax.yaxis.label.set_color(TEXT)
        ax.title.set_color(TEXT)
        for spine in ax.spines.values():
            spine.set_color(BORDER)
        ax.grid(True, axis="y", alpha=0.15, color=SLATE)


def _legend(ax, loc="upper left"):
    ax.legend(loc=loc, fontsize=8, facecolor=CARD, edgecolor=BORDER, labelcolor=TEXT)


def _bar_labels(ax, bars, labels):
    for bar, label in zip(bars, labels):
        ax.annotate(label, (bar.get_x() + bar.get_width() / 2, bar.get_height()),
                    xytext=(0, 4), textcoords="offset points",
                    ha="center", fontsize=8, color=TEXT2)


PERIODS = ["Tydzień", "Miesiąc", "Rok"]


# ═══════════════════════════════════════════════════════════════════
# Charts
# ═══════════════════════════════════════════════════════════════════

def chart_time(results: SavingsResults, figsize=(WEB_W, WEB_H)) -> plt.Figure:
    """Manual CRM hours next to hours saved, per period."""
    manual = np.array([
        results.manual_minutes_week,
        results.manual_minutes_month,
        results.manual_minutes_year,
    ]) / cfg.MINUTES_PER_HOUR
    saved = np.array([
        results.saved_hours_week,
        results.saved_hours_month,
        results.saved_hours_year,
    ])

    fig, ax = plt.subplots(figsize=figsize)
    _style(fig, ax)
    x = np.arange(len(PERIODS))
    w = 0.36
    b1 = ax.bar(x - w / 2, manual, w, color=SLATE, label="Ręczne uzupełnianie CRM")
    b2 = ax.bar(x + w / 2, saved, w, color=INDIGO, label="Czas odzyskany z CallOS")
    _bar_labels(ax, b2, [f"{v:,.0f} h" for v in saved])

    ax.set_xticks(x)
    ax.set_xticklabels(PERIODS)
    ax.set_yscale("symlog", linthresh=10)
    ax.yaxis.set_major_formatter(HOURS_FMT)
    ax.set_title("Oszczędność czasu", fontsize=12, fontweight="bold")
    _legend(ax)
    return fig


def chart_money(results: SavingsResults, figsize=(WEB_W, WEB_H)) -> plt.Figure:
    """Money saved per week, month and year."""
    values = [results.money_saved_week, results.money_saved_month, results.money_saved_year]

    fig, ax = plt.subplots(figsize=figsize)
    _style(fig, ax)
    bars = ax.bar(PERIODS, values, color=[INDIGO, EMERALD, AMBER], width=0.55)
    _bar_labels(ax, bars, [_pln_fmt(v, None) for v in values])

    ax.yaxis.set_major_formatter(PLN_FMT)
    ax.set_title("Oszczędność finansowa", fontsize=12, fontweight="bold")
    return fig


def chart_team_size(rows: List[TeamSizeRow], inputs: SavingsInputs,
                    figsize=(WEB_W, WEB_H)) -> plt.Figure:
    """Monthly savings as the team grows, current team highlighted."""
    sizes = np.array([r.salespeople for r in rows], dtype=float)
    money = np.array([r.money_saved_month for r in rows])

    fig, ax = plt.subplots(figsize=figsize)
    _style(fig, ax)
    ax.plot(sizes, money, color=EMERALD, linewidth=2.2, marker="o", markersize=5,
            label="Oszczędność / miesiąc")

    current = [r for r in rows if r.salespeople == inputs.salespeople]
    if current:
        ax.scatter([current[0].salespeople], [current[0].money_saved_month],
                   s=90, color=AMBER, zorder=5, label="Twój zespół")

    ax.set_xlabel("Ilość handlowców")
    ax.yaxis.set_major_formatter(PLN_FMT)
    ax.set_title("Oszczędności a wielkość zespołu", fontsize=12, fontweight="bold")
    _legend(ax)
    return fig


def chart_sweep(sweep: SweepResult, figsize=(WEB_W, WEB_H)) -> plt.Figure:
    """Heatmap of monthly savings over team size x weekly calls."""
    fig, ax = plt.subplots(figsize=figsize)
    _style(fig, ax)
    ax.grid(False)

    grid = sweep.money_saved_month
    im = ax.imshow(grid, cmap="viridis", aspect="auto", origin="lower")
    ax.set_xticks(np.arange(len(sweep.calls_per_week)))
    ax.set_xticklabels([f"{c:.0f}" for c in sweep.calls_per_week])
    ax.set_yticks(np.arange(len(sweep.salespeople)))
    ax.set_yticklabels([f"{s:.0f}" for s in sweep.salespeople])
    ax.set_xlabel("Rozmowy tygodniowo (na handlowca)")
    ax.set_ylabel("Ilość handlowców")

    peak = grid.max() if grid.size else 0.0
    for i in range(grid.shape[0]):
        for j in range(grid.shape[1]):
            shade = "#0a101f" if peak and grid[i, j] > peak * 0.6 else TEXT
            ax.text(j, i, _pln_fmt(grid[i, j], None), ha="center", va="center",
                    fontsize=7, color=shade)

    cbar = fig.colorbar(im, ax=ax, format=PLN_FMT)
    cbar.ax.tick_params(colors=TEXT, labelsize=7)
    ax.set_title("Oszczędność miesięczna: zespół x liczba rozmów",
                 fontsize=12, fontweight="bold")
    return fig


# ═══════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════

# Bigger values overflow matplotlib's axis transforms.
_CHART_LIMIT = 1e30


def _chartable(
    results: SavingsResults,
    team: List[TeamSizeRow],
    sweep: Optional[SweepResult],
) -> bool:
    values = [getattr(results, f) for f in results.__dataclass_fields__]
    values += [r.money_saved_month for r in team]
    values += [r.saved_minutes_month for r in team]
    if sweep is not None:
        values += sweep.money_saved_month.ravel().tolist()
    # NaN compares False, so it fails here too
    return bool(np.all(np.abs(np.asarray(values, dtype=float)) < _CHART_LIMIT))


def figure_to_base64(fig: plt.Figure) -> str:
    """Convert a matplotlib figure to a base64-encoded PNG string."""
    buf = io.BytesIO()
    fig.savefig(buf, format="png", facecolor=fig.get_facecolor(),
                dpi=110, bbox_inches="tight")
    buf.seek(0)
    b64 = base64.b64encode(buf.read()).decode()
    buf.close()
    return b64


def get_web_charts(
    inputs: SavingsInputs,
    results: SavingsResults,
    team: List[TeamSizeRow],
    sweep: Optional[SweepResult],
) -> List[str]:
    """Return base64-encoded PNG chart images for web embedding.

    Returns up to 4 charts:
      [0] Time saved per period
      [1] Money saved per period
      [2] Savings vs team size
      [3] Team size x calls heatmap (only when *sweep* is given)

    Returns no charts when any value is inf, NaN or too large for the
    axes to scale.
    """
    if not _chartable(results, team, sweep):
        return []

    chart_figs = [
        chart_time(results),
        chart_money(results),
        chart_team_size(team, inputs),
    ]
    if sweep is not None:
        chart_figs.append(chart_sweep(sweep))

    try:
        images = [figure_to_base64(f) for f in chart_figs]
    finally:
        for f in chart_figs:
            plt.close(f)
    return images
