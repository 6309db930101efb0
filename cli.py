"""
CLI interface and shared display-data computation for the
CallOS savings calculator.
"""

from __future__ import annotations

import math
import sys
from typing import Any, Dict, List, Optional

import config as cfg
from estimator import (
    SavingsInputs,
    SavingsResults,
    TeamSizeRow,
    coerce_count,
    estimate_savings,
    team_size_table,
)


# ═══════════════════════════════════════════════════════════════════
# Formatting helpers
# ═══════════════════════════════════════════════════════════════════

def _round_half_up(val: float) -> int:
    """Round half away from zero (Python's round() goes to even)."""
    if isinstance(val, int):
        return val
    return int(math.copysign(math.floor(abs(val) + 0.5), val))


def _non_finite(val: float) -> Optional[str]:
    """Symbol for an inf or NaN amount, None for an ordinary number."""
    if math.isnan(val):
        return "\u2013"
    if math.isinf(val):
        return "-\u221e" if val < 0 else "\u221e"
    return None


def _group(n: int) -> str:
    digits = str(abs(n))
    if abs(n) < cfg.GROUPING_MIN:
        return digits
    return f"{abs(n):,}".replace(",", cfg.GROUP_SEPARATOR)


def format_currency(val: float) -> str:
    """Format a PLN amount with no decimals, e.g. ``10 625 zł``."""
    special = _non_finite(val)
    if special is not None:
        return f"{special}\u00a0{cfg.CURRENCY_SUFFIX}"
    n = _round_half_up(val)
    sign = "-" if n < 0 else ""
    return f"{sign}{_group(n)}\u00a0{cfg.CURRENCY_SUFFIX}"


def format_time(minutes: float) -> str:
    """Format minutes as ``H godz M min``, dropping a zero part.

    Rounds to whole minutes first, so 119.7 becomes ``2 godz``.
    """
    special = _non_finite(minutes)
    if special is not None:
        return f"{special} {cfg.HOURS_LABEL}"
    total = _round_half_up(minutes)
    sign = "-" if total < 0 else ""
    hours, mins = divmod(abs(total), cfg.MINUTES_PER_HOUR)
    if hours == 0:
        return f"{sign}{mins} {cfg.MINUTES_LABEL}"
    if mins == 0:
        return f"{sign}{hours} {cfg.HOURS_LABEL}"
    return f"{sign}{hours} {cfg.HOURS_LABEL} {mins} {cfg.MINUTES_LABEL}"


def format_hours(minutes: float) -> str:
    """Whole hours, e.g. ``21 godz``."""
    special = _non_finite(minutes)
    if special is not None:
        return f"{special} {cfg.HOURS_LABEL}"
    return f"{_round_half_up(minutes / cfg.MINUTES_PER_HOUR)} {cfg.HOURS_LABEL}"


def format_count(val: float) -> str:
    special = _non_finite(val)
    if special is not None:
        return special
    return _group(_round_half_up(val))


def format_factor(wpm: float) -> str:
    return f"{wpm:g}".replace(".", ",")


# ═══════════════════════════════════════════════════════════════════
# Input collection (CLI)
# ═══════════════════════════════════════════════════════════════════

PROMPTS = [
    ("salespeople", "Ilość handlowców"),
    ("calls_per_week", "Ilość rozmów tygodniowo (na handlowca)"),
    ("call_duration", "Czas jednej rozmowy (minuty)"),
    ("crm_time", "Czas na uzupełnienie CRM i draft (minuty)"),
    ("hourly_cost", "Koszt godziny handlowca (PLN)"),
]


def _prompt_count(label: str, default: int) -> int:
    raw = input(f"  {label} [{default}]: ")
    if not raw.strip():
        return default
    val = coerce_count(raw, -1)
    if val < 0:
        print(f"    Niepoprawna liczba, zostaje {default}.")
        return default
    return val


def collect_inputs() -> SavingsInputs:
    """Prompt the user for all calculator inputs."""
    print("\n  Podaj informacje o swojej firmie (Enter = wartość domyślna):\n")
    values = {
        name: _prompt_count(label, cfg.DEFAULT_INPUTS[name])
        for name, label in PROMPTS
    }
    return SavingsInputs(**values)


# ═══════════════════════════════════════════════════════════════════
# Shared display-data computation (used by CLI and web app)
# ═══════════════════════════════════════════════════════════════════

def compute_display_data(
    inputs: SavingsInputs,
    results: SavingsResults,
    team: Optional[List[TeamSizeRow]] = None,
) -> Dict[str, Any]:
    """Extract every formatted value the results panel shows."""
    return {
        # Inputs echo
        "salespeople": inputs.salespeople,
        "calls_per_week": inputs.calls_per_week,
        "call_duration": inputs.call_duration,
        "crm_time": inputs.crm_time,
        "hourly_cost": inputs.hourly_cost,
        "weeks_per_month": results.weeks_per_month,
        "weeks_per_month_label": format_factor(results.weeks_per_month),
        # Volume
        "calls_month": format_count(results.calls_month),
        "calls_week": format_count(results.calls_week),
        "manual_month": format_time(results.manual_minutes_month),
        "manual_week": format_time(results.manual_minutes_week),
        # Time saved
        "saved_week": format_time(results.saved_minutes_week),
        "saved_month": format_time(results.saved_minutes_month),
        "saved_year": format_time(results.saved_minutes_year),
        "saved_month_hours": format_hours(results.saved_minutes_month),
        # Money saved
        "money_week": format_currency(results.money_saved_week),
        "money_month": format_currency(results.money_saved_month),
        "money_year": format_currency(results.money_saved_year),
        # Team-size table
        "team": [
            {
                "salespeople": r.salespeople,
                "saved_month": format_time(r.saved_minutes_month),
                "money_month": format_currency(r.money_saved_month),
                "money_year": format_currency(r.money_saved_year),
                "current": r.salespeople == inputs.salespeople,
            }
            for r in (team or [])
        ],
    }


# ═══════════════════════════════════════════════════════════════════
# Box-drawing CLI output
# ═══════════════════════════════════════════════════════════════════

W = 72  # box width (characters)


def _box_top(title: str) -> str:
    inner = W - 2
    bar = "═" * inner
    return (
        f"╔{bar}╗\n"
        f"║  {title:<{inner - 2}}║\n"
        f"╠{bar}╣"
    )


def _box_line(text: str = "") -> str:
    inner = W - 4
    if len(text) > inner:
        text = text[:inner]
    return f"║  {text:<{inner}}║"


def _box_row(label: str, value: str, lw: int = 40) -> str:
    return _box_line(f"{label:<{lw}}{value}")


def _box_bottom() -> str:
    return f"╚{'═' * (W - 2)}╝"


def _print_section(title: str, rows: List[str]) -> None:
    """Print a titled box with content rows."""
    print(_box_top(title))
    for r in rows:
        print(r)
    print(_box_bottom())
    print()


# ═══════════════════════════════════════════════════════════════════
# CLI Section Printers
# ═══════════════════════════════════════════════════════════════════

def _print_inputs(d: Dict[str, Any]) -> None:
    rows = [
        _box_row("Ilość handlowców", format_count(d["salespeople"])),
        _box_row("Rozmowy tygodniowo / handlowiec", format_count(d["calls_per_week"])),
        _box_row("Czas jednej rozmowy", f"{format_count(d['call_duration'])} min"),
        _box_row("Czas na CRM i draft / rozmowa", f"{format_count(d['crm_time'])} min"),
        _box_row("Koszt godziny handlowca", format_currency(d["hourly_cost"])),
        _box_row("Tygodni w miesiącu", d["weeks_per_month_label"]),
    ]
    _print_section("DANE WEJŚCIOWE", rows)


def _print_results(d: Dict[str, Any]) -> None:
    rows = [
        _box_row("Liczba rozmów miesięcznie", d["calls_month"]),
        _box_row("Czas wprowadzania do CRM (miesięcznie)", d["manual_month"]),
        _box_line(),
        _box_line("Oszczędność czasu"),
        _box_row("  / tydzień", d["saved_week"]),
        _box_row("  / miesiąc", d["saved_month"]),
        _box_row("  / rok", d["saved_year"]),
        _box_row("  (godzin miesięcznie)", d["saved_month_hours"]),
        _box_line(),
        _box_line("Oszczędność finansowa"),
        _box_row("  / tydzień", d["money_week"]),
        _box_row("  / miesiąc", d["money_month"]),
        _box_row("  / rok", d["money_year"]),
    ]
    _print_section("WYNIKI", rows)


def _print_team_table(d: Dict[str, Any]) -> None:
    h1 = f"{'Handlowcy':>9}  {'Czas / mies.':>16}  {'PLN / mies.':>14}  {'PLN / rok':>14}"
    rows = [_box_line(h1), _box_line("─" * (W - 6))]
    for r in d["team"]:
        marker = " <<" if r["current"] else ""
        rows.append(_box_line(
            f"{r['salespeople']:>9}  "
            f"{r['saved_month']:>16}  "
            f"{r['money_month']:>14}  "
            f"{r['money_year']:>14}"
            f"{marker}"
        ))
    _print_section("OSZCZĘDNOŚCI A WIELKOŚĆ ZESPOŁU", rows)


# ═══════════════════════════════════════════════════════════════════
# Main CLI entry point
# ═══════════════════════════════════════════════════════════════════

def run_cli(weeks_per_month: float = cfg.WEEKS_PER_MONTH) -> None:
    """Run the full CLI workflow."""
    # Ensure box-drawing characters render on Windows
    try:
        sys.stdout.reconfigure(encoding="utf-8")
    except (AttributeError, OSError):
        pass
    print()
    print("=" * W)
    print("  Kalkulator Oszczędności CallOS")
    print("=" * W)

    inputs = collect_inputs()
    results = estimate_savings(inputs, weeks_per_month)
    team = team_size_table(inputs, weeks_per_month=weeks_per_month)
    d = compute_display_data(inputs, results, team)

    print()
    _print_inputs(d)
    _print_results(d)
    _print_team_table(d)
    print(f"  Zobacz jak to działa - demo 10 min: {cfg.DEMO_URL}\n")


if __name__ == "__main__":
    run_cli()
