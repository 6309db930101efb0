"""
Savings estimator for the CallOS calculator.

Turns the five form inputs into the time and money a sales team gets
back once call notes, CRM fields and follow-up drafts are filled in
automatically. Everything here is plain arithmetic; the same helper
works on scalars and on numpy arrays so the sweep grid can be
vectorised.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, replace
from typing import Optional

import numpy as np

import config as cfg


# ─── Data Classes ─────────────────────────────────────────────────────

@dataclass
class SavingsInputs:
    """User inputs for the calculator."""

    salespeople: int = cfg.DEFAULT_INPUTS["salespeople"]        # sales agents
    calls_per_week: int = cfg.DEFAULT_INPUTS["calls_per_week"]  # per agent
    call_duration: int = cfg.DEFAULT_INPUTS["call_duration"]    # minutes, not used in the maths
    crm_time: int = cfg.DEFAULT_INPUTS["crm_time"]              # manual minutes per call
    hourly_cost: int = cfg.DEFAULT_INPUTS["hourly_cost"]        # PLN per agent hour


@dataclass(frozen=True)
class SavingsResults:
    """Everything derived from one set of inputs."""

    weeks_per_month: float

    calls_week: float
    calls_month: float
    calls_year: float

    manual_minutes_week: float
    manual_minutes_month: float
    manual_minutes_year: float

    saved_minutes_week: float
    saved_minutes_month: float
    saved_minutes_year: float

    saved_hours_week: float
    saved_hours_month: float
    saved_hours_year: float

    money_saved_week: float
    money_saved_month: float
    money_saved_year: float


@dataclass
class TeamSizeRow:
    """One row of the team-size table."""

    salespeople: int
    saved_minutes_month: float
    money_saved_month: float
    money_saved_year: float


@dataclass
class SweepResult:
    """Monthly money saved over a salespeople x calls-per-week grid."""

    salespeople: np.ndarray        # (n_salespeople,)
    calls_per_week: np.ndarray     # (n_calls,)
    money_saved_month: np.ndarray  # (n_salespeople, n_calls)
    saved_hours_month: np.ndarray  # (n_salespeople, n_calls)


# ─── Input coercion ───────────────────────────────────────────────────

_LEADING_INT = re.compile(r"^\s*\+?([0-9]+)")

# Longer digit runs exceed the float range anyway.
_MAX_DIGITS = 308


def coerce_count(raw: Optional[str], prior: int) -> int:
    """Turn raw form text into a non-negative whole number.

    Only ``""`` and ``"0"`` give 0. Anything else is read up to its first
    non-digit, so ``"12.7"`` gives 12 and ``"40 min"`` gives 40. Text
    with no leading ASCII digits, whitespace-only text, or a negative
    number leaves *prior* in place. Refusing a leading minus is a choice
    of the form only; ``estimate_savings`` still accepts negatives.
    Counts too long for a float saturate to ``math.inf``.
    """
    if raw is None:
        return prior
    text = str(raw)
    if text in ("", "0"):
        return 0
    m = _LEADING_INT.match(text)
    if m is None:
        return prior
    digits = m.group(1).lstrip("0") or "0"
    if len(digits) > _MAX_DIGITS:
        return math.inf
    return int(digits)


def resolve_weeks_per_month(value) -> float:
    """Validate a weeks-per-month factor.

    Raises
    ------
    ValueError
        If *value* is not a positive finite number.
    """
    try:
        factor = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Weeks per month must be a number, got {value!r}") from None
    if not math.isfinite(factor) or factor <= 0:
        raise ValueError(f"Weeks per month must be positive, got {value!r}")
    return factor


# ─── Core arithmetic ──────────────────────────────────────────────────

def _as_float(value) -> float:
    """Float view of an input; ints past the float range become +-inf."""
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def _weekly(salespeople, calls_per_week, crm_time, hourly_cost):
    """Weekly calls, manual minutes, saved minutes and money saved.

    Works elementwise, so numpy arrays broadcast the same way scalars
    multiply.
    """
    calls = salespeople * calls_per_week
    manual = calls * crm_time
    saved = manual * cfg.AUTOMATION_EFFICIENCY
    saved_hours = saved / cfg.MINUTES_PER_HOUR
    money = saved_hours * hourly_cost * salespeople
    return calls, manual, saved, money


def estimate_savings(
    inputs: SavingsInputs,
    weeks_per_month: float = cfg.WEEKS_PER_MONTH,
) -> SavingsResults:
    """Derive the full results record from *inputs*.

    The whole record is rebuilt on each call; nothing is cached.

    Parameters
    ----------
    inputs : SavingsInputs
        Current form values. ``call_duration`` is carried but unused.
    weeks_per_month : float
        Factor scaling weekly figures to monthly ones. Defaults to the
        4.33 average; pass ``cfg.WEEKS_PER_MONTH_FLAT`` for 4.

    Returns
    -------
    SavingsResults
    """
    wpm = resolve_weeks_per_month(weeks_per_month)
    wpy = cfg.WEEKS_PER_YEAR

    calls, manual, saved, money = _weekly(
        _as_float(inputs.salespeople), _as_float(inputs.calls_per_week),
        _as_float(inputs.crm_time), _as_float(inputs.hourly_cost),
    )
    saved_month = saved * wpm
    saved_year = saved * wpy

    return SavingsResults(
        weeks_per_month=wpm,
        calls_week=calls,
        calls_month=calls * wpm,
        calls_year=calls * wpy,
        manual_minutes_week=manual,
        manual_minutes_month=manual * wpm,
        manual_minutes_year=manual * wpy,
        saved_minutes_week=saved,
        saved_minutes_month=saved_month,
        saved_minutes_year=saved_year,
        saved_hours_week=saved / cfg.MINUTES_PER_HOUR,
        saved_hours_month=saved_month / cfg.MINUTES_PER_HOUR,
        saved_hours_year=saved_year / cfg.MINUTES_PER_HOUR,
        money_saved_week=money,
        money_saved_month=money * wpm,
        money_saved_year=money * wpy,
    )


# ─── Team-size table ──────────────────────────────────────────────────

def team_size_table(
    inputs: SavingsInputs,
    sizes: Optional[list[int]] = None,
    weeks_per_month: float = cfg.WEEKS_PER_MONTH,
) -> list[TeamSizeRow]:
    """Rerun the estimate for each team size, other inputs unchanged."""
    rows: list[TeamSizeRow] = []
    for size in sizes if sizes is not None else cfg.TEAM_SIZES:
        res = estimate_savings(replace(inputs, salespeople=size), weeks_per_month)
        rows.append(TeamSizeRow(
            salespeople=size,
            saved_minutes_month=res.saved_minutes_month,
            money_saved_month=res.money_saved_month,
            money_saved_year=res.money_saved_year,
        ))
    return rows


# ─── Parameter sweep ──────────────────────────────────────────────────

def parameter_sweep(
    inputs: SavingsInputs,
    salespeople: Optional[list[int]] = None,
    calls_per_week: Optional[list[int]] = None,
    weeks_per_month: float = cfg.WEEKS_PER_MONTH,
) -> SweepResult:
    """Monthly savings across a salespeople x calls-per-week grid.

    ``crm_time`` and ``hourly_cost`` come from *inputs*. The grid is
    evaluated in one broadcast pass.
    """
    wpm = resolve_weeks_per_month(weeks_per_month)
    sp = np.asarray(salespeople if salespeople is not None else cfg.SWEEP_SALESPEOPLE,
                    dtype=float)
    cw = np.asarray(calls_per_week if calls_per_week is not None else cfg.SWEEP_CALLS_PER_WEEK,
                    dtype=float)

    _, _, saved, money = _weekly(sp[:, None], cw[None, :],
                                 _as_float(inputs.crm_time), _as_float(inputs.hourly_cost))

    return SweepResult(
        salespeople=sp,
        calls_per_week=cw,
        money_saved_month=money * wpm,
        saved_hours_month=saved * wpm / cfg.MINUTES_PER_HOUR,
    )


# ─── Sanity checks ────────────────────────────────────────────────────

if __name__ == "__main__":
    res = estimate_savings(SavingsInputs(salespeople=5, calls_per_week=20,
                                         crm_time=15, hourly_cost=100))
    print("=== Default scenario (5 x 20 calls, 15 min CRM, 100 PLN/h) ===")
    print(f"  Calls per week:         {res.calls_week:,.0f}")
    print(f"  Manual minutes/week:    {res.manual_minutes_week:,.0f}")
    print(f"  Saved minutes/week:     {res.saved_minutes_week:,.2f}")
    print(f"  Money saved/week:       {res.money_saved_week:,.2f} PLN")
    print(f"  Money saved/month:      {res.money_saved_month:,.2f} PLN")
    print(f"  Money saved/year:       {res.money_saved_year:,.2f} PLN")

    checks = [
        ("weekly calls = 100", res.calls_week == 100),
        ("manual minutes = 1500", res.manual_minutes_week == 1500),
        ("saved minutes = 1275", res.saved_minutes_week == 1275),
        ("money/week = 10625", res.money_saved_week == 10_625),
        ("month = week x 4.33", res.money_saved_month == res.money_saved_week * 4.33),
        ("year = week x 52", res.money_saved_year == res.money_saved_week * 52),
    ]
    passed = 0
    for name, ok in checks:
        passed += ok
        print(f"  [{'PASS' if ok else 'FAIL'}] {name}")
    print(f"\n  {passed}/{len(checks)} checks passed")
