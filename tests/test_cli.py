from __future__ import annotations

import builtins
import math

import pytest

import cli
from cli import (
    compute_display_data,
    format_count,
    format_currency,
    format_factor,
    format_hours,
    format_time,
)
from estimator import SavingsInputs, estimate_savings, team_size_table

NBSP = "\u00a0"


# ── Formatting ───────────────────────────────────────────────────────

@pytest.mark.parametrize("minutes,expected", [
    (75, "1 godz 15 min"),
    (45, "45 min"),
    (120, "2 godz"),
    (0, "0 min"),
    (1275, "21 godz 15 min"),
    (30.5, "31 min"),
    (119.7, "2 godz"),
    (-90, "-1 godz 30 min"),
])
def test_format_time(minutes, expected):
    assert format_time(minutes) == expected


@pytest.mark.parametrize("value,expected", [
    (10_625, f"10{NBSP}625{NBSP}zł"),
    (552_500, f"552{NBSP}500{NBSP}zł"),
    (4_250, f"4250{NBSP}zł"),
    (0, f"0{NBSP}zł"),
    (99.5, f"100{NBSP}zł"),
    (1_234_567.4, f"1{NBSP}234{NBSP}567{NBSP}zł"),
    (-1_500, f"-1500{NBSP}zł"),
])
def test_format_currency(value, expected):
    assert format_currency(value) == expected


def test_format_hours_and_counts():
    assert format_hours(1275) == "21 godz"
    assert format_hours(0) == "0 godz"
    assert format_count(433) == "433"
    assert format_count(21_650) == f"21{NBSP}650"
    assert format_factor(4.33) == "4,33"
    assert format_factor(4.0) == "4"


def test_non_finite_amounts_render_as_symbols():
    assert format_currency(math.inf) == f"\u221e{NBSP}zł"
    assert format_currency(-math.inf) == f"-\u221e{NBSP}zł"
    assert format_time(math.inf) == "\u221e godz"
    assert format_hours(math.inf) == "\u221e godz"
    assert format_count(math.inf) == "\u221e"
    assert format_count(float("nan")) == "\u2013"


def test_format_count_keeps_big_ints_exact():
    assert format_count(10 ** 20) == f"100{NBSP}000{NBSP}000{NBSP}000{NBSP}000{NBSP}000{NBSP}000"


# ── Display data ─────────────────────────────────────────────────────

def test_display_data_reference_scenario(base_inputs):
    res = estimate_savings(base_inputs)
    d = compute_display_data(base_inputs, res, team_size_table(base_inputs))
    assert d["calls_month"] == "433"
    assert d["saved_week"] == "21 godz 15 min"
    assert d["money_week"] == f"10{NBSP}625{NBSP}zł"
    assert d["money_year"] == f"552{NBSP}500{NBSP}zł"
    assert d["weeks_per_month_label"] == "4,33"
    current = [r for r in d["team"] if r["current"]]
    assert len(current) == 1 and current[0]["salespeople"] == 5


def test_display_data_without_team(base_inputs):
    d = compute_display_data(base_inputs, estimate_savings(base_inputs))
    assert d["team"] == []


# ── Terminal interface ───────────────────────────────────────────────

def _feed(monkeypatch, answers):
    it = iter(answers)
    monkeypatch.setattr(builtins, "input", lambda prompt="": next(it))


def test_collect_inputs_defaults(monkeypatch):
    _feed(monkeypatch, [""] * 5)
    assert cli.collect_inputs() == SavingsInputs()


def test_collect_inputs_parses_and_keeps_default_on_garbage(monkeypatch, capsys):
    _feed(monkeypatch, ["8", "abc", "0", "12.5", ""])
    inputs = cli.collect_inputs()
    assert inputs == SavingsInputs(salespeople=8, calls_per_week=20, call_duration=0,
                                   crm_time=12, hourly_cost=100)
    assert "Niepoprawna liczba, zostaje 20." in capsys.readouterr().out


def test_run_cli_prints_results(monkeypatch, capsys):
    _feed(monkeypatch, [""] * 5)
    cli.run_cli()
    out = capsys.readouterr().out
    assert "WYNIKI" in out
    assert "21 godz 15 min" in out
    assert f"10{NBSP}625{NBSP}zł" in out
    assert "OSZCZĘDNOŚCI A WIELKOŚĆ ZESPOŁU" in out


def test_run_cli_flat_month(monkeypatch, capsys):
    _feed(monkeypatch, [""] * 5)
    cli.run_cli(weeks_per_month=4)
    out = capsys.readouterr().out
    assert f"42{NBSP}500{NBSP}zł" in out


def test_collect_inputs_saturates_huge_answer(monkeypatch):
    _feed(monkeypatch, ["9" * 5000, "", "", "", ""])
    assert cli.collect_inputs().salespeople == math.inf


def test_run_cli_with_huge_answer(monkeypatch, capsys):
    _feed(monkeypatch, ["9" * 5000, "", "", "", ""])
    cli.run_cli()
    out = capsys.readouterr().out
    assert f"\u221e{NBSP}zł" in out
    assert "WYNIKI" in out


def test_collect_inputs_whitespace_keeps_default(monkeypatch):
    _feed(monkeypatch, ["   ", "", "", "", ""])
    assert cli.collect_inputs().salespeople == 5
