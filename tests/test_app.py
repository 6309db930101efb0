from __future__ import annotations

import re

import pytest

import config as cfg
from app import app, parse_form
from estimator import SavingsInputs

NBSP = "\u00a0"


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


def test_parse_form_reads_fields():
    inputs, wpm = parse_form({
        "salespeople": "10", "calls_per_week": "30", "call_duration": "20",
        "crm_time": "12", "hourly_cost": "80", "wpm": "4",
    })
    assert inputs == SavingsInputs(10, 30, 20, 12, 80)
    assert wpm == 4


def test_parse_form_missing_fields_fall_back_to_defaults():
    inputs, wpm = parse_form({})
    assert inputs == SavingsInputs()
    assert wpm == cfg.WEEKS_PER_MONTH


def test_parse_form_empty_means_zero_and_garbage_keeps_prior():
    inputs, _ = parse_form({
        "salespeople": "", "prev_salespeople": "9",
        "calls_per_week": "x", "prev_calls_per_week": "33",
        "crm_time": "7.9",
    })
    assert inputs.salespeople == 0
    assert inputs.calls_per_week == 33
    assert inputs.crm_time == 7


def test_parse_form_whitespace_keeps_prior():
    inputs, _ = parse_form({"salespeople": "   ", "prev_salespeople": "9"})
    assert inputs.salespeople == 9


def test_parse_form_rejects_bad_factor():
    with pytest.raises(ValueError):
        parse_form({"wpm": "-1"})


def test_get_renders_defaults(client):
    resp = client.get("/")
    assert resp.status_code == 200
    html = resp.get_data(as_text=True)
    assert "Kalkulator Oszczędności CallOS" in html
    assert f"10{NBSP}625{NBSP}zł / tydzień" in html
    assert "21 godz 15 min / tydzień" in html
    assert html.count("data:image/png;base64,") == 4
    assert "Znasz to?" in html


def test_post_recomputes(client):
    resp = client.post("/", data={
        "salespeople": "2", "calls_per_week": "10", "call_duration": "30",
        "crm_time": "30", "hourly_cost": "120", "wpm": "4.33",
    })
    assert resp.status_code == 200
    html = resp.get_data(as_text=True)
    # 20 calls x 30 min x 0.85 = 510 min = 8.5 h; 8.5 x 120 x 2 = 2040
    assert "8 godz 30 min / tydzień" in html
    assert f"2040{NBSP}zł / tydzień" in html
    assert 'name="prev_salespeople" value="2"' in html


def test_post_zero_blanks_input_and_zeroes_results(client):
    resp = client.post("/", data={"salespeople": "", "wpm": "4"})
    html = resp.get_data(as_text=True)
    assert resp.status_code == 200
    assert re.search(r'name="salespeople"\s+value=""', html)
    assert f"0{NBSP}zł / rok" in html
    assert "0 min / miesiąc" in html


def test_post_garbage_keeps_previous_value(client):
    resp = client.post("/", data={"salespeople": "lots", "prev_salespeople": "7"})
    html = resp.get_data(as_text=True)
    assert 'name="prev_salespeople" value="7"' in html


def test_post_bad_factor_is_400(client):
    resp = client.post("/", data={"wpm": "0"})
    assert resp.status_code == 400
    assert "Niepoprawne dane" in resp.get_data(as_text=True)


@pytest.mark.parametrize("digits", [161, 401])
def test_post_huge_team_renders_infinity(client, digits):
    resp = client.post("/", data={"salespeople": "1" + "0" * (digits - 1), "wpm": "4.33"})
    assert resp.status_code == 200
    html = resp.get_data(as_text=True)
    assert f"∞{NBSP}zł / tydzień" in html
    assert html.count("data:image/png;base64,") == 0
