"""
Constants for the CallOS savings calculator.

All monetary values in PLN. Time values in minutes unless the name
says otherwise.
"""

# ── Automation assumptions ───────────────────────────────────────────
AUTOMATION_EFFICIENCY = 0.85     # share of manual CRM time removed

# ── Calendar conversion ──────────────────────────────────────────────
WEEKS_PER_MONTH = 4.33           # average month (52 / 12, rounded)
WEEKS_PER_MONTH_FLAT = 4         # "four weeks a month" factor
WEEKS_PER_MONTH_CHOICES = (WEEKS_PER_MONTH, WEEKS_PER_MONTH_FLAT)
WEEKS_PER_YEAR = 52
MINUTES_PER_HOUR = 60

# ── Form defaults ────────────────────────────────────────────────────
DEFAULT_INPUTS = {
    "salespeople": 5,
    "calls_per_week": 20,
    "call_duration": 30,
    "crm_time": 15,
    "hourly_cost": 100,
}

# ── Secondary tables ─────────────────────────────────────────────────
TEAM_SIZES = [1, 2, 3, 5, 10, 15, 20, 30, 50]
SWEEP_SALESPEOPLE = [1, 2, 5, 10, 20, 50]
SWEEP_CALLS_PER_WEEK = [5, 10, 20, 30, 40, 60]

# ── Locale ───────────────────────────────────────────────────────────
CURRENCY_SUFFIX = "zł"
GROUP_SEPARATOR = "\u00a0"       # pl-PL groups with a no-break space
GROUPING_MIN = 10_000            # pl-PL leaves 4-digit amounts ungrouped
HOURS_LABEL = "godz"
MINUTES_LABEL = "min"

DEMO_URL = "https://callos.sailes.tech"
