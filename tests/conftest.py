from __future__ import annotations

import pytest

from estimator import SavingsInputs


@pytest.fixture
def base_inputs() -> SavingsInputs:
    return SavingsInputs(salespeople=5, calls_per_week=20, call_duration=30,
                         crm_time=15, hourly_cost=100)
