"""
Fee computation engine tests (bracket lookup + two-part basic fee).

Tests:
1-2.  Worked example from Table 1 (R1.5m)
3-5.  Below guideline minimum -> zero fee + advisory note
6-8.  Bracket boundaries (half-open intervals)
9-10. Outside configured brackets -> zero fee + advisory note
"""

import pytest

from feecalc.calculators.fee_engine import (
    OUTSIDE_BRACKETS_NOTE,
    below_minimum_note,
    compute_basic_fee,
    find_bracket,
)
from feecalc.guideline.dataset import DEFAULT_DATASET
from feecalc.guideline.ecsa_2025 import MIN_PROJECT_VALUE


def _table(table_id="1"):
    return DEFAULT_DATASET.get_table(table_id)


# ============================================================
# 1-2. Worked example
# ============================================================

def test_table_one_at_1_5_million():
    """Bracket 1.05m-2.1m: 178,500 + (1.5m - 1.05m) x 17% = 255,000."""
    fee = compute_basic_fee(_table("1"), 1_500_000)
    assert fee.primary_fee == 178_500
    assert fee.secondary_fee == pytest.approx(76_500)
    assert fee.basic_fee == pytest.approx(255_000)
    assert fee.advisory_note is None


def test_secondary_fee_only_on_excess_above_floor():
    """Table 1 at R12m: 1,386,000 + (12m - 10.5m) x 10.5%."""
    fee = compute_basic_fee(_table("1"), 12_000_000)
    assert fee.primary_fee == 1_386_000
    assert fee.secondary_fee == pytest.approx(157_500)
    assert fee.basic_fee == pytest.approx(1_543_500)


# ============================================================
# 3-5. Below minimum
# ============================================================

def test_below_minimum_returns_zero_with_note():
    fee = compute_basic_fee(_table("1"), 900_000)
    assert fee.basic_fee == 0
    assert fee.primary_fee == 0
    assert fee.secondary_fee == 0
    assert fee.advisory_note == "Projects under R1,000,000 should be negotiated on a lump sum or time basis."


def test_one_below_minimum_for_every_table():
    for table in DEFAULT_DATASET.iter_tables():
        fee = compute_basic_fee(table, MIN_PROJECT_VALUE - 1)
        assert fee.basic_fee == 0, table.id
        assert fee.advisory_note == below_minimum_note(MIN_PROJECT_VALUE)


def test_negative_cost_is_below_minimum():
    fee = compute_basic_fee(_table("3"), -5_000_000)
    assert fee.basic_fee == 0
    assert "lump sum" in fee.advisory_note


# ============================================================
# 6-8. Boundaries
# ============================================================

def test_cost_at_bracket_min_selects_that_bracket():
    """For every table and bracket, cost == min lands in that bracket, never the one before."""
    for table in DEFAULT_DATASET.iter_tables():
        for bracket in table.brackets:
            assert find_bracket(table, bracket.min) == bracket, f"table {table.id} @ {bracket.min}"


def test_cost_at_boundary_has_no_secondary_fee():
    fee = compute_basic_fee(_table("1"), 2_100_000)
    assert fee.primary_fee == 336_000
    assert fee.secondary_fee == 0
    assert fee.basic_fee == 336_000


def test_open_ended_top_bracket():
    fee = compute_basic_fee(_table("1"), 700_000_000)
    assert fee.primary_fee == 46_273_500
    assert fee.secondary_fee == pytest.approx(70_000_000 * 0.06)
    assert fee.advisory_note is None


# ============================================================
# 9-10. Outside brackets
# ============================================================

def test_between_minimum_and_lowest_bracket():
    """R1.02m clears the guideline minimum but the first bracket starts at R1.05m."""
    fee = compute_basic_fee(_table("1"), 1_020_000)
    assert fee.basic_fee == 0
    assert fee.advisory_note == OUTSIDE_BRACKETS_NOTE


def test_above_capped_table_seven():
    fee = compute_basic_fee(_table("7"), 700_000_000)
    assert fee.basic_fee == 0
    assert fee.advisory_note == OUTSIDE_BRACKETS_NOTE
    # Table 8 is open-ended at the same cost
    assert compute_basic_fee(_table("8"), 700_000_000).basic_fee > 0


def test_custom_minimum_threshold():
    fee = compute_basic_fee(_table("1"), 1_500_000, minimum=2_000_000)
    assert fee.basic_fee == 0
    assert fee.advisory_note == below_minimum_note(2_000_000)
