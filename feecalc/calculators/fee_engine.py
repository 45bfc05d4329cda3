"""
Basic fee from a guideline table: bracket lookup plus a two-part fee.

    basic = primary_fee + (cost - bracket.min) * secondary_rate / 100

Costs under the guideline minimum, or outside every bracket, get zero fees and
an advisory note instead of an error.
"""

import logging
from typing import Optional

from ..guideline.ecsa_2025 import MIN_PROJECT_VALUE
from ..guideline.models import FeeBracket, TableDefinition
from ..schemas import BasicFee

logger = logging.getLogger(__name__)

OUTSIDE_BRACKETS_NOTE = "Cost falls outside of the configured brackets."


def below_minimum_note(minimum: float) -> str:
    return (
        f"Projects under R{minimum:,.0f} should be negotiated on a lump sum "
        f"or time basis."
    )


def find_bracket(table: TableDefinition, cost: float) -> Optional[FeeBracket]:
    """First bracket with min <= cost < max. A boundary cost belongs to the upper bracket."""
    for bracket in table.brackets:
        if bracket.contains(cost):
            return bracket
    return None


def compute_basic_fee(table: TableDefinition, allocated_cost: float,
                      minimum: float = MIN_PROJECT_VALUE) -> BasicFee:
    if allocated_cost < minimum:
        logger.info(
            "Table %s: cost %.2f below guideline minimum %.2f", table.id, allocated_cost, minimum,
        )
        return BasicFee(advisory_note=below_minimum_note(minimum))

    bracket = find_bracket(table, allocated_cost)
    if bracket is None:
        logger.info("Table %s: cost %.2f outside configured brackets", table.id, allocated_cost)
        return BasicFee(advisory_note=OUTSIDE_BRACKETS_NOTE)

    primary = bracket.primary_fee
    secondary = (allocated_cost - bracket.min) * (bracket.secondary_rate / 100)
    return BasicFee(
        primary_fee=primary,
        secondary_fee=secondary,
        basic_fee=primary + secondary,
    )
