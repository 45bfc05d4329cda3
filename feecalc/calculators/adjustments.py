"""
Adjustment factors and discount.

Factor selections are filtered against the table's allowed set (stale names
from a previous category choice are dropped silently), folded into one
multiplier, and applied before the discount:

    final = basic x multiplier x (1 - discount / 100)

Discounts are not clamped: >100 gives a negative fee, <0 inflates it.
"""

import logging
from typing import Iterable, List, Tuple

from ..guideline.dataset import DEFAULT_DATASET
from ..guideline.models import AdjustmentFactor, GuidelineDataset

logger = logging.getLogger(__name__)


class AdjustmentResolver:
    """Resolves factor selections for a table against its factor set."""

    def __init__(self, dataset: GuidelineDataset = None):
        self.dataset = dataset or DEFAULT_DATASET

    def factor_options(self, table_id: str) -> Tuple[AdjustmentFactor, ...]:
        """Factors a caller may select for this table. Tables sharing a set get the same list."""
        return self.dataset.factors_for_table(table_id)

    def resolve_factors(self, table_id: str, requested: Iterable[str]) -> List[str]:
        """
        Keep the requested names that exist in the table's factor set.
        Request order is kept and repeats collapse (the selection is a set).
        """
        allowed = {f.name for f in self.factor_options(table_id)}
        resolved = []
        for name in requested or []:
            if name in allowed and name not in resolved:
                resolved.append(name)
        dropped = [n for n in (requested or []) if n not in allowed]
        if dropped:
            logger.debug("Table %s: ignoring unknown factors %s", table_id, dropped)
        return resolved

    def compound_multiplier(self, table_id: str, names: Iterable[str]) -> float:
        """Product of the named multipliers, starting at 1.0. Unknown names contribute nothing."""
        by_name = {f.name: f.multiplier for f in self.factor_options(table_id)}
        multiplier = 1.0
        for name in names or []:
            if name in by_name:
                multiplier *= by_name[name]
        return multiplier

    @staticmethod
    def apply_discount(basic_fee: float, multiplier: float, discount_percent: float) -> float:
        return basic_fee * multiplier * (1 - discount_percent / 100)
