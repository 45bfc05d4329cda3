"""
Aggregator: runs every fee table through the engine and totals the result.

Input: CalculationInput (method, total cost / per-table costs, percentages,
       discounts, selected factors)
Output: CalculationResult (categories, stage breakdowns, totals)

Sparse result: a table whose allocated cost is zero or unset is left out
entirely: no category, no stage breakdown, nothing added to the totals.
Categories never read each other's state, and totals are plain sums, so
evaluation order does not affect the result.
"""

import logging

from ..guideline.dataset import DEFAULT_DATASET
from ..guideline.models import GuidelineDataset, TableDefinition
from ..schemas import (
    CalculationInput,
    CalculationResult,
    CalculationTotals,
    FeeComputation,
)
from .adjustments import AdjustmentResolver
from .fee_engine import compute_basic_fee
from .stages import StageAllocator

logger = logging.getLogger(__name__)


class FeeCalculator:
    """
    Stateless between calls: holds only the read-only dataset and its helpers.
    Safe to share as a module-level singleton.
    """

    def __init__(self, dataset: GuidelineDataset = None):
        self.dataset = dataset or DEFAULT_DATASET
        self.adjustments = AdjustmentResolver(self.dataset)
        self.stages = StageAllocator(self.dataset)

    def allocated_cost(self, inputs: CalculationInput, table_id: str) -> float:
        if inputs.method == "total":
            percentage = inputs.percentages_by_table.get(table_id, 0.0)
            return inputs.total_cost * percentage / 100
        return inputs.costs_by_table.get(table_id, 0.0)

    def calculate_fees(self, inputs: CalculationInput) -> CalculationResult:
        result = CalculationResult()
        undiscounted = 0.0
        discounted = 0.0

        for table in self.dataset.iter_tables():
            cost = self.allocated_cost(inputs, table.id)
            if not cost:
                continue

            category = self._compute_category(table, cost, inputs)
            result.categories[table.id] = category
            result.stage_breakdowns[table.id] = self.stages.allocate_stages(
                table.id, category.final_fee,
            )
            undiscounted += category.adjusted_fee
            discounted += category.final_fee

        result.totals = CalculationTotals(
            undiscounted_sum=undiscounted,
            discounted_sum=discounted,
            overall_discount_percent=self._overall_discount(undiscounted, discounted),
        )
        logger.debug(
            "Calculated %d categories (%s method): undiscounted=%.2f discounted=%.2f",
            len(result.categories), inputs.method, undiscounted, discounted,
        )
        return result

    def _compute_category(self, table: TableDefinition, cost: float,
                          inputs: CalculationInput) -> FeeComputation:
        fee = compute_basic_fee(table, cost, self.dataset.minimum_project_value)

        requested = inputs.selected_factors_by_table.get(table.id, [])
        factor_names = self.adjustments.resolve_factors(table.id, requested)
        multiplier = self.adjustments.compound_multiplier(table.id, factor_names)
        discount = inputs.discounts_by_table.get(table.id, 0.0)
        final_fee = self.adjustments.apply_discount(fee.basic_fee, multiplier, discount)

        return FeeComputation(
            table_id=table.id,
            table_name=table.name,
            allocated_cost=cost,
            primary_fee=fee.primary_fee,
            secondary_fee=fee.secondary_fee,
            basic_fee=fee.basic_fee,
            applied_factor_names=factor_names,
            compound_multiplier=multiplier,
            adjusted_fee=fee.basic_fee * multiplier,
            discount_percent=discount,
            final_fee=final_fee,
            advisory_note=fee.advisory_note,
        )

    @staticmethod
    def _overall_discount(undiscounted: float, discounted: float) -> float:
        """Percentage saved across all categories. 0 when nothing was charged."""
        if undiscounted > 0:
            return (undiscounted - discounted) / undiscounted * 100
        return 0.0


def calculate_fees(inputs: CalculationInput,
                   dataset: GuidelineDataset = None) -> CalculationResult:
    """Convenience wrapper around FeeCalculator for one-off calls."""
    return FeeCalculator(dataset).calculate_fees(inputs)
