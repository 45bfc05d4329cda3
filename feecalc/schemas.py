from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from .formatting import parse_number

InputMethod = Literal["total", "category"]


class CalculationInput(BaseModel):
    """
    One calculation request. With method "total" each table gets
    total_cost x percentage / 100; with "category" the direct per-table cost.
    Percentages need not sum to 100; discounts are not range-checked.
    """
    method: InputMethod = "total"
    total_cost: float = 0.0
    percentages_by_table: Dict[str, float] = Field(default_factory=dict)
    costs_by_table: Dict[str, float] = Field(default_factory=dict)
    discounts_by_table: Dict[str, float] = Field(default_factory=dict)
    selected_factors_by_table: Dict[str, List[str]] = Field(default_factory=dict)

    @field_validator("total_cost", mode="before")
    @classmethod
    def _parse_total_cost(cls, value):
        return parse_number(value)

    @field_validator("percentages_by_table", "costs_by_table", "discounts_by_table", mode="before")
    @classmethod
    def _parse_table_numbers(cls, value):
        if isinstance(value, dict):
            return {str(k): parse_number(v) for k, v in value.items()}
        return value

    @field_validator("selected_factors_by_table", mode="before")
    @classmethod
    def _table_keys_as_str(cls, value):
        if isinstance(value, dict):
            return {str(k): v for k, v in value.items()}
        return value

    def allocation_percentage_total(self) -> float:
        """Sum of the per-table percentages (the form expects ~100 for method 'total')."""
        return sum(self.percentages_by_table.values())


class BasicFee(BaseModel):
    primary_fee: float = 0.0
    secondary_fee: float = 0.0
    basic_fee: float = 0.0
    advisory_note: Optional[str] = None


class FeeComputation(BaseModel):
    table_id: str
    table_name: str
    allocated_cost: float
    primary_fee: float
    secondary_fee: float
    basic_fee: float
    applied_factor_names: List[str] = Field(default_factory=list)
    compound_multiplier: float = 1.0
    adjusted_fee: float  # basic_fee x compound_multiplier, before discount
    discount_percent: float = 0.0
    final_fee: float
    advisory_note: Optional[str] = None


class CalculationTotals(BaseModel):
    undiscounted_sum: float = 0.0
    discounted_sum: float = 0.0
    overall_discount_percent: float = 0.0


class CalculationResult(BaseModel):
    categories: Dict[str, FeeComputation] = Field(default_factory=dict)
    stage_breakdowns: Dict[str, Dict[str, float]] = Field(default_factory=dict)
    totals: CalculationTotals = Field(default_factory=CalculationTotals)
