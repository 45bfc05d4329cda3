"""
Guideline dataset schema.

Immutable reference data: fee tables with their brackets, adjustment factor
sets, stage weight sets and the table -> set mappings. Built once by
dataset.load_dataset() and shared read-only by every calculation.
"""

import math
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple

from pydantic import BaseModel, model_validator


class FeeBracket(BaseModel):
    """
    Cost range [min, max) with a flat primary fee and a marginal rate (%).
    max=None means the bracket is unbounded above.
    """
    min: float
    max: Optional[float] = None
    primary_fee: float
    secondary_rate: float

    class Config:
        frozen = True

    @property
    def upper(self) -> float:
        return math.inf if self.max is None else self.max

    def contains(self, cost: float) -> bool:
        return self.min <= cost < self.upper


class TableDefinition(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    brackets: Tuple[FeeBracket, ...]

    class Config:
        frozen = True


class AdjustmentFactor(BaseModel):
    name: str
    multiplier: float
    note: Optional[str] = None

    class Config:
        frozen = True


class StageWeight(BaseModel):
    name: str
    percentage: float

    class Config:
        frozen = True


class StageWeightSet(BaseModel):
    key: str
    stages: Tuple[StageWeight, ...]

    class Config:
        frozen = True

    def total_percentage(self) -> float:
        return sum(s.percentage for s in self.stages)

    def percentage_for(self, stage_name: str) -> Optional[float]:
        for stage in self.stages:
            if stage.name == stage_name:
                return stage.percentage
        return None


MAPPING_FIELDS = ("tables", "factor_sets", "table_factor_sets", "stage_sets", "table_stage_sets")


class GuidelineDataset(BaseModel):
    """
    The full guideline. Mappings keep authoring order, which is also the
    order categories are evaluated and reported in.
    """
    name: str
    reference: str = ""
    minimum_project_value: float
    tables: Mapping[str, TableDefinition]
    factor_sets: Mapping[str, Tuple[AdjustmentFactor, ...]]
    table_factor_sets: Mapping[str, str]
    stage_sets: Mapping[str, StageWeightSet]
    table_stage_sets: Mapping[str, str]

    class Config:
        frozen = True

    @model_validator(mode="after")
    def _read_only_mappings(self):
        # frozen only blocks attribute assignment; the dicts need wrapping too
        for field in MAPPING_FIELDS:
            object.__setattr__(self, field, MappingProxyType(dict(getattr(self, field))))
        return self

    def iter_tables(self) -> List[TableDefinition]:
        return list(self.tables.values())

    def get_table(self, table_id: str) -> Optional[TableDefinition]:
        return self.tables.get(table_id)

    def factors_for_table(self, table_id: str) -> Tuple[AdjustmentFactor, ...]:
        """Allowed factors for a table; empty for an unknown table."""
        key = self.table_factor_sets.get(table_id)
        if key is None:
            return ()
        return self.factor_sets.get(key, ())

    def stage_set_for_table(self, table_id: str) -> Optional[StageWeightSet]:
        key = self.table_stage_sets.get(table_id)
        if key is None:
            return None
        return self.stage_sets.get(key)
