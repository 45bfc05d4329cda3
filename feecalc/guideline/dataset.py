"""
Guideline dataset loader.

Turns the plain-dict guideline (see ecsa_2025.py) into an immutable
GuidelineDataset and checks it once, at import time. A structurally broken
dataset is a startup error: GuidelineDatasetError aborts initialization
instead of surfacing later as per-calculation advisory notes.

Fatal:
    - table without brackets
    - bracket with max <= min, unsorted or overlapping brackets
    - open-ended bracket that is not the last one
    - missing / unknown factor-set or stage-set key for a table
    - duplicate factor names within a set
    - stage weights not summing to 100

Logged only (costs there get the "outside configured brackets" advisory):
    - gap between consecutive brackets
    - last bracket with a finite max
"""

import logging

from pydantic import ValidationError

from .ecsa_2025 import ECSA_2025
from .models import (
    AdjustmentFactor,
    FeeBracket,
    GuidelineDataset,
    StageWeight,
    StageWeightSet,
    TableDefinition,
)

logger = logging.getLogger(__name__)

STAGE_TOTAL_TOLERANCE = 1e-6


class GuidelineDatasetError(ValueError):
    """Raised when guideline reference data is structurally invalid."""


def load_dataset(raw: dict) -> GuidelineDataset:
    """
    Build and validate a GuidelineDataset from plain dicts.

    Args:
        raw: {
            "name": str,
            "reference": str,
            "minimum_project_value": number,
            "tables": {table_id: {"id", "name", "description"?, "brackets": [...]}},
            "factor_sets": {set_key: [{"name", "multiplier", "note"?}, ...]},
            "table_factor_sets": {table_id: set_key},
            "stage_sets": {set_key: [(stage_name, percentage), ...]},
            "table_stage_sets": {table_id: set_key},
        }

    Raises:
        GuidelineDatasetError
    """
    try:
        dataset = GuidelineDataset(
            name=raw["name"],
            reference=raw.get("reference", ""),
            minimum_project_value=raw["minimum_project_value"],
            tables={
                table_id: _build_table(table_id, table)
                for table_id, table in raw["tables"].items()
            },
            factor_sets={
                key: tuple(AdjustmentFactor(**f) for f in factors)
                for key, factors in raw.get("factor_sets", {}).items()
            },
            table_factor_sets=dict(raw.get("table_factor_sets", {})),
            stage_sets={
                key: StageWeightSet(
                    key=key,
                    stages=tuple(StageWeight(name=name, percentage=pct) for name, pct in stages),
                )
                for key, stages in raw.get("stage_sets", {}).items()
            },
            table_stage_sets=dict(raw.get("table_stage_sets", {})),
        )
    except KeyError as e:
        raise GuidelineDatasetError(f"Guideline dataset is missing required key {e}") from e
    except ValidationError as e:
        raise GuidelineDatasetError(f"Guideline dataset failed schema validation: {e}") from e

    validate_dataset(dataset)
    logger.debug(
        "Loaded guideline '%s': %d tables, %d factor sets, %d stage sets",
        dataset.name, len(dataset.tables), len(dataset.factor_sets), len(dataset.stage_sets),
    )
    return dataset


def _build_table(table_id: str, table: dict) -> TableDefinition:
    return TableDefinition(
        id=table.get("id", table_id),
        name=table["name"],
        description=table.get("description"),
        brackets=tuple(FeeBracket(**b) for b in table.get("brackets", [])),
    )


def validate_dataset(dataset: GuidelineDataset) -> None:
    """Cross-reference checks. Raises GuidelineDatasetError on the first fault."""
    for table_id, table in dataset.tables.items():
        if table.id != table_id:
            raise GuidelineDatasetError(
                f"Table keyed '{table_id}' declares id '{table.id}'"
            )
        _validate_brackets(table)

        factor_key = dataset.table_factor_sets.get(table_id)
        if factor_key is None:
            raise GuidelineDatasetError(f"Table {table_id} has no factor-set mapping")
        if factor_key not in dataset.factor_sets:
            raise GuidelineDatasetError(
                f"Table {table_id} maps to unknown factor set '{factor_key}'"
            )

        stage_key = dataset.table_stage_sets.get(table_id)
        if stage_key is None:
            raise GuidelineDatasetError(f"Table {table_id} has no stage-set mapping")
        if stage_key not in dataset.stage_sets:
            raise GuidelineDatasetError(
                f"Table {table_id} maps to unknown stage set '{stage_key}'"
            )

    for key, factors in dataset.factor_sets.items():
        names = [f.name for f in factors]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise GuidelineDatasetError(
                f"Factor set '{key}' repeats factor names: {', '.join(duplicates)}"
            )

    for key, stage_set in dataset.stage_sets.items():
        total = stage_set.total_percentage()
        if abs(total - 100.0) > STAGE_TOTAL_TOLERANCE:
            raise GuidelineDatasetError(
                f"Stage set '{key}' weights sum to {total}, expected 100"
            )


def _validate_brackets(table: TableDefinition) -> None:
    brackets = table.brackets
    if not brackets:
        raise GuidelineDatasetError(f"Table {table.id} has no fee brackets")

    for i, bracket in enumerate(brackets):
        if bracket.upper <= bracket.min:
            raise GuidelineDatasetError(
                f"Table {table.id} bracket {i} has max {bracket.max} <= min {bracket.min}"
            )
        if bracket.max is None and i != len(brackets) - 1:
            raise GuidelineDatasetError(
                f"Table {table.id} bracket {i} is open-ended but is not the last bracket"
            )

    for prev, curr in zip(brackets, brackets[1:]):
        if curr.min < prev.upper:
            raise GuidelineDatasetError(
                f"Table {table.id} brackets overlap or are unsorted at {curr.min:,.0f}"
            )
        if curr.min > prev.upper:
            logger.warning(
                "Table %s has a gap between %s and %s; costs in it fall outside the brackets",
                table.id, prev.upper, curr.min,
            )

    if brackets[-1].max is not None:
        logger.warning(
            "Table %s top bracket is capped at %s; larger costs fall outside the brackets",
            table.id, brackets[-1].max,
        )


DEFAULT_DATASET = load_dataset(ECSA_2025)
