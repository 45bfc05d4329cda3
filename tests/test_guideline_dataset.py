"""
Guideline dataset tests: the shipped ECSA 2025 data and load-time validation.

Tests:
1-5.   Shipped dataset shape (tables, shared factor set, stage sums, brackets, read-only maps)
6-13.  Fatal dataset faults raise GuidelineDatasetError
14-15. Bracket gaps / capped top bracket only log a warning
"""

import copy
import logging

import pytest

from feecalc.guideline.dataset import (
    DEFAULT_DATASET,
    GuidelineDatasetError,
    load_dataset,
)
from feecalc.guideline.ecsa_2025 import ECSA_2025, MIN_PROJECT_VALUE


# --- Sample data builders ---

def _minimal_raw():
    """Smallest valid raw dataset: one table, one factor set, one stage set."""
    return {
        "name": "Test guideline",
        "reference": "Test gazette",
        "minimum_project_value": 1_000_000,
        "tables": {
            "T1": {
                "id": "T1",
                "name": "Test table",
                "brackets": [
                    {"min": 1_000_000, "max": 2_000_000, "primary_fee": 100_000, "secondary_rate": 10.0},
                    {"min": 2_000_000, "max": None, "primary_fee": 200_000, "secondary_rate": 5.0},
                ],
            },
        },
        "factor_sets": {
            "F1": [
                {"name": "Alterations", "multiplier": 1.25},
                {"name": "Duplication", "multiplier": 0.25},
            ],
        },
        "table_factor_sets": {"T1": "F1"},
        "stage_sets": {
            "S1": [("Design", 60), ("Construction", 40)],
        },
        "table_stage_sets": {"T1": "S1"},
    }


# ============================================================
# 1-5. Shipped dataset
# ============================================================

def test_default_dataset_has_eight_tables_in_order():
    assert list(DEFAULT_DATASET.tables) == ["1", "2", "3", "4", "5", "6", "7", "8"]
    assert DEFAULT_DATASET.minimum_project_value == MIN_PROJECT_VALUE


def test_tables_one_and_two_share_factor_set():
    """Tables 1 and 2 both use the '2A' set via the explicit mapping."""
    assert DEFAULT_DATASET.table_factor_sets["1"] == "2A"
    assert DEFAULT_DATASET.table_factor_sets["2"] == "2A"
    assert DEFAULT_DATASET.factors_for_table("1") == DEFAULT_DATASET.factors_for_table("2")
    names = [f.name for f in DEFAULT_DATASET.factors_for_table("1")]
    assert "Rural roads" in names


def test_every_stage_set_sums_to_100():
    for key, stage_set in DEFAULT_DATASET.stage_sets.items():
        assert stage_set.total_percentage() == pytest.approx(100.0), key


def test_every_table_maps_to_existing_stage_set():
    for table_id in DEFAULT_DATASET.tables:
        assert DEFAULT_DATASET.stage_set_for_table(table_id) is not None


def test_brackets_sorted_and_contiguous():
    for table in DEFAULT_DATASET.iter_tables():
        for prev, curr in zip(table.brackets, table.brackets[1:]):
            assert curr.min == prev.max, f"table {table.id}"


def test_unknown_table_lookups_are_empty():
    assert DEFAULT_DATASET.get_table("99") is None
    assert DEFAULT_DATASET.factors_for_table("99") == ()
    assert DEFAULT_DATASET.stage_set_for_table("99") is None


def test_minimal_raw_loads():
    dataset = load_dataset(_minimal_raw())
    assert dataset.get_table("T1").brackets[-1].max is None
    assert dataset.stage_set_for_table("T1").percentage_for("Design") == 60


def test_shared_dataset_mappings_are_read_only():
    """Lookup maps cannot be edited in place, so one caller cannot change another's results."""
    with pytest.raises(TypeError):
        DEFAULT_DATASET.table_factor_sets["1"] = "3A"
    with pytest.raises(TypeError):
        DEFAULT_DATASET.tables["9"] = DEFAULT_DATASET.get_table("1")
    with pytest.raises(TypeError):
        del DEFAULT_DATASET.stage_sets["Civil Engineering Projects"]
    assert DEFAULT_DATASET.table_factor_sets["1"] == "2A"


# ============================================================
# 6-13. Fatal faults
# ============================================================

def test_table_without_brackets_is_fatal():
    raw = _minimal_raw()
    raw["tables"]["T1"]["brackets"] = []
    with pytest.raises(GuidelineDatasetError, match="no fee brackets"):
        load_dataset(raw)


def test_unknown_stage_set_is_fatal():
    raw = _minimal_raw()
    raw["table_stage_sets"]["T1"] = "Missing"
    with pytest.raises(GuidelineDatasetError, match="unknown stage set"):
        load_dataset(raw)


def test_missing_stage_mapping_is_fatal():
    raw = _minimal_raw()
    raw["table_stage_sets"] = {}
    with pytest.raises(GuidelineDatasetError, match="no stage-set mapping"):
        load_dataset(raw)


def test_unknown_factor_set_is_fatal():
    raw = _minimal_raw()
    raw["table_factor_sets"]["T1"] = "F9"
    with pytest.raises(GuidelineDatasetError, match="unknown factor set"):
        load_dataset(raw)


def test_duplicate_factor_names_are_fatal():
    raw = _minimal_raw()
    raw["factor_sets"]["F1"].append({"name": "Alterations", "multiplier": 1.5})
    with pytest.raises(GuidelineDatasetError, match="repeats factor names"):
        load_dataset(raw)


def test_stage_weights_not_summing_to_100_are_fatal():
    raw = _minimal_raw()
    raw["stage_sets"]["S1"] = [("Design", 60), ("Construction", 30)]
    with pytest.raises(GuidelineDatasetError, match="sum to"):
        load_dataset(raw)


def test_overlapping_brackets_are_fatal():
    raw = _minimal_raw()
    raw["tables"]["T1"]["brackets"][1]["min"] = 1_500_000
    with pytest.raises(GuidelineDatasetError, match="overlap"):
        load_dataset(raw)


def test_open_ended_bracket_must_be_last():
    raw = _minimal_raw()
    raw["tables"]["T1"]["brackets"][0]["max"] = None
    with pytest.raises(GuidelineDatasetError):
        load_dataset(raw)


def test_bracket_max_below_min_is_fatal():
    raw = _minimal_raw()
    raw["tables"]["T1"]["brackets"][0]["max"] = 500_000
    with pytest.raises(GuidelineDatasetError, match="max"):
        load_dataset(raw)


def test_schema_errors_are_wrapped():
    raw = _minimal_raw()
    raw["tables"]["T1"]["brackets"][0]["primary_fee"] = "lots"
    with pytest.raises(GuidelineDatasetError, match="schema validation"):
        load_dataset(raw)


def test_missing_top_level_key_is_fatal():
    raw = _minimal_raw()
    del raw["tables"]
    with pytest.raises(GuidelineDatasetError, match="missing required key"):
        load_dataset(raw)


def test_guideline_error_is_a_value_error():
    assert issubclass(GuidelineDatasetError, ValueError)


# ============================================================
# 14-15. Warnings only
# ============================================================

def test_bracket_gap_only_warns(caplog):
    raw = _minimal_raw()
    raw["tables"]["T1"]["brackets"][1]["min"] = 2_500_000
    with caplog.at_level(logging.WARNING, logger="feecalc.guideline.dataset"):
        dataset = load_dataset(raw)
    assert dataset.get_table("T1") is not None
    assert any("gap" in r.getMessage() for r in caplog.records)


def test_capped_top_bracket_only_warns(caplog):
    """ECSA Table 7 stops at R630m in the published data."""
    raw = copy.deepcopy(ECSA_2025)
    with caplog.at_level(logging.WARNING, logger="feecalc.guideline.dataset"):
        dataset = load_dataset(raw)
    assert dataset.get_table("7").brackets[-1].max == 630_000_000
    assert any("Table 7" in r.getMessage() for r in caplog.records)
