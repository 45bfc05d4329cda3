"""
Guideline reference API: what the calculator form needs to render itself.

GET /api/guideline                          - tables, brackets, factor options, stage sets
GET /api/guideline/tables/{table_id}/factors - factor options for one table
"""

from fastapi import APIRouter, HTTPException

from ..calculators.adjustments import AdjustmentResolver
from ..guideline.dataset import DEFAULT_DATASET

router = APIRouter(prefix="/guideline", tags=["guideline"])

resolver = AdjustmentResolver(DEFAULT_DATASET)


def _factor_list(table_id: str) -> list:
    return [f.model_dump() for f in resolver.factor_options(table_id)]


@router.get("")
def get_guideline():
    dataset = DEFAULT_DATASET
    return {
        "name": dataset.name,
        "reference": dataset.reference,
        "minimum_project_value": dataset.minimum_project_value,
        "tables": [
            {
                "id": table.id,
                "name": table.name,
                "description": table.description,
                "brackets": [b.model_dump() for b in table.brackets],
                "factors": _factor_list(table.id),
                "stage_set": dataset.table_stage_sets[table.id],
            }
            for table in dataset.iter_tables()
        ],
        "stage_sets": {
            key: [s.model_dump() for s in stage_set.stages]
            for key, stage_set in dataset.stage_sets.items()
        },
    }


@router.get("/tables/{table_id}/factors")
def get_table_factors(table_id: str):
    if DEFAULT_DATASET.get_table(table_id) is None:
        raise HTTPException(status_code=404, detail=f"Unknown fee table: {table_id}")
    return _factor_list(table_id)
