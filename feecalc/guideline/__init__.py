"""
Guideline reference data: fee tables, adjustment factors, stage weights.
"""

from .dataset import DEFAULT_DATASET, GuidelineDatasetError, load_dataset, validate_dataset
from .models import (
    AdjustmentFactor,
    FeeBracket,
    GuidelineDataset,
    StageWeight,
    StageWeightSet,
    TableDefinition,
)
