"""
Stage allocator: splits a final fee across delivery stages by percentage weight.

Weights sum to 100 per set (checked at dataset load), so amounts add back up
to the fee within floating-point rounding. No remainder correction.
"""

from typing import Dict

from ..guideline.dataset import DEFAULT_DATASET
from ..guideline.models import GuidelineDataset


class StageAllocator:

    def __init__(self, dataset: GuidelineDataset = None):
        self.dataset = dataset or DEFAULT_DATASET

    def allocate_stages(self, table_id: str, final_fee: float) -> Dict[str, float]:
        """{stage_name: amount} in stage-set order. Unknown table -> {}."""
        stage_set = self.dataset.stage_set_for_table(table_id)
        if stage_set is None:
            return {}
        return {
            stage.name: final_fee * stage.percentage / 100
            for stage in stage_set.stages
        }
