"""
Calculation API.

POST /api/calculate - CalculationInput in, CalculationResult out.
"""

import logging

from fastapi import APIRouter

from ..calculators.aggregator import FeeCalculator
from ..schemas import CalculationInput, CalculationResult

logger = logging.getLogger(__name__)

router = APIRouter(tags=["calculations"])

# Singleton calculator: read-only dataset, no per-call state
calculator = FeeCalculator()


@router.post("/calculate", response_model=CalculationResult)
def calculate(inputs: CalculationInput):
    if inputs.method == "total" and abs(inputs.allocation_percentage_total() - 100) > 0.01:
        logger.info(
            "Allocation percentages sum to %.2f%%, not 100%%", inputs.allocation_percentage_total(),
        )
    return calculator.calculate_fees(inputs)
