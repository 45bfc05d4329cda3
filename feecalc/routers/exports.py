"""
Export endpoints.

POST /api/export/xlsx - calculation workbook (Inputs, Calculations, Stages)
POST /api/export/pdf  - fee report

Both take the same CalculationInput as /api/calculate, run the calculation
once and hand the result to the renderer.
"""

from fastapi import APIRouter
from fastapi.responses import Response

from ..exporters.pdf_report import generate_fee_report, report_filename
from ..exporters.workbook import generate_workbook, workbook_filename
from ..schemas import CalculationInput
from .calculations import calculator

router = APIRouter(prefix="/export", tags=["exports"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _attachment(content: bytes, media_type: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
        },
    )


@router.post("/xlsx")
def export_workbook(inputs: CalculationInput):
    result = calculator.calculate_fees(inputs)
    content = generate_workbook(inputs, result, calculator.dataset)
    return _attachment(content, XLSX_MEDIA_TYPE, workbook_filename())


@router.post("/pdf")
def export_pdf(inputs: CalculationInput):
    result = calculator.calculate_fees(inputs)
    content = generate_fee_report(result, calculator.dataset)
    return _attachment(content, "application/pdf", report_filename())
