"""
Spreadsheet export: CalculationResult -> .xlsx workbook.

Three sheets, mirroring what the calculator shows on screen:
1. Inputs        (method, total cost, per-table allocation)
2. Calculations  (one row per included category)
3. Stages        (stage allocation for every category)

Formatting only. Every amount comes from the result; nothing is recomputed.
"""

from io import BytesIO

from openpyxl import Workbook
from openpyxl.styles import Font

from ..config import settings
from ..formatting import format_currency, format_factor, format_percent
from ..guideline.dataset import DEFAULT_DATASET
from ..guideline.models import GuidelineDataset
from ..schemas import CalculationInput, CalculationResult

CALCULATION_COLUMNS = [
    "Table",
    "Allocated Cost",
    "Primary Fee",
    "Secondary Fee",
    "Basic Fee",
    "Adjustment Factor",
    "Discount %",
    "Final Fee",
    "Applied Factors",
]

STAGE_COLUMNS = ["Table", "Stage", "Percentage", "Amount"]

METHOD_LABELS = {
    "total": "Total project cost with percentages",
    "category": "Direct category cost capture",
}


def _bold_row(ws, row: int) -> None:
    for cell in ws[row]:
        cell.font = Font(bold=True)


def _write_inputs_sheet(ws, inputs: CalculationInput, result: CalculationResult,
                        dataset: GuidelineDataset) -> None:
    ws.append(["ECSA Fee Calculator Inputs"])
    ws["A1"].font = Font(bold=True, size=14)
    ws.append([f"Guideline: {dataset.reference}"])
    ws.append([])
    ws.append(["Input method", METHOD_LABELS.get(inputs.method, inputs.method)])
    ws.append([
        "Total project cost",
        format_currency(inputs.total_cost) if inputs.total_cost else "Not specified",
    ])
    ws.append([])
    ws.append(["Category allocations"])
    _bold_row(ws, ws.max_row)

    for table in dataset.iter_tables():
        category = result.categories.get(table.id)
        cost = category.allocated_cost if category else 0.0
        percentage = ""
        if inputs.method == "total":
            percentage = format_percent(inputs.percentages_by_table.get(table.id, 0.0))
        ws.append([f"{table.id}: {table.name}", percentage, format_currency(cost)])

    ws.column_dimensions["A"].width = 62
    ws.column_dimensions["B"].width = 36
    ws.column_dimensions["C"].width = 20


def _write_calculations_sheet(ws, result: CalculationResult) -> None:
    ws.append(CALCULATION_COLUMNS)
    _bold_row(ws, 1)
    for category in result.categories.values():
        ws.append([
            f"{category.table_id}: {category.table_name}",
            format_currency(category.allocated_cost),
            format_currency(category.primary_fee),
            format_currency(category.secondary_fee),
            format_currency(category.basic_fee),
            format_factor(category.compound_multiplier),
            f"{category.discount_percent:.2f}%",
            format_currency(category.final_fee),
            ", ".join(category.applied_factor_names) or "None",
        ])
    ws.column_dimensions["A"].width = 62
    for col in "BCDEFGH":
        ws.column_dimensions[col].width = 20
    ws.column_dimensions["I"].width = 60


def _write_stages_sheet(ws, result: CalculationResult, dataset: GuidelineDataset) -> None:
    ws.append(STAGE_COLUMNS)
    _bold_row(ws, 1)
    for table_id, breakdown in result.stage_breakdowns.items():
        stage_set = dataset.stage_set_for_table(table_id)
        for stage_name, amount in breakdown.items():
            pct = stage_set.percentage_for(stage_name) if stage_set else None
            ws.append([
                table_id,
                stage_name,
                format_percent(pct) if pct is not None else "",
                format_currency(amount),
            ])
    ws.column_dimensions["B"].width = 42
    ws.column_dimensions["D"].width = 20


def build_workbook(inputs: CalculationInput, result: CalculationResult,
                   dataset: GuidelineDataset = None) -> Workbook:
    dataset = dataset or DEFAULT_DATASET
    wb = Workbook()

    inputs_ws = wb.active
    inputs_ws.title = "Inputs"
    _write_inputs_sheet(inputs_ws, inputs, result, dataset)
    _write_calculations_sheet(wb.create_sheet("Calculations"), result)
    _write_stages_sheet(wb.create_sheet("Stages"), result, dataset)
    return wb


def generate_workbook(inputs: CalculationInput, result: CalculationResult,
                      dataset: GuidelineDataset = None) -> bytes:
    """
    Render the calculation workbook.

    Returns:
        .xlsx bytes
    """
    buffer = BytesIO()
    build_workbook(inputs, result, dataset).save(buffer)
    return buffer.getvalue()


def workbook_filename() -> str:
    return f"{settings.EXPORT_FILENAME}.xlsx"
