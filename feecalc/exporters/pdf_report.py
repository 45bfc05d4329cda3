"""
PDF fee report.

Generates the fee calculation report from a CalculationResult.
Uses fpdf2 (pure Python, no system dependencies).

Sections:
1. Header (title, guideline reference, generated date)
2. Summary tiles (undiscounted total, discounted total, overall discount)
3. Detailed fee breakdown, one block per category:
   metrics, factors applied, advisory note, stage allocation
"""

from datetime import datetime

from fpdf import FPDF

from ..config import settings
from ..formatting import format_currency, format_factor, format_percent
from ..guideline.dataset import DEFAULT_DATASET
from ..guideline.models import GuidelineDataset
from ..schemas import CalculationResult

# Report palette (RGB)
BLUE = (29, 78, 216)
SLATE = (71, 85, 105)
INK = (15, 23, 42)
RED = (185, 28, 28)
TILE_FILL = (239, 246, 255)
TILE_BORDER = (219, 234, 254)

# Space a category block needs before we start it on a fresh page
CATEGORY_BLOCK_MM = 75


def _safe(text: str) -> str:
    """Replace Unicode chars that can't be rendered by built-in PDF fonts (latin-1)."""
    if not text:
        return ""
    return (
        text
        .replace("\u2022", "-")    # bullet
        .replace("\u2014", " - ")  # em dash
        .replace("\u2013", "-")    # en dash
        .replace("\u201c", '"')    # left double quote
        .replace("\u201d", '"')    # right double quote
        .replace("\u2018", "'")    # left single quote
        .replace("\u2019", "'")    # right single quote
        .replace("\u00d7", "x")    # multiplication sign
        .encode("latin-1", errors="replace")
        .decode("latin-1")
    )


class FeeReportPDF(FPDF):
    """A4 report with page-numbered footer."""

    def __init__(self, practice_name=""):
        super().__init__(format="A4")
        self.practice_name = practice_name
        self.set_auto_page_break(auto=True, margin=20)

    def header(self):
        pass  # Title block is drawn once on the first page

    def footer(self):
        self.set_y(-15)
        self.set_font("Helvetica", "I", 8)
        self.set_text_color(150, 150, 150)
        self.cell(0, 10, f"Page {self.page_no()}/{{nb}}", align="C")

    def practice_line(self):
        """'Prepared by' line under the title; skipped when no practice is configured."""
        if self.practice_name:
            self.cell(0, 5, _safe(f"Prepared by: {self.practice_name}"), new_x="LMARGIN", new_y="NEXT")

    def heading(self, text, size=14):
        self.set_font("Helvetica", "B", size)
        self.set_text_color(*BLUE)
        self.cell(0, 9, _safe(text), new_x="LMARGIN", new_y="NEXT")
        self.set_text_color(*INK)
        self.ln(1)

    def summary_tile(self, label, value):
        """Shaded box with a small label over a large value."""
        width = self.w - self.l_margin - self.r_margin
        x, y = self.l_margin, self.get_y()
        self.set_draw_color(*TILE_BORDER)
        self.set_fill_color(*TILE_FILL)
        self.rect(x, y, width, 16, style="DF")

        self.set_xy(x + 4, y + 2)
        self.set_font("Helvetica", "", 9)
        self.set_text_color(*BLUE)
        self.cell(0, 5, _safe(label), new_x="LMARGIN", new_y="NEXT")
        self.set_x(x + 4)
        self.set_font("Helvetica", "B", 13)
        self.cell(0, 7, _safe(value), new_x="LMARGIN", new_y="NEXT")

        self.set_text_color(*INK)
        self.set_y(y + 20)

    def metric_row(self, label, value):
        self.set_font("Helvetica", "", 9)
        self.cell(70, 5.5, _safe(label))
        self.cell(60, 5.5, _safe(value), align="R", new_x="LMARGIN", new_y="NEXT")


def generate_fee_report(
    result: CalculationResult,
    dataset: GuidelineDataset = None,
    generated_at: datetime = None,
) -> bytes:
    """
    Generate the PDF fee report.

    Args:
        result: CalculationResult from FeeCalculator
        dataset: guideline the result was computed with (for stage percentages)
        generated_at: timestamp printed in the header (defaults to now)

    Returns:
        PDF bytes
    """
    dataset = dataset or DEFAULT_DATASET
    generated_at = generated_at or datetime.now()

    pdf = FeeReportPDF(practice_name=settings.PRACTICE_NAME)
    pdf.alias_nb_pages()
    pdf.add_page()
    pw = pdf.w - pdf.l_margin - pdf.r_margin  # printable width

    # ── Header ──
    pdf.set_font("Helvetica", "B", 20)
    pdf.set_text_color(*BLUE)
    pdf.cell(0, 11, _safe(settings.REPORT_TITLE), new_x="LMARGIN", new_y="NEXT")

    pdf.set_font("Helvetica", "", 9)
    pdf.set_text_color(*SLATE)
    pdf.practice_line()
    pdf.cell(0, 5, _safe(f"Guideline: {dataset.reference}"), new_x="LMARGIN", new_y="NEXT")
    pdf.cell(0, 5, f"Generated: {generated_at.strftime('%d %B %Y %H:%M')}", new_x="LMARGIN", new_y="NEXT")
    pdf.set_text_color(*INK)
    pdf.ln(5)

    # ── Summary ──
    totals = result.totals
    pdf.summary_tile("Total undiscounted professional fee", format_currency(totals.undiscounted_sum))
    pdf.summary_tile("Total discounted professional fee", format_currency(totals.discounted_sum))
    pdf.summary_tile("Overall discount achieved", format_percent(totals.overall_discount_percent))
    pdf.ln(2)

    # ── Detailed breakdown ──
    pdf.heading("Detailed fee breakdown")

    if not result.categories:
        pdf.set_font("Helvetica", "I", 9)
        pdf.set_text_color(*SLATE)
        pdf.cell(0, 6, "No categories with an allocated cost.", new_x="LMARGIN", new_y="NEXT")
        pdf.set_text_color(*INK)

    for table_id, category in result.categories.items():
        if pdf.get_y() + CATEGORY_BLOCK_MM > pdf.h - pdf.b_margin:
            pdf.add_page()

        pdf.set_font("Helvetica", "B", 11)
        pdf.set_text_color(*BLUE)
        pdf.cell(0, 7, _safe(f"{category.table_id}: {category.table_name}"),
                 new_x="LMARGIN", new_y="NEXT")
        pdf.set_text_color(*INK)

        metrics = [
            ("Allocated cost", format_currency(category.allocated_cost)),
            ("Primary fee", format_currency(category.primary_fee)),
            ("Secondary fee", format_currency(category.secondary_fee)),
            ("Basic fee", format_currency(category.basic_fee)),
            ("Adjustment factor", format_factor(category.compound_multiplier)),
            ("Discount applied", format_percent(category.discount_percent)),
            ("Final fee", format_currency(category.final_fee)),
        ]
        for label, value in metrics:
            pdf.metric_row(label, value)

        if category.applied_factor_names:
            pdf.set_font("Helvetica", "", 8)
            pdf.set_text_color(*SLATE)
            pdf.multi_cell(pw, 4.5, _safe(f"Factors applied: {', '.join(category.applied_factor_names)}"),
                           new_x="LMARGIN", new_y="NEXT")
            pdf.set_text_color(*INK)

        if category.advisory_note:
            pdf.set_font("Helvetica", "", 8)
            pdf.set_text_color(*RED)
            pdf.multi_cell(pw, 4.5, _safe(category.advisory_note), new_x="LMARGIN", new_y="NEXT")
            pdf.set_text_color(*INK)

        pdf.ln(1)
        pdf.set_font("Helvetica", "B", 9)
        pdf.set_text_color(*BLUE)
        pdf.cell(0, 6, "Stage allocation", new_x="LMARGIN", new_y="NEXT")
        pdf.set_text_color(*INK)

        stage_set = dataset.stage_set_for_table(table_id)
        for stage_name, amount in result.stage_breakdowns.get(table_id, {}).items():
            pct = stage_set.percentage_for(stage_name) if stage_set else None
            label = f"{stage_name} ({format_percent(pct)})" if pct is not None else stage_name
            pdf.metric_row(label, format_currency(amount))

        pdf.ln(5)

    return bytes(pdf.output())


def report_filename() -> str:
    return f"{settings.EXPORT_FILENAME}.pdf"
