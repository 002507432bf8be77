"""
Report exports for a derived business plan (CSV, Excel, PDF).
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from ..data_model import BusinessPlan, TIME_FRAME_LABELS
from ..engine.aggregate import expenses_frame, projection_frame
from ..engine.derivation import PlanProjection

EXPORT_FORMATS = ("csv", "xlsx", "pdf")
MISSING = "N/A"
HEADER_FILL = PatternFill(start_color="3B82F6", end_color="3B82F6", fill_type="solid")


def _ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def format_currency(value: Any) -> str:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return MISSING
    return f"${int(value):,}"


def export_filename(plan: BusinessPlan, fmt: str, on: Optional[date] = None) -> str:
    stamp = (on or date.today()).isoformat()
    return f"{plan.variant}_business_plan_{stamp}.{fmt}"


def _display_frame(projection: PlanProjection) -> pd.DataFrame:
    df = projection_frame(projection, labels=True)
    for column in df.columns[1:]:
        df[column] = df[column].map(format_currency)
    return df


def export_csv(path: Path, projection: PlanProjection) -> Path:
    projection_frame(projection).to_csv(path, index=False)
    return path


def export_excel(path: Path, plan: BusinessPlan, projection: PlanProjection) -> Path:
    wb = Workbook()
    ws = wb.active
    ws.title = "Agents"
    agents = projection_frame(projection, labels=True)
    ws.append(list(agents.columns))
    for row in agents.itertuples(index=False):
        ws.append(list(row))
    for cell in ws[1]:
        cell.font = Font(bold=True, color="FFFFFF")
        cell.fill = HEADER_FILL

    expenses = wb.create_sheet("Expenses")
    expenses.append(["Field", "Value"])
    for row in expenses_frame(plan, projection).itertuples(index=False):
        expenses.append(list(row))

    meta = wb.create_sheet("Metadata")
    meta.append(["Owner", plan.owner_id])
    meta.append(["Variant", plan.variant])
    meta.append(["Time Frame", TIME_FRAME_LABELS.get(projection.time_frame, projection.time_frame)])
    meta.append(["Created At", plan.created_at or MISSING])
    meta.append(["Updated At", plan.updated_at or MISSING])
    wb.save(str(path))
    return path


def _pdf_lines(plan: BusinessPlan, projection: PlanProjection) -> List[str]:
    lines = [
        f"Time frame: {TIME_FRAME_LABELS.get(projection.time_frame, projection.time_frame)}",
        "",
        "Agent Financials",
    ]
    agents = _display_frame(projection)
    lines.append(" | ".join(str(col) for col in agents.columns))
    for row in agents.itertuples(index=False):
        lines.append(" | ".join(str(value) for value in row))
    lines.extend(["", "Additional Expenses"])
    for row in expenses_frame(plan, projection).itertuples(index=False):
        lines.append(f"{row.Field}: {format_currency(row.Value)}")
    lines.extend(
        [
            "",
            "Metadata",
            f"Created At: {plan.created_at or MISSING}",
            f"Updated At: {plan.updated_at or MISSING}",
        ]
    )
    return lines


def export_pdf(path: Path, plan: BusinessPlan, projection: PlanProjection) -> Path:
    c = canvas.Canvas(str(path), pagesize=letter)
    _, height = letter
    y = height - 72
    c.setFont("Helvetica-Bold", 18)
    c.drawString(72, y, f"{plan.variant.title()} Business Plan")
    y -= 20
    c.setFont("Helvetica", 9)
    c.drawString(72, y, f"Generated on {date.today().strftime('%B %d, %Y')}")
    y -= 28
    c.setFont("Helvetica", 8)
    for line in _pdf_lines(plan, projection):
        if y < 72:
            c.showPage()
            y = height - 72
            c.setFont("Helvetica", 8)
        c.drawString(72, y, line[:140])
        y -= 12
    c.save()
    return path


def export_plan(
    output_dir: str,
    plan: BusinessPlan,
    projection: PlanProjection,
    fmt: str = "csv",
) -> Dict[str, str]:
    fmt = (fmt or "csv").lower()
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unsupported export format: {fmt}")
    out_dir = Path(output_dir)
    _ensure_dir(out_dir)
    path = out_dir / export_filename(plan, fmt)
    if fmt == "csv":
        export_csv(path, projection)
    elif fmt == "xlsx":
        export_excel(path, plan, projection)
    else:
        export_pdf(path, plan, projection)
    return {fmt: str(path)}
