# components/report.py
# PDF export of a calculator run: inputs, headline results, the timeline and optional charts.

import io
from typing import Dict, Mapping, Optional, Sequence

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import (
    Image,
    PageBreak,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

HEADER_BG = colors.HexColor("#E6ECE9")
MAX_TABLE_COLUMNS = 8


def flatten(obj, prefix: str = "") -> list:
    """``[[dotted.key, value], ...]`` for nested dicts and lists of scalars."""
    rows = []
    if isinstance(obj, Mapping):
        for k, v in obj.items():
            key = f"{prefix}{k}"
            rows.extend(flatten(v, f"{key}."))
    elif isinstance(obj, (list, tuple)):
        for i, v in enumerate(obj):
            rows.extend(flatten(v, f"{prefix}{i}."))
    else:
        rows.append([prefix[:-1], str(obj)])
    return rows


def _table(rows) -> Table:
    table = Table(rows, hAlign="LEFT", repeatRows=1)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), HEADER_BG),
                ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 8),
            ]
        )
    )
    return table


def _fmt(value) -> str:
    if isinstance(value, bool) or value is None:
        return str(value)
    if isinstance(value, int):
        return f"{value:,}"
    if isinstance(value, float):
        return f"{value:,.2f}"
    return str(value)


def timeline_table(rows: Sequence[Mapping]) -> Optional[Table]:
    """Table of the scalar columns of timeline rows (nested values are skipped)."""
    if not rows:
        return None
    columns = [k for k, v in rows[0].items() if not isinstance(v, (Mapping, list, tuple))]
    columns = columns[:MAX_TABLE_COLUMNS]
    data = [[c.replace("_", " ").title() for c in columns]]
    data += [[_fmt(row.get(c)) for c in columns] for row in rows]
    return _table(data)


def build_pdf(title: str,
              inputs: Dict,
              summary: Optional[Dict] = None,
              timeline: Optional[Sequence[Mapping]] = None,
              charts: Optional[Dict] = None) -> bytes:
    """Create a PDF report showing inputs, results and charts.

    Chart figures are rendered with ``fig.to_image``, which needs the
    ``kaleido`` package.
    """
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=A4, leftMargin=36, rightMargin=36)
    styles = getSampleStyleSheet()
    story = [Paragraph(title, styles["Title"]), Spacer(1, 12)]

    # ---- Input data ----
    story.append(Paragraph("Input Data", styles["Heading2"]))
    story.extend([_table([["Field", "Value"]] + flatten(inputs)), Spacer(1, 12)])

    # ---- Results ----
    if summary:
        story.append(Paragraph("Results", styles["Heading2"]))
        story.extend([_table([["Field", "Value"]] + flatten(summary)), Spacer(1, 12)])

    if timeline:
        story.append(Paragraph("Timeline", styles["Heading2"]))
        story.extend([timeline_table(timeline), Spacer(1, 12)])

    # ---- Charts ----
    for chart_title, fig in (charts or {}).items():
        story.extend([PageBreak(), Paragraph(chart_title, styles["Heading2"])])
        img = fig.to_image(format="png", scale=2)
        story.append(Image(io.BytesIO(img), width=480, height=300))
        story.append(Spacer(1, 12))

    doc.build(story)
    pdf_bytes = buffer.getvalue()
    buffer.close()
    return pdf_bytes


__all__ = ["flatten", "timeline_table", "build_pdf"]
