"""
Workbook theme for the dashboard exports, keyed by the role a cell plays.
"""
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

# Slate / sky palette
INK = "0F172A"
MUTED = "64748B"
ACCENT = "0284C7"
WHITE = "FFFFFF"
HEADER_BG = "1E293B"
STRIPE_BG = "F1F5F9"
TOTAL_BG = "E2E8F0"
RULE = "CBD5E1"
TOTAL_RULE = "94A3B8"
GAIN = "059669"
LOSS = "DC2626"
TOP_BG = "FEF3C7"       # leading resource / newspaper
PEAK_BG = "E0F2FE"      # busiest period / costliest month


def _font(size: int = 10, color: str = INK, **kwargs) -> Font:
    return Font(name="Calibri", size=size, color=color, **kwargs)


def _fill(color: str) -> PatternFill:
    return PatternFill(start_color=color, end_color=color, fill_type="solid")


def _box(color: str, top: str = "thin", bottom: str = "thin") -> Border:
    side = Side(style="thin", color=color)
    return Border(left=side, right=side, top=Side(style=top, color=color), bottom=Side(style=bottom, color=color))


FONTS = {
    "title": _font(22, bold=True),
    "subtitle": _font(12, MUTED, italic=True),
    "heading": _font(14, ACCENT, bold=True),
    "header": _font(11, WHITE, bold=True),
    "body": _font(),
    "total": _font(bold=True),
    "kpi": _font(26, bold=True),
    "kpi_label": _font(10, MUTED),
    "gain": _font(26, GAIN, bold=True),
    "loss": _font(26, LOSS, bold=True),
    "note_title": _font(11, bold=True),
    "note": _font(10, italic=True),
}

FILLS = {
    "header": _fill(HEADER_BG),
    "stripe": _fill(STRIPE_BG),
    "total": _fill(TOTAL_BG),
    "top": _fill(TOP_BG),
    "peak": _fill(PEAK_BG),
}

BORDERS = {
    "header": _box(HEADER_BG, bottom="medium"),
    "body": _box(RULE),
    "total": _box(TOTAL_RULE, top="medium", bottom="medium"),
}

ALIGN = {
    "center": Alignment(horizontal="center", vertical="center"),
    "left": Alignment(horizontal="left", vertical="center"),
    "right": Alignment(horizontal="right", vertical="center"),
}

# Cell kinds that carry a number format; anything else is written as text
NUMBER_FORMATS = {
    "count": "#,##0",
    "rupees": '"₹"#,##0.00',
    "percent": '0.0"%"',
    "growth": '+0.0"%";-0.0"%";0.0"%"',
}
