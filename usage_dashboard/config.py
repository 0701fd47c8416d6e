"""
Usage Dashboard — Configuration: marker tokens, dataset catalogs, lookup tables.
"""
import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths — override with USAGE_DASHBOARD_DATA_DIR for deployment
# ---------------------------------------------------------------------------
_data_dir = Path(os.environ.get("USAGE_DASHBOARD_DATA_DIR", str(Path.home() / "usage-dashboard")))
NEWSPAPER_FOLDER = _data_dir / "newspapers"
EXPORTS_FOLDER = _data_dir / "exports"

# ---------------------------------------------------------------------------
# Retrieval knobs (used by the loader only, never by the normalizers)
# ---------------------------------------------------------------------------
FETCH_TIMEOUT = float(os.environ.get("USAGE_DASHBOARD_TIMEOUT", "30"))
USER_AGENT = os.environ.get("USAGE_DASHBOARD_USER_AGENT", "usage-dashboard/1.0")

# ---------------------------------------------------------------------------
# Usage-table markers (compared after strip + casefold)
# ---------------------------------------------------------------------------
GROUP_MARKER = "group"        # exact match; selects the transposed layout
MONTH_MARKER = "months"       # substring; locates the row-oriented header
SERIES_EXCLUDE_MARKER = "month"   # any header embedding this is the label axis
TOTAL_SENTINEL = "total"
LABEL_FIELD = "month"

# ---------------------------------------------------------------------------
# Newspaper-ledger markers
# ---------------------------------------------------------------------------
LEDGER_SCAN_ROWS = 10
LEDGER_PRICE_MARKER = "price"
LEDGER_DAYS_MARKER = "days"
LEDGER_DATE_MARKER = "date"
LEDGER_FALLBACK_HEADER_ROW = 2
LEDGER_MIN_NAME_LENGTH = 3
LEDGER_SKIP_NAME_TERMS = ("total", "month")

# Column keywords, most specific first
LEDGER_NAME_KEYWORDS = ("newspaper", "name", "paper")
LEDGER_COPIES_KEYWORDS = ("total copies", "copies", "isr")
LEDGER_PRICE_KEYWORDS = ("total price", "amount", "total", "price")
LEDGER_RATE_KEYWORDS = ("rate", "per copy", "per day", "unit price")
# Serial-number headers, compared with spaces and dots removed
LEDGER_SERIAL_LABELS = {"sno", "srno", "slno", "sr", "sl", "no", "#", "serial", "serialno"}
LEDGER_HEADER_VOCABULARY = (
    "name", "paper", "copies", "copy", "price", "rate", "days", "amount", "total", "isr",
)

# ---------------------------------------------------------------------------
# Dataset catalogs: dataset id → source locator (URL or local path)
# ---------------------------------------------------------------------------
USAGE_DATASETS = {
    "2025 Data": (
        "https://docs.google.com/spreadsheets/d/e/2PACX-1vSpo7h-HSoZ6knQ7hib7GdKNEJgEPUGaFPXPZ5bKyrByUQ2ap_"
        "xmNuP8W94rD_j4A/pub?output=csv"
    ),
    "Jan 2026 (School Wise)": (
        "https://docs.google.com/spreadsheets/d/e/2PACX-1vSpo7h-HSoZ6knQ7hib7GdKNEJgEPUGaFPXPZ5bKyrByUQ2ap_"
        "xmNuP8W94rD_j4A/pub?gid=4218642&single=true&output=csv"
    ),
}
DEFAULT_USAGE_DATASET = "2025 Data"

NEWSPAPER_MONTHS = [
    "March 2025", "April 2025", "May 2025", "July 2025", "August 2025",
    "September 2025", "October 2025", "November 2025", "December 2025",
]
NEWSPAPER_DATASETS = {m: str(NEWSPAPER_FOLDER / f"{m}.csv") for m in NEWSPAPER_MONTHS}
DEFAULT_NEWSPAPER_MONTH = "March 2025"

# ---------------------------------------------------------------------------
# Newspaper language rules (order matters — first match wins, word-bounded)
# ---------------------------------------------------------------------------
NEWSPAPER_LANGUAGE_RULES = [
    ("navbharat", "Hindi"),
    ("hindustan times", "English"),
    ("dainik", "Hindi"),
    ("jagran", "Hindi"),
    ("amar ujala", "Hindi"),
    ("bhaskar", "Hindi"),
    ("hindustan", "Hindi"),
    ("rashtriya sahara", "Hindi"),
    ("punjab kesari", "Hindi"),
    ("jansatta", "Hindi"),
    ("patrika", "Hindi"),
    ("prabhat khabar", "Hindi"),
    ("hindi", "Hindi"),
    ("times", "English"),
    ("express", "English"),
    ("hindu", "English"),
    ("mint", "English"),
    ("telegraph", "English"),
    ("tribune", "English"),
    ("statesman", "English"),
    ("pioneer", "English"),
    ("deccan", "English"),
    ("business standard", "English"),
    ("financial", "English"),
    ("chronicle", "English"),
    ("english", "English"),
]

# ---------------------------------------------------------------------------
# Summary thresholds
# ---------------------------------------------------------------------------
FLUCTUATION_CV_THRESHOLD = 0.5
RANKING_LIMIT = 10

# ---------------------------------------------------------------------------
# School → resource mapping (static, not derived from any CSV)
# ---------------------------------------------------------------------------
SCHOOL_RESOURCES = [
    {
        "school": "School of Engineering",
        "resources": ["IEEE Xplore", "ACM Digital Library", "ScienceDirect", "SpringerLink"],
    },
    {
        "school": "School of Business",
        "resources": ["Emerald Insight", "Business Source Complete", "ProQuest Central"],
    },
    {
        "school": "School of Law",
        "resources": ["Manupatra", "SCC Online", "HeinOnline", "LexisNexis"],
    },
    {
        "school": "School of Medical & Allied Sciences",
        "resources": ["PubMed", "CINAHL", "ClinicalKey"],
    },
    {
        "school": "School of Liberal Arts",
        "resources": ["JSTOR", "Project MUSE", "Taylor & Francis Online"],
    },
    {
        "school": "General / Cross-Disciplinary",
        "resources": ["Scopus", "Web of Science", "EBSCOhost", "Cambridge Core"],
    },
]
