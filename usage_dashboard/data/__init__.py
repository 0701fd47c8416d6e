"""CSV tokenizing, header discovery, and table normalization."""
from .schemas import LedgerMonth, LedgerRecord, LedgerResult, NormalizedTable, Layout, HeaderTier
from .tokenize import tokenize, decode_csv_bytes
from .usage import normalize_usage_grid, normalize_usage_csv, to_grid
from .ledger import normalize_ledger_grid, normalize_ledger_csv
from .loader import fetch_csv_text, load_usage_dataset, load_newspaper_month, load_all_newspaper_months
