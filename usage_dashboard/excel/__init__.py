"""Styled Excel exports for usage sheets and newspaper ledgers."""
from .sheets import Column, DashboardSheet, DashboardWorkbook, Kpi, sheet_title
from .workbooks import LedgerWorkbook, UsageWorkbook
