"""
Deterministic ingestion rules for receivables ledgers.

This file exists to make the fixed contract explicit and enforceable.
"""

COMMA = ","
SEMICOLON = ";"
DEFAULT_DELIMITER = COMMA

# Fixed column positions: name, balance, aging (optional), date (optional)
NAME_COLUMN = 0
BALANCE_COLUMN = 1
AGING_COLUMN = 2
DATE_COLUMN = 3
MIN_COLUMNS = 2

# Aging bands are inclusive on the upper edge: 30 is Current, 90 is Overdue
CURRENT_MAX_DAYS = 30
OVERDUE_MAX_DAYS = 90

RECORD_ID_PREFIX = "REC-"
UNKNOWN_CUSTOMER = "Unknown"

LEDGER_HEADER = ("Customer Name", "Total Balance", "Aging Days", "Invoice Date")
TEMPLATE_FILENAME = "template_kertas_kerja_audit.csv"
