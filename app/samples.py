"""
Demo ledger and downloadable template, plus rendering records back to CSV.
"""

from __future__ import annotations

import csv
import io
from decimal import Decimal
from typing import Iterable, List, Sequence, Tuple

from .models import AuditRecord
from .rules import DEFAULT_DELIMITER, LEDGER_HEADER

LedgerRow = Tuple[str, float, int, str]

SAMPLE_LEDGER_ROWS: Tuple[LedgerRow, ...] = (
    ("PT. Maju Jaya", 150000000, 15, "2023-10-01"),
    ("CV. Sumber Rejeki", 45000000, 45, "2023-09-01"),
    ("Toko Abadi", 12500000, 120, "2023-06-01"),
    ("PT. Teknologi Baru", 250000000, 5, "2023-10-10"),
    ("UD. Sejahtera", 8500000, 200, "2023-03-01"),
    ("Global Corp", 500000000, 10, "2023-10-05"),
    ("Local Trader", -1500000, 30, "2023-09-15"),
    ("Mega Construction", 300000000, 95, "2023-07-01"),
)

TEMPLATE_LEDGER_ROWS: Tuple[LedgerRow, ...] = (
    ("PT. Contoh Pelanggan", 15000000, 30, "2024-01-01"),
    ("CV. Mitra Abadi", 5000000, 60, "2023-12-01"),
    ("Toko Sejahtera", 25000000, 120, "2023-10-01"),
    ("UD. Maju Terus", -500000, 15, "2024-01-15"),
)


def _format_balance(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return format(Decimal(repr(float(value))), "f")


def render_ledger(rows: Iterable[Sequence], delimiter: str = DEFAULT_DELIMITER) -> str:
    """
    Write header + rows as ledger text, no trailing newline.

    Balances are written without grouping; a semicolon ledger gets a decimal
    comma so it reads back under the same convention.
    """
    outp = io.StringIO(newline="")
    writer = csv.writer(outp, delimiter=delimiter, lineterminator="\n")
    writer.writerow(LEDGER_HEADER)
    for name, balance, aging, invoice_date in rows:
        text = _format_balance(balance)
        if delimiter != DEFAULT_DELIMITER:
            text = text.replace(".", ",")
        writer.writerow([name, text, aging, invoice_date])
    return outp.getvalue().rstrip("\n")


def ledger_rows(records: Iterable[AuditRecord]) -> List[LedgerRow]:
    return [
        (r.customer_name, r.total_balance, r.aging_days, r.invoice_date)
        for r in records
    ]


def sample_ledger_csv() -> str:
    return render_ledger(SAMPLE_LEDGER_ROWS)


def template_ledger_csv() -> str:
    return render_ledger(TEMPLATE_LEDGER_ROWS)
