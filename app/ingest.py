"""
Ledger ingestion: raw delimited text -> ordered AuditRecords.

Steps, in order:
- line-ending normalization + split
- delimiter detection from the header (comma unless semicolons win)
- row tokenization with single-layer quote stripping
- locale-dependent balance parsing (the delimiter doubles as the locale hint)
- aging parsing, defaulting to 0
- record building with positional ids

Row problems are absorbed and counted. Batch problems come back as an
IngestFailure value; nothing here raises for bad input.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union

from .models import AuditRecord
from .rules import (
    AGING_COLUMN,
    BALANCE_COLUMN,
    COMMA,
    DATE_COLUMN,
    MIN_COLUMNS,
    NAME_COLUMN,
    RECORD_ID_PREFIX,
    SEMICOLON,
    UNKNOWN_CUSTOMER,
)

logger = logging.getLogger(__name__)

_NON_NUMERIC = re.compile(r"[^0-9.\-]")
_NON_DIGIT = re.compile(r"[^0-9]")
# Leading real-number prefix, read the way a lenient float parser does
_LEADING_REAL = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")


class IngestErrorCode(str, Enum):
    EMPTY_INPUT = "empty_input"
    NO_VALID_RECORDS = "no_valid_records"


@dataclass(frozen=True)
class IngestSuccess:
    records: Tuple[AuditRecord, ...]
    delimiter: str
    lines_read: int
    rows_skipped: int

    ok = True


@dataclass(frozen=True)
class IngestFailure:
    code: IngestErrorCode
    message: str

    ok = False


IngestResult = Union[IngestSuccess, IngestFailure]

EMPTY_INPUT_MESSAGE = "File is empty or contains no data rows."
NO_VALID_RECORDS_MESSAGE = (
    "No valid records found. Please check your CSV format (Name, Balance, Aging, Date)."
)


def split_lines(text: str) -> List[str]:
    """Normalize CRLF/CR to LF and split. Empty trailing lines are kept."""
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


def detect_delimiter(header: str) -> str:
    if header.count(SEMICOLON) > header.count(COMMA):
        return SEMICOLON
    return COMMA


def _unquote(field: str) -> str:
    if len(field) >= 2 and field.startswith('"') and field.endswith('"'):
        return field[1:-1]
    return field


def tokenize_row(line: str, delimiter: str) -> Optional[List[str]]:
    """
    Split one data line into trimmed, unquoted fields.

    Returns None for blank lines and for rows with fewer than two fields.
    """
    stripped = line.strip()
    if not stripped:
        return None

    fields = [_unquote(col.strip()) for col in stripped.split(delimiter)]
    if len(fields) < MIN_COLUMNS:
        return None
    return fields


def parse_balance(raw: str, delimiter: str) -> Optional[float]:
    """
    Parse a balance string using the numeric convention implied by the delimiter.

    Semicolon files use '.' for thousands and ',' for decimals (1.000.000,50);
    comma files use ',' for thousands (1,000,000.50). Currency symbols and
    other text are dropped. Returns None when no number can be read.
    """
    if delimiter == SEMICOLON:
        cleaned = raw.replace(".", "").replace(",", ".", 1)
    else:
        cleaned = raw.replace(",", "")

    cleaned = _NON_NUMERIC.sub("", cleaned)
    match = _LEADING_REAL.match(cleaned)
    if match is None:
        return None

    value = float(match.group(0))
    if not math.isfinite(value):
        return None
    return value


def parse_aging(raw: Optional[str]) -> int:
    if not raw:
        return 0
    digits = _NON_DIGIT.sub("", raw)
    if not digits:
        return 0
    try:
        return int(digits)
    except ValueError:
        # past the interpreter's int-string digit limit
        return 0


def _today_iso() -> str:
    return datetime.now(timezone.utc).date().isoformat()


def build_record(
    index: int,
    fields: Sequence[str],
    balance: float,
    aging_days: int,
    *,
    today: Optional[date] = None,
) -> AuditRecord:
    raw_date = fields[DATE_COLUMN] if len(fields) > DATE_COLUMN else ""
    if raw_date:
        invoice_date = raw_date
    elif today is not None:
        invoice_date = today.isoformat()
    else:
        invoice_date = _today_iso()

    return AuditRecord(
        id=f"{RECORD_ID_PREFIX}{index}",
        customer_name=fields[NAME_COLUMN] or UNKNOWN_CUSTOMER,
        total_balance=balance,
        aging_days=aging_days,
        invoice_date=invoice_date,
    )


def ingest(text: str, *, today: Optional[date] = None) -> IngestResult:
    """
    Convert a ledger text blob into an ordered batch of AuditRecords.

    ``today`` overrides the processing date used for rows without an
    invoice date.
    """
    lines = split_lines(text)
    if len(lines) < 2:
        logger.info("Ledger rejected: %d line(s), header and data required", len(lines))
        return IngestFailure(IngestErrorCode.EMPTY_INPUT, EMPTY_INPUT_MESSAGE)

    delimiter = detect_delimiter(lines[0])
    records: List[AuditRecord] = []
    skipped = 0

    for index in range(1, len(lines)):
        fields = tokenize_row(lines[index], delimiter)
        if fields is None:
            if lines[index].strip():
                skipped += 1
                logger.debug("Row %d skipped: fewer than %d columns", index, MIN_COLUMNS)
            continue

        balance = parse_balance(fields[BALANCE_COLUMN], delimiter)
        if balance is None:
            skipped += 1
            logger.debug("Row %d skipped: unreadable balance %r", index, fields[BALANCE_COLUMN])
            continue

        raw_aging = fields[AGING_COLUMN] if len(fields) > AGING_COLUMN else None
        aging_days = parse_aging(raw_aging)
        records.append(build_record(index, fields, balance, aging_days, today=today))

    if not records:
        logger.warning("Ledger rejected: no valid records in %d line(s)", len(lines))
        return IngestFailure(IngestErrorCode.NO_VALID_RECORDS, NO_VALID_RECORDS_MESSAGE)

    logger.info(
        "Ledger ingested: %d record(s), %d row(s) skipped, delimiter %r",
        len(records),
        skipped,
        delimiter,
    )
    return IngestSuccess(
        records=tuple(records),
        delimiter=delimiter,
        lines_read=len(lines),
        rows_skipped=skipped,
    )
