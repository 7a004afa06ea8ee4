"""CSV ingestion of transactions into a wallet."""

from __future__ import annotations

import csv
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Iterator, Optional, Sequence

from ..errors import TransferError, ValidationError
from ..logging_config import get_logger
from ..models.transaction import Transaction, TransactionType
from ..models.wallet import Wallet
from ..money import to_decimal

logger = get_logger(__name__)

MIN_FIELDS = 5


@dataclass
class ImportResult:
    """Result of an import operation."""

    imported: int = 0
    skipped: int = 0
    errors: list[str] = field(default_factory=list)


def _skip_reason(fields: Sequence[str]) -> Optional[str]:
    if len(fields) < MIN_FIELDS:
        return "too few columns"
    return None


def parse_row(fields: Sequence[str]) -> Optional[Transaction]:
    """Turn one CSV record into a Transaction, or None when it must be skipped.

    Columns: date, type, category, description, amount. Any type other than
    ``INCOME`` is an expense; the amount may use ``,`` as decimal separator
    and must be positive.
    """

    if _skip_reason(fields) is not None:
        return None
    try:
        occurred_on = date.fromisoformat(fields[0].strip())
        amount = to_decimal(fields[4])
    except (ValueError, ValidationError):
        return None
    if amount <= 0:
        return None
    tx_type = (
        TransactionType.INCOME
        if fields[1].strip().upper() == TransactionType.INCOME.value
        else TransactionType.EXPENSE
    )
    return Transaction(
        type=tx_type,
        amount=amount,
        category=fields[2].strip(),
        description=fields[3].strip(),
        occurred_on=occurred_on,
    )


def _records(lines: list[str]) -> Iterator[tuple[int, Optional[list[str]]]]:
    """Yield ``(line_number, fields)`` for each record after the header line.

    Quoted fields may span lines. A record with broken quoting, or one that
    spans several lines and still does not parse, comes from a stray quote:
    only its first line is dropped (``fields`` is None) and reading resumes on
    the line after it.
    """

    start = 1
    while start < len(lines):
        reader = csv.reader(lines[start:], strict=True)
        consumed = 0
        try:
            for fields in reader:
                line_number = start + consumed + 1
                span = reader.line_num - consumed
                consumed = reader.line_num
                if span > 1 and parse_row(fields) is None:
                    yield line_number, None
                    start = line_number
                    break
                yield line_number, fields
            else:
                return
        except csv.Error:
            line_number = start + consumed + 1
            yield line_number, None
            start = line_number


def import_transactions_csv(wallet: Wallet, *, csv_path: Path) -> ImportResult:
    """Append every valid row of ``csv_path`` to the wallet.

    The first row is a header and is discarded. Blank rows are ignored and
    invalid rows are skipped without aborting the import. The whole file is
    read and parsed before the wallet changes, so a TransferError (the file
    cannot be opened or decoded) leaves the wallet untouched.
    """

    try:
        with csv_path.open("r", newline="", encoding="utf-8-sig") as fh:
            lines = fh.readlines()
    except (OSError, UnicodeDecodeError) as exc:
        raise TransferError(
            f"Could not read import file: {exc}",
            details={"path": str(csv_path)},
            original_error=exc,
        ) from exc

    result = ImportResult()
    parsed: list[Transaction] = []
    for line_number, fields in _records(lines):
        if fields is None:
            reason = "malformed quoting"
        elif not any(value.strip() for value in fields):
            continue
        else:
            tx = parse_row(fields)
            if tx is not None:
                parsed.append(tx)
                continue
            reason = _skip_reason(fields) or "invalid date or amount"
        result.skipped += 1
        result.errors.append(f"line {line_number}: {reason}")
        logger.warning(
            "Skipping CSV row",
            extra={"line": line_number, "reason": reason, "row": fields},
        )

    for tx in parsed:
        wallet.append(tx)
    result.imported = len(parsed)

    logger.info(
        "Transactions imported",
        extra={"path": str(csv_path), "imported": result.imported, "skipped": result.skipped},
    )
    return result
