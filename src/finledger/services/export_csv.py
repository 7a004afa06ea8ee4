"""CSV export of wallet transactions."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable

from ..errors import TransferError
from ..logging_config import get_logger
from ..models.transaction import Transaction
from ..money import plain_amount

logger = get_logger(__name__)

CSV_HEADERS = ["date", "type", "category", "description", "amount"]


def serialize_row(tx: Transaction) -> list[str]:
    return [
        tx.occurred_on.isoformat(),
        tx.type.value,
        tx.category,
        tx.description,
        plain_amount(tx.amount),
    ]


def export_transactions_csv(*, transactions: Iterable[Transaction], output_path: Path) -> Path:
    """Write transactions to CSV at ``output_path`` in storage order.

    Fields containing a comma, quote or newline are quoted. Returns the path
    written.
    """

    count = 0
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        # Use newline='' for csv on Windows
        with output_path.open("w", newline="", encoding="utf-8") as fh:
            writer = csv.writer(fh, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
            writer.writerow(CSV_HEADERS)
            for tx in transactions:
                writer.writerow(serialize_row(tx))
                count += 1
    except OSError as exc:
        raise TransferError(
            f"Could not write export file: {exc}",
            details={"path": str(output_path)},
            original_error=exc,
        ) from exc

    logger.info("Transactions exported", extra={"path": str(output_path), "rows": count})
    return output_path
