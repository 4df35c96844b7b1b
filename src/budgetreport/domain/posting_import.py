"""DATEV posting import domain service."""

import csv
import logging
import re
from datetime import date
from pathlib import Path
from typing import Any

from budgetreport.database.base import Database
from budgetreport.domain.account import AccountService
from budgetreport.domain.errors import NotFoundError, ValidationError
from budgetreport.domain.posting import PostingService
from budgetreport.domain.value import DecimalValue
from budgetreport.utils.amount_parser import parse_amount
from budgetreport.utils.date_parser import parse_date

logger = logging.getLogger(__name__)

# DATEV "Buchungsstapel" column names
AMOUNT_COLUMN = "Umsatz (ohne Soll/Haben-Kz)"
SIDE_COLUMN = "Soll/Haben-Kennzeichen"
ACCOUNT_COLUMN = "Konto"
CONTRA_ACCOUNT_COLUMN = "Gegenkonto (ohne BU-Schlüssel)"
BOOKING_DATE_COLUMN = "Buchungsdatum"
RECEIPT_DATE_COLUMN = "Belegdatum"
TEXT_COLUMN = "Buchungstext"

DEBIT = "S"
CREDIT = "H"

_COMPACT_DATE = re.compile(r"^(\d{4})(\d{2})(\d{2})$")


def parse_datev_date(value: str) -> date:
    """Parse a DATEV date: ``YYYYMMDD`` or any format ``parse_date`` accepts.

    Raises:
        ValueError: If the date cannot be parsed
    """
    match = _COMPACT_DATE.match(value.strip())
    if match:
        year, month, day = (int(part) for part in match.groups())
        try:
            return date(year, month, day)
        except ValueError as e:
            raise ValueError(f"Could not parse date '{value}': {e}")
    return parse_date(value)


class PostingImportService:
    """Service for importing postings from DATEV CSV exports.

    Each row moves an amount from the credit account to the debit account.
    ``Konto`` is the debit account when the side marker is ``S`` and the
    credit account when it is ``H``; ``Gegenkonto`` is the other one. The
    debit account receives the amount and the credit account its negation.
    Accounts are matched by their display code; sides whose code is not a
    known account are ignored.
    """

    def __init__(self, db: Database):
        """Initialize posting import service.

        Args:
            db: Database instance
        """
        self.db = db
        self.account_service = AccountService(db)
        self.posting_service = PostingService(db)

    def import_datev(self, csv_file_path: str, encoding: str = "utf-8-sig") -> dict[str, Any]:
        """Import postings from a DATEV CSV export.

        Lines before the column header (the DATEV metadata record) are
        ignored.

        Args:
            csv_file_path: Path to the semicolon separated export
            encoding: Text encoding of the file

        Returns:
            Dict with import statistics:
            - imported: number of postings recorded
            - skipped: number of rows touching no known account
            - skipped_details: one message per skipped row
            - errors: one message per row that could not be read

        Raises:
            NotFoundError: If the file does not exist
            ValidationError: If the file cannot be decoded or has no DATEV header
        """
        csv_path = Path(csv_file_path)
        if not csv_path.exists():
            raise NotFoundError(f"CSV file not found: {csv_file_path}")

        try:
            text = csv_path.read_text(encoding=encoding)
        except UnicodeDecodeError as e:
            raise ValidationError(f"Could not decode {csv_file_path} as {encoding}: {e}") from e

        rows = list(csv.reader(text.splitlines(), delimiter=";"))
        header_idx = next(
            (i for i, row in enumerate(rows) if AMOUNT_COLUMN in row and SIDE_COLUMN in row),
            None,
        )
        if header_idx is None:
            raise ValidationError(
                f"DATEV header not found: expected columns '{AMOUNT_COLUMN}' and '{SIDE_COLUMN}'"
            )
        header = [column.strip() for column in rows[header_idx]]

        account_ids = {
            acc.code: acc.id for acc in self.account_service.list_accounts() if acc.code
        }

        imported = 0
        skipped_details = []
        errors = []

        # Row numbers are 1-based file lines
        for row_num, row in enumerate(rows[header_idx + 1 :], start=header_idx + 2):
            if not any(cell.strip() for cell in row):
                continue
            record = {
                column: (row[i].strip() if i < len(row) else "")
                for i, column in enumerate(header)
            }

            try:
                postings = self._postings_for_record(record, account_ids)
            except ValueError as e:
                errors.append(f"Row {row_num}: {e}")
                continue

            if not postings:
                skipped_details.append(
                    f"Row {row_num}: no known account among "
                    f"{record.get(ACCOUNT_COLUMN)} / {record.get(CONTRA_ACCOUNT_COLUMN)}"
                )
                continue

            for account_id, posting_date, amount, description in postings:
                self.posting_service.record_posting(
                    account_id, posting_date, amount, description=description
                )
                imported += 1

        logger.info(
            "Imported %d postings from %s (%d rows skipped, %d errors)",
            imported,
            csv_file_path,
            len(skipped_details),
            len(errors),
        )
        return {
            "imported": imported,
            "skipped": len(skipped_details),
            "skipped_details": skipped_details,
            "errors": errors,
        }

    def _postings_for_record(
        self, record: dict[str, str], account_ids: dict[str, int]
    ) -> list[tuple[int, date, DecimalValue, str | None]]:
        """Turn one DATEV record into (account_id, date, amount, description) tuples.

        Raises:
            ValueError: If a required field is missing or malformed
        """
        amount_str = record.get(AMOUNT_COLUMN)
        if not amount_str:
            raise ValidationError("Missing amount")
        account_code = record.get(ACCOUNT_COLUMN)
        if not account_code:
            raise ValidationError("Missing account")
        contra_code = record.get(CONTRA_ACCOUNT_COLUMN)
        if not contra_code:
            raise ValidationError("Missing contra account")

        date_str = record.get(BOOKING_DATE_COLUMN) or record.get(RECEIPT_DATE_COLUMN)
        if not date_str:
            raise ValidationError("Missing date")

        side = (record.get(SIDE_COLUMN) or DEBIT).upper()
        if side not in (DEBIT, CREDIT):
            raise ValidationError(f"Unknown debit/credit marker '{side}'")

        posting_date = parse_datev_date(date_str)
        amount = parse_amount(amount_str)
        description = record.get(TEXT_COLUMN) or None

        if side == DEBIT:
            debit_code, credit_code = account_code, contra_code
        else:
            debit_code, credit_code = contra_code, account_code

        postings = []
        if debit_code in account_ids:
            postings.append((account_ids[debit_code], posting_date, amount, description))
        if credit_code in account_ids:
            postings.append((account_ids[credit_code], posting_date, amount.negate(), description))
        return postings
