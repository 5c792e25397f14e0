"""CSV import and export of movements and mappings."""

import csv
import logging
from pathlib import Path
from typing import Any, Optional, Sequence

from dremap.database.base import Database
from dremap.domain.entities import (
    BulkResult,
    MappingEntry,
    MovementInput,
    StatementType,
    UnmappedAccount,
)
from dremap.domain.errors import ValidationError
from dremap.domain.movement import MovementService
from dremap.domain.reconciliation import ReconciliationService
from dremap.domain.taxonomy import normalize_category
from dremap.utils.amount_parser import parse_optional_amount

logger = logging.getLogger(__name__)

# Accepted headers for each month, in calendar order
MONTH_COLUMNS = [
    ("jan", "m01", "1"),
    ("fev", "m02", "2"),
    ("mar", "m03", "3"),
    ("abr", "m04", "4"),
    ("mai", "m05", "5"),
    ("jun", "m06", "6"),
    ("jul", "m07", "7"),
    ("ago", "m08", "8"),
    ("set", "m09", "9"),
    ("out", "m10", "10"),
    ("nov", "m11", "11"),
    ("dez", "m12", "12"),
]

MAPPING_COLUMNS = ["account_code", "account_name", "category"]
UNMAPPED_COLUMNS = MAPPING_COLUMNS + ["level"]

# Alternative headers accepted in mapping files
MAPPING_HEADER_ALIASES = {
    "code": "account_code",
    "name": "account_name",
}


def _open_reader(f) -> csv.DictReader:
    """Create a DictReader, detecting the delimiter from the header line."""
    # Decimal commas in data rows confuse detection, so only the header is sniffed
    sample = f.readline().rstrip("\r\n")
    f.seek(0)
    try:
        delimiter = csv.Sniffer().sniff(sample, delimiters=",;\t").delimiter
    except csv.Error:
        delimiter = ","
    return csv.DictReader(f, delimiter=delimiter)


def _normalized_headers(fieldnames: Optional[Sequence[str]]) -> dict[str, str]:
    """Map lowercase, trimmed header names to the headers as written."""
    if not fieldnames:
        raise ValidationError("CSV file has no columns")
    return {name.strip().lower(): name for name in fieldnames if name is not None}


def _cell(row: dict[str, Any], header: Optional[str]) -> str:
    if header is None:
        return ""
    value = row.get(header)
    return value.strip() if isinstance(value, str) else ""


class CSVImportService:
    """Service for importing and exporting CSV files."""

    def __init__(self, db: Database):
        """Initialize CSV import service.

        Args:
            db: Database instance
        """
        self.db = db
        self.movement_service = MovementService(db)
        self.reconciliation_service = ReconciliationService(db)

    def read_movements(self, csv_file_path: str) -> list[MovementInput]:
        """Read movement rows from a CSV file.

        The file needs ``code`` and ``name`` columns and twelve month columns
        (``jan``..``dez``, ``m01``..``m12`` or ``1``..``12``). ``level`` and
        ``category`` are optional.

        Raises:
            ValidationError: If columns are missing or a row cannot be parsed
            FileNotFoundError: If CSV file doesn't exist
        """
        csv_path = Path(csv_file_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_file_path}")

        movements = []
        with open(csv_path, "r", encoding="utf-8-sig", newline="") as f:
            reader = _open_reader(f)
            headers = _normalized_headers(reader.fieldnames)

            missing = [col for col in ("code", "name") if col not in headers]
            month_headers = []
            for aliases in MONTH_COLUMNS:
                header = next((headers[a] for a in aliases if a in headers), None)
                if header is None:
                    missing.append(aliases[0])
                month_headers.append(header)
            if missing:
                raise ValidationError(f"CSV file missing required columns: {', '.join(missing)}")

            # Start at 2 (header is row 1)
            for row_num, row in enumerate(reader, start=2):
                code = _cell(row, headers["code"])
                if not code and not any(_cell(row, h) for h in row if h):
                    continue

                level_str = _cell(row, headers.get("level"))
                try:
                    level = int(level_str) if level_str else 1
                    values = tuple(parse_optional_amount(row.get(h)) for h in month_headers)
                except ValueError as e:
                    raise ValidationError(f"Row {row_num}: {e}") from e

                movements.append(
                    MovementInput(
                        code=code,
                        name=_cell(row, headers["name"]),
                        values=values,
                        level=level,
                        category=_cell(row, headers.get("category")) or None,
                    )
                )

        return movements

    def import_movements(
        self,
        csv_file_path: str,
        client_id: str,
        year: int,
        statement_type: StatementType | str,
    ) -> int:
        """Import a movement CSV, replacing the period's existing movements.

        Returns:
            Number of movements imported
        """
        movements = self.read_movements(csv_file_path)
        return self.movement_service.import_movements(client_id, year, statement_type, movements)

    def read_mappings(
        self, csv_file_path: str, normalize: bool = False
    ) -> tuple[list[MappingEntry], list[str]]:
        """Read mapping entries from a CSV file.

        Rows with an empty category have not been filled in yet and are
        skipped. With ``normalize``, category labels are resolved through the
        category aliases first; unknown labels are kept as written so that
        validation reports them.

        Returns:
            Tuple of (entries, account codes of skipped rows)

        Raises:
            ValidationError: If required columns are missing
            FileNotFoundError: If CSV file doesn't exist
        """
        csv_path = Path(csv_file_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_file_path}")

        entries = []
        skipped = []
        with open(csv_path, "r", encoding="utf-8-sig", newline="") as f:
            reader = _open_reader(f)
            headers = _normalized_headers(reader.fieldnames)
            for alias, column in MAPPING_HEADER_ALIASES.items():
                if column not in headers and alias in headers:
                    headers[column] = headers[alias]

            missing = [col for col in MAPPING_COLUMNS if col not in headers]
            if missing:
                raise ValidationError(f"CSV file missing required columns: {', '.join(missing)}")

            for row in reader:
                code = _cell(row, headers["account_code"])
                category = _cell(row, headers["category"])
                if not category:
                    if code:
                        skipped.append(code)
                    continue

                if normalize:
                    resolved = normalize_category(category)
                    if resolved is not None:
                        category = resolved.value

                entries.append(
                    MappingEntry(
                        account_code=code,
                        account_name=_cell(row, headers["account_name"]),
                        category=category,
                    )
                )

        if skipped:
            logger.info("Skipped %d rows without a category in %s", len(skipped), csv_file_path)
        return entries, skipped

    def reconcile_csv(
        self, csv_file_path: str, client_id: str, normalize: bool = False
    ) -> tuple[BulkResult, list[str]]:
        """Apply the filled-in rows of a mapping CSV as one batch.

        Returns:
            Tuple of (bulk result, account codes skipped for lacking a category)

        Raises:
            BatchValidationError: If no row is filled in or any row is invalid
        """
        entries, skipped = self.read_mappings(csv_file_path, normalize=normalize)
        result = self.reconciliation_service.bulk_apply(client_id, entries)
        return result, skipped

    def write_unmapped(self, csv_file_path: str, accounts: Sequence[UnmappedAccount]) -> int:
        """Write unmapped accounts to a CSV file that ``read_mappings`` accepts.

        Returns:
            Number of rows written
        """
        with open(csv_file_path, "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(UNMAPPED_COLUMNS)
            for account in accounts:
                writer.writerow([account.code, account.name, account.category or "", account.level])
        return len(accounts)
