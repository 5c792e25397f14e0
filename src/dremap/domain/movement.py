"""Movement ledger domain service."""

import logging
from decimal import Decimal, InvalidOperation
from typing import Optional, Sequence

from dremap.database.base import Database
from dremap.domain.account_code import clean_code
from dremap.domain.entities import (
    Movement as MovementEntity,
    MovementInput,
    ReferencedAccount,
    StatementType,
)
from dremap.domain.errors import (
    InvalidCodeError,
    ValidationError,
    invalid_statement_type,
    movement_row_invalid,
)
from dremap.domain.mapping import require_client_id

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12

# Spreadsheet error markers that mean the row carried no usable category
INVALID_CATEGORY_MARKERS = {"#REF!", "#REF", "#N/A", "#VALUE!"}


def parse_statement_type(value: StatementType | str) -> StatementType:
    """Resolve a statement type from its enum member or string value.

    Raises:
        ValidationError: If the value is not a known statement type
    """
    if isinstance(value, StatementType):
        return value
    try:
        return StatementType(str(value).strip().lower())
    except ValueError as e:
        raise ValidationError(invalid_statement_type(value)) from e


def require_year(year: int) -> int:
    """Return the year or raise ValidationError if it is not a positive integer."""
    if isinstance(year, bool) or not isinstance(year, int) or year <= 0:
        raise ValidationError(f"Invalid year '{year}'")
    return year


class MovementService:
    """Service for managing monthly movements of client statements."""

    def __init__(self, db: Database):
        """Initialize movement service.

        Args:
            db: Database instance
        """
        self.db = db

    def _clean_movement(self, row: int, movement: MovementInput) -> MovementInput:
        """Validate one movement row and return its trimmed copy."""
        try:
            code = clean_code(movement.code)
        except InvalidCodeError as e:
            raise ValidationError(movement_row_invalid(row, str(e))) from e

        name = movement.name.strip() if movement.name else ""
        if not name:
            raise ValidationError(movement_row_invalid(row, f"account name is required (code: {code})"))

        if len(movement.values) != MONTHS_PER_YEAR:
            raise ValidationError(
                movement_row_invalid(
                    row,
                    f"{code} must have exactly {MONTHS_PER_YEAR} monthly values, "
                    f"got {len(movement.values)}",
                )
            )

        if isinstance(movement.level, bool) or not isinstance(movement.level, int) or movement.level < 1:
            raise ValidationError(movement_row_invalid(row, f"{code} has invalid level '{movement.level}'"))

        try:
            values = tuple(Decimal(str(v)) for v in movement.values)
        except InvalidOperation as e:
            raise ValidationError(movement_row_invalid(row, f"{code} has a non-numeric value")) from e

        if not all(v.is_finite() for v in values):
            raise ValidationError(movement_row_invalid(row, f"{code} has a non-finite value"))

        category = movement.category.strip() if movement.category else None
        if category in INVALID_CATEGORY_MARKERS:
            category = None

        return MovementInput(
            code=code,
            name=name,
            values=values,
            level=movement.level,
            category=category or None,
        )

    def import_movements(
        self,
        client_id: str,
        year: int,
        statement_type: StatementType | str,
        movements: Sequence[MovementInput],
    ) -> int:
        """Replace a client's movements for one year and statement type.

        Every row is validated before anything is written; existing movements
        of the same client, year and type are removed in the same transaction.

        Args:
            client_id: Client ID
            year: Fiscal year
            statement_type: "dre" or "patrimonial"
            movements: Rows to store

        Returns:
            Number of movements imported

        Raises:
            ValidationError: If any row is invalid or no rows are given
            PersistenceError: If the database write fails
        """
        client_id = require_client_id(client_id)
        year = require_year(year)
        statement = parse_statement_type(statement_type)

        if not movements:
            raise ValidationError("Year and a non-empty list of movements are required")

        cleaned = [self._clean_movement(row, m) for row, m in enumerate(movements, start=1)]

        count = self.db.replace_movements(client_id, year, statement, cleaned)
        logger.info(
            "Imported %d %s movements for %s/%d", count, statement.value, client_id, year
        )
        return count

    def list_movements(
        self,
        client_id: str,
        year: int,
        statement_type: Optional[StatementType | str] = None,
    ) -> list[MovementEntity]:
        """List movements of a client's year, optionally for one statement type."""
        client_id = require_client_id(client_id)
        statement = parse_statement_type(statement_type) if statement_type is not None else None
        return self.db.list_movements(client_id, require_year(year), statement)

    def remove_movements(
        self,
        client_id: str,
        year: int,
        statement_type: Optional[StatementType | str] = None,
    ) -> int:
        """Remove movements of a client's year, optionally for one statement type.

        Returns:
            Number of movements removed
        """
        client_id = require_client_id(client_id)
        statement = parse_statement_type(statement_type) if statement_type is not None else None
        removed = self.db.delete_movements(client_id, require_year(year), statement)
        logger.info("Removed %d movements for %s/%d", removed, client_id, year)
        return removed

    def list_referenced_accounts(
        self,
        client_id: str,
        year: int,
        statement_type: StatementType | str,
        level: Optional[int] = None,
    ) -> list[ReferencedAccount]:
        """List the distinct accounts a period's movements reference.

        Codes are returned as stored; callers decide how to treat corrupt ones.
        """
        client_id = require_client_id(client_id)
        statement = parse_statement_type(statement_type)
        return self.db.list_referenced_accounts(client_id, require_year(year), statement, level)
