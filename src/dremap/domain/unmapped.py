"""Detection of accounts referenced by movements but not yet mapped."""

import logging
from typing import Optional

from dremap.database.base import Database
from dremap.domain.account_code import code_sort_key, validate_code
from dremap.domain.entities import StatementType, UnmappedAccount
from dremap.domain.errors import CorruptMovementError, InvalidCodeError
from dremap.domain.mapping import MappingService
from dremap.domain.movement import MovementService, parse_statement_type
from dremap.domain.taxonomy import is_valid_category

logger = logging.getLogger(__name__)


class UnmappedService:
    """Service for finding the mapping gaps of a statement period."""

    def __init__(self, db: Database):
        """Initialize unmapped account service.

        Args:
            db: Database instance
        """
        self.db = db
        self.mapping_service = MappingService(db)
        self.movement_service = MovementService(db)

    def find_unmapped(
        self,
        client_id: str,
        year: int,
        statement_type: StatementType | str,
        level: Optional[int] = None,
    ) -> list[UnmappedAccount]:
        """Find accounts used by a period's movements that lack a usable mapping.

        An account is reported when it has no mapping, when its mapping has an
        empty category, or when the mapped category is no longer part of the
        taxonomy. In the last two cases ``category`` carries the stored value.

        Args:
            client_id: Client ID
            year: Fiscal year
            statement_type: "dre" or "patrimonial"
            level: If given, only accounts of this level are checked

        Returns:
            Unmapped accounts ordered by code, segment by segment. Empty when
            the period has no movements or every account is mapped.

        Raises:
            CorruptMovementError: If a movement references a malformed code
        """
        statement = parse_statement_type(statement_type)
        referenced = self.movement_service.list_referenced_accounts(
            client_id, year, statement, level=level
        )

        unmapped = []
        for account in referenced:
            try:
                validate_code(account.code)
            except InvalidCodeError as e:
                logger.warning("Invalid code %r in movements of %s/%d", account.code, client_id, year)
                raise CorruptMovementError(account.code, client_id, year, statement.value) from e

            mapping = self.mapping_service.get_mapping(client_id, account.code)
            if mapping is not None and is_valid_category(mapping.category):
                continue

            unmapped.append(
                UnmappedAccount(
                    id=account.id,
                    code=account.code,
                    name=account.name,
                    level=account.level,
                    category=(mapping.category or None) if mapping is not None else None,
                )
            )

        unmapped.sort(key=lambda a: code_sort_key(a.code))
        logger.debug(
            "%d of %d accounts unmapped for %s/%d (%s)",
            len(unmapped),
            len(referenced),
            client_id,
            year,
            statement.value,
        )
        return unmapped
