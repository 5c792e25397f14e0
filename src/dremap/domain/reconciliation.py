"""Bulk reconciliation of unmapped accounts."""

import logging
from typing import Sequence

from dremap.database.base import Database
from dremap.domain.entities import BulkResult, MappingEntry
from dremap.domain.errors import (
    BatchValidationError,
    ValidationError,
    batch_entry_invalid,
    empty_batch,
)
from dremap.domain.mapping import clean_mapping_fields, require_client_id

logger = logging.getLogger(__name__)


class ReconciliationService:
    """Service for applying a batch of mappings all-or-nothing."""

    def __init__(self, db: Database):
        """Initialize reconciliation service.

        Args:
            db: Database instance
        """
        self.db = db

    def validate_batch(self, entries: Sequence[MappingEntry]) -> list[MappingEntry]:
        """Validate every entry and collapse duplicate codes.

        Later entries for the same account code replace earlier ones, so the
        result holds one entry per distinct code in first-seen order.

        Raises:
            BatchValidationError: For an empty batch or on the first invalid entry
        """
        if not entries:
            raise BatchValidationError(empty_batch())

        cleaned: dict[str, MappingEntry] = {}
        for index, entry in enumerate(entries):
            try:
                code, name, label = clean_mapping_fields(
                    entry.account_code, entry.account_name, entry.category
                )
            except ValidationError as e:
                logger.warning("Rejected mapping batch at entry %d: %s", index + 1, e)
                raise BatchValidationError(
                    batch_entry_invalid(index, str(entry.account_code), e),
                    index=index,
                    account_code=entry.account_code,
                ) from e
            cleaned[code] = MappingEntry(account_code=code, account_name=name, category=label)

        return list(cleaned.values())

    def bulk_apply(self, client_id: str, entries: Sequence[MappingEntry]) -> BulkResult:
        """Validate a batch of mappings and apply it.

        No entry is written unless every entry is valid. The accepted batch is
        written in a single transaction, so a storage failure applies nothing.

        Args:
            client_id: Client ID
            entries: Mappings to create or update

        Returns:
            BulkResult with the number of distinct account codes applied

        Raises:
            ValidationError: If client ID is blank
            BatchValidationError: If the batch is empty or any entry is invalid
            PersistenceError: If the database write fails
        """
        client_id = require_client_id(client_id)
        batch = self.validate_batch(entries)

        applied = self.db.upsert_mappings(client_id, batch)
        logger.info(
            "Applied %d mappings for %s (%d entries submitted)", applied, client_id, len(entries)
        )
        return BulkResult(applied=applied)
