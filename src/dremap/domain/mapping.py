"""Mapping store domain service."""

import logging
from typing import Optional

from dremap.database.base import Database
from dremap.domain.account_code import clean_code, code_sort_key
from dremap.domain.entities import Mapping as MappingEntity
from dremap.domain.errors import EmptyNameError, ValidationError, empty_client_id
from dremap.domain.taxonomy import require_category

logger = logging.getLogger(__name__)


def require_client_id(client_id: str) -> str:
    """Return the stripped client ID or raise ValidationError if blank."""
    if not isinstance(client_id, str) or not client_id.strip():
        raise ValidationError(empty_client_id())
    return client_id.strip()


def clean_mapping_fields(account_code: str, account_name: str, category: str) -> tuple[str, str, str]:
    """Validate and trim the fields of one mapping.

    Returns:
        Tuple of (account_code, account_name, category label)

    Raises:
        InvalidCodeError: If the account code is malformed
        EmptyNameError: If the account name is blank
        UnknownCategoryError: If the category is not in the taxonomy
    """
    code = clean_code(account_code)
    name = account_name.strip() if isinstance(account_name, str) else ""
    if not name:
        raise EmptyNameError(code)
    return code, name, require_category(category).value


class MappingService:
    """Service for managing per-client account mappings."""

    def __init__(self, db: Database):
        """Initialize mapping service.

        Args:
            db: Database instance
        """
        self.db = db

    def upsert_mapping(
        self, client_id: str, account_code: str, account_name: str, category: str
    ) -> MappingEntity:
        """Create or update the mapping of an account.

        Calling this twice with the same arguments leaves one row whose
        ``created_at`` comes from the first call.

        Args:
            client_id: Client ID
            account_code: Account code (e.g., "03.1.01.01.0001")
            account_name: Account name
            category: Category label (e.g., "Receita Bruta")

        Returns:
            The stored mapping

        Raises:
            ValidationError: If client ID is blank
            InvalidCodeError: If the account code is malformed
            EmptyNameError: If the account name is blank
            UnknownCategoryError: If the category is not in the taxonomy
            PersistenceError: If the database write fails
        """
        client_id = require_client_id(client_id)
        code, name, label = clean_mapping_fields(account_code, account_name, category)

        mapping = self.db.upsert_mapping(
            client_id=client_id, account_code=code, account_name=name, category=label
        )
        logger.info("Mapped %s/%s to '%s'", client_id, code, label)
        return mapping

    def get_mapping(self, client_id: str, account_code: str) -> Optional[MappingEntity]:
        """Get the mapping of an account.

        Returns:
            Mapping entity or None if the account is not mapped
        """
        client_id = require_client_id(client_id)
        return self.db.get_mapping(client_id, clean_code(account_code))

    def list_mappings(self, client_id: str) -> list[MappingEntity]:
        """List a client's mappings ordered by account code."""
        client_id = require_client_id(client_id)
        mappings = self.db.list_mappings(client_id)
        return sorted(mappings, key=lambda m: code_sort_key(m.account_code))

    def delete_mapping(self, client_id: str, account_code: str) -> bool:
        """Delete the mapping of an account.

        Deleting an unmapped account is not an error.

        Returns:
            True if a mapping was removed, False if there was none
        """
        client_id = require_client_id(client_id)
        code = clean_code(account_code)
        removed = self.db.delete_mapping(client_id, code)
        if removed:
            logger.info("Removed mapping %s/%s", client_id, code)
        else:
            logger.debug("No mapping to remove for %s/%s", client_id, code)
        return removed
