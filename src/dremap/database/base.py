"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

# Import entities directly to avoid circular import through domain/__init__.py
from dremap.domain.entities import (
    Mapping,
    MappingEntry,
    Movement,
    MovementInput,
    ReferencedAccount,
    StatementType,
)


class Database(ABC):
    """Abstract database interface for dremap.

    Implementations raise PersistenceError for storage failures and leave
    no partial state behind when they do.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Mapping operations
    @abstractmethod
    def upsert_mapping(
        self, client_id: str, account_code: str, account_name: str, category: str
    ) -> Mapping:
        """Insert or update the mapping for (client_id, account_code)."""
        pass

    @abstractmethod
    def upsert_mappings(self, client_id: str, entries: Sequence[MappingEntry]) -> int:
        """Upsert several mappings in one transaction. Returns number written.

        Entries must have distinct account codes.
        """
        pass

    @abstractmethod
    def get_mapping(self, client_id: str, account_code: str) -> Optional[Mapping]:
        """Get mapping by client and account code."""
        pass

    @abstractmethod
    def list_mappings(self, client_id: str) -> list[Mapping]:
        """List all mappings of a client."""
        pass

    @abstractmethod
    def count_mappings(self, client_id: str) -> int:
        """Count mappings of a client."""
        pass

    @abstractmethod
    def delete_mapping(self, client_id: str, account_code: str) -> bool:
        """Delete mapping if present. Returns True if a row was removed."""
        pass

    # Movement operations
    @abstractmethod
    def replace_movements(
        self,
        client_id: str,
        year: int,
        statement_type: StatementType,
        movements: Sequence[MovementInput],
    ) -> int:
        """Replace all movements of a client/year/type. Returns number stored."""
        pass

    @abstractmethod
    def list_movements(
        self, client_id: str, year: int, statement_type: Optional[StatementType] = None
    ) -> list[Movement]:
        """List movements, optionally filtered by statement type."""
        pass

    @abstractmethod
    def delete_movements(
        self, client_id: str, year: int, statement_type: Optional[StatementType] = None
    ) -> int:
        """Delete movements, optionally filtered by statement type. Returns count."""
        pass

    @abstractmethod
    def list_referenced_accounts(
        self,
        client_id: str,
        year: int,
        statement_type: StatementType,
        level: Optional[int] = None,
    ) -> list[ReferencedAccount]:
        """List one referenced account per distinct movement code.

        Args:
            client_id: Client ID
            year: Fiscal year
            statement_type: Statement the movements belong to
            level: If given, only movements with this level are considered
        """
        pass
