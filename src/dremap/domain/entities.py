"""Domain model entities for dremap.

These are pure data classes representing business concepts, independent of
database schema. Persistence details stay in the database layer so the
mapping rules do not change when the storage backend does.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class StatementType(str, Enum):
    """Financial statement a movement belongs to."""

    DRE = "dre"
    PATRIMONIAL = "patrimonial"


@dataclass(frozen=True)
class Mapping:
    """Account code to report category assignment for one client."""

    id: int
    client_id: str
    account_code: str
    account_name: str
    category: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class MappingEntry:
    """One requested mapping in a bulk reconciliation batch."""

    account_code: str
    account_name: str
    category: str


@dataclass(frozen=True)
class BulkResult:
    """Outcome of an accepted bulk reconciliation batch."""

    applied: int


@dataclass(frozen=True)
class Movement:
    """Monthly movement of one account in a client's statement."""

    id: int
    client_id: str
    year: int
    statement_type: StatementType
    code: str
    name: str
    level: int
    category: Optional[str]
    values: tuple[Decimal, ...] = ()
    imported_at: Optional[datetime] = None


@dataclass(frozen=True)
class ReferencedAccount:
    """Distinct account referenced by a period's movements."""

    id: int
    code: str
    name: str
    level: int


@dataclass(frozen=True)
class UnmappedAccount:
    """Account referenced by movements that still needs a category.

    Never persisted; ``category`` carries the existing mapping value when
    the account has one that is empty or no longer valid.
    """

    id: int
    code: str
    name: str
    level: int
    category: Optional[str] = None


@dataclass(frozen=True)
class MovementInput:
    """One account row of a movement import, before it is stored."""

    code: str
    name: str
    values: tuple[Decimal, ...]
    level: int = 1
    category: Optional[str] = None
