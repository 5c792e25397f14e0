"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, making it easy to change when
the database schema changes.
"""

from decimal import Decimal

from dremap.domain import entities as domain
from dremap.database.models import (
    DREMapping as ORMDREMapping,
    MonthlyMovement as ORMMonthlyMovement,
)


def mapping_to_domain(orm_mapping: ORMDREMapping) -> domain.Mapping:
    """Convert SQLAlchemy DREMapping model to domain Mapping entity."""
    return domain.Mapping(
        id=orm_mapping.id,
        client_id=orm_mapping.client_id,
        account_code=orm_mapping.account_code,
        account_name=orm_mapping.account_name,
        category=orm_mapping.category,
        created_at=orm_mapping.created_at,
        updated_at=orm_mapping.updated_at,
    )


def movement_to_domain(orm_movement: ORMMonthlyMovement) -> domain.Movement:
    """Convert SQLAlchemy MonthlyMovement model to domain Movement entity."""
    return domain.Movement(
        id=orm_movement.id,
        client_id=orm_movement.client_id,
        year=orm_movement.year,
        statement_type=domain.StatementType(orm_movement.statement_type),
        code=orm_movement.code,
        name=orm_movement.name,
        level=orm_movement.level,
        category=orm_movement.category,
        values=tuple(Decimal(str(v)) for v in (orm_movement.values or [])),
        imported_at=orm_movement.imported_at,
    )


def movement_to_referenced_account(orm_movement: ORMMonthlyMovement) -> domain.ReferencedAccount:
    """Convert SQLAlchemy MonthlyMovement model to the account it references."""
    return domain.ReferencedAccount(
        id=orm_movement.id,
        code=orm_movement.code,
        name=orm_movement.name,
        level=orm_movement.level,
    )
