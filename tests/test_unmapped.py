"""Tests for UnmappedService."""

import logging

import pytest
from sqlalchemy import text

from dremap.domain.entities import MovementInput, StatementType, UnmappedAccount
from dremap.domain.errors import CorruptMovementError, DomainError, PersistenceError

from conftest import make_movement


def test_find_unmapped_no_movements(unmapped_service):
    """Test that a period without movements has nothing unmapped."""
    assert unmapped_service.find_unmapped("c1", 2025, "dre") == []


def test_find_unmapped_all(unmapped_service, sample_movements):
    """Test that every account is unmapped before any mapping exists."""
    accounts = unmapped_service.find_unmapped("c1", 2025, "dre")

    assert len(accounts) == len(sample_movements)
    assert all(isinstance(a, UnmappedAccount) for a in accounts)
    assert all(a.category is None for a in accounts)


def test_find_unmapped_excludes_mapped(unmapped_service, mapping_service, sample_movements):
    """Test that mapping an account removes it from the result."""
    mapping_service.upsert_mapping("c1", "03.1.01.01.0001", "RECEITA DE VENDAS", "Receita Bruta")

    codes = [a.code for a in unmapped_service.find_unmapped("c1", 2025, "dre", level=15)]

    assert "03.1.01.01.0001" not in codes
    assert "03.1.01.01.0002" in codes


def test_find_unmapped_after_full_mapping(unmapped_service, mapping_service, sample_movements):
    """Test that nothing is returned once every account is mapped."""
    for m in sample_movements:
        mapping_service.upsert_mapping("c1", m.code, m.name, "Outras Despesas")

    assert unmapped_service.find_unmapped("c1", 2025, "dre") == []


def test_find_unmapped_sorted_by_segments(unmapped_service, movement_service):
    """Test segment-numeric ordering of the result."""
    movement_service.import_movements(
        "c1", 2025, "dre", [make_movement("3.10"), make_movement("3.9"), make_movement("3.2")]
    )

    codes = [a.code for a in unmapped_service.find_unmapped("c1", 2025, "dre")]

    assert codes == ["3.2", "3.9", "3.10"]


def test_find_unmapped_ignores_other_clients(unmapped_service, mapping_service, sample_movements):
    """Test that another client's mapping does not count."""
    mapping_service.upsert_mapping("c2", "04.1.01.01.0001", "CUSTO", "Custos Das Vendas")

    codes = [a.code for a in unmapped_service.find_unmapped("c1", 2025, "dre")]

    assert "04.1.01.01.0001" in codes


def test_find_unmapped_by_statement_type(unmapped_service, movement_service, sample_movements):
    """Test that only the requested statement type is checked."""
    movement_service.import_movements("c1", 2025, "patrimonial", [make_movement("01.1.01")])

    accounts = unmapped_service.find_unmapped("c1", 2025, StatementType.PATRIMONIAL)

    assert [a.code for a in accounts] == ["01.1.01"]


def test_find_unmapped_level_filter(unmapped_service, sample_movements):
    """Test restricting the check to one level."""
    accounts = unmapped_service.find_unmapped("c1", 2025, "dre", level=4)

    assert [a.code for a in accounts] == ["03.1"]
    assert accounts[0].level == 4


def test_find_unmapped_resurfaces_stale_category(unmapped_service, mapping_service, temp_db, sample_movements):
    """Test that a mapping whose category left the taxonomy is reported again."""
    mapping_service.upsert_mapping("c1", "04.2.01.01.0010", "ALUGUEL", "Outras Despesas")
    # Simulate a category retired from the taxonomy
    temp_db.upsert_mapping("c1", "04.2.01.01.0010", "ALUGUEL", "Despesas Gerais")

    accounts = {a.code: a for a in unmapped_service.find_unmapped("c1", 2025, "dre")}

    assert accounts["04.2.01.01.0010"].category == "Despesas Gerais"


def test_find_unmapped_resurfaces_empty_category(unmapped_service, temp_db, sample_movements):
    """Test that a mapping with an empty category counts as unmapped."""
    temp_db.upsert_mapping("c1", "04.2.01.01.0010", "ALUGUEL", "")

    accounts = {a.code: a for a in unmapped_service.find_unmapped("c1", 2025, "dre")}

    assert "04.2.01.01.0010" in accounts
    assert accounts["04.2.01.01.0010"].category is None


def test_find_unmapped_corrupt_code(unmapped_service, temp_db, caplog):
    """Test that a malformed stored code is reported, not skipped."""
    from decimal import Decimal

    temp_db.replace_movements(
        "c1",
        2025,
        StatementType.DRE,
        [MovementInput(code="03..1", name="QUEBRADA", values=(Decimal("0"),) * 12)],
    )

    with caplog.at_level(logging.WARNING, logger="dremap"):
        with pytest.raises(CorruptMovementError) as exc_info:
            unmapped_service.find_unmapped("c1", 2025, "dre")

    assert exc_info.value.code == "03..1"
    assert isinstance(exc_info.value, DomainError)
    assert "03..1" in caplog.text


def test_find_unmapped_invalid_statement_type(unmapped_service):
    """Test that unknown statement types are rejected."""
    with pytest.raises(DomainError, match="Invalid statement type"):
        unmapped_service.find_unmapped("c1", 2025, "balanco")


def test_find_unmapped_storage_failure(unmapped_service, temp_db):
    """Test that a failing movement read surfaces as PersistenceError."""
    session = temp_db._get_session()
    session.execute(text("DROP TABLE monthly_movements"))
    session.commit()

    with pytest.raises(PersistenceError, match="Could not read movements"):
        unmapped_service.find_unmapped("c1", 2025, "dre")


def test_find_unmapped_mapping_read_failure(unmapped_service, temp_db, sample_movements):
    """Test that a failing mapping lookup surfaces as a domain error."""
    session = temp_db._get_session()
    session.execute(text("DROP TABLE dre_mappings"))
    session.commit()

    with pytest.raises(DomainError, match="Could not read mapping"):
        unmapped_service.find_unmapped("c1", 2025, "dre")
