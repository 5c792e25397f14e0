"""Shared pytest fixtures for dremap tests."""

import logging
import tempfile
import os
from decimal import Decimal
from pathlib import Path
import pytest

from dremap.database.factories import create_sqlite_database
from dremap.domain.entities import MovementInput
from dremap.domain.mapping import MappingService
from dremap.domain.movement import MovementService
from dremap.domain.unmapped import UnmappedService
from dremap.domain.reconciliation import ReconciliationService
from dremap.domain.csv_import import CSVImportService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def mapping_service(temp_db):
    """Create a MappingService with a temporary database."""
    return MappingService(temp_db)


@pytest.fixture
def movement_service(temp_db):
    """Create a MovementService with a temporary database."""
    return MovementService(temp_db)


@pytest.fixture
def unmapped_service(temp_db):
    """Create an UnmappedService with a temporary database."""
    return UnmappedService(temp_db)


@pytest.fixture
def reconciliation_service(temp_db):
    """Create a ReconciliationService with a temporary database."""
    return ReconciliationService(temp_db)


@pytest.fixture
def csv_import_service(temp_db):
    """Create a CSVImportService with a temporary database."""
    return CSVImportService(temp_db)


def make_movement(code, name="CONTA", level=15, category=None, amount="100.00"):
    """Build a movement row with the same amount in every month."""
    return MovementInput(
        code=code,
        name=name,
        values=tuple(Decimal(amount) for _ in range(12)),
        level=level,
        category=category,
    )


@pytest.fixture
def sample_movements(movement_service):
    """Import a small DRE ledger for client c1 in 2025."""
    movements = [
        make_movement("03.1", name="RECEITAS", level=4),
        make_movement("03.1.01.01.0001", name="RECEITA DE VENDAS"),
        make_movement("03.1.01.01.0002", name="RECEITA DE SERVICOS"),
        make_movement("04.1.01.01.0001", name="CUSTO DAS MERCADORIAS", amount="-40.00"),
        make_movement("04.2.01.01.0010", name="ALUGUEL", amount="-10.00"),
    ]
    movement_service.import_movements("c1", 2025, "dre", movements)
    return movements


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def reset_dremap_logging():
    """Detach CLI log handlers so later tests do not write to closed streams."""
    yield
    logger = logging.getLogger("dremap")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
