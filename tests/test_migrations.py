"""Tests for the Alembic migration scripts."""

import importlib.util
from collections.abc import Generator
from pathlib import Path
from types import ModuleType

import pytest
from alembic.migration import MigrationContext
from alembic.operations import Operations
from sqlalchemy import Engine, create_engine, inspect

from game_catalog.database import Base
from game_catalog.models import Game, GamePlatform, User  # noqa: F401

VERSIONS_DIR = Path(__file__).resolve().parent.parent / "migrations" / "versions"


def load_revisions() -> list[ModuleType]:
    modules = []
    for path in sorted(VERSIONS_DIR.glob("*.py")):
        spec = importlib.util.spec_from_file_location(path.stem, path)
        assert spec is not None and spec.loader is not None
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        modules.append(module)
    return modules


def run(engine: Engine, step: str) -> None:
    with engine.begin() as connection:
        context = MigrationContext.configure(connection)
        with Operations.context(context):
            for revision in load_revisions():
                getattr(revision, step)()


@pytest.fixture
def engine() -> Generator[Engine]:
    engine = create_engine("sqlite://")
    yield engine
    engine.dispose()


def test_upgrade_matches_models(engine: Engine) -> None:
    run(engine, "upgrade")

    inspector = inspect(engine)
    assert set(inspector.get_table_names()) == set(Base.metadata.tables)
    for name, table in Base.metadata.tables.items():
        columns = {column["name"] for column in inspector.get_columns(name)}
        assert columns == set(table.columns.keys()), name


def test_downgrade_drops_everything(engine: Engine) -> None:
    run(engine, "upgrade")
    run(engine, "downgrade")

    assert inspect(engine).get_table_names() == []
