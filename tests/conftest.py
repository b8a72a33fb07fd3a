import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool
from sqlalchemy.orm import Session
from sqlmodel import SQLModel

from searchable import TableColumns
from tests.stubs import Author, Post


@pytest.fixture
def engine():
    """In-memory SQLite database with the stub tables"""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        session.add_all(
            [
                Author(id=1, name="John Smith", age=34),
                Author(id=2, name="Ana Lopez", age=27),
                Author(id=3, name="Zed", age=None),
            ]
        )
        session.add_all(
            [
                Post(id=1, title="My Daily Posts", description="A diary of every day", author_id=1),
                Post(id=2, title="Cooking with Ana", description="Recipes", author_id=2),
                Post(id=3, title="Daily news", description=None, author_id=3),
                Post(id=4, title="Random thoughts", description="misc", author_id=None),
            ]
        )
        session.commit()
        yield session


@pytest.fixture
def table_columns(engine):
    return TableColumns(engine)
