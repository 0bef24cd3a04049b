"""End-to-end CRUD round trip against an in-memory SQLite database (aiosqlite)."""

from datetime import datetime
from uuid import UUID, uuid4

import pytest
from pydantic import Field
from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from dataservices.domain.exceptions import QueryExecutionError
from dataservices.domain.models.entity import Entity
from dataservices.infrastructure.database import create_session_factory
from dataservices.infrastructure.persistence.dialect import get_dialect
from dataservices.infrastructure.persistence.repositories.sql import SqlDataService

_SCHEMA = [
    """
    CREATE TABLE person (
        person_id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT,
        age INTEGER,
        height REAL,
        created_at TIMESTAMP
    )
    """,
    """
    CREATE TABLE notes (
        note_id CHAR(32) PRIMARY KEY,
        body TEXT NOT NULL
    )
    """,
]


class Person(Entity):
    __tablename__ = "person"
    __id_column__ = "person_id"

    id: int | None = Field(default=None, alias="person_id")
    name: str
    age: int
    height: float
    created_at: datetime | None = None


class Note(Entity):
    __tablename__ = "notes"
    __id_column__ = "note_id"

    id: UUID = Field(default_factory=uuid4, alias="note_id")
    body: str


@pytest.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        for ddl in _SCHEMA:
            await conn.execute(text(ddl))
    yield engine
    await engine.dispose()


@pytest.fixture
async def session(engine):
    async with create_session_factory(engine)() as session:
        yield session


# None: the session's own dialect; "default": generic SQL text. Keys come back
# through RETURNING either way, since the executing driver supports it.
@pytest.mark.parametrize("dialect", [None, "sqlite", "default"])
async def test_crud(session, dialect):
    people = SqlDataService(session, Person, dialect=dialect)
    created_at = datetime(2024, 5, 1, 12, 30)

    # create
    created = await people.create(
        Person(name="Thuc Le", age=25, height=165.5, created_at=created_at)
    )
    assert created.id is not None
    assert created.name == "Thuc Le"
    assert created.age == 25
    assert created.height == 165.5
    assert created.created_at == created_at

    # update
    updating = created.model_copy(update={"name": "ledongthuc", "height": 170.1})
    updated = await people.update(updating.id, updating)
    assert updated.id == created.id
    assert updated.name == "ledongthuc"
    assert updated.age == 25
    assert updated.height == 170.1
    assert updated.created_at == created_at

    # update columns
    await people.update_columns(updated.id, {"name": "Thuc Le", "height": 165.5})
    fetched = await people.get_by_id(updated.id)
    assert fetched.name == "Thuc Le"
    assert fetched.age == 25
    assert fetched.height == 165.5
    assert fetched.created_at == created_at

    # second record
    created2 = await people.create(
        Person(name="Thuc Le (2)", age=252, height=165.52, created_at=created_at)
    )
    assert created2.id != created.id

    # list
    listed = {p.id: p for p in await people.get_list()}
    assert set(listed) == {created.id, created2.id}
    assert listed[created.id].name == "Thuc Le"
    assert listed[created2.id].age == 252

    # delete
    await people.delete(created.id)
    await people.delete(created2.id)
    assert await people.get_list() == []
    assert await people.get_by_id(created.id) is None


async def test_get_dialect_returns_configured_dialect(session):
    sqlite = get_dialect("sqlite")
    assert SqlDataService(session, Person, dialect=sqlite).get_dialect() == sqlite


async def test_get_dialect_defaults_to_session_dialect(session):
    assert SqlDataService(session, Person).get_dialect().name == "sqlite"


async def test_create_keeps_client_generated_uuid(session):
    notes = SqlDataService(session, Note)
    note = Note(body="remember the milk")
    created = await notes.create(note)
    assert created.id == note.id
    assert (await notes.get_by_id(note.id)).body == "remember the milk"


async def test_duplicate_key_is_wrapped(session):
    notes = SqlDataService(session, Note)
    note = await notes.create(Note(body="first"))
    with pytest.raises(QueryExecutionError, match="fail to execute insert statement"):
        await notes.create(Note(id=note.id, body="second"))


async def test_missing_table_is_wrapped(session):
    class Ghost(Entity):
        __tablename__ = "ghosts"

        id: int | None = None

    with pytest.raises(QueryExecutionError, match="fail to execute select statement"):
        await SqlDataService(session, Ghost).get_list()


async def test_connection_handle(engine):
    async with engine.connect() as conn:
        people = SqlDataService(conn, Person)
        assert people.get_dialect().name == "sqlite"

        created = await people.create(Person(name="Duy Nguyen", age=25, height=180.5))
        assert created.name == "Duy Nguyen"

        await people.update_columns(created.id, {"age": 26})
        assert (await people.get_by_id(created.id)).age == 26

        updated = await people.update(created.id, created.model_copy(update={"name": "duyn"}))
        assert updated.name == "duyn"
        assert updated.age == 25

        assert [p.id for p in await people.get_list()] == [created.id]
        await people.delete(created.id)
        assert await people.get_list() == []
