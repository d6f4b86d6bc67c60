import pytest

from newsdesk.core.database import build_engine, build_session_factory, create_tables, drop_tables
from newsdesk.models.user import UserRecord
from newsdesk.repositories.user_repository import InMemoryUserRepository, SqlUserRepository


@pytest.fixture
def sql_repository():
    engine = build_engine("sqlite:///:memory:")
    create_tables(engine)
    try:
        yield SqlUserRepository(build_session_factory(engine))
    finally:
        drop_tables(engine)
        engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def repository(request):
    if request.param == "memory":
        return InMemoryUserRepository()
    return request.getfixturevalue("sql_repository")


def test_get_unknown_email_returns_none(repository):
    assert repository.get("nobody@b.com") is None


def test_save_then_get(repository):
    user = UserRecord(name="Ada", email="ada@b.com", password_hash="hash", preferences=["ai", "ai", "space"])
    repository.save(user)

    stored = repository.get("ada@b.com")
    assert stored == user
    assert stored.preferences == ["ai", "ai", "space"]


def test_save_replaces_existing_record(repository):
    repository.save(UserRecord(name="First", email="a@b.com", password_hash="one", preferences=["x"]))
    repository.save(UserRecord(email="a@b.com", password_hash="two"))

    stored = repository.get("a@b.com")
    assert stored.name == ""
    assert stored.password_hash == "two"
    assert stored.preferences == []


def test_records_are_immutable():
    user = UserRecord(email="a@b.com", password_hash="hash")
    with pytest.raises(Exception):
        user.preferences = ["ai"]


def test_in_memory_store_keys_by_email():
    repository = InMemoryUserRepository()
    repository.save(UserRecord(email="a@b.com", password_hash="one"))
    repository.save(UserRecord(email="c@d.com", password_hash="two"))
    repository.save(UserRecord(email="a@b.com", password_hash="three"))

    assert len(repository) == 2


@pytest.mark.asyncio
async def test_database_url_selects_sql_store(settings):
    from httpx import AsyncClient, ASGITransport
    from newsdesk.main import create_application

    app = create_application(settings.model_copy(update={"database_url": "sqlite://"}))
    assert isinstance(app.state.user_repository, SqlUserRepository)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post("/users/signup", json={"email": "Sql@B.com", "password": "abcdef", "preferences": ["ai"]})
        assert response.status_code == 200

        response = await client.post("/users/login", json={"email": "sql@b.com", "password": "abcdef"})
        assert response.status_code == 200
        token = response.json()["token"]

        headers = {"Authorization": f"Bearer {token}"}
        response = await client.put("/users/preferences", json={"preferences": ["space", "ai"]}, headers=headers)
        assert response.status_code == 200

        response = await client.get("/users/preferences", headers=headers)
        assert response.json() == {"preferences": ["space", "ai"]}

    stored = app.state.user_repository.get("sql@b.com")
    assert stored.preferences == ["space", "ai"]
