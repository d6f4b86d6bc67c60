import pytest
import httpx

from newsdesk.config import Settings


TEST_SECRET = "test-secret"


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        jwt_secret=TEST_SECRET,
        bcrypt_rounds=4,
        news_api_key=None,
        database_url=None,
    )


@pytest.fixture
def user_repository():
    from newsdesk.repositories.user_repository import InMemoryUserRepository
    return InMemoryUserRepository()


@pytest.fixture
def app(settings, user_repository):
    from newsdesk.main import create_application
    return create_application(settings, user_repository=user_repository)


@pytest.fixture
async def async_client(app):
    from httpx import AsyncClient, ASGITransport

    # Use ASGITransport for direct app interaction
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def signup_and_login(async_client):
    async def _signup_and_login(email="a@b.com", password="abcdef", **extra):
        response = await async_client.post(
            "/users/signup", json={"email": email, "password": password, **extra}
        )
        assert response.status_code == 200
        response = await async_client.post("/users/login", json={"email": email, "password": password})
        assert response.status_code == 200
        return response.json()["token"]

    return _signup_and_login


@pytest.fixture
def auth_headers():
    def _auth_headers(token):
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest.fixture
def news_articles_payload():
    return {
        "status": "ok",
        "totalResults": 2,
        "articles": [
            {
                "source": {"id": None, "name": "The Verge"},
                "title": "Chip makers race ahead",
                "url": "https://example.com/chips",
            },
            {
                "source": {"id": "bbc-news", "name": "BBC News"},
                "title": "Climate summit opens",
                "url": "https://example.com/climate",
            },
        ],
    }


@pytest.fixture
def mock_transport_factory():
    def _factory(handler):
        requests = []

        def _handler(request: httpx.Request):
            requests.append(request)
            return handler(request)

        transport = httpx.MockTransport(_handler)
        transport.requests = requests
        return transport

    return _factory
