"""Pytest configuration and fixtures."""

import os

# Token issuing needs a secret; set it before settings are first loaded
os.environ.setdefault("JWT_SECRET", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker

from src.database import Base, build_engine, create_schemas, get_db
from src.main import create_auth_app, create_catalogue_app
from src.models import Category, Ingredient, User


class GatewayHeaders(dict):
    """Dict of gateway headers that also stores user_id."""

    def __init__(self, *args, user_id: int | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id


def gateway_headers_for(user_id: int, email: str) -> GatewayHeaders:
    """Headers the API gateway would inject for an authenticated caller."""
    return GatewayHeaders({"X-User-Id": str(user_id), "X-User-Email": email}, user_id=user_id)


# Use test database - PostgreSQL when DATABASE_URL is set, SQLite otherwise
if os.getenv("DATABASE_URL"):
    _url = make_url(os.getenv("DATABASE_URL"))
    SQLALCHEMY_DATABASE_URL = _url.set(database=f"{_url.database}_test").render_as_string(
        hide_password=False
    )
else:
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

engine = build_engine(SQLALCHEMY_DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)
        create_schemas(engine)

    Base.metadata.create_all(bind=engine)
    yield
    # Tables are left in place; each test cleans up after itself


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="session")
def auth_app():
    return create_auth_app()


@pytest.fixture(scope="session")
def catalogue_app():
    return create_catalogue_app()


def _client_for(app, db):
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture(scope="function")
def auth_client(auth_app, db):
    """Test client for the auth service."""
    with _client_for(auth_app, db) as test_client:
        yield test_client
    auth_app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def client(catalogue_app, db):
    """Test client for the recipe-catalogue service."""
    with _client_for(catalogue_app, db) as test_client:
        yield test_client
    catalogue_app.dependency_overrides.clear()


@pytest.fixture
def gateway_headers():
    """Builder for the headers the gateway injects."""
    return gateway_headers_for


@pytest.fixture
def make_user(db):
    """Factory creating users directly in the database."""

    def _make_user(email: str) -> GatewayHeaders:
        user = User(email=email, password_hash="not-a-real-hash")
        db.add(user)
        db.commit()
        return gateway_headers_for(user.id, user.email)

    return _make_user


@pytest.fixture
def auth_headers(make_user):
    """Gateway headers for the main test user."""
    return make_user("owner@example.com")


@pytest.fixture
def other_headers(make_user):
    """Gateway headers for a second user who owns nothing."""
    return make_user("other@example.com")


@pytest.fixture
def category_id(db):
    """ID of a seeded recipe category."""
    category = Category(name="Chicken", description="Chicken and poultry dishes")
    db.add(category)
    db.commit()
    return category.id


@pytest.fixture
def make_ingredient(db):
    """Factory creating catalogue ingredients directly in the database."""

    def _make_ingredient(name: str, category: str | None = None) -> int:
        ingredient = Ingredient(name=name, category=category)
        db.add(ingredient)
        db.commit()
        return ingredient.id

    return _make_ingredient


@pytest.fixture
def create_recipe(client, auth_headers, category_id):
    """Create a recipe through the API, owned by the main test user."""

    def _create_recipe(name: str = "Test Recipe", headers=None, **fields) -> dict:
        payload = {"name": name, "category_id": category_id, **fields}
        response = client.post("/recipes", headers=headers or auth_headers, json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _create_recipe
