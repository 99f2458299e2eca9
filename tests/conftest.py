import os

os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-" + "x" * 64
os.environ["JWT_ALGORITHM"] = "HS512"
os.environ["JWT_MOCK_ENABLED"] = "False"
os.environ["OPENAPI_OUTPUT_FILE"] = ""

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from customer_api.app.database import Base, get_db, get_db_transaction
from customer_api.app.main import app
from customer_api.app.models.customer import Customer
from customer_api.app.util.auth import create_access_token

CUSTOMERS_URL = "/api/v1/customers"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        with get_db_transaction(session_factory) as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def bearer(roles):
    token = create_access_token("test-user", roles=roles, extra_claims={"preferred_username": "test.user@example.com"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers():
    return bearer(["Admin"])


@pytest.fixture
def user_headers():
    return bearer(["User"])


@pytest.fixture
def no_role_headers():
    return bearer([])


@pytest.fixture
def customer_payload():
    return {
        "firstName": "John",
        "lastName": "Wick",
        "email": "jwick@tester.com",
        "phoneNumber": "0123456789",
        "dateOfBirth": "1989-01-02",
    }


@pytest.fixture
def stored_customer(session_factory):
    with get_db_transaction(session_factory) as session:
        customer = Customer(
            first_name="John",
            last_name="Wick",
            email="jwick@tester.com",
            phone_number="0123456789",
            date_of_birth=date(1989, 1, 2),
        )
        session.add(customer)
        session.flush()
        session.refresh(customer)
    return customer


@pytest.fixture
def customer_count(session_factory):
    def count() -> int:
        with get_db_transaction(session_factory) as session:
            return session.query(Customer).count()
    return count
