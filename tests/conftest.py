"""Shared fixtures: a fresh SQLite database per test and builders."""
import time
import uuid

import pytest
from fastapi.testclient import TestClient

from bookstore_api.app.core.config import Settings
from bookstore_api.app.core.db import init_db
from bookstore_api.app.core.security import create_access_token, hash_password
from bookstore_api.app.events import EventDispatcher
from bookstore_api.app.main import create_app
from bookstore_api.app.models import Book, Customer, CustomerStatus, Role
from bookstore_api.app.repositories import BookRepository, CustomerRepository, PurchaseRepository
from bookstore_api.app.services import BookService, CustomerService, PurchaseService


def build_customer(id=None, name="Customer Name", email=None, password="password", roles=None):
    return Customer(
        id=id,
        name=name,
        email=email or f"{uuid.uuid4()}@email.com",
        password=password,
        status=CustomerStatus.ACTIVE,
        roles=roles or {Role.CUSTOMER},
    )


def build_book(name="Book Name", price=10.0, customer_id=None):
    return Book(name=name, price=price, customer_id=customer_id)


def wait_for(predicate, timeout=3.0, interval=0.02):
    """Poll ``predicate`` until it returns truthy or ``timeout`` expires."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return bool(predicate())


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=str(tmp_path / "bookstore-test.db"),
        secret_key="test-secret",
        event_queue_size=10,
        event_drain_timeout=2.0,
        admin_email="",
        admin_password="",
    )


@pytest.fixture
def db_path(settings):
    init_db(settings.database_url)
    return settings.database_url


@pytest.fixture
def customer_repository(db_path):
    return CustomerRepository(db_path)


@pytest.fixture
def book_repository(db_path):
    return BookRepository(db_path)


@pytest.fixture
def purchase_repository(db_path, customer_repository, book_repository):
    return PurchaseRepository(db_path, customer_repository, book_repository)


@pytest.fixture
def book_service(book_repository):
    return BookService(book_repository)


@pytest.fixture
def customer_service(customer_repository, book_service):
    return CustomerService(customer_repository, book_service)


@pytest.fixture
def dispatcher():
    return EventDispatcher(maxsize=10, drain_timeout=2.0)


@pytest.fixture
def purchase_service(purchase_repository, customer_service, book_service, dispatcher):
    return PurchaseService(purchase_repository, customer_service, book_service, dispatcher)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def store(app, client):
    """The running app's customer repository (the client fixture has migrated the DB)."""
    return app.state.customer_repository


@pytest.fixture
def make_customer(store):
    """Insert a customer with a hashed password straight into the store."""

    def _make(name="Customer Name", email=None, password="password", roles=None):
        customer = build_customer(name=name, email=email, password=hash_password(password), roles=roles)
        return store.save(customer)

    return _make


@pytest.fixture
def auth_headers(settings):
    def _headers(customer):
        token = create_access_token({"sub": customer.email}, settings)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def admin(make_customer):
    return make_customer(name="Admin", roles={Role.CUSTOMER, Role.ADMIN})


@pytest.fixture
def admin_headers(admin, auth_headers):
    return auth_headers(admin)
