import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    PROTEAN_ENV must be set before the domain module is imported, because the
    config overlay and the log level are read at import time.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env

    from storefront.domain import storefront

    storefront.init()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def storefront_domain():
    from storefront.domain import storefront

    return storefront


@pytest.fixture(scope="session", autouse=True)
def setup_db(storefront_domain):
    from storefront.utils.db import drop_db, setup_db

    setup_db(storefront_domain)

    yield

    drop_db(storefront_domain)


@pytest.fixture(autouse=True)
def run_around_tests(storefront_domain):
    """Push domain context before each test, cleanup after."""
    from storefront.notifications import reset_mailer

    reset_mailer()
    ctx = storefront_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()
    reset_mailer()


# ---------------------------------------------------------------------------
# Shared builders
# ---------------------------------------------------------------------------
@pytest.fixture()
def mailer():
    from storefront.notifications import get_mailer

    return get_mailer()


@pytest.fixture()
def create_category():
    from protean import current_domain
    from storefront.catalogue.category.management import CreateCategory

    def _create(name="Apparel", description=None):
        return current_domain.process(CreateCategory(name=name, description=description), asynchronous=False)

    return _create


@pytest.fixture()
def create_product(create_category):
    from protean import current_domain
    from storefront.catalogue.product.creation import CreateProduct

    category_ids = []

    def _create(name="Black T-Shirt", price=19.99, stock=10, category_id=None, **extra):
        if category_id is None:
            if not category_ids:
                category_ids.append(create_category())
            category_id = category_ids[0]
        command = CreateProduct(name=name, price=price, stock=stock, category_id=category_id, **extra)
        return current_domain.process(command, asynchronous=False)

    return _create


@pytest.fixture()
def register_user():
    from protean import current_domain
    from storefront.identity.user.registration import RegisterUser

    def _register(email="jane.doe@example.com", password="s3cret-pass", first_name="Jane", last_name="Doe"):
        command = RegisterUser(email=email, password=password, first_name=first_name, last_name=last_name)
        return current_domain.process(command, asynchronous=False)

    return _register


@pytest.fixture()
def add_address():
    from protean import current_domain
    from storefront.identity.user.addresses import AddAddress

    def _add(user_id, street="12 rue de la Paix", is_default=False, **overrides):
        fields = {
            "first_name": "Jane",
            "last_name": "Doe",
            "city": "Paris",
            "zip_code": "75002",
            "country": "France",
        }
        fields.update(overrides)
        command = AddAddress(user_id=user_id, street=street, is_default=is_default, **fields)
        return current_domain.process(command, asynchronous=False)

    return _add


@pytest.fixture()
def shopper(register_user, add_address):
    """A registered user with one (default) address. Returns (user_id, address_id)."""
    user_id = register_user()
    address_id = add_address(user_id)
    return user_id, address_id


@pytest.fixture()
def client(storefront_domain):
    from fastapi.testclient import TestClient
    from storefront.api.application import create_app

    return TestClient(create_app(storefront_domain))


@pytest.fixture()
def admin_headers(register_user):
    from protean import current_domain
    from storefront.identity.user.registration import PromoteToAdmin

    register_user(email="boss@example.com", first_name="Bo", last_name="Ss")
    admin_id = current_domain.process(PromoteToAdmin(email="boss@example.com"), asynchronous=False)
    return {"X-User-Id": admin_id}
