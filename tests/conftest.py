import pytest

from shopify_orm.configuration import configure, reset_configuration
from shopify_orm.test import TestClient


@pytest.fixture(autouse=True)
def _reset_configuration():
    reset_configuration()
    yield
    reset_configuration()


@pytest.fixture
def admin_client():
    client = TestClient()
    configure(admin_api_client=client)
    return client


@pytest.fixture
def customer_response():
    return {
        "data": {
            "customer": {
                "id": "gid://shopify/Customer/1",
                "display_name": "Jane Doe",
                "defaultEmailAddress": {"emailAddress": "jane@example.com"},
                "orders_count": "3",
            },
        },
    }
