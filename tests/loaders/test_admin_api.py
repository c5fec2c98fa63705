import logging

import pytest

from shopify_orm.configuration import Configuration, configure
from shopify_orm.exceptions import ClientNotConfiguredError, SearchQueryError
from shopify_orm.loaders import AdminApiLoader, Loader
from tests.models import Customer, LineItem, Order

CUSTOMERS_PAGE = {
    "data": {
        "customers": {
            "pageInfo": {
                "hasNextPage": True,
                "hasPreviousPage": False,
                "startCursor": "c1",
                "endCursor": "c2",
            },
            "nodes": [
                {"id": "gid://shopify/Customer/1", "display_name": "Jane"},
                {"id": "gid://shopify/Customer/2", "display_name": "John"},
            ],
        },
    },
}


def test_admin_client_not_configured():
    loader = AdminApiLoader(Customer)

    with pytest.raises(ClientNotConfiguredError) as exc_info:
        loader.load_attributes(1)

    assert str(exc_info.value) == (
        "Admin API client not configured. "
        "Please configure it using shopify_orm.configure(admin_api_client=...)"
    )


def test_base_loader_execute_not_implemented():
    with pytest.raises(NotImplementedError):
        Loader(Customer).perform_graphql_query("query { shop { name } }")


def test_load_attributes(admin_client, customer_response):
    admin_client.add_response(customer_response)

    attributes = AdminApiLoader(Customer).load_attributes(1)

    assert attributes == {
        "id": "gid://shopify/Customer/1",
        "display_name": "Jane Doe",
        "email": "jane@example.com",
        "orders_count": 3,
    }
    assert admin_client.last_call.variables == {"id": "gid://shopify/Customer/1"}


def test_load_attributes_empty_response(admin_client):
    assert AdminApiLoader(Customer).load_attributes(1) is None


def test_load_attributes_with_configuration(customer_response, mocker):
    client = mocker.Mock()
    client.execute.return_value = customer_response
    config = Configuration(admin_api_client=client)

    attributes = AdminApiLoader(Customer, configuration=config).load_attributes(1)

    assert attributes["display_name"] == "Jane Doe"
    client.execute.assert_called_once()


def test_load_collection(admin_client):
    admin_client.add_response(
        {"data": {"customers": {"nodes": [{"id": "gid://shopify/Customer/1"}]}}},
    )

    customers = AdminApiLoader(Customer).load_collection({"email": "jane@example.com"}, limit=5)

    assert [c.id for c in customers] == ["gid://shopify/Customer/1"]
    assert admin_client.last_call.variables == {
        "query": "email:jane@example.com",
        "first": 5,
    }
    assert "query getCustomers($query: String, $first: Int!)" in admin_client.last_call.query


def test_load_collection_without_conditions(admin_client):
    AdminApiLoader(Customer).load_collection()

    assert admin_client.last_call.variables == {"query": None, "first": 250}


def test_load_collection_search_warnings(admin_client):
    admin_client.add_response(
        {
            "data": {"customers": {"nodes": []}},
            "extensions": {
                "search": [{"warnings": [{"field": "foo", "message": "Invalid field"}]}],
            },
        },
    )

    with pytest.raises(SearchQueryError):
        AdminApiLoader(Customer).load_collection({"foo": "bar"})


def test_load_paginated_collection(admin_client):
    admin_client.add_response(CUSTOMERS_PAGE)
    admin_client.add_response(
        {
            "data": {
                "customers": {
                    "pageInfo": {"hasNextPage": False, "hasPreviousPage": True},
                    "nodes": [{"id": "gid://shopify/Customer/3", "display_name": "Ann"}],
                },
            },
        },
    )

    page = AdminApiLoader(Customer).load_paginated_collection({"state": "ENABLED"}, 2)

    assert [c.display_name for c in page] == ["Jane", "John"]
    assert page.has_next_page
    assert page.end_cursor == "c2"
    assert admin_client.last_call.variables == {
        "query": "state:ENABLED",
        "first": 2,
        "after": None,
    }

    next_page = page.next_page()

    assert [c.display_name for c in next_page] == ["Ann"]
    assert not next_page.has_next_page
    assert admin_client.last_call.variables == {
        "query": "state:ENABLED",
        "first": 2,
        "after": "c2",
    }


def test_load_paginated_collection_before_cursor(admin_client):
    AdminApiLoader(Customer).load_paginated_collection(per_page=10, before="c1")

    assert admin_client.last_call.variables == {
        "query": None,
        "last": 10,
        "before": "c1",
    }


def test_load_paginated_collection_page_size_is_capped(admin_client):
    configure(max_objects_per_paginated_query=50)

    page = AdminApiLoader(Customer).load_paginated_collection(per_page=100)

    assert admin_client.last_call.variables["first"] == 50
    assert len(page) == 0
    assert page.next_page() is None


def test_load_connection_records_normalizes_parent_gid(admin_client):
    admin_client.add_response(
        {
            "data": {
                "order": {
                    "lineItems": {
                        "edges": [{"node": {"id": "gid://shopify/LineItem/1", "quantity": "2"}}],
                    },
                },
            },
        },
    )

    line_items = AdminApiLoader(LineItem).load_connection_records(
        "lineItems",
        {"first": 50},
        parent=Order(id=5),
        connection=Order.line_items,
    )

    assert [item.quantity for item in line_items] == [2]
    assert admin_client.last_call.variables == {"id": "gid://shopify/Order/5"}
    assert "order(id: $id)" in admin_client.last_call.query


def test_load_connection_records_from_root(admin_client):
    records = AdminApiLoader(Order).load_connection_records("orders", {"first": 2})

    assert records == []
    assert admin_client.last_call.variables == {}


def test_query_logging(admin_client, customer_response, mocker):
    logger = mocker.Mock(spec=logging.Logger)
    configure(logger=logger, log_queries=True)
    admin_client.add_response(customer_response)

    AdminApiLoader(Customer).load_attributes(1)

    call = admin_client.last_call
    logger.info.assert_any_call("GraphQL query: %s", call.query)
    logger.info.assert_any_call("GraphQL variables: %s", {"id": "gid://shopify/Customer/1"})


def test_query_logging_disabled(admin_client, mocker):
    logger = mocker.Mock(spec=logging.Logger)
    configure(logger=logger, log_queries=False)

    AdminApiLoader(Customer).load_attributes(1)

    logger.info.assert_not_called()


def test_debug_logging(admin_client, caplog):
    with caplog.at_level(logging.DEBUG, logger="shopify_orm.loaders.base"):
        AdminApiLoader(Customer).load_attributes(1)

    assert "AdminApiLoader executing query for Customer" in caplog.text
