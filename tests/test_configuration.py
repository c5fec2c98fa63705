import logging

import pytest
from django.test import override_settings

from shopify_orm.configuration import (
    Configuration,
    configure,
    get_configuration,
    reset_configuration,
)
from shopify_orm.test import TestClient


def test_default_configuration():
    config = get_configuration()

    assert config == Configuration()
    assert config.admin_api_client is None
    assert config.customer_account_client_class is None
    assert config.logger is None
    assert config.log_queries is False
    assert config.compact_queries is False
    assert config.max_objects_per_paginated_query == 250


def test_configure_updates_configuration():
    logger = logging.getLogger("shopify_orm.test")
    client = TestClient()

    config = configure(admin_api_client=client, logger=logger, log_queries=True)

    assert config is get_configuration()
    assert config.admin_api_client is client
    assert config.logger is logger
    assert config.log_queries is True
    assert config.compact_queries is False


def test_configure_keeps_previous_options():
    client = TestClient()
    configure(admin_api_client=client)
    configure(compact_queries=True)

    assert get_configuration().admin_api_client is client
    assert get_configuration().compact_queries is True


def test_configure_unknown_option():
    with pytest.raises(TypeError):
        configure(unknown_option=True)


def test_configuration_from_settings():
    with override_settings(
        SHOPIFY_ORM={"COMPACT_QUERIES": True, "MAX_OBJECTS_PER_PAGINATED_QUERY": 50},
    ):
        config = reset_configuration()

    assert config.compact_queries is True
    assert config.max_objects_per_paginated_query == 50
    assert config.log_queries is False


def test_reset_configuration():
    configure(admin_api_client=TestClient(), compact_queries=True)

    reset_configuration()

    assert get_configuration() == Configuration()


def test_test_client_configured_restores_previous_client():
    previous = TestClient()
    configure(admin_api_client=previous)

    with TestClient().configured() as client:
        assert get_configuration().admin_api_client is client

    assert get_configuration().admin_api_client is previous
