import datetime

import pytest

from shopify_orm.exceptions import SearchQueryError
from shopify_orm.query.search import (
    SearchQuery,
    bind_parameters,
    format_conditions,
    sanitize,
)


@pytest.mark.parametrize(
    ("conditions", "expected"),
    [
        ({"status": "open"}, "status:open"),
        ({"email": "jane@example.com"}, "email:jane@example.com"),
        ({"title": "red shirt"}, 'title:"red shirt"'),
        ({"title": 'the "best" shirt'}, 'title:"the \\"best\\" shirt"'),
        ({"orders_count": 5}, "orders_count:5"),
        ({"gift_card": True}, "gift_card:true"),
        ({"created_at": datetime.date(2024, 1, 1)}, "created_at:2024-01-01"),
        ({"status": "open", "id": [1, 2]}, "status:open AND (id:1 OR id:2)"),
        ({"tag": ["sale"]}, "tag:sale"),
        ({"tag": []}, ""),
        ({"vendor": None, "status": "active"}, "status:active"),
        (
            {"created_at": {"gte": "2024-01-01", "lt": "2024-02-01"}},
            "created_at:>=2024-01-01 created_at:<2024-02-01",
        ),
        ({"total_price": {">": 100}}, "total_price:>100"),
    ],
)
def test_format_conditions(conditions, expected):
    assert format_conditions(conditions) == expected


def test_format_conditions_unsupported_range_operator():
    with pytest.raises(SearchQueryError, match="Unsupported range operator 'between'"):
        format_conditions({"created_at": {"between": "2024-01-01"}})


def test_sanitize():
    assert sanitize("it's") == "it\\'s"
    assert sanitize('say "hi"') == 'say \\"hi\\"'
    assert sanitize("back\\slash") == "back\\\\slash"


def test_bind_positional_parameters():
    assert bind_parameters("sku:? AND vendor:?", "A-1", "Acme Inc") == (
        "sku:'A-1' AND vendor:'Acme Inc'"
    )
    assert bind_parameters("title:?", "it's") == "title:'it\\'s'"
    assert bind_parameters("inventory_total:>? AND gift_card:?", 5, False) == (
        "inventory_total:>5 AND gift_card:false"
    )
    assert bind_parameters("sku:? AND vendor:?", "A-1") == "sku:'A-1' AND vendor:?"


def test_bind_named_parameters():
    assert bind_parameters("sku::sku", sku="A-1") == "sku:'A-1'"
    assert bind_parameters("sku::sku AND vendor::vendor", sku="A-1") == (
        "sku:'A-1' AND vendor::vendor"
    )
    assert bind_parameters("note::note", note=None) == "note:null"


def test_search_query():
    assert SearchQuery({"status": "open"}).to_string() == "status:open"
    assert SearchQuery("status:open").to_string() == "status:open"
    assert SearchQuery("email:?", "jane@example.com").to_string() == (
        "email:'jane@example.com'"
    )
    assert str(SearchQuery("sku::sku", sku="A-1")) == "sku:'A-1'"


def test_search_query_from_list():
    assert SearchQuery(["sku:? AND vendor:?", "A-1", "Acme"]).to_string() == (
        "sku:'A-1' AND vendor:'Acme'"
    )
    assert SearchQuery(["sku::sku", {"sku": "A-1"}]).to_string() == "sku:'A-1'"


def test_empty_search_query():
    assert SearchQuery().to_string() == ""
    assert SearchQuery({}).to_string() == ""
    assert SearchQuery("").to_string() == ""
    assert not SearchQuery(None)
    assert SearchQuery({"status": "open"})


def test_unsupported_search_query():
    with pytest.raises(SearchQueryError):
        SearchQuery(42).to_string()
