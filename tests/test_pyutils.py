from shopify_orm.utils.pyutils import compact_dict, dicttree_merge, dig


def test_dicctree_merge():
    assert dicttree_merge(
        {
            "orders": {},
            "line_items": {"variant": {}},
            "default_address": {},
        },
        {
            "orders": {"line_items": {}},
            "line_items": {"product": {}},
            "addresses": {},
        },
    ) == {
        "orders": {"line_items": {}},
        "line_items": {"variant": {}, "product": {}},
        "default_address": {},
        "addresses": {},
    }


def test_dig():
    data = {"totalPriceSet": {"shopMoney": {"amount": "10.00"}}, "note": None}

    assert dig(data, ["totalPriceSet", "shopMoney", "amount"]) == "10.00"
    assert dig(data, ["totalPriceSet", "presentmentMoney", "amount"]) is None
    assert dig(data, ["note", "value"]) is None
    assert dig(data, []) is data
    assert dig(None, ["data"]) is None
    assert dig({"tags": ["a"]}, ["tags", "0"]) is None


def test_compact_dict():
    assert compact_dict({"first": 10, "after": None, "reverse": False}) == {
        "first": 10,
        "reverse": False,
    }
