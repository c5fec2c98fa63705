import pytest

from shopify_orm.utils.inflection import (
    pluralize,
    singularize,
    to_lower_camel_case,
    to_pascal_case,
)


@pytest.mark.parametrize(
    ("singular", "plural"),
    [
        ("customer", "customers"),
        ("productVariant", "productVariants"),
        ("mailingAddress", "mailingAddresses"),
        ("category", "categories"),
        ("person", "people"),
        ("inventory", "inventory"),
    ],
)
def test_pluralize(singular, plural):
    assert pluralize(singular) == plural


@pytest.mark.parametrize(
    ("plural", "singular"),
    [
        ("orders", "order"),
        ("lineItems", "lineItem"),
        ("addresses", "address"),
        ("categories", "category"),
        ("people", "person"),
        ("variant", "variant"),
    ],
)
def test_singularize(plural, singular):
    assert singularize(plural) == singular


def test_case_conversion():
    assert to_pascal_case("line_item") == "LineItem"
    assert to_pascal_case("customer") == "Customer"
    assert to_lower_camel_case("MailingAddress") == "mailingAddress"
    assert to_lower_camel_case("default_address") == "defaultAddress"
