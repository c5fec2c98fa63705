from shopify_orm import Model, attribute, connection, has_many_connected
from shopify_orm.fields import ShopifyAttribute, ShopifyConnection, populate_inverse_cache
from tests.models import Customer, LineItem, Order, Product, ProductVariant


def test_attribute_defaults():
    attr = Customer.display_name

    assert isinstance(attr, ShopifyAttribute)
    assert attr.name == "display_name"
    assert attr.path == "displayName"
    assert attr.type == "string"
    assert attr.null is True
    assert not attr.has_default
    assert not attr.is_nested


def test_attribute_with_path():
    attr = Order.total

    assert attr.path == "totalPriceSet.shopMoney.amount"
    assert attr.path_parts == ["totalPriceSet", "shopMoney", "amount"]
    assert attr.is_nested
    assert attr.type == "float"


def test_attribute_with_default():
    assert Customer.orders_count.has_default
    assert Customer.orders_count.default == 0


def test_metafield_attribute():
    care_guide = Product.care_guide
    specs = Product.specs

    assert care_guide.is_metafield
    assert care_guide.metafield_alias == "careGuideMetafield"
    assert care_guide.metafield_namespace == "custom"
    assert care_guide.metafield_key == "care_guide"
    assert care_guide.path == "careGuideMetafield.value"
    assert specs.path == "specsMetafield.jsonValue"


def test_attribute_descriptor_stores_values():
    customer = Customer(display_name="Jane")

    assert customer.display_name == "Jane"
    assert customer.email is None

    customer.email = "jane@example.com"
    assert customer.__dict__["email"] == "jane@example.com"


def test_connection_defaults():
    orders = Customer.orders

    assert isinstance(orders, ShopifyConnection)
    assert orders.name == "orders"
    assert orders.class_name == "Order"
    assert orders.query_name == "orders"
    assert orders.type == "connection"
    assert orders.nested is True
    assert orders.target is Order
    assert not orders.needs_alias


def test_connection_name_inference():
    assert Order.line_items.class_name == "LineItem"
    assert Order.line_items.query_name == "lineItems"
    assert Order.line_items.needs_alias
    assert Order.line_items.target is LineItem

    assert Order.customer.is_singular
    assert Order.customer.class_name == "Customer"
    assert Order.customer.target is Customer


def test_connection_default_arguments_are_kept_as_declared():
    assert Customer.orders.default_arguments == {"first": 10}
    assert Product.variants.default_arguments == {"first": 25}
    assert ProductVariant.product.default_arguments == {}


def test_connection_with_class_target():
    class Shop(Model):
        id = attribute()
        products = has_many_connected(class_name=Product, nested=False)

    assert Shop.products.target is Product
    assert Shop.products.nested is False


def test_populate_inverse_cache_singular():
    customer = Customer(id="1")
    orders = [Order(id="1"), Order(id="2")]

    populate_inverse_cache(customer, Customer.orders, orders)

    assert all(order._connection_cache["customer"] is customer for order in orders)


def test_populate_inverse_cache_has_many_appends_owner():
    variant = ProductVariant(id="1")
    first = Product(id="1")
    second = Product(id="2")

    populate_inverse_cache(first, Product.variants, variant)
    populate_inverse_cache(second, Product.variants, variant)
    populate_inverse_cache(second, Product.variants, variant)

    assert variant._connection_cache["product"] is second

    order = Order(id="1")
    customer = Customer(id="1")
    populate_inverse_cache(order, Order.customer, customer)
    populate_inverse_cache(order, Order.customer, customer)

    assert customer._connection_cache["orders"] == [order]


def test_populate_inverse_cache_ignores_unknown_inverse():
    order = Order(id="1")
    line_item = LineItem(id="1")
    line_items = connection(class_name=LineItem, inverse_of="order").bind(
        "line_items",
    )

    populate_inverse_cache(order, line_items, [line_item])

    assert line_item._connection_cache == {}
