"""
Tests for the cart state machine on top of the local store.
"""
import pytest

from storefront.cart import CartService

from conftest import FakeCatalog, make_product


@pytest.fixture
def catalog():
    return FakeCatalog({
        "a": make_product("a", "Kettle", None, price=300),
        "b": make_product("b", "Toaster", None, price=250),
        "c": make_product("c", "Mixer", None, price=100, original_price=150),
    })


@pytest.fixture
def cart(store, catalog):
    return CartService(store, catalog)


class TestAdd:

    def test_repeat_add_increments_single_line(self, cart):
        cart.add("a")
        items = cart.add("a")
        assert len(items) == 1
        assert items[0].quantity == 2

    def test_distinct_products_get_distinct_lines(self, cart):
        items = cart.add("b", 2)
        items = cart.add("a")
        assert [(i.product_id, i.quantity) for i in items] == [("b", 2), ("a", 1)]
        assert items[0].id != items[1].id

    def test_add_returns_enriched_view(self, cart):
        items = cart.add("a")
        assert items[0].product.name == "Kettle"

    def test_unknown_product_is_kept_without_details(self, cart):
        items = cart.add("ghost")
        assert items[0].product is None

    def test_zero_quantity_opens_no_line(self, cart):
        assert cart.add("a", 0) == []
        assert cart.count() == 0

    def test_negative_quantity_opens_no_line(self, cart):
        assert cart.add("a", -1) == []

    def test_negative_quantity_subtracts_from_existing(self, cart):
        cart.add("a", 3)
        assert cart.add("a", -1)[0].quantity == 2

    def test_subtracting_to_zero_removes_the_line(self, cart):
        cart.add("a")
        cart.add("b")
        items = cart.add("a", -1)
        assert [i.product_id for i in items] == ["b"]
        assert [l.product_id for l in cart.lines()] == ["b"]

    def test_purchasable_items_skip_missing_products(self, cart):
        cart.add("ghost")
        cart.add("a")
        assert [i.product_id for i in cart.purchasable_items()] == ["a"]


class TestSetQuantity:

    def test_overwrites(self, cart):
        line = cart.add("a")[0]
        assert cart.set_quantity(line.id, 5)[0].quantity == 5

    def test_zero_removes_then_noop(self, cart):
        line = cart.add("a")[0]
        assert cart.set_quantity(line.id, 0) == []
        assert cart.set_quantity(line.id, 0) == []
        assert cart.set_quantity(line.id, 3) == []

    def test_negative_removes(self, cart):
        line = cart.add("a")[0]
        cart.add("b")
        items = cart.set_quantity(line.id, -1)
        assert [i.product_id for i in items] == ["b"]

    def test_unknown_line_is_noop(self, cart):
        cart.add("a")
        items = cart.set_quantity("missing", 9)
        assert [(i.product_id, i.quantity) for i in items] == [("a", 1)]


class TestRemoveAndClear:

    def test_remove(self, cart):
        line = cart.add("a")[0]
        cart.add("b")
        assert [i.product_id for i in cart.remove(line.id)] == ["b"]

    def test_remove_unknown_is_harmless(self, cart):
        cart.add("a")
        assert len(cart.remove("missing")) == 1

    def test_clear(self, cart):
        cart.add("a")
        cart.add("b")
        cart.clear()
        assert cart.items() == []
        assert cart.count() == 0


class TestPersistence:

    def test_lines_live_in_the_store(self, store, catalog, cart):
        cart.add("a", 3)
        assert CartService(store, catalog).items()[0].quantity == 3
        assert store.get("storefront_cart")[0]["quantity"] == 3

    def test_external_write_is_seen_immediately(self, store, cart):
        cart.add("a")
        store.set("storefront_cart", [])
        assert cart.items() == []

    def test_corrupt_blob_reads_as_empty(self, store, cart):
        store.set("storefront_cart", {"not": "a list"})
        assert cart.items() == []

    def test_bad_line_is_dropped(self, store, cart):
        store.set("storefront_cart", [{"id": "1", "product_id": "a", "quantity": 0},
                                      {"id": "2", "product_id": "b", "quantity": 1}])
        assert [i.id for i in cart.items()] == ["2"]


class TestCartTotals:

    def test_end_to_end_free_shipping(self, cart):
        cart.add("a", 1)
        cart.add("b", 2)
        t = cart.totals()
        assert t.subtotal == 800
        assert t.shipping_cost == 0
        assert t.grand_total == 800
        assert cart.count() == 3

    def test_discount_and_fee(self, cart):
        cart.add("c", 2)
        t = cart.totals()
        assert t.subtotal == 200
        assert t.discount == 100
        assert t.shipping_cost == 40
        assert t.grand_total == 240

    def test_empty_cart(self, cart):
        t = cart.totals()
        assert (t.subtotal, t.shipping_cost, t.grand_total) == (0, 40, 40)
