from storefront.wishlist import WishlistService

from conftest import make_product


class TestWishlist:

    def test_add_is_idempotent(self, store):
        w = WishlistService(store)
        p = make_product("p1", "Kettle", None, price=300, original_price=400)
        assert w.add(p) is True
        assert w.add(p) is False
        assert [e.id for e in w.items()] == ["p1"]

    def test_snapshot_fields(self, store):
        w = WishlistService(store)
        p = make_product("p1", "Kettle", None, price=300, original_price=400)
        p = p.model_copy(update={"images": ["https://img.example/k.jpg"]})
        w.add(p)
        entry = w.items()[0]
        assert entry.name == "Kettle"
        assert entry.original_price == 400
        assert entry.image == "https://img.example/k.jpg"

    def test_remove_contains_clear(self, store):
        w = WishlistService(store)
        w.add(make_product("p1", "Kettle", None))
        w.add(make_product("p2", "Toaster", None))
        assert w.contains("p2")
        w.remove("p2")
        assert not w.contains("p2")
        w.clear()
        assert w.items() == []

    def test_persists(self, store):
        WishlistService(store).add(make_product("p1", "Kettle", None))
        assert WishlistService(store).contains("p1")

    def test_unreadable_wishlist_starts_empty(self, store):
        store.set("storefront_wishlist", [{"id": "x"}])
        assert WishlistService(store).items() == []
