from datetime import datetime, timedelta
from typing import Dict, Optional

import pytest

from storefront.db import Base, make_engine, make_session_factory
from storefront.models import Category, Product
from storefront.schemas import CategoryOut, ProductOut
from storefront.storage import LocalStore


MOBILES = CategoryOut(id="c-mob", name="Mobiles", slug="mobiles")
ELECTRONICS = CategoryOut(id="c-ele", name="Electronics", slug="electronics")
FASHION = CategoryOut(id="c-fas", name="Fashion", slug="fashion")
BOOKS = CategoryOut(id="c-boo", name="Books", slug="books")
CATEGORIES = [MOBILES, ELECTRONICS, FASHION, BOOKS]


def make_product(pid: str, name: str, category: Optional[CategoryOut], price: float = 100.0,
                 description: str = "", original_price: Optional[float] = None) -> ProductOut:
    return ProductOut(
        id=pid,
        name=name,
        description=description,
        category_id=category.id if category else None,
        category=category,
        price=price,
        original_price=original_price,
        stock=10,
    )


PRODUCTS = [
    make_product("p1", "Apple iPhone 15", MOBILES, 69900, "A16 Bionic chip, 48MP camera", 79900),
    make_product("p2", "Samsung Galaxy S24", MOBILES, 64999, "Galaxy AI, 120Hz display"),
    make_product("p3", "boAt Rockerz 450 Headphones", ELECTRONICS, 1499, "Wireless on-ear headphones"),
    make_product("p4", "Slim Fit Denim Jeans", FASHION, 799, "Stretchable blue jeans"),
    make_product("p5", "Atomic Habits", BOOKS, 399, "Build good habits"),
    make_product("p6", "Redmi Note 13 Pro", MOBILES, 23999, "200MP camera"),
]


@pytest.fixture
def categories():
    return list(CATEGORIES)


@pytest.fixture
def products():
    return list(PRODUCTS)


class FakeCatalog:
    """Product lookup backed by a dict, for cart tests that need no database."""

    def __init__(self, products: Dict[str, ProductOut]):
        self.products = products

    def fetch_product(self, product_id: str) -> Optional[ProductOut]:
        return self.products.get(product_id)


@pytest.fixture
def store(tmp_path):
    return LocalStore(str(tmp_path / "store"))


@pytest.fixture
def engine():
    engine = make_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


def seed_catalog(session_factory) -> Dict[str, str]:
    """Insert the test catalog; returns product name -> id. Catalog order follows PRODUCTS."""
    start = datetime(2026, 1, 1)
    ids = {}
    with session_factory() as s:
        for c in CATEGORIES:
            s.add(Category(id=c.id, name=c.name, slug=c.slug))
        s.flush()
        for i, p in enumerate(PRODUCTS):
            s.add(Product(
                id=p.id, name=p.name, description=p.description, category_id=p.category_id,
                price=p.price, original_price=p.original_price, stock=p.stock,
                images=[f"https://img.example/{p.id}.jpg"], highlights=[], specifications={},
                created_at=start + timedelta(minutes=i),
            ))
            ids[p.name] = p.id
        s.commit()
    return ids


@pytest.fixture
def seeded(session_factory):
    return seed_catalog(session_factory)
