"""Seed a demo catalog into DATABASE_URL when it has no categories yet."""
from sqlalchemy import select, func

from storefront.config import get_settings
from storefront.db import Base, make_engine, make_session_factory
from storefront.logger import get_logger
from storefront.models import Category, Product

logger = get_logger("seed")

CATEGORIES = [
    ("Mobiles", "mobiles"),
    ("Electronics", "electronics"),
    ("Fashion", "fashion"),
    ("Home", "home"),
    ("Appliances", "appliances"),
    ("Books", "books"),
]

PRODUCTS = [
    # (name, slug, price, original_price, stock, description)
    ("Apple iPhone 15 (128 GB)", "mobiles", 69900, 79900, 25, "A16 Bionic chip, 48MP main camera, USB-C."),
    ("Samsung Galaxy S24", "mobiles", 64999, 74999, 30, "Galaxy AI, 50MP camera, 120Hz display."),
    ("Redmi Note 13 Pro", "mobiles", 23999, 27999, 60, "200MP camera with 67W turbo charging."),
    ("boAt Rockerz 450 Headphones", "electronics", 1499, 3990, 120, "Wireless on-ear headphones with 15h playback."),
    ("Logitech M331 Silent Mouse", "electronics", 899, 1295, 80, "Silent clicks, 24 month battery life."),
    ("Men's Slim Fit Denim Jeans", "fashion", 799, 1999, 200, "Stretchable mid-rise blue jeans."),
    ("Cotton Round Neck T-Shirt", "fashion", 349, 999, 300, "Pack of one, regular fit."),
    ("Wooden Coffee Table", "home", 4599, 7999, 15, "Solid sheesham wood living room table."),
    ("LG 7 kg Front Load Washing Machine", "appliances", 29990, 38990, 10, "Inverter direct drive, steam wash."),
    ("Atomic Habits", "books", 399, 799, 150, "An easy and proven way to build good habits."),
]

def seed(database_url: str | None = None) -> int:
    engine = make_engine(database_url)
    Base.metadata.create_all(bind=engine)
    factory = make_session_factory(engine)
    with factory() as s:
        if s.execute(select(func.count(Category.id))).scalar_one():
            logger.info("Catalog already seeded, nothing to do")
            return 0
        by_slug = {}
        for name, slug in CATEGORIES:
            c = Category(name=name, slug=slug)
            s.add(c)
            by_slug[slug] = c
        s.flush()
        for name, slug, price, original, stock, desc in PRODUCTS:
            s.add(Product(
                name=name, description=desc, category_id=by_slug[slug].id,
                price=price, original_price=original,
                discount_percent=round((original - price) * 100 / original),
                stock=stock, images=[], highlights=[], specifications={},
            ))
        s.commit()
    logger.info(f"Seeded {len(CATEGORIES)} categories and {len(PRODUCTS)} products")
    return len(PRODUCTS)

if __name__ == "__main__":
    seed(get_settings().database_url)
