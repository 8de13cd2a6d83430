from typing import List, Optional
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, joinedload

from .errors import MalformedRowError
from .fuzzy import DEFAULT_THRESHOLD, DEFAULT_MIN_MATCH_LENGTH
from .logger import get_logger
from .metrics import BACKEND_ERRORS
from .models import Category, Product
from .schemas import CategoryOut, ProductOut
from .search import search

logger = get_logger("catalog")

ALL = "all"

def category_from_row(row) -> CategoryOut:
    try:
        return CategoryOut.model_validate(row)
    except ValidationError as e:
        raise MalformedRowError("categories", getattr(row, "id", None), str(e)) from e

def product_from_row(row) -> ProductOut:
    """Typed view of a product row and its joined category; fails on the first bad row."""
    try:
        return ProductOut.model_validate(row)
    except ValidationError as e:
        raise MalformedRowError("products", getattr(row, "id", None), str(e)) from e

class CatalogRepository:
    def __init__(self, session_factory: sessionmaker, threshold: float = DEFAULT_THRESHOLD,
                 min_match_length: int = DEFAULT_MIN_MATCH_LENGTH):
        self.session_factory = session_factory
        self.threshold = threshold
        self.min_match_length = min_match_length

    def fetch_categories(self) -> List[CategoryOut]:
        try:
            with self.session_factory() as s:
                rows = s.execute(select(Category).order_by(Category.name)).scalars().all()
                return [category_from_row(r) for r in rows]
        except SQLAlchemyError as e:
            logger.error(f"Error fetching categories: {e}")
            BACKEND_ERRORS.labels(query="categories").inc()
            return []

    def fetch_products(self, category_slug: Optional[str] = None, search_text: str = "") -> List[ProductOut]:
        categories = self.fetch_categories()
        try:
            with self.session_factory() as s:
                query = select(Product).options(joinedload(Product.category)).order_by(Product.created_at, Product.id)
                if category_slug and category_slug != ALL:
                    category_id = s.execute(select(Category.id).where(Category.slug == category_slug)).scalar_one_or_none()
                    if category_id is not None:
                        query = query.where(Product.category_id == category_id)
                    else:
                        logger.warning(f"Unknown category slug {category_slug!r}, not filtering")
                rows = s.execute(query).scalars().all()
                products = [product_from_row(r) for r in rows]
        except SQLAlchemyError as e:
            logger.error(f"Error fetching products: {e}")
            BACKEND_ERRORS.labels(query="products").inc()
            return []
        return search(search_text, products, categories,
                      threshold=self.threshold, min_match_length=self.min_match_length)

    def fetch_product(self, product_id: str) -> Optional[ProductOut]:
        try:
            with self.session_factory() as s:
                row = s.execute(
                    select(Product).options(joinedload(Product.category)).where(Product.id == product_id)
                ).scalar_one_or_none()
                return product_from_row(row) if row is not None else None
        except SQLAlchemyError as e:
            logger.error(f"Error fetching product {product_id}: {e}")
            BACKEND_ERRORS.labels(query="product").inc()
            return None
