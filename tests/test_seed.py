from scripts.seed_catalog import PRODUCTS, seed
from storefront.catalog import CatalogRepository
from storefront.db import make_engine, make_session_factory


class TestSeedCatalog:

    def test_seeds_once(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'seed.db'}"
        assert seed(url) == len(PRODUCTS)
        assert seed(url) == 0

        catalog = CatalogRepository(make_session_factory(make_engine(url)))
        assert len(catalog.fetch_products()) == len(PRODUCTS)
        assert {p.category.slug for p in catalog.fetch_products(search_text="smartphone")} == {"mobiles"}
