"""
Tests for the search engine: category matching, fuzzy ranking and the
strategy that picks between them.
"""
import pytest

from storefront.fuzzy import field_distance, fuzzy_match, FIELDS
from storefront.match import match_categories
from storefront.schemas import CategoryOut
from storefront.search import search, search_with_mode, BROWSE, CATEGORY, FUZZY
from rapidfuzz import utils

from conftest import BOOKS, FASHION, MOBILES, make_product


class TestMatchCategories:

    @pytest.mark.parametrize("query", ["Mobiles", "mobiles", "  MOBILES  "])
    def test_exact_name_or_slug(self, categories, query):
        assert MOBILES.id in match_categories(query, categories)

    def test_every_name_and_slug_matches_itself(self, categories):
        for c in categories:
            assert c.id in match_categories(c.name, categories)
            assert c.id in match_categories(c.slug, categories)

    def test_query_containing_name(self, categories):
        assert match_categories("cheap books for kids", categories) >= {BOOKS.id}

    def test_partial_name(self, categories):
        assert match_categories("book", categories) == {BOOKS.id}

    def test_synonym(self, categories):
        assert match_categories("phone", categories) == {MOBILES.id}
        assert match_categories("jeans", categories) == {FASHION.id}

    def test_synonym_inside_sentence(self, categories):
        assert match_categories("i want a new smartphone", categories) == {MOBILES.id}

    @pytest.mark.parametrize("query", ["", "   ", "\t\n", None])
    def test_blank_query_matches_nothing(self, categories, query):
        assert match_categories(query, categories) == set()

    def test_unknown_slug_has_no_synonyms(self):
        garden = CategoryOut(id="c-gar", name="Garden", slug="garden")
        assert garden.synonyms == []
        assert match_categories("rake", [garden]) == set()

    def test_no_match(self, categories):
        assert match_categories("zzzzqqq", categories) == set()


class TestFuzzyMatch:

    def test_typo_finds_product(self, products):
        result = fuzzy_match("iphoen", products)
        assert result
        assert result[0].id == "p1"
        assert "p4" not in [p.id for p in result]

    def test_short_query_matches_nothing(self, products):
        assert fuzzy_match("a", products) == []
        assert fuzzy_match("  ", products) == []

    def test_unrelated_query_matches_nothing(self, products):
        assert fuzzy_match("zzzzqqq", products) == []

    def test_results_respect_threshold(self, products):
        for query in ["iphoen", "galxy", "habit", "denim", "camera"]:
            q = utils.default_process(query)
            for p in fuzzy_match(query, products, threshold=0.4):
                best = min(field_distance(q, get(p)) for _, _, get in FIELDS)
                assert best <= 0.4

    def test_tighter_threshold_never_adds_results(self, products):
        loose = {p.id for p in fuzzy_match("galxy", products, threshold=0.4)}
        strict = {p.id for p in fuzzy_match("galxy", products, threshold=0.1)}
        assert strict <= loose

    def test_exact_name_ranks_first(self, products):
        assert fuzzy_match("atomic habits", products)[0].id == "p5"

    def test_name_outranks_description(self):
        in_name = make_product("n", "Camera Tripod", None, description="Aluminium stand")
        in_description = make_product("d", "Phone Stand", None, description="Works with any camera")
        result = fuzzy_match("camera", [in_description, in_name])
        assert [p.id for p in result] == ["n", "d"]

    def test_ties_keep_input_order(self):
        a = make_product("a", "Desk Lamp", None)
        b = make_product("b", "Desk Lamp", None)
        assert [p.id for p in fuzzy_match("desk lamp", [a, b])] == ["a", "b"]
        assert [p.id for p in fuzzy_match("desk lamp", [b, a])] == ["b", "a"]

    def test_no_duplicate_ids(self):
        a = make_product("a", "Desk Lamp", None)
        assert [p.id for p in fuzzy_match("desk lamp", [a, a])] == ["a"]

    def test_matches_on_category_name(self):
        p = make_product("x", "Classic", BOOKS, description="")
        assert fuzzy_match("bookz", [p]) == [p]


class TestSearch:

    def test_empty_query_is_identity(self, products, categories):
        assert search("", products, categories) == products
        assert search("   ", products, categories) == products

    def test_category_query_returns_whole_category_in_order(self, products, categories):
        result = search("mobiles", products, categories)
        assert [p.id for p in result] == ["p1", "p2", "p6"]
        assert {p.id for p in result} == {p.id for p in products if p.category_id == MOBILES.id}

    def test_synonym_query_uses_category_mode(self, products, categories):
        outcome = search_with_mode("smartphone", products, categories)
        assert outcome.mode == CATEGORY
        assert [p.id for p in outcome.products] == ["p1", "p2", "p6"]

    def test_typo_falls_back_to_fuzzy(self, products, categories):
        outcome = search_with_mode("iphoen", products, categories)
        assert outcome.mode == FUZZY
        assert outcome.products[0].id == "p1"

    def test_browse_mode(self, products, categories):
        assert search_with_mode("", products, categories).mode == BROWSE

    def test_category_mode_is_not_ranked(self, products, categories):
        # "Redmi" would rank first under fuzzy scoring, but category hits keep catalog order
        reordered = [products[5], products[0], products[1]]
        assert [p.id for p in search("mobiles", reordered, categories)] == ["p6", "p1", "p2"]

    def test_no_match_at_all(self, products, categories):
        assert search("zzzzqqq", products, categories) == []
