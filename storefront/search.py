from dataclasses import dataclass
from typing import List, Sequence

from .fuzzy import fuzzy_match, DEFAULT_THRESHOLD, DEFAULT_MIN_MATCH_LENGTH
from .logger import get_logger
from .match import match_categories, normalize_query
from .metrics import SEARCH_LATENCY, SEARCH_MODE
from .schemas import CategoryOut, ProductOut

logger = get_logger("search")

BROWSE = "browse"
CATEGORY = "category"
FUZZY = "fuzzy"

@dataclass(frozen=True)
class SearchOutcome:
    mode: str
    products: List[ProductOut]

def search_with_mode(query: str | None, products: Sequence[ProductOut], categories: Sequence[CategoryOut],
                     threshold: float = DEFAULT_THRESHOLD,
                     min_match_length: int = DEFAULT_MIN_MATCH_LENGTH) -> SearchOutcome:
    """Answer a query with exactly one strategy.

    A blank query browses the catalog as given. A query naming a category
    returns that whole category in catalog order. Anything else is ranked by
    fuzzy similarity. The strategies are never merged.
    """
    with SEARCH_LATENCY.time():
        if not normalize_query(query):
            outcome = SearchOutcome(BROWSE, list(products))
        else:
            category_ids = match_categories(query, categories)
            if category_ids:
                seen = set()
                hits = []
                for p in products:
                    if p.category_id in category_ids and p.id not in seen:
                        seen.add(p.id)
                        hits.append(p)
                outcome = SearchOutcome(CATEGORY, hits)
            else:
                outcome = SearchOutcome(FUZZY, fuzzy_match(query, products, threshold, min_match_length))
    SEARCH_MODE.labels(mode=outcome.mode).inc()
    logger.debug("search %r -> %s (%d of %d)", query, outcome.mode, len(outcome.products), len(products))
    return outcome

def search(query: str | None, products: Sequence[ProductOut], categories: Sequence[CategoryOut], **kwargs) -> List[ProductOut]:
    return search_with_mode(query, products, categories, **kwargs).products
