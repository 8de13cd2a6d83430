from typing import Callable, Dict, List, Optional, Sequence, Tuple
from rapidfuzz import fuzz, process, utils

from .schemas import ProductOut

DEFAULT_THRESHOLD = 0.4
DEFAULT_MIN_MATCH_LENGTH = 2

# (field label, weight, accessor)
FIELDS: List[Tuple[str, float, Callable[[ProductOut], str]]] = [
    ("name", 0.6, lambda p: p.name or ""),
    ("category", 0.3, lambda p: p.category_name),
    ("description", 0.1, lambda p: p.description or ""),
]

_EPSILON = 1e-12

def _windows(tokens: List[str], size: int) -> List[str]:
    if size <= 1:
        return tokens
    return [" ".join(tokens[i:i + size]) for i in range(len(tokens) - size + 1)]

def field_distance(query: str, text: str) -> float:
    """Normalized distance in [0, 1] between an already-processed query and a field.

    A query found verbatim inside the field is an exact hit. Otherwise the
    query is compared against the whole field and against every run of
    field words as long as the query, and the closest one counts.
    """
    target = utils.default_process(text)
    if not query or not target:
        return 1.0
    if query in target:
        return 0.0
    choices = [target] + _windows(target.split(), len(query.split()))
    _, score, _ = process.extractOne(query, choices, scorer=fuzz.ratio)
    return 1.0 - score / 100.0

def score_product(query: str, product: ProductOut, threshold: float) -> Optional[Tuple[float, Dict[str, float]]]:
    distances: Dict[str, float] = {}
    score = 1.0
    for label, weight, get in FIELDS:
        d = field_distance(query, get(product))
        if d <= threshold:
            distances[label] = d
            score *= max(d, _EPSILON) ** weight
    if not distances:
        return None
    return score, distances

def fuzzy_match(query: str | None, products: Sequence[ProductOut],
                threshold: float = DEFAULT_THRESHOLD,
                min_match_length: int = DEFAULT_MIN_MATCH_LENGTH) -> List[ProductOut]:
    q = utils.default_process(query or "")
    if len(q) < min_match_length:
        return []

    ranked: List[Tuple[float, int, ProductOut]] = []
    seen = set()
    for idx, p in enumerate(products):
        if p.id in seen:
            continue
        seen.add(p.id)
        result = score_product(q, p, threshold)
        if result is not None:
            ranked.append((result[0], idx, p))
    # idx keeps equal scores in catalog order
    ranked.sort(key=lambda r: (r[0], r[1]))
    return [p for _, _, p in ranked]
