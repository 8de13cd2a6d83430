from typing import Iterable, Set

from .schemas import CategoryOut
from .synonyms import synonyms_for

def normalize_query(query: str | None) -> str:
    return (query or "").strip().lower()

def _direct_match(q: str, name: str, slug: str) -> bool:
    return q in name or name in q or q in slug or slug in q

def _synonym_match(q: str, slug: str) -> bool:
    return any(syn in q or q in syn for syn in synonyms_for(slug))

def match_categories(query: str | None, categories: Iterable[CategoryOut]) -> Set[str]:
    """Ids of every category the query refers to, by name, slug or synonym.

    Membership only: no scoring. A blank query matches nothing (an empty
    string is a substring of every name, so it has to be rejected up front).
    """
    q = normalize_query(query)
    if not q:
        return set()
    matched: Set[str] = set()
    for c in categories:
        name = c.name.lower()
        slug = c.slug.lower()
        if _direct_match(q, name, slug) or _synonym_match(q, slug):
            matched.add(c.id)
    return matched
