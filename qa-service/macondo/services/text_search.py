"""
text_search.py - Plain substring search across every collection.

Backs GET /api/buscar. No NLU: the query is folded, stripped of
punctuation and looked up in names (and event descriptions).
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List

from macondo.core.errors import BadInput
from macondo.store.base_store import DocumentStore, Kind
from macondo.utils.normalize import fold, strip_punctuation

logger = logging.getLogger(__name__)

# Links populated on each kind of search hit
SEARCH_LINKS = {
    Kind.CHARACTER: ("objects",),
    Kind.PLACE: (),
    Kind.OBJECT: ("related_event", "related_place", "related_character", "related_generation"),
    Kind.GENERATION: (),
    Kind.EVENT: ("involved_characters", "related_place", "related_generation"),
}


def _plain(text: str) -> str:
    return strip_punctuation(fold(text or ""))


def _matches(kind: Kind, doc: Dict[str, Any], query: str) -> bool:
    if query in _plain(doc.get("name")):
        return True
    return kind == Kind.EVENT and query in _plain(doc.get("description"))


def _search_kind(kind: Kind, query: str, store: DocumentStore) -> List[Dict[str, Any]]:
    links = SEARCH_LINKS[kind]
    return [
        store.populate_links(doc, links)
        for doc in store.list_by_kind(kind)
        if _matches(kind, doc, query)
    ]


def search_all(query: str, store: DocumentStore) -> Dict[str, List[Dict[str, Any]]]:
    """
    Returns {"characters", "places", "objects", "generations", "events"}.
    """
    if query is None or not query.strip():
        raise BadInput("Search text is required")

    query_plain = _plain(query)
    with ThreadPoolExecutor(max_workers=len(SEARCH_LINKS)) as pool:
        futures = {
            kind: pool.submit(_search_kind, kind, query_plain, store)
            for kind in SEARCH_LINKS
        }
        results = {kind.collection: future.result() for kind, future in futures.items()}

    logger.info("[SEARCH] %r -> %s", query, {k: len(v) for k, v in results.items()})
    return results
