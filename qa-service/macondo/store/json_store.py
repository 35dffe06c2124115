"""
json_store.py - DocumentStore over a JSON snapshot.

File layout (one array per collection, every document has a string "id"):

    {
      "characters":  [{"id": "c1", "name": "José Arcadio Buendía", ...}],
      "places":      [...],
      "objects":     [...],
      "events":      [...],
      "chapters":    [{"id": "ch1", "number": 1, "events": ["e1", "e2"]}],
      "generations": [...]
    }

The snapshot is never mutated: every read hands out deep copies.
"""

import copy
import json
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from macondo.core.errors import StoreUnavailable
from macondo.core.query_schema import QueryFilter
from macondo.store.base_store import COLLECTIONS, LINK_KINDS, DocumentStore, Kind
from macondo.utils.normalize import fold

logger = logging.getLogger(__name__)


class JsonDocumentStore(DocumentStore):
    """In-memory store loaded from a JSON document."""

    def __init__(self, collections: Dict[Kind, List[Dict[str, Any]]]):
        self._docs = collections
        self._by_id = {
            kind: {str(doc["id"]): doc for doc in docs}
            for kind, docs in collections.items()
        }

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_data(cls, data: Dict[str, Any]) -> "JsonDocumentStore":
        collections = {}
        for kind, name in COLLECTIONS.items():
            docs = data.get(name, [])
            if not isinstance(docs, list):
                raise StoreUnavailable(f"Collection '{name}' must be a list, got {type(docs).__name__}")
            for doc in docs:
                if not isinstance(doc, dict) or "id" not in doc:
                    raise StoreUnavailable(f"Document without id in collection '{name}'")
            collections[kind] = docs
        return cls(collections)

    @classmethod
    def from_file(cls, path: str) -> "JsonDocumentStore":
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StoreUnavailable(f"Cannot read store file {path}: {e}") from e

        store = cls.from_data(data)
        logger.info(f"[STORE] Loaded {path}: {store.counts()}")
        return store

    def counts(self) -> Dict[str, int]:
        return {kind.collection: len(docs) for kind, docs in self._docs.items()}

    # ------------------------------------------------------------------
    # DocumentStore
    # ------------------------------------------------------------------

    def list_by_kind(self, kind: Kind, projection: Optional[Sequence[str]] = None) -> List[Dict[str, Any]]:
        docs = self._collection(kind)
        if projection is None:
            return copy.deepcopy(docs)
        fields = {"id", *projection}
        return [
            {k: copy.deepcopy(v) for k, v in doc.items() if k in fields}
            for doc in docs
        ]

    def find_by_id(self, kind: Kind, doc_id: str) -> Optional[Dict[str, Any]]:
        doc = self._index(kind).get(str(doc_id))
        return copy.deepcopy(doc) if doc is not None else None

    def find_by_ids(self, kind: Kind, doc_ids: Iterable[str]) -> List[Dict[str, Any]]:
        index = self._index(kind)
        found = []
        for doc_id in doc_ids:
            doc = index.get(str(doc_id))
            if doc is not None:
                found.append(copy.deepcopy(doc))
        return found

    def find_events_matching(self, query_filter: QueryFilter) -> List[Dict[str, Any]]:
        return [
            copy.deepcopy(event)
            for event in self._collection(Kind.EVENT)
            if _event_matches(event, query_filter)
        ]

    def find_chapter_by_number(self, number: int) -> Optional[Dict[str, Any]]:
        for chapter in self._collection(Kind.CHAPTER):
            if chapter.get("number") == number:
                return copy.deepcopy(chapter)
        return None

    def populate_links(self, entity: Dict[str, Any], link_names: Sequence[str]) -> Dict[str, Any]:
        populated = copy.deepcopy(entity)
        for link in link_names:
            if link not in LINK_KINDS:
                raise ValueError(f"Unknown link '{link}'")
            value = populated.get(link)
            kind = LINK_KINDS[link]
            if isinstance(value, list):
                populated[link] = self.find_by_ids(kind, value)
            elif value is not None:
                populated[link] = self.find_by_id(kind, value)
        return populated

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _collection(self, kind: Kind) -> List[Dict[str, Any]]:
        try:
            return self._docs[Kind(kind)]
        except KeyError as e:
            raise StoreUnavailable(f"Collection '{kind}' is not loaded") from e

    def _index(self, kind: Kind) -> Dict[str, Dict[str, Any]]:
        try:
            return self._by_id[Kind(kind)]
        except KeyError as e:
            raise StoreUnavailable(f"Collection '{kind}' is not loaded") from e


def _event_matches(event: Dict[str, Any], query_filter: QueryFilter) -> bool:
    if query_filter.verb_patterns:
        texts = (fold(event.get("name") or ""), fold(event.get("description") or ""))
        if not any(p.search(t) for p in query_filter.verb_patterns for t in texts):
            return False

    if query_filter.character_ids:
        involved = {str(c) for c in event.get("involved_characters") or []}
        if not involved & query_filter.character_ids:
            return False

    if query_filter.place_ids:
        if str(event.get("related_place")) not in query_filter.place_ids:
            return False

    if query_filter.event_ids:
        if str(event["id"]) not in query_filter.event_ids:
            return False

    return True
