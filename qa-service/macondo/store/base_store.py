"""
base_store.py - Abstract document store used by the question pipeline.

The pipeline never talks to a database directly. It reads through this
interface, which any backend (JSON snapshot, document database, ...) can
implement. All methods are read-only and must raise
macondo.core.errors.StoreUnavailable when the backend cannot be read.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence

from macondo.core.query_schema import QueryFilter


class Kind(str, Enum):
    """Collections of the narrative store."""
    CHARACTER = "character"
    PLACE = "place"
    OBJECT = "object"
    EVENT = "event"
    CHAPTER = "chapter"
    GENERATION = "generation"

    @property
    def collection(self) -> str:
        return COLLECTIONS[self]


COLLECTIONS = {
    Kind.CHARACTER: "characters",
    Kind.PLACE: "places",
    Kind.OBJECT: "objects",
    Kind.EVENT: "events",
    Kind.CHAPTER: "chapters",
    Kind.GENERATION: "generations",
}

# Reference field → kind of the referenced document
LINK_KINDS = {
    "involved_characters": Kind.CHARACTER,
    "related_place": Kind.PLACE,
    "related_generation": Kind.GENERATION,
    "related_event": Kind.EVENT,
    "related_character": Kind.CHARACTER,
    "related_events": Kind.EVENT,
    "related_generations": Kind.GENERATION,
    "main_characters": Kind.CHARACTER,
    "objects": Kind.OBJECT,
    "events": Kind.EVENT,
}

# Links resolved on every event returned to the caller
EVENT_LINKS = ("involved_characters", "related_place", "related_generation")


class DocumentStore(ABC):
    """Read-only access to characters, places, objects, events and chapters."""

    @abstractmethod
    def list_by_kind(self, kind: Kind, projection: Optional[Sequence[str]] = None) -> List[Dict[str, Any]]:
        """
        Return every document of a kind.

        Args:
            kind:       Collection to read.
            projection: Field names to keep ("id" is always kept).
                        None returns full documents.
        """

    @abstractmethod
    def find_by_id(self, kind: Kind, doc_id: str) -> Optional[Dict[str, Any]]:
        """Return one document or None."""

    @abstractmethod
    def find_by_ids(self, kind: Kind, doc_ids: Iterable[str]) -> List[Dict[str, Any]]:
        """Return the documents for the given ids, in id order, skipping unknown ids."""

    @abstractmethod
    def find_events_matching(self, query_filter: QueryFilter) -> List[Dict[str, Any]]:
        """Return events satisfying every clause of the filter."""

    @abstractmethod
    def find_chapter_by_number(self, number: int) -> Optional[Dict[str, Any]]:
        """Return the chapter with that number or None."""

    @abstractmethod
    def populate_links(self, entity: Dict[str, Any], link_names: Sequence[str]) -> Dict[str, Any]:
        """
        Return a copy of the entity with the named reference fields replaced
        by the referenced documents (lists stay lists, missing refs become None).
        """

    def populate_events(self, events: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Populate characters, place and generation of each event."""
        return [self.populate_links(event, EVENT_LINKS) for event in events]
