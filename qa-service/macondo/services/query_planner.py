"""
query_planner.py - From question to result set.

Decision cascade (each step short-circuits the ones below):

    1. "capítulo N" in the raw question     → chapter N events (empty if absent)
    2. analyze_question()
    3. chapter number after normalization   → chapter events, NotFound if absent
    4. fuzzy event (not existence mode)     → "similar" [event]
    5. strict name → id resolution
    6. existence question                   → "existencia" full-text scan
    7. no verbs and no ids                  → "todos" []
    8. verbs AND characters AND places AND object events
    9. empty → fallback: objects, then characters, then places

Loose matching (entity_matcher) decides WHICH names were mentioned; strict
resolution here decides WHICH stored records they are.
"""

import logging
import re
from typing import Any, Dict, Iterable, List, Sequence

from macondo.core.config import FUZZY_THRESHOLD
from macondo.core.errors import BadInput, NotFound
from macondo.core.query_schema import (
    TAG_ALL,
    TAG_EXISTENCE,
    TAG_SIMILAR,
    QueryFilter,
    ResultSet,
)
from macondo.services.query_understanding import analyze_question, extract_chapter_number
from macondo.store.base_store import DocumentStore, Kind
from macondo.utils.normalize import fold, strip_punctuation

logger = logging.getLogger(__name__)


# ===================================================================
# STRICT RESOLUTION
# ===================================================================

def resolve_entity_ids(kind: Kind, names: Iterable[str], store: DocumentStore) -> List[str]:
    """Ids of stored entities whose whole name equals one of `names` (case-insensitive)."""
    wanted = {name.lower() for name in names}
    if not wanted:
        return []
    return [
        str(doc["id"])
        for doc in store.list_by_kind(kind, ("name",))
        if (doc.get("name") or "").lower() in wanted
    ]


def resolve_object_event_ids(names: Iterable[str], store: DocumentStore) -> List[str]:
    """Events referenced by the named objects (objects without one are skipped)."""
    wanted = {name.lower() for name in names}
    if not wanted:
        return []
    event_ids = [
        str(doc["related_event"])
        for doc in store.list_by_kind(Kind.OBJECT, ("name", "related_event"))
        if (doc.get("name") or "").lower() in wanted and doc.get("related_event")
    ]
    return list(dict.fromkeys(event_ids))


# ===================================================================
# FILTERS & SCANS
# ===================================================================

def build_filter(
    verb_patterns: Sequence[re.Pattern],
    character_ids: Iterable[str] = (),
    place_ids: Iterable[str] = (),
    event_ids: Iterable[str] = (),
) -> QueryFilter:
    return QueryFilter(
        verb_patterns=tuple(verb_patterns),
        character_ids=frozenset(character_ids),
        place_ids=frozenset(place_ids),
        event_ids=frozenset(event_ids),
    )


def _plain(text: str) -> str:
    return strip_punctuation(fold(text))


def scan_existence(term: str, store: DocumentStore) -> List[Dict[str, Any]]:
    """Every event whose name or description contains the term."""
    key = _plain(term)
    return [
        event
        for event in store.list_by_kind(Kind.EVENT)
        if key in _plain(event.get("name") or "") or key in _plain(event.get("description") or "")
    ]


def _chapter_events(chapter: Dict[str, Any], store: DocumentStore) -> List[Dict[str, Any]]:
    chapter = store.populate_links(chapter, ["events"])
    return store.populate_events(chapter.get("events") or [])


def _fallback(
    character_ids: List[str],
    place_ids: List[str],
    object_event_ids: List[str],
    store: DocumentStore,
) -> List[Dict[str, Any]]:
    """First non-empty of: object events, character events, place events."""
    if object_event_ids:
        events = store.find_by_ids(Kind.EVENT, object_event_ids)
        if events:
            logger.info("[FALLBACK] Events referenced by matched objects")
            return events

    if character_ids:
        events = store.find_events_matching(build_filter((), character_ids=character_ids))
        if events:
            logger.info("[FALLBACK] Events involving matched characters")
            return events

    if place_ids:
        events = store.find_events_matching(build_filter((), place_ids=place_ids))
        if events:
            logger.info("[FALLBACK] Events at matched places")
            return events

    return []


# ===================================================================
# MAIN ENTRY POINT
# ===================================================================

def plan(question: str, store: DocumentStore, fuzzy_threshold: float = FUZZY_THRESHOLD) -> ResultSet:
    """
    Answer a free-text question with a tagged set of populated events.

    Raises:
        BadInput:          question missing or blank
        NotFound:          normalized question names a chapter that does not exist
        StoreUnavailable:  store read failure
    """
    if question is None or not question.strip():
        raise BadInput("Question text is required")
    question = question.strip()

    # 1. Direct chapter shortcut
    chapter_number = extract_chapter_number(fold(question))
    if chapter_number is not None:
        chapter = store.find_chapter_by_number(chapter_number)
        if chapter is None:
            logger.info(f"[CHAPTER] Chapter {chapter_number} not found")
            return ResultSet(chapter=chapter_number, events=[])
        events = _chapter_events(chapter, store)
        logger.info(f"[CHAPTER] Chapter {chapter_number}: {len(events)} events")
        return ResultSet(chapter=chapter_number, events=events)

    # 2. Full analysis
    analysis = analyze_question(question, store, fuzzy_threshold)
    logger.info(f"[ANALYSIS] {analysis.summary()}")

    # 3. Chapter found only after normalization ("capítulos 3")
    if analysis.chapter_number is not None:
        chapter = store.find_chapter_by_number(analysis.chapter_number)
        if chapter is None:
            raise NotFound(f"Chapter {analysis.chapter_number} does not exist")
        return ResultSet(chapter=analysis.chapter_number, events=_chapter_events(chapter, store))

    # 4. Fuzzy match
    if analysis.fuzzy_event is not None and not analysis.is_existence_question:
        event = store.find_by_id(Kind.EVENT, analysis.fuzzy_event["id"]) or analysis.fuzzy_event
        logger.info(f"[FUZZY] Returning similar event {event['id']!r}")
        return ResultSet(chapter=TAG_SIMILAR, events=store.populate_events([event]))

    # 5. Strict resolution
    character_ids = resolve_entity_ids(Kind.CHARACTER, analysis.matched_characters, store)
    place_ids = resolve_entity_ids(Kind.PLACE, analysis.matched_places, store)
    object_event_ids = resolve_object_event_ids(analysis.matched_objects, store)
    logger.info(f"[IDS] characters={character_ids} places={place_ids} object_events={object_event_ids}")

    # 6. Existence question
    if analysis.is_existence_question:
        events = scan_existence(analysis.existence_term, store)
        logger.info(f"[EXISTENCE] term={analysis.existence_term!r} found={len(events)}")
        return ResultSet(
            chapter=TAG_EXISTENCE,
            events=store.populate_events(events),
            term=analysis.existence_phrase,
        )

    # 7. Nothing to filter on
    if not analysis.verb_patterns and not (character_ids or place_ids or object_event_ids):
        logger.info("[FILTER] No verb or entity detected -> 0 results")
        return ResultSet(chapter=TAG_ALL, events=[])

    # 8. Combined filter
    query_filter = build_filter(analysis.verb_patterns, character_ids, place_ids, object_event_ids)
    logger.info(f"[FILTER] {query_filter.describe()}")
    events = store.find_events_matching(query_filter)
    logger.info(f"[RESULTS] initial={len(events)}")

    # 9. Fallback cascade
    if not events:
        events = _fallback(character_ids, place_ids, object_event_ids, store)

    logger.info(f"[RESULTS] final={len(events)}")
    return ResultSet(chapter=TAG_ALL, events=store.populate_events(events))
