"""
query_schema.py - Data schemas flowing through the question pipeline.

    AnalysisResult  - everything understood from one question
    QueryFilter     - conjunctive event filter handed to the store
    ResultSet       - tagged answer returned to the HTTP layer

USAGE:
    1. query_understanding.analyze_question() builds an AnalysisResult
    2. query_planner.plan() turns it into a QueryFilter and runs the cascade
    3. The route serializes the ResultSet
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional, Tuple, Union

# ResultSet tags (besides a plain chapter number)
TAG_SIMILAR = "similar"
TAG_EXISTENCE = "existencia"
TAG_ALL = "todos"


@dataclass(frozen=True)
class AnalysisResult:
    """
    Produced once per question, consumed by the planner.

    Fields:
        question:             Raw question text
        normalized_question:  normalize(question)
        chapter_number:       "capítulo N" found in the normalized question
        existence_term:       Folded term of an existence question ("guerra")
        existence_phrase:     Same term as written by the user ("guerra")
        verb_intents:         Intents fired by the verb matcher
        verb_patterns:        Whole-word patterns for every form of those intents
        matched_characters:   Stored character names (loose match)
        matched_places:       Stored place names (loose match)
        matched_objects:      Stored object names (loose match)
        fuzzy_event:          Best token-overlap event, None in existence mode
    """
    question: str
    normalized_question: str
    chapter_number: Optional[int] = None
    existence_term: Optional[str] = None
    existence_phrase: Optional[str] = None
    verb_intents: Tuple[Any, ...] = ()
    verb_patterns: Tuple[re.Pattern, ...] = ()
    matched_characters: Tuple[str, ...] = ()
    matched_places: Tuple[str, ...] = ()
    matched_objects: Tuple[str, ...] = ()
    fuzzy_event: Optional[Dict[str, Any]] = None

    @property
    def is_existence_question(self) -> bool:
        return self.existence_term is not None

    def summary(self) -> Dict[str, Any]:
        """Loggable view (patterns as source strings, event as its id)."""
        return {
            "chapter_number": self.chapter_number,
            "existence_term": self.existence_term,
            "verb_intents": [getattr(i, "value", i) for i in self.verb_intents],
            "verb_patterns": len(self.verb_patterns),
            "characters": list(self.matched_characters),
            "places": list(self.matched_places),
            "objects": list(self.matched_objects),
            "fuzzy_event": self.fuzzy_event.get("id") if self.fuzzy_event else None,
        }


@dataclass(frozen=True)
class QueryFilter:
    """
    AND of the non-empty clauses:
        - any verb pattern found in the event name or description
        - event involves one of character_ids
        - event's place is one of place_ids
        - event id is one of event_ids
    An empty filter matches every event.
    """
    verb_patterns: Tuple[re.Pattern, ...] = ()
    character_ids: FrozenSet[str] = frozenset()
    place_ids: FrozenSet[str] = frozenset()
    event_ids: FrozenSet[str] = frozenset()

    def describe(self) -> Dict[str, Any]:
        clauses = {}
        if self.verb_patterns:
            clauses["verbs"] = [p.pattern for p in self.verb_patterns]
        if self.character_ids:
            clauses["involved_characters"] = sorted(self.character_ids)
        if self.place_ids:
            clauses["related_place"] = sorted(self.place_ids)
        if self.event_ids:
            clauses["id"] = sorted(self.event_ids)
        return clauses


@dataclass(frozen=True)
class ResultSet:
    """
    Tagged answer.
        chapter = N            → events of chapter N (possibly empty)
        chapter = "similar"    → single fuzzy-matched event
        chapter = "existencia" → events mentioning `term`
        chapter = "todos"      → filtered/fallback events (possibly empty)
    """
    chapter: Union[int, str]
    events: List[Dict[str, Any]] = field(default_factory=list)
    term: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {"chapter": self.chapter, "events": self.events}
        if self.term is not None:
            data["term"] = self.term
        return data
