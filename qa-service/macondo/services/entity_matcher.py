"""
entity_matcher.py - Which stored characters/places/objects does a question mention?

Loose matching: an entity matches when its folded name, its alias, or ANY
single word of them occurs in the normalized question. Short fragments
("la", "de") therefore over-match; the planner's strict id resolution and
fallback cascade work on top of this behaviour.

Names are re-read from the store on every call (no caching).
"""

import logging
from typing import List

from macondo.store.base_store import DocumentStore, Kind
from macondo.utils.entity import extract_alias, match_flexible
from macondo.utils.normalize import fold

logger = logging.getLogger(__name__)

NAME_PROJECTION = ("name",)


def match_entities(kind: Kind, question_norm: str, store: DocumentStore) -> List[str]:
    """
    Original stored names (trimmed) of every entity of `kind` mentioned
    in the normalized question. Characters also match on their alias.
    """
    matched = []
    for doc in store.list_by_kind(kind, NAME_PROJECTION):
        name = doc.get("name")
        if not name:
            continue

        if kind == Kind.CHARACTER:
            parsed = extract_alias(name)
            hit = match_flexible(parsed.name, question_norm) or (
                parsed.alias is not None and match_flexible(parsed.alias, question_norm)
            )
        else:
            hit = match_flexible(fold(name), question_norm)

        if hit:
            matched.append(name.strip())

    logger.debug("[ENTITIES] %s: %s", kind.value, matched)
    return matched


def match_characters(question_norm: str, store: DocumentStore) -> List[str]:
    return match_entities(Kind.CHARACTER, question_norm, store)


def match_places(question_norm: str, store: DocumentStore) -> List[str]:
    return match_entities(Kind.PLACE, question_norm, store)


def match_objects(question_norm: str, store: DocumentStore) -> List[str]:
    return match_entities(Kind.OBJECT, question_norm, store)
