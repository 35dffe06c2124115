"""
query_understanding.py - Natural Language Understanding Layer

Turns a raw question into an AnalysisResult:
1. Normalization (accents, punctuation, plurals)
2. Explicit chapter number ("capítulo 3")
3. Existence questions ("¿Hubo alguna guerra?")
4. Characters / places / objects mentioned (loose match)
5. Verb intents expanded to all their surface forms
6. Fuzzy best-matching event (skipped for existence questions)
"""

import logging
import re
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from macondo.core.config import ENTITY_LOAD_WORKERS, FUZZY_THRESHOLD
from macondo.core.query_schema import AnalysisResult
from macondo.services.entity_matcher import match_characters, match_objects, match_places
from macondo.services.existence_detector import detect_existence
from macondo.services.fuzzy_ranker import rank_events
from macondo.services.verb_intents import detect_verb_intents, expand_intent
from macondo.store.base_store import DocumentStore, Kind
from macondo.utils.normalize import normalize

logger = logging.getLogger(__name__)

CHAPTER_PATTERN = re.compile(r"cap[ií]tulo\s*(\d+)", re.IGNORECASE)

FUZZY_PROJECTION = ("name", "description")


def extract_chapter_number(text: str) -> Optional[int]:
    """'capitulo 12' / 'Capítulo12' -> 12."""
    m = CHAPTER_PATTERN.search(text)
    return int(m.group(1)) if m else None


def analyze_question(question: str, store: DocumentStore, fuzzy_threshold: float = FUZZY_THRESHOLD) -> AnalysisResult:
    """
    Run every detector over the question.

    The three entity collections are read concurrently; nothing is cached
    between calls. Store errors propagate to the caller.
    """
    logger.info(f"[NLU] Raw question: {question!r}")
    question_norm = normalize(question)

    chapter_number = extract_chapter_number(question_norm)
    existence = detect_existence(question)

    with ThreadPoolExecutor(max_workers=ENTITY_LOAD_WORKERS) as pool:
        characters_future = pool.submit(match_characters, question_norm, store)
        places_future = pool.submit(match_places, question_norm, store)
        objects_future = pool.submit(match_objects, question_norm, store)
        characters = characters_future.result()
        places = places_future.result()
        objects = objects_future.result()

    intents = detect_verb_intents(question)
    patterns = tuple(p for intent in intents for p in expand_intent(intent))

    fuzzy_event = None
    if existence is None:
        events = store.list_by_kind(Kind.EVENT, FUZZY_PROJECTION)
        fuzzy_event = rank_events(question_norm, events, fuzzy_threshold)

    return AnalysisResult(
        question=question,
        normalized_question=question_norm,
        chapter_number=chapter_number,
        existence_term=existence.term if existence else None,
        existence_phrase=existence.phrase if existence else None,
        verb_intents=tuple(intents),
        verb_patterns=patterns,
        matched_characters=tuple(characters),
        matched_places=tuple(places),
        matched_objects=tuple(objects),
        fuzzy_event=fuzzy_event,
    )
