"""
fuzzy_ranker.py - Best-effort "which event is this question about?"

Score = |words(question) ∩ words(event)| / max(|words(question)|, 1)

Event text is name + description in the same canonical form as the
question, so a question worded exactly like an event name scores 1.0.
Equal overlap scores are ordered by rapidfuzz token_set_ratio, then by
store order.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Set

from rapidfuzz import fuzz

from macondo.core.config import FUZZY_THRESHOLD
from macondo.utils.normalize import normalize

logger = logging.getLogger(__name__)


@dataclass
class ScoredEvent:
    event: Dict[str, Any]
    score: float
    tiebreak: float = 0.0


def _tokens(text: str) -> Set[str]:
    return set(text.split())


def event_text(event: Dict[str, Any]) -> str:
    return normalize(f"{event.get('name') or ''} {event.get('description') or ''}")


def similarity(question_norm: str, candidate_norm: str) -> float:
    q_words = _tokens(question_norm)
    c_words = _tokens(candidate_norm)
    return len(q_words & c_words) / max(len(q_words), 1)


def score_events(question_norm: str, events: Iterable[Dict[str, Any]]) -> List[ScoredEvent]:
    """All events scored against the question, best first."""
    scored = []
    for event in events:
        candidate = event_text(event)
        score = similarity(question_norm, candidate)
        tiebreak = fuzz.token_set_ratio(question_norm, candidate) if score > 0 else 0.0
        scored.append(ScoredEvent(event=event, score=score, tiebreak=tiebreak))
    scored.sort(key=lambda s: (s.score, s.tiebreak), reverse=True)
    return scored


def rank_events(
    question_norm: str,
    events: Iterable[Dict[str, Any]],
    threshold: float = FUZZY_THRESHOLD,
) -> Optional[Dict[str, Any]]:
    """
    Return the best matching event if its score is strictly above threshold.
    """
    scored = score_events(question_norm, events)
    if not scored:
        return None

    top = scored[0]
    logger.info(f"[FUZZY] Top event {top.event.get('id')!r} score={top.score:.2f}")
    return top.event if top.score > threshold else None
