"""
existence_detector.py - "Was there any X?" questions.

    "¿Hubo alguna guerra?"    → "guerra"
    "¿Existen fantasmas?"     → "fantasmas"
    "¿Hay alguna profecía?"   → "profecia"
    "¿Qué pasó?"              → None

When a term is found the planner skips fuzzy ranking and verb/entity
filters and scans every event for the term instead.
"""

import re
from dataclasses import dataclass
from typing import Optional

from macondo.utils.normalize import fold

_QUESTION_MARKS_RE = re.compile(r"^[¿?]+|[¿?]+$")
_TRAILING_PUNCT_RE = re.compile(r"[?.!]+$")

# Ordered: shorter templates are prefixes of longer ones
EXISTENCE_PATTERNS = [
    re.compile(r"^hubo alguna\s+(.+)$"),
    re.compile(r"^hubo\s+(.+)$"),
    re.compile(r"^existen? alguna\s+(.+)$"),
    re.compile(r"^existen?\s+(.+)$"),
    re.compile(r"^existió\s+(.+)$"),
    re.compile(r"^hay alguna\s+(.+)$"),
    re.compile(r"^hay\s+(.+)$"),
]


@dataclass(frozen=True)
class ExistenceMatch:
    term: str     # folded, used for matching
    phrase: str   # as written, returned to the caller


def detect_existence(question: str) -> Optional[ExistenceMatch]:
    text = _QUESTION_MARKS_RE.sub("", question.lower().strip()).strip()
    for pattern in EXISTENCE_PATTERNS:
        m = pattern.match(text)
        if not m:
            continue
        # First matching template decides, even when its capture is empty
        phrase = _TRAILING_PUNCT_RE.sub("", m.group(1).strip()).strip()
        return ExistenceMatch(term=fold(phrase), phrase=phrase) if phrase else None
    return None


def detect_existence_term(question: str) -> Optional[str]:
    """Folded queried term of an existence question, or None."""
    match = detect_existence(question)
    return match.term if match else None
