import logging
import re
import unicodedata

logger = logging.getLogger(__name__)

_PUNCTUATION_RE = re.compile(r"[^\w\s]")
_SPACES_RE = re.compile(r"\s+")

_VOWELS = "aeiou"

# Folded words ending in "s" that are not plurals
_INVARIANT_WORDS = frozenset({
    "ademas", "antes", "atras", "crisis", "despues", "detras", "dios",
    "entonces", "jamas", "jueves", "lunes", "martes", "menos", "miercoles",
    "mientras", "nosotros", "pues", "quizas", "seis", "tras", "traves",
    "tres", "viernes", "vosotros",
})


def remove_accents(input_str: str) -> str:
    s = unicodedata.normalize("NFD", input_str)
    return "".join(c for c in s if unicodedata.category(c) != "Mn")


def fold(text: str) -> str:
    """
    Case + diacritic folding only.
    Used where stored names are compared almost literally.
    """
    return remove_accents(text.lower())


def strip_punctuation(text: str) -> str:
    """Replace punctuation with spaces and collapse whitespace."""
    text = _PUNCTUATION_RE.sub(" ", text)
    return _SPACES_RE.sub(" ", text).strip()


def singularize(word: str) -> str:
    """
    Stemming-lite plural folding for a folded Spanish word.

    veces -> vez, generaciones -> generacion, hombres -> hombre,
    guerras -> guerra. Short and invariant words are left alone.
    """
    if len(word) <= 3 or word in _INVARIANT_WORDS or not word.isalpha():
        return word

    if word.endswith("ces") and word[-4] in _VOWELS:
        return word[:-3] + "z"

    # mujeres -> mujer, but padres -> padre
    if word.endswith("es") and word[-3] in "lnrdj" and word[-4] in _VOWELS:
        return word[:-2]

    if word.endswith("s") and word[-2] in _VOWELS:
        return word[:-1]

    return word


def normalize(text: str) -> str:
    """
    Canonical form of a question for entity and fuzzy matching.
    - Removes punctuation.
    - Lowercases and strips accents.
    - Collapses plurals, except for capitalised words (proper nouns).
    """
    text = unicodedata.normalize("NFC", text)
    words = []
    for word in strip_punctuation(text).split():
        folded = fold(word)
        if word[:1].isupper():
            words.append(folded)
        else:
            words.append(singularize(folded))

    result = " ".join(words)
    logger.debug("[NORMALIZE] %r -> %r", text, result)
    return result
