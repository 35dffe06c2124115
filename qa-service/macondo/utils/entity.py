import re
from dataclasses import dataclass
from typing import Optional

from macondo.utils.normalize import fold

_PARENTHETICAL_RE = re.compile(r"\((.*?)\)")
_PARENTHETICAL_STRIP_RE = re.compile(r"\s*\(.*?\)\s*")


@dataclass(frozen=True)
class EntityName:
    """Folded name/alias pair of a stored entity name."""
    name: str
    alias: Optional[str]
    original: str


def extract_alias(full_name: str) -> EntityName:
    """
    "José Arcadio (el Grande)" -> name="jose arcadio", alias="el grande".
    Names without a parenthetical get alias=None.
    """
    match = _PARENTHETICAL_RE.search(full_name)
    if not match:
        return EntityName(name=fold(full_name), alias=None, original=full_name)

    alias = fold(match.group(1)).strip() or None
    name = fold(_PARENTHETICAL_STRIP_RE.sub(" ", full_name)).strip()
    return EntityName(name=name, alias=alias, original=full_name)


def match_flexible(entity_norm: str, text_norm: str) -> bool:
    """
    True if the entity, or ANY single word of it, appears in the text.

    Loose: "la" in "Remedios la bella" matches most questions.
    """
    if not entity_norm or not text_norm:
        return False
    if entity_norm in text_norm:
        return True
    return any(part in text_norm for part in entity_norm.split())
