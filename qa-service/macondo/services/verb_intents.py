"""
verb_intents.py - Narrative verb intents.

Maps a fixed taxonomy of narrative actions (die, found, marry, ...) to the
surface forms a question may use (infinitives, conjugations, nouns, phrases).

When any form of an intent appears in a question, the intent fires and is
expanded to ONE pattern per form, so "¿Quién murió?" also finds events
described with "falleció" or "pereció".
"""

import logging
import re
from enum import Enum
from functools import lru_cache
from types import MappingProxyType
from typing import List, Tuple

from macondo.utils.normalize import fold

logger = logging.getLogger(__name__)


class VerbIntent(str, Enum):
    """Narrative action categories (value = Spanish key)."""
    DIE = "morir"
    FOUND = "fundar"
    BE_BORN = "nacer"
    MARRY = "casar"
    DISAPPEAR = "desaparecer"
    AGE = "envejecer"
    LOVE = "amar"
    LEAVE = "partir"
    RETURN = "regresar"
    WRITE = "escribir"
    REVEAL = "revelar"
    KILL = "asesinar"
    READ = "leer"
    PROPHESY = "profetizar"
    IMPOSE = "imponer"
    GET_RICH = "enriquecer"
    LOSE = "perder"
    GROW = "crecer"
    FLEE = "huir"
    BUILD = "construir"
    DESTROY = "destruir"
    CHANGE = "cambiar"
    SUFFER = "sufrir"
    WIN = "ganar"
    APPEAR = "aparecer"
    VISIT = "visitar"
    REMEMBER = "recordar"
    FORGET = "olvidar"
    CONFESS = "confesar"
    SEE = "ver"
    HEAR = "oír"
    POSSESS = "poseer"
    GIVE = "entregar"
    RECEIVE = "recibir"
    HAPPEN = "haber"
    HAVE = "tener"
    TRADE = "comerciar"
    EXIST = "existir"


# Iteration order = declaration order. Forms may repeat across intents.
VERB_INTENTS = MappingProxyType({
    VerbIntent.DIE: ("morir", "murió", "falleció", "pereció", "expiró", "dejó de existir", "trascendió", "se murió"),
    VerbIntent.FOUND: ("fundar", "fundó", "crear", "creó", "establecer", "estableció", "erigir", "construyó", "formó"),
    VerbIntent.BE_BORN: ("nacer", "nació", "nacido", "nacimiento", "nacieron", "vino al mundo", "nace", "alumbramiento"),
    VerbIntent.MARRY: ("casarse", "se casó", "contrajo matrimonio", "contrajo nupcias", "matrimonio", "boda",
                       "se unió", "se desposó", "desposó", "celebró su boda"),
    VerbIntent.DISAPPEAR: ("desaparecer", "desapareció", "se desvaneció", "se perdió", "se esfumó"),
    VerbIntent.AGE: ("envejecer", "envejeció", "se volvió viejo", "se hizo mayor", "envejece"),
    VerbIntent.LOVE: ("amar", "se enamoró", "amor", "amó", "adoró", "querer", "se quiso"),
    VerbIntent.LEAVE: ("partir", "salió", "se fue", "abandonó", "marchó", "huyó", "emigró"),
    VerbIntent.RETURN: ("regresar", "volvió", "retornó", "reapareció", "regresó", "volvieron"),
    VerbIntent.WRITE: ("escribir", "escribió", "redactó", "documentó", "anotó", "registró"),
    VerbIntent.REVEAL: ("revelar", "contó", "confesó", "descubrió", "admitió", "explicó"),
    VerbIntent.KILL: ("matar", "asesinar", "fue asesinado", "ejecutar", "ajustició", "eliminó"),
    VerbIntent.READ: ("leer", "leyó", "consultó", "revisó", "estudió"),
    VerbIntent.PROPHESY: ("profetizar", "profetizó", "predijo", "adivinó", "vaticinó"),
    VerbIntent.IMPOSE: ("imponer", "impuso", "dominó", "trajo disciplina", "ordenó", "estableció normas"),
    VerbIntent.GET_RICH: ("riqueza", "hacerse rico", "volverse rico", "obtener riqueza", "rico", "ser rico",
                          "volvió rico", "hizo rico", "enriquecer", "enriquecerse", "enriqueció", "enriquecido"),
    VerbIntent.LOSE: ("perder", "perdió", "derrota", "fracasó", "fue vencido", "cayó"),
    VerbIntent.GROW: ("crecer", "creció", "crece", "crecido", "crecimiento", "crecieron", "expansión", "desarrollo"),
    VerbIntent.FLEE: ("huir", "huyó", "escapó", "fugó", "se escapó", "se fugó"),
    VerbIntent.BUILD: ("construir", "construyó", "edificó", "levantó", "edificaron"),
    VerbIntent.DESTROY: ("destruir", "destruyó", "arrasó", "derribó", "se vino abajo"),
    VerbIntent.CHANGE: ("cambiar", "cambio", "cambió", "modificar", "transformar", "modificó", "transformó",
                        "fue modificado", "variar", "variación", "se transformó"),
    VerbIntent.SUFFER: ("sufrir", "sufrió", "padeció", "dolor", "penó", "afligió"),
    VerbIntent.WIN: ("ganar", "ganó", "obtuvo", "venció", "triunfó", "logró"),
    VerbIntent.APPEAR: ("aparecer", "apareció", "surgió", "se presentó", "emergió"),
    VerbIntent.VISIT: ("visitar", "visitó", "vino a ver", "llegó a ver", "se apareció"),
    VerbIntent.REMEMBER: ("recordar", "recordó", "memoria", "rememoró", "evocó"),
    VerbIntent.FORGET: ("olvidar", "olvidó", "se le olvidó", "lo perdió de mente", "omitió"),
    VerbIntent.CONFESS: ("confesar", "confesó", "admitió", "reveló", "declaró"),
    VerbIntent.SEE: ("ver", "vio", "observó", "miró", "contempló", "presenció"),
    VerbIntent.HEAR: ("oír", "oyó", "escuchó", "percibió", "atendió"),
    VerbIntent.POSSESS: ("poseer", "tuvo", "tenía", "era dueño de", "obtuvo", "poseyó"),
    VerbIntent.GIVE: ("entregar", "entregó", "cedió", "dio", "regaló"),
    VerbIntent.RECEIVE: ("recibir", "recibió", "obtuvo", "aceptó", "fue dado"),
    VerbIntent.HAPPEN: ("haber", "hubo", "hay", "existió", "existía", "existieron", "ocurrió", "aconteció"),
    VerbIntent.HAVE: ("tener", "tenía", "tuvo", "han tenido", "hubo", "poseía", "contaba con", "mantuvo",
                      "disponía de"),
    VerbIntent.TRADE: ("comerciar", "comerció", "vendió", "intercambió", "negoció", "transó", "truequeó",
                       "traficó", "hizo negocios"),
    VerbIntent.EXIST: ("existir", "existía", "existió", "hubo", "hay", "se encontraba", "se hallaba",
                       "estaba presente", "permanecía", "subsistía"),
})


def _word_pattern(form: str) -> re.Pattern:
    """Whole-word, case-insensitive pattern for a folded surface form."""
    return re.compile(rf"\b{re.escape(fold(form))}\b", re.IGNORECASE)


@lru_cache(maxsize=None)
def expand_intent(intent: VerbIntent) -> Tuple[re.Pattern, ...]:
    """One pattern per surface form of the intent."""
    return tuple(_word_pattern(form) for form in VERB_INTENTS[intent])


def _fires(intent: VerbIntent, folded_question: str) -> bool:
    # Stop at the first form found
    return any(p.search(folded_question) for p in expand_intent(intent))


def detect_verb_intents(question: str) -> List[VerbIntent]:
    """Intents with at least one surface form present in the question."""
    folded = fold(question)
    return [intent for intent in VERB_INTENTS if _fires(intent, folded)]


def detect_verb_patterns(question: str) -> List[re.Pattern]:
    """
    Expand every intent found in the raw question into its full pattern set.

    Examples:
        "¿Quién murió?"                  → all DIE patterns
        "¿Quién nació y murió en Macondo?" → BE_BORN + DIE patterns
        "¿Qué pasó?"                     → []
    """
    patterns: List[re.Pattern] = []
    intents = detect_verb_intents(question)
    for intent in intents:
        patterns.extend(expand_intent(intent))
    if intents:
        logger.debug("[VERBS] %s", [i.value for i in intents])
    return patterns
