"""
test_query_understanding.py - Tests for question analysis.
"""
from unittest.mock import MagicMock

import pytest

from macondo.core.errors import StoreUnavailable
from macondo.services.query_understanding import analyze_question, extract_chapter_number
from macondo.services.verb_intents import VerbIntent
from macondo.store.base_store import DocumentStore


@pytest.mark.parametrize("text,number", [
    ("que paso en el capitulo 12", 12),
    ("Capítulo 3", 3),
    ("capitulo7", 7),
    ("capitulos 3", None),
    ("que paso", None),
])
def test_extract_chapter_number(text, number):
    assert extract_chapter_number(text) == number


class TestAnalyzeQuestion:

    def test_entities_and_verbs(self, saga_store):
        analysis = analyze_question("¿Dónde murió José Arcadio Buendía?", saga_store)
        assert analysis.normalized_question == "donde murio jose arcadio buendia"
        assert analysis.matched_characters == ("José Arcadio Buendía",)
        assert analysis.matched_places == ()
        assert analysis.verb_intents == (VerbIntent.DIE,)
        assert analysis.verb_patterns
        assert analysis.fuzzy_event is None
        assert not analysis.is_existence_question

    def test_chapter_after_normalization(self, saga_store):
        analysis = analyze_question("¿Qué pasa en los capítulos 4?", saga_store)
        assert analysis.chapter_number == 4

    def test_fuzzy_event(self, saga_store):
        analysis = analyze_question("Llegada de los gitanos", saga_store)
        assert analysis.fuzzy_event["id"] == "e3"

    def test_existence_skips_fuzzy(self, saga_store):
        analysis = analyze_question("¿Hubo alguna peste del insomnio?", saga_store)
        assert analysis.existence_term == "peste del insomnio"
        assert analysis.is_existence_question
        assert analysis.fuzzy_event is None

    def test_fuzzy_threshold_passed_through(self, saga_store):
        analysis = analyze_question("Llegada de los gitanos", saga_store, fuzzy_threshold=1.0)
        assert analysis.fuzzy_event is None

    def test_summary_is_loggable(self, saga_store):
        summary = analyze_question("¿Quién murió?", saga_store).summary()
        assert summary["verb_intents"] == ["morir"]
        assert summary["fuzzy_event"] is None

    def test_store_failure_propagates(self):
        store = MagicMock(spec=DocumentStore)
        store.list_by_kind.side_effect = StoreUnavailable("connection refused")
        with pytest.raises(StoreUnavailable):
            analyze_question("¿Qué pasó?", store)
