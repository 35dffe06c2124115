"""
test_entity_matcher.py - Tests for alias extraction and loose entity matching.
"""
import pytest

from macondo.services.entity_matcher import (
    match_characters,
    match_entities,
    match_objects,
    match_places,
)
from macondo.store.base_store import Kind
from macondo.store.json_store import JsonDocumentStore
from macondo.utils.entity import extract_alias, match_flexible
from macondo.utils.normalize import normalize


class TestExtractAlias:

    def test_with_alias(self):
        parsed = extract_alias("José Arcadio (el Grande)")
        assert parsed.name == "jose arcadio"
        assert parsed.alias == "el grande"
        assert parsed.original == "José Arcadio (el Grande)"

    def test_without_alias(self):
        parsed = extract_alias("Úrsula Iguarán")
        assert parsed.name == "ursula iguaran"
        assert parsed.alias is None

    @pytest.mark.parametrize("full_name", [
        "Remedios (la bella)",
        "José Arcadio (hijo)",
        "Aureliano (el coronel) Buendía",
    ])
    def test_name_has_no_parentheses(self, full_name):
        parsed = extract_alias(full_name)
        assert "(" not in parsed.name and ")" not in parsed.name
        assert parsed.alias

    def test_alias_in_the_middle(self):
        parsed = extract_alias("Aureliano (el coronel) Buendía")
        assert parsed.name == "aureliano buendia"
        assert parsed.alias == "el coronel"


class TestMatchFlexible:

    def test_whole_name(self):
        assert match_flexible("jose arcadio buendia", "donde vivio jose arcadio buendia")

    def test_single_word(self):
        assert match_flexible("ursula iguaran", "que hizo ursula")

    def test_no_match(self):
        assert not match_flexible("amaranta", "quien fundo macondo")

    def test_empty(self):
        assert not match_flexible("", "macondo")
        assert not match_flexible("macondo", "")

    def test_short_words_over_match(self):
        """'la' of 'la bella' is found inside many questions."""
        assert match_flexible("la bella", "que paso en la casa")


class TestMatchEntities:

    def test_characters(self, saga_store):
        names = match_characters(normalize("¿Dónde vivió José Arcadio Buendía?"), saga_store)
        assert names == ["José Arcadio Buendía"]

    def test_partial_name(self, saga_store):
        assert match_characters(normalize("¿Qué hizo Úrsula?"), saga_store) == ["Úrsula Iguarán"]

    def test_places_and_objects(self, saga_store):
        question = normalize("¿Qué hizo Amaranta en Riohacha con el imán?")
        assert match_places(question, saga_store) == ["Riohacha"]
        assert match_objects(question, saga_store) == ["Imán"]

    def test_nothing_mentioned(self, saga_store):
        question = normalize("¿Qué pasó?")
        assert match_characters(question, saga_store) == []
        assert match_places(question, saga_store) == []
        assert match_objects(question, saga_store) == []

    def test_alias_match_and_trimmed_name(self):
        store = JsonDocumentStore.from_data({
            "characters": [
                {"id": "c1", "name": "  Remedios (la bella) "},
                {"id": "c2", "name": "Rebeca"},
            ],
        })
        assert match_entities(Kind.CHARACTER, normalize("¿Quién era la bella?"), store) == ["Remedios (la bella)"]

    def test_alias_short_word_over_matches(self):
        store = JsonDocumentStore.from_data({
            "characters": [{"id": "c1", "name": "Remedios (la bella)"}],
        })
        assert match_entities(Kind.CHARACTER, normalize("¿Qué pasó en la casa?"), store) == ["Remedios (la bella)"]

    def test_documents_without_name_skipped(self):
        store = JsonDocumentStore.from_data({
            "places": [{"id": "p1"}, {"id": "p2", "name": "Macondo"}],
        })
        assert match_entities(Kind.PLACE, "quien fundo macondo", store) == ["Macondo"]
