"""
test_normalize.py - Tests for text folding and question normalization.

Covers: accent/case folding, punctuation stripping, plural folding,
and the canonical question form used by the matchers.
"""
import pytest

from macondo.utils.normalize import (
    fold,
    normalize,
    remove_accents,
    singularize,
    strip_punctuation,
)


class TestFold:

    @pytest.mark.parametrize("text,expected", [
        ("José Arcadio Buendía", "jose arcadio buendia"),
        ("ÚRSULA IGUARÁN", "ursula iguaran"),
        ("Ñandú", "nandu"),
        ("pingüino", "pinguino"),
        ("", ""),
    ])
    def test_fold(self, text, expected):
        assert fold(text) == expected

    @pytest.mark.parametrize("text", [
        "Remedios (la bella)",
        "¿Quién murió en Macondo?",
        "Cien años de soledad",
    ])
    def test_fold_is_idempotent(self, text):
        assert fold(fold(text)) == fold(text)

    def test_remove_accents_keeps_case(self):
        assert remove_accents("Melquíades") == "Melquiades"


class TestStripPunctuation:

    def test_question_marks_removed(self):
        assert strip_punctuation("¿Qué pasó?") == "Qué pasó"

    def test_collapses_whitespace(self):
        assert strip_punctuation("Macondo,   Riohacha. y  la ciénaga!") == "Macondo Riohacha y la ciénaga"


class TestSingularize:

    @pytest.mark.parametrize("word,expected", [
        ("veces", "vez"),
        ("luces", "luz"),
        ("generaciones", "generacion"),
        ("mujeres", "mujer"),
        ("ciudades", "ciudad"),
        ("hombres", "hombre"),
        ("padres", "padre"),
        ("guerras", "guerra"),
        ("gitanos", "gitano"),
    ])
    def test_plurals(self, word, expected):
        assert singularize(word) == expected

    @pytest.mark.parametrize("word", ["despues", "tres", "dios", "crisis", "dos", "mes", "guerra", "1990s"])
    def test_left_alone(self, word):
        assert singularize(word) == word


class TestNormalize:

    def test_question(self):
        assert normalize("¿Quién fundó Macondo?") == "quien fundo macondo"

    def test_plurals_folded(self):
        assert normalize("Las guerras civiles de Macondo") == "las guerra civil de macondo"

    def test_capitalised_words_keep_their_s(self):
        """Proper nouns like 'Remedios' are not plurals."""
        assert normalize("¿Quién era Remedios?") == "quien era remedios"

    def test_lowercase_plural_folded(self):
        assert normalize("los remedios") == "los remedio"

    def test_chapter_reference(self):
        assert normalize("¿Qué pasa en los capítulos 3?") == "que pasa en los capitulo 3"

    def test_empty(self):
        assert normalize("   ") == ""

    def test_idempotent_on_folded_text(self):
        once = normalize("Los gitanos trajeron imanes a Macondo")
        assert normalize(once) == once
