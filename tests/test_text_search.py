"""
test_text_search.py - Tests for the plain substring search behind /api/buscar.
"""
import pytest

from macondo.core.errors import BadInput
from macondo.services.text_search import search_all


def test_result_keys(saga_store):
    results = search_all("macondo", saga_store)
    assert set(results) == {"characters", "places", "objects", "generations", "events"}
    assert [p["id"] for p in results["places"]] == ["p1"]


def test_accents_and_case_ignored(saga_store):
    results = search_all("IMÁN", saga_store)
    assert [o["id"] for o in results["objects"]] == ["o1"]
    # "imantados" in the event description
    assert [e["id"] for e in results["events"]] == ["e3"]


def test_hits_are_populated(saga_store):
    results = search_all("imán", saga_store)
    obj = results["objects"][0]
    assert obj["related_event"]["name"] == "Llegada de los gitanos"
    assert obj["related_character"]["id"] == "c1"

    results = search_all("buendía", saga_store)
    assert [o["id"] for o in results["characters"][0]["objects"]] == ["o1"]


def test_only_events_search_descriptions(saga_store):
    results = search_all("sierra", saga_store)
    assert [e["id"] for e in results["events"]] == ["e1"]
    assert results["places"] == []


@pytest.mark.parametrize("query", [None, "", "  "])
def test_blank_query(saga_store, query):
    with pytest.raises(BadInput):
        search_all(query, saga_store)
