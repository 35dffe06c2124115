"""
conftest.py - Pytest configuration for QA service tests

Sets up Python path and a small in-memory narrative store.
"""
import copy
import sys
from pathlib import Path

import pytest

# Add qa-service to path for imports
QA_SERVICE_DIR = Path(__file__).parent.parent / "qa-service"

if str(QA_SERVICE_DIR) not in sys.path:
    sys.path.insert(0, str(QA_SERVICE_DIR))

from macondo.store.json_store import JsonDocumentStore  # noqa: E402


# Event texts share almost no words with the questions used in the
# planner tests, so fuzzy ranking stays below threshold unless a test
# words a question like an event.
SAGA_DATA = {
    "generations": [
        {"id": "g1", "name": "Primera generación", "main_characters": ["c1", "c2"]},
    ],
    "characters": [
        {"id": "c1", "name": "José Arcadio Buendía", "objects": ["o1"]},
        {"id": "c2", "name": "Úrsula Iguarán", "objects": []},
        {"id": "c3", "name": "Amaranta", "objects": []},
    ],
    "places": [
        {"id": "p1", "name": "Macondo", "related_events": ["e1"]},
        {"id": "p2", "name": "Riohacha", "related_events": ["e2"]},
    ],
    "objects": [
        {"id": "o1", "name": "Imán", "related_event": "e3", "related_place": "p1", "related_character": "c1"},
        {"id": "o2", "name": "Daguerrotipo"},
    ],
    "events": [
        {"id": "e1", "name": "Fundación", "description": "Cruzó la sierra con su familia.",
         "involved_characters": ["c1", "c2"], "related_place": "p1", "related_generation": "g1"},
        {"id": "e2", "name": "Guerra civil", "description": "Treinta y dos levantamientos armados.",
         "involved_characters": [], "related_place": "p2"},
        {"id": "e3", "name": "Llegada de los gitanos", "description": "Trajeron lingotes imantados.",
         "involved_characters": [], "related_place": "p1"},
        {"id": "e4", "name": "Peste del insomnio", "description": "El pueblo perdió la memoria.",
         "involved_characters": ["c2"], "related_place": "p1"},
        {"id": "e5", "name": "Muerte de Amaranta", "description": "Amaranta falleció tejiendo su mortaja.",
         "involved_characters": ["c3"], "related_place": "p1"},
    ],
    "chapters": [
        {"id": "ch1", "number": 1, "events": ["e1", "e3"]},
        {"id": "ch4", "number": 4, "events": ["e4"]},
    ],
}


@pytest.fixture
def saga_store():
    return JsonDocumentStore.from_data(SAGA_DATA)


@pytest.fixture
def saga_data():
    return copy.deepcopy(SAGA_DATA)
