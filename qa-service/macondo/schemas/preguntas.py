from pydantic import BaseModel
from typing import Any, Dict, List, Optional, Union

class EventOut(BaseModel):
    id: Union[str, int]
    name: Optional[str] = None
    description: Optional[str] = None
    # ids, or the referenced documents once populated
    involved_characters: Optional[List[Any]] = []
    related_place: Optional[Any] = None
    related_generation: Optional[Any] = None

    class Config:
        # Allow extra fields without crashing
        extra = "ignore"

class PreguntaResponse(BaseModel):
    chapter: Union[int, str]
    term: Optional[str] = None
    events: List[EventOut]

class BuscarResponse(BaseModel):
    characters: List[Dict[str, Any]]
    places: List[Dict[str, Any]]
    objects: List[Dict[str, Any]]
    generations: List[Dict[str, Any]]
    events: List[Dict[str, Any]]

class ErrorResponse(BaseModel):
    error: str
