import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Query

import macondo.core.startup as startup
from macondo.api.responses import error_response
from macondo.core.errors import BadInput
from macondo.schemas.preguntas import BuscarResponse, ErrorResponse
from macondo.services.text_search import search_all

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Buscar"]
)

@router.get(
    "/buscar",
    response_model=BuscarResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def buscar(q: Optional[str] = Query(None, description="Texto a buscar")):
    """Substring search over characters, places, objects, generations and events."""
    logger.info(f"[ROUTE] GET /api/buscar?q={q}")
    try:
        if q is None or not q.strip():
            raise BadInput("Missing q parameter")
        store = startup.get_store()
        return await asyncio.to_thread(search_all, q, store)
    except Exception as e:
        return error_response(e)
