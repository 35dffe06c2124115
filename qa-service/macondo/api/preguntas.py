import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Query

import macondo.core.startup as startup
from macondo.api.responses import error_response
from macondo.core.errors import BadInput
from macondo.schemas.preguntas import ErrorResponse, PreguntaResponse
from macondo.services.query_planner import plan

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Preguntas"]
)

@router.get(
    "/preguntas",
    response_model=PreguntaResponse,
    response_model_exclude_unset=True,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def preguntas(q: Optional[str] = Query(None, description="Pregunta en lenguaje natural")):
    """
    Answers a free-text question about the saga.
    plan() reads the whole store and is synchronous,
    so we offload it to a worker thread.
    """
    logger.info(f"[ROUTE] GET /api/preguntas?q={q}")
    try:
        if q is None or not q.strip():
            raise BadInput("Missing q parameter")
        store = startup.get_store()
        result = await asyncio.to_thread(plan, q, store)
    except Exception as e:
        return error_response(e)
    return result.to_dict()
