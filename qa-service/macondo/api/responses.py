import logging

from fastapi.responses import JSONResponse

from macondo.core.errors import QAError, StoreUnavailable

logger = logging.getLogger(__name__)


def error_response(error: Exception) -> JSONResponse:
    """
    Map pipeline errors to HTTP. Must be called from an except block.

    BadInput → 400, NotFound → 404, StoreUnavailable and anything else → 500.
    """
    if isinstance(error, QAError) and not isinstance(error, StoreUnavailable):
        logger.info(f"[ERROR] {type(error).__name__}: {error}")
        return JSONResponse(status_code=error.status_code, content={"error": error.public_message})

    logger.exception(f"[ERROR] Request failed: {error}")
    return JSONResponse(status_code=500, content={"error": QAError.public_message})
