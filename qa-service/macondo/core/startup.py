import logging
from typing import Optional

from .config import LOG_LEVEL, STORE_PATH
from .errors import StoreUnavailable
from macondo.store.base_store import DocumentStore
from macondo.store.json_store import JsonDocumentStore

logger = logging.getLogger(__name__)

# Global resources (initialized in load_store)
store: Optional[DocumentStore] = None
LOADING_ERROR = None


def configure_logging(level: str = LOG_LEVEL):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def load_store(path: str = STORE_PATH) -> Optional[DocumentStore]:
    """
    Load the narrative snapshot. Called from the app lifespan.
    On failure the service keeps running and reports the error on /health/detailed.
    """
    global store, LOADING_ERROR

    logger.info(f"[STARTUP] Loading document store from {path}...")
    try:
        store = JsonDocumentStore.from_file(path)
        LOADING_ERROR = None
    except StoreUnavailable as e:
        logger.error(f"[STARTUP] Failed to load document store: {e}")
        store = None
        LOADING_ERROR = str(e)
    return store


def get_store() -> DocumentStore:
    if store is None:
        raise StoreUnavailable(LOADING_ERROR or "Document store is not loaded")
    return store
