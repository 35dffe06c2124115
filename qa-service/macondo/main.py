import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import macondo.core.startup as startup
from macondo.api.buscar import router as buscar_router
from macondo.api.preguntas import router as preguntas_router
from macondo.core.config import CORS_ORIGINS

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    startup.configure_logging()
    logger.info("[LIFESPAN] Loading document store...")
    startup.load_store()
    yield


app = FastAPI(
    title="Macondo QA",
    version="1.0.0",
    lifespan=lifespan
)

# ===== MIDDLEWARE =====
@app.middleware("http")
async def log_requests(request, call_next):
    start_time = time.time()
    path = request.url.path
    logger.info(f"[REQUEST] {request.method} {path}")
    response = await call_next(request)
    duration = time.time() - start_time
    logger.info(f"[RESPONSE] {request.method} {path} | Status: {response.status_code} | {duration:.3f}s")
    return response

# ===== CORS =====
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ===== ROUTERS =====
app.include_router(preguntas_router, prefix="/api")
app.include_router(buscar_router, prefix="/api")

# ===== HEALTH CHECK =====
@app.get("/health")
def health():
    """Basic health check for load balancers."""
    return {"status": "ok"}


@app.get("/health/detailed")
def health_detailed():
    """
    Detailed health check:
    - Document store is loaded
    - Collection sizes
    """
    store = startup.store
    counts = store.counts() if store is not None and hasattr(store, "counts") else {}
    return {
        "status": "ok" if store is not None else "error",
        "store": {
            "loaded": store is not None,
            "collections": counts,
        },
        "error": startup.LOADING_ERROR,
        "ready": store is not None and counts.get("events", 0) > 0,
    }


@app.get("/")
def root():
    is_ready = startup.store is not None
    return {
        "service": "Macondo QA",
        "status": "ready" if is_ready else "loading",
        "ready": is_ready,
        "error": startup.LOADING_ERROR,
    }
