import os

# ===============================
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# ===============================
# DOCUMENT STORE CONFIG
# ===============================
STORE_PATH = os.getenv("STORE_PATH", os.path.join(BASE_DIR, "data", "macondo.json"))

# ===============================
# NLU CONFIG
# ===============================
FUZZY_THRESHOLD = float(os.getenv("FUZZY_THRESHOLD", 0.2))  # Fuzzy event match (strictly greater)
ENTITY_LOAD_WORKERS = int(os.getenv("ENTITY_LOAD_WORKERS", 3))  # Concurrent entity-kind reads

# ===============================
# SERVER CONFIG
# ===============================
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
PORT = int(os.getenv("PORT", 8080))
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ORIGINS",
        "http://localhost:3000,http://localhost:8080,http://127.0.0.1:3000,http://127.0.0.1:8080",
    ).split(",")
    if origin.strip()
]
