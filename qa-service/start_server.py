import os
import sys
import logging

import uvicorn

logger = logging.getLogger("start_server")


def start():
    sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

    from macondo.core.config import PORT, LOG_LEVEL
    from macondo.core.startup import configure_logging

    configure_logging(LOG_LEVEL)
    host = "0.0.0.0"

    try:
        from macondo.main import app
        logger.info(f"[STARTUP] Launching Uvicorn on {host}:{PORT}...")
        uvicorn.run(
            app,
            host=host,
            port=PORT,
            log_level=LOG_LEVEL.lower(),
            proxy_headers=True,
            forwarded_allow_ips="*",
            timeout_keep_alive=30,
        )
    except Exception:
        logger.exception("[FATAL] Server startup failed")
        sys.exit(1)


if __name__ == "__main__":
    start()
