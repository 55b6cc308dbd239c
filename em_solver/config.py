# config.py
import os

# ======= Search caps =======
# Placement attempts before the solver gives up (<= 0 disables the cap)
NODE_LIMIT     = int(os.getenv("EM_NODE_LIMIT", "5000000"))
# Wall-clock seconds per solve (0 disables the deadline)
TIME_LIMIT     = float(os.getenv("EM_TIME_LIMIT", "0"))
WORKERS        = int(os.getenv("EM_WORKERS", "1"))

# ======= Traversal =======
ORDER          = os.getenv("EM_ORDER", "row_major")

# ======= Logging =======
LOG_LEVEL      = os.getenv("EM_LOG_LEVEL", "WARNING")
PROGRESS_EVERY = int(os.getenv("EM_PROGRESS_EVERY", "100000"))

# ======= Rendering =======
SVG_CELL_PX    = int(os.getenv("EM_SVG_CELL_PX", "60"))

# ======= Server =======
HOST = os.getenv("EM_HOST", "0.0.0.0")
PORT = int(os.getenv("EM_PORT", "8000"))
# Largest board size a request may ask for
MAX_SIZE          = int(os.getenv("EM_MAX_SIZE", "16"))
# Deadline for each request's solve; clients can only lower it (<= 0 disables)
SERVER_TIME_LIMIT = float(os.getenv("EM_SERVER_TIME_LIMIT", "30"))


class CFG:
    NODE_LIMIT = NODE_LIMIT
    TIME_LIMIT = TIME_LIMIT
    WORKERS    = WORKERS

    ORDER = ORDER

    LOG_LEVEL      = LOG_LEVEL
    PROGRESS_EVERY = PROGRESS_EVERY

    SVG_CELL_PX = SVG_CELL_PX

    HOST = HOST
    PORT = PORT
    MAX_SIZE          = MAX_SIZE
    SERVER_TIME_LIMIT = SERVER_TIME_LIMIT


__all__ = ["CFG"]
