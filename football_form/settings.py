import os
from dotenv import load_dotenv

# Load .env from repo root (dotenv auto-walks up from CWD)
load_dotenv()


def _get_int(name: str, default: int) -> int:
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    try:
        return int(val)
    except ValueError:
        return default


# --- SofaScore tunables ---
SOFASCORE_TIMEOUT_MS = _get_int("SOFASCORE_TIMEOUT_MS", 10000)   # per-call timeout

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
