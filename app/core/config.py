import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parents[2]
DATA_DIR = Path(os.environ.get("NOCTOON_DATA_DIR", BASE_DIR / "data"))
DB_PATH = Path(os.environ.get("NOCTOON_DB_PATH", DATA_DIR / "noctoon.db"))
CACHE_DIR = Path(os.environ.get("NOCTOON_CACHE_DIR", Path.home() / ".cache" / "noctoon" / "images"))

# "memory" or "sqlite"
STORE_BACKEND = os.environ.get("NOCTOON_STORE", "memory").lower()
SEED_DEMO = os.environ.get("NOCTOON_SEED_DEMO", "1") not in ("0", "false", "no")

HOST = os.environ.get("NOCTOON_HOST", "127.0.0.1")
PORT = int(os.environ.get("NOCTOON_PORT", "8000"))
API_URL = os.environ.get("NOCTOON_API_URL", f"http://{HOST}:{PORT}")

LOG_LEVEL = os.environ.get("NOCTOON_LOG_LEVEL", "INFO").upper()
