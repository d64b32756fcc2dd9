# backend/pharmatwin/config.py
import os

# Remote table store (Supabase / PostgREST). Leave SUPABASE_URL empty to
# serve the bundled demo catalog instead.
SUPABASE_URL = os.getenv("SUPABASE_URL", "").rstrip("/")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY", "")
CATALOG_TABLE = os.getenv("CATALOG_TABLE", "medicines")
CATALOG_LIMIT = int(os.getenv("CATALOG_LIMIT", "0")) or None
CATALOG_TIMEOUT = float(os.getenv("CATALOG_TIMEOUT", "10"))

DATABASE_URL = os.getenv("PHARMATWIN_DATABASE_URL", "sqlite:///./pharmatwin.db")

DEFAULT_LANGUAGE = "en"
DEFAULT_THEME = "light"

# In-memory cart sessions
CART_MAX_SESSIONS = int(os.getenv("CART_MAX_SESSIONS", "1000"))
CART_IDLE_TTL = float(os.getenv("CART_IDLE_TTL", "3600"))
