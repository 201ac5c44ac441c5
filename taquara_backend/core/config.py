import os
from datetime import datetime

# =====================================
# Global configuration for Taquara
# =====================================

# TEST_MODE:
# When True, testing features are enabled.
# Example uses:
#   - Seed a default admin password if none is configured
#   - Echo extra progress information during seeding
TEST_MODE = os.getenv("TAQUARA_TEST_MODE", "1") == "1"

# --- Database ---
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
DB_PATH = os.getenv("TAQUARA_DB_PATH", os.path.join(BASE_DIR, "taquara.db"))
SQL_ECHO = os.getenv("TAQUARA_SQL_ECHO", "0") == "1"


def _parse_id_set(raw: str) -> frozenset:
    """Parses "5,6,7,8" into frozenset({5, 6, 7, 8}). Blank items are ignored."""
    return frozenset(int(part) for part in raw.split(",") if part.strip())


# Matches voided by the admin (round 18 fixtures). They stay in the results
# history but never count for standings, predictions or the open round.
EXCLUDED_MATCH_IDS = _parse_id_set(os.getenv("TAQUARA_EXCLUDED_MATCHES", "5,6,7,8"))

# --- League rules ---
WIN_POINTS = 3
DRAW_POINTS = 1
PROMOTION_SPOTS = 4
RELEGATION_SPOTS = 4

# Number of recent results shown in the form column
FORM_WINDOW = 5

# --- Prediction scoring ---
POINTS_EXACT = 3     # exact scoreline
POINTS_OUTCOME = 1   # right winner (or draw), wrong scoreline
POINTS_MISS = 0

# --- Sessions / admin ---
SESSION_TTL_MINUTES = int(os.getenv("TAQUARA_SESSION_TTL_MINUTES", "720"))
SESSION_COOKIE_NAME = "session"
ADMIN_EMAIL = os.getenv("TAQUARA_ADMIN_EMAIL", "admin@taquara.local")
ADMIN_PASSWORD = os.getenv("TAQUARA_ADMIN_PASSWORD", "admin" if TEST_MODE else "")

# --- Season ---
SEASON_START = datetime.fromisoformat(os.getenv("TAQUARA_SEASON_START", "2025-04-05T16:00:00"))
