"""
Single place to read settings from the environment (or a local .env).

Game constants (4 digits, 5 misses, 5 reveals) live in engine.py and
game.py; they are not meant to be tuned.
"""

import os

from dotenv import load_dotenv

# dev convenience; in prod the platform injects env vars
load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Historical events source (api-ninjas by default)
HISTORY_API_URL = os.getenv("HISTORY_API_URL", "https://api.api-ninjas.com/v1/historicalevents")
HISTORY_API_KEY = os.getenv("HISTORY_API_KEY", "")
HISTORY_API_TIMEOUT = float(os.getenv("HISTORY_API_TIMEOUT", "5.0"))

# Range the secret year is drawn from (inclusive)
MIN_YEAR = int(os.getenv("MIN_YEAR", "1000"))
MAX_YEAR = int(os.getenv("MAX_YEAR", "2023"))
if not (0 <= MIN_YEAR <= MAX_YEAR <= 9999):
    raise RuntimeError(
        f"MIN_YEAR/MAX_YEAR must satisfy 0 <= MIN_YEAR <= MAX_YEAR <= 9999 (got {MIN_YEAR}, {MAX_YEAR})."
    )

# Year selection retry policy
YEAR_SELECTION_MAX_ATTEMPTS = int(os.getenv("YEAR_SELECTION_MAX_ATTEMPTS", "10"))
YEAR_SELECTION_BACKOFF = float(os.getenv("YEAR_SELECTION_BACKOFF", "0.25"))
YEAR_SELECTION_BACKOFF_CAP = float(os.getenv("YEAR_SELECTION_BACKOFF_CAP", "4.0"))
if YEAR_SELECTION_MAX_ATTEMPTS < 1:
    raise RuntimeError(f"YEAR_SELECTION_MAX_ATTEMPTS must be at least 1 (got {YEAR_SELECTION_MAX_ATTEMPTS}).")
if YEAR_SELECTION_BACKOFF < 0 or YEAR_SELECTION_BACKOFF_CAP < 0:
    raise RuntimeError(
        f"YEAR_SELECTION_BACKOFF/YEAR_SELECTION_BACKOFF_CAP must not be negative "
        f"(got {YEAR_SELECTION_BACKOFF}, {YEAR_SELECTION_BACKOFF_CAP})."
    )

# Sessions untouched for this long are dropped when a new one is created; 0 keeps them forever
SESSION_IDLE_TIMEOUT = float(os.getenv("SESSION_IDLE_TIMEOUT", "3600"))
