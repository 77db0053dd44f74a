"""
Settings and configuration for furiwake.

All values can be overridden through environment variables.
"""

import os
from pathlib import Path

# Data directory paths
PACKAGE_DIR = Path(__file__).parent
DATA_DIR = PACKAGE_DIR / "data"

# Database path - defaults to data/furiwake.db
DEFAULT_DB_PATH = DATA_DIR / "furiwake.db"

# Environment variable for custom database path
DB_PATH = Path(os.environ.get("FURIWAKE_DB_PATH", DEFAULT_DB_PATH))

# Optional JSON resource file used by the CLI when no database is given
_resources_path = os.environ.get("FURIWAKE_RESOURCES_PATH")
RESOURCES_PATH = Path(_resources_path) if _resources_path else None

# Debug mode
DEBUG = os.environ.get("FURIWAKE_DEBUG", "").lower() in ("1", "true", "yes")

# Maximum number of search steps spent on a single entry before it is
# given up as unsolved
MAX_SEARCH_STEPS = int(os.environ.get("FURIWAKE_MAX_SEARCH_STEPS", "200000"))

# Solve single-kanji words by stripping their surrounding kana when no
# dictionary reading matches
SINGLE_KANJI_FALLBACK = os.environ.get(
    "FURIWAKE_SINGLE_KANJI_FALLBACK", ""
).lower() in ("1", "true", "yes")


def ensure_data_dirs():
    """Create necessary data directories if they don't exist."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)
