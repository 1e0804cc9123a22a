"""Configuration from environment variables (and an optional .env file)."""

import os
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_CACHE_DIR = "~/.cache/gedcom-map"
DEFAULT_USER_AGENT = "gedcom-map/0.1"


def configure() -> None:
    """Load .env if present. Existing env vars are not overridden."""
    load_dotenv()


def resolve_gedcom_path() -> Path:
    """Get GEDCOM path from GEDCOM_FILE env var.

    Raises:
        FileNotFoundError: If GEDCOM_FILE env var not set or file doesn't exist.
    """
    env_path = os.getenv("GEDCOM_FILE")
    if not env_path:
        raise FileNotFoundError(
            "GEDCOM_FILE environment variable not set.\n"
            "Set it to the path of your .ged file:\n"
            "  export GEDCOM_FILE=/path/to/your/tree.ged\n"
            "Or use the --gedcom-file CLI argument:\n"
            "  gedcom-map --gedcom-file /path/to/your/tree.ged"
        )
    path = Path(env_path).expanduser().resolve()
    if not path.exists():
        raise FileNotFoundError(f"GEDCOM file not found: {path}")
    return path


def get_google_key() -> str | None:
    """Google Maps API key, or None to use OpenStreetMap."""
    return os.getenv("GOOGLE_MAPS_API_KEY", "").strip() or None


def get_cache_dir() -> Path:
    return Path(os.getenv("GEOCODE_CACHE_DIR") or DEFAULT_CACHE_DIR).expanduser()


def get_nominatim_user_agent() -> str:
    return os.getenv("NOMINATIM_USER_AGENT") or DEFAULT_USER_AGENT
