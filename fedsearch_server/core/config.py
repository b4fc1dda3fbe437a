import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from .error import ConfigurationError

DATAMUSE_API_URL = "https://api.datamuse.com/words"
EUROPEANA_API_URL = "https://api.europeana.eu/record/v2/search.json"
PLOS_API_URL = "https://api.plos.org/search"
PLOS_ARTICLE_URL = "https://journals.plos.org/plosone/article?id={id}"

DEFAULT_DATAMUSE_MAX = 5
DEFAULT_ROWS = 20
DEFAULT_PLOS_FIELDS = "title_display,score,id"
DEFAULT_EXPANSION_TIMEOUT = 10.0
DEFAULT_PROVIDER_TIMEOUT = 20.0

PLACEHOLDER_TITLE = "Untitled"
PLACEHOLDER_LINK = "#"


def load_env() -> None:
    """
    Load environment variables from the project root `.env`.

    Falls back to a `.env` in the current working directory.
    """
    project_root = Path(__file__).resolve().parents[2]
    env_path = project_root / ".env"
    if env_path.exists():
        load_dotenv(env_path)
        return
    cwd_env = Path.cwd() / ".env"
    if cwd_env.exists():
        load_dotenv(cwd_env)


@dataclass(frozen=True)
class SearchConfig:
    """
    Process-wide settings, built once at startup and never mutated.
    """
    europeana_api_key: str
    datamuse_url: str = DATAMUSE_API_URL
    datamuse_max: int = DEFAULT_DATAMUSE_MAX
    expansion_timeout: float = DEFAULT_EXPANSION_TIMEOUT
    europeana_url: str = EUROPEANA_API_URL
    europeana_rows: int = DEFAULT_ROWS
    plos_url: str = PLOS_API_URL
    plos_rows: int = DEFAULT_ROWS
    plos_fields: str = DEFAULT_PLOS_FIELDS
    provider_timeout: float = DEFAULT_PROVIDER_TIMEOUT


def _get_str(environ: Mapping[str, str], key: str, default: str) -> str:
    return (environ.get(key) or "").strip() or default


def _get_number(environ: Mapping[str, str], key: str, default, cast):
    raw = (environ.get(key) or "").strip()
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError:
        raise ConfigurationError(
            f"{key} must be a number, got {raw!r}",
            details={"key": key, "value": raw},
        ) from None
    if not math.isfinite(value) or value <= 0:
        raise ConfigurationError(
            f"{key} must be a positive finite number, got {raw!r}",
            details={"key": key, "value": raw},
        )
    return value


def load_config(environ: Optional[Mapping[str, str]] = None) -> SearchConfig:
    """
    Build the SearchConfig from environment variables.

    - EUROPEANA_API_KEY: Europeana API key (required)
    - DATAMUSE_API_URL / DATAMUSE_MAX_RESULTS / EXPANSION_TIMEOUT
    - EUROPEANA_API_URL / EUROPEANA_ROWS
    - PLOS_API_URL / PLOS_ROWS / PLOS_FIELDS
    - PROVIDER_TIMEOUT: seconds per provider request

    Raises:
        ConfigurationError: if the API key is missing or a number is invalid
    """
    if environ is None:
        environ = os.environ

    api_key = (environ.get("EUROPEANA_API_KEY") or "").strip()
    if not api_key:
        raise ConfigurationError(
            "EUROPEANA_API_KEY is not set. Get a key at "
            "https://pro.europeana.eu/page/get-an-api-key and add it to .env",
            details={"key": "EUROPEANA_API_KEY"},
        )

    return SearchConfig(
        europeana_api_key=api_key,
        datamuse_url=_get_str(environ, "DATAMUSE_API_URL", DATAMUSE_API_URL),
        datamuse_max=_get_number(environ, "DATAMUSE_MAX_RESULTS", DEFAULT_DATAMUSE_MAX, int),
        expansion_timeout=_get_number(environ, "EXPANSION_TIMEOUT", DEFAULT_EXPANSION_TIMEOUT, float),
        europeana_url=_get_str(environ, "EUROPEANA_API_URL", EUROPEANA_API_URL),
        europeana_rows=_get_number(environ, "EUROPEANA_ROWS", DEFAULT_ROWS, int),
        plos_url=_get_str(environ, "PLOS_API_URL", PLOS_API_URL),
        plos_rows=_get_number(environ, "PLOS_ROWS", DEFAULT_ROWS, int),
        plos_fields=_get_str(environ, "PLOS_FIELDS", DEFAULT_PLOS_FIELDS),
        provider_timeout=_get_number(environ, "PROVIDER_TIMEOUT", DEFAULT_PROVIDER_TIMEOUT, float),
    )
