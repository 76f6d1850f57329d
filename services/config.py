"""
services/config.py – Runtime configuration for the search pipeline.

Defaults live in the constant block below; ``SearchConfig.from_env()`` lets
each of them be overridden with a ``BOARDSEARCH_*`` environment variable.
"""

import os
from dataclasses import dataclass
from typing import Callable, Mapping, Optional, TypeVar

from services.exceptions import ConfigError

# ── Configuration ────────────────────────────────────────────────────────────

# Quiet period after the last keystroke before a search is issued.
DEBOUNCE_MS: int = 500

# Maximum number of entries shown in the results list.
RESULT_CAP: int = 100

# A fuzzy search returning more than this many records also triggers an
# exact-name search whose matches are ranked first.
EXACT_MATCH_THRESHOLD: int = 50

# XML API root of the catalogue service.
BASE_URL: str = "https://boardgamegeek.com/xmlapi2"

# Site root that ``game/<id>`` link targets are resolved against.
SITE_URL: str = "https://boardgamegeek.com"

# HTTP timeout (seconds); None waits indefinitely.
HTTP_TIMEOUT: Optional[float] = None

# Shown in place of the year when the catalogue has none.
YEAR_PLACEHOLDER: str = "?"

ENV_PREFIX: str = "BOARDSEARCH_"

_T = TypeVar("_T")


@dataclass(frozen=True)
class SearchConfig:
    """
    Tunables for one search field.

    Attributes
    ----------
    debounce_ms           : Debounce delay in milliseconds.
    result_cap            : Display cap for the merged result list.
    exact_match_threshold : Base-result count above which exact search runs.
    base_url              : Catalogue XML API root.
    site_url              : Root used to open ``game/<id>`` targets.
    api_token             : Opaque bearer credential, passed through as-is.
    http_timeout          : Per-request timeout in seconds (None = no limit).
    show_year             : Whether labels carry the publication year.
    year_placeholder      : Text used when a record has no year.
    """

    debounce_ms: int = DEBOUNCE_MS
    result_cap: int = RESULT_CAP
    exact_match_threshold: int = EXACT_MATCH_THRESHOLD
    base_url: str = BASE_URL
    site_url: str = SITE_URL
    api_token: Optional[str] = None
    http_timeout: Optional[float] = HTTP_TIMEOUT
    show_year: bool = True
    year_placeholder: str = YEAR_PLACEHOLDER

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Raise ConfigError when a value is out of range."""
        if self.debounce_ms < 0:
            raise ConfigError(f"debounce_ms must be >= 0, got {self.debounce_ms}.")
        if self.result_cap <= 0:
            raise ConfigError(f"result_cap must be > 0, got {self.result_cap}.")
        if self.exact_match_threshold < 0:
            raise ConfigError(
                f"exact_match_threshold must be >= 0, got {self.exact_match_threshold}."
            )
        if self.http_timeout is not None and self.http_timeout <= 0:
            raise ConfigError(f"http_timeout must be > 0, got {self.http_timeout}.")
        if not self.base_url:
            raise ConfigError("base_url must not be empty.")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SearchConfig":
        """
        Build a config from ``BOARDSEARCH_*`` variables, falling back to defaults.

        Raises
        ------
        ConfigError
            When a variable is present but cannot be parsed.
        """
        env = os.environ if environ is None else environ

        def get(name: str, convert: Callable[[str], _T], default: _T) -> _T:
            raw = env.get(ENV_PREFIX + name)
            if raw is None or raw.strip() == "":
                return default
            try:
                return convert(raw.strip())
            except ValueError as exc:
                raise ConfigError(
                    f"Invalid value for {ENV_PREFIX}{name}: {raw!r}"
                ) from exc

        return cls(
            debounce_ms=get("DEBOUNCE_MS", int, DEBOUNCE_MS),
            result_cap=get("RESULT_CAP", int, RESULT_CAP),
            exact_match_threshold=get("EXACT_MATCH_THRESHOLD", int, EXACT_MATCH_THRESHOLD),
            base_url=get("BASE_URL", str, BASE_URL).rstrip("/"),
            site_url=get("SITE_URL", str, SITE_URL).rstrip("/"),
            api_token=get("API_TOKEN", str, None),
            http_timeout=get("HTTP_TIMEOUT", float, HTTP_TIMEOUT),
            show_year=get("SHOW_YEAR", _parse_bool, True),
        )


def _parse_bool(raw: str) -> bool:
    lowered = raw.lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ValueError(raw)
