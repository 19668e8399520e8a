"""Application configuration defaults."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import find_dotenv, load_dotenv

from paravault.errors import ConfigError

LOGGER = logging.getLogger(__name__)

PROVIDERS = ("gemini", "claude")


def _get_default_vault_path() -> Path:
    return Path.home() / "Documents" / "Vault"


def load_env_file() -> str | None:
    """Load API keys from the nearest .env file, if any."""
    dotenv_path = find_dotenv(usecwd=True)
    if dotenv_path:
        load_dotenv(dotenv_path)
        LOGGER.debug("Loaded environment from %s", dotenv_path)
    return dotenv_path or None


def _float(environ: Mapping[str, str], key: str, default: float) -> float:
    raw = environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"{key} must be a number, got {raw!r}") from exc


def _int(environ: Mapping[str, str], key: str, default: int) -> int:
    raw = environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{key} must be an integer, got {raw!r}") from exc


@dataclass(slots=True)
class AppConfig:
    vault_path: Path | None = None
    screenshots_dir: str = "Attachments/Xeets"
    resources_dir: str = "03 - Resources/X Insights"
    projects_dir: str = "01 - Projects/Ideas"
    review_dir: str = "00 - Inbox/Xeets to Review"
    log_file: str = "00 - Inbox/Xeet Processing Log.md"
    processed_file: str = ".processed-xeets.json"
    confidence_threshold: float = 0.7
    provider: str = "gemini"
    model_name: str | None = None
    enable_research: bool = True
    max_research_results: int = 5
    research_relevance_threshold: float = 0.6
    google_api_key: str | None = None
    search_engine_id: str | None = None
    anthropic_api_key: str | None = None
    request_timeout: float = 60.0

    def __post_init__(self) -> None:
        if self.vault_path is None:
            self.vault_path = _get_default_vault_path()
        self.vault_path = Path(self.vault_path).expanduser()
        if self.provider not in PROVIDERS:
            raise ConfigError(
                f"Unknown AI provider {self.provider!r}; expected one of {', '.join(PROVIDERS)}"
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "AppConfig":
        """Build a config from environment variables (and .env when reading os.environ)."""
        if environ is None:
            load_env_file()
            environ = os.environ

        vault = environ.get("VAULT_PATH")
        return cls(
            vault_path=Path(vault) if vault else None,
            confidence_threshold=_float(environ, "CONFIDENCE_THRESHOLD", 0.7),
            provider=(environ.get("AI_PROVIDER") or "gemini").strip().lower(),
            model_name=environ.get("AI_MODEL") or None,
            enable_research=environ.get("ENABLE_AUTO_RESEARCH", "").strip().lower() != "false",
            max_research_results=_int(environ, "MAX_RESEARCH_RESULTS", 5),
            research_relevance_threshold=_float(environ, "RESEARCH_RELEVANCE_THRESHOLD", 0.6),
            google_api_key=environ.get("GOOGLE_API_KEY") or None,
            search_engine_id=environ.get("GOOGLE_SEARCH_ENGINE_ID") or None,
            anthropic_api_key=environ.get("ANTHROPIC_API_KEY") or None,
            request_timeout=_float(environ, "REQUEST_TIMEOUT", 60.0),
        )

    def resolve(self, relative: str) -> Path:
        """Absolute location of a vault-relative path."""
        return Path(self.vault_path) / relative

    @property
    def processed_path(self) -> Path:
        return self.resolve(self.processed_file)
