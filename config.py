import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_str(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


@dataclass
class Settings:
    """Runtime configuration collected from the environment"""

    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o-mini"
    jsearch_api_key: Optional[str] = None
    rapidapi_key: Optional[str] = None
    adzuna_app_id: Optional[str] = None
    adzuna_app_key: Optional[str] = None
    github_api_key: Optional[str] = None
    database_url: str = "sqlite:///./job_search.db"
    company_cache_enabled: bool = True
    use_mock_sources: bool = False
    default_location: str = "United States"
    source_timeout: float = 20.0
    ranking_timeout: float = 15.0
    chat_timeout: float = 50.0
    resume_timeout: float = 90.0
    chat_session_max: int = 1000
    chat_session_ttl: int = 3600

    @classmethod
    def from_env(cls) -> "Settings":
        jsearch_key = _env_str("JSEARCH_API_KEY")
        # The sample .env ships this placeholder
        if jsearch_key == "your_rapidapi_jsearch_key_here":
            jsearch_key = None

        return cls(
            openai_api_key=_env_str("OPENAI_API_KEY"),
            openai_model=_env_str("OPENAI_MODEL", "gpt-4o-mini"),
            jsearch_api_key=jsearch_key,
            rapidapi_key=_env_str("RAPIDAPI_KEY"),
            adzuna_app_id=_env_str("ADZUNA_APP_ID"),
            adzuna_app_key=_env_str("ADZUNA_APP_KEY"),
            github_api_key=_env_str("GITHUB_API_KEY"),
            database_url=_env_str("DATABASE_URL", "sqlite:///./job_search.db"),
            company_cache_enabled=_env_bool("COMPANY_CACHE_ENABLED", True),
            use_mock_sources=_env_bool("USE_MOCK_SOURCES", False),
            default_location=_env_str("DEFAULT_LOCATION", "United States"),
            source_timeout=_env_float("SOURCE_TIMEOUT", 20.0),
            ranking_timeout=_env_float("RANKING_TIMEOUT", 15.0),
            chat_timeout=_env_float("CHAT_TIMEOUT", 50.0),
            resume_timeout=_env_float("RESUME_TIMEOUT", 90.0),
            chat_session_max=_env_int("CHAT_SESSION_MAX", 1000),
            chat_session_ttl=_env_int("CHAT_SESSION_TTL", 3600),
        )

    def source_timeout_for(self, source_name: str) -> float:
        """Per-source timeout, e.g. NAUKRI_TIMEOUT, falling back to SOURCE_TIMEOUT"""
        return _env_float(f"{source_name.upper()}_TIMEOUT", self.source_timeout)
