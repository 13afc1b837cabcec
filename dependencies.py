from typing import Dict, Optional

from config import Settings
from sources.base import BaseSource
from sources.github import GitHubClient
from storage.company_cache import CompanyCache
from utils.chat_sessions import ChatSessionStore
from utils.llm_processor import LLMProcessor

# Application state, filled in by the lifespan handler in main.py
app_state = {
    "health": "OK",
    "settings": None,
    "sources": {},
    "github": None,
    "llm_processor": None,
    "company_cache": None,
    "chat_sessions": None,
}


def get_settings() -> Settings:
    if app_state["settings"] is None:
        app_state["settings"] = Settings.from_env()
    return app_state["settings"]


def get_sources() -> Dict[str, BaseSource]:
    return app_state["sources"]


def get_github_client() -> Optional[GitHubClient]:
    return app_state["github"]


def get_llm_processor() -> LLMProcessor:
    if app_state["llm_processor"] is None:
        app_state["llm_processor"] = LLMProcessor()
    return app_state["llm_processor"]


def get_company_cache() -> Optional[CompanyCache]:
    return app_state["company_cache"]


def get_session_store() -> ChatSessionStore:
    if app_state["chat_sessions"] is None:
        settings = get_settings()
        app_state["chat_sessions"] = ChatSessionStore(settings.chat_session_max, settings.chat_session_ttl)
    return app_state["chat_sessions"]
