from typing import Dict, Optional
import logging

from config import Settings
from sources.adzuna import AdzunaSource
from sources.base import BaseSource
from sources.github import GitHubClient
from sources.jsearch import JSearchSource
from sources.linkedin import LinkedInSource
from sources.local_companies import LocalCompanySource
from sources.portals import NaukriSource, UnstopSource


class SourceFactory:
    """Factory class for creating job sources"""

    @staticmethod
    def create_github_client(settings: Settings) -> Optional[GitHubClient]:
        if settings.use_mock_sources:
            return None
        return GitHubClient(token=settings.github_api_key)

    @staticmethod
    def create_sources(settings: Settings) -> Dict[str, BaseSource]:
        """
        Create the registered job sources

        Insertion order is the priority order: when two sources report the
        same company and title, the earlier source's posting is kept. Live
        APIs come before generated listings.

        Returns:
            Dictionary of sources keyed by name
        """
        sources: Dict[str, BaseSource] = {}

        if settings.use_mock_sources:
            logging.info("Using generated job data only (USE_MOCK_SOURCES)")
        else:
            if settings.jsearch_api_key:
                sources["JSearch"] = JSearchSource(settings.jsearch_api_key)
            else:
                logging.info("JSearch API key not configured, skipping JSearch")

            if settings.adzuna_app_id and settings.adzuna_app_key:
                sources["Adzuna"] = AdzunaSource(settings.adzuna_app_id, settings.adzuna_app_key)
            else:
                logging.info("Adzuna API keys not configured. Add ADZUNA_APP_ID and ADZUNA_APP_KEY to .env file.")

        rapidapi_key = None if settings.use_mock_sources else settings.rapidapi_key
        sources["LinkedIn"] = LinkedInSource(rapidapi_key)
        sources["Naukri"] = NaukriSource()
        sources["Unstop"] = UnstopSource()
        sources["Local"] = LocalCompanySource(SourceFactory.create_github_client(settings))

        return sources
