from typing import Any, Dict, List, Optional
import asyncio
import logging
import re

import requests

from sources.companies import CompanyProfile
from sources.http_session import get_session


class GitHubClient:
    """
    Company lookups against the public GitHub organisations API

    Works without a token (60 requests/hour); GITHUB_API_KEY raises the limit.
    """

    base_url = "https://api.github.com"

    def __init__(self, token: Optional[str] = None, timeout: float = 5, detail_timeout: float = 5):
        self.token = token
        self.timeout = timeout
        self.detail_timeout = detail_timeout
        self.session = get_session("GitHub")

    @property
    def headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/vnd.github+json"}
        if self.token:
            headers["Authorization"] = f"token {self.token}"
        return headers

    @staticmethod
    def sanitize_company_name(company_name: str) -> str:
        name = re.sub(r'\s+', '-', (company_name or "").lower())
        return re.sub(r'[^a-z0-9-]', '', name)

    async def get_company_info(self, company_name: str) -> Optional[CompanyProfile]:
        return await asyncio.to_thread(self._get_company_info, company_name)

    async def search_by_location(self, location: str, limit: int = 20,
                                 sort: str = "followers") -> List[CompanyProfile]:
        return await asyncio.to_thread(self.search_profiles, location, limit, sort)

    async def get_hiring_companies(self, location: str, limit: int = 20) -> List[CompanyProfile]:
        """
        Organisations recently active in a location, with their profile details

        Detail lookups run concurrently, one attempt each. When they do not all
        finish within detail_timeout the search results are used as they are.
        """
        orgs = [org for org in await asyncio.to_thread(self._search_by_location, location, limit, "updated")
                if org.get("login")]
        lookups = [asyncio.to_thread(self._hiring_profile, org, location) for org in orgs]
        try:
            return list(await asyncio.wait_for(asyncio.gather(*lookups), timeout=self.detail_timeout))
        except asyncio.TimeoutError:
            logging.warning(f"GitHub organisation details timed out after {self.detail_timeout} seconds")
            return [self._search_profile(org, location) for org in orgs]

    def _get_company_info(self, company_name: str) -> Optional[CompanyProfile]:
        org_name = self.sanitize_company_name(company_name)
        if not org_name:
            return None
        try:
            data = self.session.get_json(f"{self.base_url}/orgs/{org_name}",
                                         headers=self.headers, timeout=self.timeout)
        except requests.HTTPError as e:
            if e.response is not None and e.response.status_code == 404:
                return None
            logging.error(f"GitHub API error: {str(e)}")
            return None
        except requests.RequestException as e:
            logging.error(f"GitHub API error: {str(e)}")
            return None
        return self._profile_from_org(data, fallback_name=company_name)

    def _search_by_location(self, location: str, limit: int, sort: str) -> List[Dict[str, Any]]:
        try:
            data = self.session.get_json(
                f"{self.base_url}/search/users",
                params={"q": f'type:org location:"{location}"', "per_page": limit, "sort": sort},
                headers=self.headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logging.error(f"GitHub location search error: {str(e)}")
            return []
        return (data or {}).get("items", [])[:limit]

    def search_profiles(self, location: str, limit: int = 20, sort: str = "followers") -> List[CompanyProfile]:
        return [
            self._search_profile(org, location)
            for org in self._search_by_location(location, limit, sort)
            if org.get("login")
        ]

    def _hiring_profile(self, org: Dict[str, Any], location: str) -> CompanyProfile:
        login = org["login"]
        try:
            details = self.session.get_json_once(f"{self.base_url}/orgs/{login}",
                                                 headers=self.headers, timeout=3)
        except requests.RequestException:
            return self._search_profile(org, location)
        return self._profile_from_org(details, fallback_name=login, location=location)

    @staticmethod
    def _search_profile(org: Dict[str, Any], location: str) -> CompanyProfile:
        return CompanyProfile(
            name=org.get("login"),
            careers_url=org.get("html_url"),
            logo=org.get("avatar_url"),
            location=location,
        )

    @staticmethod
    def _profile_from_org(data: Dict[str, Any], fallback_name: str,
                          location: Optional[str] = None) -> CompanyProfile:
        data = data or {}
        return CompanyProfile(
            name=data.get("name") or fallback_name,
            careers_url=data.get("html_url"),
            description=data.get("description") or "",
            website_url=data.get("blog") or data.get("html_url"),
            logo=data.get("avatar_url"),
            location=data.get("location") or location or "",
        )
