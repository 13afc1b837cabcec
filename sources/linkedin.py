from typing import Any, Dict, List, Optional
from urllib.parse import quote
import asyncio
import logging

import requests

from models.job import RawJobRecord
from models.request import SourceQuery
from sources.http_session import get_session
from sources.portals import INDIAN_EMPLOYERS, PortalSource
from utils.location import split_location


class LinkedInSource(PortalSource):
    """
    LinkedIn jobs through the RapidAPI LinkedIn search when a key is configured,
    otherwise generated listings linking to LinkedIn's public job search
    """

    name = "LinkedIn"
    source_tag = "linkedin"
    companies = INDIAN_EMPLOYERS
    job_titles = [
        "Software Engineer", "Senior Software Engineer", "Full Stack Developer",
        "Python Developer", "Java Developer", "React Developer", "Node.js Developer",
    ]
    url = "https://linkedin-jobs-search.p.rapidapi.com/"

    def __init__(self, rapidapi_key: Optional[str] = None, timeout: float = 10):
        self.rapidapi_key = rapidapi_key
        self.timeout = timeout
        self.session = get_session(self.name)

    async def fetch(self, query: SourceQuery) -> List[RawJobRecord]:
        if self.rapidapi_key:
            try:
                return await asyncio.to_thread(self._search_rapidapi, query)
            except requests.RequestException as e:
                logging.warning(f"RapidAPI LinkedIn not available, using fallback: {str(e)}")
        return await super().fetch(query)

    def describe(self, title: str, skills: str) -> str:
        return f"We are looking for a {title} with experience in {skills}. Join our team!"

    def apply_link(self, query: SourceQuery) -> str:
        return (f"https://www.linkedin.com/jobs/search/?keywords={quote(query.skills_text, safe='')}"
                f"&location={quote(query.location or '', safe='')}")

    def _search_rapidapi(self, query: SourceQuery) -> List[RawJobRecord]:
        data = self.session.get_json(
            self.url,
            params={
                "search_terms": query.skills_text,
                "location": query.location or "United States",
                "page": str(query.page),
            },
            headers={
                "X-RapidAPI-Key": self.rapidapi_key,
                "X-RapidAPI-Host": "linkedin-jobs-search.p.rapidapi.com",
            },
            timeout=self.timeout,
        )
        results = data.get("results", []) if isinstance(data, dict) else data or []
        return [self.to_record(job, query) for job in results[:query.limit]]

    def to_record(self, job: Dict[str, Any], query: SourceQuery) -> RawJobRecord:
        job_id = job.get("job_id") or job.get("id")
        city, state = split_location(job.get("location") or query.location or "")
        return RawJobRecord(
            job_id=f"linkedin_{job_id}",
            job_title=self.clean_text(job.get("title") or job.get("job_title")),
            employer_name=job.get("company") or job.get("company_name"),
            job_city=city,
            job_state=state,
            job_description=job.get("description") or job.get("job_description") or "",
            job_apply_link=(job.get("url") or job.get("apply_url")
                            or f"https://www.linkedin.com/jobs/view/{job_id}"),
            job_posted_at_datetime_utc=job.get("posted_date"),
            job_employment_type=job.get("job_type") or "FULLTIME",
            job_is_remote=bool(job.get("remote")),
            employer_logo=job.get("company_logo"),
            source=self.source_tag,
        )
