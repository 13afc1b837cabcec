from typing import Any, Dict, List
import asyncio
import logging

from models.job import RawJobRecord
from models.request import SourceQuery
from sources.base import BaseSource
from sources.http_session import get_session
from utils.location import get_country_code


class JSearchSource(BaseSource):
    """JSearch (RapidAPI) job search, the aggregator with international coverage"""

    name = "JSearch"
    url = "https://jsearch.p.rapidapi.com/search"

    def __init__(self, api_key: str, timeout: float = 15):
        self.api_key = api_key
        self.timeout = timeout
        self.session = get_session(self.name)

    async def fetch(self, query: SourceQuery) -> List[RawJobRecord]:
        logging.info(f"Searching JSearch for: {', '.join(query.skills)} in {query.location}")
        return await asyncio.to_thread(self._search, query)

    def build_params(self, query: SourceQuery) -> Dict[str, Any]:
        return {
            "query": f"{' OR '.join(query.skills)} developer",
            "page": query.page,
            "num_pages": 1,
            "country": get_country_code(query.location),
            "location": query.location,
            "employment_types": "FULLTIME,PARTTIME,INTERN",
        }

    def _search(self, query: SourceQuery) -> List[RawJobRecord]:
        data = self.session.get_json(
            self.url,
            params=self.build_params(query),
            headers={
                "X-RapidAPI-Key": self.api_key,
                "X-RapidAPI-Host": "jsearch.p.rapidapi.com",
            },
            timeout=self.timeout,
        )
        return [self.to_record(job) for job in (data or {}).get("data") or []]

    def to_record(self, job: Dict[str, Any]) -> RawJobRecord:
        highlights = job.get("job_highlights") or {}
        return RawJobRecord(
            job_id=job.get("job_id"),
            job_title=self.clean_text(job.get("job_title")),
            employer_name=job.get("employer_name"),
            job_city=job.get("job_city"),
            job_state=job.get("job_state"),
            job_description=job.get("job_description"),
            qualifications=highlights.get("Qualifications") or [],
            benefits=highlights.get("Benefits") or [],
            job_apply_link=job.get("job_apply_link"),
            job_posted_at_datetime_utc=job.get("job_posted_at_datetime_utc"),
            job_employment_type=job.get("job_employment_type"),
            job_is_remote=bool(job.get("job_is_remote")),
            employer_logo=job.get("employer_logo"),
            source="jsearch",
        )
