from typing import Any, Dict, List
import asyncio
import logging

from models.job import RawJobRecord
from models.request import SourceQuery
from sources.base import BaseSource
from sources.http_session import get_session
from utils.data_utils import strip_html
from utils.location import get_country_code


class AdzunaSource(BaseSource):
    """Adzuna job search API (free tier, needs an app id and key)"""

    name = "Adzuna"
    base_url = "https://api.adzuna.com/v1/api"

    def __init__(self, app_id: str, app_key: str, timeout: float = 5):
        self.app_id = app_id
        self.app_key = app_key
        self.timeout = timeout
        self.session = get_session(self.name)

    async def fetch(self, query: SourceQuery) -> List[RawJobRecord]:
        logging.info(f"Searching Adzuna for: {query.skills_text} in {query.location}")
        return await asyncio.to_thread(self._search, query)

    def _search(self, query: SourceQuery) -> List[RawJobRecord]:
        country_code = get_country_code(query.location).lower()
        data = self.session.get_json(
            f"{self.base_url}/jobs/{country_code}/search/{query.page}",
            params={
                "app_id": self.app_id,
                "app_key": self.app_key,
                "what": query.skills_text or "developer",
                "where": query.location,
                "results_per_page": query.limit,
                "content-type": "application/json",
            },
            timeout=self.timeout,
        )
        return [self.to_record(job, query.location) for job in (data or {}).get("results") or []]

    def to_record(self, job: Dict[str, Any], location: str) -> RawJobRecord:
        contract_time = job.get("contract_time")
        if job.get("contract_type") == "contract":
            contract_time = "contract"
        return RawJobRecord(
            job_id=f"adzuna_{job.get('id')}",
            job_title=strip_html(job.get("title")),
            employer_name=(job.get("company") or {}).get("display_name") or "Unknown",
            job_location=(job.get("location") or {}).get("display_name") or location,
            job_description=strip_html(job.get("description")),
            job_apply_link=job.get("redirect_url"),
            job_posted_at_datetime_utc=job.get("created"),
            job_employment_type=contract_time,
            source="adzuna",
        )
