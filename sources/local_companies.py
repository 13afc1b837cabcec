from datetime import datetime, timedelta, timezone
from typing import List, Optional
import asyncio
import logging
import time

from models.job import RawJobRecord
from models.request import SourceQuery
from sources.base import BaseSource
from sources.companies import (
    EXTENDED_BENEFITS,
    GENERATED_JOB_TITLES,
    GITHUB_JOB_TITLES,
    STANDARD_BENEFITS,
    STANDARD_QUALIFICATIONS,
    CompanyProfile,
    companies_for_location,
    known_companies_for_location,
)
from sources.github import GitHubClient
from utils.data_utils import slugify_company
from utils.location import split_location

GENERATED_JOB_COUNT = 15
GENERATED_EMPLOYMENT_TYPES = ["FULLTIME", "PARTTIME", "INTERN"]


class LocalCompanySource(BaseSource):
    """
    Jobs at companies based in the searched location

    Companies come from GitHub organisations in the location plus a table of
    well-known local employers. When neither yields anything, postings are
    synthesized from the per-city company tables.
    """

    name = "Local"

    def __init__(self, github: Optional[GitHubClient] = None, github_timeout: float = 10):
        self.github = github
        self.github_timeout = github_timeout

    async def fetch(self, query: SourceQuery) -> List[RawJobRecord]:
        companies = await self.find_companies(query.location, query.limit)
        if companies:
            logging.info(f"Building jobs for {len(companies)} companies in {query.location}")
            return self.jobs_for_companies(companies[:query.limit], query)
        return self.generate_jobs(query)

    async def find_companies(self, location: str, limit: int) -> List[CompanyProfile]:
        companies: List[CompanyProfile] = []
        if self.github is not None:
            try:
                companies.extend(await asyncio.wait_for(self.github_companies(location, limit),
                                                        timeout=self.github_timeout))
            except asyncio.TimeoutError:
                logging.warning(f"GitHub company lookup for {location} timed out after {self.github_timeout} seconds")
            except Exception as e:
                logging.warning(f"GitHub company lookup for {location} failed: {str(e)}")
        companies.extend(known_companies_for_location(location))
        return unique_companies(companies)

    async def github_companies(self, location: str, limit: int) -> List[CompanyProfile]:
        hiring, located = await asyncio.gather(
            self.github.get_hiring_companies(location, limit),
            self.github.search_by_location(location, limit),
        )
        return list(hiring) + list(located)

    def jobs_for_companies(self, companies: List[CompanyProfile], query: SourceQuery) -> List[RawJobRecord]:
        city, state = split_location(query.location)
        now = datetime.now(timezone.utc).isoformat()
        stamp = int(time.time() * 1000)
        skills = ", ".join(query.skills)

        records = []
        for i, company in enumerate(companies):
            apply_link = (company.website_url or company.careers_url
                          or f"https://www.{slugify_company(company.name)}.com/careers")
            records.append(RawJobRecord(
                job_id=f"github_{company.name.replace(' ', '_')}_{i}_{stamp}",
                job_title=GITHUB_JOB_TITLES[i % len(GITHUB_JOB_TITLES)],
                employer_name=company.label,
                job_city=city,
                job_state=state,
                job_description=(f"We are looking for a talented developer with experience in {skills}. "
                                 f"{company.description or 'Join our team and work on cutting-edge projects.'}"),
                qualifications=self.qualifications(query.skills),
                benefits=list(STANDARD_BENEFITS),
                job_apply_link=apply_link,
                job_posted_at_datetime_utc=now,
                job_employment_type="FULLTIME",
                job_is_remote=False,
                employer_logo=company.logo,
                source="github",
            ))
        return records

    def generate_jobs(self, query: SourceQuery) -> List[RawJobRecord]:
        """
        Synthesize postings from the company table that matches the location

        The output only depends on the query and the current time.
        """
        companies = companies_for_location(query.location)
        logging.info(f"Generating local jobs for '{query.location}' from {len(companies)} companies")

        city, state = split_location(query.location)
        now = datetime.now(timezone.utc)
        stamp = int(time.time() * 1000)
        skills = ", ".join(query.skills)

        records = []
        for i in range(GENERATED_JOB_COUNT):
            company = companies[i % len(companies)]
            description = company.description or f"We are looking for a talented developer with experience in {skills}."
            records.append(RawJobRecord(
                job_id=f"mock_{i}_{stamp}",
                job_title=GENERATED_JOB_TITLES[i % len(GENERATED_JOB_TITLES)],
                employer_name=company.name,
                job_city=city,
                job_state=state,
                job_description=(f"{description} Join our team and work on cutting-edge projects that impact "
                                 f"millions of users worldwide. This is an excellent opportunity to grow your "
                                 f"career in a dynamic environment."),
                qualifications=self.qualifications(query.skills),
                benefits=list(EXTENDED_BENEFITS),
                job_apply_link=company.careers_url,
                job_posted_at_datetime_utc=(now - timedelta(days=i % 7)).isoformat(),
                job_employment_type=GENERATED_EMPLOYMENT_TYPES[i % len(GENERATED_EMPLOYMENT_TYPES)],
                job_is_remote=i % 5 >= 2,
                source="local",
            ))
        return records

    @staticmethod
    def qualifications(skills: List[str]) -> List[str]:
        return [f"Experience with {skill}" for skill in skills] + list(STANDARD_QUALIFICATIONS)


def unique_companies(companies: List[CompanyProfile]) -> List[CompanyProfile]:
    """Drop repeated companies by case-insensitive name, keeping the first"""
    seen = set()
    unique = []
    for company in companies:
        key = (company.name or company.display_name or "").lower()
        if key and key not in seen:
            seen.add(key)
            unique.append(company)
    return unique
