"""
Job portals without a public API.

Their listings are generated from company and title tables so searches work
offline; every apply link points at the portal's own search page for the
skills and location.
"""
from abc import abstractmethod
from datetime import datetime, timedelta, timezone
from typing import List
from urllib.parse import quote
import logging
import time

from models.job import RawJobRecord
from models.request import SourceQuery
from sources.base import BaseSource
from utils.location import is_india_portal_location, split_location

INDIAN_EMPLOYERS = ["Infosys", "Wipro", "TCS", "Tech Mahindra", "HCL", "Accenture", "Cognizant"]


class PortalSource(BaseSource):
    """Base for generated portal listings"""

    source_tag = "portal"
    companies: List[str] = []
    job_titles: List[str] = []
    max_results = 10
    employment_type = "FULLTIME"
    default_city = "Mysore"
    default_state = "Karnataka"

    async def fetch(self, query: SourceQuery) -> List[RawJobRecord]:
        logging.info(f"Generating {self.name} listings for: {query.skills_text} in {query.location}")
        return self.generate(query)

    @abstractmethod
    def describe(self, title: str, skills: str) -> str:
        """Description text for a generated posting"""
        pass

    @abstractmethod
    def apply_link(self, query: SourceQuery) -> str:
        """Portal search page for the query"""
        pass

    def generate(self, query: SourceQuery) -> List[RawJobRecord]:
        city, state = split_location(query.location)
        stamp = int(time.time() * 1000)
        now = datetime.now(timezone.utc)
        link = self.apply_link(query)

        records = []
        for i in range(min(query.limit, self.max_results)):
            title = self.job_titles[i % len(self.job_titles)]
            records.append(RawJobRecord(
                job_id=f"{self.source_tag}_{i}_{stamp}",
                job_title=title,
                employer_name=self.companies[i % len(self.companies)],
                job_city=city or self.default_city,
                job_state=state or (self.default_state if not query.location else ""),
                job_description=self.describe(title, query.skills_text),
                job_apply_link=link,
                job_posted_at_datetime_utc=(now - timedelta(days=i)).isoformat(),
                job_employment_type=self.employment_type,
                job_is_remote=False,
                source=self.source_tag,
            ))
        return records


class NaukriSource(PortalSource):
    """Naukri.com, only consulted for Indian locations"""

    name = "Naukri"
    source_tag = "naukri"
    max_results = 15
    companies = INDIAN_EMPLOYERS + ["Capgemini", "L&T Infotech", "Mindtree"]
    job_titles = [
        "Software Engineer", "Senior Software Engineer", "Full Stack Developer",
        "Python Developer", "Java Developer", "React Developer", "Node.js Developer", "DevOps Engineer",
    ]

    def applies_to(self, location: str) -> bool:
        return is_india_portal_location(location)

    def describe(self, title: str, skills: str) -> str:
        return f"We are hiring {title} with expertise in {skills}. Join our dynamic team and grow your career!"

    def apply_link(self, query: SourceQuery) -> str:
        return (f"https://www.naukri.com/jobapi/search?keywords={quote(query.skills_text, safe='')}"
                f"&location={quote(query.location or '', safe='')}")


class UnstopSource(PortalSource):
    """Unstop internships for students and fresh graduates"""

    name = "Unstop"
    source_tag = "unstop"
    employment_type = "INTERN"
    companies = INDIAN_EMPLOYERS + ["Capgemini"]
    job_titles = [
        "Software Engineer Intern", "Full Stack Developer Intern", "Python Developer Intern",
        "Java Developer Intern", "React Developer Intern", "Data Science Intern",
    ]

    def describe(self, title: str, skills: str) -> str:
        return (f"Internship opportunity for {title} with skills in {skills}. "
                f"Perfect for students and fresh graduates!")

    def apply_link(self, query: SourceQuery) -> str:
        return (f"https://unstop.com/jobs?q={quote(query.skills_text, safe='')}"
                f"&location={quote(query.location or '', safe='')}")
