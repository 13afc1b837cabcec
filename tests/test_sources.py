import asyncio
import time

import pytest

from config import Settings
from models.request import SourceQuery
from sources.adzuna import AdzunaSource
from sources.companies import CompanyProfile
from sources.github import GitHubClient
from sources.jsearch import JSearchSource
from sources.linkedin import LinkedInSource
from sources.local_companies import LocalCompanySource
from sources.portals import NaukriSource, PortalSource, UnstopSource
from sources.source_factory import SourceFactory
from utils.location import get_country_code, is_india_portal_location, split_location


@pytest.mark.parametrize("location,code", [
    ("Bangalore, Karnataka", "IN"),
    ("London", "GB"),
    ("Toronto, Canada", "CA"),
    ("Sydney", "AU"),
    ("Singapore", "SG"),
    ("Dubai", "AE"),
    ("Austin, TX", "US"),
    ("", "US"),
])
def test_country_code(location, code):
    assert get_country_code(location) == code


def test_split_location():
    assert split_location("Mysore, Karnataka") == ("Mysore", "Karnataka")
    assert split_location("Remote") == ("Remote", "")


def test_naukri_only_serves_india():
    source = NaukriSource()
    assert source.applies_to("Mysore")
    assert source.applies_to("Bangalore, India")
    assert not source.applies_to("Seattle, WA")
    assert is_india_portal_location("karnataka")


@pytest.mark.asyncio
async def test_naukri_listings():
    records = await NaukriSource().search(SourceQuery(skills=["Python", "Django"], location="Mysore", limit=50))
    assert len(records) == 15
    assert all(r.source == "naukri" for r in records)
    assert records[0].job_apply_link.startswith("https://www.naukri.com/jobapi/search?keywords=Python%20Django")
    assert "Python Django" in records[0].job_description


@pytest.mark.asyncio
async def test_unstop_lists_internships():
    records = await UnstopSource().search(SourceQuery(skills=["React"], location="Pune", limit=4))
    assert len(records) == 4
    assert {r.job_employment_type for r in records} == {"INTERN"}
    assert records[0].job_city == "Pune"


@pytest.mark.asyncio
async def test_linkedin_without_key_links_to_search():
    records = await LinkedInSource().search(SourceQuery(skills=["Go"], location="Chennai", limit=20))
    assert len(records) == 10
    assert records[0].employer_name == "Infosys"
    assert records[0].job_apply_link.startswith("https://www.linkedin.com/jobs/search/?keywords=Go")


@pytest.mark.asyncio
async def test_local_source_generates_from_city_table():
    source = LocalCompanySource()
    records = await source.search(SourceQuery(skills=["Python"], location="Hyderabad"))

    assert len(records) == 15
    assert records[0].employer_name == "Microsoft"
    assert [r.job_employment_type for r in records[:3]] == ["FULLTIME", "PARTTIME", "INTERN"]
    assert [r.job_is_remote for r in records[:5]] == [False, False, True, True, True]
    assert all(r.source == "local" for r in records)


@pytest.mark.asyncio
async def test_local_source_uses_known_companies():
    records = await LocalCompanySource().search(SourceQuery(skills=["Java"], location="Mysore"))
    companies = [r.employer_name for r in records]
    assert companies[:2] == ["Infosys", "Wipro"]
    assert "Tata Consultancy Services" in companies
    assert records[0].job_apply_link == "https://www.infosys.com"


class SlowGitHub:
    """GitHub client whose lookups never finish in time"""

    async def get_hiring_companies(self, location, limit=20):
        await asyncio.sleep(5)
        return []

    async def search_by_location(self, location, limit=20, sort="followers"):
        await asyncio.sleep(5)
        return []


class FailingGitHub:
    async def get_hiring_companies(self, location, limit=20):
        raise RuntimeError("rate limited")

    async def search_by_location(self, location, limit=20, sort="followers"):
        return []


@pytest.mark.asyncio
async def test_local_source_slow_github_falls_back_to_known_companies():
    source = LocalCompanySource(github=SlowGitHub(), github_timeout=0.05)
    records = await asyncio.wait_for(source.search(SourceQuery(skills=["Java"], location="Mysore")), timeout=2)
    assert [r.employer_name for r in records[:2]] == ["Infosys", "Wipro"]


@pytest.mark.asyncio
async def test_local_source_slow_github_falls_back_to_generated_jobs():
    source = LocalCompanySource(github=SlowGitHub(), github_timeout=0.05)
    records = await asyncio.wait_for(source.search(SourceQuery(skills=["Go"], location="Hyderabad")), timeout=2)
    assert len(records) == 15
    assert all(r.source == "local" for r in records)


@pytest.mark.asyncio
async def test_local_source_github_error_falls_back():
    records = await LocalCompanySource(github=FailingGitHub()).search(SourceQuery(skills=["Go"], location="Chicago"))
    assert records[0].employer_name == "Google"


@pytest.mark.asyncio
async def test_github_hiring_details_are_time_bounded(monkeypatch):
    client = GitHubClient(detail_timeout=0.05)
    orgs = [{"login": f"org{i}", "html_url": f"https://github.com/org{i}", "avatar_url": None} for i in range(6)]

    def slow_details(org, location):
        time.sleep(0.5)
        return CompanyProfile(name="late")

    monkeypatch.setattr(client, "_search_by_location", lambda location, limit, sort: orgs)
    monkeypatch.setattr(client, "_hiring_profile", slow_details)

    started = time.monotonic()
    companies = await client.get_hiring_companies("Austin", 6)
    assert time.monotonic() - started < 0.4
    assert [c.name for c in companies] == [f"org{i}" for i in range(6)]
    assert companies[0].careers_url == "https://github.com/org0"


@pytest.mark.asyncio
async def test_github_hiring_details_run_concurrently(monkeypatch):
    client = GitHubClient(detail_timeout=2)
    orgs = [{"login": f"org{i}"} for i in range(5)]

    def details(org, location):
        time.sleep(0.3)
        return CompanyProfile(name=org["login"].upper(), location=location)

    monkeypatch.setattr(client, "_search_by_location", lambda location, limit, sort: orgs)
    monkeypatch.setattr(client, "_hiring_profile", details)

    started = time.monotonic()
    companies = await client.get_hiring_companies("Austin", 5)
    assert time.monotonic() - started < 1.2
    assert [c.name for c in companies] == ["ORG0", "ORG1", "ORG2", "ORG3", "ORG4"]


def test_portal_base_is_abstract():
    with pytest.raises(TypeError):
        PortalSource()


def test_local_source_global_fallback():
    records = LocalCompanySource().generate_jobs(SourceQuery(skills=["Rust"], location="Chicago"))
    assert records[0].employer_name == "Google"


def test_jsearch_params():
    source = JSearchSource("key")
    params = source.build_params(SourceQuery(skills=["React", "Node.js"], location="Mumbai", page=2))
    assert params["query"] == "React OR Node.js developer"
    assert params["country"] == "IN"
    assert params["page"] == 2
    assert params["employment_types"] == "FULLTIME,PARTTIME,INTERN"


def test_jsearch_record_mapping():
    record = JSearchSource("key").to_record({
        "job_id": "abc",
        "job_title": "Engineer",
        "employer_name": "Acme",
        "job_highlights": {"Qualifications": ["3 years"], "Benefits": ["Dental"]},
        "job_is_remote": None,
    })
    assert record.qualifications == ["3 years"]
    assert record.benefits == ["Dental"]
    assert record.job_is_remote is False
    assert record.source == "jsearch"


def test_adzuna_record_mapping():
    record = AdzunaSource("id", "key").to_record({
        "id": 99,
        "title": "<strong>Python</strong> Developer",
        "company": {"display_name": "Acme"},
        "location": {"display_name": "London"},
        "description": "<p>Build   things</p>",
        "redirect_url": "https://adzuna.example/99",
        "contract_type": "contract",
        "contract_time": "full_time",
    }, "London")
    assert record.job_id == "adzuna_99"
    assert record.job_title == "Python Developer"
    assert record.job_description == "Build things"
    assert record.job_employment_type == "contract"
    assert record.job_location == "London"


def test_factory_offline_mode():
    settings = Settings(use_mock_sources=True, jsearch_api_key="key", adzuna_app_id="id", adzuna_app_key="k")
    sources = SourceFactory.create_sources(settings)
    assert list(sources) == ["LinkedIn", "Naukri", "Unstop", "Local"]
    assert SourceFactory.create_github_client(settings) is None


def test_factory_puts_live_apis_first():
    settings = Settings(jsearch_api_key="key", adzuna_app_id="id", adzuna_app_key="k")
    sources = SourceFactory.create_sources(settings)
    assert list(sources) == ["JSearch", "Adzuna", "LinkedIn", "Naukri", "Unstop", "Local"]
