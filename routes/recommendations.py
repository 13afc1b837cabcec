from typing import Dict, List, Optional
import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from config import Settings
from dependencies import get_company_cache, get_github_client, get_settings, get_sources
from models.company import Company
from models.request import SourceQuery, parse_skills
from pipeline.aggregator import aggregate_jobs
from pipeline.formatter import format_jobs
from sources.base import BaseSource
from sources.companies import CompanyProfile, companies_for_location, known_companies_for_location
from sources.github import GitHubClient
from sources.local_companies import unique_companies
from storage.company_cache import CompanyCache
from utils.location import US_STATES

router = APIRouter(prefix="/api/recommendations", tags=["recommendations"])

POPULAR_STATES = ["California", "New York", "Texas", "Washington", "Massachusetts"]

# Sources that query a live job API rather than generating listings
LIVE_SOURCES = ("JSearch", "Adzuna")


def active_sources(sources: Dict[str, BaseSource], github: Optional[GitHubClient]) -> List[str]:
    names = ["github"] if github is not None else []
    return names + [name.lower() for name in sources]


def to_company(profile: CompanyProfile, source: str) -> Company:
    return Company(
        name=profile.label,
        description=profile.description,
        websiteUrl=profile.website_url,
        careersUrl=profile.careers_url,
        logo=profile.logo,
        location=profile.location,
        source=source,
    )


async def enrich_from_cache(companies: List[Company], cache: Optional[CompanyCache]) -> List[Company]:
    """Fill gaps in each company from its cached row, when there is one"""
    if cache is None:
        return companies

    enriched = []
    for company in companies:
        cached = await cache.find_async(company.name)
        if cached:
            company = company.model_copy(update={
                "description": cached.description or company.description,
                "websiteUrl": cached.websiteUrl or company.websiteUrl,
                "logo": cached.logo or company.logo,
                "industry": cached.industry or company.industry,
            })
        enriched.append(company)
    return enriched


async def github_companies(github: Optional[GitHubClient], location: str, limit: int) -> List[CompanyProfile]:
    if github is None:
        return []
    companies: List[CompanyProfile] = []
    try:
        companies.extend(await github.get_hiring_companies(location, limit))
    except Exception as e:
        logging.error(f"GitHub API error: {str(e)}")
    try:
        companies.extend(await github.search_by_location(location, limit))
    except Exception as e:
        logging.error(f"GitHub location search error: {str(e)}")
    return companies


@router.get("/companies/{location}")
async def companies_in_location(
    location: str,
    limit: int = Query(20, ge=1, le=100),
    sources: Dict[str, BaseSource] = Depends(get_sources),
    github: Optional[GitHubClient] = Depends(get_github_client),
    company_cache: Optional[CompanyCache] = Depends(get_company_cache),
):
    """
    Companies hiring in a location

    GitHub organisations in the location come first, then well-known local
    employers, then the company table for the location.
    """
    found = await github_companies(github, location, limit)
    github_count = len(found)
    found.extend(known_companies_for_location(location))
    found.extend(companies_for_location(location))

    companies = []
    for i, profile in enumerate(unique_companies(found)[:limit]):
        companies.append(to_company(profile, "github" if i < github_count else "local"))

    companies = await enrich_from_cache(companies, company_cache)
    logging.info(f"Recommending {len(companies)} companies for {location}")

    return {
        "location": location,
        "companies": companies,
        "totalResults": len(companies),
        "sources": active_sources(sources, github),
    }


@router.get("/companies")
async def popular_companies(
    state: Optional[str] = None,
    limit: int = Query(20, ge=1, le=100),
    sources: Dict[str, BaseSource] = Depends(get_sources),
    github: Optional[GitHubClient] = Depends(get_github_client),
    company_cache: Optional[CompanyCache] = Depends(get_company_cache),
):
    """Companies across popular US states, or in one state when given"""
    if state:
        return await companies_in_location(state, limit, sources, github, company_cache)

    per_state = -(-limit // len(POPULAR_STATES))
    found: List[CompanyProfile] = []
    if github is not None:
        results = await asyncio.gather(
            *(github.search_by_location(name, per_state) for name in POPULAR_STATES),
            return_exceptions=True,
        )
        for name, result in zip(POPULAR_STATES, results):
            if isinstance(result, BaseException):
                logging.error(f"Error fetching companies for {name}: {str(result)}")
            else:
                found.extend(result)

    companies = [to_company(profile, "github") for profile in unique_companies(found)[:limit]]
    return {
        "companies": companies,
        "totalResults": len(companies),
        "states": POPULAR_STATES,
        "sources": active_sources(sources, github),
    }


@router.get("/jobs/{location}")
async def jobs_in_location(
    location: str,
    skills: Optional[str] = None,
    limit: int = Query(20, ge=1, le=100),
    settings: Settings = Depends(get_settings),
    sources: Dict[str, BaseSource] = Depends(get_sources),
    github: Optional[GitHubClient] = Depends(get_github_client),
):
    """Jobs in a location from the live job APIs only"""
    skills_list = parse_skills(skills)
    live = {name: source for name, source in sources.items() if name in LIVE_SOURCES}

    try:
        query = SourceQuery(skills=skills_list or ["software"], location=location, limit=limit)
        raw_jobs = await aggregate_jobs(live, query, timeout_for=settings.source_timeout_for)
        jobs = format_jobs(raw_jobs, skills_list, location)
    except Exception as e:
        logging.error(f"Job recommendations error: {str(e)}")
        raise HTTPException(status_code=500, detail="Error fetching job recommendations")

    seen = set()
    unique_jobs = []
    for job in jobs:
        if job.id not in seen:
            seen.add(job.id)
            unique_jobs.append(job)
    unique_jobs = unique_jobs[:limit]

    return {
        "location": location,
        "jobs": unique_jobs,
        "totalResults": len(unique_jobs),
        "skills": skills_list,
        "sources": active_sources(sources, github),
    }


@router.get("/states")
async def list_states():
    return {"states": US_STATES, "total": len(US_STATES)}
