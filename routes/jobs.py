from datetime import datetime, timezone
from typing import Dict, Optional
import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query

from config import Settings
from dependencies import get_company_cache, get_github_client, get_llm_processor, get_settings, get_sources
from models.company import Company, CompanyResponse
from models.job import JobSearchResponse
from models.request import SourceQuery, parse_skills
from pipeline.aggregator import aggregate_jobs, deduplicate_jobs
from pipeline.formatter import format_jobs
from sources.base import BaseSource
from sources.github import GitHubClient
from storage.company_cache import CompanyCache, cache_companies
from utils.data_utils import company_website
from utils.llm_processor import LLMProcessor

router = APIRouter(prefix="/api/jobs", tags=["jobs"])


@router.get("/search", response_model=JobSearchResponse)
async def search_jobs(
    background_tasks: BackgroundTasks,
    skills: Optional[str] = Query(None, description="Comma separated skills, e.g. 'React,Node.js'"),
    location: Optional[str] = Query(None, description="City, state or country"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    settings: Settings = Depends(get_settings),
    sources: Dict[str, BaseSource] = Depends(get_sources),
    llm_processor: LLMProcessor = Depends(get_llm_processor),
    company_cache: Optional[CompanyCache] = Depends(get_company_cache),
):
    """
    Search for jobs matching a set of skills
    """
    skills_list = parse_skills(skills)
    if not skills_list:
        raise HTTPException(status_code=400, detail="Skills parameter is required")

    location = (location or "").strip() or settings.default_location
    logging.info(f"[Job Search] Searching for: {', '.join(skills_list)} in {location}")

    try:
        query = SourceQuery(skills=skills_list, location=location, limit=limit, page=page)
        raw_jobs = await aggregate_jobs(sources, query, timeout_for=settings.source_timeout_for)
        unique_jobs = deduplicate_jobs(raw_jobs)
        jobs = format_jobs(unique_jobs, skills_list, location)

        ranked_jobs = await llm_processor.rank_jobs(jobs, skills_list, limit, timeout=settings.ranking_timeout)
        logging.info(f"[Job Search] Returning {len(ranked_jobs)} formatted jobs for {location}")
    except Exception as e:
        logging.error(f"Job search error: {str(e)}")
        raise HTTPException(status_code=500, detail="Error searching for jobs")

    # Runs after the response has been sent
    background_tasks.add_task(cache_companies, company_cache, [(job.company, job.logo) for job in ranked_jobs])

    return JobSearchResponse(
        jobs=ranked_jobs,
        totalResults=len(ranked_jobs),
        page=page,
        searchQuery=skills,
    )


def placeholder_company(company_name: str) -> Company:
    return Company(
        name=company_name,
        description=(f"{company_name} is a technology company focused on innovation and growth. "
                     f"We're committed to building cutting-edge solutions and fostering a "
                     f"collaborative work environment."),
        websiteUrl=company_website(company_name),
        industry="Technology",
        location="San Francisco, CA",
        lastFetched=datetime.now(timezone.utc),
        source="placeholder",
    )


@router.get("/company/{company_name}", response_model=CompanyResponse)
async def get_company(
    company_name: str,
    background_tasks: BackgroundTasks,
    company_cache: Optional[CompanyCache] = Depends(get_company_cache),
    github: Optional[GitHubClient] = Depends(get_github_client),
):
    """
    Company details from the cache, then GitHub, then a generic profile
    """
    if company_cache is not None:
        company = await company_cache.find_async(company_name)
        if company:
            return {"company": company}

    if github is not None:
        try:
            profile = await github.get_company_info(company_name)
        except Exception as e:
            logging.warning(f"GitHub API lookup failed, using fallback data: {str(e)}")
            profile = None

        if profile:
            company = Company(
                name=profile.name,
                description=(profile.description
                             or f"{company_name} is a technology company focused on innovation and growth."),
                websiteUrl=profile.website_url or company_website(company_name),
                logo=profile.logo,
                industry="Technology",
                location=profile.location or "Global",
                lastFetched=datetime.now(timezone.utc),
                source="github",
            )
            if company_cache is not None:
                background_tasks.add_task(
                    company_cache.upsert_async,
                    company.name,
                    logo=company.logo,
                    description=company.description,
                    website_url=company.websiteUrl,
                    industry=company.industry,
                    location=company.location,
                )
            return {"company": company}

    return {"company": placeholder_company(company_name)}
