from datetime import datetime, timezone
from typing import List
import uuid

from models.job import NormalizedJob, RawJobRecord
from utils.data_utils import employment_type_label, ensure_valid_url, normalize_employment_type


def format_location(record: RawJobRecord, fallback: str) -> str:
    if record.job_city and record.job_state:
        return f"{record.job_city}, {record.job_state}"
    return record.job_location or record.job_city or fallback


def format_job(record: RawJobRecord, skills: List[str], location: str) -> NormalizedJob:
    """
    Map a provider record onto the normalized job shape

    Args:
        record: Raw provider record
        skills: Skills from the search, used for fallback apply URLs
        location: Location from the search

    Returns:
        NormalizedJob with a usable apply URL and a known employment type
    """
    title = record.job_title or "Untitled position"
    company = record.employer_name or "Unknown company"
    employment_type = normalize_employment_type(record.job_employment_type)

    return NormalizedJob(
        id=record.job_id or uuid.uuid4().hex[:9],
        title=title,
        company=company,
        location=format_location(record, location),
        description=record.job_description or "",
        requirements=list(record.qualifications or []),
        benefits=list(record.benefits or []),
        applyUrl=ensure_valid_url(record.job_apply_link, company, title, " ".join(skills), location),
        postedDate=record.job_posted_at_datetime_utc or datetime.now(timezone.utc).isoformat(),
        employmentType=employment_type,
        employmentTypeLabel=employment_type_label(employment_type.value),
        remote=bool(record.job_is_remote),
        logo=record.employer_logo or None,
        source=record.source or "unknown",
    )


def format_jobs(records: List[RawJobRecord], skills: List[str], location: str) -> List[NormalizedJob]:
    return [format_job(record, skills, location) for record in records]
