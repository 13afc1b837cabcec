from enum import Enum
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class EmploymentType(str, Enum):
    FULLTIME = "FULLTIME"
    PARTTIME = "PARTTIME"
    INTERN = "INTERN"
    CONTRACT = "CONTRACT"


class RawJobRecord(BaseModel):
    """
    A job posting as a provider delivered it.

    Field names follow the JSearch payload; other providers' names are
    accepted through the alias choices.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)

    job_id: Optional[str] = Field(default=None, validation_alias=AliasChoices("job_id", "id"))
    job_title: Optional[str] = Field(default=None, validation_alias=AliasChoices("job_title", "title"))
    employer_name: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("employer_name", "company", "company_name")
    )
    job_city: Optional[str] = None
    job_state: Optional[str] = None
    job_location: Optional[str] = Field(default=None, validation_alias=AliasChoices("job_location", "location"))
    job_description: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("job_description", "description")
    )
    qualifications: List[str] = Field(default_factory=list)
    benefits: List[str] = Field(default_factory=list)
    job_apply_link: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("job_apply_link", "apply_url", "applyUrl", "url")
    )
    job_posted_at_datetime_utc: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("job_posted_at_datetime_utc", "postedDate", "posted_date")
    )
    job_employment_type: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("job_employment_type", "employmentType", "job_type")
    )
    job_is_remote: Optional[bool] = Field(default=False, validation_alias=AliasChoices("job_is_remote", "remote"))
    employer_logo: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("employer_logo", "logo", "company_logo")
    )
    source: Optional[str] = None


class NormalizedJob(BaseModel):
    id: str
    title: str
    company: str
    location: str
    description: str = ""
    requirements: List[str] = Field(default_factory=list)
    benefits: List[str] = Field(default_factory=list)
    applyUrl: str
    postedDate: str
    employmentType: EmploymentType = EmploymentType.FULLTIME
    employmentTypeLabel: str = "Full-time"
    remote: bool = False
    logo: Optional[str] = None
    source: str = "unknown"


class JobSearchResponse(BaseModel):
    jobs: List[NormalizedJob]
    totalResults: int
    page: int
    searchQuery: str
