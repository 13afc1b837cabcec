from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ExperienceEntry(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True, extra="ignore")

    title: Optional[str] = None
    company: Optional[str] = None
    duration: Optional[str] = None
    description: Optional[str] = None


class EducationEntry(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True, extra="ignore")

    degree: Optional[str] = None
    institution: Optional[str] = None
    year: Optional[str] = None


class ProjectEntry(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True, extra="ignore")

    name: Optional[str] = None
    description: Optional[str] = None
    technologies: List[str] = Field(default_factory=list)

    @field_validator("technologies", mode="before")
    @classmethod
    def split_technologies(cls, value):
        # Models sometimes answer with null or "React, Node" instead of a list
        if value is None:
            return []
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        if isinstance(value, list):
            return [str(item) for item in value if item is not None and not isinstance(item, (dict, list))]
        return []


class ResumeSummary(BaseModel):
    name: str = ""
    skills: List[str] = Field(default_factory=list)
    experience: List[ExperienceEntry] = Field(default_factory=list)
    education: List[EducationEntry] = Field(default_factory=list)
    projects: List[ProjectEntry] = Field(default_factory=list)


class CompanyRecommendation(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True, extra="ignore")

    name: Optional[str] = None
    role: Optional[str] = None
    matchReason: Optional[str] = None


class ResumeRecommendations(BaseModel):
    companies: List[CompanyRecommendation] = Field(default_factory=list)
    tips: List[str] = Field(default_factory=list)


class ResumeAnalysis(BaseModel):
    summary: ResumeSummary = Field(default_factory=ResumeSummary)
    score: float = 7.5
    recommendations: ResumeRecommendations = Field(default_factory=ResumeRecommendations)
    analyzedAt: Optional[datetime] = None
