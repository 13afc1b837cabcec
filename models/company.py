from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class Company(BaseModel):
    name: str
    description: Optional[str] = None
    websiteUrl: Optional[str] = None
    careersUrl: Optional[str] = None
    logo: Optional[str] = None
    industry: Optional[str] = None
    location: Optional[str] = None
    techStack: List[str] = Field(default_factory=list)
    lastFetched: Optional[datetime] = None
    source: Optional[str] = None


class CompanyResponse(BaseModel):
    company: Company
