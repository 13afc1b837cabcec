from dataclasses import dataclass
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


@dataclass
class SourceQuery:
    """What every job source receives for one search"""

    skills: List[str]
    location: str
    limit: int = 20
    page: int = 1

    @property
    def skills_text(self) -> str:
        return " ".join(self.skills)


def parse_skills(skills: Optional[str]) -> List[str]:
    """Split a comma separated skills string, dropping empty entries"""
    if not skills:
        return []
    return [skill.strip() for skill in skills.split(",") if skill.strip()]


class ChatMessageRequest(BaseModel):
    message: Optional[str] = Field(default=None, description="Message for the assistant")
    sessionId: Optional[str] = Field(default=None, description="Session returned by a previous call")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "message": "How do I prepare for a React developer interview?",
                "sessionId": "session_1700000000000_k3j9x2l1q",
            }
        }
    )


class CareerPathRequest(BaseModel):
    companyName: Optional[str] = Field(default=None, description="Company the student is targeting")
    userSkills: List[str] = Field(default_factory=list)


class SkillGapRequest(BaseModel):
    jobTitle: Optional[str] = None
    companyName: Optional[str] = None
    userSkills: List[str] = Field(default_factory=list)
    jobRequirements: List[str] = Field(default_factory=list)


class ResumeAnalyzeRequest(BaseModel):
    imageBase64: Optional[str] = Field(
        default=None, description="Resume image, raw base64 or a data:image/...;base64, URL"
    )
