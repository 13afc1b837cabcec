from typing import Optional
from urllib.parse import quote
import re

from bs4 import BeautifulSoup
from pydantic import HttpUrl, TypeAdapter, ValidationError

from models.job import EmploymentType

SEARCH_ENGINE_URL = "https://www.google.com/search?q="

_http_url = TypeAdapter(HttpUrl)

EMPLOYMENT_TYPE_ALIASES = {
    "fulltime": EmploymentType.FULLTIME,
    "parttime": EmploymentType.PARTTIME,
    "intern": EmploymentType.INTERN,
    "internship": EmploymentType.INTERN,
    "contract": EmploymentType.CONTRACT,
    "contractor": EmploymentType.CONTRACT,
}

EMPLOYMENT_TYPE_LABELS = {
    "fulltime": "Full-time",
    "parttime": "Part-time",
    "intern": "Internship",
    "contract": "Contract",
}


def clean_text(text: str) -> str:
    """
    Clean text by removing extra whitespace and newlines

    Args:
        text: The text to clean

    Returns:
        Cleaned text
    """
    if not text:
        return ""

    # Remove extra whitespace
    text = re.sub(r'\s+', ' ', text)
    return text.strip()


def strip_html(text: str) -> str:
    """Drop markup some providers embed in descriptions"""
    if not text:
        return ""
    if "<" not in text:
        return clean_text(text)
    return clean_text(BeautifulSoup(text, "html.parser").get_text(" "))


def truncate(text: Optional[str], length: int) -> str:
    if not text:
        return ""
    return text[:length]


def slugify_company(name: str) -> str:
    return re.sub(r'\s+', '', (name or "").lower())


def company_website(name: str) -> str:
    """Best guess at a company homepage when nothing better is known"""
    return f"https://www.{slugify_company(name)}.com"


def build_search_url(title: str, company: str, skills: str, location: str) -> str:
    """
    Build a web search for the posting so the apply action always leads somewhere

    Args:
        title: Job title
        company: Employer name
        skills: Space separated skills from the search
        location: Location from the search

    Returns:
        Absolute search-engine URL
    """
    search_query = f"{title or ''} {company or ''} {skills or ''}".strip()
    search_query = f"{search_query} {location or ''} jobs"
    return SEARCH_ENGINE_URL + quote(search_query, safe="")


def ensure_valid_url(url: Optional[str], company: str, title: str, skills: str, location: str) -> str:
    """
    Return the URL when it is a well-formed absolute http(s) URL, otherwise a search URL

    Args:
        url: Apply link reported by the provider, possibly missing
        company: Employer name
        title: Job title
        skills: Space separated skills from the search
        location: Location from the search

    Returns:
        A URL that is always clickable
    """
    if url:
        try:
            return str(_http_url.validate_python(url.strip()))
        except ValidationError:
            pass
    return build_search_url(title, company, skills, location)


def _employment_key(raw: str) -> str:
    return re.sub(r'[^a-z]', '', (raw or "").lower())


def normalize_employment_type(raw: Optional[str]) -> EmploymentType:
    """Map provider employment types onto the four supported values"""
    return EMPLOYMENT_TYPE_ALIASES.get(_employment_key(raw), EmploymentType.FULLTIME)


def employment_type_label(raw: Optional[str]) -> str:
    """Human readable employment type; unknown values pass through unchanged"""
    if not raw:
        return EMPLOYMENT_TYPE_LABELS["fulltime"]
    return EMPLOYMENT_TYPE_LABELS.get(_employment_key(raw), raw)
