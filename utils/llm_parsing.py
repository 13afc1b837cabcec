"""
Tolerant parsing of model output.

Model replies are untrusted text: they may be wrapped in Markdown fences,
surrounded by prose, or truncated. Each parser here walks a chain of
attempts (strict JSON, then tolerant extraction, then a stub) and reports
how far it had to fall back instead of raising.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import json
import re

_FENCE_RE = re.compile(r'```(?:json)?\s*', re.IGNORECASE)
_INT_ARRAY_RE = re.compile(r'\[[\d,\s]+\]')
_OBJECT_RE = re.compile(r'\{[\s\S]*\}')
_NAME_RE = re.compile(r'name["\s:]+"([^"]+)"', re.IGNORECASE)
_NAME_LINE_RE = re.compile(r'Name:\s*([^\n]+)', re.IGNORECASE)
_SKILLS_RE = re.compile(r'skills["\s:]+\[([^\]]+)\]', re.IGNORECASE)

RESUME_PARSE_TIP = "Unable to fully parse resume. Please ensure the image is clear and try again."
RESUME_FALLBACK_SCORE = 7.0


@dataclass
class ParseResult:
    """Outcome of a parse chain: the value, and whether a fallback produced it"""

    value: Any = None
    degraded: bool = False
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.value is not None


def strip_code_fences(text: str) -> str:
    if not text:
        return ""
    return _FENCE_RE.sub("", text).strip()


def parse_index_list(text: str) -> ParseResult:
    """
    Parse a ranking reply such as "[2, 0, 5]"

    Returns a ParseResult whose value is a list of ints, or None when the
    reply holds no usable list.
    """
    cleaned = strip_code_fences(text)
    if not cleaned:
        return ParseResult(error="Empty response")

    try:
        parsed = json.loads(cleaned)
        if isinstance(parsed, list):
            return ParseResult(value=_only_ints(parsed))
        error = f"Expected a JSON array, got {type(parsed).__name__}"
    except json.JSONDecodeError as e:
        error = str(e)

    match = _INT_ARRAY_RE.search(cleaned)
    if match:
        try:
            return ParseResult(value=_only_ints(json.loads(match.group(0))), degraded=True)
        except json.JSONDecodeError as e:
            error = str(e)

    return ParseResult(error=f"Could not parse ranking response: {error}")


def _only_ints(values: List[Any]) -> List[int]:
    return [value for value in values if isinstance(value, int) and not isinstance(value, bool)]


def parse_json_object(text: str) -> ParseResult:
    """Extract the outermost {...} object from a reply"""
    cleaned = strip_code_fences(text)
    match = _OBJECT_RE.search(cleaned)
    if not match:
        return ParseResult(error="No JSON object found in response")
    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        return ParseResult(error=str(e))
    if not isinstance(parsed, dict):
        return ParseResult(error="Response JSON is not an object")
    return ParseResult(value=parsed)


def parse_resume_analysis(text: str) -> ParseResult:
    """
    Parse a resume-analysis reply

    Falls back to pulling the name and skills out with regular expressions,
    and finally to a stub analysis carrying a tip that parsing was partial.
    """
    result = parse_json_object(text)
    if result.ok:
        return result

    name_match = _NAME_RE.search(text or "") or _NAME_LINE_RE.search(text or "")
    skills_match = _SKILLS_RE.search(text or "")
    skills = []
    if skills_match:
        skills = [s.strip().replace('"', '') for s in skills_match.group(1).split(",") if s.strip()]

    stub: Dict[str, Any] = {
        "summary": {
            "name": name_match.group(1).strip() if name_match else "Not found",
            "skills": skills,
            "experience": [],
            "education": [],
            "projects": [],
        },
        "score": RESUME_FALLBACK_SCORE,
        "recommendations": {
            "companies": [],
            "tips": [RESUME_PARSE_TIP],
        },
    }
    return ParseResult(value=stub, degraded=True, error=result.error)
