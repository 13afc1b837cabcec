import pytest

from config import Settings
from models.job import EmploymentType
from routes.ai import describe_ai_error, normalize_analysis, split_image_payload
from utils.career import analyze_skill_gap, readiness_level, template_career_path
from utils.data_utils import (
    build_search_url,
    employment_type_label,
    ensure_valid_url,
    normalize_employment_type,
    strip_html,
)


@pytest.mark.parametrize("raw,expected", [
    ("FULLTIME", EmploymentType.FULLTIME),
    ("full_time", EmploymentType.FULLTIME),
    ("Part-time", EmploymentType.PARTTIME),
    ("internship", EmploymentType.INTERN),
    ("CONTRACTOR", EmploymentType.CONTRACT),
    ("temporary", EmploymentType.FULLTIME),
    (None, EmploymentType.FULLTIME),
])
def test_normalize_employment_type(raw, expected):
    assert normalize_employment_type(raw) == expected


def test_employment_type_label():
    assert employment_type_label("PARTTIME") == "Part-time"
    assert employment_type_label("intern") == "Internship"
    assert employment_type_label("Seasonal") == "Seasonal"
    assert employment_type_label(None) == "Full-time"


def test_ensure_valid_url():
    assert ensure_valid_url("https://jobs.example.com/1", "Acme", "Dev", "Go", "Austin") == "https://jobs.example.com/1"
    for bad in (None, "", "jobs.example.com/1", "ftp://example.com/file"):
        assert ensure_valid_url(bad, "Acme", "Dev", "Go", "Austin") == build_search_url("Dev", "Acme", "Go", "Austin")


def test_strip_html():
    assert strip_html("<div>Hello <b>world</b></div>") == "Hello world"
    assert strip_html("plain   text") == "plain text"
    assert strip_html(None) == ""


def test_skill_gap_without_requirements():
    analysis = analyze_skill_gap(["Python"], [], "Developer")
    assert analysis["matchPercentage"] == 0
    assert analysis["readinessLevel"] == "Significant Gap"


def test_skill_gap_recommends_top_three_missing():
    analysis = analyze_skill_gap([], ["a", "b", "c", "d", "e", "f"], "Developer")
    assert len(analysis["missingSkills"]) == 5
    assert [r["skill"] for r in analysis["recommendations"]] == ["a", "b", "c"]


@pytest.mark.parametrize("percentage,level", [
    (100, "Ready to Apply"),
    (80, "Ready to Apply"),
    (60, "Almost Ready"),
    (40, "Needs Preparation"),
    (39, "Significant Gap"),
])
def test_readiness_level(percentage, level):
    assert readiness_level(percentage) == level


def test_template_career_path_mentions_skills():
    plan = template_career_path("Stripe", ["Python"])
    assert "# Career Path for Stripe" in plan
    assert "Your Python skills are valuable" in plan
    assert "Learn React.js fundamentals" in plan


def test_split_image_payload():
    assert split_image_payload("data:image/png;base64,QUJD") == ("QUJD", "png")
    assert split_image_payload("QUJD") == ("QUJD", "jpeg")
    with pytest.raises(ValueError):
        split_image_payload("data:image/png,QUJD")


def test_describe_ai_error():
    assert "took too long" in describe_ai_error(TimeoutError("request timed out"))
    assert "quota exceeded" in describe_ai_error(RuntimeError("429 Too Many Requests"))
    assert "Model not available" in describe_ai_error(RuntimeError("model gpt-x not found"))


def test_normalize_analysis_defaults():
    analysis = normalize_analysis({"score": "great"})
    assert analysis.score == 7.5
    assert analysis.summary.skills == []
    assert analysis.analyzedAt is not None

    assert normalize_analysis({"score": -3}).score == 0


def test_per_source_timeout(monkeypatch):
    monkeypatch.setenv("NAUKRI_TIMEOUT", "3")
    settings = Settings(source_timeout=20)
    assert settings.source_timeout_for("Naukri") == 3
    assert settings.source_timeout_for("Unstop") == 20


def test_jsearch_placeholder_key_is_ignored(monkeypatch):
    monkeypatch.setenv("JSEARCH_API_KEY", "your_rapidapi_jsearch_key_here")
    assert Settings.from_env().jsearch_api_key is None
