from urllib.parse import urlparse

from dependencies import get_llm_processor
from main import app
from models.job import EmploymentType


def test_root_endpoint(client):
    """Test the root endpoint returns the welcome message"""
    response = client.get("/")
    assert response.status_code == 200
    assert "Welcome to the Job Search Engine API" in response.json()["message"]


def test_health_reports_offline_setup(client):
    data = client.get("/health").json()
    assert data["status"] == "OK"
    assert data["ai"] is False
    assert data["companyCache"] is True


def test_get_sources(client):
    """Only generated sources are registered in offline mode"""
    response = client.get("/api/sources")
    assert response.status_code == 200

    source_names = [source["name"] for source in response.json()["sources"]]
    assert source_names == ["LinkedIn", "Naukri", "Unstop", "Local"]


def test_search_requires_skills(client):
    response = client.get("/api/jobs/search")
    assert response.status_code == 400
    assert response.json()["detail"] == "Skills parameter is required"

    response = client.get("/api/jobs/search", params={"skills": " , ,"})
    assert response.status_code == 400


def test_search_mysore_returns_local_employers(client):
    response = client.get("/api/jobs/search", params={"skills": "Python,React", "location": "Mysore"})
    assert response.status_code == 200
    data = response.json()

    assert data["searchQuery"] == "Python,React"
    assert data["page"] == 1
    assert 0 < data["totalResults"] <= 20
    assert data["totalResults"] == len(data["jobs"])

    companies = {job["company"] for job in data["jobs"]}
    assert "Infosys" in companies
    assert "Wipro" in companies


def test_search_jobs_are_normalized(client):
    data = client.get("/api/jobs/search", params={"skills": "Java", "location": "Bangalore"}).json()

    allowed = {member.value for member in EmploymentType}
    pairs = set()
    for job in data["jobs"]:
        assert urlparse(job["applyUrl"]).scheme in ("http", "https")
        assert job["employmentType"] in allowed
        assert job["id"]
        pair = (job["company"].lower(), job["title"].lower())
        assert pair not in pairs
        pairs.add(pair)


def test_search_respects_limit(client):
    data = client.get("/api/jobs/search", params={"skills": "Go", "location": "Mysore", "limit": 5}).json()
    assert len(data["jobs"]) == 5


def test_search_caches_companies(client):
    client.get("/api/jobs/search", params={"skills": "Python", "location": "Mysore"})

    response = client.get("/api/jobs/company/infosys")
    assert response.status_code == 200
    company = response.json()["company"]
    assert company["name"] == "Infosys"
    assert company["source"] == "cache"


def test_unknown_company_gets_placeholder(client):
    response = client.get("/api/jobs/company/Nonexistent Widgets")
    assert response.status_code == 200
    company = response.json()["company"]
    assert company["source"] == "placeholder"
    assert company["websiteUrl"] == "https://www.nonexistentwidgets.com"


def test_chat_start_without_ai_key(client):
    data = client.post("/api/ai/chat/start").json()
    assert data["sessionId"] is None
    assert "not configured" in data["message"]


def test_chat_without_ai_key_fails_gracefully(client):
    response = client.post("/api/ai/chat", json={"message": "hello"})
    assert response.status_code == 500
    assert response.json()["error"] is True


def test_chat_requires_message(client):
    response = client.post("/api/ai/chat", json={"message": "   "})
    assert response.status_code == 400


def test_chat_conversation_and_exit(client, make_llm):
    llm = make_llm(reply="Practice system design questions.")
    app.dependency_overrides[get_llm_processor] = lambda: llm

    session_id = client.post("/api/ai/chat/start").json()["sessionId"]
    assert session_id.startswith("session_")

    data = client.post("/api/ai/chat", json={"message": "How do I prepare?", "sessionId": session_id}).json()
    assert data["reply"] == "Practice system design questions."
    assert data["sessionId"] == session_id
    assert data["model"] == "fake-model"

    # History from the first exchange goes out with the second message
    client.post("/api/ai/chat", json={"message": "And then?", "sessionId": session_id})
    sent = llm.client.chat.completions.calls[-1]["messages"]
    assert [m["content"] for m in sent[1:]] == [
        "How do I prepare?", "Practice system design questions.", "And then?",
    ]

    data = client.post("/api/ai/chat", json={"message": "EXIT", "sessionId": session_id}).json()
    assert data["sessionEnded"] is True

    assert client.delete(f"/api/ai/chat/{session_id}").status_code == 404


def test_chat_with_stale_session_starts_fresh(client, make_llm):
    llm = make_llm(reply="Hi there")
    app.dependency_overrides[get_llm_processor] = lambda: llm

    data = client.post("/api/ai/chat", json={"message": "hello", "sessionId": "session_gone"}).json()
    assert data["reply"] == "Hi there"
    assert data["sessionId"] == "session_gone"
    assert len(llm.client.chat.completions.calls[0]["messages"]) == 2


def test_exit_with_unknown_session(client):
    response = client.post("/api/ai/chat", json={"message": "quit", "sessionId": "nope"})
    assert response.status_code == 200
    assert response.json()["sessionEnded"] is True


def test_chat_model_error_returns_apology(client, make_llm):
    app.dependency_overrides[get_llm_processor] = lambda: make_llm(error=RuntimeError("boom"))

    response = client.post("/api/ai/chat", json={"message": "hello"})
    assert response.status_code == 500
    data = response.json()
    assert data["error"] is True
    assert "apologize" in data["reply"]


def test_career_path_falls_back_to_template(client):
    response = client.post("/api/ai/career-path", json={"companyName": "Google", "userSkills": ["React"]})
    assert response.status_code == 200
    plan = response.json()["careerPath"]
    assert "Career Path for Google" in plan
    assert "Great! You already have this" in plan

    assert client.post("/api/ai/career-path", json={"userSkills": []}).status_code == 400


def test_skill_gap_analysis(client):
    response = client.post("/api/ai/skill-gap-analysis", json={
        "jobTitle": "Frontend Developer",
        "userSkills": ["React", "JavaScript"],
        "jobRequirements": ["React", "TypeScript", "CSS", "JavaScript", "Testing"],
    })
    assert response.status_code == 200
    analysis = response.json()["analysis"]
    assert analysis["matchPercentage"] == 40
    assert analysis["readinessLevel"] == "Needs Preparation"
    assert analysis["missingSkills"] == ["typescript", "css", "testing"]

    assert client.post("/api/ai/skill-gap-analysis", json={}).status_code == 400


def test_resume_analyze_validation(client):
    assert client.post("/api/ai/resume/analyze", json={}).status_code == 400

    response = client.post("/api/ai/resume/analyze", json={"imageBase64": "data:text/plain;base64,abc"})
    assert response.status_code == 400

    response = client.post("/api/ai/resume/analyze", json={"imageBase64": "aGVsbG8="})
    assert response.status_code == 500
    assert "not configured" in response.json()["message"]


def test_resume_analyze_normalizes_model_output(client, make_llm):
    reply = ('```json\n{"summary": {"name": "Asha", "skills": ["Python"], "experience": "none"}, '
             '"score": 14, "recommendations": {"tips": ["Add metrics"]}}\n```')
    llm = make_llm(reply=reply)
    app.dependency_overrides[get_llm_processor] = lambda: llm

    response = client.post("/api/ai/resume/analyze", json={"imageBase64": "data:image/png;base64,aGVsbG8="})
    assert response.status_code == 200
    analysis = response.json()["analysis"]
    assert analysis["score"] == 10
    assert analysis["summary"]["name"] == "Asha"
    assert analysis["summary"]["experience"] == []
    assert analysis["recommendations"]["companies"] == []
    assert analysis["analyzedAt"]

    image_part = llm.client.chat.completions.calls[0]["messages"][0]["content"][1]
    assert image_part["image_url"]["url"] == "data:image/png;base64,aGVsbG8="


def test_resume_analyze_tolerates_bad_project_technologies(client, make_llm):
    reply = ('{"summary": {"projects": [{"name": "Bot", "technologies": null}, '
             '{"name": "Shop", "technologies": "React, Node"}]}, "score": 8}')
    app.dependency_overrides[get_llm_processor] = lambda: make_llm(reply=reply)

    response = client.post("/api/ai/resume/analyze", json={"imageBase64": "aGVsbG8="})
    assert response.status_code == 200
    projects = response.json()["analysis"]["summary"]["projects"]
    assert [p["name"] for p in projects] == ["Bot", "Shop"]
    assert projects[0]["technologies"] == []
    assert projects[1]["technologies"] == ["React", "Node"]


def test_resume_analyze_drops_malformed_entries(client, make_llm):
    reply = ('{"summary": {"experience": [{"title": ["not", "text"]}, {"title": "Intern", "company": "Zoho"}], '
             '"education": [{"degree": "BE", "year": 2024}]}, '
             '"recommendations": {"companies": [{"name": {"bad": 1}}, {"name": "Infosys"}]}, "score": 6}')
    app.dependency_overrides[get_llm_processor] = lambda: make_llm(reply=reply)

    response = client.post("/api/ai/resume/analyze", json={"imageBase64": "aGVsbG8="})
    assert response.status_code == 200
    analysis = response.json()["analysis"]
    assert [e["title"] for e in analysis["summary"]["experience"]] == ["Intern"]
    assert analysis["summary"]["education"][0]["year"] == "2024"
    assert [c["name"] for c in analysis["recommendations"]["companies"]] == ["Infosys"]


def test_resume_analyze_unparseable_reply(client, make_llm):
    app.dependency_overrides[get_llm_processor] = lambda: make_llm(reply='Name: Ravi\n"skills": ["Go", "SQL"]')

    response = client.post("/api/ai/resume/analyze", json={"imageBase64": "aGVsbG8="})
    assert response.status_code == 200
    data = response.json()
    assert "note" in data
    assert data["analysis"]["summary"]["name"] == "Ravi"
    assert data["analysis"]["summary"]["skills"] == ["Go", "SQL"]
    assert data["analysis"]["score"] == 7.0


def test_resume_analyze_auth_error_message(client, make_llm):
    app.dependency_overrides[get_llm_processor] = lambda: make_llm(error=RuntimeError("401 invalid api key"))

    response = client.post("/api/ai/resume/analyze", json={"imageBase64": "aGVsbG8="})
    assert response.status_code == 500
    assert "authentication failed" in response.json()["message"]


def test_recommendation_states(client):
    data = client.get("/api/recommendations/states").json()
    assert data["total"] == 50
    assert "California" in data["states"]


def test_recommended_companies_for_location(client):
    data = client.get("/api/recommendations/companies/Mysore").json()
    names = [company["name"] for company in data["companies"]]
    assert "Infosys" in names
    assert len(names) == len({name.lower() for name in names})
    assert data["totalResults"] == len(names)
    assert "github" not in data["sources"]


def test_recommended_jobs_use_live_sources_only(client):
    data = client.get("/api/recommendations/jobs/Mysore", params={"skills": "Python"}).json()
    assert data["jobs"] == []
    assert data["skills"] == ["Python"]
