from typing import Any, Dict, List, Optional


def analyze_skill_gap(user_skills: List[str], job_requirements: List[str],
                      job_title: str, company_name: Optional[str] = None) -> Dict[str, Any]:
    """
    Compare a student's skills with a role's requirements

    A skill matches a requirement when either contains the other,
    case-insensitively.

    Args:
        user_skills: Skills the student has
        job_requirements: Skills the role asks for
        job_title: Role being analysed
        company_name: Employer, if known

    Returns:
        Match percentage, matching and missing skills, recommendations and readiness level
    """
    user_lower = [skill.lower() for skill in user_skills]
    required_lower = [req.lower() for req in job_requirements]

    matching = [
        skill for skill in user_lower
        if any(req in skill or skill in req for req in required_lower)
    ]
    missing = [
        req for req in required_lower
        if not any(req in skill or skill in req for skill in user_lower)
    ]

    match_percentage = round(len(matching) / len(job_requirements) * 100) if job_requirements else 0

    return {
        "matchPercentage": match_percentage,
        "matchingSkills": matching,
        "missingSkills": missing[:5],
        "recommendations": skill_recommendations(missing),
        "readinessLevel": readiness_level(match_percentage),
    }


def skill_recommendations(missing_skills: List[str]) -> List[Dict[str, Any]]:
    return [
        {
            "skill": skill,
            "priority": "High",
            "estimatedTime": "2-4 weeks",
            "resources": [f"Learn {skill} fundamentals", f"Build a project using {skill}"],
        }
        for skill in missing_skills[:3]
    ]


def readiness_level(match_percentage: float) -> str:
    if match_percentage >= 80:
        return "Ready to Apply"
    if match_percentage >= 60:
        return "Almost Ready"
    if match_percentage >= 40:
        return "Needs Preparation"
    return "Significant Gap"


def _has_skill(user_skills: List[str], fragment: str) -> bool:
    return any(fragment in skill.lower() for skill in user_skills)


def template_career_path(company_name: str, user_skills: List[str]) -> str:
    """Markdown learning plan used when the model is unavailable"""
    has_react = _has_skill(user_skills, "react")
    has_node = _has_skill(user_skills, "node")
    has_python = _has_skill(user_skills, "python")

    react_note = "Great! You already have this" if has_react else "Critical frontend framework used extensively"
    node_note = "Excellent foundation you have" if has_node else "Important for backend development"
    backend_language = "Python" if has_python else "Java/Go"
    backend_note = "Your Python skills are valuable" if has_python else "Backend services and microservices"
    react_step = "Deepen React knowledge with hooks and context" if has_react else "Learn React.js fundamentals"
    node_step = "advanced Node.js patterns" if has_node else "Node.js and Express.js"

    return f"""# Career Path for {company_name}

## 1. Core Languages & Frameworks

Based on {company_name}'s tech stack, you should focus on:

- **JavaScript/TypeScript** - Essential for modern web development
- **React.js** - {react_note}
- **Node.js** - {node_note}
- **{backend_language}** - {backend_note}

## 2. Advanced Topics & Concepts

Key areas {company_name} values:

- **Distributed Systems** - Understanding microservices architecture
- **Cloud Computing** - AWS/GCP experience is highly valued
- **System Design** - Scalability and performance optimization

## 3. Suggested Learning Path

### Step 1 (Months 1-2): Foundation Building
- Master JavaScript ES6+ features
- {react_step}
- Understand RESTful API design

### Step 2 (Months 3-4): Intermediate Skills
- Learn TypeScript for better code quality
- Explore {node_step}
- Database design (SQL and NoSQL)

### Step 3 (Months 5-6): Advanced Concepts
- System design principles
- Cloud services (AWS Lambda, S3, RDS)
- Testing strategies and CI/CD

## 4. Project Recommendations

1. **Full-Stack Web Application** - Build a complete CRUD app with authentication
2. **Microservices Project** - Create a distributed system with multiple services
3. **Cloud-Native App** - Deploy an application using cloud services

## 5. Additional Resources

- **Courses:** "System Design Interview" course, AWS Cloud Practitioner
- **Documentation:** React docs, Node.js guides, AWS documentation
- **Certifications:** AWS Solutions Architect Associate

Focus on building projects that demonstrate these skills. {company_name} values practical experience over theoretical knowledge.

Good luck with your learning journey!"""
