import asyncio
import json
import logging
from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI

from models.job import NormalizedJob
from utils.chat_sessions import ChatSession
from utils.data_utils import truncate
from utils.llm_parsing import parse_index_list

RANKING_DESCRIPTION_LENGTH = 200

RESUME_ANALYSIS_PROMPT = """You are an expert resume analyzer. Analyze this resume image carefully and extract all key information.

CRITICAL: You MUST respond with ONLY valid JSON. Do not include any markdown code blocks, explanations, or additional text. Return ONLY the JSON object.

Required JSON format:
{
  "summary": {
    "name": "Full name from resume",
    "skills": ["skill1", "skill2", "skill3"],
    "experience": [
      {"title": "Job title", "company": "Company name", "duration": "Duration (e.g., Jan 2020 - Present)", "description": "Brief description of role"}
    ],
    "education": [
      {"degree": "Degree name", "institution": "Institution name", "year": "Graduation year"}
    ],
    "projects": [
      {"name": "Project name", "description": "Project description", "technologies": ["tech1", "tech2"]}
    ]
  },
  "score": 8.5,
  "recommendations": {
    "companies": [
      {"name": "Company name", "role": "Job role title", "matchReason": "Why this role matches"}
    ],
    "tips": ["Tip 1 to improve resume", "Tip 2 to improve resume"]
  }
}

Instructions:
- Score (0-10): Evaluate based on resume quality, clarity, completeness, formatting, and market readiness
- Provide 5-10 recommended companies and roles matching the candidate's skills and experience
- Provide 3-5 actionable tips to improve the resume
- Extract ALL skills, experience, education, and projects mentioned
- Be accurate and specific
- Return ONLY the JSON object, no other text"""


class LLMProcessor:
    """
    All calls to the generative model: job ranking, career chat,
    career-path plans and resume image analysis
    """

    def __init__(self, api_key: Optional[str] = None, model: str = "gpt-4o-mini", client: Any = None):
        self.model = model
        if client is not None:
            self.client = client
        elif api_key:
            self.client = AsyncOpenAI(api_key=api_key, max_retries=2)
            logging.info(f"OpenAI client initialized with model {model}")
        else:
            self.client = None
            logging.warning("OpenAI API key not found. AI features will be limited.")

    @property
    def available(self) -> bool:
        return self.client is not None

    async def _complete(self, messages: List[Dict[str, Any]], temperature: float = 0.3,
                        max_tokens: int = 2000) -> str:
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
        )
        text = response.choices[0].message.content
        if not text or not text.strip():
            raise ValueError("Empty response from model")
        return text

    async def rank_jobs(self, jobs: List[NormalizedJob], skills: List[str], limit: int,
                        timeout: float = 15.0) -> List[NormalizedJob]:
        """
        Reorder jobs by how well they match the skills

        Best effort: without a client, on timeout, or when the reply cannot
        be parsed, the jobs come back in their original order.

        Args:
            jobs: Normalized jobs to rank
            skills: Skills from the search
            limit: Maximum number of jobs to return
            timeout: Seconds to wait for the model

        Returns:
            At most `limit` jobs, best match first
        """
        if not jobs:
            return []
        if not self.available:
            return jobs[:limit]

        try:
            text = await asyncio.wait_for(
                self._complete(self._ranking_messages(jobs, skills, limit), temperature=0.2),
                timeout=timeout,
            )
        except asyncio.TimeoutError:
            logging.error(f"AI ranking timed out after {timeout} seconds")
            return jobs[:limit]
        except Exception as e:
            logging.error(f"AI ranking error: {str(e)}")
            return jobs[:limit]

        result = parse_index_list(text)
        if not result.ok:
            logging.error(f"AI ranking error: {result.error}")
            return jobs[:limit]
        if result.degraded:
            logging.warning("AI ranking reply was not clean JSON, used the first index list found")

        return self.reorder_by_indices(jobs, result.value, limit)

    @staticmethod
    def reorder_by_indices(jobs: List[NormalizedJob], indices: List[int], limit: int) -> List[NormalizedJob]:
        """
        Apply a ranked index list

        Out-of-range and repeated indices are skipped; jobs the ranking left
        out follow in their original order.
        """
        ranked = []
        used = set()
        for index in indices:
            if 0 <= index < len(jobs) and index not in used:
                ranked.append(jobs[index])
                used.add(index)

        for i, job in enumerate(jobs):
            if len(ranked) >= limit:
                break
            if i not in used:
                ranked.append(job)

        return ranked[:limit]

    def _ranking_messages(self, jobs: List[NormalizedJob], skills: List[str], limit: int) -> List[Dict[str, str]]:
        job_summaries = [
            {
                "index": index,
                "title": job.title,
                "company": job.company,
                "description": truncate(job.description, RANKING_DESCRIPTION_LENGTH),
                "location": job.location,
            }
            for index, job in enumerate(jobs)
        ]
        skills_text = ", ".join(skills)

        prompt = f"""You are a job matching expert. Analyze the following jobs and rank them based on how well they match these skills: {skills_text}.

Jobs to analyze:
{json.dumps(job_summaries, indent=2)}

Return a JSON array of job indices (0-based) ranked from best match to worst match. Only return the indices in order, like: [2, 0, 5, 1, 3, ...]
Return exactly {min(limit, len(jobs))} indices, prioritizing jobs that best match the skills: {skills_text}.

Response format (JSON only, no markdown):
[2, 0, 5, 1, 3, ...]"""

        return [{"role": "user", "content": prompt}]

    async def chat(self, session: ChatSession, message: str, timeout: float = 50.0) -> str:
        """
        Send a message within a chat session

        The exchange is only added to the session history once the model
        has answered.
        """
        logging.info(f"Sending message to model: {message[:50]}...")
        reply = await asyncio.wait_for(
            self._complete(session.messages(pending=message), temperature=0.7),
            timeout=timeout,
        )
        session.record_exchange(message, reply)
        logging.info(f"Received AI response (length: {len(reply)} chars)")
        return reply

    async def generate_career_path(self, company_name: str, user_skills: List[str]) -> str:
        prompt = create_career_path_prompt(company_name, user_skills)
        return await self._complete([{"role": "user", "content": prompt}], temperature=0.7)

    async def analyze_resume_image(self, base64_data: str, mime_type: str, timeout: float = 90.0) -> str:
        """Send a resume image to the vision model and return its raw reply"""
        logging.info(f"Sending resume image for analysis ({len(base64_data)} bytes, image/{mime_type})")
        messages = [{
            "role": "user",
            "content": [
                {"type": "text", "text": RESUME_ANALYSIS_PROMPT},
                {"type": "image_url", "image_url": {"url": f"data:image/{mime_type};base64,{base64_data}"}},
            ],
        }]
        return await asyncio.wait_for(
            self._complete(messages, temperature=0.2, max_tokens=4000),
            timeout=timeout,
        )


def create_career_path_prompt(company_name: str, user_skills: List[str]) -> str:
    skills_list = ", ".join(user_skills) if user_skills else "beginner level"

    return f"""You are a Senior Tech Recruiter & Career Coach at {company_name}. A student is interested in a software engineering role at your company.

Their current skills are: {skills_list}

Based on publicly available information about {company_name}'s tech stack and recent job postings, please provide a concise, actionable learning plan. Your response must be in Markdown format.

Include:

## 1. Core Languages & Frameworks
What are the top 3-4 technologies they MUST learn to be a strong candidate for {company_name}?

## 2. Advanced Topics & Concepts
What 2-3 advanced topics (e.g., 'distributed systems', 'cloud-native computing', 'large-scale data processing') are important for this company?

## 3. Suggested Learning Path
Give them a 3-step path to follow over the next 6 months:
- **Step 1 (Months 1-2):** Foundation building
- **Step 2 (Months 3-4):** Intermediate skills
- **Step 3 (Months 5-6):** Advanced concepts and projects

## 4. Project Recommendations
Suggest 2-3 specific projects they should build to demonstrate their skills.

## 5. Additional Resources
Recommend specific courses, documentation, or certifications.

Keep the response practical, specific, and encouraging. Focus on actionable steps rather than general advice."""
