from datetime import datetime, timezone
from typing import Tuple
import asyncio
import logging
import re

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from config import Settings
from dependencies import get_llm_processor, get_session_store, get_settings
from models.request import CareerPathRequest, ChatMessageRequest, ResumeAnalyzeRequest, SkillGapRequest
from models.resume import CompanyRecommendation, EducationEntry, ExperienceEntry, ProjectEntry, ResumeAnalysis
from utils.career import analyze_skill_gap, template_career_path
from utils.chat_sessions import ChatSessionStore, is_exit_command
from utils.llm_parsing import parse_resume_analysis
from utils.llm_processor import LLMProcessor

router = APIRouter(prefix="/api/ai", tags=["ai"])

_DATA_URL_RE = re.compile(r'^data:image/(\w+);base64,(.+)$', re.DOTALL)

NOT_CONFIGURED_MESSAGE = "The AI service is not configured. Please add OPENAI_API_KEY to your .env file."


def timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.post("/chat/start")
async def start_chat(
    llm_processor: LLMProcessor = Depends(get_llm_processor),
    sessions: ChatSessionStore = Depends(get_session_store),
):
    """Start a new chat session"""
    if not llm_processor.available:
        return {
            "sessionId": None,
            "message": NOT_CONFIGURED_MESSAGE,
            "timestamp": timestamp(),
        }

    session = sessions.create()
    logging.info(f"Started chat session {session.session_id}")
    return {
        "sessionId": session.session_id,
        "message": "Chat session started! You can now send messages.",
        "timestamp": timestamp(),
        "model": llm_processor.model,
    }


@router.post("/chat")
async def chat(
    body: ChatMessageRequest,
    settings: Settings = Depends(get_settings),
    llm_processor: LLMProcessor = Depends(get_llm_processor),
    sessions: ChatSessionStore = Depends(get_session_store),
):
    """
    Continue a conversation with the career assistant

    "exit" or "quit" ends the session. An unknown or expired session id
    starts a fresh conversation under that id.
    """
    message = (body.message or "").strip()
    if not message:
        raise HTTPException(status_code=400, detail="Message is required")

    if is_exit_command(message):
        sessions.delete(body.sessionId)
        return {
            "reply": "Chat session ended. Thank you for chatting!",
            "sessionId": body.sessionId,
            "sessionEnded": True,
            "timestamp": timestamp(),
        }

    if not llm_processor.available:
        return JSONResponse(status_code=500, content={
            "reply": NOT_CONFIGURED_MESSAGE,
            "timestamp": timestamp(),
            "error": True,
        })

    session = sessions.get_or_create(body.sessionId)
    try:
        reply = await llm_processor.chat(session, message, timeout=settings.chat_timeout)
    except asyncio.TimeoutError:
        logging.error(f"Chat request timed out after {settings.chat_timeout} seconds")
        return _chat_failure(session.session_id, "the request timed out")
    except Exception as e:
        logging.error(f"AI chat error: {str(e)}")
        return _chat_failure(session.session_id, str(e))

    return {
        "reply": reply,
        "sessionId": session.session_id,
        "timestamp": timestamp(),
        "model": llm_processor.model,
    }


def _chat_failure(session_id: str, reason: str) -> JSONResponse:
    return JSONResponse(status_code=500, content={
        "reply": (f"I apologize, but I'm having trouble connecting to the AI service right now "
                  f"({reason}). Please try again in a moment."),
        "sessionId": session_id,
        "timestamp": timestamp(),
        "error": True,
    })


@router.delete("/chat/{session_id}")
async def end_chat(session_id: str, sessions: ChatSessionStore = Depends(get_session_store)):
    """End a chat session"""
    if not sessions.delete(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return {"message": "Chat session ended", "sessionId": session_id}


@router.post("/career-path")
async def career_path(body: CareerPathRequest, llm_processor: LLMProcessor = Depends(get_llm_processor)):
    """Learning plan for a student targeting a company"""
    company_name = (body.companyName or "").strip()
    if not company_name:
        raise HTTPException(status_code=400, detail="Company name is required")

    if not llm_processor.available:
        return {"careerPath": template_career_path(company_name, body.userSkills)}

    try:
        plan = await llm_processor.generate_career_path(company_name, body.userSkills)
    except Exception as e:
        logging.error(f"AI career path error: {str(e)}")
        return {
            "careerPath": template_career_path(company_name, body.userSkills),
            "note": "Generated using fallback system due to AI service unavailability",
        }

    return {
        "careerPath": plan,
        "companyName": company_name,
        "userSkills": body.userSkills,
        "generatedAt": timestamp(),
    }


@router.post("/skill-gap-analysis")
async def skill_gap_analysis(body: SkillGapRequest):
    """Compare the student's skills with a role's requirements"""
    if not (body.jobTitle or "").strip():
        raise HTTPException(status_code=400, detail="Job title is required")

    analysis = analyze_skill_gap(body.userSkills, body.jobRequirements, body.jobTitle, body.companyName)
    return {
        "analysis": analysis,
        "jobTitle": body.jobTitle,
        "companyName": body.companyName,
        "userSkills": body.userSkills,
        "jobRequirements": body.jobRequirements,
        "generatedAt": timestamp(),
    }


def split_image_payload(image_base64: str) -> Tuple[str, str]:
    """
    Return (base64 data, image subtype) from a data URL or raw base64

    Raises:
        ValueError: for a data URL that is not a base64 image
    """
    if image_base64.startswith("data:"):
        match = _DATA_URL_RE.match(image_base64)
        if not match:
            raise ValueError("Invalid image format. Please provide a valid base64 image.")
        return match.group(2), match.group(1)
    return image_base64, "jpeg"


def describe_ai_error(error: Exception) -> str:
    """User facing explanation for a failed resume analysis"""
    message = "Error analyzing resume with AI. "
    text = str(error).lower()

    if isinstance(error, asyncio.TimeoutError) or "timeout" in text or "timed out" in text:
        return message + "The analysis took too long. Please try again with a smaller or clearer image."
    if any(key in text for key in ("api key", "authentication", "401", "403")):
        return message + "API authentication failed. Please verify your OpenAI API key in the .env file is correct."
    if any(key in text for key in ("quota", "limit", "429")):
        return message + "API quota exceeded. Please try again later or check your API usage limits."
    if "invalid" in text or "400" in text:
        return message + "Invalid request. Please ensure the image format is supported (JPG, PNG)."
    if any(key in text for key in ("model", "not found", "404")):
        return message + "Model not available. Please check your API key has access to vision models."
    return message + "Please check your API key and try again."


def _strings(value) -> list:
    return [str(item) for item in value if item is not None] if isinstance(value, list) else []


def _entries(value, model) -> list:
    """Validate list items one by one, dropping the ones that do not fit"""
    entries = []
    for item in value if isinstance(value, list) else []:
        if not isinstance(item, dict):
            continue
        try:
            entries.append(model.model_validate(item))
        except ValidationError as e:
            logging.warning(f"Dropping malformed {model.__name__} from resume analysis: {e.error_count()} errors")
    return entries


def normalize_analysis(data: dict) -> ResumeAnalysis:
    """Fill in missing sections and clamp the score to 0-10"""
    data = dict(data or {})
    summary = data.get("summary") if isinstance(data.get("summary"), dict) else {}
    recommendations = data.get("recommendations") if isinstance(data.get("recommendations"), dict) else {}

    summary = {
        "name": summary.get("name") if isinstance(summary.get("name"), str) else "",
        "skills": _strings(summary.get("skills")),
        "experience": _entries(summary.get("experience"), ExperienceEntry),
        "education": _entries(summary.get("education"), EducationEntry),
        "projects": _entries(summary.get("projects"), ProjectEntry),
    }
    recommendations = {
        "companies": _entries(recommendations.get("companies"), CompanyRecommendation),
        "tips": _strings(recommendations.get("tips")),
    }

    score = data.get("score")
    if isinstance(score, bool) or not isinstance(score, (int, float)) or score != score:
        score = 7.5
    else:
        score = max(0.0, min(10.0, float(score)))

    return ResumeAnalysis.model_validate({
        "summary": summary,
        "score": score,
        "recommendations": recommendations,
        "analyzedAt": datetime.now(timezone.utc),
    })


@router.post("/resume/analyze")
async def analyze_resume(
    body: ResumeAnalyzeRequest,
    settings: Settings = Depends(get_settings),
    llm_processor: LLMProcessor = Depends(get_llm_processor),
):
    """Analyze a resume image and recommend companies, roles and improvements"""
    if not body.imageBase64:
        raise HTTPException(status_code=400, detail="Resume image is required")

    try:
        base64_data, mime_type = split_image_payload(body.imageBase64)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if not llm_processor.available:
        return JSONResponse(status_code=500, content={"message": NOT_CONFIGURED_MESSAGE})

    try:
        text = await llm_processor.analyze_resume_image(base64_data, mime_type, timeout=settings.resume_timeout)
    except Exception as e:
        logging.error(f"AI resume analysis error: {str(e)}")
        return JSONResponse(status_code=500, content={"message": describe_ai_error(e)})

    result = parse_resume_analysis(text)
    if result.degraded:
        logging.warning(f"Resume analysis reply could not be fully parsed: {result.error}")

    analysis = normalize_analysis(result.value)
    logging.info(f"Analysis completed successfully. Score: {analysis.score}")

    response = {
        "message": "Resume analyzed successfully",
        "analysis": analysis.model_dump(mode="json"),
    }
    if result.degraded:
        response["note"] = "The AI response could not be fully parsed; only partial results are shown."
    return response
