from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
import uvicorn
import logging
import time
from typing import Dict
from contextlib import asynccontextmanager

from config import Settings
from dependencies import app_state, get_sources as sources_dependency
from routes import ai, jobs, recommendations
from sources.base import BaseSource
from sources.http_session import clear_sessions
from sources.source_factory import SourceFactory
from storage.company_cache import CompanyCache
from utils.chat_sessions import ChatSessionStore
from utils.llm_processor import LLMProcessor

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


def create_company_cache(settings: Settings):
    """Open the company cache; the API keeps working without one"""
    if not settings.company_cache_enabled:
        logging.info("Company cache disabled")
        return None
    try:
        cache = CompanyCache(settings.database_url)
        cache.create_tables()
        logging.info("Company cache connected")
        return cache
    except Exception as e:
        logging.error(f"Company cache unavailable, continuing without it: {str(e)}")
        return None


# Startup and shutdown events
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: Initialize resources
    logging.info("Starting application and initializing resources...")
    try:
        settings = Settings.from_env()
        app_state["settings"] = settings
        app_state["sources"] = SourceFactory.create_sources(settings)
        app_state["github"] = SourceFactory.create_github_client(settings)
        app_state["llm_processor"] = LLMProcessor(settings.openai_api_key, settings.openai_model)
        app_state["company_cache"] = create_company_cache(settings)
        app_state["chat_sessions"] = ChatSessionStore(settings.chat_session_max, settings.chat_session_ttl)
        app_state["health"] = "OK"

        logging.info(f"Active job sources: {', '.join(app_state['sources'])}")
        logging.info("Application startup complete")
    except Exception as e:
        logging.error(f"Error during startup: {str(e)}")
        app_state["health"] = f"ERROR: {str(e)}"

    yield

    # Shutdown: Clean up resources
    logging.info("Shutting down application...")
    if app_state["company_cache"] is not None:
        app_state["company_cache"].dispose()
    if app_state["chat_sessions"] is not None:
        app_state["chat_sessions"].clear()
    clear_sessions()
    app_state.update({
        "settings": None,
        "sources": {},
        "github": None,
        "llm_processor": None,
        "company_cache": None,
        "chat_sessions": None,
    })
    logging.info("Application shutdown complete")

# Initialize FastAPI
app = FastAPI(
    title="Job Search Engine API",
    description="Aggregates job listings from several providers, ranks them by skill match "
                "and offers AI career tools",
    version="1.0.0",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(jobs.router)
app.include_router(ai.router)
app.include_router(recommendations.router)


@app.get("/")
async def root():
    """Root endpoint - returns API welcome message"""
    return {"message": "Welcome to the Job Search Engine API! Go to /docs for API documentation."}


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    sessions = app_state["chat_sessions"]
    llm_processor = app_state["llm_processor"]
    return {
        "status": app_state["health"],
        "time": time.time(),
        "sources": list(app_state["sources"].keys()),
        "ai": bool(llm_processor and llm_processor.available),
        "companyCache": app_state["company_cache"] is not None,
        "chatSessions": len(sessions) if sessions is not None else 0,
    }


@app.get("/api/sources")
async def get_sources(sources: Dict[str, BaseSource] = Depends(sources_dependency)):
    """Get available job sources"""
    return {
        "sources": [
            {"name": source_name, "status": "active"}
            for source_name in sources.keys()
        ]
    }


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
