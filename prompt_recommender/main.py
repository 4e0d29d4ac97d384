"""
Prompt Recommender API.

Run locally with:
    uvicorn prompt_recommender.main:app --reload
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from prompt_recommender.config import settings
from prompt_recommender.routes.health import router as health_router
from prompt_recommender.routes.recommendations import router as recommendations_router
from prompt_recommender.utils.constants import ERROR_MESSAGES

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


def _get_cors_origins() -> list[str]:
    """
    Origins allowed by the CORS middleware.

    Production only allows CORS_ALLOWED_ORIGINS (none if unset); every other
    environment allows any origin.
    """
    if not settings.is_production():
        return ["*"]

    if not settings.CORS_ALLOWED_ORIGINS:
        logger.warning("CORS_ALLOWED_ORIGINS is empty in production; browser clients will be blocked")
    return settings.CORS_ALLOWED_ORIGINS


app = FastAPI(
    title="Prompt Recommender API",
    description="Recommends related prompts for a domain using embeddings and Gemini explanations",
    version="0.1.0",
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Answer body/query validation failures with a 400 invalid_request.

    Only POST /api/recommend gets the domain/prompts message; other
    endpoints get a generic one.
    """
    logger.warning(f"Rejected {request.method} {request.url.path}: {exc.errors()}")

    message_key = "INVALID_REQUEST" if request.url.path == "/api/recommend" else "INVALID_PARAMETERS"

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": {
                "error": "invalid_request",
                "details": ERROR_MESSAGES[message_key]
            }
        }
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=_get_cors_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type"],
)

app.include_router(health_router)
app.include_router(recommendations_router)

logger.info(f"Prompt Recommender API ready (environment={settings.ENVIRONMENT})")
