"""
Question answering API endpoints.

Routes: POST /ask, GET /ask?question=..., GET /ask?ping=1

Dependencies: legalchat.application.services, legalchat.models
System role: Question answering HTTP API
"""

import logging

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import PlainTextResponse

from legalchat.api.deps import get_ask_service_factory
from legalchat.core.exceptions import ConfigurationError, ValidationError
from legalchat.models.ask import AskRequest, AskResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ask"])

INTERNAL_ERROR_MESSAGE = "An internal server error occurred. Please check the logs for details."


async def _answer(question: str | None, service_factory) -> AskResponse | PlainTextResponse:
    try:
        service = service_factory()
        return await service.ask(question)
    except ValidationError as e:
        return PlainTextResponse(e.message, status_code=400)
    except ConfigurationError as e:
        logger.error(f"{__name__}:ask - Configuration error: {e.message}")
        return PlainTextResponse(f"Configuration error: {e.message}", status_code=500)
    except Exception as e:
        logger.exception(f"{__name__}:ask - {type(e).__name__}: {e}")
        return PlainTextResponse(INTERNAL_ERROR_MESSAGE, status_code=500)


@router.post("/ask", response_model=AskResponse)
async def ask_post(
    body: AskRequest | None = Body(default=None),
    question: str | None = Query(default=None),
    service_factory=Depends(get_ask_service_factory),
):
    """
    Answer a legal question.

    The query-string question wins over the body, matching GET.

    Args:
        body: ``{"question": "..."}``
        question: Optional query-string question
        service_factory: Injected AskService constructor

    Returns:
        AskResponse: country_header, refined_answer, country_detection

    Raises:
        HTTP 400: Empty question
        HTTP 500: Configuration error or external service failure
    """
    text = question if question and question.strip() else (body.question if body else None)
    return await _answer(text, service_factory)


@router.get("/ask", response_model=AskResponse)
async def ask_get(
    question: str | None = Query(default=None),
    ping: str | None = Query(default=None),
    service_factory=Depends(get_ask_service_factory),
):
    """
    Answer a question from the query string, or answer a liveness ping.

    Args:
        question: Free-text question
        ping: Any value returns plain ``ok``
        service_factory: Injected AskService constructor

    Returns:
        AskResponse | PlainTextResponse
    """
    if ping is not None:
        return PlainTextResponse("ok")
    return await _answer(question, service_factory)
