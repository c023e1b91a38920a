"""API routes for the coffee recommendation assistant."""

from __future__ import annotations

from typing import Any, Callable

from fastapi import APIRouter, Depends

from barista.assistant import CoffeeAssistant
from barista.conversation.models import ConversationTurn
from barista.conversation.transcript import turns_from_payload
from barista.core.errors import BadRequestError
from barista.planner.types import Stage


def parse_chat_payload(payload: dict) -> tuple[str, list[ConversationTurn]]:
    """Validate a chat body before the engine sees it."""

    question = payload.get("question")
    if not isinstance(question, str) or not question.strip():
        raise BadRequestError("Please provide a valid question.")

    try:
        history = turns_from_payload(payload.get("conversationHistory"))
    except ValueError as exc:
        raise BadRequestError(str(exc)) from exc
    return question.strip(), history


def create_assistant_router(
    get_assistant: Callable[[], CoffeeAssistant],
    *,
    expose_debug: bool = True,
) -> APIRouter:
    router = APIRouter(tags=["assistant"])

    @router.post("/assistant/chat")
    @router.post("/gemini/chat")
    async def chat_endpoint(payload: dict, assistant: CoffeeAssistant = Depends(get_assistant)) -> dict:
        """Answer the shopper's newest message given the transcript so far."""

        question, history = parse_chat_payload(payload)
        reply = await assistant.respond(question, history)

        body: dict[str, Any] = {"answer": reply.answer, "degraded": reply.degraded}
        if expose_debug:
            body["debug"] = reply.result.debug
        return body

    @router.post("/assistant/analyze")
    async def analyze_endpoint(payload: dict, assistant: CoffeeAssistant = Depends(get_assistant)) -> dict:
        """Return the planner decision and search spec without calling any collaborator."""

        question, history = parse_chat_payload(payload)
        decision = assistant.plan(question, history)

        spec = None
        if decision.stage is Stage.READY_TO_RECOMMEND:
            spec = assistant.orchestrator.builder.build(decision.preferences).as_dict()
        return decision.as_dict() | {"search_spec": spec}

    return router
