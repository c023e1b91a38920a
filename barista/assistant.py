"""Per-turn pipeline: plan, search when ready, assemble instructions, generate."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

from barista.conversation.models import ConversationTurn
from barista.core.metrics import MetricsCollector
from barista.llm.base import TextGenerationService
from barista.llm.prompts import APOLOGY_ANSWER, build_system_prompt, build_user_instructions
from barista.planner.base import Planner
from barista.planner.types import PlannerContext, PlannerDecision, Stage
from barista.search.orchestrator import InstructionTemplate, SearchOrchestrator, SearchOutcome

logger = logging.getLogger("barista.assistant")


@dataclass(slots=True)
class TurnResult:
    system_instructions: str
    answer_instructions: str
    template: InstructionTemplate
    decision: PlannerDecision
    outcome: SearchOutcome | None = None

    @property
    def debug(self) -> dict[str, Any]:
        return {
            **self.decision.as_dict(),
            "template": self.template.value,
            "search": self.outcome.as_dict() if self.outcome else None,
        }


@dataclass(slots=True)
class AssistantReply:
    answer: str
    degraded: bool
    result: TurnResult


class CoffeeAssistant:
    """Stateless engine: everything is recomputed from the supplied transcript."""

    def __init__(
        self,
        planner: Planner,
        orchestrator: SearchOrchestrator,
        generator: TextGenerationService,
        *,
        reply_language: str = "Traditional Chinese (Taiwan)",
        metrics: MetricsCollector | None = None,
    ) -> None:
        self.planner = planner
        self.orchestrator = orchestrator
        self.generator = generator
        self.system_prompt = build_system_prompt(reply_language)
        self.metrics = metrics

    def plan(self, question: str, history: Sequence[ConversationTurn] = ()) -> PlannerDecision:
        return self.planner.decide(PlannerContext(question=question, history=tuple(history)))

    async def handle_turn(self, question: str, history: Sequence[ConversationTurn] = ()) -> TurnResult:
        decision = self.plan(question, history)

        outcome: SearchOutcome | None = None
        if decision.stage is Stage.READY_TO_RECOMMEND:
            outcome = await self.orchestrator.run(decision.preferences)
            template = outcome.template
        elif decision.stage is Stage.FLAVOR_SELECTED:
            template = InstructionTemplate.ASK_DETAILS
        else:
            template = InstructionTemplate.GREETING

        logger.info("Turn resolved to %s via %s (%s)", decision.stage.value, decision.rule, template.value)
        return TurnResult(
            system_instructions=self.system_prompt,
            answer_instructions=build_user_instructions(question, history, decision, outcome),
            template=template,
            decision=decision,
            outcome=outcome,
        )

    async def respond(self, question: str, history: Sequence[ConversationTurn] = ()) -> AssistantReply:
        result = await self.handle_turn(question, history)

        degraded = False
        try:
            answer = (await self.generator.generate(result.system_instructions, result.answer_instructions)).strip()
        except Exception:  # noqa: BLE001 - the shopper gets a canned apology instead
            logger.exception("Text generation failed")
            answer = APOLOGY_ANSWER
            degraded = True

        if self.metrics is not None:
            self.metrics.record_turn(
                result.decision.stage.value,
                result.template.value,
                relaxed=bool(result.outcome and result.outcome.relaxed),
                catalog_failed=result.template is InstructionTemplate.SEARCH_FAILED,
                generation_failed=degraded,
            )
        return AssistantReply(answer=answer, degraded=degraded, result=result)
