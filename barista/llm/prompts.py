"""System prompt and per-turn instruction assembly."""

from __future__ import annotations

from typing import Sequence

from barista.conversation.models import ConversationTurn
from barista.conversation.transcript import format_transcript
from barista.planner.types import FollowUpTopic, PlannerDecision, Stage
from barista.search.catalog import CatalogItem
from barista.search.orchestrator import InstructionTemplate, SearchOutcome

SYSTEM_PROMPT = """\
You are a friendly, knowledgeable coffee assistant for a specialty coffee bean shop.
You help customers discover beans they will enjoy and answer coffee questions.

# Your responsibilities
1. Recommend coffee beans that fit the customer's taste.
2. Give brewing advice (grind size, ratio, water temperature, time) when asked.
3. Explain flavor, origin, processing and roast differences.

# Our catalog
Around sixty specialty coffees in four flavor families:
- Floral: elegant, tea-like, fragrant
- Fruity: bright acidity, berry and citrus notes
- Nutty: balanced and smooth, cocoa and nut notes
- Bold: dark roasted, rich and full-bodied
Prices range from $350 to $2000 per bag.

# Rules
- When product search results are provided, recommend only from them and
  include the name, price, flavor notes and why it suits the customer.
- Never invent product names or prices.
- Reply in {language}, warm and professional, usually 5-8 sentences.
- If the question is not about coffee, politely steer back to coffee.
"""

APOLOGY_ANSWER = (
    "Sorry, I'm a little overwhelmed right now. Please try again in a moment, "
    "or reach out to our customer service team!"
)

TOPIC_QUESTIONS: dict[FollowUpTopic, str] = {
    FollowUpTopic.ACIDITY: "how much acidity they enjoy (bright, balanced or low)",
    FollowUpTopic.PRICE: "their budget per bag",
    FollowUpTopic.ROAST: "their preferred roast (light, medium or dark)",
}

SEARCH_HEADERS: dict[InstructionTemplate, str] = {
    InstructionTemplate.RECOMMENDATION: (
        "Found {count} coffees matching the customer's preferences, most popular first."
    ),
    InstructionTemplate.MOST_EXPENSIVE: "These are our most expensive coffees, highest price first.",
    InstructionTemplate.CHEAPEST: "These are our most affordable coffees, lowest price first.",
    InstructionTemplate.MOST_POPULAR: "These are our best-selling coffees, most popular first.",
}

SEARCH_TASKS: dict[InstructionTemplate, str] = {
    InstructionTemplate.RECOMMENDATION: (
        "Recommend the 2-3 coffees above that suit the customer best and explain why."
    ),
    InstructionTemplate.MOST_EXPENSIVE: (
        "Present the first coffee as our flagship, explain what justifies the price, "
        "and mention one or two runners-up."
    ),
    InstructionTemplate.CHEAPEST: (
        "Present the most affordable picks and highlight the value each one offers."
    ),
    InstructionTemplate.MOST_POPULAR: (
        "Present our best sellers and explain why customers love them."
    ),
}


def build_system_prompt(language: str = "Traditional Chinese (Taiwan)") -> str:
    return SYSTEM_PROMPT.format(language=language)


def format_item(position: int, item: CatalogItem) -> str:
    lines = [f"{position}. {item.name}"]
    lines.append(f"   - Origin: {item.origin or 'unknown'}")
    lines.append(f"   - Roast: {item.roast or 'unknown'}")
    flavor = item.flavor_type or "unknown"
    if item.flavor_tags:
        flavor = f"{flavor} ({', '.join(item.flavor_tags)})"
    lines.append(f"   - Flavor: {flavor}")
    for label, value in (("Acidity", item.acidity), ("Sweetness", item.sweetness), ("Body", item.body)):
        if value is not None:
            lines.append(f"   - {label}: {value:g}/5")
    if item.price is not None:
        lines.append(f"   - Price: ${item.price:g}")
    if item.description:
        lines.append(f"   - Description: {item.description}")
    return "\n".join(lines)


def format_products(items: Sequence[CatalogItem]) -> str:
    return "\n".join(format_item(position, item) for position, item in enumerate(items, start=1))


def stage_block(decision: PlannerDecision, outcome: SearchOutcome | None = None) -> str:
    """Return the instruction block for the decided stage or search outcome."""

    if outcome is not None:
        return _search_block(outcome)
    if decision.stage is Stage.FLAVOR_SELECTED:
        flavor = decision.preferences.flavor_category
        asks = "; ".join(TOPIC_QUESTIONS[topic] for topic in decision.follow_up_topics) or "anything else they care about"
        return (
            f"[Next step]\nThe customer leans towards {flavor.value if flavor else 'a flavor'} coffee. "
            f"Acknowledge it warmly, then ask about: {asks}. "
            "Ask at most two short questions and do not recommend specific products yet."
        )
    return (
        "[Next step]\nWe do not know the customer's taste yet. Greet them briefly and ask "
        "which flavor direction they enjoy: Floral, Fruity, Nutty or Bold. "
        "Do not recommend specific products yet."
    )


def _search_block(outcome: SearchOutcome) -> str:
    template = outcome.template
    if template is InstructionTemplate.SEARCH_FAILED:
        return (
            "[Product search]\nThe product search is temporarily unavailable. Answer from "
            "general coffee knowledge, describe the flavor style that would suit the customer, "
            "and do not name specific products or prices."
        )
    if template is InstructionTemplate.NO_MATCH:
        return (
            "[Product search]\nNo coffee in the catalog matches the customer's request, even "
            "after widening the search. Say so honestly, suggest the closest alternative "
            "direction (another flavor family, roast or price range), and ask whether they "
            "would relax their budget or acidity. Do not invent product names."
        )

    parts = ["[Product search results]"]
    if outcome.relaxed:
        parts.append(
            "No exact match was found, so the search was widened. Tell the customer these "
            "are the closest alternatives."
        )
    parts.append(SEARCH_HEADERS[template].format(count=len(outcome.items)))
    parts.append(format_products(outcome.items))
    parts.append(SEARCH_TASKS[template])
    return "\n".join(parts)


def build_user_instructions(
    question: str,
    history: Sequence[ConversationTurn],
    decision: PlannerDecision,
    outcome: SearchOutcome | None = None,
) -> str:
    sections: list[str] = []
    if history:
        sections.append("Conversation so far:\n" + format_transcript(history))

    known = decision.preferences.as_dict()
    if known:
        summary = ", ".join(f"{key}={value}" for key, value in known.items())
        sections.append(f"Known customer preferences: {summary}")

    sections.append(stage_block(decision, outcome))
    sections.append(f"Customer: {question}")
    return "\n\n".join(sections)
