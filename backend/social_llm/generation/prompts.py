from __future__ import annotations

from social_llm.generation.constants import (
    MAX_ORIGINAL_TEXT_CHARS,
    MAX_TRAITS_PER_AGENT,
    TRUNCATION_SUFFIX,
)
from social_llm.models.interaction import Agent

PROMPT_TEMPLATE = (
    "Initiator: {initiator_name} (Traits: {initiator_traits})\n"
    "Recipient: {recipient_name} (Traits: {recipient_traits})\n"
    "Their relationship: {polarity} ({opinion} opinion)\n"
    "Original message: {original}"
)


def _format_traits(agent: Agent) -> str:
    return ", ".join(str(t) for t in agent.traits[:MAX_TRAITS_PER_AGENT])


def _format_opinion(value: float) -> str:
    # 15.0 -> "15", 1234567.0 -> "1234567", 7.123456789 -> "7.123456789"
    if value.is_integer():
        return str(int(value))
    return repr(value)


def _truncate(text: str, limit: int = MAX_ORIGINAL_TEXT_CHARS) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - len(TRUNCATION_SUFFIX)] + TRUNCATION_SUFFIX


def build_prompt(initiator: Agent, recipient: Agent, original_text: str) -> str:
    """Describe both agents, their relationship and what happened.

    Pure and deterministic. Trait lists and the original text are capped so
    one verbose event cannot blow up the request size.
    """
    opinion = initiator.opinion_of(recipient)
    return PROMPT_TEMPLATE.format(
        initiator_name=initiator.name,
        initiator_traits=_format_traits(initiator),
        recipient_name=recipient.name,
        recipient_traits=_format_traits(recipient),
        polarity="Positive" if opinion > 0 else "Negative",
        opinion=_format_opinion(opinion),
        original=_truncate(original_text),
    )
