"""Tests for prompt construction."""

from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from social_llm.generation.constants import MAX_ORIGINAL_TEXT_CHARS, MAX_TRAITS_PER_AGENT
from social_llm.generation.prompts import build_prompt
from social_llm.models.interaction import Agent


def make_pair(opinion: float = 15) -> tuple[Agent, Agent]:
    alice = Agent(name="Alice", traits=("Kind",), opinions={"Bob": opinion})
    bob = Agent(name="Bob", traits=("Grumpy",), opinions={"Alice": -3})
    return alice, bob


def test_prompt_contains_agents_traits_and_relationship():
    alice, bob = make_pair()
    prompt = build_prompt(alice, bob, "Alice complimented Bob.")

    assert prompt.splitlines() == [
        "Initiator: Alice (Traits: Kind)",
        "Recipient: Bob (Traits: Grumpy)",
        "Their relationship: Positive (15 opinion)",
        "Original message: Alice complimented Bob.",
    ]


def test_polarity_uses_initiator_opinion():
    alice, bob = make_pair(opinion=0)
    assert "Negative (0 opinion)" in build_prompt(alice, bob, "x")

    alice, bob = make_pair(opinion=-22.5)
    assert "Negative (-22.5 opinion)" in build_prompt(alice, bob, "x")

    # Bob dislikes Alice, but only the initiator's view counts
    assert "Positive (15 opinion)" in build_prompt(*make_pair(), "x")
    assert "Negative (-3 opinion)" in build_prompt(make_pair()[1], make_pair()[0], "x")


def test_unknown_recipient_opinion_is_zero():
    stranger = Agent(name="Carol", traits=())
    alice, _ = make_pair()
    prompt = build_prompt(alice, stranger, "Alice waved.")
    assert "Negative (0 opinion)" in prompt
    assert "Recipient: Carol (Traits: )" in prompt


def test_traits_keep_order_and_are_capped():
    traits = tuple(f"Trait{i}" for i in range(20))
    alice = Agent(name="Alice", traits=traits, opinions={"Bob": 1})
    _, bob = make_pair()
    prompt = build_prompt(alice, bob, "x")

    expected = ", ".join(traits[:MAX_TRAITS_PER_AGENT])
    assert f"Initiator: Alice (Traits: {expected})" in prompt
    assert f"Trait{MAX_TRAITS_PER_AGENT}" not in prompt


def test_original_text_is_capped():
    alice, bob = make_pair()
    long_text = "blah " * 1000
    prompt = build_prompt(alice, bob, long_text)
    original = prompt.split("Original message: ", 1)[1]
    assert len(original) == MAX_ORIGINAL_TEXT_CHARS
    assert original.endswith("...")


def test_prompt_is_deterministic():
    first = build_prompt(*make_pair(), "Alice complimented Bob.")
    # Fresh but identical agents
    second = build_prompt(*make_pair(), "Alice complimented Bob.")
    assert first == second
    print("  PASS: prompt is deterministic")


def test_opinion_value_is_not_rounded():
    _, bob = make_pair()
    big = Agent(name="Alice", traits=("Kind",), opinions={"Bob": 1234567.0})
    assert "Positive (1234567 opinion)" in build_prompt(big, bob, "x")

    precise = Agent(name="Alice", traits=("Kind",), opinions={"Bob": 12.3456789012})
    assert "Positive (12.3456789012 opinion)" in build_prompt(precise, bob, "x")
