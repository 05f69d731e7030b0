from __future__ import annotations

import pytest
from pydantic import ValidationError

from legal_gateway.config import PromptConfig
from legal_gateway.models import PromptVariant
from legal_gateway.prompts import INSUFFICIENT_CONTEXT_REPLY, UNSURE_DISCLAIMER
from legal_gateway.services import PromptBuilder


def test_short_or_empty_context_selects_general_knowledge() -> None:
    builder = PromptBuilder(PromptConfig(CONTEXT_MIN_LENGTH=50))

    assert builder.select_variant("") is PromptVariant.GENERAL_KNOWLEDGE
    assert builder.select_variant("x" * 50) is PromptVariant.GENERAL_KNOWLEDGE
    assert builder.select_variant("   " + "x" * 40 + "   ") is PromptVariant.GENERAL_KNOWLEDGE


def test_context_above_threshold_selects_grounded() -> None:
    builder = PromptBuilder(PromptConfig(CONTEXT_MIN_LENGTH=50))

    assert builder.select_variant("x" * 51) is PromptVariant.GROUNDED


def test_grounded_prompt_embeds_context_and_question_verbatim() -> None:
    builder = PromptBuilder(PromptConfig())
    context = "Section 420 IPC deals with cheating and dishonestly inducing delivery of property."

    prompt = builder.build_prompt(context, "What is Section 420?")

    assert context in prompt
    assert "What is Section 420?" in prompt
    assert "ONLY from the legal context" in prompt
    assert INSUFFICIENT_CONTEXT_REPLY in prompt
    assert "India" in prompt


def test_general_prompt_uses_general_knowledge_and_disclaimer() -> None:
    builder = PromptBuilder(PromptConfig())

    prompt = builder.build_prompt("", "What is bail?")

    assert "general knowledge" in prompt
    assert "ONLY from the legal context" not in prompt
    assert UNSURE_DISCLAIMER in prompt
    assert "What is bail?" in prompt
    assert "Context:" not in prompt


def test_templates_forbid_other_jurisdictions() -> None:
    builder = PromptBuilder(PromptConfig(PROMPT_JURISDICTION="Kenya"))

    grounded = builder.build_prompt("y" * 200, "q")
    general = builder.build_prompt("", "q")

    for prompt in (grounded, general):
        assert "law of Kenya" in prompt
        assert "any other country or jurisdiction" in prompt


def test_question_with_braces_is_not_reinterpreted() -> None:
    builder = PromptBuilder(PromptConfig())

    prompt = builder.build_prompt("", "Is {context} a placeholder?")

    assert "Is {context} a placeholder?" in prompt


def test_custom_templates_are_configurable() -> None:
    config = PromptConfig(
        PROMPT_STRICT_TEMPLATE="CTX[{context}] Q[{question}]",
        PROMPT_FALLBACK_TEMPLATE="NOCTX Q[{question}] in {jurisdiction}",
        CONTEXT_MIN_LENGTH=3,
    )
    builder = PromptBuilder(config)

    assert builder.build_prompt("abcd", "why") == "CTX[abcd] Q[why]"
    assert builder.build_prompt("ab", "why") == "NOCTX Q[why] in India"


def test_strict_template_requires_context_placeholder() -> None:
    with pytest.raises(ValidationError):
        PromptConfig(PROMPT_STRICT_TEMPLATE="Question: {question}")
