"""Build the engineered prompt sent to the model for a chat turn."""

from __future__ import annotations

from langchain_core.prompts import PromptTemplate
from loguru import logger

from ..config.prompt_config import PromptConfig, get_prompt_config
from ..models.enums import PromptVariant


class PromptBuilder:
    """Choose between the grounded and general-knowledge templates.

    Context whose stripped length exceeds ``context_threshold`` is treated
    as substantial and embedded verbatim in the grounded template.  Empty
    or short context always falls back to the general-knowledge template;
    the model is still called in that case.
    """

    def __init__(self, config: PromptConfig | None = None) -> None:
        self.config = config or get_prompt_config()
        self._templates = {
            PromptVariant.GROUNDED: PromptTemplate.from_template(self.config.grounded_template),
            PromptVariant.GENERAL_KNOWLEDGE: PromptTemplate.from_template(self.config.general_template),
        }

    def select_variant(self, context: str) -> PromptVariant:
        if len(context.strip()) > self.config.context_threshold:
            return PromptVariant.GROUNDED
        return PromptVariant.GENERAL_KNOWLEDGE

    def build_prompt(self, context: str, question: str) -> str:
        variant = self.select_variant(context)
        template = self._templates[variant]
        values = {
            "context": context,
            "question": question,
            "jurisdiction": self.config.jurisdiction,
        }
        prompt = template.format(
            **{name: value for name, value in values.items() if name in template.input_variables}
        )
        logger.debug("Built {} prompt ({} chars)", variant.value, len(prompt))
        return prompt
