"""Summarization providers backed by litellm."""

import os
from dataclasses import dataclass
from typing import Any, Protocol

import litellm
from loguru import logger

from .exceptions import ConfigurationError, SummarizationError
from .retry import with_summarizer_retry
from .types import AiSummary

SUMMARY_PROMPT = (
    "Summarize the following HTML page in plain text, in at most {max_length} words. "
    "Reply with the summary only.\n\n{text}"
)


def setup_litellm() -> None:
    """Setup litellm configuration."""
    litellm.set_verbose = False
    litellm.drop_params = True
    litellm.suppress_debug_info = True

    os.environ["LITELLM_LOG"] = "INFO"


@dataclass
class SummarizerConfig:
    """Configuration for the summarization provider."""

    model: str
    api_key: str | None = None
    timeout: int = 30
    max_length: int = 50
    temperature: float = 0.1


class Summarizer(Protocol):
    """Protocol for summarization providers."""

    async def summarize(self, text: str) -> AiSummary: ...
    async def health_check(self) -> bool: ...


class LiteLLMSummarizer:
    """Summarizer calling a managed inference endpoint through litellm."""

    def __init__(self, config: SummarizerConfig) -> None:
        if not config.model:
            raise ConfigurationError("Summarization model is required")

        self.config = config
        setup_litellm()

    async def summarize(self, text: str) -> AiSummary:
        """Summarize text into a short abstract."""
        return await self._summarize_with_retry(text)

    @with_summarizer_retry("LiteLLMSummarizer", max_attempts=3)
    async def _summarize_with_retry(self, text: str) -> AiSummary:
        prompt = SUMMARY_PROMPT.format(max_length=self.config.max_length, text=text)
        kwargs: dict[str, Any] = {}
        if self.config.api_key:
            kwargs["api_key"] = self.config.api_key

        response = await litellm.acompletion(
            model=self.config.model,
            messages=[{"role": "user", "content": prompt}],
            timeout=self.config.timeout,
            temperature=self.config.temperature,
            max_tokens=self.config.max_length,
            **kwargs,
        )

        summary = response.choices[0].message.content
        if not summary:
            raise SummarizationError(f"{self.config.model} returned an empty summary")

        logger.debug(f"Summarized {len(text)} chars with {response.model}")
        return {"summary": summary.strip()}

    async def health_check(self) -> bool:
        """Check if provider is configured."""
        return bool(self.config.model)


def create_summarizer() -> Summarizer:
    """Factory function to create the summarization provider from settings."""
    from .config import settings

    if not settings.llm_model:
        raise ConfigurationError("No summarization model configured. Set PRESSKIT_LLM_MODEL")

    logger.info(f"Using summarization model {settings.llm_model}")
    return LiteLLMSummarizer(
        SummarizerConfig(
            model=settings.llm_model,
            api_key=settings.llm_api_key,
            timeout=settings.llm_timeout,
            max_length=settings.summary_max_length,
        )
    )
