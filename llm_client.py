"""
LLM CLIENT v1.0
===============
Language model handle used by the article pipeline.

Two engines:
    - "openai": chat completions (default)
    - "claude": Anthropic messages API

The SDK client is created lazily on first use and then reused for the
lifetime of the handle, so one handle per process is enough.
"""

import logging
import re
from typing import Optional

import anthropic
import openai

from article_config import (
    OPENAI_API_KEY,
    OPENAI_MODEL,
    ANTHROPIC_API_KEY,
    ANTHROPIC_MODEL,
    LLM_ENGINE,
    LLM_TEMPERATURE,
    LLM_MAX_TOKENS_CAP,
    LLM_REQUEST_TIMEOUT,
)
from llm_retry import llm_call_with_retry

logger = logging.getLogger(__name__)

ENGINES = ("openai", "claude")

_FENCE_RE = re.compile(r"^\s*```[a-zA-Z]*\s*\n?|\n?\s*```\s*$")


class LLMGenerationError(Exception):
    """Raised when the language model call fails or returns nothing."""


def strip_code_fences(text: str) -> str:
    """Remove a Markdown code fence wrapped around the whole answer."""
    return _FENCE_RE.sub("", text or "").strip()


def max_tokens_for(word_count: int, cap: int = LLM_MAX_TOKENS_CAP) -> int:
    return max(1, min(cap, word_count * 2))


class LanguageModel:
    """complete(system_prompt, user_prompt) over the configured engine."""

    def __init__(
        self,
        engine: str = LLM_ENGINE,
        openai_api_key: str = OPENAI_API_KEY,
        anthropic_api_key: str = ANTHROPIC_API_KEY,
        openai_model: str = OPENAI_MODEL,
        anthropic_model: str = ANTHROPIC_MODEL,
        temperature: float = LLM_TEMPERATURE,
        retry_kwargs: Optional[dict] = None,
    ):
        if engine not in ENGINES:
            raise ValueError(f"Unknown LLM engine '{engine}', expected one of {ENGINES}")
        self.engine = engine
        self.openai_api_key = openai_api_key
        self.anthropic_api_key = anthropic_api_key
        self.openai_model = openai_model
        self.anthropic_model = anthropic_model
        self.temperature = temperature
        self.retry_kwargs = retry_kwargs or {}
        self._client = None

    @property
    def model(self) -> str:
        return self.openai_model if self.engine == "openai" else self.anthropic_model

    @property
    def available(self) -> bool:
        key = self.openai_api_key if self.engine == "openai" else self.anthropic_api_key
        return bool(key)

    def _require_key(self) -> None:
        if not self.available:
            key_name = "OPENAI_API_KEY" if self.engine == "openai" else "ANTHROPIC_API_KEY"
            raise LLMGenerationError(f"{key_name} not set")

    @property
    def client(self):
        """Lazy-initialized SDK client."""
        if self._client is None:
            self._require_key()
            if self.engine == "openai":
                self._client = openai.OpenAI(
                    api_key=self.openai_api_key, max_retries=0, timeout=LLM_REQUEST_TIMEOUT
                )
            else:
                self._client = anthropic.Anthropic(
                    api_key=self.anthropic_api_key, max_retries=0, timeout=LLM_REQUEST_TIMEOUT
                )
        return self._client

    def _complete_openai(self, system_prompt: str, user_prompt: str, max_tokens: int) -> str:
        response = self.client.chat.completions.create(
            model=self.openai_model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=self.temperature,
            max_tokens=max_tokens,
        )
        return response.choices[0].message.content or ""

    def _complete_claude(self, system_prompt: str, user_prompt: str, max_tokens: int) -> str:
        response = self.client.messages.create(
            model=self.anthropic_model,
            max_tokens=max_tokens,
            temperature=self.temperature,
            system=system_prompt,
            messages=[{"role": "user", "content": user_prompt}],
        )
        return "".join(block.text for block in response.content if getattr(block, "text", None))

    def complete(self, system_prompt: str, user_prompt: str, max_tokens: int = LLM_MAX_TOKENS_CAP) -> str:
        """Generated text with any wrapping code fence removed."""
        call = self._complete_openai if self.engine == "openai" else self._complete_claude
        self._require_key()
        try:
            text = llm_call_with_retry(call, system_prompt, user_prompt, max_tokens, **self.retry_kwargs)
        except (openai.OpenAIError, anthropic.AnthropicError) as e:
            raise LLMGenerationError(f"{self.engine} completion failed: {e}") from e

        text = strip_code_fences(text)
        if not text:
            raise LLMGenerationError(f"{self.engine} returned an empty completion")
        logger.info(f"[LLM] {self.engine}/{self.model} returned {len(text)} chars")
        return text
