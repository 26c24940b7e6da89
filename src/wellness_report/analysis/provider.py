"""Async analysis provider routed through LiteLLM.

Any OpenAI-compatible or LiteLLM-prefixed model works (``gpt-4o-mini``,
``anthropic/...``, ``ollama/...``).  Without an API key the provider answers
with a canned demo analysis instead of failing, so a fresh checkout still
produces complete reports.
"""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Any, Protocol, runtime_checkable

from wellness_report.analysis.prompts import DEMO_ANALYSIS, FALLBACK_ANALYSIS, SYSTEM_PROMPT, build_user_prompt
from wellness_report.core.config import LLMConfig
from wellness_report.exceptions import NonRetryableAnalysisError, UpstreamAnalysisError
from wellness_report.models import ReportRequest

log = logging.getLogger(__name__)


@runtime_checkable
class IAnalysisProvider(Protocol):
    """Anything that turns a system/user prompt pair into analysis text."""

    async def get_analysis(self, system_prompt: str, user_prompt: str) -> str:
        """Return analysis text. Raises ``UpstreamAnalysisError`` on failure."""
        ...


class AnalysisProvider:
    """LiteLLM-backed provider with bounded, jittered retries."""

    def __init__(self, config: LLMConfig | None = None) -> None:
        self._config = config or LLMConfig()

    @property
    def model(self) -> str:
        return self._config.model

    @property
    def configured(self) -> bool:
        return bool(self._config.api_key)

    @staticmethod
    def _is_retryable(exc: Exception) -> bool:
        """Auth, bad-request and not-found errors are final; everything else may be retried."""
        from litellm.exceptions import AuthenticationError, BadRequestError, NotFoundError

        return not isinstance(exc, (AuthenticationError, BadRequestError, NotFoundError))

    async def get_analysis(self, system_prompt: str, user_prompt: str) -> str:
        """Single chat completion, returns stripped content.

        Returns ``DEMO_ANALYSIS`` without any network call when no API key
        is configured.
        """
        if not self.configured:
            log.info("No LLM API key configured, returning demo analysis")
            return DEMO_ANALYSIS

        from litellm import acompletion

        kwargs: dict[str, Any] = {
            "model": self._config.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "max_tokens": self._config.max_tokens,
            "temperature": self._config.temperature,
            "timeout": self._config.timeout,
            "api_key": self._config.api_key,
        }
        if self._config.base_url:
            kwargs["api_base"] = self._config.base_url

        attempts = self._config.max_attempts
        last_error: Exception | None = None
        for attempt in range(attempts):
            try:
                response = await acompletion(**kwargs)
                choice = response.choices[0]
                content = (choice.message.content or "").strip()
                if not content:
                    raise UpstreamAnalysisError("LLM returned an empty analysis")
                return content

            except UpstreamAnalysisError:
                raise
            except Exception as e:
                last_error = e
                if not self._is_retryable(e):
                    raise NonRetryableAnalysisError(f"Non-retryable LLM error: {e}") from e

                base_wait = min(2 ** attempt, self._config.retry_max_delay)
                wait = base_wait + random.uniform(0, base_wait * self._config.retry_jitter_factor)
                log.warning(
                    "LLM attempt %d/%d failed: %s (wait=%.1fs)",
                    attempt + 1, attempts, e, wait,
                )
                if attempt < attempts - 1:
                    await asyncio.sleep(wait)

        raise UpstreamAnalysisError(
            f"LLM API failed after {attempts} attempt(s): {last_error}"
        ) from last_error


async def analyze_with_fallback(provider: IAnalysisProvider, request: ReportRequest) -> str:
    """Ask *provider* for an analysis of *request*; substitute ``FALLBACK_ANALYSIS`` on failure."""
    user_prompt = build_user_prompt(request.submitter_name, request.submitter_email, request.answers)
    try:
        return await provider.get_analysis(SYSTEM_PROMPT, user_prompt)
    except UpstreamAnalysisError as exc:
        log.error("Analysis provider failed, using fallback text: %s", exc)
        return FALLBACK_ANALYSIS
