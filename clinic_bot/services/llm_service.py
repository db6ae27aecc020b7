"""
LLM service providing the single entry point for model calls.
Every call site declares what happens when the model fails: degrade to a
fallback value or propagate the error to the caller.
"""

import time
import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Any
from tenacity import (
    AsyncRetrying,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import BaseMessage
from langchain_openai import ChatOpenAI
from langchain_google_genai import ChatGoogleGenerativeAI

from clinic_bot.utils.logger import get_logger
from clinic_bot.utils.metrics import record_llm_call

logger = get_logger(__name__)


class LLMError(Exception):
    """Base exception for LLM-related errors."""


class LLMTimeoutError(LLMError):
    """Raised when LLM call exceeds timeout threshold."""


class FailurePolicy(str, Enum):
    """What a call site does when the model call fails."""

    DEGRADE = "degrade"
    PROPAGATE = "propagate"


@dataclass(frozen=True)
class ExternalCall:
    """
    Declaration of one model call site.

    Attributes:
        name: Call site name used in logs
        policy: Failure policy applied by LLMService.generate
        fallback: Value returned instead of raising under DEGRADE
    """

    name: str
    policy: FailurePolicy
    fallback: str | None = None

    def __post_init__(self):
        if self.policy is FailurePolicy.DEGRADE and self.fallback is None:
            raise ValueError(f"Call '{self.name}' degrades but has no fallback")


def create_llm(
    model_name: str, api_key: str | None, temperature: float = 0
) -> BaseChatModel:
    """
    Factory function to create chat model instances.

    Args:
        model_name: Model identifier (e.g., "gemini-2.0-flash", "gpt-4o")
        api_key: API key for the provider
        temperature: Sampling temperature

    Returns:
        Configured chat model instance

    Raises:
        ValueError: If model provider is not supported
    """
    if "gemini" in model_name:
        return ChatGoogleGenerativeAI(
            google_api_key=api_key, model=model_name, temperature=temperature
        )
    elif "gpt" in model_name:
        return ChatOpenAI(api_key=api_key, model=model_name, temperature=temperature)
    else:
        raise ValueError(
            f"Unsupported model: {model_name}. "
            "Model name must contain 'gpt' or 'gemini'"
        )


def message_text(response: BaseMessage) -> str:
    """
    Extracts plain text from a model reply.
    Some providers return content as a list of parts instead of a string.
    """
    content: Any = response.content
    if isinstance(content, str):
        return content
    parts = []
    for part in content:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)


class LLMService:
    """
    Async wrapper around a chat model.
    No retries and no timeout unless configured.
    """

    def __init__(
        self,
        model: BaseChatModel,
        max_attempts: int = 1,
        timeout: int | None = None,
    ):
        """
        Initialize LLM service.

        Args:
            model: Configured chat model instance
            max_attempts: Attempts per call (1 means no retry)
            timeout: Per-attempt timeout in seconds, None to rely on the client
        """
        self.model = model
        self.max_attempts = max_attempts
        self.timeout = timeout

    async def invoke_with_retry(self, prompt: str) -> BaseMessage:
        """
        Invokes the model, retrying up to ``max_attempts``.

        Args:
            prompt: Prompt string

        Returns:
            LLM response as BaseMessage

        Raises:
            LLMTimeoutError: If the last attempt exceeded the timeout
            LLMError: If the last attempt failed
        """
        start_time = time.time()

        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=1, min=2, max=10),
            retry=retry_if_exception_type(LLMError),
            reraise=True,
        ):
            with attempt:
                attempt_number = attempt.retry_state.attempt_number
                try:
                    logger.debug(
                        "llm_call_started",
                        attempt=attempt_number,
                        timeout=self.timeout,
                        model=getattr(self.model, "model", None)
                        or getattr(self.model, "model_name", "unknown"),
                    )
                    if self.timeout is None:
                        response = await self.model.ainvoke(prompt)
                    else:
                        response = await asyncio.wait_for(
                            self.model.ainvoke(prompt), timeout=self.timeout
                        )

                    self._log_usage(response, time.time() - start_time)
                    return response

                except asyncio.TimeoutError as e:
                    record_llm_call(failed=True)
                    logger.warning(
                        "llm_call_timeout",
                        elapsed=time.time() - start_time,
                        timeout=self.timeout,
                        attempt=attempt_number,
                    )
                    raise LLMTimeoutError(
                        f"LLM call exceeded timeout of {self.timeout}s"
                    ) from e
                except Exception as e:
                    record_llm_call(failed=True)
                    logger.warning(
                        "llm_call_failed",
                        elapsed=time.time() - start_time,
                        attempt=attempt_number,
                        error=str(e),
                    )
                    raise LLMError(f"LLM invocation failed: {e}") from e

    async def generate(self, prompt: str, call: ExternalCall) -> str:
        """
        Runs a prompt and returns the reply text under the call's failure policy.

        Args:
            prompt: Prompt string
            call: Call-site declaration

        Returns:
            Reply text, or ``call.fallback`` if the call failed under DEGRADE

        Raises:
            LLMError: If the call failed under PROPAGATE
        """
        try:
            response = await self.invoke_with_retry(prompt)
            return message_text(response)
        except LLMError as e:
            if call.policy is FailurePolicy.DEGRADE:
                logger.warning(
                    "llm_call_degraded",
                    call=call.name,
                    fallback=call.fallback,
                    error=str(e),
                )
                return call.fallback
            logger.error("llm_call_propagated", call=call.name, error=str(e))
            raise

    def _log_usage(self, response: BaseMessage, elapsed: float) -> None:
        usage = getattr(response, "usage_metadata", None)
        if usage:
            input_tokens = usage.get("input_tokens", 0)
            output_tokens = usage.get("output_tokens", 0)
            record_llm_call(input_tokens, output_tokens)
            logger.info(
                "llm_usage",
                input_tokens=input_tokens,
                output_tokens=output_tokens,
                total_tokens=usage.get("total_tokens", 0),
                elapsed=elapsed,
            )
        else:
            record_llm_call()
            logger.info("llm_call_completed", elapsed=elapsed)
