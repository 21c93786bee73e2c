"""OpenAI chat-completion client used for vibe translation and explanations."""
import json
import logging
import re
import time
from typing import Optional

from openai import AsyncOpenAI

from cityvibes.metrics import (
    OPENAI_API_CALLS_TOTAL,
    OPENAI_API_CALL_DURATION_SECONDS,
)

logger = logging.getLogger(__name__)


class OpenAICompletionClient:
    """Async text-completion client backed by the OpenAI chat API."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        timeout: float = 10.0,
    ):
        self.model = model
        self.client = AsyncOpenAI(api_key=api_key, timeout=timeout, max_retries=0)

    async def close(self):
        """Close the OpenAI client."""
        await self.client.close()

    async def complete(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        model: Optional[str] = None,
        max_tokens: int = 150,
        temperature: float = 0.3,
        json_mode: bool = False,
        endpoint: str = "completion",
    ) -> str:
        """Send a single-turn chat completion and return the reply text.

        Args:
            prompt: User message
            system_prompt: Optional system message
            model: Model override (defaults to the client model)
            max_tokens: Completion token limit
            temperature: Sampling temperature
            json_mode: Ask the API for a JSON object reply
            endpoint: Metrics label for the caller (e.g. "translate", "explain")

        Returns:
            Reply text, empty string if the model returned no content

        Raises:
            openai.OpenAIError: On API, timeout or connection failure
        """
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        kwargs = {}
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        start_time = time.perf_counter()
        try:
            response = await self.client.chat.completions.create(
                model=model or self.model,
                messages=messages,
                max_tokens=max_tokens,
                temperature=temperature,
                **kwargs,
            )
        except Exception as e:
            duration = time.perf_counter() - start_time
            OPENAI_API_CALL_DURATION_SECONDS.labels(endpoint=endpoint).observe(duration)
            OPENAI_API_CALLS_TOTAL.labels(endpoint=endpoint, status="error").inc()
            logger.error(f"[OpenAICompletionClient] {endpoint} failed: {e}")
            raise

        duration = time.perf_counter() - start_time
        OPENAI_API_CALL_DURATION_SECONDS.labels(endpoint=endpoint).observe(duration)
        OPENAI_API_CALLS_TOTAL.labels(endpoint=endpoint, status="success").inc()

        tokens = response.usage.total_tokens if response.usage else "?"
        logger.debug(f"[OpenAICompletionClient] {endpoint} complete in {duration:.2f}s, tokens: {tokens}")

        return response.choices[0].message.content or ""


def parse_json_response(raw_text: str) -> dict:
    """Parse a JSON object reply, stripping markdown fences if present.

    Args:
        raw_text: Raw text from the model

    Returns:
        Parsed dict, or empty dict when the text is not a JSON object.
    """
    cleaned = raw_text.strip()
    cleaned = re.sub(r"^```(?:json)?\s*", "", cleaned)
    cleaned = re.sub(r"\s*```$", "", cleaned)

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.warning(f"[OpenAICompletionClient] Failed to parse JSON response: {e}")
        return {}

    if not isinstance(parsed, dict):
        logger.warning(f"[OpenAICompletionClient] Expected JSON object, got {type(parsed).__name__}")
        return {}
    return parsed
