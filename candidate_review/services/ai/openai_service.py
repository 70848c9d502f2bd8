"""
OpenAI Service Implementation
Uses chat completions in JSON mode for candidate review suggestions
"""
import logging
from typing import Optional

import httpx
from openai import APIError, AsyncOpenAI

from candidate_review.config import settings
from candidate_review.core.errors import InferenceError
from .base import SYSTEM_PROMPT, AIProvider

logger = logging.getLogger(__name__)


class OpenAIService(AIProvider):
    """OpenAI API implementation"""

    def __init__(self, http_client: Optional[httpx.AsyncClient] = None):
        # max_retries=0: failures surface to the caller, which decides what to do
        self.client = AsyncOpenAI(
            api_key=settings.OPENAI_API_KEY,
            timeout=settings.AI_REQUEST_TIMEOUT,
            max_retries=0,
            http_client=http_client,
        )
        self.chat_model = settings.OPENAI_MODEL or "gpt-4o-mini"

    async def complete_json(self, prompt: str) -> Optional[str]:
        """Request a JSON object reply from the chat model."""
        try:
            response = await self.client.chat.completions.create(
                model=self.chat_model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                response_format={"type": "json_object"},
                temperature=settings.AI_TEMPERATURE,
                max_tokens=settings.AI_MAX_TOKENS,
            )
        except APIError as e:
            logger.error(f"OpenAI review request failed: {e}")
            raise InferenceError(f"OpenAI request failed: {e}") from e

        if not response.choices:
            return None
        return response.choices[0].message.content

    @property
    def name(self) -> str:
        return "openai"

    @property
    def model(self) -> str:
        return self.chat_model
