"""
OpenRouter Service Implementation
Uses various free/cheap models via OpenRouter API
"""
import logging
from typing import Optional

import httpx

from candidate_review.config import settings
from candidate_review.core.errors import InferenceError
from .base import SYSTEM_PROMPT, AIProvider

logger = logging.getLogger(__name__)


class OpenRouterService(AIProvider):
    """OpenRouter API implementation (access to multiple models)"""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = settings.OPENROUTER_API_KEY
        self.base_url = "https://openrouter.ai/api/v1"
        self.chat_model = settings.OPENROUTER_MODEL
        self.timeout = settings.AI_REQUEST_TIMEOUT
        self.transport = transport

    async def complete_json(self, prompt: str) -> Optional[str]:
        """Request a JSON reply through the OpenAI-compatible endpoint."""
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    f"{self.base_url}/chat/completions",
                    headers={
                        "Authorization": f"Bearer {self.api_key}",
                        "HTTP-Referer": settings.APP_URL,
                        "X-Title": settings.APP_NAME,
                    },
                    json={
                        "model": self.chat_model,
                        "messages": [
                            {"role": "system", "content": SYSTEM_PROMPT},
                            {"role": "user", "content": prompt},
                        ],
                        "response_format": {"type": "json_object"},
                        "temperature": settings.AI_TEMPERATURE,
                        "max_tokens": settings.AI_MAX_TOKENS,
                    },
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"OpenRouter HTTP {e.response.status_code}: {e.response.text[:500]}")
            raise InferenceError(f"OpenRouter responded with status {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error(f"OpenRouter request failed: {e}")
            raise InferenceError(f"OpenRouter request failed: {e}") from e
        except ValueError as e:
            logger.error(f"OpenRouter returned a non-JSON body: {e}")
            raise InferenceError("OpenRouter returned a non-JSON body") from e

        try:
            return data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            logger.warning(f"OpenRouter response missing content: {data}")
            return None

    @property
    def name(self) -> str:
        return "openrouter"

    @property
    def model(self) -> str:
        return self.chat_model
