"""
Google Gemini Service Implementation
Uses Gemini in JSON response mode for candidate review suggestions
"""
import logging
from typing import Optional

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from candidate_review.config import settings
from candidate_review.core.errors import InferenceError
from .base import SYSTEM_PROMPT, AIProvider

logger = logging.getLogger(__name__)


class GeminiService(AIProvider):
    """Google Gemini API implementation"""

    def __init__(self):
        genai.configure(api_key=settings.GEMINI_API_KEY)
        self.chat_model = settings.GEMINI_MODEL
        self.client = genai.GenerativeModel(self.chat_model, system_instruction=SYSTEM_PROMPT)

    async def complete_json(self, prompt: str) -> Optional[str]:
        """Request a JSON reply from Gemini."""
        try:
            response = await self.client.generate_content_async(
                prompt,
                generation_config=genai.types.GenerationConfig(
                    temperature=settings.AI_TEMPERATURE,
                    max_output_tokens=settings.AI_MAX_TOKENS,
                    response_mime_type="application/json",
                ),
            )
        except google_exceptions.GoogleAPIError as e:
            logger.error(f"Gemini review request failed: {e}")
            raise InferenceError(f"Gemini request failed: {e}") from e

        try:
            return response.text
        except ValueError:
            # Raised when the candidate was blocked or empty
            logger.warning("Gemini response had no text part")
            return None

    @property
    def name(self) -> str:
        return "gemini"

    @property
    def model(self) -> str:
        return self.chat_model
