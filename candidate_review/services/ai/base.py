"""
Base AI Provider Interface
Abstract class for all AI providers (OpenAI, OpenRouter, Gemini)
"""
import json
import math
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

from candidate_review.core.errors import InferenceError

SYSTEM_PROMPT = "You are a structured reviewer for job applications."

_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


@dataclass(frozen=True)
class AISuggestion:
    """Validated model output. Either field may be None when the model gave nothing usable."""

    rating: Optional[int]
    summary: Optional[str]
    version: Optional[str] = None


def normalize_rating(raw: Any) -> Optional[int]:
    """
    Coerce a raw rating into [1, 5].

    Non-numeric and non-finite values become None; finite values are rounded
    half-up and clamped.
    """
    if raw is None or isinstance(raw, bool):
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return max(1, min(5, math.floor(value + 0.5)))


def normalize_summary(raw: Any) -> Optional[str]:
    """Trim the summary; empty or non-string values become None."""
    if not isinstance(raw, str):
        return None
    return raw.strip() or None


def parse_suggestion(content: Optional[str], version: Optional[str] = None) -> AISuggestion:
    """
    Parse the model's JSON reply.

    Raises:
        InferenceError: if the content is missing or is not a JSON object
    """
    if not content or not content.strip():
        raise InferenceError("Inference response contained no content")

    # Some models wrap the object in markdown fences
    match = _JSON_OBJECT.search(content)
    try:
        parsed = json.loads(match.group() if match else content)
    except json.JSONDecodeError as e:
        raise InferenceError(f"Inference response was not valid JSON: {e}") from e

    if not isinstance(parsed, dict):
        raise InferenceError("Inference response was not a JSON object")

    return AISuggestion(
        rating=normalize_rating(parsed.get("rating")),
        summary=normalize_summary(parsed.get("summary")),
        version=version,
    )


class AIProvider(ABC):
    """Base class for all AI providers"""

    @abstractmethod
    async def complete_json(self, prompt: str) -> Optional[str]:
        """
        Send the prompt and return the raw JSON text of the reply.

        Implementations raise InferenceError for transport failures and
        non-2xx responses. No retries are attempted.
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name"""
        pass

    @property
    @abstractmethod
    def model(self) -> str:
        """Model identifier recorded as the review's AI version"""
        pass

    async def suggest_review(self, prompt: str) -> AISuggestion:
        """Run the prompt and return a validated suggestion."""
        content = await self.complete_json(prompt)
        return parse_suggestion(content, version=self.model)
