"""
OpenAI completion client for slide extraction.
Holds the fixed prompts and performs the single outbound chat completion call.
"""

import logging
from typing import Any, Dict, List

# --- OPENAI IMPORTS ---
from openai import OpenAI, APIStatusError

from backend.slide_service.config import SlideConfig
from backend.slide_service.normalize import TITLE_MAX_LENGTH

logger = logging.getLogger(__name__)

# --- REQUEST SETTINGS ---
TEMPERATURE = 0.2
MAX_TOKENS = 600

# --- SYSTEM PROMPTS ---
SYSTEM_PROMPT = f"""You convert a hand-drawn slide/photo into a clean slide outline.
Return STRICT JSON ONLY in this schema:
{{
  "title": "string (<={TITLE_MAX_LENGTH} chars)",
  "bullets": ["3-6 concise bullet points"],
  "notes": "short speaker notes (optional)"
}}
Rules:
- Preserve the author's intent.
- If handwriting is unclear, keep it short and add "(?)".
- No extra commentary beyond JSON."""

USER_PROMPT = "Extract a presentation-ready slide from this sketch. Keep output compact and readable."


class CompletionServiceError(Exception):
    """
    Raised when the completion API answers with a non-success status.

    Attributes:
        status_code (int): Status returned by the upstream API.
        detail (str): Raw upstream response body.
    """

    def __init__(self, status_code: int, detail: str):
        super().__init__(f"Completion API returned {status_code}")
        self.status_code = status_code
        self.detail = detail


def build_messages(image_data_url: str) -> List[Dict[str, Any]]:
    """
    Build the chat messages for one sketch. The data URL is sent as-is.
    """
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {
            "role": "user",
            "content": [
                {"type": "text", "text": USER_PROMPT},
                {"type": "image_url", "image_url": {"url": image_data_url}},
            ],
        },
    ]


def request_slide_completion(config: SlideConfig, image_data_url: str) -> str:
    """
    Ask the model for a slide outline of the given image.

    Args:
        config (SlideConfig): Credentials and model selection.
        image_data_url (str): data:image/...;base64,... string.

    Returns:
        str: The message content (expected to be JSON), or "{}" if there is none.

    Raises:
        CompletionServiceError: The API answered with a non-success status.
    """
    # One attempt only; failures go straight back to the caller
    with OpenAI(api_key=config.api_key, base_url=config.base_url, max_retries=0) as client:
        try:
            response = client.chat.completions.create(
                model=config.model,
                response_format={"type": "json_object"},
                temperature=TEMPERATURE,
                max_tokens=MAX_TOKENS,
                messages=build_messages(image_data_url),
            )
        except APIStatusError as e:
            logger.warning(f"Completion API returned status {e.status_code}")
            raise CompletionServiceError(e.status_code, e.response.text) from e

    if not response.choices:
        return "{}"

    return response.choices[0].message.content or "{}"
