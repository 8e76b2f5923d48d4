"""
LLM API Client

The hosted model is reached through an OpenAI-compatible API, so we use the
openai library against the configured base URL (Gemini by default).

- One model per flow (FLOW_MODELS), falling back to LLM_MODEL
- Media (images, video) travel as data URIs inside image_url content parts
- Low temperature for consistent structured output
"""
import base64
import json
from typing import List, Union, Optional

from openai import OpenAI, OpenAIError

from hr360.core.config import get_settings
from hr360.core.logging_config import get_logger
from hr360.utils.data_uri import to_data_uri

settings = get_settings()
logger = get_logger("hr360.llm")

UserContent = Union[str, List[dict]]


def text_part(text: str) -> dict:
    return {"type": "text", "text": text}


def media_part(data_uri: str) -> dict:
    return {"type": "image_url", "image_url": {"url": data_uri}}


class LLMClient:
    """
    Thin wrapper around the OpenAI SDK used by every AI flow.
    """

    def __init__(self):
        self.client = OpenAI(
            api_key=settings.llm_api_key or "not-configured",
            base_url=settings.llm_base_url
        )
        self.model = settings.llm_model

    def call(
        self,
        system_prompt: str,
        user_content: UserContent,
        model: Optional[str] = None,
        max_tokens: int = 1000
    ) -> str:
        """
        Send one chat completion and return the raw text reply.

        user_content is either plain text or a list of content parts
        (see text_part / media_part).
        """
        response = self.client.chat.completions.create(
            model=model or self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_content}
            ],
            max_tokens=max_tokens,
            temperature=settings.llm_temperature
        )
        content = response.choices[0].message.content
        if content is None:
            raise ValueError("Model returned an empty response")
        return content

    def extract_json(self, text: str) -> Union[dict, list]:
        """
        Extract JSON from API response.
        Handles cases where model wraps JSON in markdown code blocks.
        """
        text = text.strip()
        if text.startswith("```json"):
            text = text[7:]
        if text.startswith("```"):
            text = text[3:]
        if text.endswith("```"):
            text = text[:-3]

        return json.loads(text.strip())

    def generate_image(self, prompt: str, model: str) -> str:
        """
        Generate one image and return it as a PNG data URI.
        """
        response = self.client.images.generate(
            model=model,
            prompt=prompt,
            n=1,
            response_format="b64_json"
        )
        encoded = response.data[0].b64_json
        if not encoded:
            raise ValueError("Image model returned no data")
        return to_data_uri(base64.b64decode(encoded), "image/png")

    def test_connection(self) -> bool:
        """Test if the LLM API is reachable"""
        try:
            response = self.call(
                "You are a test assistant.",
                "Reply with exactly: OK",
                max_tokens=10
            )
            return "OK" in response.upper()
        except (OpenAIError, ValueError) as e:
            logger.error(f"LLM connection failed: {e}")
            return False


# Singleton instance
_llm_client: LLMClient = None


def get_llm_client() -> LLMClient:
    """Get or create LLM client (singleton pattern)"""
    global _llm_client
    if _llm_client is None:
        _llm_client = LLMClient()
    return _llm_client


def set_llm_client(client) -> None:
    """Swap the shared client (used by tests to install a stub)."""
    global _llm_client
    _llm_client = client
