from __future__ import annotations

import logging
from typing import Any

from google import genai
from google.genai import types

from .advice_request import AdviceRequest
from .errors import AdviceServiceError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"
ADVICE_TEMPERATURE = 0.5
JSON_MIME_TYPE = "application/json"


class GeminiAdviceClient:
    """Adapter for Gemini models reached through the google-genai SDK."""

    def __init__(
        self,
        *,
        api_key: str | None = None,
        project_id: str | None = None,
        location: str = "us-central1",
        model_name: str = DEFAULT_MODEL,
        client: Any | None = None,
    ) -> None:
        """Initialize the Gemini client.

        Args:
            api_key: Gemini API key. When omitted, Vertex AI is used instead.
            project_id: GCP project ID for Vertex AI
            location: Vertex AI location
            model_name: Model name (e.g., "gemini-2.5-flash")
            client: Pre-built ``genai.Client`` (mainly for tests)
        """
        self.model_name = model_name

        if client is not None:
            self.client = client
        elif api_key:
            self.client = genai.Client(api_key=api_key)
        elif project_id:
            self.client = genai.Client(vertexai=True, project=project_id, location=location)
        else:
            raise ValueError("Either an API key or a GCP project ID is required")

    def build_config(self, advice_request: AdviceRequest) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            temperature=ADVICE_TEMPERATURE,
            response_mime_type=JSON_MIME_TYPE,
            response_schema=advice_request.response_schema,
        )

    def generate_advice(self, advice_request: AdviceRequest) -> str:
        """Send one request and return the raw JSON text.

        Args:
            advice_request: Content parts and response schema for the item

        Returns:
            Response text as produced by the model

        Raises:
            AdviceServiceError: the model returned no text
        """
        response = self.client.models.generate_content(
            model=self.model_name,
            contents=advice_request.contents,
            config=self.build_config(advice_request),
        )

        generated_text = response.text
        if not generated_text:
            raise AdviceServiceError("Gemini returned an empty response")

        logger.info(
            "Generated pricing advice with Gemini",
            extra={
                "model": self.model_name,
                "temperature": ADVICE_TEMPERATURE,
                "parts": len(advice_request.contents),
                "input_length": len(advice_request.prompt),
                "output_length": len(generated_text),
            },
        )

        return generated_text


__all__ = ["GeminiAdviceClient", "DEFAULT_MODEL", "ADVICE_TEMPERATURE"]
