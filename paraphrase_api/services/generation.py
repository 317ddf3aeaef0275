from __future__ import annotations

from google import genai
from google.genai import types as genai_types

from paraphrase_api.core.config import Settings
from paraphrase_api.core.errors import GenerationError
from paraphrase_api.core.logging import get_logger
from paraphrase_api.services.prompt_builder import GenerationPayload

logger = get_logger(__name__)


class GenerationClient:
    """Single-call wrapper around the Gemini ``generate_content`` endpoint.

    The SDK client is built on first use, so a missing API key surfaces as a
    ``GenerationError`` on the request that needs it rather than at start-up.
    """

    def __init__(self, *, api_key: str, model: str, max_output_tokens: int) -> None:
        self.api_key = api_key
        self.model = model
        self.max_output_tokens = max_output_tokens
        self._client: genai.Client | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "GenerationClient":
        return cls(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            max_output_tokens=settings.gemini_max_output_tokens,
        )

    def _get_client(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def _build_config(self, payload: GenerationPayload) -> genai_types.GenerateContentConfig:
        return genai_types.GenerateContentConfig(
            system_instruction=payload.system_instruction,
            max_output_tokens=self.max_output_tokens,
        )

    async def generate(self, payload: GenerationPayload) -> str:
        contents = [
            genai_types.Content(
                role="user",
                parts=[genai_types.Part.from_text(text=payload.user_content)],
            )
        ]
        try:
            response = await self._get_client().aio.models.generate_content(
                model=self.model,
                contents=contents,
                config=self._build_config(payload),
            )
        except Exception as exc:
            logger.exception("generation_request_failed", model=self.model)
            raise GenerationError(str(exc) or "Generation request failed") from exc

        return response.text or ""
