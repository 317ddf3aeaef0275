from __future__ import annotations

import time
from typing import Any

from paraphrase_api.core.errors import InvalidRequestError
from paraphrase_api.core.logging import get_logger
from paraphrase_api.schemas.paraphrase import OptionsResult, RewriteRequest, RewriteResult, Tone
from paraphrase_api.services.generation import GenerationClient
from paraphrase_api.services.interpreter import interpret, review_options
from paraphrase_api.services.prompt_builder import build_prompt
from paraphrase_api.utils.text import count_paragraphs, count_words

logger = get_logger(__name__)

MISSING_TEXT_MESSAGE = "Please provide some text to paraphrase."
INVALID_TONE_MESSAGE = "Invalid tone selected."


def parse_rewrite_request(payload: Any) -> RewriteRequest:
    if not isinstance(payload, dict):
        raise InvalidRequestError(MISSING_TEXT_MESSAGE)

    text = payload.get("text")
    if not isinstance(text, str) or not text.strip():
        raise InvalidRequestError(MISSING_TEXT_MESSAGE)

    tone = payload.get("tone")
    if not isinstance(tone, str):
        raise InvalidRequestError(INVALID_TONE_MESSAGE)
    try:
        resolved = Tone(tone)
    except ValueError as exc:
        raise InvalidRequestError(INVALID_TONE_MESSAGE) from exc

    return RewriteRequest(text=text, tone=resolved)


class ParaphraseService:
    def __init__(self, generator: GenerationClient) -> None:
        self.generator = generator

    async def paraphrase(self, request: RewriteRequest) -> RewriteResult:
        start = time.perf_counter()
        payload = build_prompt(request.text, request.tone)
        raw_text = await self.generator.generate(payload)
        result = interpret(raw_text, request.tone)

        quality_flags: list[str] = []
        if isinstance(result, OptionsResult):
            quality_flags = review_options(result.options, request.text)
        elif request.tone == Tone.HUMANIZE:
            quality_flags.append("no_array_in_reply")

        logger.info(
            "paraphrase_completed",
            tone=request.tone.value,
            input_word_count=count_words(request.text),
            input_paragraph_count=count_paragraphs(request.text),
            result_shape="options" if isinstance(result, OptionsResult) else "result",
            reply_chars=len(raw_text),
            quality_flags=quality_flags,
            latency_ms=round((time.perf_counter() - start) * 1000, 3),
        )
        return result
