"""Turn a raw generation reply into the caller's result shape.

Non-humanize tones pass the reply through untouched. Humanize replies are
expected to hold a JSON array of strings somewhere in free-form text, often
wrapped in prose or code fences, sometimes with raw control characters inside
the string literals.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterator

from paraphrase_api.core.errors import ResponseParseError
from paraphrase_api.schemas.paraphrase import OptionsResult, RewriteResult, TextResult, Tone
from paraphrase_api.utils.text import count_words

MAX_OPTIONS = 2
LENGTH_TOLERANCE_WORDS = 10

_STRING_LITERAL_RE = re.compile(r'"(?:[^"\\]|\\.)*"', flags=re.DOTALL)
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")
# \t, \n and \r are legal JSON whitespace between tokens.
_BARE_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
_CONTROL_ESCAPES = {"\n": "\\n", "\r": "\\r", "\t": "\\t"}


def _escape_control(match: re.Match[str]) -> str:
    return _CONTROL_ESCAPES.get(match.group(0), "")


def sanitize_control_chars(span: str) -> str:
    """Escape newline, carriage return and tab inside string literals; drop other control characters."""
    pieces: list[str] = []
    last = 0
    for literal in _STRING_LITERAL_RE.finditer(span):
        pieces.append(_BARE_CONTROL_RE.sub("", span[last : literal.start()]))
        pieces.append(_CONTROL_RE.sub(_escape_control, literal.group(0)))
        last = literal.end()
    pieces.append(_BARE_CONTROL_RE.sub("", span[last:]))
    return "".join(pieces)


def iter_array_spans(text: str) -> Iterator[str]:
    """Yield each top-level balanced ``[...]`` span in order of appearance.

    Brackets inside quoted strings do not count. An array left open at the end
    of the text is offered once more as the span up to the last ``]``.
    """
    depth = 0
    start = -1
    in_string = False
    escaped = False

    for idx, ch in enumerate(text):
        if depth == 0:
            if ch == "[":
                start = idx
                depth = 1
            continue

        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch == "[":
            depth += 1
        elif ch == "]":
            depth -= 1
            if depth == 0:
                yield text[start : idx + 1]

    if depth > 0:
        end = text.rfind("]")
        if end > start:
            yield text[start : end + 1]


def decode_options(span: str) -> list[str]:
    try:
        parsed = json.loads(sanitize_control_chars(span))
    except json.JSONDecodeError as exc:
        raise ResponseParseError(str(exc)) from exc

    if not isinstance(parsed, list) or not all(isinstance(item, str) for item in parsed):
        raise ResponseParseError("Expected a JSON array of strings")
    return parsed


def interpret(raw_text: str, tone: Tone) -> RewriteResult:
    if tone != Tone.HUMANIZE:
        return TextResult(result=raw_text)

    first_error: ResponseParseError | None = None
    for span in iter_array_spans(raw_text):
        try:
            options = decode_options(span)
        except ResponseParseError as exc:
            first_error = first_error or exc
            continue
        return OptionsResult(options=options[:MAX_OPTIONS])

    if first_error is not None:
        raise first_error
    return TextResult(result=raw_text)


def review_options(options: list[str], source_text: str) -> list[str]:
    """Flag options that miss what the humanize prompt asked for. Advisory only."""
    flags: list[str] = []
    if len(options) < MAX_OPTIONS:
        flags.append("too_few_options")
    if len({option.strip() for option in options}) < len(options):
        flags.append("duplicate_options")

    source_words = count_words(source_text)
    if any(abs(count_words(option) - source_words) > LENGTH_TOLERANCE_WORDS for option in options):
        flags.append("length_out_of_band")
    return flags
