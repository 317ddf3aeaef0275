import json

import pytest

from paraphrase_api.core.errors import ResponseParseError
from paraphrase_api.schemas.paraphrase import OptionsResult, TextResult, Tone
from paraphrase_api.services.interpreter import (
    interpret,
    iter_array_spans,
    review_options,
    sanitize_control_chars,
)

PLAIN_TONES = [tone for tone in Tone if tone is not Tone.HUMANIZE]


@pytest.mark.parametrize("tone", PLAIN_TONES)
@pytest.mark.parametrize("raw", ["The cat sat on the mat.", '["looks", "like", "json"]', "", "line\n\twith\x01controls"])
def test_plain_tones_pass_reply_through(tone, raw):
    assert interpret(raw, tone) == TextResult(result=raw)


def test_humanize_extracts_array_after_prose():
    raw = 'Here you go:\n["Hi there. See you, world.", "Hey world. Bye for now."]'

    result = interpret(raw, Tone.HUMANIZE)

    assert result == OptionsResult(options=["Hi there. See you, world.", "Hey world. Bye for now."])


def test_humanize_truncates_to_first_two_options():
    raw = '```json\n["one", "two", "three", "four"]\n```'

    assert interpret(raw, Tone.HUMANIZE) == OptionsResult(options=["one", "two"])


def test_humanize_keeps_single_option_without_padding():
    assert interpret('["only one"]', Tone.HUMANIZE) == OptionsResult(options=["only one"])


def test_humanize_without_array_degrades_to_raw_text():
    raw = "Sorry, I cannot help with that."

    assert interpret(raw, Tone.HUMANIZE) == TextResult(result=raw)


def test_humanize_decodes_raw_tab_inside_option():
    raw = '["Column\tvalue", "Second option"]'

    result = interpret(raw, Tone.HUMANIZE)

    assert result.options == ["Column\tvalue", "Second option"]


def test_humanize_decodes_raw_newlines_inside_options():
    raw = '["First paragraph.\n\nSecond paragraph.", "Para one.\r\nPara two."]'

    result = interpret(raw, Tone.HUMANIZE)

    assert result.options == ["First paragraph.\n\nSecond paragraph.", "Para one.\r\nPara two."]


def test_humanize_accepts_pretty_printed_array():
    raw = 'Options:\n[\n\t"Alpha text.",\n\t"Beta text."\n]\n'

    assert interpret(raw, Tone.HUMANIZE).options == ["Alpha text.", "Beta text."]


def test_humanize_ignores_brackets_inside_strings():
    raw = 'Result: ["Use [brackets] wisely.", "A ] stray \\" quote ["] done'

    assert interpret(raw, Tone.HUMANIZE).options == ["Use [brackets] wisely.", 'A ] stray " quote [']


def test_humanize_skips_bracketed_aside_before_real_array():
    raw = 'Both options [see below] keep the meaning.\n["Option A.", "Option B."]'

    assert interpret(raw, Tone.HUMANIZE).options == ["Option A.", "Option B."]


def test_humanize_malformed_array_raises_parse_error():
    with pytest.raises(ResponseParseError) as exc:
        interpret('Sure: ["a", "b",]', Tone.HUMANIZE)

    assert exc.value.status_code == 500
    assert exc.value.message


def test_humanize_array_of_non_strings_raises_parse_error():
    with pytest.raises(ResponseParseError, match="array of strings"):
        interpret('[{"text": "a"}, {"text": "b"}]', Tone.HUMANIZE)


def test_iter_array_spans_yields_top_level_spans_in_order():
    text = 'a [1, [2, 3]] b ["x", "]"] c'

    assert list(iter_array_spans(text)) == ["[1, [2, 3]]", '["x", "]"]']


def test_iter_array_spans_offers_unterminated_tail():
    text = 'prefix ["a", "b"] then ["c", ["d"]'

    assert list(iter_array_spans(text)) == ['["a", "b"]', '["c", ["d"]']


def test_iter_array_spans_without_brackets():
    assert list(iter_array_spans("no arrays here")) == []


def test_sanitize_escapes_whitespace_controls_inside_strings():
    span = '["a\nb", "c\td", "e\rf"]'

    assert sanitize_control_chars(span) == '["a\\nb", "c\\td", "e\\rf"]'


def test_sanitize_removes_other_control_chars():
    span = '["bell\x07 and del\x7f", "nul\x00"]\x1b'

    assert sanitize_control_chars(span) == '["bell and del", "nul"]'


def test_sanitize_keeps_whitespace_between_tokens():
    span = '[\n  "a",\n  "b"\n]'

    assert sanitize_control_chars(span) == span
    assert json.loads(sanitize_control_chars(span)) == ["a", "b"]


def test_sanitize_is_idempotent():
    span = '["line one\nline two\twith tab", "x\x02y"]'

    once = sanitize_control_chars(span)

    assert sanitize_control_chars(once) == once
    assert once.count("\\n") == 1


def test_review_options_clean_pair():
    source = "Hello world. Goodbye world."

    assert review_options(["Hi there world.", "Hey world, bye now."], source) == []


def test_review_options_flags_problems():
    source = "one two three"
    long_option = " ".join(["word"] * 20)

    assert review_options([long_option], source) == ["too_few_options", "length_out_of_band"]
    assert review_options(["same text", " same text "], source) == ["duplicate_options"]


def test_humanize_skips_numeric_footnote_before_real_array():
    raw = 'Rewritten as requested [1].\n["Option A.", "Option B."]'

    assert interpret(raw, Tone.HUMANIZE).options == ["Option A.", "Option B."]


def test_humanize_numeric_array_alone_raises_parse_error():
    with pytest.raises(ResponseParseError, match="array of strings"):
        interpret("See note [1].", Tone.HUMANIZE)
