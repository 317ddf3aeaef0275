from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from paraphrase_api.schemas.paraphrase import Tone
from paraphrase_api.utils.text import count_paragraphs, count_words

HUMANIZE_SYSTEM_PROMPT = """You are a humanizer. You are given a text and you need to humanize it.
You are not allowed to change the meaning of the text.
You are not allowed to add any new information to the text.
You are not allowed to remove any information from the text.
You are not allowed to change the structure of the text.
You are not allowed to change the formatting of the text.
You are not allowed to change the tone of the text.
You are not allowed to change the style of the text.
You are not allowed to change the vocabulary of the text.
Your job is to make the text more human and natural by changing the words and phrases to make it more natural and human-like.
Therefore, the result should not have too much difference from the original text except that it should be more natural and human-like.
THE RESULT SHOULD BE EXACTLY 2 DISTINCT OPTIONS AS A FLAT JSON ARRAY OF STRINGS (NO OBJECTS, NO NUMBERING, NO EXPLANATIONS).
EACH OPTION SHOULD BE A DISTINCT VARIATION OF THE ORIGINAL TEXT.
EACH OPTION SHOULD BE NO MORE THAN 10 WORDS MORE OR LESS THAN THE NUMBER OF WORDS IN THE ORIGINAL TEXT.
FOLLOW THIS WRITING STYLE:
• SHOULD use clear, simple language.
• SHOULD be spartan and informative.
• SHOULD use short, impactful sentences.
• SHOULD use active voice; avoid passive voice.
• SHOULD focus on practical, actionable insights.
• SHOULD use bullet point lists in social media posts.
• SHOULD use data and examples to support claims when possible.
• SHOULD use "you" and "your" to directly address the reader.
• AVOID using em dashes (—) anywhere in your response. Use only commas, periods, or other standard punctuation.
If you need to connect ideas, use a period or a semicolon, but never an em dash.
• AVOID constructions like "...not just this, but also this".
• AVOID metaphors and clichés.
• AVOID generalizations.
• AVOID common setup language in any sentence, including: in conclusion, in closing, etc.
• AVOID output warnings or notes, just the output requested.
• AVOID unnecessary adjectives and adverbs.
• AVOID hashtags.
• AVOID semicolons.
• AVOID markdown.
• AVOID asterisks.
• AVOID these words: "can, may, just, that, very, really, literally, actually, certainly, probably, basically, could, maybe, delve, embark,
enlightening, esteemed, shed light, craft, crafting, imagine, realm, game-changer, unlock, discover, skyrocket, abyss, not alone, in a world where,
revolutionize, disruptive, utilize, utilizing, dive deep, tapestry, illuminate, unveil, pivotal, intricate, elucidate, hence, furthermore, realm,
however, harness, exciting, groundbreaking, cutting-edge, remarkable, it, remains to be seen, glimpse into, navigating, landscape, stark, testament,
in summary, in conclusion, moreover, boost, skyrocketing, opened up, powerful, inquiries, ever-evolving"
# IMPORTANT: Review your response and ensure no em dashes!
# CRITICAL: Each option MUST rewrite the ENTIRE input text. Do NOT truncate, summarize, or omit any paragraphs. Every paragraph in the input must appear (rewritten) in each option."""

TONE_DIRECTIVES = MappingProxyType(
    {
        Tone.HUMANIZE: "Humanize the following text.",
        Tone.FORMAL: (
            "Rewrite the following text in a formal, professional tone. Use proper grammar, avoid contractions, "
            "and maintain a polished style suitable for business or academic contexts."
        ),
        Tone.INFORMAL: (
            "Rewrite the following text in a casual, conversational tone. Use contractions, simple words, "
            "and make it feel like you're talking to a friend."
        ),
        Tone.CONCISE: (
            "Rewrite the following text to be as concise as possible. Remove unnecessary words and filler "
            "while preserving the core meaning."
        ),
        Tone.CREATIVE: (
            "Rewrite the following text in a more creative and engaging way. Use vivid language, metaphors, "
            "or interesting phrasing while keeping the original meaning."
        ),
        Tone.ACADEMIC: (
            "Rewrite the following text in an academic tone. Use scholarly language, precise terminology, "
            "and a structured approach suitable for research or essays."
        ),
    }
)


@dataclass(frozen=True)
class GenerationPayload:
    user_content: str
    system_instruction: str | None = None


def length_reminder(word_count: int, paragraph_count: int) -> str:
    return (
        f"The original text has {word_count} words and {paragraph_count} paragraph(s). "
        f"Each option in your JSON array MUST be approximately {word_count} words "
        f"and contain all {paragraph_count} paragraph(s). Do NOT shorten or summarize."
    )


def build_prompt(text: str, tone: Tone) -> GenerationPayload:
    user_content = f"{TONE_DIRECTIVES[tone]}\n\nText to rewrite:\n\n{text}"
    if tone != Tone.HUMANIZE:
        return GenerationPayload(user_content=user_content)

    reminder = length_reminder(count_words(text), count_paragraphs(text))
    return GenerationPayload(
        user_content=f"{user_content}\n\n{reminder}",
        system_instruction=HUMANIZE_SYSTEM_PROMPT,
    )
