import re

_PARAGRAPH_BREAK_RE = re.compile(r"\n\s*\n")


def count_words(text: str) -> int:
    return len(text.split())


def count_paragraphs(text: str) -> int:
    return sum(1 for chunk in _PARAGRAPH_BREAK_RE.split(text) if chunk.strip())
