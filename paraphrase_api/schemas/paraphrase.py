from enum import Enum
from typing import Union

from pydantic import BaseModel, Field


class Tone(str, Enum):
    HUMANIZE = "humanize"
    FORMAL = "formal"
    INFORMAL = "informal"
    CONCISE = "concise"
    CREATIVE = "creative"
    ACADEMIC = "academic"


class RewriteRequest(BaseModel):
    text: str = Field(min_length=1)
    tone: Tone


class OptionsResult(BaseModel):
    options: list[str] = Field(max_length=2)


class TextResult(BaseModel):
    result: str


RewriteResult = Union[OptionsResult, TextResult]


class ToneListResponse(BaseModel):
    tones: list[Tone]
