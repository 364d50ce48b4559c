"""Canonical request/response models shared by every backend.

The content shapes are the google-genai pydantic types; the request
envelopes below bundle them the way a caller hands them to a generator.
"""
from enum import Enum
from typing import Any, List, Optional, Union

from google.genai import types as genai_types
from pydantic import BaseModel

Content = genai_types.Content
Part = genai_types.Part
GenerateContentConfig = genai_types.GenerateContentConfig
GenerateContentResponse = genai_types.GenerateContentResponse
Candidate = genai_types.Candidate
UsageMetadata = genai_types.GenerateContentResponseUsageMetadata
CountTokensResponse = genai_types.CountTokensResponse
EmbedContentResponse = genai_types.EmbedContentResponse

ContentsInput = Union[str, Part, Content, dict, List[Any]]


class Role(str, Enum):
    """Conversation roles understood by the canonical model."""
    USER = "user"
    MODEL = "model"


class GenerateRequest(BaseModel):
    """A content generation request.

    ``model`` falls back to the backend's default when omitted.
    """
    model: Optional[str] = None
    contents: Any
    config: Optional[GenerateContentConfig] = None


class CountTokensRequest(BaseModel):
    """Token counting request."""
    model: Optional[str] = None
    contents: Any


class EmbedContentRequest(BaseModel):
    """Embedding request."""
    model: Optional[str] = None
    contents: Any


def _to_part(value: Union[str, Part, dict]) -> Part:
    if isinstance(value, Part):
        return value
    if isinstance(value, str):
        return Part(text=value)
    if isinstance(value, dict):
        return Part.model_validate(value)
    raise TypeError(f"Cannot convert {type(value).__name__} to a Part")


def _is_content(value: Any) -> bool:
    if isinstance(value, Content):
        return True
    return isinstance(value, dict) and ("role" in value or "parts" in value)


def _as_content(value: Union[Content, dict]) -> Content:
    if isinstance(value, Content):
        return value
    return Content.model_validate(value)


def to_contents(value: ContentsInput) -> List[Content]:
    """Normalize the accepted ``contents`` shapes into a list of Content.

    A bare string, Part or list of Parts becomes a single user turn.
    A Content (or list of Contents) is returned as-is.
    """
    if isinstance(value, list):
        if value and all(_is_content(item) for item in value):
            return [_as_content(item) for item in value]
        if not value:
            return []
        return [Content(role=Role.USER.value, parts=[_to_part(item) for item in value])]
    if _is_content(value):
        return [_as_content(value)]
    return [Content(role=Role.USER.value, parts=[_to_part(value)])]


def response_text(response: GenerateContentResponse) -> str:
    """Concatenate the text parts of the first candidate."""
    if not response.candidates:
        return ""
    content = response.candidates[0].content
    if content is None or not content.parts:
        return ""
    return "".join(part.text for part in content.parts if part.text)
