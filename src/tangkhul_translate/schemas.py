from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .models import canonical_language


class TranslationRequest(BaseModel):
    text: str = Field(description="Phrase to translate")
    source_language: str = Field(description="'english'/'en' or 'tangkhul'/'nmf'")
    target_language: str = Field(description="'english'/'en' or 'tangkhul'/'nmf'")
    part_of_speech: Optional[str] = Field(
        default=None, description="Optional grammar hint matched against entry tags"
    )
    user_id: Optional[str] = Field(default=None, description="Requesting user, for analytics only")

    @field_validator("text")
    @classmethod
    def _text_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("text must not be empty")
        return value

    @field_validator("source_language", "target_language")
    @classmethod
    def _known_language(cls, value: str) -> str:
        language = canonical_language(value)
        if language is None:
            raise ValueError(f"unsupported language '{value}'")
        return language

    @field_validator("part_of_speech")
    @classmethod
    def _lowercase_pos(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip().lower() or None

    @model_validator(mode="after")
    def _distinct_languages(self) -> "TranslationRequest":
        if self.source_language == self.target_language:
            raise ValueError("source_language and target_language must differ")
        return self


@dataclass
class Alternative:
    text: str
    confidence: int
    source: str

    def to_dict(self) -> dict:
        return {"text": self.text, "confidence": self.confidence, "source": self.source}


@dataclass
class Suggestion:
    """A low-similarity "did you mean" candidate attached to NotFound."""
    source_text: str
    translated_text: str
    similarity: float

    def to_dict(self) -> dict:
        return {
            "source_text": self.source_text,
            "translated_text": self.translated_text,
            "similarity": round(self.similarity, 4),
        }


@dataclass
class TranslationResult:
    translated_text: str
    confidence_score: int
    method: str
    alternatives: List[Alternative] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    response_time_ms: Optional[int] = None

    @property
    def cache_hit(self) -> bool:
        return self.method == "cache_hit"

    def to_dict(self) -> dict:
        """Convert to the response payload."""
        result = {
            "translated_text": self.translated_text,
            "confidence_score": self.confidence_score,
            "method": self.method,
            "found": True,
            "metadata": dict(self.metadata),
        }

        if self.alternatives:
            result["alternatives"] = [alt.to_dict() for alt in self.alternatives]

        if self.response_time_ms is not None:
            result["response_time_ms"] = self.response_time_ms

        return result
