"""
Data models for relationships between mental models.

A ``RelationshipCandidate`` is the in-memory shape accepted from callers,
with literature support kept as a nested value. ``PersistedRelationship``
is the flat row shape written by the store.
"""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator


def normalize_code(code: str) -> str:
    """Canonical form of a model code: trimmed and uppercased."""
    return code.strip().upper()


class Direction(str, Enum):
    """Which way a relationship points."""
    BIDIRECTIONAL = "bidirectional"
    A_TO_B = "a→b"
    B_TO_A = "b→a"


class ReviewStatus(str, Enum):
    """Review state of a relationship."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class LiteratureSupport(BaseModel):
    """Published support for a relationship."""
    has_support: bool
    citation: Optional[str] = None
    url: Optional[str] = None


class RelationshipCandidate(BaseModel):
    """A relationship that has not been accepted by the store yet."""
    id: Optional[str] = None
    model_a: str = Field(min_length=1)
    model_b: str = Field(min_length=1)
    relationship_type: str = Field(min_length=1)
    direction: Direction
    confidence: float

    logical_derivation: str = Field(min_length=1)
    empirical_observation: Optional[str] = None
    literature_support: Optional[LiteratureSupport] = None

    validated_by: str = Field(min_length=1)
    validated_at: datetime
    review_status: Optional[ReviewStatus] = None
    notes: Optional[str] = None

    @field_validator("model_a", "model_b", mode="before")
    @classmethod
    def _normalize_code(cls, value):
        if isinstance(value, str):
            return normalize_code(value)
        return value

    @model_validator(mode="after")
    def _distinct_endpoints(self) -> "RelationshipCandidate":
        if self.model_a == self.model_b:
            raise ValueError(
                f"model_a and model_b must differ (both are '{self.model_a}')"
            )
        return self


class PersistedRelationship(BaseModel):
    """A relationship row as stored, with literature support flattened."""
    id: str
    model_a: str
    model_b: str
    relationship_type: str
    direction: Direction
    confidence: float
    logical_derivation: str
    has_literature_support: int = 0
    literature_citation: Optional[str] = None
    literature_url: Optional[str] = None
    empirical_observation: Optional[str] = None
    validated_by: str
    validated_at: datetime
    review_status: ReviewStatus
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def literature_support(self) -> Optional[LiteratureSupport]:
        """Rebuild the nested literature support value, if any was stored."""
        has_support = bool(self.has_literature_support)
        if not has_support and not self.literature_citation and not self.literature_url:
            return None
        return LiteratureSupport(
            has_support=has_support,
            citation=self.literature_citation,
            url=self.literature_url,
        )
