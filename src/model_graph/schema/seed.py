"""
Data models for seeding and import runs.
"""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, computed_field


class SeedOutcome(str, Enum):
    """Overall shape of a seeding run."""
    EMPTY = "empty"          # no candidates supplied
    COMPLETE = "complete"    # every candidate persisted
    PARTIAL = "partial"      # some candidates failed
    FAILED = "failed"        # every candidate failed


class SeedFailure(BaseModel):
    """One candidate that did not make it into the store."""
    index: int
    relationship_id: Optional[str] = None
    kind: str
    message: str


class SeedSummary(BaseModel):
    """Counts and per-record failures for one seeding run."""
    success_count: int = 0
    error_count: int = 0
    created_ids: List[str] = Field(default_factory=list)
    failures: List[SeedFailure] = Field(default_factory=list)
    dry_run: bool = False

    @property
    def total(self) -> int:
        return self.success_count + self.error_count

    @computed_field
    @property
    def outcome(self) -> SeedOutcome:
        if self.total == 0:
            return SeedOutcome.EMPTY
        if self.error_count == 0:
            return SeedOutcome.COMPLETE
        if self.success_count == 0:
            return SeedOutcome.FAILED
        return SeedOutcome.PARTIAL
