"""
Failure payloads carried by storage Results.
"""
from enum import Enum
from typing import Optional


class StoreErrorKind(Enum):
    """
    Why a relationship write or read did not succeed.

    VALIDATION:  candidate broke a structural invariant, nothing was written
    DUPLICATE:   the identifier is already present in the store
    CONSTRAINT:  the store rejected the row for another integrity reason
    UNAVAILABLE: the store could not be reached or timed out
    UNEXPECTED:  anything else
    """
    VALIDATION = "validation"
    DUPLICATE = "duplicate"
    CONSTRAINT = "constraint"
    UNAVAILABLE = "unavailable"
    UNEXPECTED = "unexpected"


class StoreError(Exception):
    """Describes a failed store operation. Returned inside ``Err``, not raised."""

    def __init__(
        self,
        kind: StoreErrorKind,
        message: str,
        relationship_id: Optional[str] = None,
    ):
        self.kind = kind
        self.message = message
        self.relationship_id = relationship_id
        super().__init__(f"[{kind.value}] {message}")

    @property
    def retryable(self) -> bool:
        return self.kind in (StoreErrorKind.UNAVAILABLE, StoreErrorKind.UNEXPECTED)
