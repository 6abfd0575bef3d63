"""
Store façade for relationship records.

``RelationshipStore`` is the single entry point for writing a candidate
into durable storage. It validates and normalizes the candidate before
the underlying client is touched, and turns every failure, including
exceptions raised by the client, into an ``Err`` carrying a StoreError.
"""
import logging
import uuid
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from pydantic import ValidationError

from ..config import Config
from ..result import Result, err, is_err, ok
from ..schema.relationship import (
    PersistedRelationship,
    RelationshipCandidate,
    ReviewStatus,
    normalize_code,
)
from .errors import StoreError, StoreErrorKind
from .store_client import RelationshipStoreClient

logger = logging.getLogger(__name__)

CandidateInput = Union[RelationshipCandidate, Mapping[str, Any]]


def generate_relationship_id() -> str:
    return f"REL-{uuid.uuid4().hex[:12]}"


def normalize_candidate(
    candidate: RelationshipCandidate,
    default_status: ReviewStatus = ReviewStatus.PENDING,
) -> Dict[str, Any]:
    """
    Flatten a validated candidate into the row shape the client writes.

    Literature support becomes three scalar columns. Citation and URL are
    dropped whenever the support flag is false.
    """
    support = candidate.literature_support
    has_support = bool(support is not None and support.has_support)
    review_status = candidate.review_status or default_status

    return {
        "id": candidate.id or generate_relationship_id(),
        "model_a": normalize_code(candidate.model_a),
        "model_b": normalize_code(candidate.model_b),
        "relationship_type": candidate.relationship_type,
        "direction": candidate.direction.value,
        "confidence": float(candidate.confidence),
        "logical_derivation": candidate.logical_derivation,
        "has_literature_support": 1 if has_support else 0,
        "literature_citation": support.citation if has_support else None,
        "literature_url": support.url if has_support else None,
        "empirical_observation": candidate.empirical_observation,
        "validated_by": candidate.validated_by,
        "validated_at": candidate.validated_at.isoformat(),
        "review_status": ReviewStatus(review_status).value,
        "notes": candidate.notes,
    }


def _describe_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "candidate"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


def candidate_id(candidate: Any) -> Optional[str]:
    if isinstance(candidate, RelationshipCandidate):
        return candidate.id
    if isinstance(candidate, Mapping):
        value = candidate.get("id")
        return str(value) if value else None
    return None


class RelationshipStore:
    """Validating, Result-returning façade over a RelationshipStoreClient."""

    def __init__(self, client: RelationshipStoreClient, config: Optional[Config] = None):
        """
        Initialize the store façade.

        Args:
            client: Underlying store client (owns no connection lifecycle here)
            config: Configuration object; defaults are used when omitted
        """
        self.client = client
        self.config = config or Config()
        self.default_status = ReviewStatus(self.config.default_review_status)
        self.relationship_types = set(self.config.relationship_types)

    def validate(self, candidate: CandidateInput) -> Result[RelationshipCandidate, StoreError]:
        """
        Check a candidate against every structural invariant without writing.

        Args:
            candidate: A RelationshipCandidate or a plain mapping of its fields

        Returns:
            Ok with the parsed candidate, or Err(StoreError) of kind VALIDATION
        """
        relationship_id = candidate_id(candidate)

        if isinstance(candidate, RelationshipCandidate):
            parsed = candidate
        else:
            try:
                parsed = RelationshipCandidate.model_validate(candidate)
            except ValidationError as e:
                return err(StoreError(
                    StoreErrorKind.VALIDATION,
                    _describe_validation_error(e),
                    relationship_id,
                ))

        problems = self._invariant_violations(parsed)
        if problems:
            return err(StoreError(StoreErrorKind.VALIDATION, "; ".join(problems), relationship_id))
        return ok(parsed)

    def _invariant_violations(self, candidate: RelationshipCandidate) -> List[str]:
        problems = []
        if normalize_code(candidate.model_a) == normalize_code(candidate.model_b):
            problems.append(
                f"model_a and model_b must differ (both are '{normalize_code(candidate.model_a)}')"
            )
        if candidate.relationship_type not in self.relationship_types:
            problems.append(
                f"relationship_type '{candidate.relationship_type}' is not one of "
                f"{sorted(self.relationship_types)}"
            )
        if not self.config.confidence_min <= candidate.confidence <= self.config.confidence_max:
            problems.append(
                f"confidence {candidate.confidence} is outside "
                f"[{self.config.confidence_min}, {self.config.confidence_max}]"
            )
        if candidate.review_status is not None:
            try:
                ReviewStatus(candidate.review_status)
            except ValueError:
                problems.append(f"review_status '{candidate.review_status}' is not recognized")
        return problems

    def _call(
        self,
        operation: Callable[..., Result],
        *args,
        relationship_id: Optional[str] = None,
        **kwargs,
    ) -> Result:
        """Invoke a client operation, converting raised exceptions into Err."""
        try:
            return operation(*args, **kwargs)
        except (TimeoutError, ConnectionError) as e:
            logger.error("Store call %s failed: %s", operation.__name__, e)
            return err(StoreError(
                StoreErrorKind.UNAVAILABLE,
                f"Store unavailable: {e}",
                relationship_id,
            ))
        except Exception as e:
            logger.exception("Unexpected fault in store call %s", operation.__name__)
            return err(StoreError(
                StoreErrorKind.UNEXPECTED,
                f"{type(e).__name__}: {e}",
                relationship_id,
            ))

    def create_relationship(
        self, candidate: CandidateInput
    ) -> Result[PersistedRelationship, StoreError]:
        """
        Validate, normalize and persist one relationship candidate.

        Nothing is written unless validation passes. Duplicate identifiers
        come back as Err with kind DUPLICATE and leave the stored row intact.

        Args:
            candidate: A RelationshipCandidate or a plain mapping of its fields

        Returns:
            Ok with the persisted record, or Err with a StoreError
        """
        validated = self.validate(candidate)
        if is_err(validated):
            logger.warning("Rejected relationship candidate: %s", validated.error)
            return validated

        fields = normalize_candidate(validated.value, self.default_status)
        relationship_id = fields["id"]

        result = self._call(
            self.client.create_relationship, fields, relationship_id=relationship_id
        )
        if is_err(result):
            logger.warning("Failed to create relationship %s: %s", relationship_id, result.error)
            return result

        try:
            record = PersistedRelationship.model_validate(result.value)
        except ValidationError as e:
            logger.error("Store returned malformed row for %s: %s", relationship_id, e)
            return err(StoreError(
                StoreErrorKind.UNEXPECTED,
                f"Malformed stored row: {_describe_validation_error(e)}",
                relationship_id,
            ))

        logger.info(
            "Created relationship %s: %s %s %s",
            record.id, record.model_a, record.relationship_type, record.model_b,
        )
        return ok(record)

    def get_relationship(
        self, relationship_id: str
    ) -> Result[Optional[PersistedRelationship], StoreError]:
        """Fetch one persisted relationship; Ok(None) when absent."""
        result = self._call(
            self.client.get_relationship, relationship_id, relationship_id=relationship_id
        )
        if is_err(result) or result.value is None:
            return result
        return self._to_records([result.value], relationship_id, single=True)

    def list_relationships(
        self,
        model: Optional[str] = None,
        relationship_type: Optional[str] = None,
        review_status: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> Result[List[PersistedRelationship], StoreError]:
        """List persisted relationships matching the given filters."""
        result = self._call(
            self.client.list_relationships,
            model=normalize_code(model) if model else None,
            relationship_type=relationship_type,
            review_status=review_status,
            limit=limit if limit is not None else self.config.list_limit,
            offset=offset,
        )
        if is_err(result):
            return result
        return self._to_records(result.value)

    def relationships_for_model(self, code: str) -> Result[List[PersistedRelationship], StoreError]:
        """All relationships in which ``code`` is either endpoint."""
        result = self._call(self.client.list_relationships, model=normalize_code(code), limit=None)
        if is_err(result):
            return result
        return self._to_records(result.value)

    def all_relationships(
        self, review_status: Optional[str] = None
    ) -> Result[List[PersistedRelationship], StoreError]:
        result = self._call(
            self.client.list_relationships, review_status=review_status, limit=None
        )
        if is_err(result):
            return result
        return self._to_records(result.value)

    def _to_records(self, rows, relationship_id=None, single=False):
        try:
            records = [PersistedRelationship.model_validate(row) for row in rows]
        except ValidationError as e:
            return err(StoreError(
                StoreErrorKind.UNEXPECTED,
                f"Malformed stored row: {_describe_validation_error(e)}",
                relationship_id,
            ))
        return ok(records[0] if single else records)
