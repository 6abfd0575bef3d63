"""
Relationship seeding pipeline.
"""
import logging
from typing import Iterable

from ..result import is_ok
from ..schema.seed import SeedFailure, SeedOutcome, SeedSummary
from ..storage import RelationshipStore, StoreErrorKind
from ..storage.relationship_store import CandidateInput, candidate_id

logger = logging.getLogger(__name__)


class SeedPipeline:
    """Feeds an ordered list of relationship candidates through the store."""

    def __init__(self, store: RelationshipStore):
        """
        Initialize seeding pipeline.

        Args:
            store: Relationship store façade every candidate goes through
        """
        self.store = store

    def run(self, candidates: Iterable[CandidateInput], dry_run: bool = False) -> SeedSummary:
        """
        Submit candidates one at a time, in order.

        A failing candidate is recorded and counted; the run always moves on
        to the next one. Re-running a list whose ids are already stored
        yields duplicate failures for those ids only.

        Args:
            candidates: Ordered relationship candidates (objects or mappings)
            dry_run: Validate only, write nothing

        Returns:
            SeedSummary with counts, created ids and per-record failures
        """
        summary = SeedSummary(dry_run=dry_run)

        for index, candidate in enumerate(candidates):
            relationship_id = candidate_id(candidate)
            try:
                if dry_run:
                    result = self.store.validate(candidate)
                else:
                    result = self.store.create_relationship(candidate)
            except Exception as e:
                logger.exception("Error creating relationship %s", relationship_id)
                summary.error_count += 1
                summary.failures.append(SeedFailure(
                    index=index,
                    relationship_id=relationship_id,
                    kind=StoreErrorKind.UNEXPECTED.value,
                    message=f"{type(e).__name__}: {e}",
                ))
                continue

            if is_ok(result):
                record = result.value
                summary.success_count += 1
                if not dry_run:
                    summary.created_ids.append(record.id)
                logger.info(
                    "%s relationship %s: %s %s %s",
                    "Validated" if dry_run else "Created",
                    record.id or f"#{index}",
                    record.model_a,
                    record.relationship_type,
                    record.model_b,
                )
            else:
                error = result.error
                summary.error_count += 1
                summary.failures.append(SeedFailure(
                    index=index,
                    relationship_id=getattr(error, "relationship_id", None) or relationship_id,
                    kind=error.kind.value if hasattr(error, "kind") else StoreErrorKind.UNEXPECTED.value,
                    message=getattr(error, "message", str(error)),
                ))
                logger.error("Failed to create relationship %s: %s", relationship_id, error)

        _log_summary(summary)
        return summary


def _log_summary(summary: SeedSummary) -> None:
    logger.info(
        "Seeding complete: %d created, %d errors%s",
        summary.success_count,
        summary.error_count,
        " (dry run)" if summary.dry_run else "",
    )
    if summary.outcome is SeedOutcome.EMPTY:
        logger.info("No relationship candidates supplied; nothing to seed")
    elif summary.outcome is SeedOutcome.COMPLETE:
        logger.info("All relationships seeded successfully")


def seed_all(store: RelationshipStore, candidates: Iterable[CandidateInput]) -> SeedSummary:
    """Seed every candidate through ``store`` and return the run summary."""
    return SeedPipeline(store).run(candidates)

