"""
Bulk import of relationships from CSV.

Rows use the flat column names of the stored record. Each row is turned
back into a nested candidate and fed through the seeding pipeline, so the
same validation, normalization and per-row failure isolation apply.
"""
import csv
import io
import logging
from typing import Any, Dict, List, Optional

from ..schema.seed import SeedSummary
from ..storage import RelationshipStore
from .seed_pipeline import SeedPipeline

logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "id",
    "model_a",
    "model_b",
    "relationship_type",
    "direction",
    "confidence",
    "logical_derivation",
    "has_literature_support",
    "literature_citation",
    "literature_url",
    "empirical_observation",
    "validated_by",
    "validated_at",
    "review_status",
    "notes",
]

CSV_TEMPLATE = (
    ",".join(CSV_COLUMNS) + "\n"
    'R011,DE2,SY2,enables,a→b,0.8,"Second-Order Thinking provides the temporal depth '
    'needed to trace system behaviour over time.",1,"Senge, P. (1990). The Fifth Discipline",'
    "https://en.wikipedia.org/wiki/The_Fifth_Discipline,"
    "Complex system failures often stem from second-order effects.,"
    "reviewer,2025-11-28T00:00:00+00:00,pending,Initial import\n"
)

_TRUE_VALUES = {"1", "true", "yes", "y"}


def _parse_flag(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() in _TRUE_VALUES


def row_to_candidate(row: Dict[str, Optional[str]]) -> Dict[str, Any]:
    """
    Convert one CSV row into a candidate mapping.

    Empty cells are treated as absent. The three literature columns are
    folded back into a nested ``literature_support`` value.
    """
    values = {
        key.strip(): value.strip()
        for key, value in row.items()
        if key is not None and value is not None and value.strip() != ""
    }

    has_support = values.pop("has_literature_support", None)
    citation = values.pop("literature_citation", None)
    url = values.pop("literature_url", None)
    if has_support is not None or citation or url:
        values["literature_support"] = {
            "has_support": _parse_flag(has_support),
            "citation": citation,
            "url": url,
        }
    return values


def parse_csv(text: str) -> List[Dict[str, Any]]:
    """Parse CSV text with a header row into candidate mappings."""
    reader = csv.DictReader(io.StringIO(text.strip()))
    return [row_to_candidate(row) for row in reader]


def import_relationships_csv(
    store: RelationshipStore,
    text: str,
    dry_run: bool = False,
) -> SeedSummary:
    """
    Import relationships from CSV text.

    Args:
        store: Relationship store façade
        text: CSV document including the header row
        dry_run: Validate rows without writing

    Returns:
        SeedSummary for the imported rows
    """
    candidates = parse_csv(text)
    logger.info(
        "Parsed %d relationships from CSV%s",
        len(candidates),
        " (dry run, nothing will be written)" if dry_run else "",
    )
    return SeedPipeline(store).run(candidates, dry_run=dry_run)
