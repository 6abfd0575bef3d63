"""
Seeding and bulk import of relationship candidates.
"""
from .csv_import import CSV_TEMPLATE, import_relationships_csv, parse_csv
from .seed_data import get_seed_relationships, load_candidates
from .seed_pipeline import SeedPipeline, seed_all

__all__ = [
    "CSV_TEMPLATE",
    "SeedPipeline",
    "get_seed_relationships",
    "import_relationships_csv",
    "load_candidates",
    "parse_csv",
    "seed_all",
]
