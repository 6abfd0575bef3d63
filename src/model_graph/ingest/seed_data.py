"""
Seed relationship candidates.

The built-in list is empty: relationships enter the catalog only after
review. Reviewed candidates can be kept in a YAML file and loaded with
``load_candidates``.
"""
from pathlib import Path
from typing import Any, Dict, List

import yaml


SEED_RELATIONSHIPS: List[Dict[str, Any]] = []


def get_seed_relationships() -> List[Dict[str, Any]]:
    """Return a copy of the built-in seed list."""
    return list(SEED_RELATIONSHIPS)


def load_candidates(path: Path) -> List[Dict[str, Any]]:
    """
    Load relationship candidates from a YAML file.

    The file holds either a list of candidate mappings or a mapping with a
    ``relationships`` key. File order is preserved.

    Args:
        path: YAML file path

    Returns:
        List of candidate mappings, possibly empty
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return []
    if isinstance(data, dict):
        data = data.get("relationships") or []
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of relationships, got {type(data).__name__}")
    return data
