"""
Configuration management for the model relationship graph.
"""
import logging
import os
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel


DEFAULT_RELATIONSHIP_TYPES = [
    "enables",      # A is prerequisite for B
    "reinforces",   # A strengthens B
    "conflicts",    # A contradicts B in the same context
    "contains",     # A is a subset of B
    "sequences",    # A typically precedes B
    "complements",  # A and B address different facets
]


class Config(BaseModel):
    """Configuration class for the relationship service."""

    # Storage
    database_url: str = "sqlite:///model_graph.db"
    store_timeout_seconds: float = 5.0

    # Relationship validation
    relationship_types: List[str] = list(DEFAULT_RELATIONSHIP_TYPES)
    confidence_min: float = 0.0
    confidence_max: float = 1.0
    default_review_status: str = "pending"

    # Seeding
    seed_file: Optional[Path] = None

    # Queries
    list_limit: int = 50

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Logging
    log_level: str = "INFO"

    @classmethod
    def from_yaml(cls, path: Path) -> "Config":
        """Load configuration from YAML file."""
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        types = os.getenv("RELATIONSHIP_TYPES")
        seed_file = os.getenv("SEED_FILE")
        return cls(
            database_url=os.getenv("DATABASE_URL", "sqlite:///model_graph.db"),
            store_timeout_seconds=float(os.getenv("STORE_TIMEOUT_SECONDS", "5.0")),
            relationship_types=(
                [t.strip() for t in types.split(",") if t.strip()]
                if types else list(DEFAULT_RELATIONSHIP_TYPES)
            ),
            confidence_min=float(os.getenv("CONFIDENCE_MIN", "0.0")),
            confidence_max=float(os.getenv("CONFIDENCE_MAX", "1.0")),
            default_review_status=os.getenv("DEFAULT_REVIEW_STATUS", "pending"),
            seed_file=Path(seed_file) if seed_file else None,
            list_limit=int(os.getenv("LIST_LIMIT", "50")),
            api_host=os.getenv("API_HOST", "0.0.0.0"),
            api_port=int(os.getenv("API_PORT", "8000")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    @classmethod
    def default(cls) -> "Config":
        """Create default configuration."""
        config_path = Path("config.yaml")
        if config_path.exists():
            return cls.from_yaml(config_path)
        return cls.from_env()


def configure_logging(config: Config) -> None:
    """Apply the configured log level to the root logger."""
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
