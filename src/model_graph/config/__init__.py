"""
Configuration for the model relationship graph.
"""
from .config import DEFAULT_RELATIONSHIP_TYPES, Config, configure_logging

__all__ = ["Config", "DEFAULT_RELATIONSHIP_TYPES", "configure_logging"]
