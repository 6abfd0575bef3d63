"""
HTTP surface for the model relationship graph.
"""
from .main import app, get_store

__all__ = ["app", "get_store"]
