"""
Mini Model Graph: a validated catalog of relationships between mental models.
"""
from .result import Err, Ok, Result, err, is_err, is_ok, ok

__version__ = "0.1.0"

__all__ = ["Err", "Ok", "Result", "err", "is_err", "is_ok", "ok"]
