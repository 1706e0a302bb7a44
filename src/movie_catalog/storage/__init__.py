"""
Storage module for thumbnail assets.

Provides the abstract storage interface and the local filesystem backend the
asset fetcher writes into.
"""

from .base import BaseStorage
from .local import LocalStorage

__all__ = [
    "BaseStorage",
    "LocalStorage",
]
