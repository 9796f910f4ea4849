"""Cache stores for release check results."""

from .base import Cacher
from .file import FileCacher
from .memory import MemoryCacher, NoopCacher

__all__ = [
    "Cacher",
    "FileCacher",
    "MemoryCacher",
    "NoopCacher",
]
