"""Utility modules for qmdspan.

Provides:
- hashing: hash_str for content fingerprinting
- logger: get_logger for logging
"""

from qmdspan.utils.hashing import hash_str
from qmdspan.utils.logger import get_logger

__all__ = [
    "get_logger",
    "hash_str",
]
