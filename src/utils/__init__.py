"""Utilities package - Flat structure (no nested directories)"""

# Hash utilities
from .hash_utils import CACHE_INDEX_KEY, hash_string, generate_cache_key

__all__ = [
    # hash
    "CACHE_INDEX_KEY",
    "hash_string",
    "generate_cache_key",
]
