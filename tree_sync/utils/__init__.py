"""Utility modules for tree_sync.

This package provides:
- hashing: Fast content hashing for content-based change stamps
- logging: Text/JSON handlers for the tree_sync logger and the sync summary
"""

from tree_sync.utils.hashing import hash_bytes
from tree_sync.utils.logging import JsonFormatter, configure_logging, log_sync_summary

__all__ = [
    "hash_bytes",
    "configure_logging",
    "log_sync_summary",
    "JsonFormatter",
]
