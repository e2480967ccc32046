"""
Core module for scranfilize.
Provides error handling, logging, types, and serialization.
"""
from scranfilize.core.errors import (
    ScranfilizeError, ConfigError, StorageError, AllocationError, CNFError, ParseError
)
from scranfilize.core.logging import get_logger
from scranfilize.core.types import INT_MAX, Lit, Clause
from scranfilize.core.serialization import atomic_write_text, default_file_mode

__all__ = [
    "ScranfilizeError", "ConfigError", "StorageError", "AllocationError", "CNFError", "ParseError",
    "get_logger",
    "INT_MAX", "Lit", "Clause",
    "atomic_write_text", "default_file_mode"
]
