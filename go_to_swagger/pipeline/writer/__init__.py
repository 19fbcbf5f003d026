"""
Writer module.

Contains the atomic document writer.
"""

from __future__ import annotations

from .atomic_writer import AtomicWriter, validate_document

__all__ = ["AtomicWriter", "validate_document"]
