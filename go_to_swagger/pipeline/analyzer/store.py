"""
Definition store: every resolved type, keyed by canonical name.

A canonical name is the declaring package's import path followed by the
type name, with path separators replaced by dots:

    github.com.acme.api.model.User

The package name is never part of it, so two packages with the same name
cannot collide.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType

from .ir_nodes import Definition, canonical_name
from .type_expr import bare_name
from .units import UnitGraph

logger = logging.getLogger(__name__)


class DefinitionStore:
    """Memoizing registry of resolved Definitions."""

    def __init__(self):
        self._definitions: dict[str, Definition] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._definitions

    def __iter__(self) -> Iterator[str]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def get(self, name: str) -> Definition | None:
        return self._definitions.get(name)

    def add(self, definition: Definition) -> None:
        """Insert a Definition, replacing any with the same canonical name."""
        name = definition.canonical_name()
        if name in self._definitions:
            logger.debug("Duplicate definition detected: %s", name)
        self._definitions[name] = definition

    def lookup(self, graph: UnitGraph, referring_path: str, type_ref: str) -> Definition | None:
        """
        Find an already resolved Definition for a type reference.

        Candidate packages are derived the same way the resolver derives
        them, so the store can answer without parsing anything.

        Returns:
            The stored Definition, or None on a miss
        """
        type_ref = type_ref.lstrip("*")
        name = bare_name(type_ref)
        for import_path in graph.possible_import_paths(referring_path, type_ref):
            definition = self._definitions.get(canonical_name(import_path, name))
            if definition is not None:
                return definition
        return None

    def snapshot(self) -> Mapping[str, Definition]:
        """Read-only copy of the store for schema derivation."""
        return MappingProxyType(dict(self._definitions))
