"""
Type resolver: locates the declaration of a referenced type.

Given the package that mentions a type and the type text, the resolver
works out which imported packages could declare it, asks the source oracle
for their declarations and builds a Definition from the first match.
Ambiguous aliases are resolved by trying every candidate in import order;
the first package that declares the name wins.
"""

from __future__ import annotations

import logging

from ..source_ast.nodes import TypeDecl
from ..source_ast.oracle import SourceOracle, select_group
from .classifier import classify, parse_description
from .enum_extractor import extract_enum_values
from .ir_nodes import Definition
from .type_expr import bare_name, is_primitive, split_map, split_slice
from .units import UnitGraph

logger = logging.getLogger(__name__)


def is_named_type(type_ref: str) -> bool:
    """Whether a type text names another declared (non-primitive) type."""
    if not type_ref or is_primitive(type_ref):
        return False
    if split_map(type_ref) is not None or split_slice(type_ref) is not None:
        return False
    if type_ref in ("struct", "interface{}") or type_ref.startswith("Unknown<"):
        return False
    return True


class TypeResolver:
    """Resolves type references against the unit graph."""

    def __init__(self, graph: UnitGraph, oracle: SourceOracle):
        self.graph = graph
        self.oracle = oracle

    def resolve(self, referring_path: str, type_ref: str) -> Definition | None:
        """
        Locate and build the Definition of a referenced type.

        Args:
            referring_path: Import path of the package mentioning the type
            type_ref: Type text as written (``*pkg.Name``, ``Name``)

        Returns:
            The Definition, or None when no candidate package declares it

        Raises:
            UnitSelectionError: If a candidate package has no usable group
        """
        type_ref = type_ref.lstrip("*")
        candidates = self.graph.possible_import_paths(referring_path, type_ref)

        if not candidates:
            logger.error("Import paths not available for type %s (referenced from %s)", type_ref, referring_path)
            return None

        if len(candidates) > 1:
            logger.warning("Multiple package candidates found for type %s: %s", type_ref, ", ".join(candidates))

        name = bare_name(type_ref)
        for candidate in candidates:
            groups = self.oracle.parse_unit(candidate)
            if groups is None:
                logger.warning("Could not find package %s while resolving type %s", candidate, type_ref)
                continue

            group = select_group(groups, candidate)
            type_decl = group.find_type(name)
            if type_decl is None:
                continue

            definition = self._build_definition(type_decl, group.name, candidate)
            logger.debug("Resolved %s from %s to %s", type_ref, referring_path, definition.canonical_name())
            return definition

        return None

    def _build_definition(self, type_decl: TypeDecl, unit_name: str, unit_path: str) -> Definition:
        definition = Definition(
            name=type_decl.name,
            unit_name=unit_name,
            unit_path=unit_path,
            underlying_type=type_decl.underlying,
            description=parse_description(type_decl.doc) or parse_description(type_decl.comment),
        )

        for field_decl in type_decl.fields:
            if field_decl.is_embedded:
                definition.embedded_types.append(field_decl.type_text)
                continue

            for member in classify(field_decl, unit_path):
                definition.members[member.name] = member

        # A type defined over another named type behaves like a struct
        # embedding that type.
        if is_named_type(type_decl.underlying):
            definition.embedded_types.append(type_decl.underlying)

        if definition.is_primitive:
            definition.enumerations = extract_enum_values(self.oracle, unit_path, type_decl.name)

        return definition
