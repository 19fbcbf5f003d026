"""
Analyzer module.

Builds the unit graph, resolves type references into Definitions and
flattens embedded types.
"""

from __future__ import annotations

from .classifier import classify, member_for_type
from .definer import DefinitionBuilder
from .enum_extractor import extract_enum_values
from .ir_nodes import (
    CollectionMember,
    Definition,
    MappingMember,
    Member,
    ScalarMember,
    canonical_name,
    display_name,
)
from .resolver import TypeResolver
from .store import DefinitionStore
from .type_expr import PRIMITIVE_TYPES, PrimitiveInfo, is_primitive, primitive_info
from .units import CompilationUnit, UnitGraph, UnitLoader
from .validation import ValidationMap, parse_validate_tag, parse_validation_expression

__all__ = [
    "classify",
    "member_for_type",
    "DefinitionBuilder",
    "extract_enum_values",
    "CollectionMember",
    "Definition",
    "MappingMember",
    "Member",
    "ScalarMember",
    "canonical_name",
    "display_name",
    "TypeResolver",
    "DefinitionStore",
    "PRIMITIVE_TYPES",
    "PrimitiveInfo",
    "is_primitive",
    "primitive_info",
    "CompilationUnit",
    "UnitGraph",
    "UnitLoader",
    "ValidationMap",
    "parse_validate_tag",
    "parse_validation_expression",
]
