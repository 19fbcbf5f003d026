"""
Source AST module.

Contains the declaration nodes, the tree-sitter based Go parser and the
source oracle consulted by the analyzer.
"""

from __future__ import annotations

from .locator import SourceLocator
from .nodes import (
    ConstDecl,
    ConstValue,
    DeclarationGroup,
    FieldDecl,
    ImportSpec,
    TypeDecl,
)
from .oracle import GoSourceOracle, SourceOracle, select_group
from .parser import GoSourceParser

__all__ = [
    "ConstDecl",
    "ConstValue",
    "DeclarationGroup",
    "FieldDecl",
    "ImportSpec",
    "TypeDecl",
    "GoSourceParser",
    "GoSourceOracle",
    "SourceLocator",
    "SourceOracle",
    "select_group",
]
