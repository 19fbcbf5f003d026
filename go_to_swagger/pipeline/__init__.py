"""
Pipeline - Go source to Swagger generator.

This module provides a multi-phase architecture for generating a Swagger
2.0 document from annotated Go source:

1. Phase 1 (Source AST): Parse Go packages into declaration groups
2. Phase 2 (Analyzer): Load the unit graph and resolve referenced types
3. Phase 3 (Annotations): Parse API and operation comment blocks
4. Phase 4 (Backend): Derive schemas and assemble the document
5. Phase 5 (Writer): Atomically write the document
"""

from __future__ import annotations

from .config import GeneratorConfig, NamingScheme, OutputConfig, OutputMode
from .errors import (
    ConfigurationError,
    DocumentWriteError,
    GoToSwaggerError,
    SourceParseError,
    UnitSelectionError,
    UnresolvedTypeError,
)
from .generator import SwaggerGenerator
from .writer import AtomicWriter

__all__ = [
    "SwaggerGenerator",
    "GeneratorConfig",
    "NamingScheme",
    "OutputConfig",
    "OutputMode",
    "ConfigurationError",
    "DocumentWriteError",
    "GoToSwaggerError",
    "SourceParseError",
    "UnitSelectionError",
    "UnresolvedTypeError",
    "AtomicWriter",
]
