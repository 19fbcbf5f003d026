"""
Run orchestrator for Swagger generation.

1. Phase 1 (Loader): Scan the import closure of the root package
2. Phase 2 (Annotations): Collect API and operation comment blocks
3. Phase 3 (Definer): Resolve every type reachable from the operations
4. Phase 4 (Backend): Derive schemas from a snapshot of the store
5. Phase 5 (Writer): Serialize the document as JSON
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .analyzer.definer import DefinitionBuilder
from .analyzer.resolver import TypeResolver
from .analyzer.store import DefinitionStore
from .analyzer.units import UnitGraph, UnitLoader
from .annotations import (
    API_KEYWORD,
    OPERATION_KEYWORD,
    ApiInfo,
    Operation,
    extract_comments,
    parse_api_comments,
    parse_operation_comment,
    tag_operations,
)
from .backends.swagger import SwaggerBackend
from .config import GeneratorConfig, OutputMode
from .errors import UnitSelectionError
from .source_ast.oracle import GoSourceOracle, SourceOracle
from .writer.atomic_writer import AtomicWriter

logger = logging.getLogger(__name__)


class SwaggerGenerator:
    """Generates a Swagger document for a Go package and everything it imports."""

    def __init__(self, config: GeneratorConfig, oracle: SourceOracle | None = None):
        """
        Initialize the generator.

        Args:
            config: Generation configuration
            oracle: Source oracle; defaults to reading Go files from the
                configured source roots
        """
        config.validate()
        self.config = config
        self.oracle = oracle or GoSourceOracle(config.effective_source_roots())

        self.graph = UnitGraph()
        self.store = DefinitionStore()
        self.builder: DefinitionBuilder | None = None

    def build(self) -> dict[str, Any]:
        """
        Build the Swagger document.

        Returns:
            Document as plain dicts and lists

        Raises:
            GoToSwaggerError: On unusable packages, unparseable source or
                unresolvable types
        """
        # Phase 1: Unit graph
        loader = UnitLoader(self.oracle, self.config.ignored_packages)
        self.graph = loader.load(self.config.root_import_path)
        if self.config.root_import_path not in self.graph:
            raise UnitSelectionError(self.config.root_import_path)
        logger.info("Loaded %d packages", len(self.graph))

        # Phase 2: Annotations
        api, operations = self.collect_operations()
        logger.info("Found %d operations", len(operations))

        # Phase 3: Definitions
        self.store = DefinitionStore()
        self.builder = DefinitionBuilder(self.graph, self.store, TypeResolver(self.graph, self.oracle))
        self.define_operations(operations)
        logger.info("Resolved %d definitions", len(self.store))

        # Phase 4: Schemas
        backend = SwaggerBackend(self.config)
        return backend.generate(api, operations, self.store.snapshot())

    def generate(self) -> str:
        """Build the document and serialize it as tab indented JSON."""
        return json.dumps(self.build(), indent="\t") + "\n"

    def write(self, path: Path) -> None:
        """
        Generate the document and write it to a file.

        Raises:
            FileExistsError: If the file exists and the output mode forbids overwriting
            DocumentWriteError: If the document fails validation
        """
        output = self.config.output
        if output.mode == OutputMode.ERROR_IF_EXISTS and path.exists():
            raise FileExistsError(f"Output file already exists: {path}. Use --force to overwrite.")

        content = self.generate()

        if not output.atomic_write:
            path.write_text(content, encoding="utf-8")
            return

        writer = AtomicWriter()
        if output.mode == OutputMode.ERROR_IF_EXISTS:
            writer.write_if_not_exists(path, content, output.validate_before_write)
        else:
            writer.write(path, content, output.validate_before_write)

    def collect_operations(self) -> tuple[ApiInfo, list[Operation]]:
        """Parse the API and operation comment blocks of every loaded package."""
        api_blocks: list[str] = []
        operations: list[Operation] = []

        for import_path in sorted(self.graph):
            comments = self.package_comments(import_path)
            api_blocks.extend(extract_comments(comments, API_KEYWORD))
            for block in extract_comments(comments, OPERATION_KEYWORD):
                operations.append(parse_operation_comment(block, import_path))

        api = parse_api_comments(api_blocks)
        return api, tag_operations(api, operations)

    def package_comments(self, import_path: str) -> list[str]:
        """Comment groups of every file in a package directory."""
        groups = self.oracle.parse_unit(import_path)
        if groups is None:
            return []

        comments: list[str] = []
        for group in groups.values():
            comments.extend(group.comments)
        return comments

    def define_operations(self, operations: list[Operation]) -> None:
        """Resolve the response and parameter types of every operation."""
        for operation in operations:
            for response in operation.responses:
                self.builder.define_member(response.member, operation.package_path)
            for parameter in operation.parameters:
                self.builder.define_member(parameter.member, operation.package_path)
