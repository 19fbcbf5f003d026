"""
Source oracle: the analyzer's only way to look at source code.

The analyzer never reads files itself. It asks an oracle for the
declaration groups of an import path, which keeps resolution testable
against in-memory declarations.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from ..errors import UnitSelectionError
from .locator import SourceLocator
from .nodes import DeclarationGroup
from .parser import GoSourceParser

logger = logging.getLogger(__name__)


class SourceOracle(ABC):
    """Abstract provider of parsed declaration groups."""

    @abstractmethod
    def parse_unit(self, import_path: str) -> dict[str, DeclarationGroup] | None:
        """
        Parse the package at an import path.

        Args:
            import_path: Go import path

        Returns:
            Declaration groups keyed by package name, or None when the
            package cannot be located
        """


class GoSourceOracle(SourceOracle):
    """Oracle backed by Go files on disk."""

    def __init__(self, source_roots: list[str], parser: GoSourceParser | None = None):
        self.locator = SourceLocator(source_roots)
        self.parser = parser or GoSourceParser()

        # Parsed packages of this run, keyed by import path
        self._parsed: dict[str, dict[str, DeclarationGroup] | None] = {}

    def parse_unit(self, import_path: str) -> dict[str, DeclarationGroup] | None:
        if import_path in self._parsed:
            return self._parsed[import_path]

        groups = None
        directory = self.locator.locate(import_path)
        if directory is not None:
            logger.debug("Parsing %s from %s", import_path, directory)
            groups = self.parser.parse_directory(directory)

        self._parsed[import_path] = groups
        return groups


def select_group(groups: dict[str, DeclarationGroup], import_path: str) -> DeclarationGroup:
    """
    Pick the declaration group to scan for a package directory.

    Test groups never qualify. The first remaining group is taken, but a
    ``main`` group gives way to any other group.

    Raises:
        UnitSelectionError: If no group qualifies
    """
    selected = None
    for name, group in groups.items():
        if name.endswith("_test"):
            continue

        if selected is None:
            selected = group
            continue

        if selected.name == "main":
            selected = group

    if selected is None:
        raise UnitSelectionError(import_path)

    return selected
