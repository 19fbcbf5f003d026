"""
Compilation-unit graph: every package reachable from the root package.

Each unit remembers its declared package name and, per imported path, the
local names under which that package can be referenced. Packages imported
without an explicit alias are referenced by their declared name, which is
only known once the imported package itself has been scanned; a fix-up
pass adds those implicit aliases after the closure converges.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass, field, replace

from ...utils import should_ignore
from ..source_ast.oracle import SourceOracle, select_group
from .type_expr import split_qualified

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompilationUnit:
    """A scanned package."""

    import_path: str
    name: str

    # Imported package path -> local aliases, in import order
    imports: dict[str, tuple[str, ...]] = field(default_factory=dict)

    def aliases_for(self, import_path: str) -> tuple[str, ...]:
        return self.imports.get(import_path, ())


class UnitGraph:
    """Registry of compilation units keyed by import path."""

    def __init__(self, units: dict[str, CompilationUnit] | None = None):
        self._units: dict[str, CompilationUnit] = dict(units or {})

    def __contains__(self, import_path: str) -> bool:
        return import_path in self._units

    def __getitem__(self, import_path: str) -> CompilationUnit:
        return self._units[import_path]

    def __iter__(self) -> Iterator[str]:
        return iter(self._units)

    def __len__(self) -> int:
        return len(self._units)

    def get(self, import_path: str) -> CompilationUnit | None:
        return self._units.get(import_path)

    def units(self) -> list[CompilationUnit]:
        return list(self._units.values())

    def possible_import_paths(self, referring_path: str, type_ref: str) -> list[str]:
        """
        Which packages could have declared this type?

        An unqualified reference can only live in the referring package. A
        qualified one lives in any import whose aliases contain the
        qualifier, in import order.
        """
        alias, _ = split_qualified(type_ref)
        if alias is None:
            return [referring_path]

        unit = self._units.get(referring_path)
        if unit is None:
            return []

        return [path for path, aliases in unit.imports.items() if alias in aliases]


class UnitLoader:
    """Builds the unit graph for a root package."""

    def __init__(self, oracle: SourceOracle, ignored_packages: list[str] | None = None):
        self.oracle = oracle
        self.ignored_packages = list(ignored_packages or [])
        self._missing: set[str] = set()

    def load(self, root_import_path: str) -> UnitGraph:
        """
        Scan the transitive closure of imports starting at the root.

        Args:
            root_import_path: Import path of the main package

        Returns:
            UnitGraph of every located, non-ignored package

        Raises:
            UnitSelectionError: If a package directory has no usable group
            SourceParseError: If a package's source cannot be parsed
        """
        units: dict[str, CompilationUnit] = {}
        seen = {root_import_path}
        queue = deque([root_import_path])

        while queue:
            import_path = queue.popleft()

            if should_ignore(import_path, self.ignored_packages):
                logger.info("Detected ignored package: %s", import_path)
                continue

            groups = self.oracle.parse_unit(import_path)
            if groups is None:
                self._log_missing(import_path)
                continue

            group = select_group(groups, import_path)

            for imported in group.imports:
                if imported not in seen:
                    seen.add(imported)
                    queue.append(imported)

            units[import_path] = CompilationUnit(
                import_path=import_path,
                name=group.name,
                imports={path: tuple(aliases) for path, aliases in group.imports.items()},
            )

        return UnitGraph(self._add_implicit_aliases(units))

    def _add_implicit_aliases(self, units: dict[str, CompilationUnit]) -> dict[str, CompilationUnit]:
        """Make every imported package referable by its declared name."""
        fixed = {}
        for import_path, unit in units.items():
            imports = {}
            for imported, aliases in unit.imports.items():
                target = units.get(imported)
                if target is not None and target.name not in aliases:
                    aliases = aliases + (target.name,)
                imports[imported] = aliases
            fixed[import_path] = replace(unit, imports=imports)
        return fixed

    def _log_missing(self, import_path: str) -> None:
        if import_path in self._missing:
            return
        self._missing.add(import_path)

        # Standard library paths have no dot in their first element
        if "." in import_path.split("/", 1)[0]:
            logger.warning("Could not find package: %s", import_path)
        else:
            logger.info("Could not find package: %s", import_path)
