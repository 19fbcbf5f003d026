"""
Locates the source directory of a Go import path.

Two kinds of source roots are understood:

* module roots, which contain a ``go.mod``; the ``module`` directive maps an
  import path prefix onto the directory, and ``vendor/`` is consulted for
  everything else,
* GOPATH style ``src`` directories, where an import path is a relative path.

``$GOROOT/src`` declares the module ``std``; its packages are found like a
GOPATH ``src`` directory, and its ``vendor/`` like a module's.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

STD_MODULE = "std"


@dataclass
class ModuleRoot:
    """A directory holding a go.mod file."""

    module_path: str
    directory: Path


def read_module_path(go_mod: Path) -> str | None:
    """Return the module path declared in a go.mod file."""
    try:
        for line in go_mod.read_text(encoding="utf-8").splitlines():
            line = line.strip()
            if line.startswith("module "):
                return line.split(" ", 1)[1].strip().strip('"')
    except OSError:
        return None
    return None


def has_go_files(directory: Path) -> bool:
    return directory.is_dir() and any(directory.glob("*.go"))


class SourceLocator:
    """Maps import paths to package directories."""

    def __init__(self, source_roots: list[str]):
        """
        Initialize the locator.

        Args:
            source_roots: Module roots and GOPATH style src directories, in priority order
        """
        self.modules: list[ModuleRoot] = []
        self.src_dirs: list[Path] = []

        for root in source_roots:
            root_path = Path(root)
            module_path = read_module_path(root_path / "go.mod") if (root_path / "go.mod").exists() else None
            if module_path:
                self.modules.append(ModuleRoot(module_path=module_path, directory=root_path))
            if not module_path or module_path == STD_MODULE:
                self.src_dirs.append(root_path)

    def candidates(self, import_path: str) -> list[Path]:
        """All directories that could hold the package, in lookup order."""
        paths = []
        for module in self.modules:
            if import_path == module.module_path:
                paths.append(module.directory)
            elif import_path.startswith(module.module_path + "/"):
                paths.append(module.directory / import_path[len(module.module_path) + 1 :])

        for module in self.modules:
            paths.append(module.directory / "vendor" / import_path)

        for src_dir in self.src_dirs:
            paths.append(src_dir / import_path)

        return paths

    def locate(self, import_path: str) -> Path | None:
        """
        Find the directory of a package.

        Args:
            import_path: Go import path

        Returns:
            The first candidate directory containing Go files, or None
        """
        for path in self.candidates(import_path):
            if has_go_files(path):
                return path
        return None
