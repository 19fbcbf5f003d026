"""
Configuration for the Go to Swagger pipeline.

Mirrors the command line options; a JSON config file uses the same keys
as to_dict() produces.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .errors import ConfigurationError

logger = logging.getLogger(__name__)


class NamingScheme(str, Enum):
    """How much of the package path ends up in definition names.

    FULL:    github.com.acme.api.model.User
    PARTIAL: model.User
    SIMPLE:  User
    """

    FULL = "full"
    PARTIAL = "partial"
    SIMPLE = "simple"


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when the output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Default: raise error if file exists
    FORCE = "force"  # Overwrite


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        validate_before_write: Whether to validate the document before writing
        atomic_write: Whether to use atomic file writes
    """

    mode: OutputMode = OutputMode.ERROR_IF_EXISTS
    validate_before_write: bool = True
    atomic_write: bool = True


def default_source_roots() -> list[str]:
    """Source roots used when none are configured.

    The current directory when it is a Go module, then every GOPATH src
    directory (``~/go/src`` when GOPATH is unset).
    """
    roots = []
    cwd = Path.cwd()
    if (cwd / "go.mod").exists():
        roots.append(str(cwd))

    gopath = os.environ.get("GOPATH", "")
    entries = [p for p in gopath.split(os.pathsep) if p] or [str(Path.home() / "go")]
    for entry in entries:
        roots.append(str(Path(entry) / "src"))

    return roots


def goroot_source_root() -> str | None:
    """The standard library source directory, ``$GOROOT/src``.

    GOROOT comes from the environment, else from ``go env GOROOT`` when a go
    binary is on the PATH. None when neither yields an existing directory.
    """
    goroot = os.environ.get("GOROOT", "")
    if not goroot and shutil.which("go"):
        try:
            result = subprocess.run(["go", "env", "GOROOT"], capture_output=True, text=True, timeout=10, check=True)
        except (OSError, subprocess.SubprocessError) as e:
            logger.info("Could not ask go for GOROOT: %s", e)
        else:
            goroot = result.stdout.strip()

    if not goroot:
        return None

    src = Path(goroot) / "src"
    return str(src) if src.is_dir() else None


@dataclass
class GeneratorConfig:
    """Configuration options for schema generation."""

    # Import path of the main package of the application
    root_import_path: str = ""

    # Naming convention for definitions
    naming: NamingScheme = NamingScheme.FULL

    # Packages whose import path contains any of these substrings are skipped
    ignored_packages: list[str] = field(default_factory=list)

    # Module roots (containing go.mod) or GOPATH style src directories
    source_roots: list[str] = field(default_factory=list)

    # Output configuration
    output: OutputConfig = field(default_factory=OutputConfig)

    def validate(self) -> None:
        """Raise ConfigurationError when required settings are missing."""
        if not self.root_import_path:
            raise ConfigurationError("Package path is required.")
        if not isinstance(self.naming, NamingScheme):
            try:
                self.naming = NamingScheme(self.naming)
            except ValueError:
                raise ConfigurationError(f"Unrecognized value provided for naming convention: {self.naming}") from None

    def effective_source_roots(self) -> list[str]:
        """Configured source roots (or the defaults), then the standard library."""
        roots = list(self.source_roots) or default_source_roots()
        std = goroot_source_root()
        if std is not None and std not in roots:
            roots.append(std)
        return roots

    @staticmethod
    def from_dict(d: dict) -> GeneratorConfig:
        """Create a config from a dictionary."""
        config = GeneratorConfig()
        for k, v in d.items():
            if k == "naming":
                try:
                    config.naming = NamingScheme(v)
                except ValueError:
                    raise ConfigurationError(f"Unrecognized value provided for naming convention: {v}") from None
            elif k == "output" and isinstance(v, dict):
                mode = v.get("mode", OutputMode.ERROR_IF_EXISTS)
                if isinstance(mode, str):
                    mode = OutputMode(mode)
                config.output = OutputConfig(
                    mode=mode,
                    validate_before_write=v.get("validate_before_write", True),
                    atomic_write=v.get("atomic_write", True),
                )
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "root_import_path": self.root_import_path,
            "naming": self.naming.value,
            "ignored_packages": self.ignored_packages,
            "source_roots": self.source_roots,
            "output": {
                "mode": self.output.mode.value,
                "validate_before_write": self.output.validate_before_write,
                "atomic_write": self.output.atomic_write,
            },
        }
