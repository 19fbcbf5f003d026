"""
Atomic file writer for the generated document.

Ensures that an interrupted run never leaves a half written document
behind.
"""

from __future__ import annotations

import json
import tempfile
from collections.abc import Callable
from pathlib import Path

from ..errors import DocumentWriteError


def _reject_constant(name: str) -> None:
    raise DocumentWriteError(f"Generated document contains the non-finite number {name}")


def validate_document(content: str) -> None:
    """Check that content is a JSON Swagger document.

    Raises:
        DocumentWriteError: If the content does not parse, holds NaN or
            Infinity, or has no swagger key
    """
    try:
        document = json.loads(content, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise DocumentWriteError(f"Generated document is not valid JSON: {e}") from e

    if not isinstance(document, dict) or "swagger" not in document:
        raise DocumentWriteError("Generated document is missing the swagger version")


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Validate the content
    3. Atomically replace the target file
    """

    def __init__(self, validate: Callable[[str], None] | None = None):
        """Initialize the atomic writer.

        Args:
            validate: Optional validation function for the document
        """
        self._validate = validate or validate_document

    def write(self, path: Path, content: str, validate: bool = True) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write
            validate: Whether to validate before finalizing

        Raises:
            DocumentWriteError: If validation fails
            OSError: If file operations fail
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )

        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)

            if validate:
                self._validate(content)

            temp_path.replace(path)

        except Exception:
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    pass  # Best effort cleanup
            raise

    def write_if_not_exists(self, path: Path, content: str, validate: bool = True) -> bool:
        """Write content only if the file doesn't exist.

        Returns:
            True once the file was written

        Raises:
            FileExistsError: If the file already exists
            DocumentWriteError: If validation fails
        """
        if path.exists():
            raise FileExistsError(f"Output file already exists: {path}. Use --force to overwrite.")

        self.write(path, content, validate)
        return True
