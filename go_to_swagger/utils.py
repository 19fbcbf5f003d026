"""
Utility functions for the Go to Swagger generator.
"""

from __future__ import annotations


def split_list_option(text: str) -> list[str]:
    """Split a comma separated option value, dropping empty items.

    Examples:
        "vendor,internal/mocks" -> ["vendor", "internal/mocks"]
        "" -> []
        "a,,b" -> ["a", "b"]
    """
    return [item.strip() for item in text.split(",") if item.strip()]


def should_ignore(import_path: str, ignored_packages: list[str]) -> bool:
    """Return True when any ignore-list entry is a substring of the import path."""
    return any(ignored in import_path for ignored in ignored_packages)


def dotted_path(import_path: str) -> str:
    """Normalize path separators of an import path to dots.

    Examples:
        "github.com/acme/api/model" -> "github.com.acme.api.model"
    """
    return import_path.replace("/", ".")


def strip_quotes(text: str) -> str:
    """Remove surrounding double quotes or backticks from a literal."""
    return text.strip('"').strip("`")
