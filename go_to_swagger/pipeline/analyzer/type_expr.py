"""
Helpers for textual Go type references.

See http://swagger.io/specification/ (Data Types) for the schema side of
the primitive table.
"""

from __future__ import annotations

from dataclasses import dataclass

# Go type -> (schema type, schema format)
PRIMITIVE_TYPES: dict[str, tuple[str, str]] = {
    "bool": ("boolean", ""),
    "byte": ("string", "byte"),
    "complex64": ("string", ""),
    "complex128": ("string", ""),
    "float32": ("number", "float"),
    "float64": ("number", "double"),
    "int": ("integer", ""),
    "int8": ("integer", ""),
    "int16": ("integer", ""),
    "int32": ("integer", "int32"),
    "int64": ("integer", "int64"),
    "rune": ("integer", ""),
    "string": ("string", ""),
    "uint": ("integer", ""),
    "uint8": ("integer", ""),
    "uint16": ("integer", ""),
    "uint32": ("integer", ""),
    "uint64": ("integer", ""),
    "uintptr": ("integer", ""),
    "[]byte": ("string", "binary"),
    "interface{}": ("object", ""),
    "any": ("object", ""),
    # Not strictly a primitive, but as simple as it needs to be.
    "time.Time": ("string", "date-time"),
}


@dataclass(frozen=True)
class PrimitiveInfo:
    """Schema type and format of a primitive Go type."""

    type: str
    format: str = ""


def primitive_info(type_ref: str) -> PrimitiveInfo | None:
    """Return the schema type/format of a primitive type, or None."""
    entry = PRIMITIVE_TYPES.get(type_ref.strip("*"))
    if entry is None:
        return None
    return PrimitiveInfo(type=entry[0], format=entry[1])


def is_primitive(type_ref: str) -> bool:
    return primitive_info(type_ref) is not None


def split_map(type_ref: str) -> tuple[str, str] | None:
    """
    Split ``map[K]V`` into key and value type text.

    Brackets are balanced so nested maps split correctly; pointer stars on
    the value are dropped.

    Returns:
        (key, value) or None when the reference is not a map
    """
    if not type_ref.startswith("map["):
        return None

    depth = 0
    for i in range(3, len(type_ref)):
        if type_ref[i] == "[":
            depth += 1
        elif type_ref[i] == "]":
            depth -= 1
            if depth == 0:
                key = type_ref[4:i]
                value = type_ref[i + 1 :].lstrip("*")
                if not key or not value:
                    return None
                return key, value

    return None


def split_slice(type_ref: str) -> str | None:
    """Return the element type text of ``[]T``, or None."""
    if type_ref.startswith("[]"):
        return type_ref[2:]
    return None


def split_qualified(type_ref: str) -> tuple[str | None, str]:
    """
    Split a type reference into alias and bare name.

    Examples:
        "*model.User" -> ("model", "User")
        "User" -> (None, "User")
    """
    type_ref = type_ref.lstrip("*")
    if "." not in type_ref:
        return None, type_ref
    alias, name = type_ref.split(".", 1)
    return alias, name


def bare_name(type_ref: str) -> str:
    return split_qualified(type_ref)[1]
