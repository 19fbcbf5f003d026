"""
Declaration node definitions for Go source.

These nodes are what the source oracle hands to the analyzer: the top-level
type and constant declarations, imports and comment groups of one package
clause in one directory. Type expressions are kept as normalized text
(``*T``, ``[]T``, ``map[K]V``, ``pkg.Name``, ``interface{}``, ``struct``).
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ImportSpec:
    """A single import line."""

    path: str = ""
    alias: str | None = None  # Explicit local name, "." or None


@dataclass
class FieldDecl:
    """A struct field declaration.

    An embedded (anonymous) field has no names; its type_text is the
    embedded type reference.
    """

    names: list[str] = field(default_factory=list)
    type_text: str = ""
    tag: str = ""  # Raw tag literal, quotes included
    doc: str = ""  # Comment group directly above the field
    comment: str = ""  # Comment trailing the field on its last line

    @property
    def is_embedded(self) -> bool:
        return not self.names


@dataclass
class TypeDecl:
    """A named type declaration (``type Name <underlying>``)."""

    name: str = ""
    underlying: str = ""
    fields: list[FieldDecl] = field(default_factory=list)  # Only for struct types
    doc: str = ""
    comment: str = ""


@dataclass
class ConstValue:
    """A value expression of a constant spec."""

    text: str = ""  # Raw source text, quotes included
    is_literal: bool = True


@dataclass
class ConstDecl:
    """A constant spec (one line of a const block)."""

    names: list[str] = field(default_factory=list)
    type_text: str = ""  # Empty when the constant is untyped
    values: list[ConstValue] = field(default_factory=list)


@dataclass
class DeclarationGroup:
    """All declarations sharing one package clause within a directory."""

    name: str = ""  # Declared package name
    imports: dict[str, list[str]] = field(default_factory=dict)  # import path -> aliases
    types: list[TypeDecl] = field(default_factory=list)
    consts: list[ConstDecl] = field(default_factory=list)
    comments: list[str] = field(default_factory=list)  # Comment group texts
    files: list[str] = field(default_factory=list)

    def add_import(self, spec: ImportSpec) -> None:
        """Record an import, ignoring blank imports and duplicate aliases."""
        if spec.alias == "_":
            return
        aliases = self.imports.setdefault(spec.path, [])
        if spec.alias and spec.alias not in aliases:
            aliases.append(spec.alias)

    def merge(self, other: DeclarationGroup) -> None:
        """Merge the declarations of another file of the same package."""
        for path, aliases in other.imports.items():
            existing = self.imports.setdefault(path, [])
            for alias in aliases:
                if alias not in existing:
                    existing.append(alias)
        self.types.extend(other.types)
        self.consts.extend(other.consts)
        self.comments.extend(other.comments)
        self.files.extend(other.files)

    def find_type(self, name: str) -> TypeDecl | None:
        """Return the top-level type declaration with the given name."""
        for type_decl in self.types:
            if type_decl.name == name:
                return type_decl
        return None
