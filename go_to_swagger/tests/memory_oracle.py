"""
In-memory source oracle and declaration builders for analyzer tests.
"""

from __future__ import annotations

from go_to_swagger.pipeline.source_ast import (
    ConstDecl,
    ConstValue,
    DeclarationGroup,
    FieldDecl,
    SourceOracle,
    TypeDecl,
)


class MemoryOracle(SourceOracle):
    """Serves declaration groups registered per import path."""

    def __init__(self, packages: dict[str, DeclarationGroup | list[DeclarationGroup]] | None = None):
        self.packages: dict[str, dict[str, DeclarationGroup]] = {}
        self.requests: list[str] = []
        for import_path, groups in (packages or {}).items():
            self.add(import_path, groups)

    def add(self, import_path: str, groups: DeclarationGroup | list[DeclarationGroup]) -> None:
        if isinstance(groups, DeclarationGroup):
            groups = [groups]
        self.packages[import_path] = {group.name: group for group in groups}

    def parse_unit(self, import_path: str) -> dict[str, DeclarationGroup] | None:
        self.requests.append(import_path)
        return self.packages.get(import_path)


def package(name, imports=None, types=None, consts=None, comments=None):
    """Build a declaration group.

    imports maps import path to a list of explicit aliases (may be empty).
    """
    return DeclarationGroup(
        name=name,
        imports={path: list(aliases) for path, aliases in (imports or {}).items()},
        types=list(types or []),
        consts=list(consts or []),
        comments=list(comments or []),
    )


def field(names, type_text, tag="", doc="", comment=""):
    if isinstance(names, str):
        names = [names]
    return FieldDecl(names=list(names), type_text=type_text, tag=tag, doc=doc, comment=comment)


def embedded(type_text):
    return FieldDecl(names=[], type_text=type_text)


def struct(name, *fields, doc="", comment=""):
    return TypeDecl(name=name, underlying="struct", fields=list(fields), doc=doc, comment=comment)


def named(name, underlying, doc=""):
    return TypeDecl(name=name, underlying=underlying, doc=doc)


def const(names, type_text, *values, literal=True):
    if isinstance(names, str):
        names = [names]
    return ConstDecl(names=list(names), type_text=type_text, values=[ConstValue(text=v, is_literal=literal) for v in values])
