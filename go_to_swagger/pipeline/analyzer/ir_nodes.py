"""
IR (Intermediate Representation) node definitions.

A Definition is one resolved named Go type; its fields are Members. The
member variants form a closed set (scalar, collection, mapping): code that
dispatches on them handles all three and ends with assert_never.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ...utils import dotted_path
from ..config import NamingScheme
from .type_expr import bare_name, is_primitive
from .validation import ValidationMap


def canonical_name(unit_path: str, name: str) -> str:
    """Globally unique name of a type: package path and type name, dot separated."""
    return dotted_path(f"{unit_path}.{name}")


def display_name(unit_path: str, unit_name: str, name: str, naming: NamingScheme) -> str:
    """Name of a type under the given naming scheme."""
    if naming == NamingScheme.PARTIAL:
        return f"{unit_name}.{name}"
    if naming == NamingScheme.SIMPLE:
        return name
    return canonical_name(unit_path, name)


@dataclass
class MemberBase:
    """Attributes shared by every member variant."""

    name: str = ""  # Name in the Go struct
    wire_name: str = ""  # JSON name
    omit_empty: bool = False  # If the omitempty flag was given in the JSON tag
    description: str = ""
    deprecated: bool = False
    validation: ValidationMap = field(default_factory=ValidationMap)

    # Import path of the package whose source declared this field
    origin_path: str = ""

    @property
    def title(self) -> str:
        return self.wire_name or self.name

    def is_required(self) -> bool:
        return self.validation.is_required()


@dataclass
class ScalarMember(MemberBase):
    """A field of a single (primitive or named) type."""

    type_ref: str = ""

    # Package of the resolved target type, recorded during resolution
    unit_name: str = ""
    unit_path: str = ""

    @property
    def is_primitive(self) -> bool:
        return is_primitive(self.type_ref)

    def canonical_name(self) -> str:
        return canonical_name(self.unit_path, bare_name(self.type_ref))

    def display_name(self, naming: NamingScheme) -> str:
        return display_name(self.unit_path, self.unit_name, bare_name(self.type_ref), naming)

    def definition_ref(self, naming: NamingScheme) -> str:
        return "#/definitions/" + self.display_name(naming)


@dataclass
class CollectionMember(MemberBase):
    """A slice or array field."""

    type_ref: str = ""  # Go type as originally written
    element: Member | None = None


@dataclass
class MappingMember(MemberBase):
    """A map field."""

    type_ref: str = ""  # Go type as originally written
    key: Member | None = None
    value: Member | None = None


Member = ScalarMember | CollectionMember | MappingMember


@dataclass
class Definition:
    """A resolved named type."""

    name: str = ""
    unit_name: str = ""  # The actual package name of this type
    unit_path: str = ""  # The actual package path of this type
    underlying_type: str = ""  # "struct" for structs, else the underlying type text
    description: str = ""

    # Field name -> member, in discovery order
    members: dict[str, Member] = field(default_factory=dict)

    # Anonymous fields not yet merged into members
    embedded_types: list[str] = field(default_factory=list)

    # Raw constant literals, only for primitive underlying types
    enumerations: list[str] | None = None

    # Resolution progress; guards against cycles
    flattened: bool = field(default=False, compare=False, repr=False)
    defined: bool = field(default=False, compare=False, repr=False)

    @property
    def is_primitive(self) -> bool:
        return is_primitive(self.underlying_type)

    def canonical_name(self) -> str:
        return canonical_name(self.unit_path, self.name)

    def display_name(self, naming: NamingScheme) -> str:
        return display_name(self.unit_path, self.unit_name, self.name, naming)
