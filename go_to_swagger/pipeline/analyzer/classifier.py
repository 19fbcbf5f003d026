"""
Member classifier: turns struct field declarations into members.

Field comments may carry controls:

    // @desc "The user's display name"
    // @deprecated
    // @ignore
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from ..source_ast.nodes import FieldDecl
from .ir_nodes import CollectionMember, MappingMember, Member, ScalarMember
from .type_expr import is_primitive, split_map, split_slice
from .validation import ValidationMap, parse_validate_tag

logger = logging.getLogger(__name__)

_JSON_TAG = re.compile(r'json:"([^"]+)"')
_DESCRIPTION = re.compile(r'@desc\s+"?([^"\n]+)"?', re.IGNORECASE)
_IGNORE = re.compile(r"@ignore", re.IGNORECASE)
_DEPRECATED = re.compile(r"@deprecated", re.IGNORECASE)


@dataclass
class FieldControls:
    """Ignore/deprecated markers found in a field's comments."""

    ignore: bool = False
    deprecated: bool = False


def parse_json_tag(tag: str) -> tuple[str, bool]:
    """Return the JSON name and omitempty flag of a struct tag."""
    match = _JSON_TAG.search(tag)
    if not match:
        return "", False

    words = match.group(1).split(",")
    return words[0], "omitempty" in words[1:]


def parse_description(text: str) -> str:
    if not text:
        return ""
    match = _DESCRIPTION.search(text)
    if not match:
        return ""
    return match.group(1).strip()


def parse_controls(text: str) -> FieldControls:
    return FieldControls(
        ignore=bool(_IGNORE.search(text)),
        deprecated=bool(_DEPRECATED.search(text)),
    )


def unquote_tag(tag: str) -> str:
    """Turn a raw or interpreted string tag literal into the tag text."""
    if tag.startswith("`"):
        return tag.strip("`")
    if tag.startswith('"'):
        return tag[1:-1].replace('\\"', '"')
    return tag


def is_exported(name: str) -> bool:
    return bool(name) and name[0].isupper()


def member_for_type(type_ref: str, name: str, origin_path: str, element_validation: ValidationMap | None = None) -> Member:
    """
    Build a member for a type, recursing into maps and slices.

    The element validation applies to the element of a collection or the
    value of a map; scalar members built here carry it directly.
    """
    element_validation = element_validation if element_validation is not None else ValidationMap()

    parts = split_map(type_ref)
    if parts is not None:
        key, value = parts
        return MappingMember(
            name=name,
            type_ref=type_ref,
            key=member_for_type(key, name, origin_path),
            value=member_for_type(value, name, origin_path, element_validation),
            origin_path=origin_path,
        )

    # []byte is a primitive (binary string), not a collection of bytes
    element = None if is_primitive(type_ref) else split_slice(type_ref)
    if element is not None:
        return CollectionMember(
            name=name,
            type_ref=type_ref,
            element=member_for_type(element, name, origin_path, element_validation),
            origin_path=origin_path,
        )

    return ScalarMember(
        name=name,
        type_ref=type_ref,
        validation=element_validation,
        origin_path=origin_path,
    )


def classify(field_decl: FieldDecl, origin_path: str = "") -> list[Member]:
    """
    Classify a struct field declaration.

    Args:
        field_decl: The field as parsed from source
        origin_path: Import path of the declaring package

    Returns:
        One member per exported name; empty when the field is ignored,
        embedded, unexported or excluded from JSON
    """
    if field_decl.is_embedded:
        return []

    doc_controls = parse_controls(field_decl.doc)
    comment_controls = parse_controls(field_decl.comment)
    if doc_controls.ignore or comment_controls.ignore:
        return []

    tag = unquote_tag(field_decl.tag)
    wire_name, omit_empty = parse_json_tag(tag)
    if wire_name == "-":
        return []

    description = parse_description(field_decl.doc) or parse_description(field_decl.comment)

    members: list[Member] = []
    for name in field_decl.names:
        if not is_exported(name):
            continue

        container_validation, element_validation = parse_validate_tag(tag)
        member = member_for_type(field_decl.type_text, name, origin_path, element_validation)
        member.wire_name = wire_name
        member.omit_empty = omit_empty
        member.description = description
        member.deprecated = doc_controls.deprecated or comment_controls.deprecated
        member.validation = container_validation
        members.append(member)

    if len(members) > 1 and wire_name:
        logger.warning("Fields %s share the JSON name %r", ", ".join(field_decl.names), wire_name)

    return members
