"""
Schema derivation for resolved Definitions and their members.

Produces plain dicts in the Swagger 2.0 schema vocabulary. Validation
constraints become bounds: string length, numeric magnitude, or item count
for arrays and maps. The rules are applied in a fixed order (min, max,
len, eq, gt, lt) and later rules overwrite earlier ones.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any, assert_never

from ...utils import strip_quotes
from ..analyzer.ir_nodes import CollectionMember, Definition, MappingMember, Member, ScalarMember
from ..analyzer.type_expr import primitive_info
from ..analyzer.validation import ValidationMap
from ..config import NamingScheme

logger = logging.getLogger(__name__)


def enum_value(literal: str) -> str | float:
    """
    Convert a raw constant literal into an enum value.

    Quoted literals (interpreted or raw) are always strings; anything else
    becomes a number when it parses as one.

    Examples:
        '"RED"' -> "RED"
        '3' -> 3.0
        '"3"' -> "3"
        "`blue`" -> "blue"
    """
    if literal.startswith(('"', "`")):
        return strip_quotes(literal)
    try:
        return float(literal)
    except ValueError:
        return literal


def apply_item_bounds(schema: dict[str, Any], validation: ValidationMap) -> None:
    """Translate validation constraints into minItems/maxItems."""
    minimum = validation.minimum()
    if minimum is not None:
        schema["minItems"] = int(minimum)

    maximum = validation.maximum()
    if maximum is not None:
        schema["maxItems"] = int(maximum)

    length = validation.length()
    if length is not None:
        schema["minItems"] = int(length)
        schema["maxItems"] = int(length)

    value, present = validation.equals()
    if present:
        try:
            count = int(value)
        except ValueError:
            logger.warning("Ignoring non-integer eq operand %r on a collection", value)
        else:
            schema["minItems"] = count
            schema["maxItems"] = count

    greater_than = validation.greater_than()
    if greater_than is not None:
        schema["minItems"] = int(greater_than + 1)

    less_than = validation.less_than()
    if less_than is not None:
        schema["maxItems"] = int(less_than - 1)


def apply_string_bounds(schema: dict[str, Any], validation: ValidationMap) -> None:
    """Translate validation constraints into minLength/maxLength/pattern."""
    minimum = validation.minimum()
    if minimum is not None:
        schema["minLength"] = int(minimum)

    maximum = validation.maximum()
    if maximum is not None:
        schema["maxLength"] = int(maximum)

    length = validation.length()
    if length is not None:
        schema["minLength"] = int(length)
        schema["maxLength"] = int(length)

    value, present = validation.equals()
    if present:
        schema["pattern"] = value

    greater_than = validation.greater_than()
    if greater_than is not None:
        schema["minLength"] = int(greater_than + 1)

    less_than = validation.less_than()
    if less_than is not None:
        schema["maxLength"] = int(less_than - 1)


def apply_numeric_bounds(schema: dict[str, Any], validation: ValidationMap) -> None:
    """Translate validation constraints into minimum/maximum."""
    minimum = validation.minimum()
    if minimum is not None:
        schema["minimum"] = minimum

    maximum = validation.maximum()
    if maximum is not None:
        schema["maximum"] = maximum

    length = validation.length()
    if length is not None:
        schema["minimum"] = length
        schema["maximum"] = length

    value, present = validation.equals()
    if present:
        try:
            number = float(value)
        except ValueError:
            number = math.nan

        if math.isfinite(number):
            schema["minimum"] = number
            schema["maximum"] = number
        else:
            logger.warning("Ignoring non-numeric eq operand %r", value)

    greater_than = validation.greater_than()
    if greater_than is not None:
        schema["minimum"] = greater_than
        schema["exclusiveMinimum"] = True

    less_than = validation.less_than()
    if less_than is not None:
        schema["maximum"] = less_than
        schema["exclusiveMaximum"] = True


class SchemaBackend:
    """Derives schemas under a naming scheme."""

    def __init__(self, naming: NamingScheme = NamingScheme.FULL):
        self.naming = naming

    def member_schema(self, member: Member) -> dict[str, Any]:
        """
        Derive the schema of a member.

        Args:
            member: A defined member; scalar references must already carry
                the unit of their target

        Returns:
            Schema dict
        """
        schema: dict[str, Any] = {"title": member.title}
        if member.description:
            schema["description"] = member.description
        if member.deprecated:
            schema["x-deprecated"] = True

        if isinstance(member, ScalarMember):
            info = primitive_info(member.type_ref)
            if info is None:
                schema["$ref"] = member.definition_ref(self.naming)
                return schema

            schema["type"] = info.type
            if info.format:
                schema["format"] = info.format

            if info.type == "string":
                apply_string_bounds(schema, member.validation)
            elif info.type in ("number", "integer"):
                apply_numeric_bounds(schema, member.validation)
        elif isinstance(member, CollectionMember):
            schema["type"] = "array"
            schema["items"] = self.member_schema(member.element)
            apply_item_bounds(schema, member.validation)
        elif isinstance(member, MappingMember):
            # Maps are described as objects whose values are arrays of the
            # value type.
            schema["type"] = "object"
            schema["additionalProperties"] = {
                "type": "array",
                "items": self.member_schema(member.value),
            }
            apply_item_bounds(schema, member.validation)
        else:
            assert_never(member)

        return schema

    def definition_schema(self, definition: Definition) -> dict[str, Any]:
        """Derive the schema of a Definition."""
        schema: dict[str, Any] = {"title": definition.display_name(self.naming)}
        if definition.description:
            schema["description"] = definition.description

        info = primitive_info(definition.underlying_type)
        if info is not None:
            schema["type"] = info.type
            if info.format:
                schema["format"] = info.format
            if definition.enumerations:
                schema["enum"] = [enum_value(literal) for literal in definition.enumerations]
            return schema

        schema["type"] = "object"
        properties: dict[str, Any] = {}
        required: list[str] = []
        for member in definition.members.values():
            properties[member.title] = self.member_schema(member)
            if member.is_required():
                required.append(member.title)

        schema["properties"] = properties
        if required:
            schema["required"] = required

        return schema

    def definitions(self, snapshot: Mapping[str, Definition]) -> dict[str, Any]:
        """
        Derive the schemas of every stored Definition.

        Keys are display names under the naming scheme, sorted. Under the
        partial and simple schemes two Definitions may share a display name;
        the later one in canonical-name order wins.
        """
        schemas: dict[str, Any] = {}
        owners: dict[str, str] = {}
        for canonical in sorted(snapshot):
            definition = snapshot[canonical]
            name = definition.display_name(self.naming)
            if name in owners:
                logger.warning("Definitions %s and %s share the name %s", owners[name], canonical, name)
            owners[name] = canonical
            schemas[name] = self.definition_schema(definition)

        return {name: schemas[name] for name in sorted(schemas)}
