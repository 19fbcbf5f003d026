"""
Enum extraction from constant declarations.

A named type with a primitive underlying type is treated as an enum; its
values are the constants declared with exactly that type:

    type Color string

    const (
        Red  Color = "red"
        Blue Color = "blue"
    )

Literals are kept verbatim (quotes included); turning them into typed
values happens during schema derivation.
"""

from __future__ import annotations

import logging

from ..source_ast.oracle import SourceOracle, select_group

logger = logging.getLogger(__name__)


def extract_enum_values(oracle: SourceOracle, import_path: str, type_name: str) -> list[str]:
    """
    Collect the literal values of constants declared with a type.

    Args:
        oracle: Source oracle
        import_path: Package declaring the type
        type_name: Bare type name

    Returns:
        Raw literal texts in declaration order
    """
    groups = oracle.parse_unit(import_path)
    if groups is None:
        logger.warning("Could not find package %s while collecting values of enum type %s", import_path, type_name)
        return []

    group = select_group(groups, import_path)

    values = []
    for const in group.consts:
        if const.type_text != type_name:
            continue

        # Assume we have one name and one value.
        if len(const.names) != 1 or len(const.values) != 1:
            logger.warning(
                "A possible constant declaration was found, but has more than one name or value: %s (%s)",
                type_name,
                ", ".join(const.names),
            )
            continue

        value = const.values[0]
        if not value.is_literal:
            logger.warning("Skipping non-literal value %s of enum constant %s", value.text, const.names[0])
            continue

        values.append(value.text)

    return values
