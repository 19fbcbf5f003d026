"""
Validation constraints parsed from ``validate`` struct tags.

The keywords mirror the validator package (gopkg.in/go-playground/validator);
each accessor answers the question the schema side needs, using the JSON
schema validation vocabulary (minimum/maximum, minLength/maxLength,
minItems/maxItems).

None means "unconstrained" and is distinct from zero. An operand that does
not parse as a finite number (including ``inf`` and ``nan``) is treated as
unconstrained and logged.
"""

from __future__ import annotations

import logging
import math
import re

logger = logging.getLogger(__name__)

_VALIDATE_TAG = re.compile(r'validate:"([^"]+)"')


class ValidationMap(dict):
    """Mapping of validation keyword to raw operand."""

    def is_required(self) -> bool:
        """Whether the value must not be the type's zero value."""
        return "required" in self

    def equals(self) -> tuple[str, bool]:
        """Raw ``eq`` operand and whether it was present."""
        if "eq" not in self:
            return "", False
        return self["eq"], True

    def length(self) -> float | None:
        """Exact length, size or value (``len``)."""
        return self._number("len")

    def minimum(self) -> float | None:
        """Inclusive lower bound; ``min`` takes precedence over ``gte``."""
        value = self._number("min")
        if value is None:
            value = self._number("gte")
        return value

    def maximum(self) -> float | None:
        """Inclusive upper bound; ``max`` takes precedence over ``lte``."""
        value = self._number("max")
        if value is None:
            value = self._number("lte")
        return value

    def greater_than(self) -> float | None:
        """Exclusive lower bound (``gt``)."""
        return self._number("gt")

    def less_than(self) -> float | None:
        """Exclusive upper bound (``lt``)."""
        return self._number("lt")

    def _number(self, keyword: str) -> float | None:
        if keyword not in self:
            return None
        try:
            value = float(self[keyword])
        except ValueError:
            logger.warning("Ignoring non-numeric validation operand %s=%r", keyword, self[keyword])
            return None

        if not math.isfinite(value):
            logger.warning("Ignoring non-finite validation operand %s=%r", keyword, self[keyword])
            return None
        return value


def parse_validation_expression(expression: str) -> ValidationMap:
    """Parse ``required,min=1,max=10`` into a ValidationMap."""
    validations = ValidationMap()
    for item in expression.split(","):
        if not item:
            continue
        keyword, _, operand = item.partition("=")
        validations[keyword] = operand
    return validations


def parse_validate_tag(tag: str) -> tuple[ValidationMap, ValidationMap]:
    """
    Parse the ``validate`` part of a struct tag.

    Constraints after a ``dive`` keyword apply to the elements of a
    collection (or the values of a map) rather than to the container.

    Args:
        tag: Raw struct tag

    Returns:
        (container constraints, element constraints); both empty when the
        tag has no validate key
    """
    match = _VALIDATE_TAG.search(tag)
    if not match:
        return ValidationMap(), ValidationMap()

    expression = match.group(1)
    words = expression.split(",")
    if "dive" in words:
        index = words.index("dive")
        return (
            parse_validation_expression(",".join(words[:index])),
            parse_validation_expression(",".join(words[index + 1 :])),
        )

    return parse_validation_expression(expression), ValidationMap()
