"""
Backends module.

Contains schema derivation and Swagger document assembly.
"""

from __future__ import annotations

from .schema import SchemaBackend, enum_value
from .swagger import HTTP_METHODS, SWAGGER_VERSION, SwaggerBackend

__all__ = [
    "SchemaBackend",
    "enum_value",
    "HTTP_METHODS",
    "SWAGGER_VERSION",
    "SwaggerBackend",
]
