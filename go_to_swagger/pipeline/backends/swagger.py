"""
Swagger 2.0 document assembly.

See https://github.com/OAI/OpenAPI-Specification/blob/master/versions/2.0.md
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ..analyzer.ir_nodes import CollectionMember, Definition, ScalarMember
from ..analyzer.type_expr import primitive_info
from ..annotations import ApiInfo, Operation, Parameter, Response
from ..config import GeneratorConfig
from .schema import SchemaBackend

logger = logging.getLogger(__name__)

SWAGGER_VERSION = "2.0"

# Path item slots, in output order
HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch")


class SwaggerBackend:
    """Assembles the Swagger document from the API, its operations and the definitions."""

    def __init__(self, config: GeneratorConfig):
        self.config = config
        self.schemas = SchemaBackend(config.naming)

    def generate(self, api: ApiInfo, operations: list[Operation], definitions: Mapping[str, Definition]) -> dict[str, Any]:
        """
        Build the document.

        Args:
            api: API description
            operations: Tagged operations whose types are defined
            definitions: Read-only snapshot of the definition store

        Returns:
            Document as plain dicts and lists
        """
        document: dict[str, Any] = {
            "swagger": SWAGGER_VERSION,
            "info": self.info(api),
        }
        if api.base_path:
            document["basePath"] = api.base_path

        document["paths"] = self.paths(operations)
        document["definitions"] = self.schemas.definitions(definitions)
        return document

    def info(self, api: ApiInfo) -> dict[str, Any]:
        info = {"title": api.title, "version": api.version}
        if api.description:
            info["description"] = api.description
        return info

    def paths(self, operations: list[Operation]) -> dict[str, Any]:
        """Group operations into path items, sorted by path."""
        items: dict[str, dict[str, Any]] = {}
        for operation in operations:
            method = operation.method.lower()
            if method not in HTTP_METHODS:
                logger.warning("Skipping operation %s with unsupported method %r", operation.path, operation.method)
                continue

            item = items.setdefault(operation.path, {})
            if method in item:
                logger.warning("Operation %s %s is declared more than once; keeping the last one", method.upper(), operation.path)
            item[method] = self.operation(operation)

        return {path: {method: items[path][method] for method in HTTP_METHODS if method in items[path]} for path in sorted(items)}

    def operation(self, operation: Operation) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if operation.title:
            result["summary"] = operation.title
        if operation.description:
            result["description"] = operation.description
        if operation.accepts:
            result["consumes"] = list(operation.accepts)
            result["produces"] = list(operation.accepts)
        if operation.tag:
            result["tags"] = [operation.tag]
        if operation.parameters:
            result["parameters"] = [self.parameter(parameter) for parameter in operation.parameters]

        result["responses"] = {str(response.status_code): self.response(response) for response in operation.responses}
        return result

    def parameter(self, parameter: Parameter) -> dict[str, Any]:
        """
        Body parameters carry a schema; every other location carries a
        primitive type.
        """
        result: dict[str, Any] = {
            "name": parameter.name,
            "in": parameter.location,
            "required": parameter.required,
        }
        if parameter.description:
            result["description"] = parameter.description

        if parameter.location == "body":
            result["schema"] = self.schemas.member_schema(parameter.member)
            return result

        member = parameter.member
        if isinstance(member, CollectionMember) and isinstance(member.element, ScalarMember):
            info = primitive_info(member.element.type_ref)
            if info is not None:
                result["type"] = "array"
                result["items"] = self._primitive(info.type, info.format)
                return result

        info = primitive_info(member.type_ref)
        if info is None:
            logger.warning("Non-primitive parameter %s of type %s outside the request body", parameter.name, member.type_ref)
            return result

        result.update(self._primitive(info.type, info.format))
        return result

    def response(self, response: Response) -> dict[str, Any]:
        result: dict[str, Any] = {"description": response.description}

        schema = self.schemas.member_schema(response.member)
        schema.pop("title", None)
        if response.is_array:
            schema = {"type": "array", "items": schema}

        result["schema"] = schema
        return result

    def _primitive(self, type_name: str, type_format: str) -> dict[str, str]:
        result = {"type": type_name}
        if type_format:
            result["format"] = type_format
        return result
