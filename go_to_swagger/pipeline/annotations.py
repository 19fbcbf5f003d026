"""
Comment annotations describing the API and its operations.

An API block documents the service as a whole:

    // @APIVersion 1.0.0
    // @APITitle REST API
    // @APIDescription Example REST API
    // @BasePath /api/v1
    // @SubApi Users [/users]

An operation block documents one route:

    // @Title Get User
    // @Description Return a user, given its id
    // @Accept json
    // @Param id path int true "User ID"
    // @Success 200 {object} model.User "Success"
    // @Failure 404 {object} apicommon.ErrorResponse "Not Found"
    // @Router /users/{id} [get]

Annotations are matched line by line; unrecognized lines are ignored.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace

from .analyzer.classifier import member_for_type
from .analyzer.ir_nodes import Member

API_KEYWORD = "@APITitle"
OPERATION_KEYWORD = "@Router"

_API_VERSION = re.compile(r"@APIVersion\s+([\d.]+)")
_API_TITLE = re.compile(r"@APITitle\s+(.+)")
_API_DESCRIPTION = re.compile(r"@APIDescription\s+(.+)")
_BASE_PATH = re.compile(r"@BasePath\s+([/a-zA-Z0-9-]+)")
_SUB_API = re.compile(r"@SubApi\s+([0-9a-zA-Z]+)\s+\[([/a-zA-Z0-9-]+)\]")

_ACCEPT = re.compile(r"@Accept\s+([\w/]+)")
_DESCRIPTION = re.compile(r"@Description\s+(.+)")
_PARAMETER = re.compile(r'@Param\s+([\w-]+)\s+(\w+)\s+([\w.*\[\]]+)\s+(\w+)\s+"(.+)"')
_RESPONSE = re.compile(r'@(Success|Failure)\s+(\d+)\s+([{}\w]+)\s([\w.*\[\]]+)\s+"(.+)"')
_ROUTER = re.compile(r"@Router\s+([/\w{}-]+)\s+\[(\w+)\]")
_TITLE = re.compile(r"@Title\s+(.+)")


@dataclass
class SubApi:
    """A named group of routes sharing a path prefix."""

    name: str = ""
    path: str = ""


@dataclass
class ApiInfo:
    """Top-level API description."""

    version: str = ""
    title: str = ""
    description: str = ""
    base_path: str = ""
    sub_apis: list[SubApi] = field(default_factory=list)


@dataclass
class Parameter:
    """An operation parameter (``@Param``)."""

    name: str = ""
    location: str = ""  # path, query, header, body, formData
    required: bool = False
    description: str = ""
    member: Member | None = None


@dataclass
class Response:
    """An operation response (``@Success`` or ``@Failure``)."""

    success: bool = False
    status_code: int = 0
    kind: str = ""  # {object} or {array}
    description: str = ""
    member: Member | None = None

    @property
    def is_array(self) -> bool:
        return self.kind == "{array}"


@dataclass
class Operation:
    """A documented route."""

    title: str = ""
    description: str = ""
    accepts: list[str] = field(default_factory=list)
    parameters: list[Parameter] = field(default_factory=list)
    responses: list[Response] = field(default_factory=list)
    path: str = ""
    method: str = ""
    package_path: str = ""  # Package whose comments declared the operation
    tag: str = ""


def extract_comments(comments: list[str], keyword: str) -> list[str]:
    """Return the comment groups mentioning a keyword."""
    return [comment for comment in comments if keyword in comment]


def parse_api_comments(comment_blocks: list[str]) -> ApiInfo:
    """
    Parse API blocks into an ApiInfo.

    Later blocks override single-valued settings of earlier ones; sub-APIs
    accumulate.
    """
    api = ApiInfo()
    for block in comment_blocks:
        for line in block.splitlines():
            match = _API_DESCRIPTION.search(line)
            if match:
                api.description = match.group(1)
                continue

            match = _API_TITLE.search(line)
            if match:
                api.title = match.group(1)
                continue

            match = _API_VERSION.search(line)
            if match:
                api.version = match.group(1)
                continue

            match = _BASE_PATH.search(line)
            if match:
                api.base_path = match.group(1)
                continue

            match = _SUB_API.search(line)
            if match:
                api.sub_apis.append(SubApi(name=match.group(1), path=match.group(2)))
    return api


def parse_operation_comment(comment_block: str, package_path: str = "") -> Operation:
    """
    Parse one operation block.

    Args:
        comment_block: Comment group text, markers stripped
        package_path: Package the comment was found in; parameter and
            response types are resolved relative to it

    Returns:
        Operation; fields missing from the block stay empty
    """
    operation = Operation(package_path=package_path)
    for line in comment_block.splitlines():
        match = _ACCEPT.search(line)
        if match:
            operation.accepts.append(match.group(1))
            continue

        match = _DESCRIPTION.search(line)
        if match:
            operation.description = match.group(1)
            continue

        match = _PARAMETER.search(line)
        if match:
            operation.parameters.append(_parameter(match, package_path))
            continue

        match = _RESPONSE.search(line)
        if match:
            operation.responses.append(_response(match, package_path))
            continue

        match = _ROUTER.search(line)
        if match:
            operation.path = match.group(1)
            operation.method = match.group(2)
            continue

        match = _TITLE.search(line)
        if match:
            operation.title = match.group(1)
    return operation


def _parameter(match: re.Match, package_path: str) -> Parameter:
    name, location, type_ref, required, description = match.groups()
    member = member_for_type(type_ref, name, package_path)
    member.wire_name = name
    return Parameter(
        name=name,
        location=location,
        required=required.lower() == "true",
        description=description,
        member=member,
    )


def _response(match: re.Match, package_path: str) -> Response:
    outcome, status, kind, type_ref, description = match.groups()
    member = member_for_type(type_ref, kind, package_path)
    member.wire_name = kind
    return Response(
        success=outcome.lower() == "success",
        status_code=int(status),
        kind=kind,
        description=description,
        member=member,
    )


def tag_operations(api: ApiInfo, operations: list[Operation]) -> list[Operation]:
    """Tag each operation with the first sub-API whose path prefixes its route."""
    tagged = []
    for operation in operations:
        tag = operation.tag
        for sub_api in api.sub_apis:
            if operation.path.startswith(sub_api.path):
                tag = sub_api.name
                break
        tagged.append(replace(operation, tag=tag))
    return tagged
