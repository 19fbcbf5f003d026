"""
Tests for Swagger document assembly and the run orchestrator.
"""

from __future__ import annotations

import json
import logging

import pytest
from memory_oracle import MemoryOracle, const, embedded, field, named, package, struct

from go_to_swagger.pipeline import GeneratorConfig, NamingScheme, SwaggerGenerator
from go_to_swagger.pipeline.errors import ConfigurationError, UnitSelectionError, UnresolvedTypeError

API = "github.com/acme/api"
MODEL = "github.com/acme/api/model"
COMMON = "github.com/acme/common"

API_COMMENT = """@APIVersion 2.1.0
@APITitle Acme API
@APIDescription Everything Acme
@BasePath /api/v1
@SubApi Users [/users]"""

GET_USER = """@Title Get User
@Description Return a user
@Accept json
@Param id path int64 true "User ID"
@Success 200 {object} model.User "Success"
@Failure 404 {object} common.Error "Not Found"
@Router /users/{id} [get]"""

LIST_USERS = """@Title List Users
@Param color query model.Color false "Filter"
@Success 200 {array} model.User "Users"
@Router /users [get]"""

CREATE_USER = """@Title Create User
@Param user body model.User true "The user"
@Success 201 {object} model.User "Created"
@Router /users [post]"""


def make_oracle():
    return MemoryOracle(
        {
            API: package(
                "main",
                imports={MODEL: [], COMMON: []},
                comments=[API_COMMENT, GET_USER, LIST_USERS, CREATE_USER, "unrelated"],
            ),
            MODEL: package(
                "model",
                imports={COMMON: []},
                types=[
                    struct(
                        "User",
                        embedded("common.Entity"),
                        field("Name", "string", '`json:"name" validate:"required,min=1"`'),
                        field("Color", "Color", '`json:"color"`'),
                        field("Tags", "[]string", '`json:"tags,omitempty"`'),
                    ),
                    named("Color", "string"),
                ],
                consts=[const("Red", "Color", '"red"'), const("Blue", "Color", '"blue"')],
            ),
            COMMON: package(
                "common",
                types=[
                    struct("Entity", field("ID", "int64", '`json:"id"`')),
                    struct("Error", field("Message", "string", '`json:"message"`')),
                ],
            ),
        }
    )


def build(naming=NamingScheme.FULL, oracle=None):
    config = GeneratorConfig(root_import_path=API, naming=naming)
    return SwaggerGenerator(config, oracle or make_oracle()).build()


class TestDocument:
    def test_header(self):
        document = build()
        assert document["swagger"] == "2.0"
        assert document["info"] == {"title": "Acme API", "version": "2.1.0", "description": "Everything Acme"}
        assert document["basePath"] == "/api/v1"

    def test_paths_sorted_with_methods(self):
        paths = build()["paths"]
        assert list(paths) == ["/users", "/users/{id}"]
        assert list(paths["/users"]) == ["get", "post"]

    def test_operation_fields(self):
        operation = build()["paths"]["/users/{id}"]["get"]
        assert operation["summary"] == "Get User"
        assert operation["description"] == "Return a user"
        assert operation["consumes"] == ["json"]
        assert operation["produces"] == ["json"]
        assert operation["tags"] == ["Users"]

    def test_non_body_parameter_is_primitive(self):
        parameter = build()["paths"]["/users/{id}"]["get"]["parameters"][0]
        assert parameter == {
            "name": "id",
            "in": "path",
            "required": True,
            "description": "User ID",
            "type": "integer",
            "format": "int64",
        }

    def test_body_parameter_has_schema(self):
        parameter = build()["paths"]["/users"]["post"]["parameters"][0]
        assert parameter["in"] == "body"
        assert parameter["schema"]["$ref"] == "#/definitions/github.com.acme.api.model.User"
        assert "type" not in parameter

    def test_non_primitive_query_parameter_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING):
            parameter = build()["paths"]["/users"]["get"]["parameters"][0]
        assert "type" not in parameter
        assert "color" in caplog.text

    def test_responses(self):
        responses = build()["paths"]["/users/{id}"]["get"]["responses"]
        assert list(responses) == ["200", "404"]
        assert responses["200"] == {
            "description": "Success",
            "schema": {"$ref": "#/definitions/github.com.acme.api.model.User"},
        }
        assert responses["404"]["schema"]["$ref"] == "#/definitions/github.com.acme.common.Error"

    def test_array_response(self):
        response = build()["paths"]["/users"]["get"]["responses"]["200"]
        assert response["schema"] == {
            "type": "array",
            "items": {"$ref": "#/definitions/github.com.acme.api.model.User"},
        }

    def test_definitions(self):
        definitions = build()["definitions"]
        assert list(definitions) == [
            "github.com.acme.api.model.Color",
            "github.com.acme.api.model.User",
            "github.com.acme.common.Entity",
            "github.com.acme.common.Error",
        ]
        user = definitions["github.com.acme.api.model.User"]
        assert list(user["properties"]) == ["name", "color", "tags", "id"]
        assert user["required"] == ["name"]
        assert user["properties"]["name"]["minLength"] == 1
        assert definitions["github.com.acme.api.model.Color"]["enum"] == ["red", "blue"]

    def test_partial_naming(self):
        document = build(NamingScheme.PARTIAL)
        assert "model.User" in document["definitions"]
        assert document["paths"]["/users"]["post"]["parameters"][0]["schema"]["$ref"] == "#/definitions/model.User"

    def test_generate_is_tab_indented_json(self):
        config = GeneratorConfig(root_import_path=API)
        output = SwaggerGenerator(config, make_oracle()).generate()
        assert output.startswith('{\n\t"swagger": "2.0"')
        assert json.loads(output)["info"]["title"] == "Acme API"

    def test_output_is_stable_across_runs(self):
        config = GeneratorConfig(root_import_path=API)
        first = SwaggerGenerator(config, make_oracle()).generate()
        second = SwaggerGenerator(config, make_oracle()).generate()
        assert first == second


class TestErrors:
    def test_missing_root_package(self):
        config = GeneratorConfig(root_import_path="github.com/acme/missing")
        with pytest.raises(UnitSelectionError):
            SwaggerGenerator(config, make_oracle()).build()

    def test_missing_package_path(self):
        with pytest.raises(ConfigurationError):
            SwaggerGenerator(GeneratorConfig(), make_oracle())

    def test_unresolved_response_type(self):
        oracle = make_oracle()
        oracle.packages[API]["main"].comments.append('@Success 200 {object} model.Nothing "x"\n@Router /x [get]')
        with pytest.raises(UnresolvedTypeError, match="model.Nothing"):
            build(oracle=oracle)

    def test_ignored_packages_are_not_scanned(self):
        oracle = make_oracle()
        oracle.packages[API]["main"].comments = [API_COMMENT]
        config = GeneratorConfig(root_import_path=API, ignored_packages=["common"])
        SwaggerGenerator(config, oracle).build()
        assert COMMON not in oracle.requests
