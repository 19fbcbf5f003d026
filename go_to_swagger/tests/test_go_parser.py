"""
Tests for the Go source parser, the source locator and the source oracle.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from go_to_swagger.pipeline.errors import SourceParseError, UnitSelectionError
from go_to_swagger.pipeline.source_ast import DeclarationGroup, GoSourceOracle, GoSourceParser, SourceLocator, select_group

ACME = Path(__file__).parent / "test_data" / "acme"

SOURCE = """// Package model holds the data types.
package model

import (
	"time"

	c "github.com/acme/common"
	_ "github.com/lib/pq"
)

// Account of a user.
// @desc "An account"
type Account struct {
	c.Entity
	*Base

	ID, Ref string `json:"id" validate:"required"`
	// @deprecated
	Name    string            `json:"name"` // @desc "Display name"
	Tags    []string          `json:"tags"`
	Ptr     *Account
	Meta    map[string][]*int
	Any     interface{}
	Fixed   [4]byte
	Created time.Time
	Inline  struct{ A int }
}

type (
	Color string
	Level int
)

const (
	Red Color = "red"
	Blue Color = `blue`
	Low Level = iota
	Minus Level = -1
	A, B Level = 1, 2
	untyped = 3
)

func helper() {
	// @Router /inner [get]
}
"""


@pytest.fixture
def parser():
    return GoSourceParser()


@pytest.fixture
def group(parser):
    return parser.parse_source(SOURCE, "account.go")


class TestParseSource:
    def test_package_name(self, group):
        assert group.name == "model"
        assert group.files == ["account.go"]

    def test_imports_keep_explicit_aliases(self, group):
        assert group.imports == {"time": [], "github.com/acme/common": ["c"]}

    def test_type_doc_comment(self, group):
        account = group.find_type("Account")
        assert account.underlying == "struct"
        assert account.doc == 'Account of a user.\n@desc "An account"'

    def test_embedded_fields(self, group):
        account = group.find_type("Account")
        embedded = [f.type_text for f in account.fields if f.is_embedded]
        assert embedded == ["c.Entity", "*Base"]

    def test_field_types(self, group):
        account = group.find_type("Account")
        types = {f.names[0]: f.type_text for f in account.fields if not f.is_embedded}
        assert types == {
            "ID": "string",
            "Name": "string",
            "Tags": "[]string",
            "Ptr": "*Account",
            "Meta": "map[string][]*int",
            "Any": "interface{}",
            "Fixed": "[]byte",
            "Created": "time.Time",
            "Inline": "struct",
        }

    def test_multi_name_field(self, group):
        account = group.find_type("Account")
        first = [f for f in account.fields if not f.is_embedded][0]
        assert first.names == ["ID", "Ref"]
        assert first.tag == '`json:"id" validate:"required"`'

    def test_field_comments(self, group):
        account = group.find_type("Account")
        name = [f for f in account.fields if f.names == ["Name"]][0]
        assert name.doc == "@deprecated"
        assert name.comment == '@desc "Display name"'

    def test_grouped_type_declarations(self, group):
        assert group.find_type("Color").underlying == "string"
        assert group.find_type("Level").underlying == "int"
        assert group.find_type("Missing") is None

    def test_constants(self, group):
        consts = {tuple(c.names): c for c in group.consts}

        assert consts[("Red",)].type_text == "Color"
        assert consts[("Red",)].values[0].text == '"red"'
        assert consts[("Blue",)].values[0].text == "`blue`"
        assert consts[("Minus",)].values[0].is_literal
        assert not consts[("Low",)].values[0].is_literal
        assert [v.text for v in consts[("A", "B")].values] == ["1", "2"]
        assert consts[("untyped",)].type_text == ""

    def test_comments_include_function_bodies(self, group):
        assert "Package model holds the data types." in group.comments
        assert "@Router /inner [get]" in group.comments

    def test_syntax_error(self, parser):
        with pytest.raises(SourceParseError, match="broken.go"):
            parser.parse_source("package model\n\ntype struct {", "broken.go")

    def test_block_comments(self, parser):
        group = parser.parse_source("/*\n  @APITitle Block\n*/\npackage main\n")
        assert group.comments == ["@APITitle Block"]

    def test_multi_name_declarations_keep_only_identifiers(self, parser):
        group = parser.parse_source(
            "package model\n\ntype Level int\n\nconst (\n\tA, B Level = 1, 2\n)\n\ntype Pair struct {\n\tX, Y, Z int\n}\n"
        )

        assert [c.names for c in group.consts] == [["A", "B"]]
        assert group.find_type("Pair").fields[0].names == ["X", "Y", "Z"]

    def test_trailing_comment_ends_its_group(self, parser):
        group = parser.parse_source(
            "package main\n\n"
            "var limit = 10 // @Title Limit\n"
            "// @Router /items [get]\n"
            "func List() {}\n"
        )
        assert group.comments == ["@Title Limit", "@Router /items [get]"]

    def test_adjacent_comments_share_a_group(self, parser):
        group = parser.parse_source(
            "package main\n\n"
            "// @Title List\n"
            "// @Router /items [get]\n"
            "func List() {}\n\n"
            "// @Title Get\n\n"
            "// @Router /items/{id} [get]\n"
            "func Get() {}\n"
        )
        assert group.comments == ["@Title List\n@Router /items [get]", "@Title Get", "@Router /items/{id} [get]"]


class TestParseDirectory:
    def test_skips_underscore_files(self, parser):
        groups = parser.parse_directory(ACME / "model")
        assert list(groups) == ["model"]
        assert [Path(f).name for f in groups["model"].files] == ["group.go", "user.go"]

    def test_test_packages_form_their_own_group(self, parser):
        groups = parser.parse_directory(ACME / "handlers")
        assert set(groups) == {"handlers", "handlers_test"}
        assert groups["handlers_test"].find_type("Fixture") is not None
        assert groups["handlers"].find_type("Fixture") is None

    def test_merges_files_of_a_package(self, parser):
        model = parser.parse_directory(ACME / "model")["model"]
        assert model.find_type("User") is not None
        assert model.find_type("Group") is not None
        assert model.imports["github.com/acme/common"] == []


class TestSelectGroup:
    def test_skips_test_groups(self):
        groups = {"handlers_test": DeclarationGroup(name="handlers_test"), "handlers": DeclarationGroup(name="handlers")}
        assert select_group(groups, "x").name == "handlers"

    def test_main_gives_way(self):
        groups = {"main": DeclarationGroup(name="main"), "tools": DeclarationGroup(name="tools")}
        assert select_group(groups, "x").name == "tools"

    def test_main_alone(self):
        assert select_group({"main": DeclarationGroup(name="main")}, "x").name == "main"

    def test_no_group(self):
        with pytest.raises(UnitSelectionError):
            select_group({"api_test": DeclarationGroup(name="api_test")}, "github.com/acme/api")


class TestSourceLocator:
    def test_module_root(self):
        locator = SourceLocator([str(ACME)])
        assert locator.locate("github.com/acme/api") == ACME
        assert locator.locate("github.com/acme/api/model") == ACME / "model"

    def test_vendor_directory(self):
        locator = SourceLocator([str(ACME)])
        assert locator.locate("github.com/acme/common") == ACME / "vendor" / "github.com" / "acme" / "common"

    def test_missing_package(self):
        locator = SourceLocator([str(ACME)])
        assert locator.locate("net/http") is None
        assert locator.locate("github.com/acme/api/nothing") is None

    def test_src_directory(self, tmp_path):
        package_dir = tmp_path / "example.com" / "lib"
        package_dir.mkdir(parents=True)
        (package_dir / "lib.go").write_text("package lib\n")

        locator = SourceLocator([str(tmp_path)])
        assert locator.modules == []
        assert locator.locate("example.com/lib") == package_dir

    def test_standard_library_root(self, tmp_path):
        (tmp_path / "go.mod").write_text("module std\n\ngo 1.22\n")
        (tmp_path / "time").mkdir()
        (tmp_path / "time" / "time.go").write_text("package time\n")
        vendored = tmp_path / "vendor" / "golang.org" / "x" / "net" / "dns"
        vendored.mkdir(parents=True)
        (vendored / "dns.go").write_text("package dns\n")

        locator = SourceLocator([str(ACME), str(tmp_path)])

        assert locator.locate("time") == tmp_path / "time"
        assert locator.locate("golang.org/x/net/dns") == vendored

    def test_lookup_order(self, tmp_path):
        locator = SourceLocator([str(ACME), str(tmp_path)])
        assert locator.candidates("github.com/acme/api/model") == [
            ACME / "model",
            ACME / "vendor" / "github.com/acme/api/model",
            tmp_path / "github.com/acme/api/model",
        ]


class TestGoSourceOracle:
    def test_parse_unit(self):
        oracle = GoSourceOracle([str(ACME)])
        groups = oracle.parse_unit("github.com/acme/api/model")
        assert list(groups) == ["model"]

    def test_missing_unit(self):
        oracle = GoSourceOracle([str(ACME)])
        assert oracle.parse_unit("fmt") is None

    def test_results_are_memoized(self):
        oracle = GoSourceOracle([str(ACME)])
        first = oracle.parse_unit("github.com/acme/api/model")
        assert oracle.parse_unit("github.com/acme/api/model") is first
