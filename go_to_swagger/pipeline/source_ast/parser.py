"""
Go source parser that builds declaration groups.

Phase 1 of the pipeline: parse Go files with tree-sitter-go and keep only
what the analyzer needs (package clause, imports, type and constant
declarations, comment groups). Function bodies are never inspected except
for the comments they contain.
"""

from __future__ import annotations

from pathlib import Path

import tree_sitter_go as ts_go
from tree_sitter import Language, Node, Parser

from ...utils import strip_quotes
from ..errors import SourceParseError
from .nodes import ConstDecl, ConstValue, DeclarationGroup, FieldDecl, ImportSpec, TypeDecl

GO_LANGUAGE = Language(ts_go.language())

# Node types that go/ast would call a BasicLit
LITERAL_NODE_TYPES = {
    "interpreted_string_literal",
    "raw_string_literal",
    "int_literal",
    "float_literal",
    "imaginary_literal",
    "rune_literal",
}


def comment_text(nodes: list[Node]) -> str:
    """Return the text of a comment group with the comment markers removed."""
    lines: list[str] = []
    for node in nodes:
        raw = node.text.decode("utf8")
        if raw.startswith("//"):
            line = raw[2:]
            if line.startswith(" "):
                line = line[1:]
            lines.append(line.rstrip())
        else:
            body = raw[2:-2] if raw.endswith("*/") else raw[2:]
            lines.extend(part.strip() for part in body.splitlines())

    while lines and not lines[0]:
        lines.pop(0)
    while lines and not lines[-1]:
        lines.pop()

    return "\n".join(lines)


def type_expression(node: Node | None) -> str:
    """Render a type node as normalized type text."""
    if node is None:
        return ""

    kind = node.type
    if kind == "pointer_type":
        return "*" + type_expression(node.named_children[0])
    if kind in ("slice_type", "array_type", "implicit_length_array_type"):
        return "[]" + type_expression(node.child_by_field_name("element"))
    if kind in ("type_identifier", "identifier", "package_identifier", "field_identifier"):
        return node.text.decode("utf8")
    if kind == "qualified_type":
        package = node.child_by_field_name("package")
        name = node.child_by_field_name("name")
        return f"{type_expression(package)}.{type_expression(name)}"
    if kind == "map_type":
        key = type_expression(node.child_by_field_name("key"))
        value = type_expression(node.child_by_field_name("value"))
        return f"map[{key}]{value}"
    if kind == "interface_type":
        return "interface{}"
    if kind == "struct_type":
        return "struct"
    if kind == "parenthesized_type":
        return type_expression(node.named_children[0])
    if kind == "generic_type":
        return type_expression(node.child_by_field_name("type"))

    return f"Unknown<{kind}>"


class GoSourceParser:
    """Parses Go source files into declaration groups."""

    def __init__(self):
        self._parser = Parser(GO_LANGUAGE)

    def parse_directory(self, directory: Path) -> dict[str, DeclarationGroup]:
        """
        Parse every Go file of a directory.

        Args:
            directory: Package directory

        Returns:
            Declaration groups keyed by package name, in file order
        """
        groups: dict[str, DeclarationGroup] = {}
        for path in sorted(Path(directory).glob("*.go")):
            if path.name.startswith((".", "_")):
                continue

            group = self.parse_source(path.read_bytes(), str(path))
            if group.name in groups:
                groups[group.name].merge(group)
            else:
                groups[group.name] = group

        return groups

    def parse_source(self, source: bytes | str, filename: str = "<source>") -> DeclarationGroup:
        """
        Parse a single Go file.

        Args:
            source: File contents
            filename: Name used in error messages

        Returns:
            DeclarationGroup holding the file's declarations

        Raises:
            SourceParseError: If the file has syntax errors or no package clause
        """
        if isinstance(source, str):
            source = source.encode("utf8")

        tree = self._parser.parse(source)
        root = tree.root_node
        if root.has_error:
            error = self._find_error(root)
            line = error.start_point[0] + 1 if error is not None else 0
            raise SourceParseError(f"Failed to parse Go source {filename} at line {line}")

        group = DeclarationGroup(files=[filename])
        group.comments = [comment_text(nodes) for nodes in self._comment_groups(root)]

        for node, doc, trailing in self._documented(root, {"package_clause", "import_declaration", "type_declaration", "const_declaration"}):
            if node.type == "package_clause":
                group.name = self._package_name(node)
            elif node.type == "import_declaration":
                for spec in self._import_specs(node):
                    group.add_import(spec)
            elif node.type == "type_declaration":
                group.types.extend(self._type_declarations(node, doc, trailing))
            elif node.type == "const_declaration":
                group.consts.extend(self._const_declarations(node))

        if not group.name:
            raise SourceParseError(f"Go source {filename} has no package clause")

        return group

    def _find_error(self, node: Node) -> Node | None:
        stack = [node]
        while stack:
            current = stack.pop()
            if current.type == "ERROR" or current.is_missing:
                return current
            stack.extend(reversed(current.children))
        return None

    def _comment_groups(self, root: Node) -> list[list[Node]]:
        """
        Collect all comments of a file, grouped by adjacency.

        Comments separated by at most one line break and no other token share
        a group. A comment following a token on the same line only groups with
        further comments on that line.
        """
        groups: list[list[Node]] = []
        token_row = -1
        separated = True
        trailing = False

        stack = [root]
        while stack:
            node = stack.pop()
            if node.type == "comment":
                row = node.start_point[0]
                previous = groups[-1][-1] if groups else None
                if (
                    previous is None
                    or separated
                    or row > previous.end_point[0] + 1
                    or (trailing and row != previous.end_point[0])
                ):
                    groups.append([node])
                    trailing = row == token_row
                else:
                    groups[-1].append(node)
                separated = False
                continue

            if node.child_count == 0:
                # Statement terminators are not tokens of their own
                if node.type not in ("\n", ";", "\0") and node.end_byte > node.start_byte:
                    token_row = node.end_point[0]
                    separated = True
                continue
            stack.extend(reversed(node.children))

        return groups

    def _documented(self, parent: Node, wanted: set[str]) -> list[tuple[Node, str, str]]:
        """
        Pair the wanted named children of a node with their comments.

        The doc comment is the comment group ending on the line directly
        above the child; the trailing comment starts on the child's last line.

        Returns:
            List of (node, doc text, trailing comment text)
        """
        result: list[tuple[Node, list[Node], list[Node]]] = []
        pending: list[Node] = []
        previous: Node | None = None

        for child in parent.children:
            if not child.is_named:
                continue

            if child.type == "comment":
                if previous is not None and child.start_point[0] == previous.end_point[0]:
                    if result and result[-1][0] == previous:
                        result[-1][2].append(child)
                    continue
                if pending and child.start_point[0] != pending[-1].end_point[0] + 1:
                    pending = []
                pending.append(child)
                continue

            if child.type in wanted:
                doc = pending if pending and pending[-1].end_point[0] == child.start_point[0] - 1 else []
                inner = [c for c in child.children if c.type == "comment"]
                result.append((child, doc, inner))

            pending = []
            previous = child

        return [(node, comment_text(doc), comment_text(trailing)) for node, doc, trailing in result]

    def _package_name(self, node: Node) -> str:
        for child in node.named_children:
            if child.type in ("package_identifier", "identifier"):
                return child.text.decode("utf8")
        return ""

    def _import_specs(self, node: Node) -> list[ImportSpec]:
        specs = []
        stack = [node]
        while stack:
            current = stack.pop()
            if current.type == "import_spec":
                path_node = current.child_by_field_name("path")
                name_node = current.child_by_field_name("name")
                if path_node is None:
                    continue
                path = strip_quotes(path_node.text.decode("utf8"))
                alias = name_node.text.decode("utf8") if name_node is not None else None
                specs.append(ImportSpec(path=path, alias=alias))
                continue
            stack.extend(reversed(current.children))
        return specs

    def _type_declarations(self, node: Node, doc: str, comment: str) -> list[TypeDecl]:
        specs = self._documented(node, {"type_spec", "type_alias"})
        declarations = []
        for spec, spec_doc, spec_comment in specs:
            if len(specs) == 1:
                spec_doc = spec_doc or doc
                spec_comment = spec_comment or comment
            declarations.append(self._type_declaration(spec, spec_doc, spec_comment))
        return declarations

    def _type_declaration(self, spec: Node, doc: str, comment: str) -> TypeDecl:
        name_node = spec.child_by_field_name("name")
        type_node = spec.child_by_field_name("type")

        type_decl = TypeDecl(
            name=name_node.text.decode("utf8") if name_node is not None else "",
            underlying=type_expression(type_node),
            doc=doc,
            comment=comment,
        )

        if type_node is not None and type_node.type == "struct_type":
            for child in type_node.named_children:
                if child.type == "field_declaration_list":
                    type_decl.fields = self._field_declarations(child)

        return type_decl

    def _field_declarations(self, field_list: Node) -> list[FieldDecl]:
        fields = []
        for node, doc, comment in self._documented(field_list, {"field_declaration"}):
            names = [n.text.decode("utf8") for n in node.children_by_field_name("name") if n.is_named]
            type_text = type_expression(node.child_by_field_name("type"))

            # Embedded pointer: the star is an anonymous token of the field itself
            if not names and any(not c.is_named and c.type == "*" for c in node.children):
                type_text = "*" + type_text

            tag_node = node.child_by_field_name("tag")
            fields.append(
                FieldDecl(
                    names=names,
                    type_text=type_text,
                    tag=tag_node.text.decode("utf8") if tag_node is not None else "",
                    doc=doc,
                    comment=comment,
                )
            )
        return fields

    def _const_declarations(self, node: Node) -> list[ConstDecl]:
        declarations = []
        for spec in node.named_children:
            if spec.type != "const_spec":
                continue

            names = [n.text.decode("utf8") for n in spec.children_by_field_name("name") if n.is_named]
            value_list = spec.child_by_field_name("value")
            values = []
            if value_list is not None:
                for value in value_list.named_children:
                    if value.type == "comment":
                        continue
                    values.append(ConstValue(text=value.text.decode("utf8"), is_literal=self._is_literal(value)))

            declarations.append(
                ConstDecl(
                    names=names,
                    type_text=type_expression(spec.child_by_field_name("type")),
                    values=values,
                )
            )
        return declarations

    def _is_literal(self, node: Node) -> bool:
        if node.type in LITERAL_NODE_TYPES:
            return True
        # Negative numbers are unary expressions around a literal
        if node.type == "unary_expression":
            operand = node.child_by_field_name("operand")
            operator = node.child_by_field_name("operator")
            return operand is not None and operand.type in LITERAL_NODE_TYPES and operator is not None and operator.type in ("-", "+")
        return False
