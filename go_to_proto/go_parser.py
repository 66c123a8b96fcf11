"""
This module wraps the tree-sitter Go grammar. It parses source files into
syntax trees and reads struct declarations out of them into the go_types model.
"""

# Standard
from typing import Iterator, List, Optional, Tuple

# Third Party
from tree_sitter import Language, Node, Parser, Tree
import tree_sitter_go

# First Party
import alog

# Local
from .go_types import (
    AtomicType,
    GoField,
    GoStruct,
    GoTypeExpr,
    OptionalOf,
    OtherType,
    QualifiedType,
    SequenceOf,
)

log = alog.use_channel("GOPRS")


## Globals #####################################################################

GO_LANGUAGE = Language(tree_sitter_go.language())

# Node kinds that hold a list of elements of a single type
_SEQUENCE_NODE_TYPES = ("slice_type", "array_type", "implicit_length_array_type")

## Errors ######################################################################


class GoParseError(ValueError):
    """Raised when a Go source unit cannot be read or is not valid Go"""

    def __init__(
        self,
        filename: str,
        reason: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        self.filename = filename
        self.reason = reason
        self.line = line
        self.column = column
        location = filename
        if line is not None:
            location += f":{line}:{column}"
        super().__init__(f"{location}: {reason}")


## Interface ###################################################################


def parse_go_source(source: bytes, filename: str = "<source>") -> Tree:
    """Parse Go source code into a syntax tree

    Args:
        source:  bytes
            The raw content of the source unit
        filename:  str
            The name used when reporting errors

    Returns:
        tree:  Tree
            The tree-sitter syntax tree with comments preserved

    Raises:
        GoParseError: If the source contains syntax errors
    """
    log.debug2("Parsing %s", filename)
    tree = Parser(GO_LANGUAGE).parse(source)
    if tree.root_node.has_error:
        error_node = _first_error_node(tree.root_node) or tree.root_node
        if error_node.is_missing:
            reason = f"syntax error: missing {error_node.type}"
        else:
            reason = f"syntax error: unexpected {_node_text(error_node)!r}"
        raise GoParseError(
            filename,
            reason,
            line=error_node.start_point.row + 1,
            column=error_node.start_point.column + 1,
        )
    return tree


def parse_go_file(filename: str) -> Tree:
    """Read and parse a single Go file

    Raises:
        GoParseError: If the file cannot be read or contains syntax errors
    """
    try:
        with open(filename, "rb") as handle:
            source = handle.read()
    except OSError as err:
        raise GoParseError(filename, err.strerror or str(err)) from err
    return parse_go_source(source, filename)


def iter_type_specs(tree: Tree) -> Iterator[Tuple[Node, Tuple[str, ...]]]:
    """Iterate the top-level type specs of a file in source order along with
    the doc comment of the enclosing type declaration
    """
    for decl in tree.root_node.named_children:
        if decl.type != "type_declaration":
            continue
        decl_doc = doc_comment_lines(decl)
        for spec in decl.named_children:
            if spec.type in ("type_spec", "type_alias"):
                yield spec, decl_doc


def is_struct_type(type_spec: Node) -> bool:
    """Check whether a type spec declares a new struct type. Aliases never do."""
    if type_spec.type != "type_spec":
        return False
    type_node = type_spec.child_by_field_name("type")
    return type_node is not None and type_node.type == "struct_type"


def struct_from_type_spec(
    type_spec: Node,
    decl_doc: Tuple[str, ...] = (),
) -> GoStruct:
    """Read a struct type spec into a GoStruct. The spec's own doc comment
    wins over the doc of a grouped type declaration.
    """
    name = _node_text(type_spec.child_by_field_name("name"))
    doc = doc_comment_lines(type_spec) or decl_doc
    fields: List[GoField] = []
    field_list = _first_child_of_type(
        type_spec.child_by_field_name("type"), "field_declaration_list"
    )
    if field_list is not None:
        for field_decl in field_list.named_children:
            if field_decl.type == "field_declaration":
                fields.extend(_fields_from_declaration(field_decl, len(fields)))
    log.debug2("Found struct %s with %d fields", name, len(fields))
    return GoStruct(name=name, fields=tuple(fields), doc=doc)


def type_expr_from_node(node: Optional[Node]) -> GoTypeExpr:
    """Convert a type node into the closed set of type expression shapes"""
    if node is None:
        return OtherType("missing")
    if node.type == "type_identifier":
        return AtomicType(_node_text(node))
    if node.type in _SEQUENCE_NODE_TYPES:
        return SequenceOf(type_expr_from_node(node.child_by_field_name("element")))
    if node.type == "pointer_type":
        return OptionalOf(type_expr_from_node(_last_named_child(node)))
    if node.type == "qualified_type":
        return QualifiedType(
            package=_node_text(node.child_by_field_name("package")),
            name=_node_text(node.child_by_field_name("name")),
        )
    if node.type == "parenthesized_type":
        return type_expr_from_node(_last_named_child(node))
    return OtherType(node.type)


def doc_comment_lines(node: Node) -> Tuple[str, ...]:
    """Get the lines of the comment group directly above a node.

    The group is the run of comments ending on the line before the node with
    no blank lines in between. A comment that trails another token on the same
    line (a field, an opening `{` or `(`) ends the group.
    """
    comments = []
    next_row = node.start_point.row
    sibling = node.prev_named_sibling
    while sibling is not None and sibling.type == "comment":
        if sibling.end_point.row != next_row - 1:
            break
        previous = _preceding_token(sibling)
        if (
            previous is not None
            and previous.type != "comment"
            and previous.end_point.row == sibling.start_point.row
        ):
            break
        comments.append(sibling)
        next_row = sibling.start_point.row
        sibling = sibling.prev_named_sibling

    lines = []
    for comment in reversed(comments):
        lines.extend(_node_text(comment).splitlines())
    return tuple(lines)


## Impl ########################################################################


def _fields_from_declaration(field_decl: Node, position: int) -> List[GoField]:
    """Expand one field declaration into a field per declared name. The doc
    comment goes with the first name only.
    """
    type_expr = type_expr_from_node(field_decl.child_by_field_name("type"))
    doc = doc_comment_lines(field_decl)
    names = [_node_text(name) for name in field_decl.children_by_field_name("name")]
    if not names:
        log.debug3("Found embedded field %s", type_expr)
        return [GoField(name=None, type_expr=type_expr, position=position, doc=doc)]
    return [
        GoField(
            name=name,
            type_expr=type_expr,
            position=position + offset,
            doc=doc if offset == 0 else (),
        )
        for offset, name in enumerate(names)
    ]


def _first_error_node(node: Node) -> Optional[Node]:
    """Depth-first search for the first ERROR or MISSING node"""
    if node.is_error or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error_node(child)
            if found is not None:
                return found
    return None


def _preceding_token(node: Node) -> Optional[Node]:
    """Get the sibling before a node, including anonymous tokens like `{`.
    Newline terminators end on the following line, so they are skipped.
    """
    previous = node.prev_sibling
    while previous is not None and previous.type == "\n":
        previous = previous.prev_sibling
    return previous


def _first_child_of_type(node: Optional[Node], node_type: str) -> Optional[Node]:
    if node is None:
        return None
    for child in node.named_children:
        if child.type == node_type:
            return child
    return None


def _last_named_child(node: Node) -> Optional[Node]:
    named = [child for child in node.named_children if child.type != "comment"]
    return named[-1] if named else None


def _node_text(node: Optional[Node]) -> str:
    if node is None:
        return ""
    return node.text.decode("utf-8", errors="replace")
