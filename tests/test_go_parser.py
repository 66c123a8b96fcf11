"""
Tests for go_parser
"""

# Third Party
import pytest

# Local
from .helpers import go_file, sample_go_source
from go_to_proto.go_parser import (
    GoParseError,
    is_struct_type,
    iter_type_specs,
    parse_go_file,
    parse_go_source,
    struct_from_type_spec,
)
from go_to_proto.go_types import (
    AtomicType,
    OptionalOf,
    OtherType,
    QualifiedType,
    SequenceOf,
)

## Helpers #####################################################################


def parse_structs(source: str):
    """Parse the source and read every struct type spec"""
    tree = parse_go_source(source.encode("utf-8"))
    return {
        go_struct.name: go_struct
        for go_struct in (
            struct_from_type_spec(type_spec, decl_doc)
            for type_spec, decl_doc in iter_type_specs(tree)
            if is_struct_type(type_spec)
        )
    }


def field_types(source: str, struct_name: str):
    return {
        field.name: field.type_expr for field in parse_structs(source)[struct_name].fields
    }


## Happy Path ##################################################################


def test_parse_go_file(go_file):
    """Make sure a file on disk is parsed into a tree"""
    tree = parse_go_file(go_file())
    assert tree.root_node.type == "source_file"
    assert not tree.root_node.has_error


def test_type_specs_in_source_order():
    """Make sure all type specs are found in order and only structs qualify"""
    tree = parse_go_source(sample_go_source.encode("utf-8"))
    specs = list(iter_type_specs(tree))
    names = [spec.child_by_field_name("name").text.decode() for spec, _ in specs]
    assert names == ["Person", "Reader", "ID", "Event"]
    assert [is_struct_type(spec) for spec, _ in specs] == [True, False, False, True]


def test_type_expressions():
    """Make sure each type shape is read into the right expression"""
    types = field_types(
        """package shapes

type Everything struct {
    A map[string]int
    B chan int
    C func() error
    D interface{}
    E struct{ X int }
    F [3]int
    G time.Time
    H *Other
    I [][]string
    J []*string
    K bool
}
""",
        "Everything",
    )
    assert types == {
        "A": OtherType("map_type"),
        "B": OtherType("channel_type"),
        "C": OtherType("function_type"),
        "D": OtherType("interface_type"),
        "E": OtherType("struct_type"),
        "F": SequenceOf(AtomicType("int")),
        "G": QualifiedType("time", "Time"),
        "H": OptionalOf(AtomicType("Other")),
        "I": SequenceOf(SequenceOf(AtomicType("string"))),
        "J": SequenceOf(OptionalOf(AtomicType("string"))),
        "K": AtomicType("bool"),
    }


def test_field_doc_comments():
    """Make sure only the comment group directly above a field is its doc"""
    person = parse_structs(sample_go_source)["Person"]
    docs = {field.name: field.doc for field in person.fields}
    assert docs == {
        "Name": ("// Name is the full name",),
        "Age": (),
        "Tags": ("/* block", "       comment */"),
        "Email": (),
    }


def test_struct_doc_comment():
    """Make sure the comment above a type declaration is the struct doc"""
    structs = parse_structs(sample_go_source)
    assert structs["Person"].doc == ("// Person is somebody", "// with two lines")
    assert structs["Event"].doc == ()


def test_grouped_type_declaration():
    """Make sure specs in a type group use their own doc, falling back to the
    group doc, and aliases are not structs
    """
    structs = parse_structs(
        """package group

// Group doc
type (
    // Alpha doc
    Alpha struct {
        A string
    }
    Beta struct {
        B int
    }
    Gamma = Alpha
    Delta int
)
"""
    )
    assert list(structs) == ["Alpha", "Beta"]
    assert structs["Alpha"].doc == ("// Alpha doc",)
    assert structs["Beta"].doc == ("// Group doc",)


def test_comment_after_opening_brace_is_not_doc():
    """Make sure a comment on the line of a struct's `{` is not taken as the
    first field's doc comment
    """
    opener = parse_structs(
        """package braces

type A struct { // opens A
    X int
    // Y doc
    Y int
}
"""
    )["A"]
    assert [(field.name, field.doc) for field in opener.fields] == [
        ("X", ()),
        ("Y", ("// Y doc",)),
    ]


def test_comment_after_opening_paren_is_not_doc():
    """Make sure a comment on the line of a type group's `(` is not taken as
    the first spec's doc comment
    """
    structs = parse_structs(
        """package group

type ( // the group
    Alpha struct {
        A string
    }
)
"""
    )
    assert structs["Alpha"].doc == ()


def test_alias_of_struct_is_not_a_struct():
    """Make sure an alias to a struct literal is not treated as a record"""
    assert parse_structs("package alias\n\ntype A = struct{ X int }\n") == {}


def test_multiple_names_per_field():
    """Make sure a field declaration with several names yields one field per
    name with the doc on the first one
    """
    point = parse_structs(
        """package geo

type Point struct {
    // Coordinates
    X, Y float64
    Label string
}
"""
    )["Point"]
    assert [(f.name, f.position, f.doc) for f in point.fields] == [
        ("X", 0, ("// Coordinates",)),
        ("Y", 1, ()),
        ("Label", 2, ()),
    ]
    assert point.fields[1].type_expr == AtomicType("float64")


def test_embedded_fields():
    """Make sure embedded fields are kept without a name"""
    event = parse_structs(sample_go_source)["Event"]
    assert [field.name for field in event.fields] == [None, None, "At", "Count"]
    assert event.fields[0].type_expr == AtomicType("Person")
    assert event.fields[1].type_expr == QualifiedType("time", "Location")


## Error Cases #################################################################


def test_parse_go_source_syntax_error():
    """Make sure invalid Go is reported with a location"""
    with pytest.raises(GoParseError) as exc_info:
        parse_go_source(b"package broken\n\nfunc {{{ )))\n", "broken.go")
    err = exc_info.value
    assert err.filename == "broken.go"
    assert err.line is not None and err.line >= 1
    assert err.column is not None and err.column >= 1
    assert str(err).startswith("broken.go:")
    assert isinstance(err, ValueError)


def test_parse_go_file_missing_file(tmp_path):
    """Make sure an unreadable file is reported as a parse failure"""
    filename = str(tmp_path / "missing.go")
    with pytest.raises(GoParseError) as exc_info:
        parse_go_file(filename)
    assert exc_info.value.filename == filename
    assert exc_info.value.line is None
    assert isinstance(exc_info.value.__cause__, OSError)
