"""
This module walks parsed Go source units and streams the proto messages for
their struct declarations
"""

# Standard
from typing import Iterable, Iterator, List, Optional, TextIO
import sys

# Third Party
from tree_sitter import Tree

# First Party
import alog

# Local
from .go_parser import (
    GoParseError,
    is_struct_type,
    iter_type_specs,
    parse_go_file,
    struct_from_type_spec,
)
from .go_types import GoStruct
from .struct_to_proto import struct_to_message
from .type_to_proto import ProtoTypeMapping

log = alog.use_channel("GO2P")


## Globals #####################################################################

# Source units whose name contains this are test files and never parsed
TEST_FILE_MARKER = "_test"

PROTO_FILE_UNIT_HEADER = "// Protobuf definitions generated from {}"

## Interface ###################################################################


def iter_go_structs(tree: Tree) -> Iterator[GoStruct]:
    """Iterate the top-level struct declarations of a syntax tree in source
    order. Aliases, interfaces and named non-struct types are ignored.
    """
    for type_spec, decl_doc in iter_type_specs(tree):
        if not is_struct_type(type_spec):
            log.debug3("Ignoring non-struct type spec %s", type_spec.type)
            continue
        yield struct_from_type_spec(type_spec, decl_doc)


def go_tree_to_proto(
    tree: Tree,
    filename: str,
    out: TextIO,
    type_mapping: Optional[ProtoTypeMapping] = None,
) -> int:
    """Write the proto messages for every struct of one parsed source unit

    Args:
        tree:  Tree
            The parsed source unit
        filename:  str
            The name of the source unit for the header comment
        out:  TextIO
            The stream to write to

    Kwargs:
        type_mapping:  Optional[ProtoTypeMapping]
            A non-default mapping from Go type names to proto types

    Returns:
        num_messages:  int
            The number of messages written
    """
    out.write(PROTO_FILE_UNIT_HEADER.format(filename) + "\n\n")
    num_messages = 0
    for go_struct in iter_go_structs(tree):
        out.write(struct_to_message(go_struct, type_mapping) + "\n\n")
        num_messages += 1
    log.debug("Wrote %d messages for %s", num_messages, filename)
    return num_messages


def go_files_to_proto(
    filenames: Iterable[str],
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
    type_mapping: Optional[ProtoTypeMapping] = None,
) -> List[GoParseError]:
    """Convert the structs of each Go file to proto messages, one file at a
    time. Test files are skipped. A file that fails to parse is reported on the
    error stream and the remaining files are still converted.

    Args:
        filenames:  Iterable[str]
            The Go files to convert

    Kwargs:
        out:  Optional[TextIO]
            The stream for the proto text (default stdout)
        err:  Optional[TextIO]
            The stream for parse failures (default stderr)
        type_mapping:  Optional[ProtoTypeMapping]
            A non-default mapping from Go type names to proto types

    Returns:
        failures:  List[GoParseError]
            The parse failures, in the order they happened
    """
    out = sys.stdout if out is None else out
    err = sys.stderr if err is None else err
    failures = []
    for filename in filenames:
        if TEST_FILE_MARKER in filename:
            log.debug2("Skipping test file %s", filename)
            continue
        try:
            tree = parse_go_file(filename)
        except GoParseError as parse_err:
            log.info("Could not parse %s: %s", filename, parse_err.reason)
            err.write(f"{parse_err}\n")
            failures.append(parse_err)
            continue
        go_tree_to_proto(tree, filename, out, type_mapping)
    return failures
