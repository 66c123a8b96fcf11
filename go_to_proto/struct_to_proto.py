"""
This module renders Go struct declarations as proto message blocks
"""

# Standard
from typing import Iterable, List, Optional, Tuple

# First Party
import alog

# Local
from .go_types import GoField, GoStruct
from .type_to_proto import ProtoTypeMapping, go_type_to_proto_type

log = alog.use_channel("STR2P")


## Globals #####################################################################

PROTO_FILE_INDENT = "  "

## Interface ###################################################################


def number_fields(fields: Iterable[GoField]) -> List[Tuple[int, GoField]]:
    """Assign proto field numbers to the fields of a struct.

    Embedded (nameless) fields are dropped before numbering, so the numbers of
    the emitted fields always run 1..N in declaration order with no gaps.

    Args:
        fields:  Iterable[GoField]
            The struct fields in declaration order

    Returns:
        numbered_fields:  List[Tuple[int, GoField]]
            The (field number, field) pairs for every named field
    """
    named_fields = [field for field in fields if field.name]
    return [
        (field_number, field)
        for field_number, field in enumerate(named_fields, start=1)
    ]


def field_to_proto(
    field: GoField,
    field_number: int,
    type_mapping: Optional[ProtoTypeMapping] = None,
) -> str:
    """Get the .proto text for a single field, including its doc comment.

    Args:
        field:  GoField
            The field to render
        field_number:  int
            The proto field number to give it

    Kwargs:
        type_mapping:  Optional[ProtoTypeMapping]
            A non-default mapping from Go type names to proto types

    Returns:
        field_text:  str
            The rendered lines, or an empty string for an embedded field
    """
    if not field.name:
        log.debug3("Skipping embedded field at position %d", field.position)
        return ""
    proto_type = go_type_to_proto_type(field.type_expr, type_mapping)
    lines = list(field.doc)
    lines.append(f"{proto_type} {field.name} = {field_number};")
    return "\n".join(_indent_lines(1, lines))


def struct_to_message(
    go_struct: GoStruct,
    type_mapping: Optional[ProtoTypeMapping] = None,
) -> str:
    """Get the .proto message block for a struct, preceded by its doc comment

    Args:
        go_struct:  GoStruct
            The struct declaration to convert

    Kwargs:
        type_mapping:  Optional[ProtoTypeMapping]
            A non-default mapping from Go type names to proto types

    Returns:
        message_text:  str
            The message block without a trailing newline
    """
    log.debug("Message name: %s", go_struct.name)
    lines = list(go_struct.doc)
    lines.append(f"message {go_struct.name} {{")
    for field_number, field in number_fields(go_struct.fields):
        lines.append(field_to_proto(field, field_number, type_mapping))
    lines.append("}")
    return "\n".join(lines)


## Impl ########################################################################


def _indent_lines(indent: int, lines: List[str]) -> List[str]:
    """Add indentation to the given lines"""
    if not indent:
        return lines
    return [
        indent * PROTO_FILE_INDENT + line if line else line
        for line in "\n".join(lines).split("\n")
    ]
