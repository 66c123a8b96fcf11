"""
This module maps Go type expressions to the type names used in .proto field
declarations
"""

# Standard
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

# Third Party
from google.protobuf import descriptor as _descriptor
from google.protobuf import timestamp_pb2

# First Party
import alog

# Local
from .go_types import (
    AtomicType,
    GoTypeExpr,
    OptionalOf,
    OtherType,
    QualifiedType,
    SequenceOf,
)

log = alog.use_channel("TYP2P")


## Globals #####################################################################

GO_TO_PROTO_TYPES = MappingProxyType(
    {
        "string": _descriptor.FieldDescriptor.TYPE_STRING,
        "bool": _descriptor.FieldDescriptor.TYPE_BOOL,
        "float32": _descriptor.FieldDescriptor.TYPE_FLOAT,
        "float64": _descriptor.FieldDescriptor.TYPE_DOUBLE,
        # NOTE: proto has no 8 or 16 bit integers. Small values are cheap as
        #   varints, so the narrow Go widths share the 32 bit types.
        "int": _descriptor.FieldDescriptor.TYPE_INT32,
        "int8": _descriptor.FieldDescriptor.TYPE_INT32,
        "int16": _descriptor.FieldDescriptor.TYPE_INT32,
        "int32": _descriptor.FieldDescriptor.TYPE_INT32,
        "rune": _descriptor.FieldDescriptor.TYPE_INT32,
        "int64": _descriptor.FieldDescriptor.TYPE_INT64,
        "uint": _descriptor.FieldDescriptor.TYPE_UINT32,
        "uint8": _descriptor.FieldDescriptor.TYPE_UINT32,
        "byte": _descriptor.FieldDescriptor.TYPE_UINT32,
        "uint16": _descriptor.FieldDescriptor.TYPE_UINT32,
        "uint32": _descriptor.FieldDescriptor.TYPE_UINT32,
        "uint64": _descriptor.FieldDescriptor.TYPE_UINT64,
        "time.Time": timestamp_pb2.Timestamp,
        "error": _descriptor.FieldDescriptor.TYPE_STRING,
        "Batcher": "Batch",
    }
)

PROTO_FILE_PRIMITIVE_TYPE_NAMES = {
    type_val: type_name[5:].lower()
    for type_name, type_val in vars(_descriptor.FieldDescriptor).items()
    if type_name.startswith("TYPE_")
}

# Type used for any shape that has no proto equivalent
DEFAULT_PROTO_TYPE = "string"

# Go type name -> proto type, as accepted by the type_mapping kwargs
ProtoTypeMapping = Mapping[str, Union[int, str, Any]]

# Descriptor types that can be referenced by name
_DescriptorTypes = (_descriptor.Descriptor, _descriptor.EnumDescriptor)

## Interface ###################################################################


def go_type_to_proto_type(
    type_expr: GoTypeExpr,
    type_mapping: Optional[ProtoTypeMapping] = None,
) -> str:
    """Get the proto type name for a Go type expression. This never fails:
    shapes with no proto counterpart become strings.

    Args:
        type_expr:  GoTypeExpr
            The type of a struct field

    Kwargs:
        type_mapping:  Optional[Mapping[str, Union[int, str, Any]]]
            A non-default mapping from Go type names to proto types. Values may
            be FieldDescriptor.TYPE_* constants, message classes, descriptors,
            or plain message names.

    Returns:
        proto_type:  str
            The type as it appears in a .proto field line
    """
    type_mapping = GO_TO_PROTO_TYPES if type_mapping is None else type_mapping

    if isinstance(type_expr, AtomicType):
        proto_type = type_mapping.get(type_expr.name)
        if proto_type is None:
            log.debug3("Passing through unknown type name %s", type_expr.name)
            return type_expr.name
        return _proto_type_name(proto_type)

    if isinstance(type_expr, SequenceOf):
        return "repeated " + go_type_to_proto_type(type_expr.element, type_mapping)

    # Pointers carry no meaning on the wire
    if isinstance(type_expr, OptionalOf):
        return go_type_to_proto_type(type_expr.target, type_mapping)

    if isinstance(type_expr, QualifiedType):
        proto_type = type_mapping.get(type_expr.full_name)
        if proto_type is None:
            return type_expr.full_name
        return _proto_type_name(proto_type)

    if isinstance(type_expr, OtherType):
        log.debug2("Using %s for unmapped %s", DEFAULT_PROTO_TYPE, type_expr.kind)
    return DEFAULT_PROTO_TYPE


## Impl ########################################################################


def _proto_type_name(proto_type: Union[int, str, Any]) -> str:
    """Render a value from the type mapping as a .proto type name"""
    if isinstance(proto_type, str):
        return proto_type
    if isinstance(proto_type, int):
        return PROTO_FILE_PRIMITIVE_TYPE_NAMES[proto_type]

    if isinstance(proto_type, _DescriptorTypes):
        return proto_type.full_name

    # Message classes carry their descriptor
    descriptor = getattr(proto_type, "DESCRIPTOR", None)
    if isinstance(descriptor, _DescriptorTypes):
        return descriptor.full_name
    raise ValueError(f"Invalid proto type in type mapping: {proto_type}")
