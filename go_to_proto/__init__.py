"""
This library holds utilities for converting Go struct declarations to
Protobuf message definitions.

References:
* https://go.dev/ref/spec#Struct_types
* https://developers.google.com/protocol-buffers

Example:

```
import go_to_proto

# Print a message for every struct in the files
go_to_proto.go_files_to_proto(["models.go", "events.go"])

# Write the messages for a single parsed file to a .proto file
tree = go_to_proto.parse_go_file("models.go")
with open("models.proto", "w") as handle:
    go_to_proto.go_tree_to_proto(tree, "models.go", handle)

# Skeleton Go functions to convert between Person and its message
print(go_to_proto.generate_stubs("Person", "PersonProto"))
```
"""

# Local
from .go_parser import GoParseError, parse_go_file, parse_go_source
from .go_to_proto import go_files_to_proto, go_tree_to_proto, iter_go_structs
from .go_types import (
    AtomicType,
    GoField,
    GoStruct,
    OptionalOf,
    OtherType,
    QualifiedType,
    SequenceOf,
)
from .proto_stubs import (
    generate_from_proto_func,
    generate_stubs,
    generate_to_proto_func,
)
from .struct_to_proto import field_to_proto, number_fields, struct_to_message
from .type_to_proto import ProtoTypeMapping, go_type_to_proto_type
