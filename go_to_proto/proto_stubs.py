"""
This module generates skeleton Go functions that convert between a struct and
its generated proto message. The field mappings are left for a human to fill
in.
"""

# Standard
from typing import Dict

# Third Party
from jinja2 import Environment, StrictUndefined

# First Party
import alog

log = alog.use_channel("STUBS")


## Globals #####################################################################

_ENV = Environment(keep_trailing_newline=True, undefined=StrictUndefined)

TO_PROTO_TEMPLATE = _ENV.from_string(
    "\n"
    "// To{{ proto_name }}Proto converts {{ struct_name }} to {{ proto_name }}.\n"
    "func To{{ proto_name }}Proto(s *{{ struct_name }}) *{{ proto_name }} {\n"
    "\tif s == nil {\n"
    "\t\treturn nil\n"
    "\t}\n"
    "\treturn &{{ proto_name }}{\n"
    "\t\t// TODO: Add field mappings here.\n"
    "\t}\n"
    "}\n"
)

FROM_PROTO_TEMPLATE = _ENV.from_string(
    "\n"
    "// From{{ proto_name }}Proto converts {{ proto_name }} to {{ struct_name }}.\n"
    "func From{{ proto_name }}Proto(p *{{ proto_name }}) *{{ struct_name }} {\n"
    "\tif p == nil {\n"
    "\t\treturn nil\n"
    "\t}\n"
    "\treturn &{{ struct_name }}{\n"
    "\t\t// TODO: Add field mappings here.\n"
    "\t}\n"
    "}\n"
)

## Interface ###################################################################


def generate_to_proto_func(struct_name: str, proto_name: str) -> str:
    """Generate the Go function converting a struct pointer to a proto message

    Args:
        struct_name:  str
            The name of the Go struct type
        proto_name:  str
            The name of the generated proto message type

    Returns:
        source:  str
            The Go source of the function
    """
    return TO_PROTO_TEMPLATE.render(_template_vars(struct_name, proto_name))


def generate_from_proto_func(proto_name: str, struct_name: str) -> str:
    """Generate the Go function converting a proto message back to a struct

    Args:
        proto_name:  str
            The name of the generated proto message type
        struct_name:  str
            The name of the Go struct type

    Returns:
        source:  str
            The Go source of the function
    """
    return FROM_PROTO_TEMPLATE.render(_template_vars(struct_name, proto_name))


def generate_stubs(struct_name: str, proto_name: str) -> str:
    """Generate both conversion directions for a struct/message pair"""
    log.debug("Generating conversion stubs for %s <-> %s", struct_name, proto_name)
    return generate_to_proto_func(struct_name, proto_name) + generate_from_proto_func(
        proto_name, struct_name
    )


## Impl ########################################################################


def _template_vars(struct_name: str, proto_name: str) -> Dict[str, str]:
    for name in (struct_name, proto_name):
        if not isinstance(name, str) or not name.isidentifier():
            raise ValueError(f"Invalid Go identifier: {name!r}")
    return {"struct_name": struct_name, "proto_name": proto_name}
