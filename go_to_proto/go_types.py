"""
In-memory model for the parts of a Go source file that get translated to
protobuf: the closed set of type expression shapes, struct fields, and struct
declarations.
"""

# Standard
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

## Type Expressions ############################################################


@dataclass(frozen=True)
class AtomicType:
    """A bare type name such as `string`, `int64` or `Person`"""

    name: str


@dataclass(frozen=True)
class SequenceOf:
    """A slice or array of the element type"""

    element: "GoTypeExpr"


@dataclass(frozen=True)
class OptionalOf:
    """A pointer to the target type"""

    target: "GoTypeExpr"


@dataclass(frozen=True)
class QualifiedType:
    """A type imported from another package, e.g. `time.Time`"""

    package: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.package}.{self.name}"


@dataclass(frozen=True)
class OtherType:
    """Any shape without a protobuf counterpart (maps, channels, funcs, ...).
    The kind holds the syntax node kind it was read from.
    """

    kind: str


GoTypeExpr = Union[AtomicType, SequenceOf, OptionalOf, QualifiedType, OtherType]

## Declarations ################################################################


@dataclass(frozen=True)
class GoField:
    """A single field of a struct. Embedded fields have no name."""

    name: Optional[str]
    type_expr: GoTypeExpr
    position: int
    doc: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class GoStruct:
    """A named struct type declaration"""

    name: str
    fields: Tuple[GoField, ...] = field(default_factory=tuple)
    doc: Tuple[str, ...] = field(default_factory=tuple)
