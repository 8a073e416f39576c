"""Public API for the FeInt object model."""

from __future__ import annotations

from .dispatch import AccessKind, Dispatcher, Namespace, Resolution
from .errors import (
    ArityError,
    DeclarationError,
    DispatchError,
    DivisionByZeroError,
    DuplicateTypeError,
    FeintError,
    FloatOverflowError,
    ImmutableMemberError,
    IntegerOverflowError,
    NotCallableError,
    OperatorNotSupportedError,
    ReadOnlyPropertyError,
    RegistrationError,
    TypeMismatchError,
    UndefinedFieldError,
    UndefinedPropertyError,
    UnknownTypeError,
)
from .instance import BoundMethod, Instance
from .numeric import FLOAT, FLOAT_TYPE, INT, INT_TYPE
from .ranges import Range, RangeCursor, make_range
from .registry import TypeTable
from .runtime import (
    Runtime,
    RuntimeConfig,
    access,
    construct,
    default_runtime,
    iterate,
    register_type,
)
from .types import (
    NEGATE,
    OPERATOR_LEXICON,
    ComputedProperty,
    Constructor,
    Getter,
    InPlace,
    Method,
    Operator,
    Param,
    Setter,
    Signature,
    TypeDefinition,
)

__all__ = [
    "AccessKind",
    "ArityError",
    "BoundMethod",
    "ComputedProperty",
    "Constructor",
    "DeclarationError",
    "DispatchError",
    "Dispatcher",
    "DivisionByZeroError",
    "DuplicateTypeError",
    "FLOAT",
    "FLOAT_TYPE",
    "FeintError",
    "FloatOverflowError",
    "Getter",
    "INT",
    "INT_TYPE",
    "ImmutableMemberError",
    "InPlace",
    "Instance",
    "IntegerOverflowError",
    "Method",
    "NEGATE",
    "Namespace",
    "NotCallableError",
    "OPERATOR_LEXICON",
    "Operator",
    "OperatorNotSupportedError",
    "Param",
    "Range",
    "RangeCursor",
    "ReadOnlyPropertyError",
    "RegistrationError",
    "Resolution",
    "Runtime",
    "RuntimeConfig",
    "Setter",
    "Signature",
    "TypeDefinition",
    "TypeMismatchError",
    "TypeTable",
    "UndefinedFieldError",
    "UndefinedPropertyError",
    "UnknownTypeError",
    "access",
    "construct",
    "default_runtime",
    "iterate",
    "make_range",
    "register_type",
]
