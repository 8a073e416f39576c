"""Method, operator and computed-property dispatch.

Names live in four separate namespaces, resolved in this order:

1. operator application: the type's operator map, nothing else
2. ``$name``: the type's computed properties, never stored fields
3. a declared method name
4. a stored field on the instance

The Dispatcher holds no state of its own; everything it touches is the
receiver's type and the receiver's fields.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Sequence

from .errors import (
    ArityError,
    ImmutableMemberError,
    NotCallableError,
    OperatorNotSupportedError,
    ReadOnlyPropertyError,
    TypeMismatchError,
    UndefinedPropertyError,
)
from .instance import BoundMethod, Instance
from .types import (
    COMPOUND_OPERATORS,
    PROPERTY_SIGIL,
    SETTER_SUFFIX,
    ComputedProperty,
    InPlace,
    Method,
    Operator,
    TypeDefinition,
    is_operator,
    is_property_name,
)

if TYPE_CHECKING:
    from .runtime import Runtime

logger = logging.getLogger(__name__)


class AccessKind(Enum):
    METHOD_CALL = "method-call"
    OPERATOR = "operator"
    PROPERTY_READ = "property-read"
    PROPERTY_WRITE = "property-write"
    FIELD_READ = "field-read"
    FIELD_WRITE = "field-write"

    @property
    def is_write(self) -> bool:
        return self in (AccessKind.PROPERTY_WRITE, AccessKind.FIELD_WRITE)


class Namespace(Enum):
    OPERATOR = "operator"
    PROPERTY = "computed property"
    METHOD = "method"
    FIELD = "field"


@dataclass(frozen=True)
class Resolution:
    namespace: Namespace
    name: str
    target: Operator | InPlace | ComputedProperty | Method | None = None
    write: bool = False


class Dispatcher:
    def __init__(self, rt: Runtime) -> None:
        self._rt = rt

    # ---- Resolution --------------------------------------------------------

    def resolve(self, typ: TypeDefinition, kind: AccessKind, name: str) -> Resolution:
        """Pick the namespace and member ``name`` refers to, without invoking it."""
        if kind is not AccessKind.OPERATOR and is_operator(name):
            # Operator symbols never name a field, property or method.
            if kind is not AccessKind.METHOD_CALL:
                raise OperatorNotSupportedError(
                    f"operator '{name}' is not a valid {kind.value} name", typ.name
                )
            kind = AccessKind.OPERATOR

        if kind is AccessKind.OPERATOR:
            if not is_operator(name):
                raise OperatorNotSupportedError(f"'{name}' is not an operator", typ.name)
            op = typ.operators.get(name)
            if op is None:
                raise OperatorNotSupportedError(f"operator '{name}' is not supported", typ.name)
            return Resolution(Namespace.OPERATOR, name, op)

        if kind in (AccessKind.PROPERTY_READ, AccessKind.PROPERTY_WRITE):
            if not is_property_name(name):
                name = PROPERTY_SIGIL + name

        write = kind.is_write
        if (
            kind is AccessKind.METHOD_CALL
            and is_property_name(name)
            and name.endswith(SETTER_SUFFIX)
        ):
            # ``$x.set(v)`` is an explicit call of the setter.
            name = name[: -len(SETTER_SUFFIX)]
            write = True

        if is_property_name(name):
            prop = typ.properties.get(name)
            if prop is None:
                raise UndefinedPropertyError(f"undefined computed property '{name}'", typ.name)
            if write and prop.read_only:
                raise ReadOnlyPropertyError(f"computed property '{name}' is read-only", typ.name)
            return Resolution(Namespace.PROPERTY, name, prop, write)

        method = typ.methods.get(name)
        if method is not None:
            return Resolution(Namespace.METHOD, name, method)

        return Resolution(Namespace.FIELD, name, None, write)

    # ---- Access ------------------------------------------------------------

    def access(
        self,
        instance: Instance,
        kind: AccessKind,
        name: str,
        args: Sequence[Any] = (),
    ) -> Any:
        res = self.resolve(instance.typ, kind, name)
        logger.debug(
            "%s %s.%s -> %s", kind.value, instance.typ.name, name, res.namespace.value
        )
        target = res.target

        if isinstance(target, (Operator, InPlace)):
            return self._apply(instance, target, args)

        if isinstance(target, ComputedProperty):
            if not res.write:
                return target.getter.invoke(self._rt, instance, args)
            value = _single(args, f"assignment to '{res.name}'", instance)
            if target.setter is None:
                raise ReadOnlyPropertyError(
                    f"computed property '{res.name}' is read-only", instance.typ.name
                )
            target.setter.invoke(self._rt, instance, (value,))
            return None

        if isinstance(target, Method):
            if kind is AccessKind.METHOD_CALL:
                return target.invoke(self._rt, instance, args)
            if kind.is_write:
                raise ImmutableMemberError(
                    f"cannot assign to method '{res.name}'", instance.typ.name
                )
            return BoundMethod(self._rt, instance, target)

        if kind.is_write:
            value = _single(args, f"assignment to '{res.name}'", instance)
            instance.set_field(res.name, value)
            return None
        value = instance.get_field(res.name)
        if kind is AccessKind.METHOD_CALL:
            if not callable(value):
                raise NotCallableError(f"field '{res.name}' is not callable", instance.typ.name)
            return value(*args)
        return value

    def _apply(self, instance: Instance, op: Operator | InPlace, args: Sequence[Any]) -> Any:
        if isinstance(op, InPlace):
            op.sig.bind(args, what=op.describe(), owner=instance.typ.name)
            result = self.apply_operator(instance, op.base, *args)
            if isinstance(result, Instance):
                result = result.get_field(op.target)
            self.write_field(instance, op.target, result)
            return instance
        result = op.invoke(self._rt, instance, args)
        if op.name in COMPOUND_OPERATORS:
            # A hand-written op= body mutates the receiver; the expression
            # value is still the receiver.
            return instance
        return result

    # ---- Shorthands --------------------------------------------------------

    def call_method(self, instance: Instance, name: str, *args: Any) -> Any:
        return self.access(instance, AccessKind.METHOD_CALL, name, args)

    def apply_operator(self, instance: Instance, symbol: str, *args: Any) -> Any:
        return self.access(instance, AccessKind.OPERATOR, symbol, args)

    def read_property(self, instance: Instance, name: str) -> Any:
        return self.access(instance, AccessKind.PROPERTY_READ, name)

    def write_property(self, instance: Instance, name: str, value: Any) -> None:
        self.access(instance, AccessKind.PROPERTY_WRITE, name, (value,))

    def read_field(self, instance: Instance, name: str) -> Any:
        return self.access(instance, AccessKind.FIELD_READ, name)

    def write_field(self, instance: Instance, name: str, value: Any) -> None:
        self.access(instance, AccessKind.FIELD_WRITE, name, (value,))

    def truthy(self, value: Any) -> bool:
        """Boolean context: ``bool`` as is, instances through ``$bool``."""
        if isinstance(value, bool):
            return value
        if isinstance(value, Instance):
            return self.truthy(self.read_property(value, "$bool"))
        raise TypeMismatchError(f"{type(value).__name__} has no truth value")


def _single(args: Sequence[Any], what: str, instance: Instance) -> Any:
    if len(args) != 1:
        raise ArityError(f"{what} expects 1 value, got {len(args)}", instance.typ.name)
    return args[0]
