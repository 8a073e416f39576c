"""Type declarations: signatures, callable bodies, computed properties.

A TypeDefinition is handed to the core fully parsed. Its bodies are opaque
Python callables invoked as ``fn(rt, this, *args)``; the core never looks
inside them.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Iterable, Mapping, Sequence

from .errors import ArityError, DeclarationError, NotCallableError

if TYPE_CHECKING:
    from .instance import Instance
    from .runtime import Runtime


# ============================================================
# Operator lexicon
# ============================================================

PROPERTY_SIGIL = "$"
SETTER_SUFFIX = ".set"

ARITHMETIC_OPERATORS = ("+", "-", "*", "/", "//", "%", "^")
COMPARISON_OPERATORS = ("==", "!=", "<", "<=", ">", ">=")
RANGE_OPERATORS = ("..", "...")

# Prefix minus; spelled apart from binary "-" so both can be declared.
NEGATE = "-@"
UNARY_OPERATORS = (NEGATE,)

# Compound symbol -> the operator it is sugar for.
COMPOUND_OPERATORS: Mapping[str, str] = MappingProxyType(
    {"+=": "+", "-=": "-", "*=": "*", "/=": "/"}
)

OPERATOR_LEXICON = frozenset(
    ARITHMETIC_OPERATORS
    + UNARY_OPERATORS
    + COMPARISON_OPERATORS
    + RANGE_OPERATORS
    + tuple(COMPOUND_OPERATORS)
)


def is_operator(name: str) -> bool:
    return name in OPERATOR_LEXICON


def is_property_name(name: str) -> bool:
    return name.startswith(PROPERTY_SIGIL)


# ============================================================
# Signatures
# ============================================================


class _NoDefault:
    def __repr__(self) -> str:
        return "NO_DEFAULT"


NO_DEFAULT: Any = _NoDefault()


@dataclass(frozen=True)
class Param:
    name: str
    default: Any = NO_DEFAULT

    @property
    def required(self) -> bool:
        return self.default is NO_DEFAULT


@dataclass(frozen=True)
class Signature:
    """Parameters after the receiver, in order."""

    params: tuple[Param, ...] = ()

    def __post_init__(self) -> None:
        seen: set[str] = set()
        optional = False
        for p in self.params:
            if p.name in seen:
                raise DeclarationError(f"duplicate parameter '{p.name}'")
            seen.add(p.name)
            if p.required and optional:
                raise DeclarationError(
                    f"required parameter '{p.name}' follows a parameter with a default"
                )
            optional = optional or not p.required

    @classmethod
    def of(cls, *params: str | Param) -> Signature:
        return cls(tuple(p if isinstance(p, Param) else Param(p) for p in params))

    @classmethod
    def from_callable(cls, fn: Callable[..., Any]) -> Signature:
        """Derive a signature from a body, skipping its ``rt`` and ``this``."""
        params: list[Param] = []
        for i, p in enumerate(inspect.signature(fn).parameters.values()):
            if i < 2:
                continue
            if p.kind not in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD):
                raise DeclarationError(
                    f"body '{fn.__name__}' may only take positional parameters"
                )
            if p.default is inspect.Parameter.empty:
                params.append(Param(p.name))
            else:
                params.append(Param(p.name, p.default))
        return cls(tuple(params))

    @property
    def min_args(self) -> int:
        return sum(1 for p in self.params if p.required)

    @property
    def max_args(self) -> int:
        return len(self.params)

    def bind(self, args: Sequence[Any], *, what: str, owner: str | None = None) -> tuple[Any, ...]:
        """Check arity and fill trailing defaults."""
        n = len(args)
        lo, hi = self.min_args, self.max_args
        if n < lo or n > hi:
            if lo == hi:
                expected = f"{lo} argument{'s' if lo != 1 else ''}"
            else:
                expected = f"{lo} to {hi} arguments"
            raise ArityError(f"{what} expects {expected}, got {n}", owner)
        return tuple(args) + tuple(p.default for p in self.params[n:])


# ============================================================
# Callable bodies
# ============================================================


BodyFn = Callable[..., Any]


class BodyKind(Enum):
    CONSTRUCTOR = "constructor"
    METHOD = "method"
    OPERATOR = "operator"
    GETTER = "getter"
    SETTER = "setter"
    INPLACE = "inplace"


@dataclass(frozen=True)
class Body:
    name: str
    fn: BodyFn | None
    sig: Signature = field(default_factory=Signature)

    kind: ClassVar[BodyKind]

    def describe(self) -> str:
        return f"{self.kind.value} '{self.name}'"

    def invoke(self, rt: Runtime, this: Instance, args: Sequence[Any]) -> Any:
        bound = self.sig.bind(args, what=self.describe(), owner=this.typ.name)
        if self.fn is None:
            raise NotCallableError(f"{self.describe()} has no body", this.typ.name)
        return self.fn(rt, this, *bound)


@dataclass(frozen=True)
class Constructor(Body):
    kind: ClassVar[BodyKind] = BodyKind.CONSTRUCTOR

    @classmethod
    def empty(cls) -> Constructor:
        return cls("init", lambda rt, this: None)

    @classmethod
    def assigning(cls, *params: str | Param) -> Constructor:
        """Constructor that stores each parameter in the field of the same name."""
        sig = Signature.of(*params)

        def init(rt: Runtime, this: Instance, *args: Any) -> None:
            for p, value in zip(sig.params, args):
                this.fields[p.name] = value

        return cls("init", init, sig)


@dataclass(frozen=True)
class Method(Body):
    kind: ClassVar[BodyKind] = BodyKind.METHOD


@dataclass(frozen=True)
class Operator(Body):
    kind: ClassVar[BodyKind] = BodyKind.OPERATOR


@dataclass(frozen=True)
class Getter(Body):
    kind: ClassVar[BodyKind] = BodyKind.GETTER


@dataclass(frozen=True)
class Setter(Body):
    kind: ClassVar[BodyKind] = BodyKind.SETTER


@dataclass(frozen=True)
class InPlace(Body):
    """Marker for ``op=``: apply ``base`` then write ``target`` on the receiver."""

    base: str = ""
    target: str = "value"

    kind: ClassVar[BodyKind] = BodyKind.INPLACE

    @classmethod
    def of(cls, symbol: str, target: str = "value") -> InPlace:
        if symbol not in COMPOUND_OPERATORS:
            raise DeclarationError(f"'{symbol}' is not a compound operator")
        return cls(symbol, None, Signature.of("other"), COMPOUND_OPERATORS[symbol], target)


@dataclass(frozen=True)
class ComputedProperty:
    name: str
    getter: Getter
    setter: Setter | None = None

    @property
    def read_only(self) -> bool:
        return self.setter is None


# ============================================================
# Type definitions
# ============================================================


@dataclass(frozen=True, eq=False)
class TypeDefinition:
    """Immutable declaration of a type. Identity is the type."""

    name: str
    constructor: Constructor
    methods: Mapping[str, Method]
    operators: Mapping[str, Operator | InPlace]
    properties: Mapping[str, ComputedProperty]
    builtin: bool = False

    def __post_init__(self) -> None:
        if not self.name or is_property_name(self.name) or is_operator(self.name):
            raise DeclarationError(f"invalid type name '{self.name}'")
        for name, m in self.methods.items():
            if is_operator(name) or is_property_name(name):
                raise DeclarationError(f"invalid method name '{name}'", self.name)
            if m.name != name:
                raise DeclarationError(f"method '{m.name}' stored as '{name}'", self.name)
        for sym, op in self.operators.items():
            if not is_operator(sym):
                raise DeclarationError(f"'{sym}' is not an overloadable operator", self.name)
            if op.name != sym:
                raise DeclarationError(f"operator '{op.name}' stored as '{sym}'", self.name)
            if isinstance(op, InPlace) and op.base not in self.operators:
                raise DeclarationError(
                    f"'{sym}' requires operator '{op.base}' to be declared", self.name
                )
        for name, prop in self.properties.items():
            if not is_property_name(name) or name.endswith(SETTER_SUFFIX):
                raise DeclarationError(f"invalid computed property name '{name}'", self.name)
            if prop.name != name:
                raise DeclarationError(f"property '{prop.name}' stored as '{name}'", self.name)
        # Freeze the maps; no API mutates a definition after construction.
        object.__setattr__(self, "methods", MappingProxyType(dict(self.methods)))
        object.__setattr__(self, "operators", MappingProxyType(dict(self.operators)))
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))

    def __repr__(self) -> str:
        return f"<type {self.name}>"

    @classmethod
    def build(
        cls,
        name: str,
        constructor: Constructor | None = None,
        methods: Iterable[Method] = (),
        operators: Iterable[Operator | InPlace] = (),
        properties: Iterable[ComputedProperty] = (),
        *,
        builtin: bool = False,
    ) -> TypeDefinition:
        """Build a definition from member lists, rejecting duplicates."""
        return cls(
            name,
            constructor if constructor is not None else Constructor.empty(),
            _unique(name, "method", methods),
            _unique(name, "operator", operators),
            _unique(name, "computed property", properties),
            builtin,
        )

    @classmethod
    def from_members(
        cls,
        name: str,
        constructor: Constructor | BodyFn | None,
        members: Mapping[str, BodyFn],
    ) -> TypeDefinition:
        """Build a definition from a class-body style ``name -> body`` map.

        Names are classified the way the surface syntax spells them: an
        operator symbol, ``$name`` for a getter, ``$name.set`` for its
        setter, anything else a method. Signatures come from the bodies.
        """
        if constructor is not None and not isinstance(constructor, Constructor):
            constructor = Constructor("init", constructor, Signature.from_callable(constructor))
        methods: list[Method] = []
        operators: list[Operator | InPlace] = []
        getters: dict[str, Getter] = {}
        setters: dict[str, Setter] = {}
        for member, fn in members.items():
            sig = Signature.from_callable(fn)
            if is_operator(member):
                operators.append(Operator(member, fn, sig))
            elif is_property_name(member) and member.endswith(SETTER_SUFFIX):
                prop = member[: -len(SETTER_SUFFIX)]
                setters[prop] = Setter(member, fn, sig)
            elif is_property_name(member):
                getters[member] = Getter(member, fn, sig)
            else:
                methods.append(Method(member, fn, sig))
        for prop in setters:
            if prop not in getters:
                raise DeclarationError(f"setter '{prop}{SETTER_SUFFIX}' has no getter", name)
        properties = [ComputedProperty(p, g, setters.get(p)) for p, g in getters.items()]
        return cls.build(name, constructor, methods, operators, properties)


def _unique(owner: str, what: str, members: Iterable[Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for m in members:
        if m.name in out:
            raise DeclarationError(f"duplicate {what} '{m.name}'", owner)
        out[m.name] = m
    return out
