"""Builtin numeric types: Int and Float.

Both are ordinary TypeDefinitions with one stored field, ``value``,
holding the native number. Binary operators take an operand of the same
type; there is no mixed Int/Float arithmetic.
"""


from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any, Callable

from .errors import (
    DivisionByZeroError,
    FloatOverflowError,
    IntegerOverflowError,
    TypeMismatchError,
)
from .instance import Instance
from .ranges import Range, make_range
from .types import (
    COMPOUND_OPERATORS,
    NEGATE,
    ComputedProperty,
    Constructor,
    Getter,
    InPlace,
    Operator,
    Signature,
    TypeDefinition,
)

if TYPE_CHECKING:
    from .runtime import Runtime

INT = "Int"
FLOAT = "Float"

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_OTHER = Signature.of("other")


def _int_divmod_trunc(a: int, b: int) -> tuple[int, int]:
    if b == 0:
        raise ZeroDivisionError
    q = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        q = -q
    r = a - q * b
    return (q, r)


def _fmod(x: float, y: float) -> float:
    if y == 0.0:
        raise ZeroDivisionError
    if math.isinf(x) or math.isnan(x) or math.isnan(y):
        return math.nan
    return math.fmod(x, y)


def _int_pow(a: int, b: int) -> int:
    if b < 0:
        raise TypeMismatchError("Int ^ with negative exponent", INT)
    return a**b


def _float_pow(a: float, b: float) -> float:
    try:
        result = a**b
    except OverflowError:
        raise FloatOverflowError("float overflow", FLOAT) from None
    if isinstance(result, complex):
        return math.nan
    return result


def _type_name(v: object) -> str:
    if isinstance(v, Instance):
        return v.typ.name
    return type(v).__name__


def _operand(this: Instance, other: Any, symbol: str) -> Any:
    if not isinstance(other, Instance) or other.typ is not this.typ:
        raise TypeMismatchError(
            f"operator '{symbol}' expects {this.typ.name}, got {_type_name(other)}",
            this.typ.name,
        )
    return other.get_field("value")


def _wrap(rt: Runtime, typ: TypeDefinition, value: Any) -> Instance:
    if typ.name == INT and rt.config.strict_math and not (_INT64_MIN <= value <= _INT64_MAX):
        raise IntegerOverflowError("integer overflow", typ.name)
    return Instance(typ, {"value": value})


# ============================================================
# Operator bodies
# ============================================================


def _arith(symbol: str, fn: Callable[[Any, Any], Any]) -> Operator:
    def body(rt: Runtime, this: Instance, other: Any) -> Instance:
        rhs = _operand(this, other, symbol)
        try:
            result = fn(this.get_field("value"), rhs)
        except ZeroDivisionError:
            raise DivisionByZeroError("division by zero", this.typ.name) from None
        return _wrap(rt, this.typ, result)

    return Operator(symbol, body, _OTHER)


def _negate(rt: Runtime, this: Instance) -> Instance:
    return _wrap(rt, this.typ, -this.get_field("value"))


def _compare(symbol: str, fn: Callable[[Any, Any], bool]) -> Operator:
    def body(rt: Runtime, this: Instance, other: Any) -> bool:
        return fn(this.get_field("value"), _operand(this, other, symbol))

    return Operator(symbol, body, _OTHER)


def _range(symbol: str, inclusive: bool, one: int | float) -> Operator:
    def body(rt: Runtime, this: Instance, other: Any) -> Range:
        _operand(this, other, symbol)
        step = Instance(this.typ, {"value": one})
        return make_range(rt, this, other, inclusive, step)

    return Operator(symbol, body, _OTHER)


def _bool(rt: Runtime, this: Instance) -> bool:
    return this.get_field("value") != 0


def _common_operators() -> list[Operator | InPlace]:
    ops: list[Operator | InPlace] = [
        _arith("+", lambda a, b: a + b),
        _arith("-", lambda a, b: a - b),
        _arith("*", lambda a, b: a * b),
        _arith("//", lambda a, b: a // b),
        Operator(NEGATE, _negate),
        # Exact comparison, no epsilon for Float.
        _compare("==", lambda a, b: a == b),
        _compare("!=", lambda a, b: a != b),
        _compare("<", lambda a, b: a < b),
        _compare("<=", lambda a, b: a <= b),
        _compare(">", lambda a, b: a > b),
        _compare(">=", lambda a, b: a >= b),
    ]
    ops.extend(InPlace.of(sym) for sym in COMPOUND_OPERATORS)
    return ops


# ============================================================
# Constructors
# ============================================================


def _int_init(rt: Runtime, this: Instance, value: Any) -> None:
    if isinstance(value, Instance) and value.typ is this.typ:
        value = value.get_field("value")
    elif isinstance(value, bool) or not isinstance(value, int):
        raise TypeMismatchError(f"Int() expects an int, got {_type_name(value)}", INT)
    if rt.config.strict_math and not (_INT64_MIN <= value <= _INT64_MAX):
        raise IntegerOverflowError("integer overflow", INT)
    this.set_field("value", value)


def _float_init(rt: Runtime, this: Instance, value: Any) -> None:
    if isinstance(value, Instance) and value.typ is this.typ:
        value = value.get_field("value")
    elif isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeMismatchError(f"Float() expects a number, got {_type_name(value)}", FLOAT)
    try:
        this.set_field("value", float(value))
    except OverflowError:
        raise FloatOverflowError("Float() argument out of range", FLOAT) from None


# ============================================================
# Definitions
# ============================================================


def _numeric(
    name: str,
    init: Callable[..., None],
    div: Operator,
    mod: Operator,
    pow_: Operator,
    one: int | float,
) -> TypeDefinition:
    operators = _common_operators()
    operators.extend([div, mod, pow_, _range("..", False, one), _range("...", True, one)])
    return TypeDefinition.build(
        name,
        Constructor("init", init, Signature.of("value")),
        operators=operators,
        properties=[ComputedProperty("$bool", Getter("$bool", _bool))],
        builtin=True,
    )


INT_TYPE = _numeric(
    INT,
    _int_init,
    _arith("/", lambda a, b: _int_divmod_trunc(a, b)[0]),
    _arith("%", lambda a, b: _int_divmod_trunc(a, b)[1]),
    _arith("^", _int_pow),
    1,
)

FLOAT_TYPE = _numeric(
    FLOAT,
    _float_init,
    _arith("/", lambda a, b: a / b),
    _arith("%", _fmod),
    _arith("^", _float_pow),
    1.0,
)


def builtin_types() -> list[TypeDefinition]:
    return [INT_TYPE, FLOAT_TYPE]
