"""Tests for declarations: signatures, bodies and type definitions."""

import pytest

from feint import (
    OPERATOR_LEXICON,
    ArityError,
    ComputedProperty,
    Constructor,
    DeclarationError,
    Getter,
    InPlace,
    Method,
    Operator,
    Param,
    Signature,
    TypeDefinition,
)


def _noop(rt, this, *args):
    return None


# ── Signatures ──


def test_bind_fills_trailing_defaults():
    sig = Signature.of("a", Param("b", 2), Param("c", 3))
    assert sig.bind([1], what="f") == (1, 2, 3)
    assert sig.bind([1, 5], what="f") == (1, 5, 3)
    assert sig.bind([1, 5, 6], what="f") == (1, 5, 6)


def test_bind_arity_errors():
    sig = Signature.of("a", Param("b", 2))
    with pytest.raises(ArityError, match="expects 1 to 2 arguments, got 0"):
        sig.bind([], what="f")
    with pytest.raises(ArityError, match="got 3"):
        sig.bind([1, 2, 3], what="f")


def test_bind_exact_count_message():
    with pytest.raises(ArityError, match="expects 1 argument, got 2"):
        Signature.of("a").bind([1, 2], what="f")


def test_required_after_default_rejected():
    with pytest.raises(DeclarationError):
        Signature.of(Param("a", 1), "b")


def test_duplicate_param_rejected():
    with pytest.raises(DeclarationError):
        Signature.of("a", "a")


def test_from_callable_skips_runtime_and_receiver():
    def body(rt, this, x, y=4):
        return None

    sig = Signature.from_callable(body)
    assert [p.name for p in sig.params] == ["x", "y"]
    assert sig.params[0].required
    assert sig.params[1].default == 4


def test_from_callable_rejects_varargs():
    with pytest.raises(DeclarationError):
        Signature.from_callable(_noop)


# ── Lexicon ──


def test_lexicon_contents():
    for sym in ("+", "-", "*", "/", "//", "^", "-@", "==", "+=", "..", "..."):
        assert sym in OPERATOR_LEXICON
    assert "$bool" not in OPERATOR_LEXICON


def test_inplace_of_pairs_base():
    op = InPlace.of("-=")
    assert op.base == "-"
    assert op.target == "value"
    with pytest.raises(DeclarationError):
        InPlace.of("+")


# ── Definitions ──


def test_definition_maps_are_read_only():
    typ = TypeDefinition.build("T", methods=[Method("m", _noop)])
    with pytest.raises(TypeError):
        typ.methods["other"] = Method("other", _noop)  # type: ignore[index]
    with pytest.raises(AttributeError):
        typ.name = "U"  # type: ignore[misc]


def test_definition_identity_equality():
    a = TypeDefinition.build("T")
    b = TypeDefinition.build("T")
    assert a != b
    assert a == a


def test_duplicate_method_rejected():
    with pytest.raises(DeclarationError, match="duplicate method 'm'"):
        TypeDefinition.build("T", methods=[Method("m", _noop), Method("m", _noop)])


@pytest.mark.parametrize("name", ["", "$T", "+"])
def test_bad_type_name(name):
    with pytest.raises(DeclarationError):
        TypeDefinition.build(name)


def test_operator_outside_lexicon_rejected():
    with pytest.raises(DeclarationError, match="not an overloadable operator"):
        TypeDefinition.build("T", operators=[Operator("**", _noop)])


def test_method_named_like_property_rejected():
    with pytest.raises(DeclarationError):
        TypeDefinition.build("T", methods=[Method("$m", _noop)])


def test_property_without_sigil_rejected():
    with pytest.raises(DeclarationError):
        TypeDefinition.build(
            "T", properties=[ComputedProperty("size", Getter("size", _noop))]
        )


def test_inplace_requires_base_operator():
    with pytest.raises(DeclarationError, match="requires operator '\\+'"):
        TypeDefinition.build("T", operators=[InPlace.of("+=")])


def test_build_without_constructor_is_empty():
    typ = TypeDefinition.build("T")
    assert typ.constructor.sig.params == ()


def test_from_members_classifies_names():
    def init(rt, this, n):
        this.fields["n"] = n

    def add(rt, this, other):
        return None

    def get_size(rt, this):
        return 1

    def set_size(rt, this, value):
        return None

    def func(rt, this, a, b=2):
        return a

    typ = TypeDefinition.from_members(
        "Box",
        init,
        {"+": add, "$size": get_size, "$size.set": set_size, "func": func},
    )
    assert set(typ.operators) == {"+"}
    assert set(typ.methods) == {"func"}
    assert set(typ.properties) == {"$size"}
    assert not typ.properties["$size"].read_only
    assert typ.methods["func"].sig.max_args == 2
    assert [p.name for p in typ.constructor.sig.params] == ["n"]


def test_from_members_setter_needs_getter():
    def set_size(rt, this, value):
        return None

    with pytest.raises(DeclarationError, match="has no getter"):
        TypeDefinition.from_members("Box", None, {"$size.set": set_size})


def test_assigning_constructor_stores_params():
    ctor = Constructor.assigning("a", Param("b", 9))
    assert ctor.sig.min_args == 1
    assert ctor.sig.max_args == 2
