"""Tests for exclusive (``..``) and inclusive (``...``) ranges."""

import itertools
import math

import pytest

from feint import Range, TypeDefinition, TypeMismatchError, make_range


def _ints(rt, a, b, sym):
    rng = rt.dispatcher.apply_operator(rt.new_int(a), sym, rt.new_int(b))
    return [v.fields["value"] for v in rt.iterate(rng)]


def _floats(rt, a, b, sym):
    rng = rt.dispatcher.apply_operator(rt.new_float(a), sym, rt.new_float(b))
    return [v.fields["value"] for v in rt.iterate(rng)]


# ── Int ──


def test_exclusive(rt):
    assert _ints(rt, 3, 7, "..") == [3, 4, 5, 6]


def test_inclusive(rt):
    assert _ints(rt, 3, 7, "...") == [3, 4, 5, 6, 7]


def test_empty_exclusive_when_equal(rt):
    assert _ints(rt, 5, 5, "..") == []


def test_single_inclusive_when_equal(rt):
    assert _ints(rt, 5, 5, "...") == [5]


@pytest.mark.parametrize("sym", ["..", "..."])
def test_descending_is_empty(rt, sym):
    assert _ints(rt, 7, 3, sym) == []


def test_negative_bounds(rt):
    assert _ints(rt, -2, 1, "..") == [-2, -1, 0]


# ── Float ──


def test_float_range_steps_by_one(rt):
    assert _floats(rt, 0.5, 3.0, "..") == [0.5, 1.5, 2.5]


def test_float_inclusive_only_when_reachable(rt):
    assert _floats(rt, 0.5, 2.5, "...") == [0.5, 1.5, 2.5]
    assert _floats(rt, 0.5, 2.0, "...") == [0.5, 1.5]


def test_float_values_are_floats(rt):
    rng = rt.dispatcher.apply_operator(rt.new_float(1.0), "..", rt.new_float(3.0))
    for v in rng:
        assert v.typ.name == "Float"


def test_float_range_stops_when_step_is_lost(rt):
    big = float(2**53)
    rng = rt.dispatcher.apply_operator(rt.new_float(big), "..", rt.new_float(big + 4))
    # big + 1.0 rounds back to big; the traversal must still end.
    values = [v.fields["value"] for v in itertools.islice(rng, 10)]
    assert values == [big]
    assert len(rng) == 1


@pytest.mark.parametrize("start, end", [(0.0, math.inf), (-math.inf, 0.0), (math.nan, 1.0)])
def test_float_range_rejects_non_finite_bounds(rt, start, end):
    with pytest.raises(TypeMismatchError, match="must be finite"):
        rt.dispatcher.apply_operator(rt.new_float(start), "...", rt.new_float(end))


# ── Descriptor ──


def test_range_is_restartable(rt):
    rng = rt.dispatcher.apply_operator(rt.new_int(1), "...", rt.new_int(4))
    first = [v.fields["value"] for v in rt.iterate(rng)]
    second = [v.fields["value"] for v in rt.iterate(rng)]
    assert first == second == [1, 2, 3, 4]


def test_cursors_are_independent(rt):
    rng = rt.dispatcher.apply_operator(rt.new_int(0), "..", rt.new_int(3))
    a = rt.iterate(rng)
    b = rt.iterate(rng)
    assert next(a).fields["value"] == 0
    assert next(a).fields["value"] == 1
    assert next(b).fields["value"] == 0


def test_exhausted_cursor_stays_exhausted(rt):
    rng = rt.dispatcher.apply_operator(rt.new_int(0), "..", rt.new_int(1))
    cur = rt.iterate(rng)
    assert [v.fields["value"] for v in cur] == [0]
    assert list(cur) == []


def test_iteration_does_not_touch_endpoints(rt):
    start, end = rt.new_int(0), rt.new_int(3)
    rng = rt.dispatcher.apply_operator(start, "..", end)
    list(rng)
    assert start.fields["value"] == 0
    assert end.fields["value"] == 3


def test_len_and_to_string(rt):
    rng = rt.dispatcher.apply_operator(rt.new_int(3), "...", rt.new_int(7))
    assert isinstance(rng, Range)
    assert len(rng) == 5
    assert rng.to_string() == "3...7"


def test_iterate_requires_range(rt):
    with pytest.raises(TypeMismatchError):
        rt.iterate(rt.new_int(3))


# ── User types ──


def _version_type():
    def init(rt, this, n):
        this.fields["n"] = n

    def add(rt, this, other):
        return rt.construct("Version", (this.fields["n"] + other.fields["n"],))

    def lt(rt, this, other):
        return rt.construct("Int", (int(this.fields["n"] < other.fields["n"]),))

    def upto(rt, this, other):
        return make_range(rt, this, other, False, rt.construct("Version", (2,)))

    return TypeDefinition.from_members("Version", init, {"+": add, "<": lt, "..": upto})


def test_user_type_range_uses_its_operators(rt):
    rt.register_type(_version_type())
    start = rt.construct("Version", (1,))
    end = rt.construct("Version", (8,))
    rng = rt.dispatcher.apply_operator(start, "..", end)
    assert [v.fields["n"] for v in rng] == [1, 3, 5, 7]


def test_make_range_checks_types(rt):
    with pytest.raises(TypeMismatchError, match="range end must be Int, got Float"):
        make_range(rt, rt.new_int(1), rt.new_float(2.0), False, rt.new_int(1))
    with pytest.raises(TypeMismatchError, match="range step"):
        make_range(rt, rt.new_int(1), rt.new_int(2), False, 1)


def test_make_range_rejects_non_finite_step(rt):
    with pytest.raises(TypeMismatchError, match="range step must be finite"):
        make_range(rt, rt.new_float(0.0), rt.new_float(3.0), False, rt.new_float(math.inf))
