"""Lazy ranges produced by the ``..`` and ``...`` operators.

A Range is a descriptor; it holds no iteration state. Each traversal gets
its own RangeCursor, so a Range can be walked any number of times. The
cursor only talks to the endpoints through dispatch (``<``/``<=`` and
``+``), which is what lets any ordered type produce ranges.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .errors import TypeMismatchError
from .instance import Instance

if TYPE_CHECKING:
    from .runtime import Runtime


@dataclass(frozen=True, eq=False)
class Range:
    start: Instance
    end: Instance
    inclusive: bool
    step: Instance
    rt: Runtime = field(repr=False)

    def __iter__(self) -> RangeCursor:
        return RangeCursor(self)

    def __len__(self) -> int:
        return sum(1 for _ in self)

    @property
    def symbol(self) -> str:
        return "..." if self.inclusive else ".."

    def to_string(self) -> str:
        return f"{self.start.to_string()}{self.symbol}{self.end.to_string()}"


class RangeCursor:
    def __init__(self, rng: Range) -> None:
        self._range = rng
        self._current: Instance | None = rng.start

    def __iter__(self) -> RangeCursor:
        return self

    def __next__(self) -> Instance:
        if self._current is None:
            raise StopIteration
        rng = self._range
        d = rng.rt.dispatcher
        cmp = "<=" if rng.inclusive else "<"
        if not d.truthy(d.apply_operator(self._current, cmp, rng.end)):
            self._current = None
            raise StopIteration
        value = self._current
        nxt = d.apply_operator(value, "+", rng.step)
        # A step that does not move forward (float precision at large
        # magnitudes) ends the traversal.
        self._current = nxt if d.truthy(d.apply_operator(value, "<", nxt)) else None
        return value


def make_range(
    rt: Runtime, start: Instance, end: Instance, inclusive: bool, step: Instance
) -> Range:
    for what, v in (("end", end), ("step", step)):
        if not isinstance(v, Instance) or v.typ is not start.typ:
            raise TypeMismatchError(
                f"range {what} must be {start.typ.name}, got {_type_name(v)}", start.typ.name
            )
    for what, v in (("start", start), ("end", end), ("step", step)):
        value = v.fields.get("value")
        if isinstance(value, float) and not math.isfinite(value):
            raise TypeMismatchError(f"range {what} must be finite, got {value}", start.typ.name)
    return Range(start, end, inclusive, step, rt)


def _type_name(v: object) -> str:
    if isinstance(v, Instance):
        return v.typ.name
    return type(v).__name__
