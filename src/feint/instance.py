"""Runtime values: instances of registered types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .errors import UndefinedFieldError

if TYPE_CHECKING:
    from .runtime import Runtime
    from .types import Method, TypeDefinition


@dataclass(eq=False)
class Instance:
    """A type reference plus the fields the constructor (or later code) stored.

    Computed properties never live in ``fields``.
    """

    typ: TypeDefinition
    fields: dict[str, Any] = field(default_factory=dict)

    @property
    def type_name(self) -> str:
        return self.typ.name

    def get_field(self, name: str) -> Any:
        if name not in self.fields:
            raise UndefinedFieldError(f"undefined field '{name}'", self.typ.name)
        return self.fields[name]

    def set_field(self, name: str, value: Any) -> None:
        self.fields[name] = value

    def has_field(self, name: str) -> bool:
        return name in self.fields

    def to_string(self) -> str:
        if self.typ.builtin and "value" in self.fields:
            return str(self.fields["value"])
        parts: list[str] = []
        for k, v in self.fields.items():
            parts.append(f"{k}: {to_string(v)}")
        inner = ", ".join(parts)
        return f"{self.typ.name}({inner})"

    def __repr__(self) -> str:
        if self.typ.builtin:
            return f"{self.typ.name}({self.to_string()})"
        return self.to_string()


@dataclass(eq=False)
class BoundMethod:
    """A method read off an instance as a plain attribute."""

    rt: Runtime
    this: Instance
    method: Method

    def __call__(self, *args: Any) -> Any:
        return self.method.invoke(self.rt, self.this, args)

    def __repr__(self) -> str:
        return f"<bound method {self.this.typ.name}.{self.method.name}>"


def to_string(v: Any) -> str:
    if isinstance(v, Instance):
        return v.to_string()
    if isinstance(v, bool):
        return "true" if v else "false"
    if v is None:
        return "nil"
    return str(v)
