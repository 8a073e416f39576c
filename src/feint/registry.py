"""The type declaration table: name -> TypeDefinition, write-once per name."""

from __future__ import annotations

import logging
import threading
from contextlib import nullcontext
from typing import ContextManager, Iterator

from .errors import DuplicateTypeError, UnknownTypeError
from .types import TypeDefinition

logger = logging.getLogger(__name__)


class TypeTable:
    """Registry of type definitions.

    Registration may be guarded by a lock for hosts that register from
    several threads; lookups never take it since a name, once bound, is
    never rebound.
    """

    def __init__(self, *, thread_safe: bool = False) -> None:
        self._types: dict[str, TypeDefinition] = {}
        self._lock: threading.Lock | None = threading.Lock() if thread_safe else None

    def _guard(self) -> ContextManager[object]:
        if self._lock is None:
            return nullcontext()
        return self._lock

    def register(self, definition: TypeDefinition) -> None:
        with self._guard():
            if definition.name in self._types:
                raise DuplicateTypeError(f"type '{definition.name}' is already registered")
            self._types[definition.name] = definition
        logger.info(
            "registered type %s (%d methods, %d operators, %d computed properties)",
            definition.name,
            len(definition.methods),
            len(definition.operators),
            len(definition.properties),
        )

    def lookup(self, name: str) -> TypeDefinition:
        try:
            return self._types[name]
        except KeyError:
            raise UnknownTypeError(f"unknown type '{name}'") from None

    def get(self, name: str) -> TypeDefinition | None:
        return self._types.get(name)

    def names(self) -> list[str]:
        return list(self._types)

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[TypeDefinition]:
        return iter(list(self._types.values()))

    def __len__(self) -> int:
        return len(self._types)
