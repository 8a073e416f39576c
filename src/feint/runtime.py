"""Runtime: the type table, the dispatcher and configuration in one place.

The interpreter talks to the object model through four operations:
``register_type``, ``construct``, ``access`` and ``iterate``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from .dispatch import AccessKind, Dispatcher
from .errors import NotCallableError, TypeMismatchError
from .instance import Instance
from .numeric import FLOAT, INT, builtin_types
from .ranges import Range, RangeCursor
from .registry import TypeTable
from .types import TypeDefinition

logger = logging.getLogger(__name__)

_TRUE_STRINGS = frozenset({"1", "true", "yes", "on"})


def _env_flag(env: Mapping[str, str], name: str) -> bool:
    return env.get(name, "").strip().lower() in _TRUE_STRINGS


@dataclass(frozen=True)
class RuntimeConfig:
    install_builtins: bool = True
    strict_math: bool = False
    thread_safe: bool = False
    log_level: str | None = None

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> RuntimeConfig:
        """Read ``FEINT_STRICT_MATH``, ``FEINT_THREAD_SAFE`` and ``FEINT_LOG_LEVEL``."""
        if env is None:
            env = os.environ
        return cls(
            strict_math=_env_flag(env, "FEINT_STRICT_MATH"),
            thread_safe=_env_flag(env, "FEINT_THREAD_SAFE"),
            log_level=env.get("FEINT_LOG_LEVEL") or None,
        )


class Runtime:
    config: RuntimeConfig
    types: TypeTable
    dispatcher: Dispatcher

    def __init__(self, config: RuntimeConfig | None = None) -> None:
        self.config = config if config is not None else RuntimeConfig()
        if self.config.log_level is not None:
            logging.getLogger(__package__).setLevel(self.config.log_level.upper())
        self.types = TypeTable(thread_safe=self.config.thread_safe)
        self.dispatcher = Dispatcher(self)
        if self.config.install_builtins:
            for typ in builtin_types():
                self.types.register(typ)

    # ---- Types -------------------------------------------------------------

    def register_type(self, definition: TypeDefinition) -> None:
        self.types.register(definition)

    def lookup(self, name: str) -> TypeDefinition:
        return self.types.lookup(name)

    # ---- Instances ---------------------------------------------------------

    def construct(self, type_name: str, args: Sequence[Any] = ()) -> Instance:
        typ = self.types.lookup(type_name)
        ctor = typ.constructor
        bound = ctor.sig.bind(args, what=f"{type_name}()", owner=type_name)
        this = Instance(typ)
        logger.debug("constructing %s with %d argument(s)", type_name, len(args))
        if ctor.fn is None:
            raise NotCallableError(f"{type_name}() has no constructor body", type_name)
        ctor.fn(self, this, *bound)
        return this

    def new_int(self, value: int) -> Instance:
        return self.construct(INT, (value,))

    def new_float(self, value: float) -> Instance:
        return self.construct(FLOAT, (value,))

    # ---- Dispatch ----------------------------------------------------------

    def access(
        self,
        instance: Instance,
        kind: AccessKind | str,
        name: str,
        args: Sequence[Any] = (),
    ) -> Any:
        if not isinstance(instance, Instance):
            raise TypeMismatchError(
                f"cannot access '{name}' on {type(instance).__name__}"
            )
        return self.dispatcher.access(instance, AccessKind(kind), name, args)

    def truthy(self, value: Any) -> bool:
        return self.dispatcher.truthy(value)

    def iterate(self, rng: Range) -> RangeCursor:
        if not isinstance(rng, Range):
            raise TypeMismatchError(f"cannot iterate {type(rng).__name__}")
        return iter(rng)


# ============================================================
# Process-wide default
# ============================================================


_default: Runtime | None = None


def default_runtime() -> Runtime:
    global _default
    if _default is None:
        _default = Runtime(RuntimeConfig.from_env())
    return _default


def register_type(definition: TypeDefinition) -> None:
    default_runtime().register_type(definition)


def construct(type_name: str, args: Sequence[Any] = ()) -> Instance:
    return default_runtime().construct(type_name, args)


def access(
    instance: Instance, kind: AccessKind | str, name: str, args: Sequence[Any] = ()
) -> Any:
    return default_runtime().access(instance, kind, name, args)


def iterate(rng: Range) -> RangeCursor:
    return default_runtime().iterate(rng)
