"""Errors raised by the FeInt object model.

Every failure is surfaced to the caller; nothing here is retried or
recovered internally.
"""

from __future__ import annotations


class FeintError(Exception):
    """Base error for type registration and dispatch."""

    def __init__(self, msg: str, type_name: str | None = None):
        if type_name is None:
            super().__init__(msg)
        else:
            super().__init__(f"{msg} (in type {type_name})")
        self.msg = msg
        self.type_name = type_name


# ============================================================
# Registration (load time)
# ============================================================


class RegistrationError(FeintError):
    """Problem with a type declaration or the type table."""


class DuplicateTypeError(RegistrationError):
    """A type with the same name is already registered."""


class UnknownTypeError(RegistrationError):
    """No type with the given name is registered."""


class DeclarationError(RegistrationError):
    """A type declaration is malformed."""


# ============================================================
# Dispatch (call site)
# ============================================================


class DispatchError(FeintError):
    """Runtime failure of a single construction, call or access."""


class ArityError(DispatchError):
    pass


class OperatorNotSupportedError(DispatchError):
    pass


class ReadOnlyPropertyError(DispatchError):
    pass


class UndefinedFieldError(DispatchError):
    pass


class UndefinedPropertyError(UndefinedFieldError):
    """Read of a computed property the type does not declare."""


class TypeMismatchError(DispatchError):
    pass


class DivisionByZeroError(DispatchError):
    pass


class IntegerOverflowError(DispatchError):
    """Int result outside the signed 64-bit range under strict math."""


class ImmutableMemberError(DispatchError):
    """Assignment to a name that belongs to the type, not the instance."""


class NotCallableError(DispatchError):
    pass


class FloatOverflowError(DispatchError):
    """Float value or result too large to represent."""
