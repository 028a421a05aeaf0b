"""Error taxonomy for bean synthesis and property binding.

Every error raised by this package derives from ``BeanBindError``.  Binding
failures additionally derive from ``BindingError`` so that callers can catch
the whole family around a ``bind`` call.

Errors are raised synchronously and never recovered from internally, with one
exception: ``PropertyBinder(error_on_unused=False)`` logs and skips unknown
properties instead of raising ``UnknownPropertyError``.
"""

from __future__ import annotations

from typing import Any


def _type_name(tp: Any) -> str:
    if isinstance(tp, type):
        return f"{tp.__module__}.{tp.__qualname__}" if tp.__module__ != "builtins" else tp.__qualname__
    return repr(tp)


class BeanBindError(Exception):
    """Root of every error raised by bean_bind."""


class InvalidArgumentError(BeanBindError, ValueError):
    """A required argument (target, mapping, type, converter) is absent or invalid."""


class InvalidContractError(BeanBindError, TypeError):
    """The contract description cannot be synthesized into a bean."""

    def __init__(self, contract: Any, reason: str) -> None:
        self.contract = contract
        self.reason = reason
        name = getattr(contract, "__qualname__", repr(contract))
        super().__init__(f"invalid contract {name}: {reason}")


class UnsupportedMemberError(BeanBindError, NotImplementedError):
    """A synthesized bean received a call that no dispatch rule handles."""

    def __init__(self, member_name: str) -> None:
        self.member_name = member_name
        super().__init__(f"cannot handle member: {member_name}")


class BindingError(BeanBindError):
    """Base class for failures while pushing properties into a target."""


class UnknownPropertyError(BindingError):
    """No setter matches the property and unknown properties are fatal."""

    def __init__(self, property_name: str) -> None:
        self.property_name = property_name
        super().__init__(f'Could not find setter for property "{property_name}"')


class SetterInvocationError(BindingError):
    """The setter exists but calling it failed."""

    def __init__(self, property_name: str, setter_name: str) -> None:
        self.property_name = property_name
        self.setter_name = setter_name
        super().__init__(f'Failed to set property "{property_name}", cannot invoke setter {setter_name}')


class ConversionError(BindingError):
    """A conversion strategy was attempted and faulted.

    Attributes:
        value_type: Runtime type of the value being converted.
        param_type: Normalized parameter type of the setter.
        strategy:   Name of the strategy that faulted.
        property_name: Property being bound, filled in by the binder.
    """

    def __init__(self, value_type: Any, param_type: Any, strategy: str, detail: str = "") -> None:
        self.value_type = value_type
        self.param_type = param_type
        self.strategy = strategy
        self.property_name: str | None = None
        message = f"{strategy} failed converting {_type_name(value_type)} to {_type_name(param_type)}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class UnconvertibleValueError(BindingError):
    """No strategy in the conversion chain produced a compatible value."""

    def __init__(self, value_type: Any, param_type: Any, property_name: str | None = None) -> None:
        self.value_type = value_type
        self.param_type = param_type
        self.property_name = property_name
        message = f"Cannot convert {_type_name(value_type)} to {_type_name(param_type)}"
        if property_name is not None:
            message = f'Failed to set property "{property_name}", {message[0].lower()}{message[1:]}'
        super().__init__(message)
