"""Concrete ConversionStrategy implementations.

Exports
-------
RegistryStrategy
    Explicit ``(value type, target type)`` converters from a
    ``ConversionRegistry``.  Highest priority in the default chain.

ValueOfStrategy
    ``value_of``-style static/class factories on the target type, plus enum
    lookup by member name.

ParseStrategy
    ``parse``-style static/class factories (``parse``, ``fromisoformat``, …).

ConstructorStrategy
    Calling the target type with the value as its single argument.  Lowest
    priority since it always allocates a new instance.

Candidate rules shared by the factory and constructor strategies:

* the callable must be bindable with exactly one positional argument;
* a declared parameter annotation the value does not satisfy skips it;
* a declared return annotation other than the target type skips it;
* a result that is not an instance of the target type skips it;
* a ``TypeError`` from a callable whose parameter is not annotated is a type
  mismatch (skip); every other exception is a fault → ``ConversionError``.
"""

from __future__ import annotations

import enum
import inspect
import logging
import types
import typing
from typing import Any, Callable, Optional, Tuple

from .core import NOT_CONVERTED, ConversionStrategy
from .errors import ConversionError
from .introspection import (
    UNDECLARED,
    is_compatible,
    normalize_type,
    return_annotation,
    signature_of,
    type_hints,
    type_name,
)
from .registry import ConversionRegistry

logger = logging.getLogger(__name__)

_SELF = getattr(typing, "Self", None)

VALUE_OF_NAMES: Tuple[str, ...] = ("value_of", "valueOf", "from_value")
PARSE_NAMES: Tuple[str, ...] = ("parse", "from_string", "from_str", "fromisoformat")


def _underlying_function(raw: Any) -> Any:
    return raw.__func__ if isinstance(raw, (staticmethod, classmethod)) else raw


def _is_static_member(raw: Any) -> bool:
    """True for ``staticmethod``/``classmethod`` objects, including C-level ones."""
    return isinstance(raw, (staticmethod, classmethod, types.ClassMethodDescriptorType))


def _declares_other_return(func: Any, target_type: type) -> bool:
    if not inspect.isfunction(func):
        return False
    declared = return_annotation(func)
    if declared is UNDECLARED or isinstance(declared, str) or (_SELF is not None and declared is _SELF):
        return False
    return normalize_type(declared) is not target_type


def call_single_argument(
        call: Callable[[Any], Any],
        value: Any,
        target_type: type,
        *,
        strategy: str,
        hints_from: Any = None,
) -> Any:
    """Invoke *call* with *value* under the shared candidate rules.

    *hints_from* is the Python function whose annotations describe *call*
    (``None`` when *call* is a builtin).
    """
    annotation: Any = UNDECLARED
    sig = signature_of(call)
    if sig is not None:
        try:
            bound = sig.bind(value)
        except TypeError:
            return NOT_CONVERTED
        (param_name,) = bound.arguments
        param = sig.parameters[param_name]
        if hints_from is not None and param.kind is not inspect.Parameter.VAR_POSITIONAL:
            annotation = type_hints(hints_from).get(param_name, UNDECLARED)
        if not is_compatible(value, annotation):
            logger.debug("%s: %s does not accept %s", strategy, call, type_name(type(value)))
            return NOT_CONVERTED

    try:
        result = call(value)
    except TypeError as exc:
        if annotation is not UNDECLARED:
            raise ConversionError(type(value), target_type, strategy, str(exc)) from exc
        logger.debug("%s: %s rejected %s (%s)", strategy, call, type_name(type(value)), exc)
        return NOT_CONVERTED
    except Exception as exc:
        raise ConversionError(type(value), target_type, strategy, str(exc)) from exc

    if not isinstance(result, target_type):
        logger.debug("%s: %s returned %s, not %s", strategy, call, type_name(type(result)), type_name(target_type))
        return NOT_CONVERTED
    return result


class RegistryStrategy(ConversionStrategy):
    """Apply the converter registered for the exact type pair."""

    name = "registered converter"

    def __init__(self, registry: ConversionRegistry) -> None:
        self.registry = registry

    def convert(self, value: Any, target_type: Any) -> Any:
        converter = self.registry.lookup(type(value), target_type)
        if converter is None:
            return NOT_CONVERTED
        try:
            return converter(value)
        except Exception as exc:
            raise ConversionError(type(value), target_type, self.name, str(exc)) from exc


class FactoryMethodStrategy(ConversionStrategy):
    """Try static/class methods of the target type named *method_names*, in order."""

    def __init__(self, name: str, method_names: Tuple[str, ...]) -> None:
        self.name = name
        self.method_names = method_names

    def candidates(self, target_type: type) -> list[Tuple[Callable[[Any], Any], Any]]:
        """``(bound callable, annotated function)`` pairs found on *target_type*."""
        found = []
        for method_name in self.method_names:
            raw = inspect.getattr_static(target_type, method_name, None)
            if raw is None:
                continue
            if not _is_static_member(raw):
                logger.debug("Skipping %s.%s, not static", type_name(target_type), method_name)
                continue
            func = _underlying_function(raw)
            if _declares_other_return(func, target_type):
                logger.debug("Skipping %s.%s, returns another type", type_name(target_type), method_name)
                continue
            hints_from = func if inspect.isfunction(func) else None
            found.append((getattr(target_type, method_name), hints_from))
        return found

    def convert(self, value: Any, target_type: Any) -> Any:
        if not isinstance(target_type, type):
            return NOT_CONVERTED
        for call, hints_from in self.candidates(target_type):
            result = call_single_argument(call, value, target_type, strategy=self.name, hints_from=hints_from)
            if result is not NOT_CONVERTED:
                return result
        return NOT_CONVERTED


class ValueOfStrategy(FactoryMethodStrategy):
    """``value_of`` factories; enums are looked up by member name first."""

    def __init__(self, method_names: Tuple[str, ...] = VALUE_OF_NAMES) -> None:
        super().__init__("value_of", method_names)

    def convert(self, value: Any, target_type: Any) -> Any:
        if (
                isinstance(target_type, type)
                and issubclass(target_type, enum.Enum)
                and isinstance(value, str)
                and value in target_type.__members__
        ):
            return target_type[value]
        return super().convert(value, target_type)


class ParseStrategy(FactoryMethodStrategy):
    """``parse`` factories such as ``datetime.fromisoformat``."""

    def __init__(self, method_names: Tuple[str, ...] = PARSE_NAMES) -> None:
        super().__init__("parse", method_names)


class ConstructorStrategy(ConversionStrategy):
    """Construct the target type from the value."""

    name = "constructor"

    def convert(self, value: Any, target_type: Any) -> Any:
        # type(x) answers a question instead of constructing
        if not isinstance(target_type, type) or target_type is type or inspect.isabstract(target_type):
            return NOT_CONVERTED
        init = getattr(target_type, "__init__", None)
        hints_from: Optional[Any] = init if inspect.isfunction(init) else None
        return call_single_argument(value=value, call=target_type, target_type=target_type,
                                    strategy=self.name, hints_from=hints_from)
