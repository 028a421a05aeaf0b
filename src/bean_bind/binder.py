"""PropertyBinder: push a ``{name: value}`` mapping into an object's setters.

Binding flow (``PropertyBinder.bind`` entry point)::

    discover_setters(type(target))            ← rebuilt on every call
      │
      ▼
    for name, value in properties.items():    ← mapping order
        descriptor = setters[setName] or setters[set_name]
            missing → UnknownPropertyError | warn + skip
        is_compatible(value, descriptor.parameter_type)
            yes → descriptor.invoke(target, value)
            no  → chain.convert(...) → descriptor.invoke(target, converted)

Binding is not transactional: properties bound before a failing entry stay
bound.  The input mapping is never mutated.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from .core import ConversionChain
from .errors import InvalidArgumentError, SetterInvocationError, UnknownPropertyError
from .introspection import (
    UNDECLARED,
    is_compatible,
    return_annotation,
    single_parameter,
    type_hints,
    type_name,
)
from .naming import SET, is_dunder, setter_names

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SetterDescriptor:
    """A discovered one-argument setter.

    Attributes:
        name:           Lookup key, e.g. ``"setCount"``.
        function:       Plain function taking ``(self, value)``.
        parameter_name: Name of the value parameter.
        parameter_type: Declared annotation (``UNDECLARED`` if none).
    """

    name: str
    function: Callable[[Any, Any], Any]
    parameter_name: str
    parameter_type: Any = UNDECLARED

    def accepts(self, value: Any) -> bool:
        return is_compatible(value, self.parameter_type)

    def invoke(self, target: Any, value: Any, property_name: str) -> None:
        try:
            self.function(target, value)
        except Exception as exc:
            raise SetterInvocationError(property_name, self.name) from exc


def _describe(name: str, func: Callable[..., Any]) -> Optional[SetterDescriptor]:
    param = single_parameter(func, bound=False)
    if param is None:
        return None
    annotation = type_hints(func).get(param.name, UNDECLARED)
    return SetterDescriptor(name=name, function=func, parameter_name=param.name, parameter_type=annotation)


def discover_setters(
        target_type: type,
        *,
        logger: Optional[logging.Logger] = None,
) -> dict[str, SetterDescriptor]:
    """Map setter name → descriptor for every qualifying member of *target_type*.

    A setter is a plain (non-static) function whose return annotation is
    absent or ``None``, whose name starts with ``set`` and which takes exactly
    one positional parameter besides ``self``.  Writable properties are
    registered under ``set<Name>``.  Members that do not qualify are logged,
    never fatal.
    """
    log = logger or _logger
    setters: dict[str, SetterDescriptor] = {}
    names = [n for n in dir(target_type) if not is_dunder(n)]
    log.debug("Found %d members on %s", len(names), type_name(target_type))
    for name in names:
        raw = inspect.getattr_static(target_type, name, None)

        if isinstance(raw, property):
            if raw.fset is None or name.startswith("_"):
                continue
            key = setter_names(name)[0]
            descriptor = _describe(key, raw.fset)
            if descriptor is not None:
                log.debug("Found property setter: %s", name)
                setters[key] = descriptor
            continue

        if isinstance(raw, (staticmethod, classmethod)):
            log.debug("Skipping method, is static: %s", name)
        elif not inspect.isfunction(raw):
            continue
        elif return_annotation(raw) not in (UNDECLARED, None, type(None)):
            log.debug("Skipping method, not void return: %s", name)
        elif not name.startswith(SET):
            log.debug('Skipping method, does not start with "set": %s', name)
        else:
            descriptor = _describe(name, raw)
            if descriptor is None:
                log.debug("Skipping method, does not have exactly one parameter: %s", name)
            else:
                log.debug("Found setter: %s", name)
                setters[name] = descriptor
    log.debug("Found %d setters", len(setters))
    return setters


class PropertyBinder:
    """Bind mapping entries onto a target object's setters.

    Args:
        chain:           Conversion chain consulted on type mismatch.
        error_on_unused: ``True`` (default) → an entry without a setter raises
                         ``UnknownPropertyError``; ``False`` → it is logged
                         at WARNING and skipped.
        logger:          Logger for discovery/binding diagnostics.  ``None``
                         → this module's logger.

    Example::

        binder = build_default_binder()
        binder.bind(counter, {"count": "42"})
        counter.getCount()   # → 42
    """

    def __init__(
            self,
            *,
            chain: Optional[ConversionChain] = None,
            error_on_unused: bool = True,
            logger: Optional[logging.Logger] = None,
    ) -> None:
        self.chain = chain if chain is not None else ConversionChain()
        self.error_on_unused = error_on_unused
        self.logger = logger or _logger

    def setters_for(self, target: Any) -> dict[str, SetterDescriptor]:
        return discover_setters(type(target), logger=self.logger)

    def bind(self, target: Any, properties: Mapping[str, Any]) -> None:
        """Push every entry of *properties* into *target*, in mapping order."""
        if target is None:
            raise InvalidArgumentError("target is None")
        if properties is None:
            raise InvalidArgumentError("properties is None")
        if not isinstance(properties, Mapping):
            raise InvalidArgumentError(f"properties must be a mapping, got {type_name(type(properties))}")

        setters = self.setters_for(target)
        for property_name, value in properties.items():
            if not isinstance(property_name, str) or not property_name:
                raise InvalidArgumentError(f"property name must be a non-empty string: {property_name!r}")

            descriptor = self._find_setter(setters, property_name)
            if descriptor is None:
                if self.error_on_unused:
                    raise UnknownPropertyError(property_name)
                self.logger.warning('Could not find setter for property "%s"', property_name)
                continue

            if not descriptor.accepts(value):
                value = self.chain.convert(value, descriptor.parameter_type, property_name)
            descriptor.invoke(target, value, property_name)

    @staticmethod
    def _find_setter(setters: Mapping[str, SetterDescriptor], property_name: str) -> Optional[SetterDescriptor]:
        for candidate in setter_names(property_name):
            if candidate in setters:
                return setters[candidate]
        return None
