"""Synthetic beans: objects that implement a contract from a property dict.

A *contract* is a class made only of accessor methods, typically an ``ABC``
with abstract methods or a ``typing.Protocol``::

    class Person(ABC):
        @abstractmethod
        def getName(self) -> str: ...
        @abstractmethod
        def setName(self, name: str) -> None: ...
        @abstractmethod
        def isActive(self) -> bool: ...

    person = BeanFactory().create_bean(Person)
    person.setName("fred")
    person.getName()     # → "fred"
    person.isActive()    # → False  (never set, zero value of bool)
    isinstance(person, Person)   # → True

Each member is resolved once, when the bean class is synthesized, by the
first matching rule:

1. ``get…``                       → stored value or zero value of the return type
2. ``set…``                       → store the argument verbatim
3. ``is…`` returning ``bool``     → like 1
4. anything else                  → raises ``UnsupportedMemberError`` when called

``repr``, ``==`` and ``hash`` are answered from the property dict by the
``SyntheticBean`` base class.  Beans are equal only when they implement the
identical contract object and hold equal properties.
"""

from __future__ import annotations

import abc
import inspect
import logging
import types
import typing
from typing import Any, Callable, Optional, Type, TypeVar

from .errors import InvalidArgumentError, InvalidContractError, UnsupportedMemberError
from .introspection import normalize_type, single_parameter, signature_of, type_hints, zero_value
from .naming import GET, IS, SET, split_accessor

_logger = logging.getLogger(__name__)

T = TypeVar("T")

# Bases contributed by the contract machinery itself, never by the contract
_INFRASTRUCTURE = (object, abc.ABC, typing.Protocol, typing.Generic)


def _freeze(value: Any) -> Any:
    if isinstance(value, dict):
        return frozenset((k, _freeze(v)) for k, v in value.items())
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    if isinstance(value, (set, frozenset)):
        return frozenset(_freeze(v) for v in value)
    return value


class SyntheticBean:
    """Base class of every synthesized bean.

    Holds the property store and answers the representation, equality and
    hashing requests.  Concrete subclasses are created by ``BeanFactory``.
    """

    _bean_contract: type

    def __init__(self) -> None:
        self._bean_properties: dict[str, Any] = {}

    def __repr__(self) -> str:
        return repr(self._bean_properties)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SyntheticBean):
            return NotImplemented
        if other._bean_contract is not self._bean_contract:
            return False
        return self._bean_properties == other._bean_properties

    def __hash__(self) -> int:
        try:
            return hash(_freeze(self._bean_properties))
        except TypeError:
            # unhashable values: equal beans still share their key set
            return hash(frozenset(self._bean_properties))


def is_synthetic_bean(obj: Any) -> bool:
    return isinstance(obj, SyntheticBean)


def contract_of(bean: SyntheticBean) -> type:
    """The contract *bean* was synthesized for."""
    return type(bean)._bean_contract


def properties_of(bean: SyntheticBean) -> dict[str, Any]:
    """Snapshot of the bean's property store."""
    return dict(bean._bean_properties)


# ─────────────────────────────────────────────────────────────────────────────
# Contract inspection
# ─────────────────────────────────────────────────────────────────────────────


def _is_placeholder_init(init: Any) -> bool:
    # typing.Protocol installs its own __init__ on every protocol class
    return getattr(init, "__name__", "").startswith("_no_init")


def contract_members(contract: Any) -> dict[str, Callable[..., Any]]:
    """Collect the public methods of *contract*, base classes first.

    Raises ``InvalidContractError`` unless *contract* is a class made only of
    methods: no data fields, no properties, no static/class methods and no
    constructor.
    """
    if not isinstance(contract, type):
        raise InvalidContractError(contract, "not a class")

    members: dict[str, Callable[..., Any]] = {}
    for klass in reversed(contract.__mro__):
        if klass in _INFRASTRUCTURE:
            continue
        namespace = vars(klass)
        init = namespace.get("__init__")
        if init is not None and not _is_placeholder_init(init):
            raise InvalidContractError(contract, f"{klass.__qualname__} declares a constructor")
        for name, attr in namespace.items():
            if name.startswith("_"):
                continue
            if not inspect.isfunction(attr):
                raise InvalidContractError(contract, f"{name} is not a method")
            members[name] = attr
        for name in inspect.get_annotations(klass):
            if not name.startswith("_") and name not in members:
                raise InvalidContractError(contract, f"{name} is a data field")

    if not members:
        raise InvalidContractError(contract, "declares no members")
    return members


# ─────────────────────────────────────────────────────────────────────────────
# Member synthesis
# ─────────────────────────────────────────────────────────────────────────────


def _getter(prop: str, default: Any) -> Callable[[SyntheticBean], Any]:
    def getter(self: SyntheticBean) -> Any:
        return self._bean_properties.get(prop, default)
    return getter


def _setter(prop: str) -> Callable[[SyntheticBean, Any], None]:
    def setter(self: SyntheticBean, value: Any) -> None:
        self._bean_properties[prop] = value
    return setter


def _unsupported(member_name: str) -> Callable[..., Any]:
    def unsupported(self: SyntheticBean, *args: Any, **kwargs: Any) -> Any:
        raise UnsupportedMemberError(member_name)
    return unsupported


def _adopt(impl: Callable[..., Any], source: Callable[..., Any], hints: dict[str, Any], owner: str) -> Callable[..., Any]:
    impl.__name__ = source.__name__
    impl.__qualname__ = f"{owner}.{source.__name__}"
    impl.__doc__ = source.__doc__
    impl.__module__ = source.__module__
    # resolved annotations under the contract's parameter names, so that
    # PropertyBinder can convert values bound into a synthesized bean
    impl.__signature__ = signature_of(source)
    impl.__annotations__ = dict(hints)
    return impl


class BeanFactory:
    """Create synthetic beans for contracts.

    Args:
        validate_contract: ``True`` → reject contracts containing members
                           that are not accessors, or accessors with the
                           wrong arity.  ``False`` (default) → such members
                           are synthesized and raise
                           ``UnsupportedMemberError`` when called.
        logger:            Logger for synthesis diagnostics.
    """

    def __init__(self, *, validate_contract: bool = False, logger: Optional[logging.Logger] = None) -> None:
        self.validate_contract = validate_contract
        self.logger = logger or _logger
        self._bean_classes: dict[type, type] = {}

    def create_bean(self, contract: Type[T]) -> T:
        """Return a new, empty bean implementing *contract*."""
        if contract is None:
            raise InvalidArgumentError("contract is None")
        if not isinstance(contract, type):
            raise InvalidContractError(contract, "not a class")
        bean_class = self._bean_classes.get(contract)
        if bean_class is None:
            bean_class = self.synthesize(contract)
            self._bean_classes[contract] = bean_class
        return bean_class()

    def synthesize(self, contract: type) -> type:
        """Build the bean class for *contract* (one per factory and contract)."""
        members = contract_members(contract)
        self.logger.info("creating bean class for contract: %s.%s", contract.__module__, contract.__qualname__)
        class_name = f"{contract.__name__}Bean"

        namespace: dict[str, Any] = {"_bean_contract": contract, "__module__": contract.__module__}
        for name, func in members.items():
            hints = type_hints(func)
            impl = self._dispatch(contract, name, func, hints)
            namespace[name] = _adopt(impl, func, hints, class_name)

        return types.new_class(class_name, (SyntheticBean, contract), exec_body=lambda ns: ns.update(namespace))

    def _dispatch(self, contract: type, name: str, func: Callable[..., Any], hints: dict[str, Any]) -> Callable[..., Any]:
        returns = hints.get("return", inspect.Signature.empty)
        parts = split_accessor(name)
        if parts is not None:
            prefix, prop = parts
            if prefix == GET:
                self._check_arity(contract, name, func, 0)
                return _getter(prop, zero_value(returns))
            if prefix == SET:
                self._check_arity(contract, name, func, 1)
                return _setter(prop)
            if prefix == IS and normalize_type(returns) is bool:
                self._check_arity(contract, name, func, 0)
                return _getter(prop, zero_value(returns))
        if self.validate_contract:
            raise InvalidContractError(contract, f"{name} is not a getter, setter or boolean is-accessor")
        self.logger.debug("member %s of %s will raise when called", name, contract.__qualname__)
        return _unsupported(name)

    def _check_arity(self, contract: type, name: str, func: Callable[..., Any], expected: int) -> None:
        if not self.validate_contract:
            return
        sig = signature_of(func)
        params = list(sig.parameters.values())[1:] if sig is not None else []
        if len(params) != expected or (expected == 1 and single_parameter(func, bound=False) is None):
            raise InvalidContractError(contract, f"{name} must take exactly {expected} argument(s)")


def create_synthetic_bean(contract: Type[T], *, validate_contract: bool = False) -> T:
    """One-shot ``BeanFactory(validate_contract=...).create_bean(contract)``."""
    return BeanFactory(validate_contract=validate_contract).create_bean(contract)
