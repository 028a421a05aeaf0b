"""Binder factory: the single place where the conversion pieces are assembled.

``build_default_binder`` is the recommended entry point for users who want a
working PropertyBinder without hand-wiring the registry and the chain.

Customisation points:

* **error_on_unused**            – unknown properties raise (default) or are skipped.
* **converters**                 – extra ``(in_type, out_type) → fn`` entries,
                                   applied on top of the built-in ones.
* **include_builtin_converters** – ``False`` → start from an empty registry.
* **strategies**                 – extra ``(strategy, priority)`` pairs mounted
                                   next to the standard ones.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Mapping, Optional, Tuple

from .binder import PropertyBinder
from .converters import BUILTIN_CONVERTERS
from .core import ConversionChain, ConversionNode, ConversionStrategy
from .errors import InvalidArgumentError
from .registry import ConversionRegistry
from .strategies import ConstructorStrategy, ParseStrategy, RegistryStrategy, ValueOfStrategy

REGISTRY_PRIORITY = 100
VALUE_OF_PRIORITY = 50
PARSE_PRIORITY = 25
CONSTRUCTOR_PRIORITY = 0


def build_default_registry(
        converters: Optional[Mapping[Tuple[Any, Any], Callable[[Any], Any]]] = None,
        *,
        include_builtin_converters: bool = True,
) -> ConversionRegistry:
    """Registry holding ``BUILTIN_CONVERTERS`` (unless disabled) plus *converters*."""
    registry = ConversionRegistry(BUILTIN_CONVERTERS if include_builtin_converters else None)
    for (in_type, out_type), converter in (converters or {}).items():
        registry.register(in_type, out_type, converter)
    return registry


def build_default_chain(
        registry: Optional[ConversionRegistry] = None,
        *,
        strategies: Optional[Iterable[Tuple[ConversionStrategy, int]]] = None,
        logger: Optional[logging.Logger] = None,
) -> ConversionChain:
    """Assemble the standard fallback chain.

    What gets wired
    ---------------
    * ``RegistryStrategy``    (priority 100) – explicit converters from *registry*.
    * ``ValueOfStrategy``     (priority  50) – ``value_of``/``valueOf``/``from_value``
      factories and enum member names.
    * ``ParseStrategy``       (priority  25) – ``parse``/``from_string``/``from_str``/
      ``fromisoformat`` factories.
    * ``ConstructorStrategy`` (priority   0) – single-argument construction.

    Args:
        registry:   Converter registry.  ``None`` → ``build_default_registry()``.
        strategies: Additional ``(strategy, priority)`` pairs.
        logger:     Logger for conversion diagnostics.
    """
    registry = registry if registry is not None else build_default_registry()
    chain = ConversionChain(logger=logger)
    chain.register_strategy(RegistryStrategy(registry), priority=REGISTRY_PRIORITY)
    chain.register_strategy(ValueOfStrategy(), priority=VALUE_OF_PRIORITY)
    chain.register_strategy(ParseStrategy(), priority=PARSE_PRIORITY)
    chain.register_strategy(ConstructorStrategy(), priority=CONSTRUCTOR_PRIORITY)
    for strategy, priority in strategies or ():
        chain.register(ConversionNode(name=strategy.name, priority=priority, strategy=strategy))
    return chain


def build_default_binder(
        *,
        error_on_unused: bool = True,
        registry: Optional[ConversionRegistry] = None,
        converters: Optional[Mapping[Tuple[Any, Any], Callable[[Any], Any]]] = None,
        include_builtin_converters: bool = True,
        strategies: Optional[Iterable[Tuple[ConversionStrategy, int]]] = None,
        logger: Optional[logging.Logger] = None,
) -> PropertyBinder:
    """Assemble a PropertyBinder with the standard conversion chain.

    Args:
        error_on_unused:            Raise ``UnknownPropertyError`` for entries
                                    without a setter (default) instead of
                                    logging and skipping them.
        registry:                   Use this registry as-is (it stays live:
                                    later ``register`` calls affect the binder).
                                    Mutually exclusive with *converters*.
        converters:                 Extra converters on top of the built-ins.
        include_builtin_converters: ``False`` → no built-in converters.
        strategies:                 Extra ``(strategy, priority)`` pairs.
        logger:                     Logger shared by the binder and its chain.

    Returns:
        Fully wired ``PropertyBinder``.

    Example::

        binder = build_default_binder(converters={(str, Money): Money.parse_eur})
        binder.bind(invoice, {"total": "12.50", "due": "2024-01-31"})
    """
    if registry is None:
        registry = build_default_registry(converters, include_builtin_converters=include_builtin_converters)
    elif converters:
        raise InvalidArgumentError("pass either registry or converters, not both")
    chain = build_default_chain(registry, strategies=strategies, logger=logger)
    return PropertyBinder(chain=chain, error_on_unused=error_on_unused, logger=logger)


def bind_properties(
        target: Any,
        properties: Mapping[str, Any],
        *,
        error_on_unused: bool = True,
        registry: Optional[ConversionRegistry] = None,
) -> None:
    """One-shot ``build_default_binder(...).bind(target, properties)``."""
    build_default_binder(error_on_unused=error_on_unused, registry=registry).bind(target, properties)
