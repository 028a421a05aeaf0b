"""Core abstractions: conversion strategies and the ordered conversion chain.

This module owns the *interfaces* of the conversion subsystem.  Concrete
strategies live in ``strategies``; the standard chain is assembled in
``factory``.

Conversion flow (``PropertyBinder.bind`` on a type mismatch)::

    value, declared parameter type
      │
      ▼
    normalize_type(param_type)
      │
      ▼
    for node in chain by priority desc:
        result = node.strategy.convert(value, target_type)
        result is NOT_CONVERTED → next node
        otherwise            → return result
      │
      ▼
    UnconvertibleValueError(type(value), target_type, property_name)

A strategy signals "not applicable / type mismatch" by returning
``NOT_CONVERTED``.  It signals a *fault* by raising ``ConversionError``,
which stops the chain.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Optional

from .errors import ConversionError, UnconvertibleValueError
from .introspection import normalize_type, type_name

_logger = logging.getLogger(__name__)


# Returned by a strategy that produced nothing (not applicable or type mismatch)
NOT_CONVERTED: Any = object()


# ─────────────────────────────────────────────────────────────────────────────
# ConversionStrategy
# ─────────────────────────────────────────────────────────────────────────────


class ConversionStrategy(ABC):
    """One way of turning a value into an instance of a target type.

    Class attributes (set in subclass)::

        name: str  – label used in logs and in ``ConversionError.strategy``
    """

    name: str

    @abstractmethod
    def convert(self, value: Any, target_type: Any) -> Any:
        """Return the converted value or ``NOT_CONVERTED``.

        *target_type* is already normalized.  Raise ``ConversionError`` when
        the strategy applied but faulted.
        """


# ─────────────────────────────────────────────────────────────────────────────
# ConversionChain
# ─────────────────────────────────────────────────────────────────────────────


@dataclass
class ConversionNode:
    """Single entry of the chain.  Higher *priority* is tried first."""

    name: str
    priority: int
    strategy: ConversionStrategy


class ConversionChain:
    """Ordered fallback list of conversion strategies.

    ``convert`` walks nodes by descending priority and returns the first
    result.  Nodes with equal priority keep registration order.
    """

    def __init__(
            self,
            nodes: Optional[List[ConversionNode]] = None,
            *,
            logger: Optional[logging.Logger] = None,
    ) -> None:
        self._nodes: List[ConversionNode] = list(nodes) if nodes else []
        self.logger = logger or _logger

    # -- registration -------------------------------------------------------

    def register(self, node: ConversionNode) -> None:
        """Add a node to the chain."""
        self._nodes.append(node)

    def register_strategy(self, strategy: ConversionStrategy, *, priority: int = 0) -> None:
        """Sugar for ``register(ConversionNode(strategy.name, priority, strategy))``."""
        self.register(ConversionNode(name=strategy.name, priority=priority, strategy=strategy))

    # -- conversion ---------------------------------------------------------

    def convert(self, value: Any, param_type: Any, property_name: Optional[str] = None) -> Any:
        """Convert *value* for a parameter declared as *param_type*."""
        value_type = type(value)
        target_type = normalize_type(param_type)
        for node in self.nodes():
            try:
                result = node.strategy.convert(value, target_type)
            except ConversionError as exc:
                exc.property_name = property_name
                raise
            if result is not NOT_CONVERTED:
                self.logger.debug(
                    "Converted %s to %s via %s", type_name(value_type), type_name(target_type), node.name,
                )
                return result
            self.logger.debug(
                "No %s conversion from %s to %s", node.name, type_name(value_type), type_name(target_type),
            )
        raise UnconvertibleValueError(value_type, target_type, property_name)

    # -- introspection ------------------------------------------------------

    def nodes(self) -> List[ConversionNode]:
        """Return nodes sorted by descending priority."""
        return sorted(self._nodes, key=lambda n: n.priority, reverse=True)
