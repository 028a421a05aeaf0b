"""Explicit ``(in_type, out_type) → converter`` registry.

Lookup is by exact, normalized type pair: no supertype/subtype matching and
no variance.  At most one converter exists per ordered pair; registering the
same pair again replaces the previous converter.

::

    registry = ConversionRegistry()
    registry.register(str, int, int)
    registry.lookup(str, int)            # → int
    registry.lookup(str, Optional[int])  # → int  (Optional is normalized)
    registry.lookup(str, bool)           # → None (no variance)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterator, Mapping, Optional, Tuple

from .errors import InvalidArgumentError
from .introspection import normalize_type, type_name

Converter = Callable[[Any], Any]


@dataclass(frozen=True)
class ConverterKey:
    """Ordered, normalized type pair used as the registry key."""

    in_type: Any
    out_type: Any

    @classmethod
    def of(cls, in_type: Any, out_type: Any) -> ConverterKey:
        return cls(normalize_type(in_type), normalize_type(out_type))

    def __str__(self) -> str:
        return f"({type_name(self.in_type)}, {type_name(self.out_type)})"


class ConversionRegistry:
    """Mutable store of user-registered converters."""

    def __init__(self, converters: Optional[Mapping[Tuple[Any, Any], Converter]] = None) -> None:
        self._converters: dict[ConverterKey, Converter] = {}
        for (in_type, out_type), converter in (converters or {}).items():
            self.register(in_type, out_type, converter)

    # -- registration -------------------------------------------------------

    def register(self, in_type: Any, out_type: Any, converter: Converter) -> None:
        """Register *converter* for ``(in_type, out_type)``, replacing any existing one."""
        if in_type is None:
            raise InvalidArgumentError("in_type is None")
        if out_type is None:
            raise InvalidArgumentError("out_type is None")
        if converter is None:
            raise InvalidArgumentError("converter is None")
        if not callable(converter):
            raise InvalidArgumentError(f"converter is not callable: {converter!r}")
        self._converters[ConverterKey.of(in_type, out_type)] = converter

    def unregister(self, in_type: Any, out_type: Any) -> None:
        """Remove the converter for the pair; no-op if absent."""
        if in_type is None:
            raise InvalidArgumentError("in_type is None")
        if out_type is None:
            raise InvalidArgumentError("out_type is None")
        self._converters.pop(ConverterKey.of(in_type, out_type), None)

    def clear(self) -> None:
        self._converters.clear()

    # -- lookup -------------------------------------------------------------

    def lookup(self, in_type: Any, out_type: Any) -> Optional[Converter]:
        return self._converters.get(ConverterKey.of(in_type, out_type))

    def keys(self) -> list[ConverterKey]:
        return list(self._converters)

    def copy(self) -> ConversionRegistry:
        clone = ConversionRegistry()
        clone._converters = dict(self._converters)
        return clone

    def __contains__(self, pair: object) -> bool:
        if isinstance(pair, ConverterKey):
            return pair in self._converters
        if isinstance(pair, tuple) and len(pair) == 2:
            return ConverterKey.of(*pair) in self._converters
        return False

    def __len__(self) -> int:
        return len(self._converters)

    def __iter__(self) -> Iterator[ConverterKey]:
        return iter(list(self._converters))

    def __repr__(self) -> str:
        return f"ConversionRegistry({', '.join(str(k) for k in self._converters)})"
