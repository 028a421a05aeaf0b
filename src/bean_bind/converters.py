"""Built-in text converters for the default ConversionRegistry.

This module defines the reference converter set installed by
``build_default_registry`` (and therefore by ``build_default_binder``).
Every converter takes a ``str`` and returns an instance of its target type,
or raises ``ValueError`` when the text is not a valid encoding.

Exports
-------
BUILTIN_CONVERTERS
    Dictionary mapping ``(str, target_type)`` pairs to converter functions.
    Targets: bool, int, float, complex, Decimal, Fraction, type, datetime,
    date, time, timedelta, ZoneInfo.

Custom converters can be registered by passing a mapping to
``build_default_binder(converters=...)`` or directly on a registry.
"""

from __future__ import annotations

import builtins
import importlib
from datetime import date, datetime, time, timedelta
from decimal import Decimal, InvalidOperation
from fractions import Fraction
from typing import Any, Callable, Tuple
from zoneinfo import ZoneInfo

import regex

_TRUE_WORDS = frozenset({"true", "yes", "on", "1"})
_FALSE_WORDS = frozenset({"false", "no", "off", "0"})

# ISO 8601 duration restricted to fixed-length units: PnW or PnDTnHnMnS
_DURATION_RE = regex.compile(
    r"""
    ^(?P<sign>[-+])?P
    (?:(?P<weeks>\d+(?:\.\d+)?)W)?
    (?:(?P<days>\d+(?:\.\d+)?)D)?
    (?:T
        (?:(?P<hours>\d+(?:\.\d+)?)H)?
        (?:(?P<minutes>\d+(?:\.\d+)?)M)?
        (?:(?P<seconds>\d+(?:\.\d+)?)S)?
    )?$
    """,
    regex.VERBOSE | regex.IGNORECASE,
)


# ─────────────────────────────────────────────────────────────────────────────
# Converter functions
# ─────────────────────────────────────────────────────────────────────────────


def text_to_bool(text: str) -> bool:
    word = text.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ValueError(f"not a boolean: {text!r}")


def text_to_decimal(text: str) -> Decimal:
    try:
        return Decimal(text.strip())
    except InvalidOperation as exc:
        raise ValueError(f"not a decimal: {text!r}") from exc


def text_to_type(text: str) -> type:
    """Resolve ``"package.module.Qualified.Name"`` (or a builtin name) to a class."""
    name = text.strip()
    if "." not in name:
        found = getattr(builtins, name, None)
        if isinstance(found, type):
            return found
        raise ValueError(f"unknown type name: {text!r}")

    parts = name.split(".")
    # longest importable module prefix wins, the rest is an attribute path
    for split in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:split])
        try:
            obj: Any = importlib.import_module(module_name)
        except ImportError:
            continue
        for attr in parts[split:]:
            obj = getattr(obj, attr, None)
            if obj is None:
                break
        if isinstance(obj, type):
            return obj
    raise ValueError(f"unknown type name: {text!r}")


def text_to_timedelta(text: str) -> timedelta:
    """Parse an ISO 8601 duration such as ``PT1H30M`` or ``-P2DT0.5S``."""
    match = _DURATION_RE.match(text.strip())
    if match is None or text.strip().upper().endswith("T"):
        raise ValueError(f"not an ISO 8601 duration: {text!r}")
    fields = {
        unit: float(amount)
        for unit, amount in match.groupdict().items()
        if unit != "sign" and amount is not None
    }
    if not fields:
        raise ValueError(f"not an ISO 8601 duration: {text!r}")
    delta = timedelta(**fields)
    return -delta if match.group("sign") == "-" else delta


def text_to_zone(text: str) -> ZoneInfo:
    try:
        return ZoneInfo(text.strip())
    except (KeyError, ValueError) as exc:
        raise ValueError(f"unknown time zone: {text!r}") from exc


# ─────────────────────────────────────────────────────────────────────────────
# Built-in converter table
# ─────────────────────────────────────────────────────────────────────────────

BUILTIN_CONVERTERS: dict[Tuple[type, type], Callable[[Any], Any]] = {
    (str, bool): text_to_bool,
    (str, int): lambda x: int(x.strip()),
    (str, float): lambda x: float(x.strip()),
    (str, complex): lambda x: complex(x.strip()),
    (str, Decimal): text_to_decimal,
    (str, Fraction): lambda x: Fraction(x.strip()),
    (str, type): text_to_type,
    (str, datetime): lambda x: datetime.fromisoformat(x.strip()),
    (str, date): lambda x: date.fromisoformat(x.strip()),
    (str, time): lambda x: time.fromisoformat(x.strip()),
    (str, timedelta): text_to_timedelta,
    (str, ZoneInfo): text_to_zone,
}
