"""Type-introspection helpers shared by the binder, the strategies and beans.

Python has no primitive/boxed split, so *normalizing* a type means peeling the
``typing`` layers that do not change what an instance looks like at runtime:

::

    Optional[int]          → int
    Annotated[int, "x"]    → int
    list[int]              → list
    int | str              → int | str   (left as-is, a real union)

Compatibility is an explicit check (``is_compatible``) rather than a
try-the-call-and-see approach.
"""

from __future__ import annotations

import inspect
import types
import typing
from decimal import Decimal
from fractions import Fraction
from typing import Any, Callable, Optional, Union

NoneType = type(None)

#: Returned by ``parameter_annotation`` / ``return_annotation`` when nothing is declared.
UNDECLARED = inspect.Parameter.empty

_ZERO_VALUES: dict[type, Any] = {
    bool: False,
    int: 0,
    float: 0.0,
    complex: 0j,
    Decimal: Decimal(0),
    Fraction: Fraction(0),
}


def _is_union(tp: Any) -> bool:
    return typing.get_origin(tp) is Union or isinstance(tp, types.UnionType)


def normalize_type(tp: Any) -> Any:
    """Return the runtime-checkable form of *tp*."""
    if tp is None:
        return NoneType
    origin = typing.get_origin(tp)
    if origin is typing.Annotated:
        return normalize_type(typing.get_args(tp)[0])
    if _is_union(tp):
        members = [a for a in typing.get_args(tp) if a is not NoneType]
        if len(members) == 1:
            return normalize_type(members[0])
        return tp
    if origin is not None and isinstance(origin, type):
        return origin
    return tp


def accepts_none(tp: Any) -> bool:
    """True if *tp* is unchecked or explicitly admits ``None``."""
    if tp is UNDECLARED or tp is Any or tp is object or tp is None or tp is NoneType:
        return True
    if typing.get_origin(tp) is typing.Annotated:
        return accepts_none(typing.get_args(tp)[0])
    if _is_union(tp):
        return any(accepts_none(a) for a in typing.get_args(tp))
    return False


def is_compatible(value: Any, tp: Any) -> bool:
    """Decide whether *value* can be passed as-is to a parameter declared *tp*.

    Undeclared, ``Any``, ``TypeVar`` and unresolved (string) annotations accept
    everything.  Unions accept a value compatible with any member.
    """
    if tp is UNDECLARED or tp is Any or isinstance(tp, (str, typing.TypeVar, typing.ForwardRef)):
        return True
    if value is None:
        return accepts_none(tp)
    if typing.get_origin(tp) is typing.Annotated:
        return is_compatible(value, typing.get_args(tp)[0])
    if _is_union(tp):
        return any(is_compatible(value, a) for a in typing.get_args(tp))
    if typing.get_origin(tp) is typing.Literal:
        return value in typing.get_args(tp)
    runtime = normalize_type(tp)
    if not isinstance(runtime, type):
        # typing constructs without a runtime class (NewType, Callable[...] etc.)
        return True
    return isinstance(value, runtime)


def zero_value(tp: Any) -> Any:
    """Default returned by a synthesized getter that was never set."""
    runtime = normalize_type(tp)
    if runtime is not tp and _is_union(tp):
        # Optional[...] getters default to None
        return None
    return _ZERO_VALUES.get(runtime) if isinstance(runtime, type) else None


def type_hints(func: Callable[..., Any]) -> dict[str, Any]:
    """Resolved annotations of *func*; falls back to the raw strings when a
    forward reference cannot be resolved."""
    try:
        return typing.get_type_hints(func, include_extras=True)
    except (NameError, TypeError):
        return dict(getattr(func, "__annotations__", {}) or {})


def return_annotation(func: Callable[..., Any]) -> Any:
    hints = type_hints(func)
    return hints.get("return", UNDECLARED)


def signature_of(obj: Callable[..., Any]) -> Optional[inspect.Signature]:
    """``inspect.signature`` or ``None`` for builtins that expose no signature."""
    try:
        return inspect.signature(obj)
    except (TypeError, ValueError):
        return None


def single_parameter(func: Callable[..., Any], *, bound: bool) -> Optional[inspect.Parameter]:
    """Return the only positional parameter of *func*, or ``None``.

    With ``bound=False`` the first parameter (``self``) is skipped.  Any other
    required parameter disqualifies the function.
    """
    sig = signature_of(func)
    if sig is None:
        return None
    params = list(sig.parameters.values())
    if not bound:
        params = params[1:]
    if len(params) != 1:
        return None
    param = params[0]
    if param.kind not in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
        return None
    return param


def type_name(tp: Any) -> str:
    if isinstance(tp, type):
        return tp.__qualname__
    return repr(tp)
