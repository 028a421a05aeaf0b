"""Accessor naming conventions.

Both Java-bean style and snake_case accessors are understood::

    getName / get_name   → "name"
    setName / set_name   → "name"
    isEnabled / is_enabled → "enabled"

Property → setter names go the other way, camelCase first::

    setter_names("count") → ("setCount", "set_count")
"""

from __future__ import annotations

from typing import Optional, Tuple

import regex

GET, SET, IS = "get", "set", "is"

# prefix, optional underscore, then at least one character of property name
_ACCESSOR_RE = regex.compile(r"^(?P<prefix>get|set|is)_?(?P<rest>.+)$")


def split_accessor(member_name: str) -> Optional[Tuple[str, str]]:
    """Return ``(prefix, property_name)`` or ``None`` if not an accessor name.

    The first character after the prefix is lower-cased; nothing else is
    touched, so ``getURL`` maps to ``"uRL"`` exactly as a bean introspector
    without acronym handling would.
    """
    match = _ACCESSOR_RE.match(member_name)
    if match is None:
        return None
    rest = match.group("rest")
    return match.group("prefix"), rest[0].lower() + rest[1:]


def setter_names(prop: str) -> Tuple[str, ...]:
    """Candidate setter names for *prop*, in lookup order."""
    if not prop:
        return ()
    camel = SET + prop[0].upper() + prop[1:]
    snake = f"{SET}_{prop}"
    return (camel,) if camel == snake else (camel, snake)


def is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")
