"""Conversion registry — conversion key → ``Converter``.

The built-in table is a read-only mapping assembled once at import and never
mutated.  Custom converters are supplied per compile as a caller-owned table
that is consulted *before* the built-ins, so a caller entry named like a
built-in key shadows it for that compile only.

Exports
-------
BUILTIN_CONVERTERS
    Read-only ``{key: Converter}`` with the built-in keys and their short
    aliases.

ConverterRegistry
    Layered lookup: caller table first, then ``BUILTIN_CONVERTERS``.
"""

from __future__ import annotations

from collections import ChainMap
from types import MappingProxyType
from typing import Any, Mapping, Optional

from .converters import (
    DATETIME_FORMATS,
    FloatConverter,
    IntegerConverter,
    TextConverter,
    WordConverter,
    as_converter,
    make_datetime_converter,
)
from .core import Converter

# ─────────────────────────────────────────────────────────────────────────────
# Built-in table
# ─────────────────────────────────────────────────────────────────────────────

ALIASES: Mapping[str, str] = MappingProxyType({
    "d": "integer",
    "f": "float",
    "w": "word",
    "tg": "generic",
    "ta": "american",
    "te": "email",
    "rfc2822": "email",
    "th": "http-log",
    "ts": "syslog",
    "ti": "iso8601",
})


def _builtin_table() -> Mapping[str, Converter]:
    table: dict[str, Converter] = {
        "integer": IntegerConverter(),
        "float": FloatConverter(),
        "word": WordConverter(),
    }
    for key in DATETIME_FORMATS:
        table[key] = make_datetime_converter(key)
    for alias, target in ALIASES.items():
        table[alias] = table[target]
    return MappingProxyType(table)


BUILTIN_CONVERTERS: Mapping[str, Converter] = _builtin_table()

# Bound to fields that carry no conversion key.
DEFAULT_CONVERTER: Converter = TextConverter()


# ─────────────────────────────────────────────────────────────────────────────
# Registry
# ─────────────────────────────────────────────────────────────────────────────


class ConverterRegistry:
    """Resolve conversion keys for one compile.

    ::

        registry = ConverterRegistry({"hex": with_pattern("[0-9a-f]+")(lambda s: int(s, 16))})
        registry.lookup("hex")      # caller entry
        registry.lookup("integer")  # built-in
        registry.lookup("zz")       # None
    """

    def __init__(self, extra: Optional[Mapping[str, Any]] = None) -> None:
        caller = {key: as_converter(entry) for key, entry in (extra or {}).items()}
        self._table = ChainMap(caller, BUILTIN_CONVERTERS)

    def lookup(self, key: str) -> Optional[Converter]:
        """Return the converter for *key*, or ``None`` if no table has it."""
        return self._table.get(key)

    def __contains__(self, key: str) -> bool:
        return key in self._table

    def keys(self) -> list[str]:
        return sorted(self._table)
