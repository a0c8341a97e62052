"""Field-specifier parsing and identifier normalization.

A field slot body has the grammar ``[identifier] [':' conversion_key]``.
Identifiers may use attribute (``person.name``) and index (``array[0]``)
access; both are flattened into a capture-safe token joined with
``SEPARATOR``::

    person.name   → person__name
    array[0]      → array__0
    a.b[c][1]     → a__b__c__1

Exports
-------
SEPARATOR
    Token separator used by ``normalize``.

FieldSpec
    Result of ``parse_field_spec``.

parse_field_spec
    Split a slot body into identifier and conversion key.

split_path / normalize
    Identifier → path tokens / flat token.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

SEPARATOR = "__"

_IDENTIFIER_RE = re.compile(r"[A-Za-z]\w*(?:\.\w+|\[\w+\])*")
_HEAD_RE = re.compile(r"[A-Za-z]\w*")
_ACCESS_RE = re.compile(r"\.(\w+)|\[(\w+)\]")
_KEY_RE = re.compile(r"[\w\-]+")


class FieldSpecError(ValueError):
    """Malformed slot body; the compiler re-raises it as ``InvalidFormat``."""


@dataclass(frozen=True)
class FieldSpec:
    name: Optional[str]
    conversion_key: Optional[str]


def split_path(name: str) -> List[str]:
    """Split a dotted/bracketed identifier into its path tokens.

    Examples::

        split_path("person.name")  → ["person", "name"]
        split_path("array[0]")     → ["array", "0"]
        split_path("a.b[c][1]")    → ["a", "b", "c", "1"]
    """
    if not _IDENTIFIER_RE.fullmatch(name):
        raise FieldSpecError(f"invalid field name {name!r}")
    head = _HEAD_RE.match(name)
    tokens = [head.group(0)]
    for attr, index in _ACCESS_RE.findall(name, head.end()):
        tokens.append(attr or index)
    return tokens


def normalize(name: str) -> str:
    """Flatten *name* into a capture-group-safe label."""
    return SEPARATOR.join(split_path(name))


def parse_field_spec(body: str) -> FieldSpec:
    """Parse the text between ``{`` and ``}``.

    ::

        parse_field_spec("")              → FieldSpec(None, None)
        parse_field_spec(":integer")      → FieldSpec(None, "integer")
        parse_field_spec("user.id:d")     → FieldSpec("user.id", "d")

    Key *existence* is not checked here; that needs the converter tables.
    """
    name, sep, key = body.partition(":")
    if sep:
        if not key:
            raise FieldSpecError("empty conversion key")
        if not _KEY_RE.fullmatch(key):
            raise FieldSpecError(f"invalid conversion key {key!r}")
    if name:
        split_path(name)
    return FieldSpec(name or None, key if sep else None)
