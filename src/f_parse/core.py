"""Core abstractions: errors, typed values, the Converter interface, and the
template data model.

This module owns every *interface* in the system.  Nothing here depends on a
concrete implementation.  Built-in converters live in ``converters``, the
template scanner in ``compiler``, matching in ``pattern``.

Compilation / matching flow::

    template (raw user input)
      │
      ▼
    compiler.tokenize(template)        → [Literal | FieldSlot, ...]
      │
      ▼
    fields.parse_field_spec(slot)      → FieldIdentifier + conversion key
    ConverterRegistry.lookup(key)      → Converter (sub-pattern + convert)
      │
      ▼
    CompiledPattern                    ← immutable, reusable
        .full_match / .search / .find_all(text)
              └── Converter.convert(captured text) → TypedValue
"""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional


# ─────────────────────────────────────────────────────────────────────────────
# Errors
# ─────────────────────────────────────────────────────────────────────────────


class ParseError(Exception):
    """Base class for every failure reported by compiling or matching."""


class InvalidFormat(ParseError, ValueError):
    """The template cannot be compiled.

    Raised for unmatched braces, malformed identifiers, duplicate normalized
    identifiers, unknown conversion keys and sub-patterns the matching engine
    rejects.
    """

    def __init__(self, template: str, reason: str, position: Optional[int] = None) -> None:
        self.template = template
        self.reason = reason
        self.position = position
        where = f" at position {position}" if position is not None else ""
        super().__init__(f"invalid format {template!r}{where}: {reason}")


class NoMatch(ParseError):
    """A compiled template does not match the given text."""

    def __init__(self, template: str, text: str) -> None:
        self.template = template
        self.text = text
        super().__init__(f"{template!r} does not match {text!r}")


class TypeConversionFailed(ParseError, ValueError):
    """Captured text matched a field's sub-pattern but could not be converted."""

    def __init__(self, field: str, text: str, reason: str) -> None:
        self.field = field
        self.text = text
        self.reason = reason
        super().__init__(f"field {field!r}: cannot convert {text!r}: {reason}")


class FieldLookupError(LookupError):
    """Unknown positional index or field name on a ``MatchResult``."""


class ValueKindError(TypeError):
    """A typed accessor asked for a different kind than the field produced."""


# ─────────────────────────────────────────────────────────────────────────────
# Typed values
# ─────────────────────────────────────────────────────────────────────────────


class ValueKind(enum.Enum):
    """Closed set of value shapes a converter can produce."""

    INTEGER = "integer"
    FLOAT = "float"
    TEXT = "text"
    TIMESTAMP = "timestamp"
    OBJECT = "object"  # caller converters that do not declare a kind


@dataclass(frozen=True)
class TypedValue:
    """A converted field value tagged with its kind."""

    kind: ValueKind
    value: Any


# ─────────────────────────────────────────────────────────────────────────────
# Converter — sub-pattern + conversion function
# ─────────────────────────────────────────────────────────────────────────────


class Converter(ABC):
    """A conversion key's capability pair.

    Class attributes (override in subclass)::

        pattern: str | None   – matching sub-pattern; ``None`` ⇒ generic fallback
        kind:    ValueKind    – shape of the values ``convert`` returns
    """

    pattern: Optional[str] = None
    kind: ValueKind = ValueKind.OBJECT

    @abstractmethod
    def convert(self, text: str) -> Any:
        """Turn matched *text* into a value.

        Raise ``ValueError`` when the text is structurally valid but
        semantically unusable; the matcher reports it as
        ``TypeConversionFailed`` for the field being converted.
        """


# ─────────────────────────────────────────────────────────────────────────────
# Template data model
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class FieldIdentifier:
    """Identity of one field slot.

    ``index`` is the slot's appearance order (0-based, counting every field).
    Positional fields have ``name is None``; named fields keep their original
    dotted/bracketed ``name`` and its flat ``normalized`` form.
    """

    index: int
    name: Optional[str] = None
    normalized: Optional[str] = None

    @property
    def is_positional(self) -> bool:
        return self.name is None

    @property
    def key(self) -> str:
        """Field key used by ``MatchResult.converted``."""
        return str(self.index) if self.normalized is None else self.normalized

    @property
    def label(self) -> str:
        """Capture-group label inside the assembled pattern."""
        return f"_{self.index}" if self.normalized is None else self.normalized


@dataclass(frozen=True)
class Literal:
    """Literal template text.  ``source`` keeps doubled braces verbatim."""

    text: str
    source: str


@dataclass(frozen=True)
class Field:
    """One ``{…}`` slot after its specifier has been parsed."""

    identifier: FieldIdentifier
    conversion_key: Optional[str]
    source: str
