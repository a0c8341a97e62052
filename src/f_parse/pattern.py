"""Compiled templates and the three matching modes.

Exports
-------
CompiledField
    One field of a compiled template: identifier, conversion key, converter.

CompiledPattern
    Immutable, reusable artifact produced by ``compiler.compile_template``.
    Offers ``full_match``, ``search`` and ``find_all`` (plus ``require``,
    the ``NoMatch``-raising form of ``full_match``).

A missing match is ``None`` (``find_all``: an empty iterator) in every mode.
A conversion failure raises ``TypeConversionFailed`` and discards the whole
match.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterator, Optional, Tuple

from .core import (
    Converter,
    FieldIdentifier,
    NoMatch,
    TypeConversionFailed,
    TypedValue,
)
from .result import MatchResult

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompiledField:
    identifier: FieldIdentifier
    conversion_key: Optional[str]
    converter: Converter

    @property
    def label(self) -> str:
        return self.identifier.label

    @property
    def key(self) -> str:
        return self.identifier.key

    def convert(self, text: str) -> TypedValue:
        """Run the bound converter, reporting failures against this field."""
        try:
            value = self.converter.convert(text)
        except TypeConversionFailed as exc:
            raise TypeConversionFailed(self.key, text, exc.reason) from exc
        except (ValueError, ArithmeticError, TypeError, LookupError) as exc:
            raise TypeConversionFailed(self.key, text, str(exc) or type(exc).__name__) from exc
        return TypedValue(self.converter.kind, value)


class CompiledPattern:
    """A template compiled once and matched many times.

    Holds no mutable state after construction; one instance may be shared
    between threads.

    ::

        p = compile("{name} is {age:integer}")
        r = p.full_match("John is 25")
        r.positional          # ("John", "25")
        r.as_int("age")       # 25
        [r[0] for r in compile("{:d}").find_all("1, 2, 3")]   # [1, 2, 3]
    """

    __slots__ = ("template", "segments", "fields", "pattern", "case_sensitive",
                 "timeout", "_regex", "_names")

    def __init__(
            self,
            template: str,
            segments: Tuple[Any, ...],
            fields: Tuple[CompiledField, ...],
            pattern: str,
            compiled: Any,
            *,
            case_sensitive: bool,
            timeout: Optional[float],
    ) -> None:
        self.template = template
        self.segments = segments
        self.fields = fields
        self.pattern = pattern
        self.case_sensitive = case_sensitive
        self.timeout = timeout
        self._regex = compiled
        self._names = {
            f.identifier.normalized: f.identifier.name
            for f in fields if not f.identifier.is_positional
        }

    def __repr__(self) -> str:
        if len(self.template) > 20:
            return f"<{type(self).__name__} {self.template[:17] + '...'!r}>"
        return f"<{type(self).__name__} {self.template!r}>"

    # -- introspection ------------------------------------------------------

    @property
    def named_fields(self) -> list[str]:
        """Original names of the named fields, in template order."""
        return [f.identifier.name for f in self.fields if not f.identifier.is_positional]

    @property
    def fixed_fields(self) -> list[int]:
        """Appearance indices of the positional fields."""
        return [f.identifier.index for f in self.fields if f.identifier.is_positional]

    # -- matching -----------------------------------------------------------

    def full_match(self, text: str) -> Optional[MatchResult]:
        """Match the whole of *text*.  Returns ``None`` on no match."""
        m = self._run(self._regex.fullmatch, text, 0, len(text))
        return None if m is None else self._evaluate(m)

    def require(self, text: str) -> MatchResult:
        """Like ``full_match`` but raise ``NoMatch`` instead of returning ``None``."""
        result = self.full_match(text)
        if result is None:
            raise NoMatch(self.template, text)
        return result

    def search(self, text: str, pos: int = 0, endpos: Optional[int] = None) -> Optional[MatchResult]:
        """Return the leftmost match inside ``text[pos:endpos]``, or ``None``."""
        if endpos is None:
            endpos = len(text)
        m = self._run(self._regex.search, text, pos, endpos)
        return None if m is None else self._evaluate(m)

    def find_all(self, text: str, pos: int = 0, endpos: Optional[int] = None) -> Iterator[MatchResult]:
        """Lazily yield successive non-overlapping matches, left to right.

        Scanning resumes at the end of the previous match; after an empty
        match it resumes one character later.
        """
        if endpos is None:
            endpos = len(text)
        while pos <= endpos:
            m = self._run(self._regex.search, text, pos, endpos)
            if m is None:
                return
            yield self._evaluate(m)
            start, end = m.span()
            pos = end + 1 if end == start else end

    # -- internal -----------------------------------------------------------

    def _run(self, method: Any, text: str, pos: int, endpos: int) -> Any:
        try:
            return method(text, pos, endpos, timeout=self.timeout)
        except TimeoutError:
            raise TimeoutError(f"Matching {self.template!r} exceeded timeout of {self.timeout}s")

    def _evaluate(self, m: Any) -> MatchResult:
        raw = []
        converted = {}
        spans = {}
        for f in self.fields:
            text = m.group(f.label)
            raw.append(text)
            converted[f.key] = f.convert(text)
            spans[f.key] = m.span(f.label)
        log.debug("%r matched %r", self.template, raw)
        return MatchResult(
            keys=[f.key for f in self.fields],
            names=self._names,
            raw=raw,
            converted=converted,
            spans=spans,
        )
