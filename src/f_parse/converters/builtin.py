"""Built-in scalar converters and the adapter for caller-supplied callables.

Exports
-------
IntegerConverter, FloatConverter, WordConverter, TextConverter
    The scalar built-ins.  ``TextConverter`` is what a field without a
    conversion key is bound to.

FunctionConverter
    Wraps a plain ``str -> value`` callable so it can sit in a caller table.

with_pattern
    Decorator attaching a sub-pattern (and optionally a kind) to a callable.

as_converter
    Normalise a caller table entry (``Converter`` or callable) to a
    ``Converter``.
"""

from __future__ import annotations

import math
from typing import Any, Callable, Optional

from ..core import Converter, ValueKind

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

# Generic fallback for fields with no conversion key or no own sub-pattern.
FALLBACK_PATTERN = r".*?"


class IntegerConverter(Converter):
    """Signed 64-bit integer."""

    pattern = r"[-+]?\d+"
    kind = ValueKind.INTEGER

    def convert(self, text: str) -> int:
        value = int(text)
        if not INT64_MIN <= value <= INT64_MAX:
            raise ValueError("out of 64-bit integer range")
        return value


class FloatConverter(Converter):
    """64-bit float; overflow to infinity is a conversion failure."""

    pattern = r"[-+]?\d*\.?\d+(?:[eE][-+]?\d+)?"
    kind = ValueKind.FLOAT

    def convert(self, text: str) -> float:
        value = float(text)
        if math.isinf(value):
            raise ValueError("out of 64-bit float range")
        return value


class WordConverter(Converter):
    pattern = r"\w+"
    kind = ValueKind.TEXT

    def convert(self, text: str) -> str:
        return text


class TextConverter(Converter):
    pattern = None
    kind = ValueKind.TEXT

    def convert(self, text: str) -> str:
        return text


class FunctionConverter(Converter):
    """Adapter turning a plain callable into a ``Converter``.

    The sub-pattern and kind are read from the callable's ``pattern`` /
    ``kind`` attributes when present (see ``with_pattern``).
    """

    def __init__(
            self,
            func: Callable[[str], Any],
            pattern: Optional[str] = None,
            kind: ValueKind = ValueKind.OBJECT,
    ) -> None:
        self._func = func
        self.pattern = pattern
        self.kind = kind

    def convert(self, text: str) -> Any:
        return self._func(text)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._func!r} {self.pattern!r}>"


def with_pattern(pattern: str, kind: ValueKind = ValueKind.OBJECT) -> Callable:
    """Attach a matching sub-pattern to a conversion callable.

    ::

        @with_pattern(r"yes|no")
        def yesno(text):
            return text.lower() == "yes"

        compile("ready: {:yesno}", extra_types={"yesno": yesno})
    """

    def decorator(func: Callable[[str], Any]) -> Callable[[str], Any]:
        func.pattern = pattern
        func.kind = kind
        return func

    return decorator


def as_converter(entry: Any) -> Converter:
    """Return *entry* as a ``Converter`` (callables are wrapped)."""
    if isinstance(entry, Converter):
        return entry
    if callable(entry):
        return FunctionConverter(
            entry,
            pattern=getattr(entry, "pattern", None),
            kind=getattr(entry, "kind", ValueKind.OBJECT),
        )
    raise TypeError(f"converter must be a Converter or a callable, got {type(entry).__name__}")
