"""Template compiler — everything that touches ``{…}`` syntax.

Exports
-------
FieldSlot
    Raw ``{…}`` slot found by ``tokenize`` (body not yet parsed).

tokenize
    Split a template into ``Literal`` runs and ``FieldSlot`` s.

compile_template
    Build a ``CompiledPattern``: escape literals, bind each field to its
    converter, assemble one capture group per field in template order and
    compile the result with the ``regex`` engine.

Template syntax
---------------
* ``{}``               – positional field, any text (non-greedy)
* ``{name}``           – named field; ``name`` may be ``a.b`` or ``a[0]``
* ``{:key}`` / ``{name:key}`` – field bound to conversion *key*
* ``{{`` / ``}}``      – literal ``{`` / ``}``

Braces do not nest inside a slot.  An unmatched ``{`` or ``}`` is an
``InvalidFormat`` error.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Union

import regex

from .converters import FALLBACK_PATTERN, non_capturing
from .core import Field, FieldIdentifier, InvalidFormat, Literal
from .fields import FieldSpecError, normalize, parse_field_spec
from .pattern import CompiledField, CompiledPattern
from .registry import DEFAULT_CONVERTER, ConverterRegistry

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldSlot:
    body: str
    source: str
    position: int


# ─────────────────────────────────────────────────────────────────────────────
# Scanner
# ─────────────────────────────────────────────────────────────────────────────


def tokenize(template: str) -> List[Union[Literal, FieldSlot]]:
    """Single left-to-right pass splitting literals from field slots.

    Concatenating the ``source`` of every returned segment gives back
    *template*.
    """
    out: List[Union[Literal, FieldSlot]] = []
    text: List[str] = []
    source: List[str] = []

    def flush() -> None:
        if source:
            out.append(Literal("".join(text), "".join(source)))
            text.clear()
            source.clear()

    i = 0
    while i < len(template):
        ch = template[i]
        if template[i:i + 2] in ("{{", "}}"):  # escaped brace – keep literal
            text.append(ch)
            source.append(ch * 2)
            i += 2
            continue

        if ch == "{":
            close = template.find("}", i + 1)
            if close == -1:
                raise InvalidFormat(template, "unmatched '{'", i)
            body = template[i + 1:close]
            if "{" in body:
                raise InvalidFormat(template, "nested '{' inside a field", i + 1 + body.index("{"))
            flush()
            out.append(FieldSlot(body, template[i:close + 1], i))
            i = close + 1
        elif ch == "}":
            raise InvalidFormat(template, "unmatched '}'", i)
        else:
            text.append(ch)
            source.append(ch)
            i += 1

    flush()
    return out


# ─────────────────────────────────────────────────────────────────────────────
# Compiler
# ─────────────────────────────────────────────────────────────────────────────


def compile_template(
        template: str,
        case_sensitive: bool = False,
        extra_types: Optional[Mapping[str, Any]] = None,
        *,
        timeout: Optional[float] = None,
) -> CompiledPattern:
    """Compile *template* into a reusable ``CompiledPattern``.

    Args:
        template:       Format template.
        case_sensitive: ``False`` (default) compiles with ``IGNORECASE``.
        extra_types:    Caller converters, consulted before the built-ins.
                        Values are ``Converter`` instances or callables
                        (see ``with_pattern``).
        timeout:        Seconds allowed per ``regex`` evaluation
                        (``None`` → unbounded).

    Raises:
        InvalidFormat: unmatched braces, malformed field, duplicate
                       normalized name, unknown conversion key, or a
                       sub-pattern the engine rejects.
    """
    registry = ConverterRegistry(extra_types)
    segments: List[Union[Literal, Field]] = []
    fields: List[CompiledField] = []
    labels: dict[str, str] = {}
    parts: List[str] = []

    for seg in tokenize(template):
        if isinstance(seg, Literal):
            segments.append(seg)
            parts.append(regex.escape(seg.text))
            continue

        try:
            spec = parse_field_spec(seg.body)
        except FieldSpecError as exc:
            raise InvalidFormat(template, str(exc), seg.position) from None

        index = len(fields)
        if spec.name is None:
            identifier = FieldIdentifier(index)
        else:
            normalized = normalize(spec.name)
            if normalized in labels:
                raise InvalidFormat(
                    template,
                    f"field {spec.name!r} collides with field {labels[normalized]!r}",
                    seg.position,
                )
            labels[normalized] = spec.name
            identifier = FieldIdentifier(index, spec.name, normalized)

        if spec.conversion_key is None:
            converter = DEFAULT_CONVERTER
        else:
            converter = registry.lookup(spec.conversion_key)
            if converter is None:
                raise InvalidFormat(template, f"unknown conversion key {spec.conversion_key!r}", seg.position)

        sub = non_capturing(converter.pattern) if converter.pattern else FALLBACK_PATTERN
        parts.append(f"(?P<{identifier.label}>{sub})")
        segments.append(Field(identifier, spec.conversion_key, seg.source))
        fields.append(CompiledField(identifier, spec.conversion_key, converter))

    expression = "".join(parts)
    flags = regex.DOTALL if case_sensitive else regex.DOTALL | regex.IGNORECASE
    try:
        compiled = regex.compile(expression, flags)
    except regex.error as exc:
        raise InvalidFormat(template, f"bad sub-pattern: {exc}") from exc

    log.debug("format %r -> %r", template, expression)
    return CompiledPattern(
        template,
        tuple(segments),
        tuple(fields),
        expression,
        compiled,
        case_sensitive=case_sensitive,
        timeout=timeout,
    )
