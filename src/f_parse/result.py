"""Match results.

A ``MatchResult`` is built fresh for every successful match and is not
modified afterwards.  It copies everything it needs out of the subject and
keeps no reference to the ``CompiledPattern`` that produced it.

Fields can be addressed three ways:

* ``int``            – appearance order in the template (every field counts)
* ``"0"``, ``"2"``   – field key of a positional field
* ``"user.id"``      – a named field, by original or normalized name
"""

from __future__ import annotations

from datetime import datetime
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Sequence, Tuple, Union

import jmespath

from .core import FieldLookupError, TypedValue, ValueKind, ValueKindError
from .fields import FieldSpecError, normalize, split_path

FieldRef = Union[int, str]


def _listify(node: Any) -> Any:
    """Turn dicts keyed ``"0".."n-1"`` into lists, recursively."""
    if not isinstance(node, dict):
        return node
    node = {k: _listify(v) for k, v in node.items()}
    if node and all(k.isdigit() for k in node):
        indices = sorted(int(k) for k in node)
        if indices == list(range(len(indices))):
            return [node[str(i)] for i in indices]
    return node


class MatchResult:
    """Values extracted by one successful match.

    Attributes:
        positional: raw text of every field, in template order.
        named:      ``{normalized name: raw text}`` for named fields.
        converted:  ``{field key: TypedValue}`` for every field.
        spans:      ``{field key: (start, end)}`` in the subject.
    """

    __slots__ = ("positional", "named", "converted", "spans", "_keys", "_names")

    def __init__(
            self,
            keys: Sequence[str],
            names: Mapping[str, str],
            raw: Sequence[str],
            converted: Mapping[str, TypedValue],
            spans: Mapping[str, Tuple[int, int]],
    ) -> None:
        self._keys = tuple(keys)
        # normalized name → original dotted/bracketed name
        self._names = MappingProxyType(dict(names))
        self.positional: Tuple[str, ...] = tuple(raw)
        self.named: Mapping[str, str] = MappingProxyType(
            {key: text for key, text in zip(self._keys, self.positional) if key in self._names}
        )
        self.converted: Mapping[str, TypedValue] = MappingProxyType(dict(converted))
        self.spans: Mapping[str, Tuple[int, int]] = MappingProxyType(dict(spans))

    # -- lookup -------------------------------------------------------------

    def _key(self, ref: FieldRef) -> str:
        if isinstance(ref, bool):
            raise FieldLookupError(f"invalid field reference {ref!r}")
        if isinstance(ref, int):
            if not 0 <= ref < len(self._keys):
                raise FieldLookupError(f"no field at index {ref}")
            return self._keys[ref]
        if ref in self.converted:
            return ref
        try:
            key = normalize(ref)
        except FieldSpecError:
            raise FieldLookupError(f"no field named {ref!r}") from None
        if key not in self.converted:
            raise FieldLookupError(f"no field named {ref!r}")
        return key

    def value(self, ref: FieldRef) -> TypedValue:
        """Return the tagged converted value of a field."""
        return self.converted[self._key(ref)]

    def get(self, ref: FieldRef) -> Any:
        """Return the converted value of a field."""
        return self.value(ref).value

    def raw(self, ref: FieldRef) -> str:
        """Return the matched text of a field."""
        return self.positional[self._keys.index(self._key(ref))]

    def span(self, ref: FieldRef) -> Tuple[int, int]:
        return self.spans[self._key(ref)]

    # -- typed accessors ----------------------------------------------------

    def _typed(self, ref: FieldRef, kind: ValueKind) -> Any:
        typed = self.value(ref)
        if typed.kind is not kind:
            raise ValueKindError(
                f"field {ref!r} holds a {typed.kind.value} value, not {kind.value}"
            )
        return typed.value

    def as_int(self, ref: FieldRef) -> int:
        return self._typed(ref, ValueKind.INTEGER)

    def as_float(self, ref: FieldRef) -> float:
        return self._typed(ref, ValueKind.FLOAT)

    def as_text(self, ref: FieldRef) -> str:
        return self._typed(ref, ValueKind.TEXT)

    def as_timestamp(self, ref: FieldRef) -> datetime:
        return self._typed(ref, ValueKind.TIMESTAMP)

    # -- nested view --------------------------------------------------------

    @property
    def expanded(self) -> Dict[str, Any]:
        """Converted named values re-nested by their original names.

        ::

            {person.name} {person.langs[0]} {person.langs[1]}
            → {"person": {"name": ..., "langs": [..., ...]}}

        Numeric index keys that form a complete ``0..n-1`` run become lists.
        """
        tree: Dict[str, Any] = {}
        for key, name in self._names.items():
            tokens = split_path(name)
            node = tree
            for token in tokens[:-1]:
                child = node.setdefault(token, {})
                if not isinstance(child, dict):
                    # a shorter name already holds a value at this path
                    raise FieldLookupError(f"field {name!r} conflicts with field {token!r}")
                node = child
            if isinstance(node.get(tokens[-1]), dict):
                raise FieldLookupError(f"field {name!r} conflicts with a nested field")
            node[tokens[-1]] = self.converted[key].value
        return _listify(tree)

    def query(self, expression: str) -> Any:
        """Evaluate a JMESPath *expression* against ``expanded``.

        ::

            result.query("person.name")
            result.query("person.langs[-1]")
        """
        return jmespath.search(expression, self.expanded)

    # -- container protocol -------------------------------------------------

    def __getitem__(self, ref: FieldRef) -> Any:
        return self.get(ref)

    def __contains__(self, ref: object) -> bool:
        if not isinstance(ref, (int, str)):
            return False
        try:
            self._key(ref)
        except FieldLookupError:
            return False
        return True

    def fixed(self) -> List[Any]:
        """Converted values of the positional (unnamed) fields, in order."""
        return [self.converted[k].value for k in self._keys if k not in self._names]

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.positional!r} {dict(self.named)!r}>"
