"""Public entry points — the single place where compile options are applied.

``compile`` / ``compile_with_types`` are the recommended way to build a
reusable ``CompiledPattern``.  The one-shot helpers compile and match in a
single call; use them for ad-hoc matching and cache a compiled pattern when
the same template is used repeatedly (nothing is cached internally).

Customisation points:

* **case_sensitive** – ``False`` by default.
* **extra_types**    – caller converter table, checked before the built-ins;
                       an entry named like a built-in key shadows it.
* **timeout**        – per-evaluation ``regex`` time limit in seconds
                       (default ``DEFAULT_TIMEOUT``; ``None`` disables).
"""

from __future__ import annotations

from typing import Any, Iterator, Mapping, Optional

from .compiler import compile_template
from .pattern import CompiledPattern
from .result import MatchResult

DEFAULT_TIMEOUT: Optional[float] = 2.0


def compile(
        template: str,
        case_sensitive: bool = False,
        extra_types: Optional[Mapping[str, Any]] = None,
        *,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
) -> CompiledPattern:
    """Compile *template* once for repeated matching.

    Example::

        p = compile("{name} is {age:integer}")
        p.full_match("John is 25").as_int("age")   # → 25
    """
    return compile_template(template, case_sensitive, extra_types, timeout=timeout)


def compile_with_types(
        template: str,
        extra_types: Mapping[str, Any],
        case_sensitive: bool = False,
        *,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
) -> CompiledPattern:
    """``compile`` with a caller converter table consulted before built-ins."""
    return compile_template(template, case_sensitive, extra_types, timeout=timeout)


# ─────────────────────────────────────────────────────────────────────────────
# One-shot forms
# ─────────────────────────────────────────────────────────────────────────────


def full_match(
        template: str,
        text: str,
        *,
        case_sensitive: bool = False,
        extra_types: Optional[Mapping[str, Any]] = None,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
) -> Optional[MatchResult]:
    """Match the whole of *text* against *template*; ``None`` if it does not match.

    ::

        full_match("It's {}, I love it!", "It's spam, I love it!")[0]   # → "spam"
    """
    return compile(template, case_sensitive, extra_types, timeout=timeout).full_match(text)


def require(
        template: str,
        text: str,
        *,
        case_sensitive: bool = False,
        extra_types: Optional[Mapping[str, Any]] = None,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
) -> MatchResult:
    """``full_match`` raising ``NoMatch`` instead of returning ``None``."""
    return compile(template, case_sensitive, extra_types, timeout=timeout).require(text)


def search(
        template: str,
        text: str,
        pos: int = 0,
        endpos: Optional[int] = None,
        *,
        case_sensitive: bool = False,
        extra_types: Optional[Mapping[str, Any]] = None,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
) -> Optional[MatchResult]:
    """Return the leftmost match of *template* inside *text*, or ``None``.

    ::

        search("Age: {:d}\\n", "Name: Rufus\\nAge: 42\\nColor: red\\n")[0]   # → 42
    """
    return compile(template, case_sensitive, extra_types, timeout=timeout).search(text, pos, endpos)


def find_all(
        template: str,
        text: str,
        pos: int = 0,
        endpos: Optional[int] = None,
        *,
        case_sensitive: bool = False,
        extra_types: Optional[Mapping[str, Any]] = None,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
) -> Iterator[MatchResult]:
    """Lazily yield every non-overlapping match of *template* in *text*.

    ::

        [r[0] for r in find_all("{:integer}", "Numbers: 1, 2, 3")]   # → [1, 2, 3]
    """
    return compile(template, case_sensitive, extra_types, timeout=timeout).find_all(text, pos, endpos)
