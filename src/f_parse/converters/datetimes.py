"""Date/time conversion keys: ``generic``, ``american``, ``email``,
``http-log``, ``syslog`` and ``iso8601``.

Every key owns an ordered list of candidate sub-patterns, most specific
first.  Candidates are written with named component groups::

    Y  4-digit year        b  month name          H  hour
    m  numeric month       a  weekday name        M  minute
    d  day of month        f  fraction of second  S  second
    p  AM / PM             z  UTC offset (``Z``, ``+HH:MM``, ``+HHMM``)

The field's sub-pattern is the alternation of all candidates with the
component groups made non-capturing.  After a match, the captured text is
matched again against each candidate in order; the first one that matches
supplies the components.

Defaults for components a candidate does not carry:

* time              → ``00:00:00``
* date (time-only)  → ``1970-01-01``
* year (syslog)     → the current year

Exports
-------
DATETIME_FORMATS
    ``{key: (candidate, ...)}``.

DateTimeConverter
    Converter bound to one key.

make_datetime_converter
    Factory returning the ``DateTimeConverter`` for a key.

DATE_FORMATS / TIME_FORMATS, DateConverter / TimeConverter
    Standalone date-only and time-only converters.  They are not built-in
    keys; callers register them in ``extra_types``.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, timezone
from types import MappingProxyType
from typing import Any, List, Mapping, Optional, Sequence

import regex

from ..core import Converter, ValueKind

# ─────────────────────────────────────────────────────────────────────────────
# Component sub-patterns
# ─────────────────────────────────────────────────────────────────────────────

_MONTH_NAMES = (
    "january", "february", "march", "april", "may", "june",
    "july", "august", "september", "october", "november", "december",
)
_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

_Y = r"(?P<Y>\d{4})"
_M = r"(?P<m>\d{1,2})"
_D = r"(?P<d>\d{1,2})"
_B = r"(?P<b>%s)" % "|".join(
    [name.capitalize() for name in _MONTH_NAMES]
    + [name[:3].capitalize() for name in _MONTH_NAMES]
)
_A = r"(?P<a>%s)" % "|".join(_WEEKDAYS)
_HM = r"(?P<H>\d{1,2}):(?P<M>\d{2})"
_HMS = _HM + r":(?P<S>\d{2})"
_FRAC = r"\.(?P<f>\d+)"
_P = r"\s*(?P<p>[AP]M)\b"
_Z = r"(?P<z>Z|[-+]\d{2}:?\d{2})"

# 12-hour forms precede 24-hour ones so that a trailing AM/PM is never left
# outside the captured text.
_CLOCK = (_HMS + _P, _HM + _P, _HMS, _HM)

_DMY = _D + "/" + _M + "/" + _Y
_YMD = _Y + "/" + _M + "/" + _D
_MDY = _M + "/" + _D + "/" + _Y
_EMAIL_DATE = _D + r"\s+" + _B + r"\s+" + _Y
_ISO_DATE = _Y + "-" + _M + "-" + _D


def _with_clock(day: str, clocks: Sequence[str] = _CLOCK, sep: str = r"\s+") -> List[str]:
    return [day + sep + clock for clock in clocks]


DATETIME_FORMATS: Mapping[str, tuple] = MappingProxyType({
    # 27/12/2024 19:57:55, 2024/12/27 07:57 PM, 27/12/2024, 19:57
    "generic": (
        *_with_clock(_DMY),
        *_with_clock(_YMD),
        _DMY,
        _YMD,
        *_CLOCK,
    ),
    # 12/27/2024 07:57:55 PM, 12/27/2024
    "american": (
        *_with_clock(_MDY),
        _MDY,
    ),
    # Fri, 27 Dec 2024 19:57:55 +0000, 27 Dec 2024
    "email": (
        _A + r",\s*" + _EMAIL_DATE + r"\s+" + _HMS + r"\s+" + _Z,
        _EMAIL_DATE + r"\s+" + _HMS + r"\s+" + _Z,
        _A + r",\s*" + _EMAIL_DATE,
        _EMAIL_DATE,
    ),
    # 27/Dec/2024:19:57:55 +0000
    "http-log": (
        r"(?P<d>\d{2})/" + _B + "/" + _Y + ":" + _HMS + r"\s+" + _Z,
    ),
    # Dec 27 2024 19:57:55, Dec 27 19:57:55
    "syslog": (
        _B + r"\s+" + _D + r"\s+" + _Y + r"\s+" + _HMS,
        _B + r"\s+" + _D + r"\s+" + _HMS,
    ),
    # 2024-12-27T19:57:55.000+00:00, 2024-12-27
    "iso8601": (
        *_with_clock(_ISO_DATE, (_HMS + _FRAC + _Z, _HMS + _Z, _HMS + _FRAC, _HMS, _HM + _Z, _HM), sep="T"),
        _ISO_DATE,
    ),
})

# Candidates for the standalone ``DateConverter``.  Day-first numeric forms
# precede month-first ones; a candidate whose components are out of range
# yields to the next one (``12/27/2024`` falls through to m/d/Y).
DATE_FORMATS: tuple = (
    _ISO_DATE,                                           # 2024-12-27
    _YMD,                                                # 2024/12/27
    _DMY,                                                # 27/12/2024
    _D + "-" + _M + "-" + _Y,                            # 27-12-2024
    _MDY,                                                # 12/27/2024
    _M + "-" + _D + "-" + _Y,                            # 12-27-2024
    _EMAIL_DATE,                                         # 27 Dec 2024, 27 December 2024
    _B + r"\s+" + _D + r",\s*" + _Y,                     # Dec 27, 2024
    _D + "-" + _B + "-" + _Y,                            # 27-Dec-2024
    r"(?P<Y>\d{4})(?P<m>\d{2})(?P<d>\d{2})",             # 20241227
)

_OFFSET = r"\s*(?P<z>[-+]\d{2}:?\d{2})"

# Candidates for the standalone ``TimeConverter``: every clock form, with and
# without a trailing UTC offset.
TIME_FORMATS: tuple = (
    *(clock + _OFFSET for clock in _CLOCK),              # 07:57:55 PM +0000, 19:57 +01:00
    *_CLOCK,                                             # 07:57:55 PM, 19:57
)

_GROUP_NAME_RE = re.compile(r"\(\?P<\w+>")


def non_capturing(pattern: str) -> str:
    """Rewrite every named group in *pattern* as a non-capturing group."""
    return _GROUP_NAME_RE.sub("(?:", pattern)


# ─────────────────────────────────────────────────────────────────────────────
# Timestamp assembly
# ─────────────────────────────────────────────────────────────────────────────


def _month_number(name: str) -> int:
    low = name.lower()
    for number, full in enumerate(_MONTH_NAMES, start=1):
        if low == full or low == full[:3]:
            return number
    raise ValueError(f"unknown month name {name!r}")


def _offset(tz: str) -> timezone:
    if tz.upper() == "Z":
        return timezone.utc
    sign = -1 if tz[0] == "-" else 1
    digits = tz[1:].replace(":", "")
    hours, minutes = int(digits[:2]), int(digits[2:])
    if minutes >= 60:
        raise ValueError(f"invalid UTC offset {tz!r}")
    # timezone() rejects offsets of 24h or more with ValueError
    return timezone(sign * timedelta(hours=hours, minutes=minutes))


def build_timestamp(parts: Mapping[str, Optional[str]]) -> datetime:
    """Assemble a ``datetime`` from matched components.

    Raises ``ValueError`` for out-of-range components (month 13, day 32,
    hour 13 with AM/PM, …).
    """
    if parts.get("Y") is None and parts.get("m") is None and parts.get("b") is None:
        year, month, day = 1970, 1, 1
    else:
        year = int(parts["Y"]) if parts.get("Y") else date.today().year
        month = int(parts["m"]) if parts.get("m") else _month_number(parts["b"])
        day = int(parts["d"])

    hour = int(parts.get("H") or 0)
    minute = int(parts.get("M") or 0)
    second = int(parts.get("S") or 0)
    microsecond = int((parts.get("f") or "0").ljust(6, "0")[:6])

    meridiem = parts.get("p")
    if meridiem:
        if not 1 <= hour <= 12:
            raise ValueError(f"hour {hour} is not valid with {meridiem}")
        hour = hour % 12 + (12 if meridiem.upper() == "PM" else 0)

    tzinfo = _offset(parts["z"]) if parts.get("z") else None
    return datetime(year, month, day, hour, minute, second, microsecond, tzinfo=tzinfo)


# ─────────────────────────────────────────────────────────────────────────────
# Converter
# ─────────────────────────────────────────────────────────────────────────────


class DateTimeConverter(Converter):
    """Converter for one date/time key.

    ::

        conv = make_datetime_converter("http-log")
        conv.convert("27/Dec/2024:19:57:55 +0000")
        # → datetime(2024, 12, 27, 19, 57, 55, tzinfo=timezone.utc)
    """

    kind = ValueKind.TIMESTAMP

    def __init__(self, key: str, candidates: Sequence[str]) -> None:
        self.key = key
        self.candidates = tuple(candidates)
        self.pattern = "(?:%s)" % "|".join(non_capturing(c) for c in self.candidates)
        self._resolvers = [regex.compile(c, regex.IGNORECASE) for c in self.candidates]

    def convert(self, text: str) -> Any:
        for resolver in self._resolvers:
            m = resolver.fullmatch(text)
            if m is not None:
                return build_timestamp(m.groupdict())
        raise ValueError(f"not a {self.key} date/time")

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.key!r}>"


def make_datetime_converter(key: str) -> DateTimeConverter:
    """Return the converter for date/time *key* (``KeyError`` if unknown)."""
    return DateTimeConverter(key, DATETIME_FORMATS[key])


# -- standalone date / time ----------------------------------------------------


class _PartialConverter(DateTimeConverter):
    """Candidate resolver that skips candidates with out-of-range components."""

    kind = ValueKind.OBJECT

    def _timestamp(self, text: str) -> datetime:
        for resolver in self._resolvers:
            m = resolver.fullmatch(text)
            if m is None:
                continue
            try:
                return build_timestamp(m.groupdict())
            except ValueError:
                continue
        raise ValueError(f"not a valid {self.key}")


class DateConverter(_PartialConverter):
    """Calendar date in any of ``DATE_FORMATS``; converts to ``datetime.date``.

    Not a built-in key.  Register it under a key of your choice::

        compile("due {when:date}", extra_types={"date": DateConverter()})
    """

    def __init__(self) -> None:
        super().__init__("date", DATE_FORMATS)

    def convert(self, text: str) -> date:
        return self._timestamp(text).date()


class TimeConverter(_PartialConverter):
    """Time of day in any of ``TIME_FORMATS``; converts to ``datetime.time``.

    A trailing UTC offset is kept as the time's ``tzinfo``.
    """

    def __init__(self) -> None:
        super().__init__("time", TIME_FORMATS)

    def convert(self, text: str) -> time:
        return self._timestamp(text).timetz()
