"""Converters sub-package — concrete ``Converter`` implementations, grouped by
logical system.

builtin   – integer / float / word / fallback text + callable adapter
datetimes – the six date/time keys and their candidate resolver
"""

from .builtin import (
    FALLBACK_PATTERN,
    FloatConverter,
    FunctionConverter,
    IntegerConverter,
    TextConverter,
    WordConverter,
    as_converter,
    with_pattern,
)
from .datetimes import (
    DATETIME_FORMATS,
    DATE_FORMATS,
    TIME_FORMATS,
    DateConverter,
    DateTimeConverter,
    TimeConverter,
    build_timestamp,
    make_datetime_converter,
    non_capturing,
)

__all__ = [
    # builtin
    "FALLBACK_PATTERN",
    "IntegerConverter",
    "FloatConverter",
    "WordConverter",
    "TextConverter",
    "FunctionConverter",
    "as_converter",
    "with_pattern",
    # datetimes
    "DATETIME_FORMATS",
    "DATE_FORMATS",
    "TIME_FORMATS",
    "DateConverter",
    "DateTimeConverter",
    "TimeConverter",
    "build_timestamp",
    "make_datetime_converter",
    "non_capturing",
]
