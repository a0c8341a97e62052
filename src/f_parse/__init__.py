from .compiler import compile_template, tokenize
from .converters import (
    DATE_FORMATS,
    DATETIME_FORMATS,
    TIME_FORMATS,
    DateConverter,
    DateTimeConverter,
    FunctionConverter,
    TimeConverter,
    with_pattern,
)
from .core import (
    Converter,
    Field,
    FieldIdentifier,
    FieldLookupError,
    InvalidFormat,
    Literal,
    NoMatch,
    ParseError,
    TypeConversionFailed,
    TypedValue,
    ValueKind,
    ValueKindError,
)
from .factory import (
    DEFAULT_TIMEOUT,
    compile,
    compile_with_types,
    find_all,
    full_match,
    require,
    search,
)
from .fields import normalize, parse_field_spec, split_path
from .pattern import CompiledField, CompiledPattern
from .registry import BUILTIN_CONVERTERS, ConverterRegistry
from .result import MatchResult

__all__ = [
    # entry points
    "compile",
    "compile_with_types",
    "full_match",
    "require",
    "search",
    "find_all",
    "DEFAULT_TIMEOUT",
    # compiled artifacts
    "CompiledPattern",
    "CompiledField",
    "MatchResult",
    "compile_template",
    "tokenize",
    # data model
    "Literal",
    "Field",
    "FieldIdentifier",
    "TypedValue",
    "ValueKind",
    # converters
    "Converter",
    "FunctionConverter",
    "DateTimeConverter",
    "DateConverter",
    "TimeConverter",
    "DATETIME_FORMATS",
    "DATE_FORMATS",
    "TIME_FORMATS",
    "BUILTIN_CONVERTERS",
    "ConverterRegistry",
    "with_pattern",
    # fields
    "parse_field_spec",
    "normalize",
    "split_path",
    # errors
    "ParseError",
    "InvalidFormat",
    "NoMatch",
    "TypeConversionFailed",
    "FieldLookupError",
    "ValueKindError",
]
