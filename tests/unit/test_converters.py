"""Tests for built-in converters, caller converters and the registry."""

import pytest

from f_parse import (
    BUILTIN_CONVERTERS,
    Converter,
    ConverterRegistry,
    FunctionConverter,
    TypeConversionFailed,
    ValueKind,
    ValueKindError,
    compile,
    compile_with_types,
    full_match,
    with_pattern,
)


class TestBuiltinConverters:
    """integer, float, word and the keyless fallback."""

    def test_integer(self):
        """Signed decimal digits convert to int."""
        assert full_match("{:integer}", "42")[0] == 42
        assert full_match("{:integer}", "-17")[0] == -17
        assert full_match("{:integer}", "+8")[0] == 8

    def test_integer_rejects_non_digits(self):
        """Non-digit text does not match an integer field."""
        assert full_match("{:integer}", "4x2") is None

    def test_integer_64_bit_bounds(self):
        """Values beyond signed 64 bits fail conversion, not matching."""
        assert full_match("{:d}", "9223372036854775807")[0] == 2 ** 63 - 1
        assert full_match("{:d}", "-9223372036854775808")[0] == -(2 ** 63)

        with pytest.raises(TypeConversionFailed) as exc_info:
            full_match("{:d}", "9223372036854775808")

        assert exc_info.value.field == "0"
        assert exc_info.value.text == "9223372036854775808"

    def test_float(self):
        """Decimal and exponent forms convert to float."""
        assert full_match("{:float}", "3.14")[0] == 3.14
        assert full_match("{:f}", "-.5")[0] == -0.5
        assert full_match("{:f}", "2")[0] == 2.0
        assert full_match("{:f}", "1.5e3")[0] == 1500.0
        assert full_match("{:f}", "1e-05")[0] == 1e-05

    def test_float_overflow(self):
        """Overflow to infinity is a conversion failure."""
        with pytest.raises(TypeConversionFailed, match="range"):
            full_match("{:f}", "1e999")

    def test_float_malformed(self):
        """A second decimal point does not match."""
        assert full_match("{:f}", "1.2.3") is None

    def test_word(self):
        """word matches one run of word characters."""
        assert full_match("{:word}", "hello_42")[0] == "hello_42"
        assert full_match("{:w}", "two words") is None

    def test_keyless_field_is_text(self):
        """A field without a key captures any text as TEXT."""
        r = full_match("{}", "anything at all")

        assert r.value(0).kind is ValueKind.TEXT
        assert r[0] == "anything at all"

    def test_keyless_field_spans_lines(self):
        """The fallback pattern crosses newlines."""
        assert full_match("<{}>", "<a\nb>")[0] == "a\nb"

    def test_keyless_field_may_be_empty(self):
        """A keyless field captures the empty string when nothing else fits."""
        assert full_match("a{}b", "ab")[0] == ""
        assert full_match("{}", "")[0] == ""

        r = full_match("{a}:{b}", ":x")
        assert (r["a"], r["b"]) == ("", "x")
        assert r.span("a") == (0, 0)

    def test_keyless_field_is_lazy(self):
        """The fallback takes as little text as the rest of the template allows."""
        r = full_match("{}-{}", "a-b-c")

        assert r.positional == ("a", "b-c")

    def test_short_aliases(self):
        """d, f, w, tg… resolve to the same converters as the long keys."""
        assert BUILTIN_CONVERTERS["d"] is BUILTIN_CONVERTERS["integer"]
        assert BUILTIN_CONVERTERS["f"] is BUILTIN_CONVERTERS["float"]
        assert BUILTIN_CONVERTERS["w"] is BUILTIN_CONVERTERS["word"]
        assert BUILTIN_CONVERTERS["ti"] is BUILTIN_CONVERTERS["iso8601"]
        assert BUILTIN_CONVERTERS["rfc2822"] is BUILTIN_CONVERTERS["email"]


class TestBuiltinTableImmutable:
    """The process-wide table cannot be changed."""

    def test_assignment_rejected(self):
        """Assigning a key raises TypeError."""
        with pytest.raises(TypeError):
            BUILTIN_CONVERTERS["integer"] = FunctionConverter(str)

    def test_deletion_rejected(self):
        """Deleting a key raises TypeError."""
        with pytest.raises(TypeError):
            del BUILTIN_CONVERTERS["word"]


class TestCallerConverters:
    """Caller-owned converter tables."""

    def test_with_pattern(self, hex_number):
        """with_pattern supplies both sub-pattern and kind."""
        p = compile_with_types("color: {:hex}", {"hex": hex_number})
        r = p.full_match("color: ff")

        assert r[0] == 255
        assert r.as_int(0) == 255

    def test_plain_callable_uses_fallback_pattern(self):
        """A bare callable matches any text and reports OBJECT."""
        r = full_match("<{:upper}>", "<abc>", extra_types={"upper": str.upper})

        assert r[0] == "ABC"
        assert r.value(0).kind is ValueKind.OBJECT

    def test_converter_subclass(self):
        """Converter subclasses declare their pattern as a class attribute."""

        class YesNo(Converter):
            pattern = r"yes|no"

            def convert(self, text):
                return text.lower() == "yes"

        p = compile("ready: {ok:yesno}", extra_types={"yesno": YesNo()})

        assert p.full_match("ready: YES")["ok"] is True
        assert p.full_match("ready: no")["ok"] is False
        assert p.full_match("ready: maybe") is None

    def test_caller_error_becomes_conversion_failure(self):
        """ValueError from a caller converter is chained into TypeConversionFailed."""

        def strict(text):
            raise ValueError("nope")

        with pytest.raises(TypeConversionFailed, match="nope") as exc_info:
            full_match("{v:strict}", "x", extra_types={"strict": strict})

        assert exc_info.value.field == "v"
        assert isinstance(exc_info.value.__cause__, ValueError)

    @pytest.mark.parametrize(
        "error",
        [TypeError("bad type"), KeyError("missing"), IndexError("short"), ZeroDivisionError("zero")],
    )
    def test_other_caller_errors_are_wrapped(self, error):
        """Type, lookup and arithmetic errors also surface as TypeConversionFailed."""

        def failing(text):
            raise error

        with pytest.raises(TypeConversionFailed) as exc_info:
            full_match("{v:failing}", "x", extra_types={"failing": failing})

        assert exc_info.value.field == "v"
        assert exc_info.value.__cause__ is error

    def test_named_groups_in_caller_pattern(self):
        """Named groups inside a caller sub-pattern do not leak out."""

        @with_pattern(r"(?P<major>\d+)\.(?P<minor>\d+)")
        def version(text):
            return tuple(int(x) for x in text.split("."))

        r = full_match("v{:version} v{:version}", "v1.2 v3.4", extra_types={"version": version})

        assert r[0] == (1, 2)
        assert r[1] == (3, 4)

    def test_override_shadows_builtin(self):
        """A caller entry named like a built-in wins for that compile only."""

        @with_pattern(r"\d+")
        def tens(text):
            return int(text) * 10

        shadowed = compile("{:integer}", extra_types={"integer": tens}).full_match("25")

        assert shadowed[0] == 250
        with pytest.raises(ValueKindError):
            shadowed.as_int(0)

        assert compile("{:integer}").full_match("25")[0] == 25

    def test_rejects_non_callable_entry(self):
        """Table entries must be converters or callables."""
        with pytest.raises(TypeError, match="must be a Converter or a callable"):
            compile("{:x}", extra_types={"x": 42})


class TestConverterRegistry:
    """Test ConverterRegistry lookup order."""

    def test_builtin_lookup(self):
        """Built-in keys resolve; unknown keys give None."""
        registry = ConverterRegistry()

        assert registry.lookup("integer") is BUILTIN_CONVERTERS["integer"]
        assert registry.lookup("zz") is None

    def test_caller_first(self, hex_number):
        """Caller entries are consulted before the built-ins."""
        registry = ConverterRegistry({"hex": hex_number, "word": hex_number})

        assert registry.lookup("hex").convert("10") == 16
        assert registry.lookup("word").convert("10") == 16
        assert "hex" in registry
        assert "hex" in registry.keys()

    def test_caller_table_not_shared(self, hex_number):
        """One registry's caller table is invisible to the next."""
        ConverterRegistry({"hex": hex_number})

        assert ConverterRegistry().lookup("hex") is None
        assert "hex" not in BUILTIN_CONVERTERS
