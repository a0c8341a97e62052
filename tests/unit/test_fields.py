"""Tests for field-specifier parsing and identifier normalization."""

import pytest

from f_parse import normalize, parse_field_spec, split_path
from f_parse.fields import FieldSpecError


class TestParseFieldSpec:
    """Test parse_field_spec()."""

    def test_empty_body_is_positional(self):
        """{} has neither name nor key."""
        spec = parse_field_spec("")

        assert spec.name is None
        assert spec.conversion_key is None

    def test_key_only(self):
        """{:integer} is positional with a key."""
        spec = parse_field_spec(":integer")

        assert spec.name is None
        assert spec.conversion_key == "integer"

    def test_name_and_key(self):
        """{user.id:d} carries both parts."""
        spec = parse_field_spec("user.id:d")

        assert spec.name == "user.id"
        assert spec.conversion_key == "d"

    def test_hyphenated_key(self):
        """Keys may contain hyphens (http-log)."""
        assert parse_field_spec("when:http-log").conversion_key == "http-log"

    def test_empty_key_rejected(self):
        """A trailing colon needs a key."""
        with pytest.raises(FieldSpecError, match="empty conversion key"):
            parse_field_spec("name:")

    def test_format_spec_style_key_rejected(self):
        """str.format alignment specs are not keys."""
        with pytest.raises(FieldSpecError):
            parse_field_spec(":>10d")

    @pytest.mark.parametrize("name", ["1", "_x", "a.", "a[", "a[]", "a b", "a-b", ".a"])
    def test_invalid_names(self, name):
        """Names must start with a letter and use . or [] access only."""
        with pytest.raises(FieldSpecError):
            parse_field_spec(name)


class TestNormalize:
    """Test split_path() and normalize()."""

    def test_plain_name(self):
        """A simple name is unchanged."""
        assert normalize("name") == "name"

    def test_dotted(self):
        """Attribute access splits on dots."""
        assert split_path("person.name") == ["person", "name"]
        assert normalize("person.name") == "person__name"

    def test_indexed(self):
        """Index access splits on brackets."""
        assert split_path("array[0]") == ["array", "0"]
        assert normalize("array[0]") == "array__0"

    def test_mixed_access(self):
        """Dots and brackets combine."""
        assert normalize("a.b[c][1]") == "a__b__c__1"

    def test_underscores_kept(self):
        """A single underscore stays distinct from a dot."""
        assert normalize("a_b") == "a_b"
        assert normalize("a.b") != normalize("a_b")

    def test_attribute_and_index_collide(self):
        """a.b and a[b] flatten to the same token."""
        assert normalize("a.b") == normalize("a[b]")
