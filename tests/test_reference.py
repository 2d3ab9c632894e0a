"""Tests for references and the reference parser."""

import pytest

from pinref import reference, reference_parser
from pinref.digest import parse_digest
from pinref.errors import (
    Detail,
    InvalidConstraintError,
    InvalidIdentifierError,
    InvalidReferenceError,
    TypeMismatchError,
)
from pinref.identifier import new_identifier, new_identifier_options
from pinref.identifier_parser import parse_identifier
from pinref.reference import Reference
from pinref.reference_parser import looks_like_version
from pinref.version_constraint import parse_version_constraint


@pytest.fixture
def opts():
    """Default options used across reference tests."""
    return new_identifier_options("https://registry.test", "official")


class TestParseReference:
    """Tests for reference_parser.parse."""

    def test_version_based(self, opts):
        """Test a namespace/name reference with a range."""
        ref = reference_parser.parse("myteam/widget >=1.0.0 <2.0.0", "widget", opts)
        assert ref.namespace == "myteam"
        assert ref.name == "widget"
        assert ref.is_version_based()
        assert not ref.is_channel_based()
        assert not ref.is_frozen()
        assert str(ref.version) == ">=1.0.0 <2.0.0"
        assert str(ref) == "widget https://registry.test/myteam/widget >=1.0.0 <2.0.0"

    def test_channel_based(self, opts):
        """Test a channel reference."""
        ref = reference_parser.parse("widget :beta-2", "widget", opts)
        assert ref.channel == "beta-2"
        assert ref.version is None
        assert ref.is_channel_based()
        assert str(ref) == "widget https://registry.test/official/widget :beta-2"

    def test_frozen_with_digest(self, opts):
        """Test that a trailing digest freezes the reference."""
        ref = reference_parser.parse("namespace/name 1.0.0 sha256:abcd1234", "template", opts)
        assert ref.is_frozen()
        assert ref.digest == parse_digest("sha256:abcd1234")
        assert str(ref) == "template https://registry.test/namespace/name =1.0.0 sha256:abcd1234"

    def test_channel_with_digest(self, opts):
        """Test a channel followed by a digest."""
        ref = reference_parser.parse("registry.example.com/team/widget :stable sha256:4b825dc6", "widget", opts)
        assert ref.registry == "https://registry.example.com"
        assert ref.path == "team/widget"
        assert ref.channel == "stable"
        assert ref.is_frozen()

    def test_full_uri_and_type(self, opts):
        """Test an explicit type with a full URI."""
        ref = reference_parser.parse("template https://myregistry.com/path/to/resource ^2", "template", opts)
        assert ref.path == "path/to/resource"
        assert ref.uri == "https://myregistry.com/path/to/resource"
        assert str(ref.version) == "^2"

    def test_disjunctive_version(self, opts):
        """Test that every token up to the digest belongs to the constraint."""
        ref = reference_parser.parse("widget ^1.2 || ~2.0 sha256:ff", "widget", opts)
        assert str(ref.version) == "^1.2 || ~2.0"
        assert ref.is_frozen()

    def test_identifier_accessor(self, opts):
        """Test that the bare identifier drops version information."""
        ref = reference_parser.parse("myteam/widget ^1", "widget", opts)
        ident = ref.identifier
        assert not isinstance(ident, Reference)
        assert ident == parse_identifier("myteam/widget", "widget", opts)

    def test_must_parse(self, opts):
        """Test the literal convenience wrapper."""
        assert reference_parser.must_parse("widget 1", "widget", opts).name == "widget"
        with pytest.raises(InvalidReferenceError):
            reference_parser.must_parse("widget", "widget", opts)


class TestParseReferenceErrors:
    """Tests for reference validation errors."""

    @pytest.mark.parametrize("text,detail", [
        ("", Detail.EMPTY_REFERENCE),
        ("^1.0.0", Detail.EMPTY_REFERENCE),
        (":stable", Detail.EMPTY_REFERENCE),
        ("vault 1.0.0", Detail.EMPTY_REFERENCE),
        ("widget", Detail.MISSING_VERSION_CHANNEL),
        ("myteam/widget sha256:abcd", Detail.MISSING_VERSION_CHANNEL),
        ("widget :stable extra", Detail.UNEXPECTED_TOKEN),
        ("widget 1.0.0 sha256:ab extra", Detail.UNEXPECTED_TOKEN),
        ("widget :beta :stable", Detail.UNEXPECTED_TOKEN),
    ])
    def test_invalid(self, opts, text, detail):
        """Test that structural problems report the specific cause."""
        with pytest.raises(InvalidReferenceError) as excinfo:
            reference_parser.parse(text, "widget", opts)
        assert excinfo.value.detail is detail

    def test_invalid_identifier(self, opts):
        """Test that identifier errors propagate."""
        with pytest.raises(InvalidIdentifierError) as excinfo:
            reference_parser.parse("Team/widget 1.0.0", "widget", opts)
        assert excinfo.value.detail is Detail.INVALID_NAMESPACE

    def test_type_mismatch(self, opts):
        """Test that a type mismatch propagates."""
        with pytest.raises(TypeMismatchError):
            reference_parser.parse("template team/widget 1.0.0", "widget", opts)

    def test_invalid_constraint(self, opts):
        """Test that constraint errors propagate."""
        with pytest.raises(InvalidConstraintError) as excinfo:
            reference_parser.parse("widget >=1.0.0", "widget", opts)
        assert excinfo.value.detail is Detail.MISSING_UPPER_BOUND

    def test_unknown_token_after_version(self, opts):
        """Test that non-digest trailing text becomes part of the constraint."""
        with pytest.raises(InvalidConstraintError):
            reference_parser.parse("widget 1.0.0 latest", "widget", opts)

    @pytest.mark.parametrize("token,expected", [
        ("1.0.0", True),
        ("^1", True),
        ("v2", True),
        ("~1.2", True),
        ("widget", False),
        (":stable", False),
    ])
    def test_looks_like_version(self, token, expected):
        """Test the version-start heuristic."""
        assert looks_like_version(token) is expected


class TestNewReference:
    """Tests for reference.new and the Reference invariants."""

    def test_new_with_version(self):
        """Test building a version-based reference."""
        ident = new_identifier("widget", "https://r.example.com", "team", "thing")
        ref = reference.new(ident, ">=1.0.0 <2.0.0")
        assert ref.is_version_based()
        assert str(ref) == "widget https://r.example.com/team/thing >=1.0.0 <2.0.0"

    def test_new_with_channel_and_digest(self):
        """Test building a frozen channel reference."""
        ident = new_identifier("widget", "https://r.example.com", "team", "thing")
        ref = reference.new(ident, ":stable", parse_digest("sha256:00ff"))
        assert ref.channel == "stable"
        assert ref.is_frozen()
        assert str(ref) == "widget https://r.example.com/team/thing :stable sha256:00ff"

    def test_new_without_identifier(self):
        """Test that an identifier is required."""
        with pytest.raises(InvalidReferenceError) as excinfo:
            reference.new(None, "1.0.0")
        assert excinfo.value.detail is Detail.EMPTY_REFERENCE

    def test_new_invalid_constraint(self):
        """Test that a malformed constraint is rejected."""
        ident = new_identifier("widget", "https://r.example.com", "team", "thing")
        with pytest.raises(InvalidConstraintError):
            reference.new(ident, ":Stable")

    def test_exactly_one_of_version_and_channel(self):
        """Test that a reference needs one and only one of version and channel."""
        ident = new_identifier("widget", "https://r.example.com", "team", "thing")
        with pytest.raises(InvalidReferenceError):
            reference.from_identifier(ident)
        with pytest.raises(InvalidReferenceError):
            reference.from_identifier(
                ident,
                version=parse_version_constraint("1"),
                channel="stable",
            )

    def test_uppercase_digest_is_not_a_digest(self, opts):
        """Test that only lowercase hex tokens end the version."""
        ref = reference_parser.parse("widget 1 sha256:ab", "widget", opts)
        assert ref.digest.hash == "ab"
        with pytest.raises(InvalidConstraintError):
            reference_parser.parse("widget 1 sha256:AB", "widget", opts)
