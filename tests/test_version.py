"""Tests for semantic version parsing and comparison."""

import pytest
import semantic_version

from pinref.errors import Detail, InvalidVersionError
from pinref.version import Version, parse_version


class TestParseVersion:
    """Tests for parse_version."""

    def test_parse_basic(self):
        """Test parsing a plain major.minor.patch version."""
        v = parse_version("1.2.3")
        assert (v.major, v.minor, v.patch) == (1, 2, 3)
        assert v.prerelease is None
        assert v.build is None

    @pytest.mark.parametrize("text", ["v1.2.3", "V1.2.3", "  1.2.3  "])
    def test_parse_prefix_and_whitespace(self, text):
        """Test that v/V prefixes and surrounding whitespace are ignored."""
        assert str(parse_version(text)) == "1.2.3"

    def test_parse_prerelease_and_build(self):
        """Test parsing prerelease and build metadata together."""
        v = parse_version("1.0.0-rc.1+build.5")
        assert v.prerelease == "rc.1"
        assert v.build == "build.5"
        assert v.is_prerelease()
        assert str(v) == "1.0.0-rc.1+build.5"

    def test_parse_build_only(self):
        """Test build metadata without prerelease."""
        v = parse_version("2.0.0+20240101-abc")
        assert v.build == "20240101-abc"
        assert not v.is_prerelease()

    @pytest.mark.parametrize("text,detail", [
        ("1.2", Detail.INVALID_VERSION_COMPONENTS),
        ("1.2.3.4", Detail.INVALID_VERSION_COMPONENTS),
        ("", Detail.INVALID_VERSION_COMPONENTS),
        ("a.2.3", Detail.INVALID_MAJOR_VERSION),
        ("1.b.3", Detail.INVALID_MINOR_VERSION),
        ("1.2.c", Detail.INVALID_PATCH_VERSION),
        ("1..3", Detail.INVALID_MINOR_VERSION),
        ("1.2.3+", Detail.INVALID_BUILD_METADATA),
        ("1.2.3+a..b", Detail.INVALID_BUILD_METADATA),
        ("1.2.3-alpha", Detail.INVALID_PRERELEASE_FORMAT),
        ("1.2.3-alpha.01", Detail.INVALID_PRERELEASE_FORMAT),
        ("1.2.3-1.1", Detail.INVALID_PRERELEASE_FORMAT),
        ("1.2.3-alpha.beta.1", Detail.INVALID_PRERELEASE_FORMAT),
        ("1.2.3-", Detail.INVALID_PRERELEASE_FORMAT),
    ])
    def test_parse_invalid(self, text, detail):
        """Test that malformed versions report the specific cause."""
        with pytest.raises(InvalidVersionError) as excinfo:
            parse_version(text)
        assert excinfo.value.detail is detail

    def test_prerelease_zero_allowed(self):
        """Test that a prerelease number of exactly 0 is accepted."""
        assert parse_version("1.0.0-alpha.0").prerelease == "alpha.0"

    def test_error_message_includes_category(self):
        """Test the rendered message of a version error."""
        with pytest.raises(InvalidVersionError, match="invalid version: invalid patch version"):
            parse_version("1.2.x")

    @pytest.mark.parametrize("text", [
        "0.0.0",
        "10.20.30",
        "1.0.0-alpha.1",
        "1.0.0-rc.12+exp.sha.5114f85",
        "3.1.4+build",
    ])
    def test_round_trip(self, text):
        """Test that parsing the string form yields the same fields."""
        v = parse_version(text)
        again = parse_version(str(v))
        assert (again.major, again.minor, again.patch, again.prerelease, again.build) == \
            (v.major, v.minor, v.patch, v.prerelease, v.build)


class TestVersionCompare:
    """Tests for Version.compare and the comparison operators."""

    def test_numeric_components(self):
        """Test major, minor and patch ordering."""
        assert parse_version("1.0.0").compare(parse_version("2.0.0")) == (-1, True)
        assert parse_version("1.3.0").compare(parse_version("1.2.9")) == (1, True)
        assert parse_version("1.2.10").compare(parse_version("1.2.9")) == (1, True)
        assert parse_version("1.2.3").compare(parse_version("1.2.3")) == (0, True)

    def test_stable_greater_than_prerelease(self):
        """Test that a stable release outranks its prereleases."""
        assert parse_version("1.0.0").compare(parse_version("1.0.0-alpha.1")) == (1, True)
        assert parse_version("1.0.0-alpha.1").compare(parse_version("1.0.0")) == (-1, True)

    def test_same_prerelease_identifier(self):
        """Test prereleases with the same identifier compare numerically."""
        assert parse_version("1.0.0-alpha.2").compare(parse_version("1.0.0-alpha.10")) == (-1, True)

    def test_different_prerelease_identifiers_not_comparable(self):
        """Test that alpha and beta have no defined order."""
        _, valid = parse_version("1.0.0-alpha.1").compare(parse_version("1.0.0-beta.1"))
        assert valid is False

    def test_prerelease_on_different_triple_is_comparable(self):
        """Test that the numeric triple decides before prerelease identifiers."""
        assert parse_version("1.0.0-beta.1").compare(parse_version("1.0.1-alpha.1")) == (-1, True)

    def test_build_metadata_ignored(self):
        """Test that build metadata does not affect ordering or equality."""
        a = parse_version("1.0.0+a")
        b = parse_version("1.0.0+b")
        assert a.compare(b) == (0, True)
        assert a == b
        assert hash(a) == hash(b)

    def test_operators(self):
        """Test rich comparisons follow compare."""
        assert parse_version("1.0.0") < parse_version("1.0.1")
        assert parse_version("2.0.0") >= parse_version("2.0.0-rc.1")
        assert sorted([parse_version("1.10.0"), parse_version("1.2.0")])[0] == parse_version("1.2.0")

    def test_operators_reject_incomparable(self):
        """Test ordering incomparable prereleases raises TypeError."""
        with pytest.raises(TypeError):
            parse_version("1.0.0-alpha.1") < parse_version("1.0.0-beta.1")  # pylint: disable=expression-not-assigned

    def test_incomparable_not_equal(self):
        """Test incomparable versions are not equal."""
        assert parse_version("1.0.0-alpha.1") != parse_version("1.0.0-beta.1")


class TestSemverInterop:
    """Tests for conversion to and from semantic_version."""

    def test_to_semver(self):
        """Test conversion to semantic_version.Version."""
        sv = parse_version("1.2.3-rc.1").to_semver()
        assert isinstance(sv, semantic_version.Version)
        assert sv.major == 1 and sv.prerelease == ("rc", "1")

    def test_from_semver(self):
        """Test conversion from semantic_version.Version."""
        v = Version.from_semver(semantic_version.Version("4.5.6+b1"))
        assert str(v) == "4.5.6+b1"

    def test_from_semver_enforces_prerelease_rules(self):
        """Test that semver-valid but locally invalid prereleases are rejected."""
        with pytest.raises(InvalidVersionError):
            Version.from_semver(semantic_version.Version("1.0.0-alpha"))
