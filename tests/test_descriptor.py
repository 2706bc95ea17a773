"""
Unit tests for descriptor construction and defaulting.

Tests cover:
- Default table merging (caller values win, absent keys defaulted)
- Structural normalization of Author, Arch, Platform and References
- MalformedField errors
- Unrecognized metadata kept in the side channel
"""

import pytest
from pydantic import ValidationError

from modbase.config import DEFAULT_LICENSE, reset_config
from modbase.errors import MalformedField
from modbase.modules.descriptor import (
    ALL_PLATFORMS,
    Author,
    Reference,
    build_descriptor,
    merge_defaults,
    merge_info,
    transform_arch,
    transform_authors,
    transform_platforms,
    transform_references,
)
from modbase.modules.module import Module

from fixtures.sample_modules import BareModule, SampleScanner


# =============================================================================
# Defaulting
# =============================================================================


class TestDefaults:
    """Tests for the default table merge."""

    def test_empty_info_uses_defaults(self):
        """Test that every field falls back to the default table."""
        descriptor = build_descriptor({}, "Test License")

        assert descriptor.name == "No module name"
        assert descriptor.description == "No module description"
        assert descriptor.version == "0"
        assert descriptor.authors == ()
        assert descriptor.architectures == frozenset()
        assert descriptor.platforms == frozenset()
        assert descriptor.references == ()
        assert descriptor.license == "Test License"
        assert descriptor.privileged is False

    def test_provided_values_override_defaults(self):
        """Test that caller supplied values always win."""
        info = {
            "Name": "Banner Grabber",
            "Description": "Reads banners",
            "Version": 3,
            "Privileged": True,
            "License": "MIT",
        }

        descriptor = build_descriptor(info, "Test License")

        assert descriptor.name == "Banner Grabber"
        assert descriptor.description == "Reads banners"
        assert descriptor.version == "3"
        assert descriptor.privileged is True
        assert descriptor.license == "MIT"
        # Untouched fields keep their defaults
        assert descriptor.platforms == frozenset()

    def test_explicit_none_falls_back_to_default(self):
        """Test that None for a known key is treated as absent."""
        merged = merge_defaults({"Name": None, "License": None}, "Test License")

        assert merged["Name"] == "No module name"
        assert merged["License"] == "Test License"

    def test_ref_alias(self):
        """Test that Ref is accepted when References is absent."""
        descriptor = build_descriptor({"Ref": [("CVE", "2020-0001")]}, "L")

        assert descriptor.references == (Reference(ctx_id="CVE", ctx_val="2020-0001"),)

    def test_references_preferred_over_ref(self):
        """Test that References wins when both keys are supplied."""
        descriptor = build_descriptor(
            {"Ref": [("CVE", "2020-0001")], "References": [("CWE", "79")]}, "L"
        )

        assert [r.ctx_id for r in descriptor.references] == ["CWE"]

    def test_unrecognized_keys_kept_in_extra(self):
        """Test that unknown metadata survives verbatim."""
        descriptor = build_descriptor({"Name": "x", "DisclosureDate": "2021-12-09"}, "L")

        assert descriptor.extra == {"DisclosureDate": "2021-12-09"}

    def test_descriptor_is_frozen(self):
        """Test that descriptors cannot be modified after construction."""
        descriptor = build_descriptor({"Name": "x"}, "L")

        with pytest.raises(ValidationError):
            descriptor.name = "y"

    def test_merge_info_derived_values_win(self):
        """Test layering of subclass metadata."""
        merged = merge_info({"Name": "Derived"}, {"Name": "Base", "Version": "1"})

        assert merged == {"Name": "Derived", "Version": "1"}

    def test_default_license_from_environment(self, monkeypatch):
        """Test that the framework-wide license comes from configuration."""
        monkeypatch.setenv("MODBASE_DEFAULT_LICENSE", "Custom License")
        reset_config()

        assert BareModule().license == "Custom License"

    def test_default_license_fallback(self):
        """Test the built-in framework license."""
        assert Module().license == DEFAULT_LICENSE


# =============================================================================
# Field Transforms
# =============================================================================


class TestAuthorTransform:
    """Tests for Author normalization."""

    def test_scalar_string(self):
        """Test that a single string becomes a one-element tuple."""
        assert transform_authors("carol") == (Author(name="carol"),)

    def test_email_parsing(self):
        """Test 'Name <email>' parsing with [at] normalization."""
        (author,) = transform_authors(["alice <alice[at]example.com>"])

        assert author.name == "alice"
        assert author.email == "alice@example.com"
        assert str(author) == "alice <alice@example.com>"

    def test_author_records_pass_through(self):
        """Test that Author instances are kept as-is."""
        author = Author(name="dave", email="dave@example.com")

        assert transform_authors([author]) == (author,)

    def test_none_is_empty(self):
        """Test that a missing field yields no authors."""
        assert transform_authors(None) == ()

    @pytest.mark.parametrize("bad", [42, ["<only@email>"], [{"name": "x"}]])
    def test_malformed(self, bad):
        """Test that uncoercible elements raise MalformedField."""
        with pytest.raises(MalformedField) as exc_info:
            transform_authors(bad)

        assert exc_info.value.field == "Author"


class TestArchTransform:
    """Tests for Arch normalization."""

    def test_scalar_and_sequence(self):
        """Test scalar wrapping and deduplication."""
        assert transform_arch("x86") == frozenset({"x86"})
        assert transform_arch(["x86", "x64", "x86"]) == frozenset({"x86", "x64"})

    def test_malformed(self):
        """Test that non-string architectures are rejected."""
        with pytest.raises(MalformedField) as exc_info:
            transform_arch(["x86", 64])

        assert exc_info.value.field == "Arch"
        assert exc_info.value.value == 64


class TestPlatformTransform:
    """Tests for Platform normalization."""

    def test_lowercases_and_splits(self):
        """Test case folding and comma splitting."""
        assert transform_platforms("Linux, Windows") == frozenset({"linux", "windows"})

    def test_all_marker(self):
        """Test the all-platforms marker absorbs concrete platforms."""
        assert transform_platforms(["all"]) == frozenset({ALL_PLATFORMS})
        assert transform_platforms(["linux", "all"]) == frozenset({ALL_PLATFORMS})
        assert transform_platforms("") == frozenset({ALL_PLATFORMS})

    def test_empty_list(self):
        """Test that no platforms stays empty."""
        assert transform_platforms([]) == frozenset()

    def test_malformed(self):
        """Test that non-string platforms are rejected."""
        with pytest.raises(MalformedField):
            transform_platforms([None])


class TestReferenceTransform:
    """Tests for References normalization."""

    def test_pairs_and_urls(self):
        """Test context pairs and bare URLs."""
        refs = transform_references([("CVE", "2021-44228"), "https://example.com/a"])

        assert refs[0] == Reference(ctx_id="CVE", ctx_val="2021-44228")
        assert refs[1] == Reference(ctx_id="URL", ctx_val="https://example.com/a")

    def test_site_rendering(self):
        """Test URL rendering for known contexts."""
        assert Reference(ctx_id="CVE", ctx_val="2021-44228").site == (
            "https://nvd.nist.gov/vuln/detail/CVE-2021-44228"
        )
        assert Reference(ctx_id="URL", ctx_val="https://x.test").site == "https://x.test"
        assert Reference(ctx_id="VENDOR", ctx_val="42").site == "VENDOR (42)"

    @pytest.mark.parametrize("bad", [[("CVE",)], [("CVE", "1", "2")], [3.5], [("CVE", None)]])
    def test_malformed(self, bad):
        """Test that uncoercible references raise MalformedField."""
        with pytest.raises(MalformedField) as exc_info:
            transform_references(bad)

        assert exc_info.value.field == "Ref"


# =============================================================================
# Module Construction
# =============================================================================


class TestModuleDescriptor:
    """Tests for descriptor fields as seen through a module."""

    def test_sample_scanner_fields(self, scanner):
        """Test that subclass metadata reaches the descriptor."""
        assert scanner.name == "Sample Scanner"
        assert scanner.version == "1.2"
        assert [a.name for a in scanner.authors] == ["alice", "bob"]
        assert scanner.arch == frozenset({"x86_64"})
        assert scanner.platform == frozenset({"linux", "bsd"})
        assert len(scanner.references) == 2
        assert scanner.descriptor.extra["Notes"] == {"Stability": ["crash-safe"]}

    def test_caller_info_overrides_subclass(self):
        """Test that info passed to the constructor wins over class metadata."""
        scanner = SampleScanner({"Name": "Renamed", "Privileged": True})

        assert scanner.name == "Renamed"
        assert scanner.privileged is True
        assert scanner.description == "Probes a service banner"

    def test_malformed_field_is_fatal(self):
        """Test that construction fails on malformed metadata."""
        with pytest.raises(MalformedField):
            Module({"Arch": [object()]})

    def test_bare_module_defaults(self):
        """Test a module without any metadata."""
        module = BareModule()

        assert module.name == "No module name"
        assert module.platform == frozenset()
        assert module.privileged is False
