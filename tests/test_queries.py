"""
Unit tests for the standalone capability query helpers.
"""

import pytest

from modbase.modules.module import MATCH_KEYS, flag_enabled, platform_matches, user_data_is_match


class TestPlatformMatches:
    """Tests for platform intersection."""

    def test_intersection(self):
        """Test matching and non-matching candidates."""
        assert platform_matches(frozenset({"linux"}), {"linux", "windows"}) is True
        assert platform_matches(frozenset({"linux"}), {"windows"}) is False

    def test_empty_declared_set(self):
        """Test that declaring no platforms matches nothing."""
        assert platform_matches(frozenset(), {"linux"}) is False

    def test_all_marker(self):
        """Test that the all marker matches any candidate."""
        assert platform_matches(frozenset({"all"}), {"windows"}) is True
        assert platform_matches(frozenset({"all"}), set()) is True

    def test_candidate_normalization(self):
        """Test case folding and string candidates."""
        assert platform_matches(frozenset({"osx"}), ["OSX"]) is True
        assert platform_matches(frozenset({"osx"}), "linux, osx") is True


class TestFlagEnabled:
    """Tests for the DEBUG/VERBOSE flag parser."""

    @pytest.mark.parametrize("value", ["1", "true", "True", "yes", "Y", "t", 1, True])
    def test_enabled(self, value):
        """Test values that enable a flag."""
        assert flag_enabled(value) is True

    @pytest.mark.parametrize("value", [None, "", "no", "false", "0", 0, False, "off"])
    def test_disabled(self, value):
        """Test values that leave a flag off."""
        assert flag_enabled(value) is False


class TestUserDataIsMatch:
    """Tests for match-data detection."""

    def test_superset(self):
        """Test that extra keys are allowed."""
        assert user_data_is_match({"match": 1, "match_set": 2, "run": 3, "extra": 4}) is True

    def test_missing_keys(self):
        """Test that a partial mapping is not a match."""
        assert user_data_is_match({"match": 1}) is False

    @pytest.mark.parametrize("value", [None, ["match", "match_set", "run"], "match"])
    def test_non_mapping(self, value):
        """Test that only mappings qualify."""
        assert user_data_is_match(value) is False

    def test_match_keys(self):
        """Test the fixed key set."""
        assert MATCH_KEYS == frozenset({"match", "match_set", "run"})
