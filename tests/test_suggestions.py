"""Tests for suggestions module."""

import pytest

from vaultterm.suggestions import COMMAND_VOCABULARY, SUGGESTION_LIMIT, suggest


class TestSuggest:
    """Test prefix completion over the command vocabulary."""

    def test_empty_buffer(self):
        assert suggest("") == []
        assert suggest("   ") == []

    def test_declaration_order(self):
        assert suggest("open") == [
            "open vaults",
            "open accounts",
            "open profile",
            "open overview",
        ]

    def test_limited_to_five(self):
        """'account' matches six entries; only the first five are kept."""
        assert suggest("account") == [
            "account list",
            "account create",
            "account update",
            "account delete",
            "account show",
        ]

    def test_case_insensitive(self):
        assert suggest("VAULT C") == ["vault create"]

    def test_no_match(self):
        assert suggest("xyz") == []

    @pytest.mark.parametrize(
        "prefix",
        ["a", "v", "s", "e", "o", "vault ", "Account p", "h", "st", "c"],
    )
    def test_prefix_property(self, prefix):
        """Every suggestion starts with the buffer and there are at most five."""
        result = suggest(prefix)

        assert len(result) <= SUGGESTION_LIMIT
        assert all(entry.lower().startswith(prefix.lower()) for entry in result)
        assert all(entry in COMMAND_VOCABULARY for entry in result)

    def test_custom_vocabulary_and_limit(self):
        assert suggest("b", ("ba", "bb", "bc"), limit=2) == ["ba", "bb"]
