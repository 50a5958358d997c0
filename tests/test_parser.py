"""Tests for parser module."""

from vaultterm.parser import parse_flags, parse_line


class TestParseFlags:
    """Test flag extraction."""

    def test_quoted_and_bare_values(self):
        """Quoted values keep internal spaces, bare values stop at whitespace."""
        flags, switches = parse_flags(
            'account create --vault "My Vault" --name Gmail '
            '--username a@b.com --password "p@ss 1"'
        )

        assert flags == {
            "vault": "My Vault",
            "name": "Gmail",
            "username": "a@b.com",
            "password": "p@ss 1",
        }
        assert switches == frozenset()

    def test_duplicate_flag_last_wins(self):
        flags, _ = parse_flags('vault create --name "First" --name Second')

        assert flags["name"] == "Second"

    def test_valueless_flag_is_switch(self):
        """A flag followed by another flag or nothing has no value."""
        flags, switches = parse_flags('account show --reveal --name "Gmail"')

        assert flags == {"name": "Gmail"}
        assert switches == frozenset({"reveal"})

    def test_trailing_switch(self):
        flags, switches = parse_flags('account show --name Gmail --reveal')

        assert flags == {"name": "Gmail"}
        assert "reveal" in switches

    def test_bare_value_cannot_start_with_dashes(self):
        flags, switches = parse_flags("vault create --name --description x")

        assert "name" not in flags
        assert "name" in switches
        assert flags["description"] == "x"

    def test_empty_quoted_value(self):
        flags, _ = parse_flags('vault create --name ""')

        assert flags["name"] == ""

    def test_unterminated_quote_yields_switch(self):
        flags, switches = parse_flags('vault create --name "Personal')

        assert "name" not in flags
        assert "name" in switches

    def test_flag_must_start_at_token_boundary(self):
        flags, _ = parse_flags("search foo--name bar")

        assert flags == {}

    def test_switch_overridden_by_later_value(self):
        flags, switches = parse_flags("x --name --name Real")

        assert flags["name"] == "Real"
        assert "name" not in switches


class TestParseLine:
    """Test full line tokenization."""

    def test_blank_line_returns_none(self):
        assert parse_line("") is None
        assert parse_line("   \t ") is None

    def test_verb_and_sub_verb_lowercased(self):
        parsed = parse_line('  VAULT Create --name "Personal"  ')

        assert parsed.verb == "vault"
        assert parsed.sub_verb == "create"
        assert parsed.raw == 'VAULT Create --name "Personal"'
        assert parsed.flag("name") == "Personal"

    def test_single_token(self):
        parsed = parse_line("help")

        assert parsed.verb == "help"
        assert parsed.sub_verb == ""
        assert parsed.remainder == ""

    def test_remainder_is_text_after_verb(self):
        parsed = parse_line("search  Gmail Account ")

        assert parsed.remainder == "Gmail Account"

    def test_flag_returns_none_for_empty_value(self):
        parsed = parse_line('vault create --name ""')

        assert parsed.flag("name") is None
        assert parsed.flag("missing") is None

    def test_has_switch(self):
        parsed = parse_line('account show --name "Gmail" --reveal')

        assert parsed.has_switch("reveal") is True
        assert parsed.has_switch("name") is True
        assert parsed.has_switch("notes") is False
