"""Unit tests for text-to-number coercions."""

import pytest

from fantasytier.parsing import (
    parse_int,
    parse_token_id,
    position_name,
    strip_hex_prefix,
    unknown_player,
)


class TestParseInt:
    """Tests for lenient integer parsing."""

    @pytest.mark.parametrize(
        'value, expected',
        [('3', 3), (' 12 ', 12), ('7abc', 7), ('-2', -2), (5, 5), (4.9, 4)],
    )
    def test_parses_leading_integer(self, value, expected):
        """Test numeric text and numbers parse."""
        assert parse_int(value) == expected

    @pytest.mark.parametrize('value', [None, '', 'abc', 'n/a', True, float('nan')])
    def test_falls_back_to_default(self, value):
        """Test unparseable values return the default."""
        assert parse_int(value, default=99) == 99


class TestTokenIds:
    """Tests for squad token id parsing."""

    def test_numeric_strings(self):
        """Test token ids parse like the published squad ids."""
        assert parse_token_id('42') == 42
        assert parse_token_id('007') == 7
        assert parse_token_id(13) == 13

    def test_hex_token_ids(self):
        """Test 0x-prefixed token ids are read as hex."""
        assert parse_token_id('0x1A') == 26
        assert parse_token_id('0x2a') == 42
        assert parse_token_id(' 0X10') == 16
        assert parse_token_id('0x') is None
        assert parse_token_id('0xzz') is None

    def test_non_numeric(self):
        """Test non-numeric token ids parse to None."""
        assert parse_token_id('') is None
        assert parse_token_id('abc') is None
        assert parse_token_id(None) is None


class TestHelpers:
    """Tests for small display helpers."""

    def test_strip_hex_prefix(self):
        """Test only one leading 0x is removed."""
        assert strip_hex_prefix('0x0100') == '0100'
        assert strip_hex_prefix('0100') == '0100'
        assert strip_hex_prefix('0x0x01') == '0x01'

    def test_position_names(self):
        """Test known and unknown position names."""
        assert [position_name(i) for i in range(4)] == [
            'Goalkeeper', 'Defender', 'Midfielder', 'Forward',
        ]
        assert position_name(99) == 'Unknown'

    def test_unknown_player(self):
        """Test placeholder player fields."""
        player = unknown_player('1234567890')
        assert player.name == 'Unknown Player (12345678...)'
        assert player.position_id == 99
        assert player.team_id == 0
        assert player.league_id == ''
