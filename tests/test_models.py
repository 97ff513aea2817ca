"""
LevelBot - Command Option Model Tests
=====================================
"""

import pytest
from pydantic import ValidationError

from src.models.commands import (
    AfkOptions,
    EmbedOptions,
    LevelOptions,
    MuteOptions,
    RoleCreateOptions,
    SlowmodeOptions,
    UserRoleOptions,
    first_error_message,
    parse_options,
)
from src.utils.validators import INVALID_HEX_MESSAGE, normalize_hex_color, ValidationError as HexError


class TestParseOptions:
    """Tests for discriminated parsing."""

    def test_dispatches_on_command(self):
        assert isinstance(parse_options("level", user_id=5), LevelOptions)
        assert isinstance(parse_options("slowmode", seconds=10), SlowmodeOptions)

    def test_unknown_command(self):
        with pytest.raises(ValidationError):
            parse_options("reload")

    def test_models_are_frozen(self):
        options = parse_options("afk", status="Lunch")
        with pytest.raises(ValidationError):
            options.status = "Dinner"


class TestRoleCreate:
    """Tests for /role options."""

    @pytest.mark.parametrize("raw,expected", [
        ("ff0000", "ff0000"),
        ("#FF0000", "ff0000"),
        ("  #00aBcD ", "00abcd"),
    ])
    def test_valid_colors(self, raw, expected):
        assert parse_options("role", name="Red", color=raw).color == expected

    @pytest.mark.parametrize("raw", ["ff00", "#ff00000", "gggggg", "##ff0000", ""])
    def test_invalid_colors(self, raw):
        with pytest.raises(ValidationError) as exc_info:
            parse_options("role", name="Red", color=raw)
        assert first_error_message(exc_info.value) == INVALID_HEX_MESSAGE

    def test_empty_name(self):
        with pytest.raises(ValidationError):
            RoleCreateOptions(name="", color="ff0000")


class TestAfk:
    """Tests for /afk options."""

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_defaults_to_afk(self, raw):
        assert parse_options("afk", status=raw).status == "AFK"

    def test_custom_status(self):
        assert AfkOptions(status=" Lunch ").status == "Lunch"

    def test_too_long(self):
        with pytest.raises(ValidationError):
            AfkOptions(status="x" * 201)


class TestEmbed:
    """Tests for /embed options."""

    def test_invalid_color_falls_back(self):
        options = parse_options("embed", title="T", description="D", color="nope")
        assert options.color == "0099ff"
        assert options.color_value == 0x0099FF

    def test_missing_color_falls_back(self):
        assert EmbedOptions(title="T", description="D", color=None).color == "0099ff"

    def test_valid_color(self):
        assert EmbedOptions(title="T", description="D", color="#00FF00").color_value == 0x00FF00

    def test_title_required(self):
        with pytest.raises(ValidationError):
            parse_options("embed", title="", description="D")


class TestModeration:
    """Tests for /mute and /slowmode options."""

    @pytest.mark.parametrize("minutes", [0, -1, 40321])
    def test_mute_minutes_bounds(self, minutes):
        with pytest.raises(ValidationError):
            MuteOptions(user_id=1, minutes=minutes)

    def test_mute_max(self):
        assert MuteOptions(user_id=1, minutes=40320).minutes == 40320

    @pytest.mark.parametrize("seconds", [-1, 21601])
    def test_slowmode_bounds(self, seconds):
        with pytest.raises(ValidationError):
            SlowmodeOptions(seconds=seconds)

    def test_slowmode_zero_allowed(self):
        assert SlowmodeOptions(seconds=0).seconds == 0


class TestUserRole:
    """Tests for /userrole options."""

    def test_action_literal(self):
        assert UserRoleOptions(user_id=1, role_id=2, action="remove").action == "remove"

    def test_bad_action(self):
        with pytest.raises(ValidationError):
            UserRoleOptions(user_id=1, role_id=2, action="toggle")


class TestNormalizeHexColor:
    """Tests for the shared hex validator."""

    def test_strips_hash(self):
        assert normalize_hex_color("#ABCDEF") == "abcdef"

    def test_raises_value_error(self):
        with pytest.raises(HexError):
            normalize_hex_color("xyz")
        assert issubclass(HexError, ValueError)
