import pytest

from klogger.exceptions import InvalidFormatError
from klogger.render.color import BOLD, GRAY, RESET, STRIKETHROUGH, YELLOW, LogColor


def test_from_hex_round_trips_through_hex():
    for value in ["#00AAFF", "#FF2222", "#000000", "#FFFFFF", "#0a1B2c"]:
        color = LogColor.from_hex(value)
        assert LogColor.from_hex(color.hex()).hex() == color.hex()
    assert LogColor.from_hex("#0a1B2c").hex() == "#0A1B2C"


@pytest.mark.parametrize("value", ["FF0000", "#FF00", "#GGGGGG", "#FF00000", "", " #FF0000"])
def test_from_hex_rejects_malformed_strings(value):
    with pytest.raises(InvalidFormatError):
        LogColor.from_hex(value)


def test_escape_uses_24_bit_foreground_sequence():
    assert LogColor.from_rgb(0, 170, 255).escape() == "\u001b[38;2;0;170;255m"
    assert str(YELLOW) == "\u001b[38;2;255;255;0m"


def test_from_int_extracts_channels_from_packed_value():
    color = LogColor.from_int(0x12AB34)
    assert color.rgb == (0x12, 0xAB, 0x34)
    assert color.hex() == "#12AB34"


def test_from_rgb_does_not_clamp():
    assert LogColor.from_rgb(300, -1, 0).escape() == "\u001b[38;2;300;-1;0m"


def test_style_colors_have_raw_escape_and_no_hex():
    assert BOLD.escape() == "\u001b[1m"
    assert STRIKETHROUGH.escape() == "\u001b[9m"
    assert RESET.escape() == "\u001b[0m"
    assert BOLD.hex() == ""
    assert GRAY.hex() == "#808080"


def test_empty_color_falls_back_to_reset():
    assert LogColor().escape() == RESET.escape()


def test_parse_accepts_every_constructor_input():
    assert LogColor.parse("#FF0000") == LogColor.from_rgb(255, 0, 0)
    assert LogColor.parse(0x00FF00) == LogColor.from_rgb(0, 255, 0)
    assert LogColor.parse((0, 0, 255)) == LogColor.from_rgb(0, 0, 255)
    assert LogColor.parse(BOLD) is BOLD
    with pytest.raises(InvalidFormatError):
        LogColor.parse(1.5)
