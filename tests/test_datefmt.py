from datetime import datetime

from klogger.render.datefmt import format_date

WHEN = datetime(2024, 3, 5, 7, 8, 9, 123456)


def test_default_pattern():
    assert format_date("yyyy-MM-dd HH:mm:ss", WHEN) == "2024-03-05 07:08:09"


def test_short_and_twelve_hour_fields():
    assert format_date("d/M/yy h:mm a", WHEN) == "5/3/24 7:08 AM"
    assert format_date("hh", datetime(2024, 1, 1, 0, 0)) == "12"


def test_fraction_of_second():
    assert format_date("HH:mm:ss.SSS", WHEN) == "07:08:09.123"


def test_quoted_literals_and_escaped_quote():
    assert format_date("yyyy-MM-dd'T'HH", WHEN) == "2024-03-05T07"
    assert format_date("h 'o''clock'", WHEN) == "7 o'clock"
    assert format_date("''HH''", WHEN) == "'07'"


def test_other_characters_are_copied():
    assert format_date("[yyyy] % {x}", WHEN) == "[2024] % {x}"


def test_defaults_to_now():
    assert len(format_date("yyyy")) == 4
