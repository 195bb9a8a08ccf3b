from datetime import date, datetime, timedelta, timezone

import pytest

from content_engine_connector.dateformat import MetadataDateFormat, compile_pattern

# Saturday
SAMPLE = datetime(2017, 3, 4, 17, 6, 7, 123456)


@pytest.mark.parametrize(
    "pattern,expected",
    [
        ("yyyy-MM-dd", "2017-03-04"),
        ("yyyy-MM-dd'T'HH:mm:ss", "2017-03-04T17:06:07"),
        ("yy/M/d", "17/3/4"),
        ("dd MMM yyyy", "04 Mar 2017"),
        ("MMMM d, yyyy", "March 4, 2017"),
        ("EEE", "Sat"),
        ("EEEE", "Saturday"),
        ("h:mm a", "5:06 PM"),
        ("K k H", "5 17 17"),
        ("ss.SSS", "07.123"),
        ("D DDD F u", "63 063 1 6"),
        ("G yyyy", "AD 2017"),
        ("yyyy年MM月", "2017年03月"),
        ("hh 'o''clock'", "05 o'clock"),
        ("''yyyy''", "'2017'"),
    ],
)
def test_format(pattern, expected):
    assert MetadataDateFormat(pattern).format(SAMPLE) == expected


def test_midnight_and_noon_hours():
    midnight = datetime(2017, 3, 4, 0, 0)
    noon = datetime(2017, 3, 4, 12, 0)

    assert MetadataDateFormat("h k K a").format(midnight) == "12 24 0 AM"
    assert MetadataDateFormat("h k K a").format(noon) == "12 12 0 PM"


def test_zone_fields():
    value = datetime(2017, 3, 4, 5, 6, tzinfo=timezone(timedelta(hours=-5, minutes=-30)))
    utc = datetime(2017, 3, 4, 5, 6, tzinfo=timezone.utc)

    assert MetadataDateFormat("Z").format(value) == "-0530"
    assert MetadataDateFormat("X").format(value) == "-05"
    assert MetadataDateFormat("XX").format(value) == "-0530"
    assert MetadataDateFormat("XXX").format(value) == "-05:30"
    assert MetadataDateFormat("XXX").format(utc) == "Z"
    assert MetadataDateFormat("z").format(utc) == "UTC"


def test_format_plain_date():
    assert MetadataDateFormat("yyyy-MM-dd HH:mm").format(date(2020, 1, 2)) == "2020-01-02 00:00"


@pytest.mark.parametrize(
    "pattern,message",
    [
        ("bogus", "Illegal pattern character 'b'"),
        ("yyyy-MM-dd'T", "Unterminated quote"),
        ("yyyy-MM-dd 'at", "Unterminated quote"),
        ("XXXX", "invalid ISO 8601 format"),
        ("yyyy-mm-dd q", "Illegal pattern character 'q'"),
    ],
)
def test_invalid_patterns_rejected(pattern, message):
    with pytest.raises(ValueError, match=message):
        MetadataDateFormat(pattern)


def test_compile_pattern_tokens():
    assert compile_pattern("yyyy-MM'T'") == [("y", 4), (None, "-"), ("M", 2), (None, "T")]
    assert compile_pattern("") == []


@pytest.mark.parametrize(
    "value,expected",
    [
        # Sunday; its week holds January 1, 2018
        (date(2017, 12, 31), "1 2018 17"),
        (date(2017, 12, 30), "52 2017 17"),
        (date(2015, 12, 31), "1 2016 15"),
        (date(2016, 1, 1), "1 2016 16"),
        (date(2016, 1, 3), "2 2016 16"),
        (date(2017, 1, 1), "1 2017 17"),
    ],
)
def test_week_year_boundaries(value, expected):
    assert MetadataDateFormat("w YYYY yy").format(value) == expected


def test_week_fields_start_on_sunday():
    assert MetadataDateFormat("w W").format(SAMPLE) == "9 1"
    assert MetadataDateFormat("w W").format(date(2017, 3, 5)) == "10 2"
    assert MetadataDateFormat("YY").format(date(2017, 12, 31)) == "18"
