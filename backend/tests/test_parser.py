import pytest

from pos_finder.hours.errors import MalformedHours
from pos_finder.hours.parser import normalize_separator, parse_hours
from pos_finder.hours.time_spec import TimeOfDay
from pos_finder.hours.types import OpeningWindow


def t(value: str) -> TimeOfDay:
    return TimeOfDay.from_hhmm(value)


def test_single_digit_hour_is_padded():
    assert parse_hours("9:00-18:00", 1, 1) == [OpeningWindow(1, 1, t("09:00"), t("18:00"))]


def test_single_digit_minute_is_malformed():
    with pytest.raises(MalformedHours):
        parse_hours("9:0-18:00", 1, 1)


def test_multiple_ranges_keep_order():
    assert parse_hours("10:00-14:00,15:00-18:00", 2, 2) == [
        OpeningWindow(2, 2, t("10:00"), t("14:00")),
        OpeningWindow(2, 2, t("15:00"), t("18:00")),
    ]


@pytest.mark.parametrize(
    "hours",
    [
        "10:00–18:00",   # en dash
        "10:00—18:00",   # em dash
        "10:00‒18:00",   # figure dash
        "10:00−18:00",   # minus sign
        "10:00â€“18:00",  # en dash mis-decoded as cp1252
        " 10:00 - 18:00 ",
    ],
)
def test_dash_look_alikes_parse_like_a_hyphen(hours):
    assert parse_hours(hours, 0, 6) == parse_hours("10:00-18:00", 0, 6)


def test_normalize_separator_leaves_plain_text_alone():
    assert normalize_separator("9:00-18:00") == "9:00-18:00"


@pytest.mark.parametrize(
    "hours",
    ["", "   ", "10:00", "10:00-18:00-20:00", "10:00-18:00,", "25:00-26:00", "ab:cd-18:00", "10-18", "10:00--18:00"],
)
def test_malformed_hours(hours):
    with pytest.raises(MalformedHours) as exc:
        parse_hours(hours, 1, 5)
    assert exc.value.hours == hours


@pytest.mark.parametrize("day_from, day_to", [(-1, 3), (0, 7), (None, 3)])
def test_day_bounds_must_be_week_days(day_from, day_to):
    with pytest.raises(MalformedHours):
        parse_hours("10:00-12:00", day_from, day_to)


def test_rendered_window_reparses_to_the_same_window():
    for w in parse_hours("7:05-12:00,12:30–23:59", 1, 5):
        assert parse_hours(w.hours, w.day_from, w.day_to) == [w]


def test_overnight_range_is_split_at_midnight():
    assert parse_hours("22:00-2:00", 1, 5) == [
        OpeningWindow(1, 5, t("22:00"), t("23:59")),
        OpeningWindow(2, 6, t("00:00"), t("02:00")),
    ]


def test_overnight_range_on_saturday_rolls_into_sunday():
    assert parse_hours("22:00-02:00", 5, 6) == [
        OpeningWindow(5, 6, t("22:00"), t("23:59")),
        OpeningWindow(6, 6, t("00:00"), t("02:00")),
        OpeningWindow(0, 0, t("00:00"), t("02:00")),
    ]


def test_week_wrap_day_range_is_split():
    assert parse_hours("10:00-12:00", 6, 1) == [
        OpeningWindow(6, 6, t("10:00"), t("12:00")),
        OpeningWindow(0, 1, t("10:00"), t("12:00")),
    ]


def test_zero_length_window_is_kept():
    assert parse_hours("00:00-00:00", 0, 0) == [OpeningWindow(0, 0, t("00:00"), t("00:00"))]
