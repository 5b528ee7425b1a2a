from datetime import date, datetime, timedelta, timezone

from rituals.engine.dates import (
    day_difference, day_of_week, distinct_days, each_day, each_month, each_week,
    parse_timestamp, same_day, same_month, same_week, start_of_day, start_of_month,
    start_of_week,
)

MONDAY = date(2024, 1, 1)
SUNDAY = date(2023, 12, 31)


class TestStartOfDay:
    def test_datetime_truncated(self):
        assert start_of_day(datetime(2024, 1, 5, 23, 59)) == date(2024, 1, 5)

    def test_date_passthrough(self):
        assert start_of_day(MONDAY) == MONDAY

    def test_iso_string(self):
        assert start_of_day("2024-03-10T08:30:00Z") == date(2024, 3, 10)
        assert start_of_day("2024-03-10") == date(2024, 3, 10)

    def test_converts_aware_datetime_to_tz(self):
        utc_late = datetime(2024, 1, 5, 23, 0, tzinfo=timezone.utc)
        plus_two = timezone(timedelta(hours=2))
        assert start_of_day(utc_late, tz=plus_two) == date(2024, 1, 6)
        assert start_of_day(utc_late) == date(2024, 1, 5)

    def test_parse_timestamp_keeps_time(self):
        assert parse_timestamp("2024-01-05T10:15:00").hour == 10


class TestDayDifference:
    def test_ignores_time_of_day(self):
        assert day_difference(datetime(2024, 1, 2, 0, 1), datetime(2024, 1, 1, 23, 59)) == 1

    def test_negative_when_earlier(self):
        assert day_difference(date(2024, 1, 1), date(2024, 1, 4)) == -3

    def test_across_dst_change(self):
        # US DST starts 2024-03-10; calendar difference is still whole days
        assert day_difference(date(2024, 3, 11), date(2024, 3, 9)) == 2

    def test_same_day(self):
        assert same_day(datetime(2024, 1, 1, 8), datetime(2024, 1, 1, 20))
        assert not same_day(date(2024, 1, 1), date(2024, 1, 2))


class TestWeeks:
    def test_day_of_week_sunday_is_zero(self):
        assert day_of_week(SUNDAY) == 0
        assert day_of_week(MONDAY) == 1
        assert day_of_week(date(2024, 1, 6)) == 6

    def test_start_of_week_is_sunday(self):
        assert start_of_week(date(2024, 1, 3)) == SUNDAY
        assert start_of_week(SUNDAY) == SUNDAY

    def test_start_of_week_monday(self):
        assert start_of_week(date(2024, 1, 3), week_starts_on=1) == MONDAY

    def test_same_week(self):
        assert same_week(date(2024, 1, 6), SUNDAY)
        assert not same_week(date(2024, 1, 7), SUNDAY)


class TestMonths:
    def test_start_of_month(self):
        assert start_of_month(date(2024, 2, 29)) == date(2024, 2, 1)

    def test_same_month(self):
        assert same_month(date(2024, 2, 1), date(2024, 2, 29))
        assert not same_month(date(2024, 2, 1), date(2023, 2, 1))


class TestRanges:
    def test_each_day_inclusive(self):
        days = each_day(date(2024, 2, 27), date(2024, 3, 1))
        assert days == [date(2024, 2, 27), date(2024, 2, 28), date(2024, 2, 29), date(2024, 3, 1)]

    def test_each_day_empty_when_reversed(self):
        assert each_day(date(2024, 3, 1), date(2024, 2, 1)) == []

    def test_each_week_starts_before_range(self):
        weeks = each_week(MONDAY, date(2024, 1, 14))
        assert weeks == [SUNDAY, date(2024, 1, 7), date(2024, 1, 14)]

    def test_each_week_full_year(self):
        assert len(each_week(date(2024, 1, 1), date(2024, 12, 31))) == 53

    def test_each_month(self):
        months = each_month(date(2024, 1, 15), date(2024, 4, 1))
        assert months == [date(2024, 1, 1), date(2024, 2, 1), date(2024, 3, 1), date(2024, 4, 1)]


class TestDistinctDays:
    def test_dedupes_and_sorts(self):
        values = [
            datetime(2024, 1, 3, 9),
            datetime(2024, 1, 1, 7),
            datetime(2024, 1, 3, 21),
            "2024-01-02",
        ]
        assert distinct_days(values) == [date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 3)]

    def test_empty(self):
        assert distinct_days([]) == []
