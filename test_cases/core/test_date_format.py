from datetime import datetime

from catlog.core.date_format import format_date


def test_default_format() -> None:
    assert format_date(datetime(2010, 1, 11, 14, 31, 30, 5000)) == "2010-01-11 14:31:30.005"


def test_milliseconds_are_truncated_and_padded() -> None:
    assert format_date(datetime(2024, 12, 31, 23, 59, 59, 999999)) == "2024-12-31 23:59:59.999"
    assert format_date(datetime(2024, 1, 2, 3, 4, 5)) == "2024-01-02 03:04:05.000"
