import datetime

import pytest

from services import calendar
from services.errors import SessionNotStartedError
from services.prices import PriceEvolver
from services.session import Session

START = datetime.date(2024, 2, 27)


@pytest.fixture
def session(acme):
    s = Session(start_date=START, evolver=PriceEvolver(sampler=lambda: (True, 5)))
    s.start(acme)
    return s


def test_calendar_helpers():
    assert calendar.format_key(START) == "2024-02-27"
    assert calendar.format_key(datetime.datetime(2024, 2, 27, 23, 59)) == "2024-02-27"
    assert calendar.add_days(START, 3) == datetime.date(2024, 3, 1)
    assert calendar.whole_day_distance(START, datetime.date(2024, 3, 1)) == 3
    assert calendar.whole_day_distance(datetime.date(2024, 3, 1), START) == 3
    assert calendar.format_display(datetime.date(2026, 1, 5)) == "Monday, January 5, 2026"


def test_day_one(session):
    assert session.day_distance() == 1
    assert session.current_key == "2024-02-27"
    assert session.formatted_date() == "Tuesday, February 27, 2024"
    assert [s.current for s in session.current_stocks()] == ["100.00"]


def test_day_distance_after_three_advances(session):
    for _ in range(3):
        session.next_day()
    assert session.day_distance() == 4
    assert session.current_key == "2024-03-01"
    assert session.timeline.day_keys() == ["2024-02-27", "2024-02-28", "2024-02-29", "2024-03-01"]


def test_next_day_many(session):
    session.next_day(3)
    assert session.day_distance() == 4
    assert session.current_stocks()[0].current == "115.76"
    assert session.current_stocks()[0].change == (True, "15.76", "15")


def test_next_day_rejects_non_positive(session):
    with pytest.raises(ValueError):
        session.next_day(0)
    assert session.day_distance() == 1


def test_start_is_idempotent(session, raw_stocks):
    session.start(raw_stocks)
    assert [s.name for s in session.current_stocks()] == ["Acme (ACB)"]


def test_not_started():
    s = Session(start_date=START)
    assert not s.started
    with pytest.raises(SessionNotStartedError):
        s.next_day()
    with pytest.raises(SessionNotStartedError):
        s.current_stocks()


def test_default_start_date_is_today():
    s = Session()
    assert s.start_date == datetime.date.today()
    assert s.day_distance() == 1


def test_snapshot(session):
    session.next_day()
    assert session.snapshot() == {
        "day": 2,
        "date": "Wednesday, February 28, 2024",
        "key": "2024-02-28",
        "stocks": [
            {"name": "Acme (ACB)", "initial": "100.00", "current": "105.00", "change": [True, "5.00", "5"]},
        ],
    }
