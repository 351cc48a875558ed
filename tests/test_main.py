import datetime

import main
from services.prices import PriceEvolver, Stock
from services.session import Session


def run(monkeypatch, capsys, session, *commands):
    inputs = iter(commands)

    def fake_input(prompt):
        try:
            return next(inputs)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr("builtins.input", fake_input)
    assert main.main(session) == 0
    return capsys.readouterr().out


def make_session(acme):
    s = Session(start_date=datetime.date(2024, 1, 1), evolver=PriceEvolver(sampler=lambda: (False, 3)))
    s.start(acme)
    return s


def test_render_table():
    stocks = [
        Stock("Acme (ACB)", "100.00", "100.00", (False, "0.00", "0")),
        Stock("Globex (GLX)", "42.50", "38.25", (False, "-4.25", "-10")),
    ]
    lines = main.render_table(stocks)
    assert lines[0].split() == ["Name", "Initial", "Current", "Change"]
    assert lines[1].startswith("Acme (ACB)    100.00")
    assert lines[2].endswith("▼ -4.25 (-10%)")


def test_prices_and_next(monkeypatch, capsys, acme):
    out = run(monkeypatch, capsys, make_session(acme), "prices", "next", "prices", "day", "quit")
    assert "Acme (ACB)" in out
    assert "Advanced 1 day(s). Day 2 | Tuesday, January 2, 2024" in out
    assert "97.00" in out
    assert "▼ -3.00 (-3%)" in out
    assert "Goodbye!" in out


def test_next_n_and_days(monkeypatch, capsys, acme):
    session = make_session(acme)
    out = run(monkeypatch, capsys, session, "next 3", "days")
    assert session.day_distance() == 4
    assert "Day 4: 2024-01-04" in out
    assert "Exiting simulator." in out


def test_bad_commands(monkeypatch, capsys, acme):
    session = make_session(acme)
    out = run(monkeypatch, capsys, session, "next x", "next 0", "bogus", "history")
    assert "Usage: next N" in out
    assert "Number of days must be >= 1" in out
    assert "Unknown command" in out
    assert "Usage: history NAME" in out
    assert session.day_distance() == 1


def test_history(monkeypatch, capsys, acme):
    out = run(monkeypatch, capsys, make_session(acme), "next", "history Acme (ACB)", "history Nope")
    assert "2024-01-01  100.00" in out
    assert "2024-01-02  97.00" in out
    assert "Error: Unknown stock: Nope" in out
