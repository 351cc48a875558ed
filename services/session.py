# services/session.py
import datetime
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from services import calendar
from services.errors import SessionNotStartedError
from services.prices import PriceEvolver, Stock
from services.timeline import Timeline

logger = logging.getLogger("stock_app")


class Session:
    """
    One interactive simulation: a timeline plus the current-day cursor.
    The cursor starts on the start date and only moves forward.
    """

    def __init__(self, start_date: Optional[datetime.date] = None, evolver: Optional[PriceEvolver] = None):
        # Use today's date if none provided
        self.start_date: datetime.date = start_date or datetime.date.today()
        self.current_date: datetime.date = self.start_date
        self.timeline = Timeline(evolver)

    @property
    def started(self) -> bool:
        return calendar.format_key(self.start_date) in self.timeline

    @property
    def current_key(self) -> str:
        return calendar.format_key(self.current_date)

    def start(self, raw_stocks: Iterable[Mapping[str, Any]]) -> None:
        """Seed day 1. A second call leaves day 1 as it was."""
        self.timeline.seed_day(calendar.format_key(self.start_date), raw_stocks)

    def next_day(self, days: int = 1) -> None:
        """Advance the cursor one day at a time, materializing each day."""
        days = int(days)
        if days < 1:
            raise ValueError("Number of days must be >= 1")
        self._require_started()

        for _ in range(days):
            next_date = calendar.add_days(self.current_date, 1)
            self.timeline.advance_day(self.current_key, calendar.format_key(next_date))
            self.current_date = next_date

    def current_stocks(self) -> List[Stock]:
        self._require_started()
        return self.timeline.get_stocks(self.current_key)

    def formatted_date(self) -> str:
        return calendar.format_display(self.current_date)

    def day_distance(self) -> int:
        """1-based day number: the start date is day 1."""
        return calendar.whole_day_distance(self.start_date, self.current_date) + 1

    def snapshot(self) -> Dict[str, Any]:
        """Current day as a JSON-serializable dict."""
        return {
            "day": self.day_distance(),
            "date": self.formatted_date(),
            "key": self.current_key,
            "stocks": [stock.to_dict() for stock in self.current_stocks()],
        }

    def _require_started(self) -> None:
        if not self.started:
            raise SessionNotStartedError("Session has no stock data yet; call start() first")
