# services/timeline.py
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from services.errors import DayNotFoundError, StockNotFoundError
from services.prices import PriceEvolver, Stock

logger = logging.getLogger("stock_app")


class Timeline:
    """
    Day-keyed store of stock snapshots.

    Keys are opaque day identifiers handed in by the caller. A key is
    written once and never overwritten, and every snapshot keeps the
    stock order of day 1.
    """

    def __init__(self, evolver: Optional[PriceEvolver] = None):
        self.evolver: PriceEvolver = evolver or PriceEvolver()
        self.days: Dict[str, List[Stock]] = {}

    def __contains__(self, day_key: str) -> bool:
        return day_key in self.days

    def __len__(self) -> int:
        return len(self.days)

    def seed_day(self, day_key: str, raw_stocks: Iterable[Mapping[str, Any]]) -> None:
        """
        Store the day-1 snapshot built from raw {symbol, name, price} records.
        Does nothing if day_key is already present.
        """
        if day_key in self.days:
            logger.debug(f"SEED skipped, {day_key} already present")
            return
        # build everything first so a bad record leaves nothing behind
        stocks = [Stock.from_raw(record) for record in raw_stocks]
        self.days[day_key] = stocks
        logger.info(f"SEED day={day_key} stocks={len(stocks)}")

    def advance_day(self, current_key: str, next_key: str) -> None:
        """
        Materialize next_key from current_key. Re-advancing into a day
        that already exists keeps its prices.
        """
        current = self.get_stocks(current_key)
        if next_key in self.days:
            logger.debug(f"ADVANCE skipped, {next_key} already present")
            return
        evolved = [self.evolver.evolve(stock) for stock in current]
        # first writer wins if another advance landed meanwhile
        self.days.setdefault(next_key, evolved)
        logger.info(f"ADVANCE {current_key} -> {next_key}")

    def get_stocks(self, day_key: str) -> List[Stock]:
        """Return the snapshot for day_key."""
        try:
            return list(self.days[day_key])
        except KeyError:
            raise DayNotFoundError(day_key) from None

    def day_keys(self) -> List[str]:
        """Visited day-keys, oldest first."""
        return list(self.days)

    def price_history(self, name: str) -> List[Tuple[str, str]]:
        """(day_key, current) pairs for one stock across every visited day."""
        history = []
        for day_key, stocks in self.days.items():
            for stock in stocks:
                if stock.name == name:
                    history.append((day_key, stock.current))
                    break
        if not history:
            raise StockNotFoundError(name)
        return history
