# services/prices.py
import math
import random
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_EVEN
from typing import Any, Callable, Dict, Mapping, NamedTuple, Optional, Tuple

from services.errors import DivisionByZeroError, MalformedInputError

CENTS = Decimal("0.01")

# Every day moves: a zero fluctuation is never drawn.
MIN_PERCENT = 1
MAX_PERCENT = 10

# A sampler returns one (rise, percent) draw per call.
Sampler = Callable[[], Tuple[bool, int]]


class Change(NamedTuple):
    is_up: bool
    absolute: str
    percent: str


def parse_price(value: Any) -> Decimal:
    """
    Turn a raw price (number or numeric string) into a Decimal.
    Raises MalformedInputError for missing, non-numeric, non-finite
    or negative values.
    """
    if value is None or isinstance(value, bool):
        raise MalformedInputError(f"Price must be a number, got {value!r}")
    try:
        price = Decimal(str(value))
    except InvalidOperation:
        raise MalformedInputError(f"Price must be a number, got {value!r}") from None
    if not price.is_finite():
        raise MalformedInputError(f"Price must be finite, got {value!r}")
    if price < 0:
        raise MalformedInputError(f"Price must not be negative, got {value!r}")
    return price


def format_price(value: Decimal) -> str:
    """Render with exactly two fractional digits (half-even rounding)."""
    return str(value.quantize(CENTS, rounding=ROUND_HALF_EVEN))


def random_sampler(rng: Optional[random.Random] = None) -> Sampler:
    """
    Build a sampler drawing a direction (up/down, equal odds) and an
    integer percentage in MIN_PERCENT..MAX_PERCENT from rng.
    """
    rng = rng or random.Random()

    def sample() -> Tuple[bool, int]:
        return rng.choice((True, False)), rng.randint(MIN_PERCENT, MAX_PERCENT)

    return sample


def fluctuate(price: Decimal, sampler: Sampler) -> Decimal:
    """Move price up or down by the percentage drawn from sampler."""
    rise, percent = sampler()
    if not MIN_PERCENT <= percent <= MAX_PERCENT:
        raise ValueError(f"Fluctuation must be within {MIN_PERCENT}..{MAX_PERCENT}%, got {percent}")
    delta = Decimal(percent) / 100 * price
    return price + delta if rise else price - delta


def compute_change(initial: Decimal, current: Decimal) -> Change:
    """
    Change of current against the initial (day-1) price.

    The absolute delta keeps two digits; the percentage is floored
    toward negative infinity, so -2.9% reads as -3.
    """
    if initial == 0:
        raise DivisionByZeroError("Cannot compute change against a zero initial price")
    delta = current - initial
    absolute = delta.quantize(CENTS, rounding=ROUND_HALF_EVEN)
    if absolute.is_zero():
        # "-0.00" -> "0.00"
        absolute = abs(absolute)
    percent = math.floor(delta / initial * 100)
    return Change(current > initial, str(absolute), str(percent))


@dataclass(frozen=True)
class Stock:
    """
    One stock on one day. A new Stock is built for every day;
    name and initial never change across days.
    """

    name: str
    initial: str
    current: str
    change: Change

    @classmethod
    def from_raw(cls, record: Mapping[str, Any]) -> "Stock":
        """Build the day-1 Stock from a {symbol, name, price} record."""
        if not isinstance(record, Mapping):
            raise MalformedInputError(f"Stock record must be a mapping, got {record!r}")
        name = record.get("name")
        symbol = record.get("symbol")
        if not name or not symbol:
            raise MalformedInputError(f"Stock record needs a name and a symbol: {record!r}")

        raw = parse_price(record.get("price"))
        price = format_price(raw)
        value = Decimal(price)
        if raw > 0 and value == 0:
            raise MalformedInputError(f"Price {record.get('price')!r} rounds to 0.00")
        return cls(
            name=f"{name} ({symbol})",
            initial=price,
            current=price,
            change=compute_change(value, value),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "initial": self.initial,
            "current": self.current,
            "change": list(self.change),
        }


def evolve_stock(stock: Stock, sampler: Sampler) -> Stock:
    """Derive the next day's Stock from this one."""
    new_value = fluctuate(parse_price(stock.current), sampler)
    return Stock(
        name=stock.name,
        initial=stock.initial,
        current=format_price(new_value),
        change=compute_change(parse_price(stock.initial), new_value),
    )


class PriceEvolver:
    """
    Applies one bounded random fluctuation per stock per day.
    Pass a sampler to force moves, or a seed for a reproducible walk.
    """

    def __init__(self, sampler: Optional[Sampler] = None, seed: Optional[int] = None):
        self.sampler: Sampler = sampler or random_sampler(random.Random(seed))

    def fluctuate(self, price: Decimal) -> Decimal:
        return fluctuate(price, self.sampler)

    def evolve(self, stock: Stock) -> Stock:
        return evolve_stock(stock, self.sampler)
