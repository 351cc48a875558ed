# services/errors.py


class SimulatorError(Exception):
    """Base class for every error raised by the simulator."""


class MalformedInputError(SimulatorError, ValueError):
    """Raw stock data could not be turned into a Stock."""


class DayNotFoundError(SimulatorError, KeyError):
    """The requested day-key was never seeded or advanced into."""

    def __init__(self, day_key: str):
        super().__init__(day_key)
        self.day_key = day_key

    def __str__(self) -> str:
        return f"Day not found: {self.day_key}"


class StockNotFoundError(SimulatorError, KeyError):
    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown stock: {self.name}"


class DivisionByZeroError(SimulatorError, ZeroDivisionError):
    """Change computed against a zero baseline price."""


class SessionNotStartedError(SimulatorError, RuntimeError):
    pass


class FeedError(SimulatorError):
    """The initial stock list could not be fetched."""
