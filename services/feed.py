# services/feed.py
import logging
from typing import Any, Dict, List, Optional

import requests

import config
from services.errors import FeedError

logger = logging.getLogger("stock_app")

# Offline stand-in for the stock API.
DEFAULT_STOCKS: List[Dict[str, Any]] = [
    {"symbol": "ABC", "name": "Alpha Beta Corp", "price": 100.0},
    {"symbol": "XYZ", "name": "Xylo Industries", "price": 50.0},
    {"symbol": "FOO", "name": "Foo Holdings", "price": 200.0},
    {"symbol": "BAR", "name": "Bar Group", "price": 10.0},
]


def fetch_stocks(
    url: Optional[str] = None,
    session: Optional[requests.Session] = None,
    timeout: Optional[float] = None,
    retries: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """
    GET the initial [{symbol, name, price}] list.
    Transport errors are retried `retries` more times before FeedError.
    """
    url = url or config.STOCKS_URL
    timeout = config.FETCH_TIMEOUT if timeout is None else timeout
    retries = config.FETCH_RETRIES if retries is None else max(0, int(retries))
    http = session or requests.Session()

    last_error: Optional[Exception] = None
    for attempt in range(1, retries + 2):
        try:
            response = http.get(url, timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            last_error = exc
            logger.warning(f"FETCH attempt {attempt} failed for {url}: {exc}")
            continue

        try:
            payload = response.json()
        except ValueError as exc:
            raise FeedError(f"Stock feed returned invalid JSON: {exc}") from exc

        if not isinstance(payload, list):
            raise FeedError(f"Stock feed must return a list, got {type(payload).__name__}")
        logger.info(f"FETCH {url} stocks={len(payload)} attempt={attempt}")
        return payload

    raise FeedError(f"Could not fetch stocks from {url}: {last_error}") from last_error


def load_initial_stocks(offline: Optional[bool] = None) -> List[Dict[str, Any]]:
    """Day-1 raw stocks, from the network unless running offline."""
    offline = config.OFFLINE if offline is None else offline
    if offline:
        logger.info("FETCH skipped, using offline stock list")
        return [dict(stock) for stock in DEFAULT_STOCKS]
    return fetch_stocks()
