"""
JSON API for the stock simulator.
- Uses port 5001 by default
- CORS enabled
- JSON shape:
  - success: { success: true, message, ...data_fields }
  - error:   { success: false, error, ...optional_fields }

One simulation session lives in the process. It is created on the first
request that needs it (fetching the day-1 stocks) and replaced on reset.
"""

import threading

from flask import Flask, jsonify, request
from flask_cors import CORS

import config
from services.errors import (
    DayNotFoundError,
    FeedError,
    MalformedInputError,
    SimulatorError,
    StockNotFoundError,
)
from services.feed import load_initial_stocks
from services.prices import PriceEvolver
from services.session import Session

app = Flask(__name__)
CORS(app)

logger = config.get_logger()


@app.before_request
def log_request():
    try:
        body = request.get_data(as_text=True)
    except Exception:
        body = ""
    logger.info(f"REQ {request.remote_addr} {request.method} {request.path} body={body}")


# -----------------------
# Global session
# -----------------------
# Every read or change of the session happens under session_lock; the
# dev server handles requests on several threads.
session = None
session_lock = threading.RLock()


def new_session() -> Session:
    s = Session(evolver=PriceEvolver(seed=config.RANDOM_SEED))
    s.start(load_initial_stocks())
    return s


def get_session() -> Session:
    global session
    with session_lock:
        if session is None:
            session = new_session()
            logger.info(f"SESSION started date={session.current_key}")
        return session


# -----------------------
# Helper functions
# -----------------------
def resp_ok(message="ok", data=None, status=200):
    payload = {"success": True, "message": message}
    if isinstance(data, dict):
        payload.update(data)
    return jsonify(payload), status


def resp_err(message="error", status=400, data=None):
    payload = {"success": False, "error": message}
    if isinstance(data, dict):
        payload.update(data)
    return jsonify(payload), status


def read_json_request(require_json=False):
    j = request.get_json(silent=True)
    if require_json and j is None:
        return None, resp_err("Request body must be valid JSON", 400)
    if j is not None and not isinstance(j, dict):
        return None, resp_err("Request body must be a JSON object", 400)
    return j or {}, None


def parse_days(value):
    """Whole number of days from JSON or a query string, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


# -----------------------
# API endpoints
# -----------------------
@app.route("/", methods=["GET"])
def root():
    return resp_ok(
        f"{config.APP_TITLE} API running. Visit /api/day",
        {"routes": ["/api/day", "/api/next", "/api/days", "/api/history/<name>", "/api/reset"]},
    )


@app.route("/api/day", methods=["GET"])
def api_day():
    with session_lock:
        snapshot = get_session().snapshot()
    return resp_ok("current day", dict(title=config.APP_TITLE, **snapshot))


@app.route("/api/next", methods=["POST"])
def api_next():
    j, err = read_json_request(require_json=False)
    if err:
        return err

    days = parse_days(j.get("days", request.args.get("days", 1)))
    if days is None:
        return resp_err("days must be an integer", 400)
    if days < 1:
        return resp_err("days must be >= 1", 400)
    if days > config.MAX_ADVANCE_DAYS:
        return resp_err(f"days too large (max {config.MAX_ADVANCE_DAYS})", 400)

    with session_lock:
        s = get_session()
        s.next_day(days)
        logger.info(f"NEXT days={days} day={s.day_distance()} key={s.current_key}")
        snapshot = s.snapshot()
    return resp_ok(f"Advanced {days} day(s)", snapshot)


@app.route("/api/days", methods=["GET"])
def api_days():
    with session_lock:
        s = get_session()
        data = {"days": s.timeline.day_keys(), "current": s.current_key}
    return resp_ok("visited days", data)


@app.route("/api/days/<string:day_key>", methods=["GET"])
def api_day_by_key(day_key):
    with session_lock:
        stocks = get_session().timeline.get_stocks(day_key)
    return resp_ok("day", {"key": day_key, "stocks": [stock.to_dict() for stock in stocks]})


@app.route("/api/history/<path:name>", methods=["GET"])
def api_history(name):
    with session_lock:
        history = get_session().timeline.price_history(name)
    return resp_ok(
        "price history",
        {"name": name, "days": [key for key, _ in history], "prices": [price for _, price in history]},
    )


@app.route("/api/reset", methods=["POST"])
def api_reset():
    global session
    with session_lock:
        session = new_session()
        logger.info(f"RESET performed; date={session.current_key}")
        snapshot = session.snapshot()
    return resp_ok("reset complete", snapshot)


# -----------------------
# Error handlers
# -----------------------
@app.errorhandler(DayNotFoundError)
@app.errorhandler(StockNotFoundError)
def handle_not_found(e):
    return resp_err(str(e), 404)


@app.errorhandler(FeedError)
def handle_feed_error(e):
    logger.exception("Stock feed failed")
    return resp_err(f"Could not load stocks: {e}", 502)


@app.errorhandler(MalformedInputError)
def handle_malformed(e):
    logger.exception("Malformed stock data")
    return resp_err(f"Malformed stock data: {e}", 502)


@app.errorhandler(SimulatorError)
def handle_simulator_error(e):
    logger.exception("Simulation failed")
    return resp_err(f"Simulation failed: {e}", 500)


@app.errorhandler(404)
def handle_404(e):
    return resp_err("Not found", 404)


@app.errorhandler(500)
def handle_500(e):
    return resp_err("Server error", 500)


# -----------------------
# Run server
# -----------------------
if __name__ == "__main__":
    print(f"Starting app on http://{config.HOST}:{config.PORT}")
    app.run(host=config.HOST, port=config.PORT, debug=True)
