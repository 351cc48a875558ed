# config.py
import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent

APP_TITLE = "Stock Simulator"

# -----------------------
# Feed
# -----------------------
STOCKS_URL = os.environ.get("STOCKSIM_STOCKS_URL", "https://staging-api.brainbase.com/stocks.php")
FETCH_TIMEOUT = float(os.environ.get("STOCKSIM_FETCH_TIMEOUT", "10"))
FETCH_RETRIES = int(os.environ.get("STOCKSIM_FETCH_RETRIES", "2"))
OFFLINE = os.environ.get("STOCKSIM_OFFLINE", "").strip().lower() in ("1", "true", "yes")

# -----------------------
# Simulation
# -----------------------
_seed = os.environ.get("STOCKSIM_SEED", "").strip()
RANDOM_SEED = int(_seed) if _seed else None
MAX_ADVANCE_DAYS = 3650

# -----------------------
# Server
# -----------------------
HOST = os.environ.get("STOCKSIM_HOST", "127.0.0.1")
PORT = int(os.environ.get("STOCKSIM_PORT", "5001"))

# -----------------------
# Logging
# -----------------------
LOG_DIR = Path(os.environ.get("STOCKSIM_LOG_DIR", str(BASE_DIR / "logs")))
LOG_FILE = LOG_DIR / "simulator.log"
LOGGER_NAME = "stock_app"


def get_logger() -> logging.Logger:
    """Return the shared logger, attaching the rotating file handler once."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.INFO)

    # Avoid adding multiple handlers on reloads
    if not logger.handlers:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            filename=str(LOG_FILE),
            maxBytes=3_000_000,
            backupCount=3
        )
        handler.setFormatter(logging.Formatter("%(asctime)s  %(levelname)s  %(message)s"))
        logger.addHandler(handler)
    return logger
