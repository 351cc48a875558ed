import os
import tempfile

# keep test runs away from the real log directory and the network
os.environ.setdefault("STOCKSIM_LOG_DIR", tempfile.mkdtemp(prefix="stocksim-logs-"))
os.environ.setdefault("STOCKSIM_OFFLINE", "1")

import pytest  # noqa: E402


@pytest.fixture
def acme():
    return [{"symbol": "ACB", "name": "Acme", "price": 100.00}]


@pytest.fixture
def raw_stocks():
    return [
        {"symbol": "ACB", "name": "Acme", "price": 100.00},
        {"symbol": "GLX", "name": "Globex", "price": 42.5},
        {"symbol": "INI", "name": "Initech", "price": "7.125"},
    ]
