"""Root conftest — shared test configuration."""

import os

# Tests never reach real stores unless a fixture wires one explicitly
os.environ.setdefault("DB_TYPE", "memory")
os.environ.setdefault("CACHE_ENABLED", "false")
os.environ.setdefault("LOG_FORMAT", "text")
