"""Configuration and settings."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Paths
PROJECT_ROOT = Path(__file__).resolve().parent.parent
OUTPUT_DIR = Path(os.getenv("STOCKSYNC_OUTPUT_DIR", str(PROJECT_ROOT / "output")))

# Backend API
API_BASE_URL = os.getenv("STOCKSYNC_API_BASE_URL", "https://localhost:7232/api").rstrip("/")
# The development backend serves a self-signed certificate on localhost
API_VERIFY_TLS = os.getenv("API_VERIFY_TLS", "true").lower() == "true"
API_TIMEOUT_SECONDS = float(os.getenv("API_TIMEOUT_SECONDS", "30.0"))

# Credential resolution (token written by login may lag behind the first read)
CREDENTIAL_MAX_RETRIES = int(os.getenv("CREDENTIAL_MAX_RETRIES", "3"))
CREDENTIAL_RETRY_DELAY = float(os.getenv("CREDENTIAL_RETRY_DELAY", "0.5"))

# Stock alert badge polling
ALERT_POLL_INTERVAL_SECONDS = float(os.getenv("ALERT_POLL_INTERVAL_SECONDS", "300"))

# Client-side session storage (authToken + user)
SESSION_STORE_PATH = Path(
    os.getenv("SESSION_STORE_PATH", str(Path.home() / ".stocksync" / "session.json"))
)

# Reports
REPORT_EXPORT_PATH = Path(os.getenv("REPORT_EXPORT_PATH", "StockSync_Reports.xlsx"))
TOP_SELLING_COUNT = int(os.getenv("TOP_SELLING_COUNT", "10"))

# OpenAI / stock prediction
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
PREDICTION_MODEL = os.getenv("PREDICTION_MODEL", "openai:gpt-4o-mini")

# Logging
LOG_DIR = OUTPUT_DIR / "logs"
LOG_FILE = LOG_DIR / "app.jsonl"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
VERBOSE_LOGGING = os.getenv("VERBOSE_LOGGING", "false").lower() == "true"

# Tracing (OTLP over HTTP)
TRACING_ENABLED = os.getenv("TRACING_ENABLED", "false").lower() == "true"
OTLP_ENDPOINT = os.getenv("OTLP_ENDPOINT", "http://localhost:6006/v1/traces")
SERVICE_NAME = os.getenv("SERVICE_NAME", "stocksync-client")
