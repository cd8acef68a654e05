"""Configuration for the content extraction client."""

import os

# Extraction backend (POST {API_BASE}/scrape). Read once at import time.
API_BASE = os.environ.get("CONTENT_API_URL", "")
SCRAPE_ENDPOINT = "/scrape"
SCRAPE_TIMEOUT_SECONDS = 30
# Streamed body read size; the 30s budget covers the whole request, body included
READ_CHUNK_BYTES = 8192

# Used when the backend returns text without a title
DEFAULT_EXTRACTED_TITLE = "Extracted Content"

# How much of a raw response body to include in debug logs
RESPONSE_PREVIEW_CHARS = 500

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
