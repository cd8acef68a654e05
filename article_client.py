"""
Client for the content extraction backend (POST {API_BASE}/scrape).

Ordinary failures (timeouts, connection errors, HTML error pages, bad JSON, empty text,
non-2xx statuses) never reach the caller: they are answered with placeholder content
from fallback_content. The one exception is anti-scraping protection, which the caller
needs to see so it can offer an upgrade instead.
"""

import json
import logging
import socket
import threading
import time

import requests

from config import (
    API_BASE,
    SCRAPE_ENDPOINT,
    SCRAPE_TIMEOUT_SECONDS,
    DEFAULT_EXTRACTED_TITLE,
    RESPONSE_PREVIEW_CHARS,
    READ_CHUNK_BYTES,
)
from fallback_content import extract_content_fallback
from models import (
    ExtractionOutcome,
    ExtractionRequest,
    ExtractionResult,
    Extracted,
    Protected,
    ProtectionDetails,
    ProtectionError,
)
from text_simplifier import simplify_content

logger = logging.getLogger(__name__)

ANTI_SCRAPING_ERROR = "anti_scraping_protection"
HTML_MARKERS = ("<!doctype", "<html")
JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


def _parse_json(body: str):
    """Parsed JSON, or None if body isn't valid JSON."""
    try:
        return json.loads(body)
    except (json.JSONDecodeError, TypeError):
        return None


def _abort_read(resp: requests.Response, expired: threading.Event) -> None:
    """Wake a blocked body read by shutting the socket down under it."""
    expired.set()
    sock = getattr(getattr(resp.raw, "connection", None), "sock", None)
    if sock is None:
        return
    try:
        sock.shutdown(socket.SHUT_RDWR)
    except OSError:
        # already closed by the reader
        logger.debug("Socket already closed when read deadline passed")


def _looks_like_html(body: str) -> bool:
    return (body or "").strip().lower().startswith(HTML_MARKERS)


def classify_response(status_code: int, body: str) -> tuple[ExtractionOutcome, dict | None]:
    """
    Decide what a backend response means. Returns (outcome, payload) where payload is the
    decoded JSON object when there is one. Success bodies are checked for an HTML page
    before any JSON parsing.
    """
    if not 200 <= status_code < 300:
        data = _parse_json(body)
        if not isinstance(data, dict):
            return ExtractionOutcome.SERVER_ERROR, None
        if data.get("error") == ANTI_SCRAPING_ERROR:
            return ExtractionOutcome.PROTECTED, data
        return ExtractionOutcome.SERVER_ERROR, data

    if _looks_like_html(body):
        return ExtractionOutcome.MALFORMED_RESPONSE, None

    data = _parse_json(body)
    if not isinstance(data, dict):
        return ExtractionOutcome.MALFORMED_RESPONSE, None

    text = data.get("text")
    if not isinstance(text, str) or not text.strip():
        return ExtractionOutcome.MALFORMED_RESPONSE, data

    return ExtractionOutcome.SUCCESS, data


class ArticleClient:
    """One backend endpoint, one POST per call. No retries, no caching, no shared state."""

    def __init__(self, api_base: str, timeout: float = SCRAPE_TIMEOUT_SECONDS):
        self.api_base = api_base
        self.timeout = timeout
        self.endpoint = f"{(api_base or '').rstrip('/')}{SCRAPE_ENDPOINT}"

    def fetch(self, request: ExtractionRequest) -> Extracted | Protected:
        """
        Run the request and return a tagged result: Extracted (real or fallback content,
        see .outcome) or Protected (site blocks extraction). Does not raise.
        """
        url = request.url
        logger.info("Extracting content from %s via %s", url, self.endpoint)
        logger.debug("user_id=%s increment_usage=%s", request.user_id, request.increment_usage)

        deadline = time.monotonic() + self.timeout
        try:
            with requests.post(
                self.endpoint,
                json=request.to_payload(),
                headers=JSON_HEADERS,
                timeout=self.timeout,
                stream=True,
            ) as resp:
                status = resp.status_code
                body = self._read_body(resp, deadline)
        except ProtectionError:
            raise
        except requests.Timeout:
            body = None
        except Exception as e:
            logger.error("Request failed for %s: %s", url, e)
            return self._fallback(url, ExtractionOutcome.NETWORK_FAILURE)

        if body is None:
            logger.warning("Request timed out after %ss for %s", self.timeout, url)
            return self._fallback(url, ExtractionOutcome.TIMED_OUT)

        logger.debug("Response %s, body: %s", status, body[:RESPONSE_PREVIEW_CHARS])
        if status != 200:
            logger.info("Non-200 status %s for %s", status, url)

        outcome, data = classify_response(status, body)

        if outcome is ExtractionOutcome.PROTECTED:
            details = ProtectionDetails.from_payload(data)
            logger.info("Anti-scraping protection (%s) for %s", details.protection_type, url)
            return Protected(details)

        if outcome is not ExtractionOutcome.SUCCESS:
            return self._fallback(url, outcome)

        text = data["text"]
        logger.info("Extracted %d characters from %s", len(text), url)
        return Extracted(
            ExtractionResult(
                content=simplify_content(text),
                title=data.get("title") or DEFAULT_EXTRACTED_TITLE,
                source_url=url,
            )
        )

    def extract(self, request: ExtractionRequest) -> ExtractionResult:
        """Same as fetch() but returns the result directly. Raises ProtectionError for protected sites."""
        result = self.fetch(request)
        if isinstance(result, Protected):
            raise ProtectionError.from_details(result.details)
        return result.result

    def _read_body(self, resp: requests.Response, deadline: float) -> str | None:
        """
        Read the streamed body within what is left of the request's time budget.
        Returns None when the deadline passes first; the connection is shut down so a
        backend trickling bytes can't hold the call open.
        """
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            return None

        sock = getattr(getattr(resp.raw, "connection", None), "sock", None)
        if sock is not None:
            sock.settimeout(remaining)

        expired = threading.Event()
        watchdog = threading.Timer(remaining, _abort_read, args=(resp, expired))
        watchdog.daemon = True
        watchdog.start()

        chunks = []
        try:
            for chunk in resp.iter_content(chunk_size=READ_CHUNK_BYTES):
                if expired.is_set() or time.monotonic() >= deadline:
                    return None
                chunks.append(chunk)
        except Exception:
            if expired.is_set() or time.monotonic() >= deadline:
                return None
            raise
        finally:
            watchdog.cancel()

        if expired.is_set():
            return None
        return b"".join(chunks).decode(resp.encoding or "utf-8", errors="replace")

    def _fallback(self, url: str, outcome: ExtractionOutcome) -> Extracted:
        logger.warning("Extraction for %s ended as %s, using fallback", url, outcome.value)
        return Extracted(extract_content_fallback(url), outcome)


def extract_content_from_url(
    url: str,
    user_id: str | None = None,
    increment_usage: bool = True,
    api_base: str | None = None,
) -> ExtractionResult:
    """
    Extract article text for url. Always returns content (placeholder text if the backend
    fails). Raises ProtectionError if the site is protected from scraping.
    increment_usage=False when re-opening content from history so usage isn't counted again.
    """
    client = ArticleClient(API_BASE if api_base is None else api_base)
    return client.extract(ExtractionRequest(url, user_id, increment_usage))
