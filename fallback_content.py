"""Placeholder content returned when the extraction backend can't give us real text. No I/O."""

import logging
import re
from urllib.parse import unquote, urlparse

from models import ExtractionResult

logger = logging.getLogger(__name__)

WIKIPEDIA_MARKER = "wikipedia.org/wiki/"
DEFAULT_WIKIPEDIA_TITLE = "Wikipedia Article"
UNKNOWN_HOST_LABEL = "unknown source"

_WIKI_TITLE_RE = re.compile(r"/wiki/([^#?]+)")

WIKIPEDIA_TEMPLATE = """This is a Wikipedia article about "{title}". The content extraction system is currently experiencing technical difficulties, but you can still practice your speed reading with this simulated content.

Wikipedia is a free online encyclopedia that contains millions of articles on various topics. The article you're trying to read likely contains detailed information about {title}, including its history, significance, and related topics.

This simulated content allows you to test the reading interface while we work on resolving the content extraction issues. You can adjust the reading speed, practice different techniques, and familiarize yourself with the reader controls.

Once the technical issues are resolved, you'll be able to extract and read the actual content from websites and documents seamlessly."""

GENERIC_TEMPLATE = """Content extraction is currently experiencing technical difficulties. This simulated content allows you to test the speed reading interface while we work on resolving the issues.

The website you're trying to read ({domain}) likely contains interesting articles and information. Our system typically extracts the main content from web pages, removing navigation menus, advertisements, and other distractions to provide a clean reading experience.

You can use this simulated content to:
- Test different reading speeds
- Practice speed reading techniques
- Familiarize yourself with the reader controls
- Adjust settings to your preference

Once the technical issues are resolved, you'll be able to extract actual content from any website or upload your own documents for speed reading practice."""


def wikipedia_title(url: str) -> str:
    """Article title from a /wiki/ path: percent-decoded, underscores as spaces."""
    m = _WIKI_TITLE_RE.search(url)
    if not m:
        return DEFAULT_WIKIPEDIA_TITLE
    title = unquote(m.group(1)).replace("_", " ")
    return title or DEFAULT_WIKIPEDIA_TITLE


def hostname_label(url: str) -> str:
    """Hostname of url, or a best-effort label when it can't be parsed."""
    try:
        host = urlparse(url).hostname
    except ValueError:
        # e.g. unbalanced [ in an IPv6 netloc
        host = None
    return host or UNKNOWN_HOST_LABEL


def extract_content_fallback(url: str) -> ExtractionResult:
    """
    Deterministic placeholder keyed on URL shape (Wikipedia article vs anything else).
    Never raises; source_url is always the url passed in.
    """
    url = url or ""
    logger.info("Using fallback content for %s", url)

    if WIKIPEDIA_MARKER in url:
        title = wikipedia_title(url)
        return ExtractionResult(
            content=WIKIPEDIA_TEMPLATE.format(title=title),
            title=title,
            source_url=url,
        )

    domain = hostname_label(url)
    return ExtractionResult(
        content=GENERIC_TEMPLATE.format(domain=domain),
        title=f"Content from {domain}",
        source_url=url,
    )
