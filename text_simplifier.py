"""Whitespace normalization and narrow boilerplate removal for extracted article text."""

import re

_SPACES_RE = re.compile(r"[ \t]+")
_LINE_EDGE_SPACES_RE = re.compile(r" ?\n ?")
_BLANK_LINES_RE = re.compile(r"\n{3,}")
_DISQUS_PREFIX_RE = re.compile(
    r"^(please enable javascript to view the comments powered by disqus\.)", re.IGNORECASE
)
_BOILERPLATE_RE = re.compile(
    r"\b(advertisement|sponsored content|click here to subscribe)\b", re.IGNORECASE
)


def simplify_content(text: str) -> str:
    """
    Collapse spaces/tabs, cap blank-line runs at one empty line, trim, then drop a
    leading Disqus notice and standalone ad phrases. Only literal phrases are removed so
    article text that merely mentions similar words is kept.
    """
    simplified = _SPACES_RE.sub(" ", text or "")
    # a space left at either side of a line break goes too
    simplified = _LINE_EDGE_SPACES_RE.sub("\n", simplified)
    simplified = _BLANK_LINES_RE.sub("\n\n", simplified)
    simplified = simplified.strip()

    simplified = _DISQUS_PREFIX_RE.sub("", simplified)
    simplified = _BOILERPLATE_RE.sub("", simplified)
    # Removed phrases may leave double spaces; only blank-line runs are capped again.
    simplified = _BLANK_LINES_RE.sub("\n\n", simplified)
    return simplified
