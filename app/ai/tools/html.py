"""
Post-processing for generated HTML.

Models often wrap their answer in a markdown code fence:

    ```html
    <div>...</div>
    ```

strip_code_fences() removes the outer fence; ensure_html() rejects text
that doesn't look like HTML at all.
"""

import re

from app.ai.errors import InvalidGeneratedContent

# Opening fence, optionally tagged html, and the newline after it
_OPENING_HTML_FENCE = re.compile(r"^```html\n?", re.IGNORECASE)
_OPENING_FENCE = re.compile(r"^```\n?")
_CLOSING_FENCE = re.compile(r"\n?```$")

HTML_MARKERS = ("<html", "<div")


def strip_code_fences(content: str) -> str:
    """
    Remove a leading ```/```html fence and a trailing ``` fence.

    Surrounding whitespace is trimmed first; inner content is left untouched.
    """
    cleaned = content.strip()
    cleaned = _OPENING_HTML_FENCE.sub("", cleaned, count=1)
    cleaned = _OPENING_FENCE.sub("", cleaned, count=1)
    cleaned = _CLOSING_FENCE.sub("", cleaned, count=1)
    return cleaned


def looks_like_html(content: str) -> bool:
    """
    True when the text contains "<html" or "<div".

    Matched case-sensitively: "<DIV>" alone is not accepted.
    """
    return any(marker in content for marker in HTML_MARKERS)


def ensure_html(content: str) -> str:
    """
    Clean generated text and validate it as HTML.

    Raises:
        InvalidGeneratedContent: no <html or <div marker after cleaning
    """
    cleaned = strip_code_fences(content)
    if not looks_like_html(cleaned):
        raise InvalidGeneratedContent()
    return cleaned
