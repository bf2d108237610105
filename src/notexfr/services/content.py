"""Extract user-authored rich text from Evernote note bodies.

Evernote wraps note content in an ``<en-note>`` element. Parsed as an HTML
document the envelope is ``html > body > en-note``; only the children of
``en-note`` are kept.
"""

import re
import warnings

from bs4 import BeautifulSoup, Tag, XMLParsedAsHTMLWarning

from notexfr.exceptions import ContentExtractionError, ErrorCode

CONTENT_ROOT = "en-note"

_LINE_BREAK_PATTERN = re.compile(r"<br[^>]*>")
_LIST_ITEM_PATTERN = re.compile(r"<li[^>]*>")


def extract_html_content(content: str) -> str:
    """Return the serialized children of the content root.

    Args:
        content: The raw note body, e.g. ``<en-note><div>hi</div></en-note>``.

    Returns:
        The concatenated markup of every direct child of ``en-note``.

    Raises:
        ContentExtractionError: If ``html``, ``body`` or ``en-note`` is missing.
    """
    try:
        with warnings.catch_warnings():
            # note bodies open with an XML declaration but are parsed as HTML
            warnings.filterwarnings("ignore", category=XMLParsedAsHTMLWarning)
            soup = BeautifulSoup(content, "lxml")
    except Exception as e:
        raise ContentExtractionError(
            "document", code=ErrorCode.CONTENT_PARSE_FAILED, original_error=e
        ) from e

    path = []
    node = soup
    for name in ("html", "body", CONTENT_ROOT):
        path.append(name)
        child = node.find(name, recursive=False)
        if not isinstance(child, Tag):
            raise ContentExtractionError(".".join(path))
        node = child

    return "".join(str(child) for child in node.contents)


def normalize_text(html: str) -> str:
    """Turn line breaks into blank lines and list items into newlines.

    This is lossy and is not a general HTML to text converter.
    """
    out = _LINE_BREAK_PATTERN.sub("\n\n", html)
    return _LIST_ITEM_PATTERN.sub("\n", out)


def extract_note_text(content: str) -> str:
    """Extract a note body and apply :func:`normalize_text`."""
    return normalize_text(extract_html_content(content))
