# src/scrapers/redirect.py

"""Unwrap ad-tracking redirect links into direct detail-page URLs."""

import re
from urllib.parse import unquote_plus, urlparse

REDIRECT_MARKER = "r="

# '%' not followed by two hex digits
_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class RedirectDecodeError(ValueError):
    """A redirect-wrapped link could not be turned into a URL."""


def has_redirect_marker(link: str) -> bool:
    return REDIRECT_MARKER in link


def is_absolute_url(url: str) -> bool:
    """True when *url* carries both a scheme and a host."""
    parts = urlparse(url)
    return bool(parts.scheme and parts.netloc)


def decode_detail_url(link: str) -> str:
    """Return the navigable destination of a listing link.

    Links without the ``r=`` marker are returned unchanged. Otherwise
    everything after the first marker is query-unescaped (``+`` becomes
    a space) and must yield an absolute URL.

    Raises:
        RedirectDecodeError: On malformed escapes or a target that is
            not an absolute URL.
    """
    index = link.find(REDIRECT_MARKER)
    if index == -1:
        return link

    wrapped = link[index + len(REDIRECT_MARKER):]
    if _MALFORMED_ESCAPE.search(wrapped):
        msg = f"Malformed percent-escape in redirect link: {link}"
        raise RedirectDecodeError(msg)

    try:
        decoded = unquote_plus(wrapped, errors="strict")
    except UnicodeDecodeError as exc:
        msg = f"Redirect target is not valid UTF-8: {link}"
        raise RedirectDecodeError(msg) from exc

    if not is_absolute_url(decoded):
        msg = f"Redirect target is not an absolute URL: {decoded!r}"
        raise RedirectDecodeError(msg)
    return decoded
