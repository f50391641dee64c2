"""Small pure helpers: cookie header parsing and score averaging."""

from collections.abc import Iterable

from typing_api.config import settings


def parse_cookie_header(header: str | None) -> dict[str, str]:
    """Split a raw Cookie header ("a=1; b=2") into a name -> value dict."""
    cookies: dict[str, str] = {}
    if not header:
        return cookies
    for part in header.split("; "):
        name, _, value = part.partition("=")
        if name:
            cookies[name] = value
    return cookies


def has_session_cookie(header: str | None) -> bool:
    """True if the raw Cookie header carries the session cookie. Missing header -> False."""
    return settings.session_cookie_name in parse_cookie_header(header)


def calculate_average(values: Iterable[float] | None) -> float:
    """Mean of values rounded to 2 decimals; 0 for no values."""
    data = list(values or [])
    if not data:
        return 0.0
    return round(sum(data) / len(data), 2)
