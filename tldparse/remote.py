"""tldparse helpers for pulling a hostname out of a URL and classifying it."""

from __future__ import annotations

import ipaddress
import re
from urllib.parse import scheme_chars

IP_RE = re.compile(
    r"(?:(?:[0-9]|[1-9][0-9]|1[0-9]{2}|2[0-4][0-9]|25[0-5])\.){3}"
    r"(?:[0-9]|[1-9][0-9]|1[0-9]{2}|2[0-4][0-9]|25[0-5])",
    re.ASCII,
)

LABEL_RE = re.compile(r"[a-zA-Z0-9_\-\u0080-\U0010ffff]{1,63}")

MAX_HOSTNAME_LENGTH = 255
MIN_NUM_IPV6_CHARS = 4

UNICODE_DOTS = ("。", "．", "｡")

scheme_chars_set = set(scheme_chars)


def lenient_netloc(url: str) -> str:
    """Extract the netloc of a URL-like string, minus userinfo and port.

    Similar to the netloc attribute returned by
    urllib.parse.{urlparse,urlsplit}, but extract more leniently, without
    raising errors. IPv6 brackets are kept.
    """
    after_userinfo = (
        _schemeless_url(url)
        .partition("/")[0]
        .partition("?")[0]
        .partition("#")[0]
        .rpartition("@")[-1]
    )

    if after_userinfo.startswith("["):
        maybe_ipv6 = after_userinfo.partition("]")
        if maybe_ipv6[1]:
            return maybe_ipv6[0] + "]"

    hostname = after_userinfo.partition(":")[0].strip()
    for dot in UNICODE_DOTS:
        hostname = hostname.replace(dot, ".")
    return hostname.rstrip(".")


def _schemeless_url(url: str) -> str:
    double_slashes_start = url.find("//")
    if double_slashes_start == 0:
        return url[2:]
    if (
        double_slashes_start < 2
        or url[double_slashes_start - 1] != ":"
        or set(url[: double_slashes_start - 1]) - scheme_chars_set
    ):
        return url
    return url[double_slashes_start + 2 :]


def extract_hostname(url: str) -> str | None:
    """Extract a lower-cased hostname from a URL, or None if there is none.

    >>> extract_hostname("https://user:pw@WWW.Example.co.uk:8080/path?q=1")
    'www.example.co.uk'
    >>> extract_hostname("http://[::1]:80/")
    '[::1]'
    >>> extract_hostname("http://") is None
    True
    """
    hostname = lenient_netloc(url).lower()
    return hostname or None


def looks_like_ip(maybe_ip: str) -> bool:
    """Check whether the given str looks like an IPv4 address."""
    return IP_RE.fullmatch(maybe_ip) is not None


def looks_like_ipv6(maybe_ip: str) -> bool:
    """Check whether the given str looks like an IPv6 address."""
    try:
        ipaddress.IPv6Address(maybe_ip)
    except ValueError:
        return False
    return True


def is_ip(hostname: str) -> bool:
    """Check whether a hostname is an IPv4 or IPv6 literal, bracketed or not."""
    if (
        len(hostname) >= MIN_NUM_IPV6_CHARS
        and hostname[0] == "["
        and hostname[-1] == "]"
    ):
        return looks_like_ipv6(hostname[1:-1])
    return looks_like_ip(hostname) or looks_like_ipv6(hostname)


def is_valid_hostname(hostname: str) -> bool:
    """Check the syntax of a hostname, without consulting any rule set.

    Labels may hold ASCII letters, digits, hyphens and underscores, plus any
    non-ASCII code point so that Unicode IDN hostnames pass. Labels are 1-63
    characters and do not start or end with a hyphen.
    """
    if not hostname or len(hostname) > MAX_HOSTNAME_LENGTH:
        return False

    for label in hostname.split("."):
        if not LABEL_RE.fullmatch(label):
            return False
        if label[0] == "-" or label[-1] == "-":
            return False

    return True
