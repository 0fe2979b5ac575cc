"""tldparse helpers for fetching and splitting the Public Suffix List."""

from __future__ import annotations

import logging
import pkgutil
import re
from collections.abc import Sequence
from dataclasses import dataclass

import requests
from requests_file import FileAdapter

from .cache import DiskCache

LOG = logging.getLogger("tldparse")

PUBLIC_SUFFIX_RE = re.compile(r"^(?P<suffix>[.*!]*\w[\S]*)", re.UNICODE | re.MULTILINE)

ICANN_MARKERS = ("// ===BEGIN ICANN DOMAINS===", "// ===END ICANN DOMAINS===")
PRIVATE_MARKERS = ("// ===BEGIN PRIVATE DOMAINS===", "// ===END PRIVATE DOMAINS===")


class SuffixListNotFound(LookupError):
    """A recoverable error while looking up a suffix list.

    Recoverable because you can specify backups, or use this library's bundled
    snapshot.
    """


class SuffixListParseError(ValueError):
    """A fetched suffix list is missing one of its section markers."""


@dataclass(frozen=True)
class RuleSet:
    """PSL rule strings, split into the ICANN and PRIVATE sections."""

    icann: tuple[str, ...]
    private: tuple[str, ...] = ()

    @property
    def all(self) -> tuple[str, ...]:
        """ICANN rules followed by PRIVATE rules."""
        return self.icann + self.private


def find_first_response(
    cache: DiskCache,
    urls: Sequence[str],
    cache_fetch_timeout: float | None = None,
    session: requests.Session | None = None,
) -> str:
    """Decode the first successfully fetched URL, from UTF-8 encoding to Python unicode."""
    session_created = False
    if session is None:
        session = requests.Session()
        session.mount("file://", FileAdapter())
        session_created = True

    try:
        for url in urls:
            try:
                return cache.cached_fetch_url(
                    session=session, url=url, timeout=cache_fetch_timeout
                )
            except requests.exceptions.RequestException:
                LOG.exception("Exception reading Public Suffix List url %s", url)
    finally:
        # only close the session if we created it
        if session_created:
            session.close()

    raise SuffixListNotFound(
        "No Public Suffix List found. Consider using a mirror, or avoid this "
        "fetch by constructing your TLDParse with `suffix_list_urls=()`."
    )


def _section(text: str, markers: tuple[str, str]) -> str:
    start_marker, end_marker = markers
    start = text.find(start_marker)
    if start == -1:
        raise SuffixListParseError(
            f"Missing start marker {start_marker} in public suffix list"
        )
    end = text.find(end_marker, start)
    if end == -1:
        raise SuffixListParseError(
            f"Missing end marker {end_marker} in public suffix list"
        )
    return text[start:end]


def extract_rules_from_suffix_list(suffix_list_text: str) -> RuleSet:
    """Parse the raw suffix list text into its ICANN and PRIVATE rules."""
    icann_text = _section(suffix_list_text, ICANN_MARKERS)
    private_text = _section(suffix_list_text, PRIVATE_MARKERS)

    return RuleSet(
        icann=tuple(m.group("suffix") for m in PUBLIC_SUFFIX_RE.finditer(icann_text)),
        private=tuple(
            m.group("suffix") for m in PUBLIC_SUFFIX_RE.finditer(private_text)
        ),
    )


def get_suffix_lists(
    cache: DiskCache,
    urls: Sequence[str],
    cache_fetch_timeout: float | None,
    fallback_to_snapshot: bool,
    session: requests.Session | None = None,
) -> RuleSet:
    """Fetch, parse, and cache the suffix lists."""
    icann, private = cache.run_and_cache(
        func=_get_suffix_lists,
        namespace="publicsuffix.org-rules",
        kwargs={
            "cache": cache,
            "urls": urls,
            "cache_fetch_timeout": cache_fetch_timeout,
            "fallback_to_snapshot": fallback_to_snapshot,
            "session": session,
        },
        hashed_argnames=["urls", "fallback_to_snapshot"],
    )
    return RuleSet(icann=tuple(icann), private=tuple(private))


def _get_suffix_lists(
    cache: DiskCache,
    urls: Sequence[str],
    cache_fetch_timeout: float | None,
    fallback_to_snapshot: bool,
    session: requests.Session | None = None,
) -> tuple[list[str], list[str]]:
    """Fetch and parse the suffix lists, in a jsonable shape for the cache."""
    try:
        text = find_first_response(
            cache, urls, cache_fetch_timeout=cache_fetch_timeout, session=session
        )
    except SuffixListNotFound as exc:
        if fallback_to_snapshot:
            LOG.debug("Using the bundled Public Suffix List snapshot")
            text = load_snapshot()
        else:
            raise exc

    rule_set = extract_rules_from_suffix_list(text)
    return list(rule_set.icann), list(rule_set.private)


def load_snapshot() -> str:
    """Read the Public Suffix List snapshot bundled with this package."""
    maybe_data = pkgutil.get_data("tldparse", ".tld_set_snapshot")
    assert maybe_data is not None
    return maybe_data.decode("utf-8")
