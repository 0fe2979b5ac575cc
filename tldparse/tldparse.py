"""`tldparse` splits a hostname into its public suffix, registrable domain, and subdomain.

It does this via the Public Suffix List (PSL).

    >>> import tldparse

    >>> tldparse.get_public_suffix("https://www.example.co.uk")
    'co.uk'
    >>> tldparse.get_domain("https://www.example.co.uk")
    'example.co.uk'
    >>> tldparse.get_subdomain("https://www.example.co.uk")
    'www'

Every tier at once, for the default rules (ICANN and PRIVATE) and for the
ICANN rules alone:

    >>> result = tldparse.parse("http://foo.blogspot.com")
    >>> result.domain, result.icann.domain
    ('foo.blogspot.com', 'blogspot.com')

Inputs that are not hostnames are reported, not raised:

    >>> tldparse.parse("http://127.0.0.1:8080/deployed/").is_ip
    True
    >>> tldparse.parse("http://in valid").is_valid
    False
"""

from __future__ import annotations

import enum
import logging
import os
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from functools import wraps

import requests

from . import remote, resolvers
from .cache import DiskCache, get_cache_dir
from .suffix_list import RuleSet, get_suffix_lists
from .trie import Trie

LOG = logging.getLogger("tldparse")

CACHE_TIMEOUT = os.environ.get("TLDPARSE_CACHE_TIMEOUT")

PUBLIC_SUFFIX_LIST_URLS = (
    "https://publicsuffix.org/list/public_suffix_list.dat",
    "https://raw.githubusercontent.com/publicsuffix/list/master/public_suffix_list.dat",
)

RFC6761_HOSTS = frozenset(("localhost", "local", "example", "invalid", "test"))


class Stage(enum.IntEnum):
    """How far `TLDParse.parse` goes before returning.

    Each stage includes the ones before it. Fields belonging to later stages
    keep their defaults.
    """

    VALIDATE = 1
    TLD_EXISTS = 2
    PUBLIC_SUFFIX = 3
    DOMAIN = 4
    SITE_DOMAIN = 5
    ALL = 6


@dataclass
class SuffixParts:
    """The tiers of a hostname, as resolved against one rule set."""

    tld_exists: bool = False
    """Whether any explicit rule matched the hostname."""

    public_suffix: str | None = None
    """The public suffix, e.g. "co.uk". Falls back to the last label when no rule matches."""

    domain: str | None = None
    """The registrable domain, e.g. "example.co.uk", or None when the hostname is itself a public suffix."""

    site_domain: str | None = None
    """The registrable domain minus its public suffix, e.g. "example"."""

    subdomain: str | None = None
    """Everything left of the registrable domain, e.g. "www", or the empty string."""


@dataclass
class ParseResult:
    """Everything `TLDParse.parse` learned about a URL's hostname.

    The tier fields read from `all_rules`, the ICANN and PRIVATE rules. The
    same tiers, resolved against the ICANN rules only, are in `icann`.
    """

    hostname: str | None
    is_valid: bool | None = None
    is_ip: bool | None = None
    is_host: bool | None = None
    """Whether the hostname is one of the configured valid hosts, e.g. "localhost"."""

    all_rules: SuffixParts = field(default_factory=SuffixParts)
    icann: SuffixParts = field(default_factory=SuffixParts)

    @property
    def tld_exists(self) -> bool:
        return self.all_rules.tld_exists

    @property
    def public_suffix(self) -> str | None:
        return self.all_rules.public_suffix

    @property
    def domain(self) -> str | None:
        return self.all_rules.domain

    @property
    def site_domain(self) -> str | None:
        return self.all_rules.site_domain

    @property
    def subdomain(self) -> str | None:
        return self.all_rules.subdomain


class _RuleTries:
    """The two tries every lookup needs, built together and never mutated."""

    def __init__(self, rule_set: RuleSet, extra_rules: Sequence[str] = ()) -> None:
        self.rule_set = rule_set
        self.all_rules = Trie.create([*rule_set.all, *extra_rules])
        self.icann = Trie.create([*rule_set.icann, *extra_rules])
        LOG.debug(
            "built suffix tries from %d ICANN, %d PRIVATE and %d extra rules",
            len(rule_set.icann),
            len(rule_set.private),
            len(extra_rules),
        )


class TLDParse:
    """A callable for splitting a URL's hostname into public suffix, domain, and subdomain."""

    def __init__(
        self,
        rules: RuleSet | None = None,
        extract_hostname: Callable[[str], str | None] | None = None,
        rfc6761: bool = False,
        valid_hosts: Iterable[str] = (),
        extra_suffixes: Sequence[str] = (),
        cache_dir: str | None = get_cache_dir(),
        suffix_list_urls: Sequence[str] = PUBLIC_SUFFIX_LIST_URLS,
        fallback_to_snapshot: bool = True,
        cache_fetch_timeout: str | float | None = CACHE_TIMEOUT,
    ) -> None:
        """Construct a callable for parsing hostnames against the Public Suffix List.

        If `rules` is given, that rule set is used as is and nothing is ever
        fetched. Otherwise the rules are loaded on first use: first from a
        JSON cache in `cache_dir` (disable caching by setting it to `None`),
        then by HTTP requesting the URLs in `suffix_list_urls` in order, using
        the first successful response. Local files can be specified with the
        `file://` protocol. To disable HTTP requests, set `suffix_list_urls`
        to an empty sequence.

        If no rules are cached and no URL answers, the bundled PSL snapshot
        is used, unless `fallback_to_snapshot` is False, in which case an
        exception is raised instead.

        Hostnames in `valid_hosts`, e.g. "localhost", skip suffix matching and
        count as complete domains. `rfc6761=True` adds the reserved names
        localhost, local, example, invalid and test.

        `extract_hostname` replaces the function that pulls a hostname out of
        a URL. It returns None when there is no hostname.

        `extra_suffixes` are merged into both the default and the ICANN rules.

        `cache_fetch_timeout` is passed unmodified to the underlying request
        object. It can also be set with the environment variable
        TLDPARSE_CACHE_TIMEOUT, like so:

        TLDPARSE_CACHE_TIMEOUT="1.2"
        """
        suffix_list_urls = suffix_list_urls or ()
        self.suffix_list_urls = tuple(
            url.strip() for url in suffix_list_urls if url.strip()
        )

        self.fallback_to_snapshot = fallback_to_snapshot
        if rules is None and not (
            self.suffix_list_urls or cache_dir or self.fallback_to_snapshot
        ):
            raise ValueError(
                "The arguments you have provided disable all ways for tldparse "
                "to obtain data. Please provide a suffix list data, a cache_dir, "
                "or set `fallback_to_snapshot` to `True`."
            )

        self.custom_rules = rules
        self.extract_hostname = extract_hostname or remote.extract_hostname
        hosts = set(RFC6761_HOSTS) if rfc6761 else set()
        hosts.update(host.lower() for host in valid_hosts)
        self.valid_hosts = frozenset(hosts)
        self.extra_suffixes = tuple(extra_suffixes)
        self._tries: _RuleTries | None = None

        self.cache_fetch_timeout = (
            float(cache_fetch_timeout)
            if isinstance(cache_fetch_timeout, str)
            else cache_fetch_timeout
        )
        self._cache = DiskCache(cache_dir)

    def __call__(self, url: str, stage: Stage = Stage.ALL) -> ParseResult:
        """Alias for `parse`."""
        return self.parse(url, stage)

    def parse(
        self,
        url: str,
        stage: Stage = Stage.ALL,
        session: requests.Session | None = None,
    ) -> ParseResult:
        """Extract the hostname from `url` and resolve its tiers, up to `stage`.

        >>> parser = TLDParse(rfc6761=True)
        >>> result = parser.parse("http://localhost")
        >>> result.is_valid, result.is_host, result.domain
        (True, True, 'localhost')
        >>> parser.parse("https://www.example.co.uk", Stage.PUBLIC_SUFFIX).domain is None
        True

        Allows configuring the HTTP request that fetches the rules via the
        optional `session` parameter. For example, if you need to use a HTTP
        proxy. See also `requests.Session`.
        """
        result = ParseResult(hostname=self.extract_hostname(url))
        hostname = result.hostname
        if hostname is None:
            result.is_valid = result.is_ip = result.is_host = False
            return result

        result.is_ip = remote.is_ip(hostname)
        if result.is_ip:
            result.is_host = False
            result.is_valid = True
            return result

        result.is_host = self.is_valid_host(hostname)
        if result.is_host:
            result.is_valid = True
            for parts in (result.all_rules, result.icann):
                parts.domain = resolvers.get_domain(self.valid_hosts, hostname, hostname)
                parts.site_domain = parts.domain
                parts.subdomain = ""
            return result

        result.is_valid = remote.is_valid_hostname(hostname)
        if not result.is_valid or stage == Stage.VALIDATE:
            return result

        tries = self._get_rule_tries(session)
        labels = hostname.split(".")
        for parts, trie in (
            (result.all_rules, tries.all_rules),
            (result.icann, tries.icann),
        ):
            match = trie.longest_match(labels)
            parts.tld_exists = match.matched
            if stage == Stage.TLD_EXISTS:
                continue

            parts.public_suffix = resolvers.join_suffix(labels, match)
            if stage == Stage.PUBLIC_SUFFIX:
                continue

            parts.domain = resolvers.get_domain(
                self.valid_hosts, parts.public_suffix, hostname
            )
            if stage == Stage.DOMAIN:
                continue

            parts.site_domain = resolvers.get_site_domain(
                parts.domain, parts.public_suffix
            )
            if stage == Stage.SITE_DOMAIN:
                continue

            parts.subdomain = resolvers.get_subdomain(hostname, parts.domain)

        return result

    def tld_exists(self, url: str) -> bool:
        """Whether any PSL rule, rather than the default rule, governs the URL's hostname.

        Always False for IP addresses and valid hosts, which skip suffix matching.
        """
        return self.parse(url, Stage.TLD_EXISTS).tld_exists

    def get_public_suffix(self, url: str, icann: bool = False) -> str | None:
        """The public suffix of the URL's hostname, e.g. "co.uk"."""
        return self._parts(url, Stage.PUBLIC_SUFFIX, icann).public_suffix

    def get_domain(self, url: str, icann: bool = False) -> str | None:
        """The registrable domain of the URL's hostname, e.g. "example.co.uk"."""
        return self._parts(url, Stage.DOMAIN, icann).domain

    def get_site_domain(self, url: str, icann: bool = False) -> str | None:
        """The registrable domain minus its public suffix, e.g. "example"."""
        return self._parts(url, Stage.SITE_DOMAIN, icann).site_domain

    def get_subdomain(self, url: str, icann: bool = False) -> str | None:
        """The labels left of the registrable domain, e.g. "www"."""
        return self._parts(url, Stage.ALL, icann).subdomain

    def is_valid_hostname(self, hostname: str) -> bool:
        """Whether `hostname` is syntactically valid. Valid hosts are reported by `is_valid_host`."""
        return remote.is_valid_hostname(hostname)

    def is_valid_host(self, hostname: str) -> bool:
        """Whether `hostname` is one of the configured valid hosts, ignoring case."""
        return hostname.lower() in self.valid_hosts

    def is_ip(self, hostname: str) -> bool:
        """Whether `hostname` is an IPv4 or IPv6 literal, bracketed or not."""
        return remote.is_ip(hostname)

    def _parts(self, url: str, stage: Stage, icann: bool) -> SuffixParts:
        result = self.parse(url, stage)
        return result.icann if icann else result.all_rules

    def update(
        self, fetch_now: bool = False, session: requests.Session | None = None
    ) -> None:
        """Force fetch the latest suffix list definitions.

        With `fetch_now`, the new tries are built before they replace the old
        ones, so lookups during the fetch keep reading the old tries.
        """
        self._cache.clear()
        if fetch_now:
            self._tries = self._build_rule_tries(session)
        else:
            self._tries = None

    def rules(self, kind: str = "all", session: requests.Session | None = None) -> Trie:
        """Build a fresh trie of the "all", "icann" or "private" rules."""
        rule_set = self._get_rule_tries(session).rule_set
        if kind == "all":
            return Trie.create(rule_set.all)
        if kind == "icann":
            return Trie.create(rule_set.icann)
        if kind == "private":
            return Trie.create(rule_set.private)
        raise ValueError(f"Unknown rule set {kind!r}, expected all, icann or private")

    @property
    def rule_set(self) -> RuleSet:
        """The rule set in use, not counting `extra_suffixes`."""
        return self._get_rule_tries().rule_set

    def _get_rule_tries(self, session: requests.Session | None = None) -> _RuleTries:
        """Get or compute this object's rule tries.

        Looks up the rules in roughly the following order, based on the
        settings passed to __init__:

        1. Memoized on `self`
        2. Custom `rules`
        3. Local system _cache file
        4. Remote PSL, over HTTP
        5. Bundled PSL snapshot file
        """
        tries = self._tries
        if tries is None:
            tries = self._build_rule_tries(session)
            self._tries = tries
        return tries

    def _build_rule_tries(self, session: requests.Session | None = None) -> _RuleTries:
        """Build a new pair of tries without publishing them."""
        if self.custom_rules is not None:
            rule_set = self.custom_rules
        else:
            rule_set = get_suffix_lists(
                cache=self._cache,
                urls=self.suffix_list_urls,
                cache_fetch_timeout=self.cache_fetch_timeout,
                fallback_to_snapshot=self.fallback_to_snapshot,
                session=session,
            )

        if not any([rule_set.icann, rule_set.private, self.extra_suffixes]):
            raise ValueError("No rules set. Cannot proceed without rules.")

        return _RuleTries(rule_set, self.extra_suffixes)


TLD_PARSER = TLDParse()


@wraps(TLD_PARSER.parse)
def parse(  # noqa: D103
    url: str, stage: Stage = Stage.ALL, session: requests.Session | None = None
) -> ParseResult:
    return TLD_PARSER.parse(url, stage, session=session)


@wraps(TLD_PARSER.tld_exists)
def tld_exists(url: str) -> bool:  # noqa: D103
    return TLD_PARSER.tld_exists(url)


@wraps(TLD_PARSER.get_public_suffix)
def get_public_suffix(url: str, icann: bool = False) -> str | None:  # noqa: D103
    return TLD_PARSER.get_public_suffix(url, icann)


@wraps(TLD_PARSER.get_domain)
def get_domain(url: str, icann: bool = False) -> str | None:  # noqa: D103
    return TLD_PARSER.get_domain(url, icann)


@wraps(TLD_PARSER.get_site_domain)
def get_site_domain(url: str, icann: bool = False) -> str | None:  # noqa: D103
    return TLD_PARSER.get_site_domain(url, icann)


@wraps(TLD_PARSER.get_subdomain)
def get_subdomain(url: str, icann: bool = False) -> str | None:  # noqa: D103
    return TLD_PARSER.get_subdomain(url, icann)


@wraps(TLD_PARSER.update)
def update(*args, **kwargs):  # type: ignore[no-untyped-def]  # noqa: D103
    return TLD_PARSER.update(*args, **kwargs)
