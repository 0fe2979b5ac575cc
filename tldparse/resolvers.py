"""Resolve the tiers of a hostname from a rule trie.

Each function is pure: the same trie and hostname always give the same answer.
"""

from __future__ import annotations

from collections.abc import Container, Sequence

from .trie import MatchResult, Trie


def tld_exists(trie: Trie, hostname: str) -> bool:
    """Whether any rule in `trie`, rather than the default rule, governs `hostname`."""
    return trie.longest_match(hostname.split(".")).matched


def get_public_suffix(trie: Trie, hostname: str) -> str:
    """Join the trailing labels of `hostname` that the governing rule covers.

    >>> trie = Trie.create(["*.ck", "!www.ck", "co.uk"])
    >>> get_public_suffix(trie, "www.example.co.uk")
    'co.uk'
    >>> get_public_suffix(trie, "www.foo.ck")
    'foo.ck'
    >>> get_public_suffix(trie, "www.ck")
    'ck'
    >>> get_public_suffix(trie, "example.unlisted")
    'unlisted'
    """
    labels = hostname.split(".")
    return join_suffix(labels, trie.longest_match(labels))


def join_suffix(labels: Sequence[str], match: MatchResult) -> str:
    """Join the last `match.suffix_length` labels, or all of them if there are fewer."""
    if len(labels) < match.suffix_length:
        return ".".join(labels)
    return ".".join(labels[-match.suffix_length :])


def get_domain(
    valid_hosts: Container[str], public_suffix: str, hostname: str
) -> str | None:
    """The public suffix plus the one label of `hostname` left of it.

    Valid hosts, compared case-insensitively against the lowercase
    `valid_hosts`, are their own domain. A hostname that is entirely a public
    suffix has no domain.

    >>> get_domain(frozenset(), "co.uk", "www.example.co.uk")
    'example.co.uk'
    >>> get_domain(frozenset(), "co.uk", "co.uk") is None
    True
    >>> get_domain(frozenset(["localhost"]), "localhost", "localhost")
    'localhost'
    """
    if hostname.lower() in valid_hosts:
        return hostname
    if public_suffix == hostname:
        return None

    assert hostname.endswith(
        "." + public_suffix
    ), f"public suffix {public_suffix!r} does not end hostname {hostname!r}"
    prefix = hostname[: -len(public_suffix) - 1]
    return prefix.rpartition(".")[2] + "." + public_suffix


def get_site_domain(domain: str | None, public_suffix: str | None) -> str | None:
    """The domain minus its public suffix, e.g. "example" for "example.co.uk"."""
    if domain is None:
        return None
    if public_suffix and domain.endswith("." + public_suffix):
        return domain[: -len(public_suffix) - 1]
    return domain


def get_subdomain(hostname: str, domain: str | None) -> str:
    """Everything in `hostname` left of `domain`, without the joining dot."""
    if domain is None or hostname == domain:
        return ""
    if hostname.endswith("." + domain):
        return hostname[: -len(domain) - 1]
    return ""
