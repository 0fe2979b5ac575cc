"""Export tldparse's public interface."""

from . import _version
from .remote import extract_hostname, is_ip, is_valid_hostname
from .suffix_list import RuleSet, SuffixListNotFound, SuffixListParseError
from .tldparse import (
    ParseResult,
    Stage,
    SuffixParts,
    TLDParse,
    get_domain,
    get_public_suffix,
    get_site_domain,
    get_subdomain,
    parse,
    tld_exists,
    update,
)
from .trie import MatchResult, Trie

__version__: str = _version.version

__all__ = [
    "__version__",
    "extract_hostname",
    "get_domain",
    "get_public_suffix",
    "get_site_domain",
    "get_subdomain",
    "is_ip",
    "is_valid_hostname",
    "MatchResult",
    "parse",
    "ParseResult",
    "RuleSet",
    "Stage",
    "SuffixListNotFound",
    "SuffixListParseError",
    "SuffixParts",
    "TLDParse",
    "tld_exists",
    "Trie",
    "update",
]
