"""tldparse unit tests with a custom suffix list."""

import os
import tempfile
from pathlib import Path

import pytest

import tldparse
from tldparse.suffix_list import (
    RuleSet,
    SuffixListParseError,
    extract_rules_from_suffix_list,
)

FAKE_SUFFIX_LIST_PATH = Path(
    os.path.dirname(os.path.abspath(__file__)),
    "fixtures",
    "fake_suffix_list_fixture.dat",
)
FAKE_SUFFIX_LIST_URL = FAKE_SUFFIX_LIST_PATH.as_uri()

EXTRA_SUFFIXES = ["foo1", "bar1", "baz1"]

parse_using_fake_suffix_list = tldparse.TLDParse(
    cache_dir=tempfile.mkdtemp(), suffix_list_urls=[FAKE_SUFFIX_LIST_URL]
)
parse_using_fake_suffix_list_no_cache = tldparse.TLDParse(
    cache_dir=None, suffix_list_urls=[FAKE_SUFFIX_LIST_URL]
)
parse_using_extra_suffixes = tldparse.TLDParse(
    cache_dir=None,
    suffix_list_urls=[FAKE_SUFFIX_LIST_URL],
    extra_suffixes=EXTRA_SUFFIXES,
)


def test_extract_rules_from_suffix_list() -> None:
    """Test the fixture splits into its ICANN and PRIVATE rules."""
    rule_set = extract_rules_from_suffix_list(
        FAKE_SUFFIX_LIST_PATH.read_text(encoding="utf-8")
    )

    assert rule_set == RuleSet(
        icann=("foo", "bar", "baz", "*.quux", "!www.quux", "co.baz"),
        private=("pages.foo",),
    )


@pytest.mark.parametrize(
    "missing",
    [
        "// ===BEGIN ICANN DOMAINS===",
        "// ===END ICANN DOMAINS===",
        "// ===BEGIN PRIVATE DOMAINS===",
        "// ===END PRIVATE DOMAINS===",
    ],
)
def test_missing_marker(missing: str) -> None:
    """Test a list without one of its section markers is refused."""
    text = FAKE_SUFFIX_LIST_PATH.read_text(encoding="utf-8").replace(missing, "")

    with pytest.raises(SuffixListParseError, match="Missing"):
        extract_rules_from_suffix_list(text)


def test_suffix_which_is_not_in_custom_list() -> None:
    """Test a custom suffix list without .com."""
    for fun in (
        parse_using_fake_suffix_list,
        parse_using_fake_suffix_list_no_cache,
    ):
        result = fun("www.google.com")
        assert result.tld_exists is False
        assert result.public_suffix == "com"
        assert result.domain == "google.com"


def test_custom_suffixes() -> None:
    """Test a custom suffix list with common, metasyntactic suffixes."""
    for fun in (
        parse_using_fake_suffix_list,
        parse_using_fake_suffix_list_no_cache,
    ):
        for custom_suffix in ("foo", "bar", "baz"):
            result = fun("www.foo.bar.baz.quux" + "." + custom_suffix)
            assert result.tld_exists is True
            assert result.public_suffix == custom_suffix
            assert result.subdomain == "www.foo.bar.baz"

        assert fun.get_public_suffix("www.example.co.baz") == "co.baz"


def test_custom_wildcard_and_exception() -> None:
    """Test wildcard and exception rules from a custom list."""
    for fun in (
        parse_using_fake_suffix_list,
        parse_using_fake_suffix_list_no_cache,
    ):
        assert fun.get_public_suffix("a.b.quux") == "b.quux"
        assert fun.get_domain("a.b.quux") == "a.b.quux"
        assert fun.get_domain("b.quux") is None
        assert fun.get_public_suffix("www.quux") == "quux"
        assert fun.get_domain("sub.www.quux") == "www.quux"
        assert fun.get_subdomain("sub.www.quux") == "sub"


def test_custom_private_rules() -> None:
    """Test private rules apply to the default results only."""
    result = parse_using_fake_suffix_list("www.site.pages.foo")

    assert result.public_suffix == "pages.foo"
    assert result.domain == "site.pages.foo"
    assert result.subdomain == "www"
    assert result.icann.public_suffix == "foo"
    assert result.icann.domain == "pages.foo"
    assert result.icann.subdomain == "www.site"


def test_suffix_which_is_not_in_extra_list() -> None:
    """Test a custom suffix list and extra suffixes without .com."""
    result = parse_using_extra_suffixes("www.google.com")
    assert result.tld_exists is False


def test_extra_suffixes() -> None:
    """Test extra suffixes."""
    for custom_suffix in EXTRA_SUFFIXES:
        netloc = "www.foo.bar.baz.quux" + "." + custom_suffix
        result = parse_using_extra_suffixes(netloc)
        assert result.public_suffix == custom_suffix
        assert result.icann.public_suffix == custom_suffix
