"""Trie of Public Suffix List rules, keyed by label in reverse order."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import idna

WILDCARD = "*"
EXCEPTION_MARK = "!"


@dataclass(frozen=True)
class MatchResult:
    """The rule that governs a hostname, as found by `Trie.longest_match`."""

    matched_label_count: int
    """Depth of the deepest rule reached, or 1 for the PSL default rule."""

    is_exception: bool
    """Whether that rule was an exception rule, e.g. "!www.ck"."""

    matched: bool
    """Whether any explicit rule matched, i.e. the default rule was not used."""

    @property
    def suffix_length(self) -> int:
        """Number of trailing hostname labels that form the public suffix."""
        if self.is_exception:
            return self.matched_label_count - 1
        return self.matched_label_count


DEFAULT_MATCH = MatchResult(matched_label_count=1, is_exception=False, matched=False)


class Trie:
    """Trie for storing PSL rules with their labels in reverse-order."""

    def __init__(
        self,
        matches: dict[str, Trie] | None = None,
        is_rule: bool = False,
        is_exception: bool = False,
    ) -> None:
        self.matches = matches if matches else {}
        self.is_rule = is_rule
        self.is_exception = is_exception

    @staticmethod
    def create(rules: Iterable[str]) -> Trie:
        """Create a Trie from a list of rules and return its root node."""
        root_node = Trie()

        for rule in rules:
            root_node.add_rule(rule)

        return root_node

    def add_rule(self, rule: str) -> None:
        """Append a rule's labels to this Trie node.

        A leading "!" marks an exception rule. A "*" label is stored as a
        literal child and matches any single label at lookup time.
        """
        is_exception = rule.startswith(EXCEPTION_MARK)
        if is_exception:
            rule = rule[len(EXCEPTION_MARK) :]

        labels = [_normalize_label(label) for label in rule.split(".")]
        if is_exception and len(labels) < 2:
            raise ValueError(f"Exception rule needs at least two labels: !{rule}")
        labels.reverse()

        node = self
        for label in labels:
            if label not in node.matches:
                node.matches[label] = Trie()
            node = node.matches[label]

        node.is_rule = True
        node.is_exception = node.is_exception or is_exception

    def longest_match(self, labels: Sequence[str]) -> MatchResult:
        """Find the rule governing a hostname, given its labels in hostname order.

        Walks from the rightmost label, preferring an exact child over a
        wildcard child at each step, and remembers the deepest node that
        terminates a rule.

        >>> trie = Trie.create(["uk", "co.uk", "*.ck", "!www.ck"])
        >>> trie.longest_match(["www", "example", "co", "uk"]).suffix_length
        2
        >>> trie.longest_match(["www", "ck"]).suffix_length
        1
        >>> trie.longest_match(["example", "test"])
        MatchResult(matched_label_count=1, is_exception=False, matched=False)
        """
        node = self
        match = DEFAULT_MATCH
        depth = 0
        for label in reversed(labels):
            decoded_label = _normalize_label(label)
            child = node.matches.get(decoded_label)
            if child is None:
                child = node.matches.get(WILDCARD)
            if child is None:
                break

            node = child
            depth += 1
            if node.is_rule:
                match = MatchResult(
                    matched_label_count=depth,
                    is_exception=node.is_exception,
                    matched=True,
                )

        return match


def _normalize_label(label: str) -> str:
    lowered = label.lower()
    looks_like_puny = lowered.startswith("xn--")
    if looks_like_puny:
        try:
            return idna.decode(lowered)
        except (UnicodeError, IndexError):
            pass
    return lowered
