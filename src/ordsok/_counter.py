"""Local wordbag counting with an Aho-Corasick automaton."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

import ahocorasick

if TYPE_CHECKING:
    from ._types import EvaluationResult, Wordbag


def _normalize(word: str) -> str:
    return " ".join(word.lower().split())


class WordbagCounter:
    """Counts whole-word occurrences of each wordbag's words in a text.

    Words may be phrases ("fjell og fjord"). Matching is case-insensitive and
    uses leftmost-longest non-overlapping selection, so "skog" is not counted
    inside "skogbruk" and a phrase wins over its own first word.
    """

    __slots__ = ("_ac", "_patterns", "_pattern_bags", "_names")

    def __init__(self, wordbags: Sequence[Wordbag]) -> None:
        self._names: list[str] = []
        bags_by_pattern: dict[str, list[str]] = {}
        for bag in wordbags:
            name = bag.name.strip()
            if not name or name in self._names:
                continue
            self._names.append(name)
            for word in bag.words:
                pattern = _normalize(word)
                if not pattern:
                    continue
                owners = bags_by_pattern.setdefault(pattern, [])
                if name not in owners:
                    owners.append(name)

        self._patterns: list[str] = []
        self._pattern_bags: list[list[str]] = []
        self._ac = ahocorasick.Automaton()
        for idx, (pattern, owners) in enumerate(bags_by_pattern.items()):
            self._ac.add_word(pattern, idx)
            self._patterns.append(pattern)
            self._pattern_bags.append(owners)
        if self._patterns:
            self._ac.make_automaton()

    @property
    def names(self) -> list[str]:
        return list(self._names)

    def scan(self, text: str) -> list[tuple[int, int, int]]:
        """Return (start, end, pattern_idx) for every counted occurrence.

        Matches must sit on word boundaries; overlapping matches are resolved
        leftmost-longest.
        """
        if not self._patterns:
            return []
        text_lower = text.lower()
        n = len(text_lower)

        raw_matches: list[tuple[int, int, int]] = []
        for end_inclusive, idx in self._ac.iter(text_lower):
            end = end_inclusive + 1
            start = end - len(self._patterns[idx])
            if start > 0 and text_lower[start - 1].isalnum():
                continue
            if end < n and text_lower[end].isalnum():
                continue
            raw_matches.append((start, end, idx))

        raw_matches.sort(key=lambda m: (m[0], -(m[1] - m[0])))

        selected: list[tuple[int, int, int]] = []
        last_end = -1
        for start, end, idx in raw_matches:
            if start >= last_end:
                selected.append((start, end, idx))
                last_end = end
        return selected

    def count(self, text: str) -> dict[str, int]:
        """Occurrences per wordbag name (every bag present, zero if unmatched)."""
        counts = dict.fromkeys(self._names, 0)
        for _, _, idx in self.scan(text):
            for name in self._pattern_bags[idx]:
                counts[name] += 1
        return counts

    def evaluate(self, texts: Mapping[str, str]) -> EvaluationResult:
        """Count every document; same shape as the evaluation API response."""
        return {doc_id: self.count(text) for doc_id, text in texts.items()}
