"""Heuristic named-entity recognition for people.

Two regex passes, no statistical model: an honorific or title followed by
capitalized words, and any run of one to four capitalized words. Matches are
filtered against a stopword list of pronouns, determiners, months and
weekdays.
"""

import re

TITLES = [
    r"Mr\.", r"Mrs\.", r"Ms\.", r"Dr\.", r"Prof\.", "Sir", "Lord", "Lady",
    "King", "Queen", "Emperor", "Empress", "Prince", "Princess", "Duke",
    "Duchess", "Pope", "Saint", "President", "Prime Minister",
]

TITLE_PATTERN = re.compile(
    r"(?:" + "|".join(TITLES) + r")\s+[A-Z][a-z]+(?:\s+[A-Z][a-z]+){0,3}"
)
NAME_PATTERN = re.compile(r"\b[A-Z][a-z]+(?:\s+[A-Z][a-z]+){0,3}\b")

STOPWORDS = frozenset({
    "The", "A", "An", "This", "That", "These", "Those", "It", "They", "I",
    "We", "You", "He", "She", "His", "Her", "Their", "Our", "Your", "Its",
    "January", "February", "March", "April", "May", "June", "July",
    "August", "September", "October", "November", "December",
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
})


class NameRecognizer:
    """Finds candidate person names in arbitrary text."""

    def __init__(self, stopwords: frozenset[str] = STOPWORDS):
        self.stopwords = stopwords

    def extract_entities(self, text: str) -> list[str]:
        """Candidate names, deduplicated in first-seen order.

        Title matches come first, then bare capitalized runs.
        """
        matches = [m.group(0) for m in TITLE_PATTERN.finditer(text)]
        matches += [m.group(0) for m in NAME_PATTERN.finditer(text)]

        seen: set[str] = set()
        names = []
        for candidate in matches:
            if not self._is_candidate(candidate) or candidate in seen:
                continue
            seen.add(candidate)
            names.append(candidate)
        return names

    def _is_candidate(self, candidate: str) -> bool:
        words = candidate.split()
        if not words:
            return False
        if len(words) == 1 and words[0] in self.stopwords:
            return False
        if len(words) == 2 and words[0] in self.stopwords:
            return False
        return True
