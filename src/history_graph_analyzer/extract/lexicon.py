"""Weighted phrase tables used to score relationship types in free text.

The lexicon maps each relationship type to phrase -> weight (1-10). It is
shared between concurrent classifiers and the online reinforcement hook, so
every read and write goes through one lock.
"""

import copy
import threading
from collections import Counter

from ..models.relationships import RelationshipType
from .text import tokenize

MAX_WEIGHT = 10
NEW_PHRASE_WEIGHT = 3
MIN_OCCURRENCES = 2
MIN_TOKEN_LENGTH = 3

DEFAULT_LEXICON: dict[RelationshipType, dict[str, int]] = {
    RelationshipType.MENTOR: {
        "mentor": 10, "teacher": 9, "taught": 8, "guide": 7, "instruct": 7,
        "train": 6, "tutor": 9, "educate": 7, "master": 6, "professor": 6,
        "advise": 5, "supervise": 5, "coach": 5, "counsel": 4, "direct": 3,
    },
    RelationshipType.STUDENT: {
        "student": 10, "pupil": 9, "disciple": 8, "apprentice": 8, "protégé": 7,
        "follower": 6, "studied under": 9, "learned from": 8, "trainee": 6, "mentee": 7,
        "educated by": 7, "tutored by": 8, "guided by": 6, "influenced by": 5, "school of": 5,
    },
    RelationshipType.COLLEAGUE: {
        "colleague": 10, "associate": 8, "collaborator": 9, "partner": 8, "coworker": 8,
        "ally": 6, "contemporary": 5, "peer": 7, "fellow": 6, "worked with": 9,
        "collaborated with": 9, "joined forces": 7, "teamed up": 7, "together": 4, "alongside": 6,
    },
    RelationshipType.INFLUENCED: {
        "influenced": 10, "inspired": 9, "affected": 7, "shaped": 8, "impacted": 8,
        "changed": 6, "transformed": 7, "informed": 6, "guided": 5, "swayed": 6,
        "impressed": 5, "sway over": 6, "impact on": 8, "effect on": 7, "inspiration for": 9,
    },
    RelationshipType.RIVAL: {
        "rival": 10, "opponent": 9, "competitor": 8, "adversary": 9, "enemy": 7,
        "foe": 7, "antagonist": 8, "critic": 6, "contested": 7, "challenged": 6,
        "disputed with": 8, "disagreed with": 7, "opposed": 8, "contended with": 7, "conflict": 6,
    },
    RelationshipType.FRIEND: {
        "friend": 10, "companion": 8, "ally": 7, "confidant": 9, "close": 6,
        "intimate": 8, "buddy": 7, "pal": 6, "associate": 5, "comrade": 7,
        "acquaintance": 4, "fellowship": 6, "friendship": 10, "friendly": 5, "amicable": 6,
    },
    RelationshipType.ADMIRED: {
        "admired": 10, "respected": 8, "revered": 9, "esteemed": 8, "venerated": 9,
        "looked up to": 8, "honored": 7, "praised": 6, "acclaimed": 7, "celebrated": 6,
        "idolized": 9, "hero": 8, "model": 6, "idol": 8, "exemplar": 7,
    },
}

STOPWORDS = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to",
    "for", "with", "by", "as", "of", "from", "was", "were", "is", "are",
    "be", "been", "has", "have", "had",
})


class RelationshipLexicon:
    """Thread-safe, mutable phrase-weight table per relationship type."""

    def __init__(self, table: dict[RelationshipType, dict[str, int]] | None = None):
        """Initialize the lexicon.

        Args:
            table: Initial phrase weights (defaults to DEFAULT_LEXICON); copied
        """
        self._table = copy.deepcopy(table if table is not None else DEFAULT_LEXICON)
        self._lock = threading.Lock()

    @property
    def types(self) -> list[RelationshipType]:
        with self._lock:
            return list(self._table)

    def snapshot(self) -> dict[RelationshipType, dict[str, int]]:
        """Consistent deep copy of the whole table."""
        with self._lock:
            return copy.deepcopy(self._table)

    def phrases(self, rel_type: RelationshipType) -> dict[str, int]:
        with self._lock:
            return dict(self._table.get(rel_type, {}))

    def weight(self, rel_type: RelationshipType, phrase: str) -> int:
        with self._lock:
            return self._table.get(rel_type, {}).get(phrase, 0)

    def reinforce(self, text: str, rel_type: RelationshipType) -> dict[str, int]:
        """Learn from a text sample known to express `rel_type`.

        Tokens (stopwords and tokens shorter than three characters dropped)
        seen at least twice are reinforced: existing phrases gain one point up
        to the cap, new ones enter at a low weight.

        Returns:
            The phrases that were updated, with their new weights
        """
        with self._lock:
            if rel_type not in self._table:
                return {}

        counts = Counter(
            token
            for token in tokenize(text)
            if token not in STOPWORDS and len(token) >= MIN_TOKEN_LENGTH
        )

        updated = {}
        with self._lock:
            corpus = self._table[rel_type]
            for token, count in counts.items():
                if count < MIN_OCCURRENCES:
                    continue
                if token in corpus:
                    corpus[token] = min(MAX_WEIGHT, corpus[token] + 1)
                else:
                    corpus[token] = NEW_PHRASE_WEIGHT
                updated[token] = corpus[token]

        return updated

    def top_indicators(self, rel_type: RelationshipType, n: int) -> list[str]:
        """The `n` highest-weighted phrases for a type, ties broken alphabetically."""
        pairs = sorted(self.phrases(rel_type).items(), key=lambda item: (-item[1], item[0]))
        return [phrase for phrase, _ in pairs[:n]]
