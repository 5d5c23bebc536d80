"""Relationship discovery against the registry of already-scraped people.

Scans a subject's page content for every known name and derives a typed,
weighted connection from the paragraphs that mention it.
"""

import logging
import threading

from ..models.people import derive_id
from ..models.relationships import Connection, RelationshipType
from .text import clean_text, split_clauses, split_paragraphs, truncate

logger = logging.getLogger(__name__)

# Checked in order; the first keyword found next to a name decides the type.
RELATIONSHIP_KEYWORDS: dict[RelationshipType, list[str]] = {
    RelationshipType.MENTOR: ["mentor", "teacher", "taught", "tutored", "educated", "guided"],
    RelationshipType.STUDENT: ["student", "pupil", "studied under", "learned from", "disciple"],
    RelationshipType.COLLEAGUE: ["colleague", "associate", "worked with", "collaborated", "partnered"],
    RelationshipType.INFLUENCED: [
        "influenced", "inspired", "impact on", "affected the thinking", "shaped the views",
    ],
    RelationshipType.RIVAL: [
        "rival", "opponent", "adversary", "competed", "disagreed", "disputed", "contested",
    ],
    RelationshipType.FRIEND: ["friend", "companion", "close to", "confidant"],
    RelationshipType.ADMIRED: ["admired", "respected", "honored", "looked up to", "esteemed"],
}

# (minimum paragraphs mentioning keyword and name, strength)
MENTION_STRENGTHS = [(5, 10), (4, 8), (3, 7), (2, 5), (1, 4)]
CO_MENTION_STRENGTH = 3

DESCRIPTION_LIMIT = 200
FALLBACK_DESCRIPTION = "Connected in historical context."


class KnownNamesRegistry:
    """Case-insensitive set of subject names that have been scraped.

    Grows monotonically; names are never removed.
    """

    def __init__(self, names: list[str] | None = None):
        self._names: set[str] = set()
        self._lock = threading.Lock()
        for name in names or []:
            self.add(name)

    def add(self, name: str) -> bool:
        """Register a name; returns True if it was not known before."""
        key = name.strip().lower()
        if not key:
            return False
        with self._lock:
            if key in self._names:
                return False
            self._names.add(key)
            return True

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name.strip().lower() in self._names

    def __len__(self) -> int:
        with self._lock:
            return len(self._names)

    def names(self) -> list[str]:
        """Sorted snapshot of the registered (lowercased) names."""
        with self._lock:
            return sorted(self._names)


def mention_strength(mention_count: int) -> int:
    """Strength for the number of paragraphs pairing a keyword with a name."""
    for minimum, strength in MENTION_STRENGTHS:
        if mention_count >= minimum:
            return strength
    return CO_MENTION_STRENGTH


def best_sentence(paragraph: str, keyword: str, name: str) -> str:
    """Sentence mentioning the name (and keyword, when given) in a paragraph."""
    lower_name = name.lower()
    sentences = split_clauses(paragraph)

    for sentence in sentences:
        lowered = sentence.lower()
        if (not keyword or keyword in lowered) and lower_name in lowered:
            return truncate(clean_text(sentence), DESCRIPTION_LIMIT)

    for sentence in sentences:
        if lower_name in sentence.lower():
            return truncate(clean_text(sentence), DESCRIPTION_LIMIT)

    return FALLBACK_DESCRIPTION


class RelationshipDiscovery:
    """Finds connections from one subject's page to known people."""

    def __init__(
        self,
        registry: KnownNamesRegistry,
        keywords: dict[RelationshipType, list[str]] | None = None,
    ):
        self.registry = registry
        self.keywords = keywords or RELATIONSHIP_KEYWORDS

    def discover(self, source_id: str, content: str) -> list[Connection]:
        """Connections from `source_id` to every known name in `content`."""
        lowered = content.lower()
        connections = []

        for name in self.registry.names():
            target_id = derive_id(name)
            if target_id == source_id or name not in lowered:
                continue

            connection = self.determine_relationship(source_id, target_id, content, name)
            if connection is not None:
                connections.append(connection)

        logger.debug("Found %d connections for %s", len(connections), source_id)
        return connections

    def determine_relationship(
        self,
        source_id: str,
        target_id: str,
        content: str,
        name: str,
    ) -> Connection | None:
        """Type, strength and description for one name found in the content."""
        lower_name = name.lower()
        relevant = [p for p in split_paragraphs(content) if lower_name in p.lower()]
        if not relevant:
            return None

        for rel_type, keywords in self.keywords.items():
            for keyword in keywords:
                for paragraph in relevant:
                    if keyword not in paragraph.lower():
                        continue

                    mentions = sum(1 for p in relevant if keyword in p.lower())
                    return Connection(
                        source=source_id,
                        target=target_id,
                        type=rel_type,
                        strength=mention_strength(mentions),
                        description=best_sentence(paragraph, keyword, name),
                    )

        return Connection(
            source=source_id,
            target=target_id,
            type=RelationshipType.ASSOCIATED,
            strength=CO_MENTION_STRENGTH,
            description=best_sentence(relevant[0], "", name),
        )
