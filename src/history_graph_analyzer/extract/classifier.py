"""Relationship classification from free text.

Scores text against the lexicon, picks the best relationship type, maps the
score onto a 0-10 strength and extracts the most relevant sentence as a
description.
"""

import math
import re

from ..models.relationships import Classification, RelationshipType
from .lexicon import RelationshipLexicon
from .text import collapse_whitespace, normalize, split_sentences, strip_citations, truncate

PHRASE_BONUS = 1.5
STEM_FACTOR = 0.7
STEM_SLACK = 3

MIN_CONFIDENT_SCORE = 1.0
ASSOCIATED_SCORE = 0.5

SOURCE_POINTS = 2
TARGET_POINTS = 2
KEYWORD_POINTS = 3
DESCRIPTION_LIMIT = 200


def strength_from_score(score: float) -> int:
    """Map a normalized score onto the 0-10 strength scale."""
    if score > 10:
        return 10
    if score > 0:
        return max(1, min(10, math.ceil(score)))
    return 0


def _name_pattern(name: str) -> re.Pattern:
    return re.compile(r"\b" + re.escape(name) + r"\b", re.IGNORECASE)


class RelationshipClassifier:
    """Scores free text against a shared relationship lexicon."""

    def __init__(self, lexicon: RelationshipLexicon | None = None):
        self.lexicon = lexicon or RelationshipLexicon()

    def analyze_text(self, text: str) -> dict[RelationshipType, float]:
        """Normalized score per relationship type; only positive scores are kept.

        Multi-word phrases score weight x 1.5 when present anywhere. Single
        words score their weight per exact token, plus weight x 0.7 per token
        that starts with the phrase and is at most three characters longer.
        Raw scores are divided by the square root of the token count.
        """
        processed = normalize(text)
        words = processed.split()
        if not words:
            return {}

        table = self.lexicon.snapshot()
        length_norm = math.sqrt(len(words))
        scores = {}

        for rel_type, corpus in table.items():
            score = 0.0
            for phrase, weight in corpus.items():
                if " " in phrase:
                    if phrase in processed:
                        score += weight * PHRASE_BONUS
                    continue

                for word in words:
                    if word == phrase:
                        score += weight
                    if word.startswith(phrase) and len(word) <= len(phrase) + STEM_SLACK:
                        score += weight * STEM_FACTOR

            normalized = score / length_norm
            if normalized > 0:
                scores[rel_type] = normalized

        return scores

    def classify(self, text: str, source: str, target: str) -> Classification:
        """Determine the most probable relationship between source and target.

        Below the confidence threshold, a literal mention of the target still
        yields a weak "associated" relationship; otherwise nothing is found.
        """
        scores = self.analyze_text(text)

        best_type: RelationshipType | None = None
        best_score = 0.0
        for rel_type, score in scores.items():
            if score > best_score:
                best_type, best_score = rel_type, score

        if best_type is None or best_score < MIN_CONFIDENT_SCORE:
            if target.lower() in text.lower():
                best_type, best_score = RelationshipType.ASSOCIATED, ASSOCIATED_SCORE
            else:
                best_type, best_score = None, 0.0

        return Classification(
            type=best_type,
            strength=strength_from_score(best_score),
            description=self.describe(text, source, target, best_type),
            scores=scores,
        )

    def describe(
        self,
        text: str,
        source: str,
        target: str,
        rel_type: RelationshipType | None,
    ) -> str:
        """Pick the sentence that best describes the relationship.

        Sentences earn points for naming the source, naming the target and
        containing a lexicon phrase of `rel_type`; the first best one wins.
        """
        source_pattern = _name_pattern(source)
        target_pattern = _name_pattern(target)
        keywords = list(self.lexicon.phrases(rel_type)) if rel_type else []

        best_sentence = ""
        best_score = 0
        for sentence in split_sentences(text):
            score = 0
            if source_pattern.search(sentence):
                score += SOURCE_POINTS
            if target_pattern.search(sentence):
                score += TARGET_POINTS
            lowered = sentence.lower()
            if any(keyword in lowered for keyword in keywords):
                score += KEYWORD_POINTS

            if score > best_score:
                best_sentence, best_score = sentence, score

        if not best_sentence:
            fallback = f"{source} and {target} were connected in historical context."
            return truncate(fallback, DESCRIPTION_LIMIT)

        cleaned = collapse_whitespace(strip_citations(best_sentence))
        return truncate(cleaned, DESCRIPTION_LIMIT).strip()
