"""Attribute, entity and relationship extraction."""

from .attributes import build_person
from .classifier import RelationshipClassifier, strength_from_score
from .discovery import KnownNamesRegistry, RelationshipDiscovery
from .lexicon import RelationshipLexicon
from .ner import NameRecognizer

__all__ = [
    "build_person",
    "RelationshipClassifier",
    "strength_from_score",
    "KnownNamesRegistry",
    "RelationshipDiscovery",
    "RelationshipLexicon",
    "NameRecognizer",
]
