"""Relationship models for the historical network."""

from enum import Enum

from pydantic import BaseModel, Field


class RelationshipType(str, Enum):
    """Types of relationships between historical figures."""

    MENTOR = "mentor"
    STUDENT = "student"
    COLLEAGUE = "colleague"
    INFLUENCED = "influenced"
    RIVAL = "rival"
    FRIEND = "friend"
    ADMIRED = "admired"

    # Generic fallback when two figures co-occur without a recognisable cue
    ASSOCIATED = "associated"


class Connection(BaseModel):
    """A directed relationship between two people."""

    source: str
    target: str
    type: RelationshipType
    strength: int = Field(ge=0, le=10)
    description: str = Field(default="", max_length=200)

    @property
    def key(self) -> tuple[str, str]:
        """Deduplication key used by graph stores."""
        return (self.source, self.target)

    def to_link(self) -> dict:
        """Serialize in the link shape used by graph exports."""
        return {
            "source": self.source,
            "target": self.target,
            "type": self.type.value,
            "strength": self.strength,
            "description": self.description,
        }


class Classification(BaseModel):
    """Outcome of classifying free text for a source/target pair."""

    type: RelationshipType | None = None
    strength: int = Field(default=0, ge=0, le=10)
    description: str = ""
    scores: dict[RelationshipType, float] = Field(default_factory=dict)

    @property
    def found(self) -> bool:
        return self.type is not None and self.strength > 0


class SearchResult(BaseModel):
    """A page title suggested by the encyclopedia search endpoint."""

    title: str
    description: str = ""
    url: str = ""
