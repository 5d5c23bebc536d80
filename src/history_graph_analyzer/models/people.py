"""Person model and the pure functions that derive its fields."""

import re

from pydantic import BaseModel, model_validator

_NON_ID_CHARS = re.compile(r"[^a-z0-9\-]")

# Upper bounds (exclusive) on birth year, checked in order.
# Classical Antiquity runs up to and including 500 BC.
ERA_BUCKETS: list[tuple[int, str]] = [
    (-800, "Ancient (Pre-Classical)"),
    (-499, "Classical Antiquity"),
    (476, "Ancient"),
    (1000, "Early Medieval"),
    (1300, "High Medieval"),
    (1500, "Late Medieval"),
    (1650, "Renaissance"),
    (1800, "Early Modern"),
    (1914, "Modern"),
]
LATEST_ERA = "Contemporary"

ERA_GROUPS: dict[str, int] = {
    "Ancient (Pre-Classical)": 1,
    "Classical Antiquity": 1,
    "Ancient": 1,
    "Early Medieval": 2,
    "High Medieval": 2,
    "Late Medieval": 2,
    "Renaissance": 3,
    "Early Modern": 4,
    "Modern": 5,
    "Contemporary": 6,
}
UNGROUPED = 7


def derive_id(name: str) -> str:
    """Derive the stable identifier for a display name.

    >>> derive_id("Isaac Newton")
    'isaac-newton'
    """
    slug = name.lower().replace(" ", "-")
    return _NON_ID_CHARS.sub("", slug)


def era_for_year(year: int) -> str:
    """Map a birth year onto a named era."""
    for upper, era in ERA_BUCKETS:
        if year < upper:
            return era
    return LATEST_ERA


def group_for_era(era: str) -> int:
    """Visualization group for an era; unknown eras share a final group."""
    return ERA_GROUPS.get(era, UNGROUPED)


class Person(BaseModel):
    """A historical figure scraped from an encyclopedia page."""

    id: str
    name: str
    era: str = LATEST_ERA
    profession: str = "Historical Figure"
    year_birth: int = 0
    year_death: int | None = None
    country: str = "Unknown"
    info: str = ""
    group: int = UNGROUPED
    image_url: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _derive_group(cls, data):
        """Group follows the era unless given explicitly."""
        if isinstance(data, dict) and data.get("group") is None:
            data = {**data, "group": group_for_era(data.get("era", LATEST_ERA))}
        return data

    @classmethod
    def from_name(cls, name: str, **fields) -> "Person":
        """Build a person whose id is derived from the display name."""
        return cls(id=derive_id(name), name=name, **fields)

    def lifespan(self) -> str:
        """Return a short lifespan string such as '1643-1727'."""
        birth = str(self.year_birth) if self.year_birth else "?"
        death = str(self.year_death) if self.year_death else ""
        return f"{birth}-{death}"

    def to_node(self) -> dict:
        """Serialize in the node shape used by graph exports."""
        return {
            "id": self.id,
            "name": self.name,
            "era": self.era,
            "profession": self.profession,
            "imageUrl": self.image_url,
            "yearBirth": self.year_birth,
            "yearDeath": self.year_death,
            "country": self.country,
            "info": self.info,
            "group": self.group,
        }
