"""Structured attribute extraction from a person's page.

Every extractor tolerates missing data and falls back to a default instead of
raising: 0 for unknown years, "Unknown" country, "Historical Figure"
profession and an empty biography.
"""

from ..fetch.document import PageDocument
from ..models.people import Person, derive_id, era_for_year, group_for_era
from .text import BRACKETED, clean_text, find_years, first_year, truncate

# Checked in order; the first keyword found in the opening paragraph wins.
PROFESSIONS = [
    "philosopher",
    "scientist",
    "physicist",
    "mathematician",
    "writer",
    "artist",
    "politician",
    "leader",
    "general",
    "composer",
    "inventor",
    "explorer",
    "king",
    "queen",
    "emperor",
    "empress",
    "president",
    "prime minister",
]
DEFAULT_PROFESSION = "Historical Figure"

# Infobox labels checked for a country, highest priority first
COUNTRY_LABELS = ["Nationality", "Country", "Born", "Citizenship"]
DEFAULT_COUNTRY = "Unknown"

BIO_LIMIT = 500


def extract_lifespan(doc: PageDocument) -> tuple[int, int]:
    """Return (birth_year, death_year); 0 means unknown.

    Infobox birth/death fields win; the opening paragraph fills the gaps with
    the first and second four-digit numbers it mentions.
    """
    birth = first_year(doc.select_text(".infobox .bday"))
    death = first_year(doc.select_text(".infobox .dday"))

    if birth == 0 or death == 0:
        years = find_years(doc.first_paragraph())
        if years and birth == 0:
            birth = years[0]
        if len(years) >= 2 and death == 0:
            death = years[1]

    return birth, death


def extract_profession(doc: PageDocument) -> str:
    first_para = doc.first_paragraph().lower()
    for profession in PROFESSIONS:
        if profession in first_para:
            return profession.title()
    return DEFAULT_PROFESSION


def extract_country(doc: PageDocument) -> str:
    """Country from the infobox, in label priority order."""
    for label in COUNTRY_LABELS:
        for header, value in doc.infobox_rows():
            if label not in header:
                continue

            country = BRACKETED.sub("", value).strip()
            if label == "Born":
                # Birthplace is usually "town, region, country"
                country = country.split(",")[-1].strip()

            if country:
                return country

    return DEFAULT_COUNTRY


def extract_biography(doc: PageDocument) -> str:
    return truncate(clean_text(doc.first_paragraph()), BIO_LIMIT)


def extract_image_url(doc: PageDocument) -> str | None:
    """Protocol-qualified URL of the infobox portrait, if any."""
    image = doc.soup.select_one(".infobox img")
    if image is None or not image.get("src"):
        return None
    src = image["src"]
    if src.startswith("//"):
        return "https:" + src
    return src


def build_person(name: str, doc: PageDocument) -> Person:
    """Run every extractor and assemble a Person record."""
    birth, death = extract_lifespan(doc)
    era = era_for_year(birth)

    return Person(
        id=derive_id(name),
        name=name,
        era=era,
        profession=extract_profession(doc),
        year_birth=birth,
        year_death=death or None,
        country=extract_country(doc),
        info=extract_biography(doc),
        group=group_for_era(era),
        image_url=extract_image_url(doc),
    )
