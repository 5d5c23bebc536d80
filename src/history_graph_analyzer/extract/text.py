"""Text normalisation helpers shared by the extractors.

Two sentence splitters exist on purpose: the classifier keeps terminal
punctuation on each sentence, while relationship discovery splits on it and
drops it.
"""

import re

CITATION = re.compile(r"\[\d+\]")
BRACKETED = re.compile(r"\[.*?\]")
WHITESPACE = re.compile(r"\s+")
PUNCTUATION = re.compile(r"[^\w\s']")
YEAR = re.compile(r"\b\d{4}\b")

# Sentence end followed by whitespace or a closing parenthesis
SENTENCE_BOUNDARY = re.compile(r"[.!?][\s)]")
SENTENCE_SPLIT = re.compile(r"[.!?][\"\s)]")


def collapse_whitespace(text: str) -> str:
    return WHITESPACE.sub(" ", text).strip()


def strip_citations(text: str) -> str:
    """Remove numeric citation markers such as '[12]'."""
    return CITATION.sub("", text)


def clean_text(text: str) -> str:
    """Remove citation and other bracketed markers, then collapse whitespace."""
    text = CITATION.sub("", text)
    text = BRACKETED.sub("", text)
    return collapse_whitespace(text)


def truncate(text: str, limit: int) -> str:
    """Truncate to `limit` characters, ending with an ellipsis when cut."""
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


def normalize(text: str) -> str:
    """Lowercase and replace punctuation (apostrophes kept) with spaces."""
    text = PUNCTUATION.sub(" ", text.lower())
    return collapse_whitespace(text)


def tokenize(text: str) -> list[str]:
    return normalize(text).split()


def find_years(text: str) -> list[int]:
    """All four-digit numbers in textual order."""
    return [int(match) for match in YEAR.findall(text)]


def first_year(text: str) -> int:
    """First four-digit number in the text, or 0."""
    years = find_years(text)
    return years[0] if years else 0


def split_sentences(text: str) -> list[str]:
    """Split text into sentences, keeping terminal punctuation.

    The character after the punctuation (space or ')') is consumed.
    """
    sentences = []
    start = 0
    for match in SENTENCE_BOUNDARY.finditer(text):
        end = match.end() - 1
        sentences.append(text[start:end])
        start = end + 1
    if start < len(text):
        sentences.append(text[start:])
    return sentences or [text]


def split_clauses(text: str) -> list[str]:
    """Split text on sentence punctuation, dropping it and empty pieces."""
    return [piece.strip() for piece in SENTENCE_SPLIT.split(text) if piece.strip()]


def split_paragraphs(text: str) -> list[str]:
    """Split on single newlines; extracted page content has one paragraph per line."""
    return text.split("\n")
