"""Tests for text normalisation and splitting."""

from history_graph_analyzer.extract.text import (
    clean_text,
    find_years,
    first_year,
    normalize,
    split_clauses,
    split_sentences,
    strip_citations,
    tokenize,
    truncate,
)


class TestCleaning:
    def test_strip_citations(self):
        assert strip_citations("He was born[1] in Athens.[23]") == "He was born in Athens."

    def test_clean_text_removes_all_brackets(self):
        assert clean_text("England [note a]  and\n Wales[2]") == "England and Wales"

    def test_truncate(self):
        assert truncate("short", 10) == "short"
        cut = truncate("x" * 600, 500)
        assert len(cut) == 500
        assert cut.endswith("...")

    def test_normalize_keeps_apostrophes(self):
        assert normalize("Newton's  Laws, (1687)!") == "newton's laws 1687"

    def test_tokenize(self):
        assert tokenize("The teacher, and mentor.") == ["the", "teacher", "and", "mentor"]
        assert tokenize("  ...  ") == []


class TestYears:
    def test_find_years_in_order(self):
        assert find_years("(31 March 1685 - 28 July 1750)") == [1685, 1750]

    def test_first_year_defaults_to_zero(self):
        assert first_year("1643-01-04") == 1643
        assert first_year("unknown") == 0
        assert first_year("c. 470 BC") == 0


class TestSentenceSplitting:
    def test_keeps_punctuation(self):
        text = "Socrates taught Plato. Plato taught Aristotle! Did he?"
        assert split_sentences(text) == [
            "Socrates taught Plato.",
            "Plato taught Aristotle!",
            "Did he?",
        ]

    def test_closing_parenthesis_is_a_boundary(self):
        sentences = split_sentences("He wrote (in Latin.) Then he left.")
        assert sentences[0] == "He wrote (in Latin."

    def test_no_boundary_returns_whole_text(self):
        assert split_sentences("no punctuation here") == ["no punctuation here"]

    def test_clauses_drop_punctuation_and_blanks(self):
        text = "Plato was a student. He wrote dialogues.  "
        assert split_clauses(text) == ["Plato was a student", "He wrote dialogues"]
