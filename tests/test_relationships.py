"""Tests for the relationship lexicon and classifier."""

import threading

import pytest

from history_graph_analyzer.extract.classifier import RelationshipClassifier, strength_from_score
from history_graph_analyzer.extract.lexicon import DEFAULT_LEXICON, RelationshipLexicon
from history_graph_analyzer.models.relationships import RelationshipType


@pytest.fixture
def classifier():
    return RelationshipClassifier(RelationshipLexicon())


class TestStrengthMapping:
    @pytest.mark.parametrize(
        "score,strength",
        [(-1.0, 0), (0.0, 0), (0.2, 1), (0.5, 1), (1.0, 1), (3.2, 4), (10.0, 10), (42.0, 10)],
    )
    def test_mapping(self, score, strength):
        assert strength_from_score(score) == strength


class TestAnalyzeText:
    def test_empty_text(self, classifier):
        assert classifier.analyze_text("") == {}
        assert classifier.analyze_text("!!! ...") == {}

    def test_only_positive_scores(self, classifier):
        scores = classifier.analyze_text("Galileo was a rival of the astronomer.")
        assert RelationshipType.RIVAL in scores
        assert all(score > 0 for score in scores.values())

    def test_single_word_exact_and_stem(self, classifier):
        # "rival": exact match (10) + prefix rule (7), over sqrt(1)
        assert classifier.analyze_text("rival") == {RelationshipType.RIVAL: pytest.approx(17.0)}

    def test_stem_only(self, classifier):
        # "rivals" is "rival" plus one character: 10 * 0.7
        scores = classifier.analyze_text("rivals")
        assert scores[RelationshipType.RIVAL] == pytest.approx(7.0)

    def test_stem_too_long_ignored(self, classifier):
        assert RelationshipType.RIVAL not in classifier.analyze_text("rivalrous")

    def test_multi_word_phrase(self, classifier):
        # "studied under" (9 * 1.5) over sqrt(2)
        scores = classifier.analyze_text("studied under")
        assert scores[RelationshipType.STUDENT] == pytest.approx(13.5 / 2 ** 0.5)

    def test_length_normalisation(self, classifier):
        short = classifier.analyze_text("rival")[RelationshipType.RIVAL]
        longer = classifier.analyze_text("rival of many people")[RelationshipType.RIVAL]
        assert longer == pytest.approx(short / 2)


class TestClassify:
    def test_mentor_example(self, classifier):
        result = classifier.classify(
            "Socrates was the teacher and mentor of Plato.", "socrates", "plato"
        )

        assert result.type == RelationshipType.MENTOR
        assert result.strength >= 8
        assert "teacher" in result.description
        assert "mentor" in result.description

    def test_no_phrases_no_target(self, classifier):
        result = classifier.classify("The weather in Athens was mild that year.", "Socrates", "Plato")

        assert result.type is None
        assert result.strength == 0
        assert not result.found
        assert result.description == "Socrates and Plato were connected in historical context."

    def test_fallback_description_truncated(self, classifier):
        source, target = "Alexandros " * 12, "Theodoros " * 12
        result = classifier.classify("Nothing happened.", source.strip(), target.strip())

        assert len(result.description) <= 200
        assert result.description.endswith("...")

    def test_no_phrases_with_target_is_associated(self, classifier):
        result = classifier.classify("Plato lived in Athens.", "Socrates", "Plato")

        assert result.type == RelationshipType.ASSOCIATED
        assert result.strength == 1
        assert result.description == "Plato lived in Athens."

    def test_weak_score_falls_back(self, classifier):
        # One weak cue diluted by a long text stays below the threshold
        text = "Plato " + "walked along the quiet road near the old harbour " * 6 + "together."
        result = classifier.classify(text, "Socrates", "Plato")
        assert result.type == RelationshipType.ASSOCIATED

    @pytest.mark.parametrize(
        "text",
        [
            "Newton and Leibniz were bitter rivals over the calculus.",
            "Plato studied under Socrates for many years. He was a devoted pupil.",
            "Nothing relevant here at all.",
            "",
        ],
    )
    def test_strength_range(self, classifier, text):
        result = classifier.classify(text, "Newton", "Leibniz")
        assert result.strength == 0 or 1 <= result.strength <= 10

    def test_description_prefers_names_and_keywords(self, classifier):
        text = (
            "Aristotle was born in Stagira. "
            "Plato was his teacher at the Academy. "
            "Aristotle later tutored Alexander."
        )
        result = classifier.classify(text, "Aristotle", "Plato")

        assert result.type == RelationshipType.MENTOR
        assert result.description == "Plato was his teacher at the Academy."

    def test_description_strips_citations(self, classifier):
        result = classifier.classify("Socrates taught Plato[3] in   Athens.", "Socrates", "Plato")
        assert result.description == "Socrates taught Plato in Athens."

    def test_description_truncated(self, classifier):
        text = "Socrates was the mentor of Plato " + "and many others " * 20 + "in Athens."
        result = classifier.classify(text, "Socrates", "Plato")

        assert len(result.description) <= 200
        assert result.description.endswith("...")


class TestLexicon:
    def test_default_table_is_copied(self):
        lexicon = RelationshipLexicon()
        lexicon.reinforce("painted painted", RelationshipType.STUDENT)
        assert "painted" not in DEFAULT_LEXICON[RelationshipType.STUDENT]

    def test_reinforce_existing_and_new(self):
        lexicon = RelationshipLexicon()
        updated = lexicon.reinforce(
            "The apprentice studied. The apprentice painted. Painted frescoes.",
            RelationshipType.STUDENT,
        )

        assert updated == {"apprentice": 9, "painted": 3}
        assert lexicon.weight(RelationshipType.STUDENT, "studied") == 0

    def test_reinforce_caps_weight(self):
        lexicon = RelationshipLexicon()
        lexicon.reinforce("mentor mentor mentor", RelationshipType.MENTOR)
        assert lexicon.weight(RelationshipType.MENTOR, "mentor") == 10

    def test_reinforce_ignores_stopwords_and_short_tokens(self):
        lexicon = RelationshipLexicon()
        assert lexicon.reinforce("the the ox ox was was", RelationshipType.FRIEND) == {}

    def test_reinforce_unknown_type(self):
        lexicon = RelationshipLexicon()
        assert lexicon.reinforce("ally ally", RelationshipType.ASSOCIATED) == {}
        assert RelationshipType.ASSOCIATED not in lexicon.types

    def test_reinforced_phrase_affects_scoring(self):
        lexicon = RelationshipLexicon()
        classifier = RelationshipClassifier(lexicon)
        assert RelationshipType.RIVAL not in classifier.analyze_text("feud")

        lexicon.reinforce("feud feud", RelationshipType.RIVAL)
        assert RelationshipType.RIVAL in classifier.analyze_text("feud")

    def test_top_indicators(self):
        lexicon = RelationshipLexicon()
        assert lexicon.top_indicators(RelationshipType.MENTOR, 3) == ["mentor", "teacher", "tutor"]
        assert lexicon.top_indicators(RelationshipType.ASSOCIATED, 3) == []

    def test_concurrent_reinforce_and_classify(self):
        lexicon = RelationshipLexicon()
        classifier = RelationshipClassifier(lexicon)
        errors = []

        def learn():
            for i in range(50):
                lexicon.reinforce(f"word{i} word{i} rival rival", RelationshipType.RIVAL)

        def read():
            try:
                for _ in range(50):
                    classifier.classify("Newton was a rival of Leibniz.", "Newton", "Leibniz")
            except Exception as exc:  # pragma: no cover - surfaced below
                errors.append(exc)

        threads = [threading.Thread(target=learn)] + [threading.Thread(target=read) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert lexicon.weight(RelationshipType.RIVAL, "rival") == 10
        assert lexicon.weight(RelationshipType.RIVAL, "word49") == 3
