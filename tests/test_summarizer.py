"""
Unit tests for the extractive summarizer
"""
import pytest

from conftest import MITOCHONDRIA_SENTENCES, PHOTOSYNTHESIS
from studynotes.engine.summarizer import score_sentence, summarize


def _summary_indexes(summary):
    assert summary.endswith(".")
    return [MITOCHONDRIA_SENTENCES.index(s) for s in summary[:-1].split(". ")]


class TestShortContent:
    def test_short_content_returned_unchanged(self):
        """Anything under 200 characters comes back as-is"""
        for text in ["A. B. C.", "", "   ", "no punctuation at all", "x" * 199]:
            assert summarize(text) == text

    def test_few_sentences_rejoined_in_order(self):
        sentences = [f"Sentence number {i} talks about something fairly long and specific" for i in range(5)]
        text = "  " + "!   ".join(sentences) + "?"
        assert len(text) >= 200
        assert summarize(text) == ". ".join(sentences) + "."

    def test_punctuation_only_content_unchanged(self):
        text = "." * 250
        assert summarize(text) == text


class TestScoring:
    def test_length_score_is_capped(self):
        assert score_sentence("a" * 100, []) == 3

    def test_each_keyword_adds_two(self):
        score = score_sentence("Light and ENERGY", ["light", "energy", "absent"])
        assert score == pytest.approx(16 / 20 + 4)


class TestLongContent:
    def test_photosynthesis_keeps_first_and_last(self):
        """Six sentences, all of them survive the selection"""
        summary = summarize(PHOTOSYNTHESIS)
        assert summary.startswith("Photosynthesis converts light into energy. ")
        assert summary.endswith("This process is essential for life on Earth.")
        assert summary == PHOTOSYNTHESIS

    def test_padded_content_keeps_first_and_last(self):
        text = PHOTOSYNTHESIS + " " + " ".join(
            f"Filler sentence {i} repeats that chlorophyll captures light." for i in range(6)
        )
        summary = summarize(text)
        assert summary.startswith("Photosynthesis converts light into energy. ")
        assert summary.endswith("Filler sentence 5 repeats that chlorophyll captures light.")

    def test_low_scoring_sentences_dropped(self, mitochondria_text):
        summary = summarize(mitochondria_text)
        assert "So it is" not in summary
        assert "And so on" not in summary
        indexes = _summary_indexes(summary)
        assert indexes[0] == 0
        assert indexes[-1] == len(MITOCHONDRIA_SENTENCES) - 1
        assert 8 <= len(indexes) <= 9

    def test_original_order_preserved(self, mitochondria_text):
        indexes = _summary_indexes(summarize(mitochondria_text))
        assert indexes == sorted(indexes)
        assert len(set(indexes)) == len(indexes)

    def test_topic_sentence_of_each_paragraph_kept(self):
        """A weak sentence survives when it opens a paragraph"""
        text = (
            ". ".join(MITOCHONDRIA_SENTENCES[:5]) + ".\n\n"
            + ". ".join(MITOCHONDRIA_SENTENCES[5:]) + "."
        )
        summary = summarize(text)
        assert "And so on" in summary
        assert "So it is" not in summary
        indexes = _summary_indexes(summary)
        assert indexes == sorted(indexes)
