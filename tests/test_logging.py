"""
Unit tests for engine timing logs
"""
import pytest
from structlog.testing import capture_logs

from conftest import PHOTOSYNTHESIS
from studynotes.engine.keywords import extract_keywords
from studynotes.services.logging import log_performance


class TestLogPerformance:
    def test_records_input_and_result_sizes(self):
        """Completed calls log the text length and how many keywords came back"""
        timed = log_performance("fallback_keywords")(extract_keywords)
        with capture_logs() as logs:
            result = timed(PHOTOSYNTHESIS)
        assert result == extract_keywords(PHOTOSYNTHESIS)
        entry = logs[-1]
        assert entry["event"] == "analysis_completed"
        assert entry["operation"] == "fallback_keywords"
        assert entry["input_chars"] == len(PHOTOSYNTHESIS)
        assert entry["result_size"] == 10
        assert entry["duration_ms"] >= 0

    def test_failure_logged_and_reraised(self):
        def broken(text):
            raise ValueError("bad input")

        timed = log_performance("broken")(broken)
        with capture_logs() as logs:
            with pytest.raises(ValueError):
                timed("some notes")
        assert logs[-1]["event"] == "analysis_failed"
        assert logs[-1]["input_chars"] == len("some notes")
        assert logs[-1]["error"] == "bad input"

    def test_wrapped_name_kept(self):
        assert log_performance("x")(extract_keywords).__name__ == "extract_keywords"
