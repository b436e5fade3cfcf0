"""Unit tests for the GenerateContentResponse.text accessor."""

import logging
import os
from unittest.mock import patch

import pytest

from gemini_response.config import config_override, resolve_config
from gemini_response.types import (
    CandidateResponse,
    GenerateContentResponse,
    InlineData,
    ModelContent,
    Part,
)


def _response(*parts: Part) -> GenerateContentResponse:
    return GenerateContentResponse(
        candidates=[CandidateResponse(content=ModelContent(parts=list(parts)))]
    )


class TestText:
    @pytest.mark.unit
    def test_first_part_of_first_candidate(self):
        response = _response(Part(text="first"), Part(text="second"))
        response.candidates.append(
            CandidateResponse(content=ModelContent(parts=[Part(text="other")]))
        )

        assert response.text == "first"

    @pytest.mark.unit
    def test_no_candidates(self, caplog):
        response = GenerateContentResponse(candidates=[])

        assert response.text is None
        assert "no candidates" in caplog.text

    @pytest.mark.unit
    def test_no_parts(self, caplog):
        assert _response().text is None
        assert "Could not get a text part from the first candidate." in caplog.text

    @pytest.mark.unit
    def test_first_part_without_text(self):
        response = _response(
            Part(inline_data=InlineData(mime_type="image/jpeg", data="/9j/")),
            Part(text="later text is not used"),
        )
        assert response.text is None

    @pytest.mark.unit
    def test_empty_string_is_text(self):
        assert _response(Part(text="")).text == ""

    @pytest.mark.unit
    def test_level_from_ambient_config(self, caplog):
        with caplog.at_level(logging.INFO, logger="gemini_response"):
            with config_override(missing_text_log_level="DEBUG"):
                assert GenerateContentResponse().text is None

        assert caplog.records == []

    @pytest.mark.unit
    def test_level_from_explicit_config(self, caplog):
        config = resolve_config({"missing_text_log_level": "WARNING"})

        with caplog.at_level(logging.DEBUG, logger="gemini_response"):
            assert GenerateContentResponse().text_with_config(config) is None

        (record,) = caplog.records
        assert record.levelno == logging.WARNING

    @pytest.mark.unit
    def test_preview_construction_is_mutable(self):
        response = _response(Part(text="draft"))
        response.candidates[0].content.parts[0].text = "final"

        assert response.text == "final"

    @pytest.mark.unit
    def test_invalid_environment_level_does_not_raise(self, caplog):
        with patch.dict(os.environ, {"GEMINI_RESPONSE_MISSING_TEXT_LOG_LEVEL": "LOUD"}):
            assert GenerateContentResponse(candidates=[]).text is None

        assert "Ignoring invalid GEMINI_RESPONSE_* configuration" in caplog.text
        assert "no candidates" in caplog.text
        assert caplog.records[-1].levelno == logging.ERROR
