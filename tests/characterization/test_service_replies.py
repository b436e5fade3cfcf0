"""Characterization tests: decode documents shaped like real service replies.

These pin down how service-side extras (``index``, ``usageMetadata``,
``modelVersion``, rating scores) and the common reply kinds decode.
"""

import json

import pytest

from gemini_response.decoding import (
    decode_response,
    decode_response_json,
    iter_decoded_chunks,
)
from gemini_response.exceptions import EmptyContentError
from gemini_response.types import (
    BlockReason,
    FinishReason,
    HarmCategory,
    HarmProbability,
)
from tests.fixtures.api_responses import golden_reply


@pytest.mark.characterization
def test_streamed_reply_chunks():
    chunks = golden_reply("streamed_chunks")

    responses = list(iter_decoded_chunks(chunks))

    assert "".join(r.text for r in responses) == "The capital of France is Paris."
    assert responses[0].candidates[0].finish_reason is None
    assert responses[-1].candidates[0].finish_reason is FinishReason.STOP


@pytest.mark.characterization
def test_safety_blocked_candidate_has_no_content(caplog):
    response = decode_response(golden_reply("safety_blocked_candidate"))

    (candidate,) = response.candidates
    assert candidate.finish_reason is FinishReason.SAFETY
    assert candidate.content.parts == []
    assert [r.blocked for r in candidate.safety_ratings] == [False, True]
    assert candidate.safety_ratings[1].category is HarmCategory.DANGEROUS_CONTENT
    assert candidate.safety_ratings[1].probability is HarmProbability.HIGH
    assert response.text is None
    assert "Could not get a text part from the first candidate." in caplog.text


@pytest.mark.characterization
def test_blocked_prompt():
    response = decode_response(golden_reply("blocked_prompt"))

    assert response.candidates == []
    assert response.prompt_feedback.block_reason is BlockReason.SAFETY
    probabilities = [r.probability for r in response.prompt_feedback.safety_ratings]
    assert probabilities == [
        HarmProbability.NEGLIGIBLE,
        HarmProbability.HIGH,
        HarmProbability.MEDIUM,
        HarmProbability.NEGLIGIBLE,
    ]


@pytest.mark.characterization
def test_cited_reply():
    response = decode_response(golden_reply("cited_reply"))

    (candidate,) = response.candidates
    assert response.text.startswith("Four score and seven years ago")
    (citation,) = candidate.citation_metadata.citation_sources
    assert (citation.start_index, citation.end_index) == (0, 86)
    assert citation.uri == "https://en.wikipedia.org/wiki/Gettysburg_Address"
    assert citation.license == ""


@pytest.mark.characterization
def test_empty_content_defect():
    with pytest.raises(EmptyContentError):
        decode_response(golden_reply("empty_content_defect"))


SINGLE_DOCUMENTS = ["safety_blocked_candidate", "blocked_prompt", "cited_reply"]


@pytest.mark.characterization
@pytest.mark.parametrize("name", SINGLE_DOCUMENTS)
def test_json_body_decodes_like_parsed_document(name):
    document = golden_reply(name)

    from_body = decode_response_json(json.dumps(document).encode())

    assert from_body == decode_response(document)
