"""
Global test configuration and shared response documents.
"""

import os

import pytest

from gemini_response.config import clear_config_cache, resolve_config
from tests.fixtures import api_responses

# --- Environment Isolation (Autouse) ---


@pytest.fixture(autouse=True)
def isolate_response_env(request, monkeypatch):
    """Ensure a clean GEMINI_RESPONSE_* environment for each test.

    The cached environment configuration is dropped before and after each
    test. Escape hatch: @pytest.mark.allow_env_pollution keeps the current env.
    """
    clear_config_cache()
    if not request.node.get_closest_marker("allow_env_pollution"):
        for key in list(os.environ.keys()):
            if key.upper().startswith("GEMINI_RESPONSE_"):
                monkeypatch.delenv(key, raising=False)
    yield
    clear_config_cache()


def pytest_configure(config):
    """Configure custom markers for test organization."""
    markers = [
        "unit: Fast, isolated unit tests",
        "contract: Behavioral contracts of the decoding layer",
        "characterization: Golden documents captured from real service replies",
        "allow_env_pollution: Do not strip GEMINI_RESPONSE_* variables",
    ]
    for marker in markers:
        config.addinivalue_line("markers", marker)


# --- Configuration ---


@pytest.fixture
def decoder_config():
    """Default configuration resolved from a clean environment."""
    return resolve_config()


# --- Response documents (see tests/fixtures/api_responses.py) ---


@pytest.fixture
def response_document():
    """A successful single-candidate reply with citations."""
    return api_responses.response_document()


@pytest.fixture
def blocked_prompt_document():
    """A reply whose prompt was blocked: no candidates key at all."""
    return api_responses.blocked_prompt_document()


@pytest.fixture
def make_candidate():
    """Factory for candidate documents with selected keys replaced or removed.

    Pass ``key=None`` to drop a key entirely.
    """
    return api_responses.candidate_document
