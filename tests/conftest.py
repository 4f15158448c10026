#!/usr/bin/env python3

import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add the src directory to the Python path for imports
project_root = Path(__file__).parent.parent
src_path = project_root / "src"
sys.path.insert(0, str(src_path))


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (may require external services)"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to handle integration test marking."""
    for item in items:
        # Automatically mark integration tests
        if "integration" in item.nodeid:
            item.add_marker(pytest.mark.integration)


# Test fixtures
@pytest.fixture
def anki_mock_response():
    """Fixture for mocking Anki Connect responses."""

    def _mock_response(result=None, error=None):
        mock_response = Mock()
        mock_response.json.return_value = {"result": result, "error": error}
        mock_response.raise_for_status.return_value = None
        return mock_response

    return _mock_response


@pytest.fixture
def sample_anki_deck_names():
    """Fixture providing sample Anki deck names."""
    return ["Default", "Spanish"]


@pytest.fixture
def sample_anki_model_names():
    """Fixture providing sample Anki model names."""
    return ["Basic", "Cloze"]


@pytest.fixture
def sample_note_arguments():
    """Fixture providing create_note arguments."""
    return {
        "deckName": "Spanish",
        "modelName": "Basic",
        "fields": {"Front": "el perro", "Back": "the dog"},
        "tags": ["mcp-test-vocab"],
    }
