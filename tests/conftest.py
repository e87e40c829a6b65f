"""
Shared test fixtures
"""

import pytest
from unittest.mock import AsyncMock, MagicMock


@pytest.fixture
def hot_prospect():
    """Prospect that maxes out every dimension"""
    return {
        "budget_range": "50K+",
        "decision_maker": "Yes",
        "pain_points": "critical issue with reporting",
        "timeline": "ASAP",
        "industry": "Finance",
        "company_size": "Enterprise"
    }


@pytest.fixture
def mid_prospect():
    """Prospect scoring exactly 60"""
    return {
        "budget_range": "1K-10K",
        "role": "head of ops",
        "pain_points": "some friction",
        "timeline": "6 months this year"
    }


@pytest.fixture
def mock_store():
    """Mock Supabase store"""
    store = MagicMock()
    store.insert_row = AsyncMock(side_effect=lambda table, row: {
        **row,
        "id": "session-1",
        "created_at": "2026-10-17T12:00:00+00:00"
    })
    store.select_rows = AsyncMock(return_value=([], 0))
    store.get_row = AsyncMock(return_value=None)
    store.delete_rows = AsyncMock(return_value=[])
    return store


def make_provider(text):
    """Mock LLM provider returning text (or None for a failure)"""
    provider = MagicMock()
    provider.generate = AsyncMock(return_value=text)
    return provider


@pytest.fixture
def working_providers():
    return make_provider("Gemini strategy"), make_provider("DeepSeek strategy")


@pytest.fixture
def make_llm_provider():
    return make_provider
