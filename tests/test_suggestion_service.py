# /tests/test_suggestion_service.py

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from eduguide.models.suggestion_model import SuggestionRequest
from eduguide.services import prompt_library, suggestion_service


def _dt(month, day):
    return datetime(2025, month, day, 10, 0, tzinfo=timezone.utc)


@pytest.fixture
def full_request():
    return SuggestionRequest.model_validate({
        "name": "Maya",
        "literacyScores": [
            {"score": 72, "date": _dt(3, 1)},
            {"score": 60, "date": _dt(1, 10)},
            {"score": 81, "date": _dt(2, 5)},
        ],
        "selScores": {"empathy": 4, "regulation": 2},
        "reflections": [
            {"note": "Quiet during group work", "date": _dt(1, 5)},
            {"note": "Helped a classmate", "date": _dt(3, 2)},
            {"note": "Finished a chapter book", "date": _dt(2, 20)},
            {"note": "Asked great questions", "date": _dt(2, 25)},
        ],
    })


def test_prompt_contains_every_section_in_order(full_request):
    prompt = suggestion_service.build_suggestion_prompt(full_request)

    opening = prompt.index("student named Maya.")
    literacy = prompt.index("Literacy Assessment:")
    sel = prompt.index("Social-Emotional Learning (SEL) Competencies")
    observations = prompt.index("Recent Teacher Observations:")
    instructions = prompt.index("Based on this information, please provide:")
    assert opening < literacy < sel < observations < instructions


def test_literacy_section_values(full_request):
    prompt = suggestion_service.build_suggestion_prompt(full_request)

    assert "- Average score: 71.0 out of 100" in prompt
    assert "- Latest score: 72 (2025-03-01)" in prompt
    assert "- Trend: improving (60 → 72)" in prompt
    assert "- Total assessments: 3" in prompt


def test_sel_section_marks_missing_values(full_request):
    prompt = suggestion_service.build_suggestion_prompt(full_request)

    assert "- Empathy: 4" in prompt
    assert "- Self-Regulation: 2" in prompt
    assert "- Cooperation: Not assessed" in prompt


def test_only_three_most_recent_reflections_are_included(full_request):
    prompt = suggestion_service.build_suggestion_prompt(full_request)

    assert '- 2025-03-02: "Helped a classmate"' in prompt
    assert '- 2025-02-25: "Asked great questions"' in prompt
    assert '- 2025-02-20: "Finished a chapter book"' in prompt
    assert "Quiet during group work" not in prompt


def test_prompt_without_data_uses_no_data_sentences():
    prompt = suggestion_service.build_suggestion_prompt(SuggestionRequest(name="Leo"))

    assert prompt_library.LITERACY_NO_DATA in prompt
    assert prompt_library.SEL_NO_DATA in prompt
    assert "Recent Teacher Observations" not in prompt
    assert prompt.endswith("Total response should be under 300 words.")


def test_prompt_is_deterministic(full_request):
    first = suggestion_service.build_suggestion_prompt(full_request)
    second = suggestion_service.build_suggestion_prompt(full_request.model_copy(deep=True))
    assert first == second


@pytest.mark.asyncio
async def test_get_teaching_suggestion_returns_gateway_text(full_request):
    gateway = MagicMock()
    gateway.generate_text = AsyncMock(return_value="1. Read aloud daily...")

    response = await suggestion_service.get_teaching_suggestion(full_request, gateway)

    assert response.suggestion == "1. Read aloud daily..."
    sent_prompt = gateway.generate_text.await_args.args[0]
    assert sent_prompt == suggestion_service.build_suggestion_prompt(full_request)
    print("\n✅ SUCCESS: test_get_teaching_suggestion_returns_gateway_text passed.")


def test_dates_keep_the_offset_the_client_sent():
    evening_in_new_york = datetime(2025, 3, 1, 21, 30, tzinfo=timezone(timedelta(hours=-5)))
    request = SuggestionRequest.model_validate({
        "name": "Maya",
        "literacyScores": [{"score": 75, "date": evening_in_new_york}],
        "reflections": [{"note": "Stayed late to finish reading", "date": evening_in_new_york}],
    })

    prompt = suggestion_service.build_suggestion_prompt(request)

    assert "- Latest score: 75 (2025-03-01)" in prompt
    assert '- 2025-03-01: "Stayed late to finish reading"' in prompt
    assert "2025-03-02" not in prompt
