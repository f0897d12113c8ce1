# /eduguide/services/suggestion_service.py

"""
Builds the teaching-suggestion prompt from a student's data snapshot and
forwards it to the Gemini gateway. Neither the prompt nor the generated text is
stored anywhere.
"""

import logging
from datetime import datetime
from typing import List

from . import prompt_library, score_analytics
from .gemini_service import GeminiGateway
from ..models.suggestion_model import SuggestionRequest, SuggestionResponse

logger = logging.getLogger(__name__)


def _format_date(value: datetime) -> str:
    # The calendar day in the offset the client sent; ordering still compares in UTC.
    return value.strftime("%Y-%m-%d")


def _literacy_section(request: SuggestionRequest) -> str:
    scores = request.literacyScores
    if not scores:
        return prompt_library.LITERACY_NO_DATA

    ordered = score_analytics.sort_scores_chronologically(scores)
    earliest, latest = ordered[0], ordered[-1]
    return prompt_library.LITERACY_SECTION.format(
        average=round(score_analytics.calculate_literacy_average(scores), 1),
        latest_score=latest.score,
        latest_date=_format_date(latest.date),
        trend=score_analytics.literacy_trend(scores),
        earliest_score=earliest.score,
        count=len(scores),
    )


def _sel_section(request: SuggestionRequest) -> str:
    sel = request.selScores
    if sel.is_empty():
        return prompt_library.SEL_NO_DATA

    def show(value):
        return prompt_library.SEL_NOT_ASSESSED if value is None else value

    return prompt_library.SEL_SECTION.format(
        empathy=show(sel.empathy),
        regulation=show(sel.regulation),
        cooperation=show(sel.cooperation),
    )


def _reflections_section(request: SuggestionRequest) -> str:
    recent = score_analytics.most_recent_reflections(request.reflections)
    observations = "\n".join(
        prompt_library.REFLECTION_BULLET.format(date=_format_date(r.date), note=r.note)
        for r in recent
    )
    return prompt_library.REFLECTIONS_SECTION.format(observations=observations)


def build_suggestion_prompt(request: SuggestionRequest) -> str:
    """
    Builds the prompt. The output depends only on the request, so the same
    snapshot always produces the same text.
    """
    parts: List[str] = [prompt_library.SUGGESTION_OPENING.format(name=request.name)]
    parts.append(_literacy_section(request))
    parts.append(_sel_section(request))
    if request.reflections:
        parts.append(_reflections_section(request))
    parts.append(prompt_library.SUGGESTION_INSTRUCTIONS)
    return "\n".join(parts)


async def get_teaching_suggestion(request: SuggestionRequest, gateway: GeminiGateway) -> SuggestionResponse:
    """
    Raises:
        SuggestionGatewayError: any classified failure of the completion call.
    """
    logger.info(
        "Suggestion requested for %s (scores=%s, reflections=%s, sel=%s)",
        request.name,
        len(request.literacyScores),
        len(request.reflections),
        not request.selScores.is_empty(),
    )
    prompt = build_suggestion_prompt(request)
    text = await gateway.generate_text(prompt)
    return SuggestionResponse(suggestion=text)
