# /eduguide/services/score_analytics.py

"""
Pure aggregation helpers over a student's literacy-score history and
reflections.

Every function accepts entries as dictionaries, Pydantic models or SQLAlchemy
rows: anything exposing `score`, `note` and `date` as keys or attributes.
Nothing here touches the database or the network.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Iterable, List, Optional, Sequence

LOW_LITERACY_THRESHOLD = 70
REFLECTION_WINDOW_DAYS = 14
RECENT_REFLECTION_LIMIT = 3

TREND_IMPROVING = "improving"
TREND_DECLINING = "declining"
TREND_STABLE = "stable"


def _field(entry: Any, name: str) -> Any:
    if isinstance(entry, dict):
        return entry.get(name)
    return getattr(entry, name, None)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Normalizes a timestamp to an aware UTC datetime. Naive values are taken as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _sort_key(indexed_entry):
    index, entry = indexed_entry
    date = as_utc(_field(entry, "date"))
    # Undated entries sort first; equal dates keep insertion order.
    return (date is not None, date or datetime.min.replace(tzinfo=timezone.utc), index)


def calculate_literacy_average(scores: Optional[Sequence[Any]]) -> float:
    """Arithmetic mean of the scores; 0 when there are none."""
    if not scores:
        return 0
    total = sum(_field(entry, "score") or 0 for entry in scores)
    return total / len(scores)


def literacy_average_or_none(scores: Optional[Sequence[Any]]) -> Optional[float]:
    """Like `calculate_literacy_average`, but `None` means "no data" instead of 0."""
    if not scores:
        return None
    return calculate_literacy_average(scores)


def sort_scores_chronologically(scores: Iterable[Any]) -> List[Any]:
    return [entry for _, entry in sorted(enumerate(scores), key=_sort_key)]


def latest_score(scores: Iterable[Any]) -> Optional[Any]:
    """The most recent entry by date. Among equal dates the later-inserted one wins."""
    ordered = sort_scores_chronologically(scores)
    return ordered[-1] if ordered else None


def literacy_trend(scores: Iterable[Any]) -> Optional[str]:
    """Compares the latest and the earliest chronological score."""
    ordered = sort_scores_chronologically(scores)
    if not ordered:
        return None
    earliest = _field(ordered[0], "score")
    latest = _field(ordered[-1], "score")
    if latest > earliest:
        return TREND_IMPROVING
    if latest < earliest:
        return TREND_DECLINING
    return TREND_STABLE


def most_recent_reflections(reflections: Iterable[Any], limit: int = RECENT_REFLECTION_LIMIT) -> List[Any]:
    """The `limit` most recently dated reflections, newest first."""
    ordered = [entry for _, entry in sorted(enumerate(reflections), key=_sort_key)]
    ordered.reverse()
    return ordered[:limit]


def has_recent_reflection(reflections: Iterable[Any], now: Optional[datetime] = None) -> bool:
    now = as_utc(now) or datetime.now(timezone.utc)
    cutoff = now - timedelta(days=REFLECTION_WINDOW_DAYS)
    for entry in reflections:
        date = as_utc(_field(entry, "date"))
        if date is not None and date > cutoff:
            return True
    return False


def has_low_latest_score(scores: Iterable[Any]) -> bool:
    latest = latest_score(scores)
    return latest is not None and _field(latest, "score") < LOW_LITERACY_THRESHOLD


def attention_reasons(student: Any, now: Optional[datetime] = None) -> List[str]:
    """
    Lists why a student needs attention. The two checks are independent: a
    recent reflection does not cancel a low latest score.
    """
    reasons = []
    reflections = _field(student, "reflections") or []
    scores = _field(student, "literacyScores")
    if scores is None:
        scores = _field(student, "literacy_scores") or []

    if not has_recent_reflection(reflections, now=now):
        reasons.append(f"No reflection in the last {REFLECTION_WINDOW_DAYS} days")
    if has_low_latest_score(scores):
        reasons.append(f"Latest literacy score below {LOW_LITERACY_THRESHOLD}")
    return reasons


def needs_attention(student: Any, now: Optional[datetime] = None) -> bool:
    return bool(attention_reasons(student, now=now))
