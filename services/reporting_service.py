"""
Functions deriving human-readable summaries from a chat's training history.
"""
from typing import Optional, Sequence

from telegram.helpers import escape_markdown

from bot import messages
from models.domain import TrainingEntry

HOURS_PER_DAY = 24.0
HOURS_PER_MONTH = 24.0 * 30.0


def _total_hours(history: Sequence[TrainingEntry]) -> float:
    return sum(entry.duration_hours or 0.0 for entry in history)


def total_time(history: Sequence[TrainingEntry]) -> str:
    """Sums training time in hours, switching to days at 24h and to months at 720h."""
    if not history:
        return messages.TOTAL_TIME_EMPTY

    hours = _total_hours(history)
    if hours < HOURS_PER_DAY:
        return messages.TOTAL_TIME_HOURS.format(value=hours)
    if hours < HOURS_PER_MONTH:
        return messages.TOTAL_TIME_DAYS.format(value=hours / HOURS_PER_DAY)
    return messages.TOTAL_TIME_MONTHS.format(value=hours / HOURS_PER_MONTH)


def average_time(history: Sequence[TrainingEntry]) -> Optional[str]:
    """Mean training duration in hours, None when there is no history."""
    if not history:
        return None
    return messages.AVERAGE_TIME.format(value=_total_hours(history) / len(history))


def total_weight(history: Sequence[TrainingEntry]) -> Optional[float]:
    """
    Sum of all recorded weights.

    Returns None for an empty history and for a sum that is not positive, so
    "never recorded" and "recorded as zero" look the same.
    """
    total = sum(entry.weight or 0.0 for entry in history)
    return total if total > 0 else None


def duration_label(hours: float) -> str:
    """Renders one training's duration as minutes (<1h), days (>24h) or hours."""
    if hours < 1:
        return messages.DURATION_MINUTES.format(value=hours * 60)
    if hours > HOURS_PER_DAY:
        return messages.DURATION_DAYS.format(value=hours / HOURS_PER_DAY)
    return messages.DURATION_HOURS.format(value=hours)


def last_entry(history: Sequence[TrainingEntry]) -> Optional[str]:
    """Summary of the most recent training, None when there is no history."""
    if not history:
        return None

    last = history[-1]
    if last.weight is not None:
        weight = messages.WEIGHT_KG.format(value=last.weight)
    else:
        weight = messages.WEIGHT_NOT_SPECIFIED
    return messages.LAST_TRAINING.format(
        muscle_group=escape_markdown(last.muscle_group or "", version=1),
        duration=duration_label(last.duration_hours or 0.0),
        weight=weight,
    )
