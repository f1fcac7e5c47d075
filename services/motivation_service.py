import logging
import random
from typing import Optional, Sequence

logger = logging.getLogger(__name__)

DEFAULT_PHRASES = (
    "💪 Every rep counts. Keep going!",
    "🔥 The only bad workout is the one that didn't happen.",
    "🏋️ Strength doesn't come from what you can do, it comes from overcoming what you couldn't.",
    "⏱ One hour today is progress you keep forever.",
    "🚀 Discipline beats motivation. Show up anyway.",
    "🥇 Small steps every day add up to big results.",
    "⚡ Your future self will thank you for this session.",
)


class MotivationProvider:
    """Hands out a random motivational phrase from a fixed pool."""

    def __init__(self, phrases: Optional[Sequence[str]] = None, rng: Optional[random.Random] = None):
        pool = tuple(phrases) if phrases is not None else DEFAULT_PHRASES
        if not pool:
            raise ValueError("Motivation pool must contain at least one phrase")
        self._phrases = pool
        self._rng = rng or random.Random()
        logger.debug("Loaded %d motivational phrases", len(pool))

    @property
    def phrases(self) -> Sequence[str]:
        return self._phrases

    def random(self) -> str:
        return self._rng.choice(self._phrases)
