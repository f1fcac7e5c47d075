"""Contains all the Enum definitions for the application domain."""

from enum import Enum


class DialogueState(str, Enum):
    """Steps of the guided training-entry flow for a chat."""
    IDLE = "idle"
    AWAITING_MUSCLE_GROUP = "awaiting_muscle_group"
    AWAITING_DURATION = "awaiting_duration"
    AWAITING_WEIGHT = "awaiting_weight"


class MenuButton(str, Enum):
    """Callback payloads of the main menu buttons."""
    NEW_TRAINING = ("NEW_TRAINING", "➕ New training")
    TOTAL_TIME = ("TOTAL_TIME", "⏱ Total time")
    AVERAGE_TIME = ("AVERAGE_TIME", "📈 Average time")
    TOTAL_WEIGHT = ("TOTAL_WEIGHT", "⚖️ Weight")
    LAST_TRAINING = ("LAST_TRAINING", "📅 Last training")
    MOTIVATE = ("MOTIVATE", "💪 Motivation")

    def __new__(cls, value: str, label: str):
        """Override __new__ to allow attaching a label to each button."""
        obj = str.__new__(cls, value)
        obj._value_ = value
        obj.label = label
        return obj

    @classmethod
    def from_payload(cls, payload: str) -> "MenuButton | None":
        """Exact lookup of a callback payload, None when unknown."""
        try:
            return cls(payload)
        except ValueError:
            return None
