"""Pydantic models representing the core data structures of the bot."""

from datetime import datetime
from typing import List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class TrainingEntry(BaseModel):
    """A single workout, either in flight or finalized into a history."""
    start_time: datetime = Field(default_factory=datetime.now)
    muscle_group: Optional[str] = None
    duration_hours: Optional[float] = None
    weight: Optional[float] = None

    def is_complete(self) -> bool:
        """True once the entry carries everything needed to be finalized."""
        return bool(self.muscle_group) and self.duration_hours is not None


# --- Inbound events ---

class Command(BaseModel):
    """A slash command such as /start."""
    model_config = ConfigDict(frozen=True)
    name: str


class ButtonPress(BaseModel):
    """An inline button press carrying its callback payload."""
    model_config = ConfigDict(frozen=True)
    button_id: str


class FreeText(BaseModel):
    """Any other text message."""
    model_config = ConfigDict(frozen=True)
    text: str


InboundEvent = Union[Command, ButtonPress, FreeText]


# --- Outbound replies ---

class MenuLayout(BaseModel):
    """Transport-agnostic keyboard: rows of (label, button id) pairs."""
    model_config = ConfigDict(frozen=True)
    rows: List[List[Tuple[str, str]]] = []


class OutboundReply(BaseModel):
    """Text to send back, optionally with a menu attached."""
    model_config = ConfigDict(frozen=True)
    text: str
    menu: Optional[MenuLayout] = None
