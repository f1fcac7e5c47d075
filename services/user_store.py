import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from models.domain import TrainingEntry
from models.enums import DialogueState
from services.exceptions import IncompleteEntryError, NoActiveEntryError

logger = logging.getLogger(__name__)


@dataclass
class _ChatRecord:
    """Everything the bot remembers about one chat."""
    lock: threading.RLock = field(default_factory=threading.RLock)
    state: DialogueState = DialogueState.IDLE
    current: Optional[TrainingEntry] = None
    history: List[TrainingEntry] = field(default_factory=list)


class UserStore:
    """In-memory store of dialogue state, in-flight training and history per chat."""

    def __init__(self) -> None:
        self._registry_lock = threading.Lock()
        self._chats: Dict[int, _ChatRecord] = {}

    # ------------------------------
    # Locking
    # ------------------------------
    def _record(self, chat_id: int) -> _ChatRecord:
        """Returns the record for a chat, creating it on first use."""
        record = self._chats.get(chat_id)
        if record is None:
            with self._registry_lock:
                record = self._chats.setdefault(chat_id, _ChatRecord())
        return record

    @contextmanager
    def session(self, chat_id: int) -> Iterator[None]:
        """Holds the chat's lock so a whole event is processed without interleaving."""
        record = self._record(chat_id)
        with record.lock:
            yield

    # ------------------------------
    # State
    # ------------------------------
    def get_state(self, chat_id: int) -> DialogueState:
        record = self._chats.get(chat_id)
        if record is None:
            return DialogueState.IDLE
        with record.lock:
            return record.state

    def set_state(self, chat_id: int, state: DialogueState) -> None:
        """Sets the dialogue state; entering AWAITING_MUSCLE_GROUP starts a fresh training."""
        record = self._record(chat_id)
        with record.lock:
            logger.debug("Chat %s: %s -> %s", chat_id, record.state.value, state.value)
            record.state = state
            if state is DialogueState.AWAITING_MUSCLE_GROUP:
                if record.current is not None:
                    logger.debug("Chat %s: discarding unfinished training", chat_id)
                record.current = TrainingEntry()

    # ------------------------------
    # In-flight training
    # ------------------------------
    def save_muscle_group(self, chat_id: int, group: str) -> None:
        with self._active(chat_id) as entry:
            entry.muscle_group = group

    def save_duration(self, chat_id: int, hours: float) -> None:
        with self._active(chat_id) as entry:
            entry.duration_hours = hours

    def save_weight(self, chat_id: int, kg: float) -> None:
        with self._active(chat_id) as entry:
            entry.weight = kg

    def current_entry(self, chat_id: int) -> Optional[TrainingEntry]:
        """Copy of the training in progress, if any."""
        record = self._chats.get(chat_id)
        if record is None:
            return None
        with record.lock:
            return record.current.model_copy() if record.current else None

    def finish_training(self, chat_id: int) -> None:
        """Moves the training in progress to the end of the chat's history."""
        record = self._chats.get(chat_id)
        if record is None:
            return
        with record.lock:
            entry = record.current
            if entry is None:
                return
            if not entry.is_complete():
                raise IncompleteEntryError(chat_id)
            record.history.append(entry)
            record.current = None
            logger.info("Chat %s: saved training #%d (%s)", chat_id, len(record.history), entry.muscle_group)

    # ------------------------------
    # History
    # ------------------------------
    def history(self, chat_id: int) -> Tuple[TrainingEntry, ...]:
        """The finalized trainings of a chat, oldest first."""
        record = self._chats.get(chat_id)
        if record is None:
            return ()
        with record.lock:
            return tuple(entry.model_copy() for entry in record.history)

    # ------------------------------
    # Internal Helpers
    # ------------------------------
    @contextmanager
    def _active(self, chat_id: int) -> Iterator[TrainingEntry]:
        """Yields the in-flight entry under the chat lock, or raises NoActiveEntryError."""
        record = self._chats.get(chat_id)
        if record is None:
            raise NoActiveEntryError(chat_id)
        with record.lock:
            if record.current is None:
                raise NoActiveEntryError(chat_id)
            yield record.current
