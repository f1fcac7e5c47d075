import logging
from typing import Callable, Dict, Sequence

from bot import messages
from models.domain import (
    ButtonPress,
    Command,
    FreeText,
    InboundEvent,
    MenuLayout,
    OutboundReply,
)
from models.enums import DialogueState, MenuButton
from services import reporting_service
from services.exceptions import ParseError
from services.input_parser import is_skip_token, parse_decimal
from services.motivation_service import MotivationProvider
from services.user_store import UserStore

logger = logging.getLogger(__name__)

START_COMMAND = "start"

MAIN_MENU = MenuLayout(rows=[
    [(b.label, b.value) for b in (MenuButton.TOTAL_TIME, MenuButton.TOTAL_WEIGHT)],
    [(b.label, b.value) for b in (MenuButton.LAST_TRAINING, MenuButton.AVERAGE_TIME)],
    [(b.label, b.value) for b in (MenuButton.MOTIVATE, MenuButton.NEW_TRAINING)],
])


class ConversationEngine:
    """Interprets inbound events against a chat's dialogue state and produces replies."""

    def __init__(self, store: UserStore, motivation: MotivationProvider, skip_tokens: Sequence[str] = ("no",)):
        """Initializes the engine with its collaborators."""
        self.store = store
        self.motivation = motivation
        self.skip_tokens = tuple(skip_tokens)

        self._text_handlers: Dict[DialogueState, Callable[[int, str], OutboundReply]] = {
            DialogueState.IDLE: self._handle_idle_text,
            DialogueState.AWAITING_MUSCLE_GROUP: self._handle_muscle_group_input,
            DialogueState.AWAITING_DURATION: self._handle_duration_input,
            DialogueState.AWAITING_WEIGHT: self._handle_weight_input,
        }
        missing = set(DialogueState) - set(self._text_handlers)
        if missing:
            raise RuntimeError(f"No text handler for states: {sorted(s.value for s in missing)}")

        self._button_handlers: Dict[MenuButton, Callable[[int], OutboundReply]] = {
            MenuButton.NEW_TRAINING: self._new_training,
            MenuButton.TOTAL_TIME: self._report_total_time,
            MenuButton.AVERAGE_TIME: self._report_average_time,
            MenuButton.TOTAL_WEIGHT: self._report_total_weight,
            MenuButton.LAST_TRAINING: self._report_last_training,
            MenuButton.MOTIVATE: self._motivate,
        }

    def handle(self, chat_id: int, event: InboundEvent) -> OutboundReply:
        """Processes one event for a chat; events of the same chat never interleave."""
        with self.store.session(chat_id):
            if isinstance(event, Command):
                return self._handle_command(chat_id, event)
            if isinstance(event, ButtonPress):
                return self._handle_button(chat_id, event)
            if isinstance(event, FreeText):
                state = self.store.get_state(chat_id)
                return self._text_handlers[state](chat_id, event.text.strip())
        raise TypeError(f"Unsupported event: {event!r}")

    # --- Commands & buttons ---

    def _handle_command(self, chat_id: int, command: Command) -> OutboundReply:
        if command.name.lower() == START_COMMAND:
            logger.debug("Chat %s opened the main menu", chat_id)
            return OutboundReply(text=messages.MENU_TITLE, menu=MAIN_MENU)
        logger.debug("Chat %s sent unknown command /%s", chat_id, command.name)
        return OutboundReply(text=messages.USE_MENU)

    def _handle_button(self, chat_id: int, press: ButtonPress) -> OutboundReply:
        button = MenuButton.from_payload(press.button_id)
        if button is None:
            logger.warning("Chat %s pressed unknown button %r", chat_id, press.button_id)
            return OutboundReply(text=messages.USE_MENU)
        return self._button_handlers[button](chat_id)

    def _new_training(self, chat_id: int) -> OutboundReply:
        self.store.set_state(chat_id, DialogueState.AWAITING_MUSCLE_GROUP)
        logger.info("Chat %s started a new training", chat_id)
        return OutboundReply(text=messages.NEW_TRAINING)

    def _report_total_time(self, chat_id: int) -> OutboundReply:
        return OutboundReply(text=reporting_service.total_time(self.store.history(chat_id)))

    def _report_average_time(self, chat_id: int) -> OutboundReply:
        average = reporting_service.average_time(self.store.history(chat_id))
        return OutboundReply(text=average or messages.AVERAGE_TIME_EMPTY)

    def _report_total_weight(self, chat_id: int) -> OutboundReply:
        total = reporting_service.total_weight(self.store.history(chat_id))
        if total is None:
            return OutboundReply(text=messages.TOTAL_WEIGHT_EMPTY)
        return OutboundReply(text=messages.TOTAL_WEIGHT.format(value=total))

    def _report_last_training(self, chat_id: int) -> OutboundReply:
        summary = reporting_service.last_entry(self.store.history(chat_id))
        return OutboundReply(text=summary or messages.LAST_TRAINING_EMPTY)

    def _motivate(self, chat_id: int) -> OutboundReply:
        return OutboundReply(text=self.motivation.random())

    # --- Free text, by state ---

    def _handle_idle_text(self, chat_id: int, text: str) -> OutboundReply:
        return OutboundReply(text=messages.USE_MENU)

    def _handle_muscle_group_input(self, chat_id: int, text: str) -> OutboundReply:
        if not text:
            return OutboundReply(text=messages.NEW_TRAINING)
        self.store.save_muscle_group(chat_id, text)
        self.store.set_state(chat_id, DialogueState.AWAITING_DURATION)
        return OutboundReply(text=messages.PROMPT_DURATION)

    def _handle_duration_input(self, chat_id: int, text: str) -> OutboundReply:
        try:
            hours = parse_decimal(text)
        except ParseError:
            logger.warning("Chat %s entered an invalid duration: %s", chat_id, text)
            return OutboundReply(text=messages.ERROR_INVALID_DURATION)

        self.store.save_duration(chat_id, hours)
        self.store.set_state(chat_id, DialogueState.AWAITING_WEIGHT)
        return OutboundReply(text=messages.PROMPT_WEIGHT)

    def _handle_weight_input(self, chat_id: int, text: str) -> OutboundReply:
        if not is_skip_token(text, self.skip_tokens):
            try:
                weight = parse_decimal(text)
            except ParseError:
                logger.warning("Chat %s entered an invalid weight: %s", chat_id, text)
                return OutboundReply(text=messages.ERROR_INVALID_WEIGHT)
            self.store.save_weight(chat_id, weight)

        self.store.finish_training(chat_id)
        self.store.set_state(chat_id, DialogueState.IDLE)
        total = reporting_service.total_time(self.store.history(chat_id))
        return OutboundReply(text=messages.SAVE_SUCCESS.format(total_time=total))
