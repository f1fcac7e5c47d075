"""Exceptions raised by the service layer."""


class GymBotError(Exception):
    """Base class for all bot errors."""


class NoActiveEntryError(GymBotError):
    """A training field was saved while no training is in progress for the chat."""

    def __init__(self, chat_id: int):
        self.chat_id = chat_id
        super().__init__(f"No training in progress for chat {chat_id}")


class IncompleteEntryError(GymBotError):
    """A training was finalized before its muscle group and duration were set."""

    def __init__(self, chat_id: int):
        self.chat_id = chat_id
        super().__init__(f"Training for chat {chat_id} is missing muscle group or duration")


class ParseError(GymBotError, ValueError):
    """User input could not be read as a number."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Not a number: {text!r}")
