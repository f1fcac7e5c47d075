import logging
from typing import List, Optional

from telegram import InlineKeyboardMarkup, Update
from telegram.constants import ParseMode
from telegram.error import TelegramError
from telegram.ext import (
    BaseHandler,
    CallbackContext,
    CallbackQueryHandler,
    MessageHandler,
    filters,
)

from bot.keyboards import create_main_menu_keyboard
from models.domain import ButtonPress, Command, FreeText, InboundEvent, OutboundReply
from services.conversation_service import ConversationEngine

logger = logging.getLogger(__name__)


# --- Helper Functions ---
def event_from_text(text: str) -> InboundEvent:
    """Turns a text message into a command event or plain free text."""
    clean_text = text.strip()
    if clean_text.startswith("/") and len(clean_text) > 1:
        # "/start@my_bot extra" -> "start"
        name = clean_text[1:].split(maxsplit=1)[0].split("@", 1)[0]
        if name:
            return Command(name=name.lower())
    return FreeText(text=text)


def _render_menu(reply: OutboundReply) -> Optional[InlineKeyboardMarkup]:
    if reply.menu is None:
        return None
    return create_main_menu_keyboard(reply.menu)


async def _send_reply(context: CallbackContext, chat_id: int, reply: OutboundReply) -> None:
    """Sends the reply; a failed delivery is logged and dropped."""
    try:
        await context.bot.send_message(
            chat_id=chat_id,
            text=reply.text,
            parse_mode=ParseMode.MARKDOWN,
            reply_markup=_render_menu(reply),
        )
    except TelegramError as exc:
        logger.error("Failed to send reply to chat %s: %s", chat_id, exc, exc_info=True)


# --- Update Handlers ---

async def text_message(update: Update, context: CallbackContext, engine: ConversationEngine) -> None:
    """Handles any text message, including commands."""
    chat_id = update.effective_chat.id
    event = event_from_text(update.message.text)
    logger.debug("Chat %s sent %s", chat_id, type(event).__name__)

    reply = engine.handle(chat_id, event)
    await _send_reply(context, chat_id, reply)


async def button_pressed(update: Update, context: CallbackContext, engine: ConversationEngine) -> None:
    """Handles a main menu button press and removes the keyboard it came from."""
    query = update.callback_query
    if query.message is None:
        logger.debug("Ignoring callback %r without a message", query.data)
        return

    chat_id = query.message.chat.id
    logger.debug("Chat %s pressed %s", chat_id, query.data)
    reply = engine.handle(chat_id, ButtonPress(button_id=query.data or ""))

    try:
        await query.answer()
    except TelegramError as exc:
        logger.warning("Could not answer callback for chat %s: %s", chat_id, exc)

    await _send_reply(context, chat_id, reply)

    try:
        await query.edit_message_reply_markup(reply_markup=None)
    except TelegramError as exc:
        logger.warning("Could not remove buttons for chat %s: %s", chat_id, exc)


def get_handlers(engine: ConversationEngine) -> List[BaseHandler]:
    """Creates the handlers that route Telegram updates into the engine."""

    # --- Handler setup using lambdas for dependency injection ---
    text_handler = lambda u, c: text_message(u, c, engine=engine)
    button_handler = lambda u, c: button_pressed(u, c, engine=engine)

    return [
        CallbackQueryHandler(button_handler),
        MessageHandler(filters.TEXT, text_handler),
    ]
