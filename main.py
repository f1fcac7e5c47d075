import logging
import os

from pydantic import ValidationError
from telegram import Update
from telegram.ext import Application

from bot.handlers import get_handlers
from config import Settings
from services.conversation_service import ConversationEngine
from services.motivation_service import MotivationProvider
from services.user_store import UserStore

# --- Setup Logging ---
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def build_engine(settings: Settings) -> ConversationEngine:
    """Wires the store and providers into a conversation engine."""
    store = UserStore()
    motivation = MotivationProvider(settings.motivation.phrases)
    return ConversationEngine(store, motivation, skip_tokens=settings.dialogue.skip_tokens)


def main() -> None:
    """Instantiates dependencies based on environment and starts the bot."""

    # --- Environment Selection ---
    env = os.getenv('BOT_ENV', 'local')
    logger.info("Starting bot in '%s' environment.", env)

    try:
        settings = Settings.load(env)
    except FileNotFoundError as e:
        logger.critical("Configuration Error: %s. Ensure your config-%s.yaml file exists.", e, env)
        return
    except ValidationError:
        logger.critical("Invalid configuration in config-%s.yaml.", env, exc_info=True)
        return

    logging.getLogger().setLevel(settings.logging.level)
    engine = build_engine(settings)

    # --- Create the Telegram Application ---
    application = (
        Application.builder()
        .token(settings.bot.telegram_token)
        .concurrent_updates(True)
        .build()
    )

    # --- Register Handlers ---
    for handler in get_handlers(engine):
        application.add_handler(handler)

    logger.info("Bot %s is ready and listening for updates.", settings.bot.username or "(unnamed)")
    application.run_polling(allowed_updates=[Update.MESSAGE, Update.CALLBACK_QUERY])


if __name__ == "__main__":
    main()
