"""Functions for generating interactive keyboards for the Telegram bot."""

from telegram import InlineKeyboardButton, InlineKeyboardMarkup

from models.domain import MenuLayout


def create_main_menu_keyboard(layout: MenuLayout) -> InlineKeyboardMarkup:
    """Renders a menu layout as inline buttons, one keyboard row per layout row."""
    keyboard = [
        [InlineKeyboardButton(label, callback_data=button_id) for label, button_id in row]
        for row in layout.rows
    ]
    return InlineKeyboardMarkup(keyboard)
